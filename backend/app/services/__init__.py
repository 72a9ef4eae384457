# Services package init
"""
TravelMap Backend - Services Layer
===================================

What:  Query and mutation logic between routes (HTTP) and PostGIS.
How:   Each operation builds exactly one SQLAlchemy statement, runs it through
       BaseService._fetch_all (which maps driver failures to DatabaseError),
       and commits mutations immediately.

Service Inventory:
    - base.py:                  BaseService, driver error mapping
    - spatial.py:               PostGIS expression builders (points, lines, envelopes)
    - travel_point_service.py:  listing, name search, bbox query, create/update/delete
    - travel_route_service.py:  listing (GeoJSON geometry), create/delete
    - member_service.py:        team roster listing, create/delete
"""
