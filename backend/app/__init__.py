"""
TravelMap Backend - Application Package Initializer
====================================================

What: The `app` package: a JSON-over-HTTP service for a travel-map frontend.
Who:  Imported by uvicorn (app.main:app), Alembic, and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← paths, query/body parsing
    ├─────────────────────────────────────┤
    │     Services (Queries & Mutations)  │  ← one statement per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← GeoAlchemy2 ORM + Pydantic
    ├─────────────────────────────────────┤
    │      Database (Pool & Sessions)     │  ← async SQLAlchemy + asyncpg
    └─────────────────────────────────────┘

    Geometry lives in PostGIS (SRID 4326); coordinates cross the HTTP boundary
    as plain lon/lat numbers and routes as GeoJSON LineStrings.
"""

__version__ = "1.0.0"
