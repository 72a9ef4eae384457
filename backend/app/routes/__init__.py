# Routes package init
"""
TravelMap Backend - API Routes Package
=======================================

Route Inventory:
    - travel_points.py:  GET    /searchtravelpoints   (all points, or ?name= search, ?owner= filter)
                         GET    /query-bbox           (points inside minLon/minLat/maxLon/maxLat)
                         POST   /addtravelpoints
                         PUT    /updatetravelpoint
                         DELETE /deletetravelpoint
    - travel_routes.py:  GET    /gettravelroutes
                         POST   /addtravelroute
                         DELETE /deletetravelroute
    - members.py:        GET    /members
                         POST   /addmember
                         DELETE /deletemember
    - health.py:         GET    /health

Routes are thin: they parse the request, call one service method, and return
its result. Errors are raised as app.exceptions types and rendered by the
handlers registered in main.py.
"""
