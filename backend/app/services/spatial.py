"""
TravelMap Backend - PostGIS Expression Builders
================================================

SQL expressions for the geometries the services write and query. All of them
are pinned to SRID 4326 (WGS84 longitude/latitude). Coordinates are sent as
bound parameters.
"""

from sqlalchemy import func

from app.models.travel_point import SRID
from app.schemas.travel_point import BoundingBox


def make_point(lon: float, lat: float):
    """ST_SetSRID(ST_MakePoint(lon, lat), 4326)"""
    return func.ST_SetSRID(func.ST_MakePoint(lon, lat), SRID)


def make_line(lon1: float, lat1: float, lon2: float, lat2: float):
    """Two-point LINESTRING from (lon1, lat1) to (lon2, lat2)."""
    return func.ST_SetSRID(
        func.ST_MakeLine(
            func.ST_MakePoint(lon1, lat1),
            func.ST_MakePoint(lon2, lat2),
        ),
        SRID,
    )


def make_envelope(bbox: BoundingBox):
    return func.ST_MakeEnvelope(bbox.min_lon, bbox.min_lat, bbox.max_lon, bbox.max_lat, SRID)
