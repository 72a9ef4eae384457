"""
TravelMap Backend - Travel Point Request/Response Schemas
==========================================================

What:  Pydantic models defining the JSON contract of the travel point endpoints.
How:   FastAPI validates request bodies against these models before the route
       function runs; a failure becomes a 400 response (see main.py), so no
       statement is ever built from an incomplete payload.

Coordinates are WGS84 degrees: latitude in [-90, 90], longitude in [-180, 180].
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.common import MAX_SERIAL_ID


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class TravelPointCreate(BaseModel):
    """
    Body of POST /addtravelpoints.

    Example:
        {"lat": 39.9, "lon": 116.4, "province": "Beijing",
         "name": "Tiananmen", "info": "landmark", "owner": "alice"}
    """
    lat: float = Field(ge=-90, le=90, allow_inf_nan=False, description="Latitude (degrees)")
    lon: float = Field(ge=-180, le=180, allow_inf_nan=False, description="Longitude (degrees)")
    province: str = Field(description="Province or region label")
    name: str = Field(description="Place name")
    info: str = Field(description="Free-text description")
    owner: Optional[str] = Field(default=None, description="Who recorded the place (optional)")


class TravelPointUpdate(BaseModel):
    """
    Body of PUT /updatetravelpoint.

    Replaces province, name, info and location of row `gid`. `owner` is only
    replaced when the key is present in the body (null clears it).
    """
    gid: int = Field(ge=1, le=MAX_SERIAL_ID, description="Identifier of the row to replace")
    province: str
    name: str
    info: str
    lat: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lon: float = Field(ge=-180, le=180, allow_inf_nan=False)
    owner: Optional[str] = None


class TravelPointDelete(BaseModel):
    """Body of DELETE /deletetravelpoint."""
    gid: int = Field(ge=1, le=MAX_SERIAL_ID)


class BoundingBox(BaseModel):
    """
    Axis-aligned envelope in SRID 4326 used by GET /query-bbox.

    A degenerate envelope (min == max) is allowed and matches a point lying
    exactly on it. Points on the edges are included.
    """
    min_lon: float = Field(allow_inf_nan=False)
    min_lat: float = Field(allow_inf_nan=False)
    max_lon: float = Field(allow_inf_nan=False)
    max_lat: float = Field(allow_inf_nan=False)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class TravelPointResponse(BaseModel):
    """
    One travel point as returned by every travel point endpoint.

    `lon` / `lat` are read back from the stored geometry (ST_X / ST_Y), so a
    created point round-trips its coordinates within float precision.
    """
    gid: int = Field(description="Server-generated identifier")
    province: Optional[str] = None
    name: Optional[str] = None
    info: Optional[str] = None
    owner: Optional[str] = None
    lon: float = Field(description="Longitude derived from the point geometry")
    lat: float = Field(description="Latitude derived from the point geometry")
    created_at: Optional[datetime] = Field(default=None, description="Insertion time (UTC)")

    model_config = {"from_attributes": True}
