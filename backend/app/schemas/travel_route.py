"""
TravelMap Backend - Travel Route Request/Response Schemas
==========================================================

Routes are returned with their geometry as a GeoJSON LineString object:

    {"gid": 3, "start": "Beijing", "end": "Shanghai",
     "geom": {"type": "LineString",
              "coordinates": [[116.4, 39.9], [121.47, 31.23]]}}
"""

import json
from typing import List, Literal

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import MAX_SERIAL_ID


class TravelRouteCreate(BaseModel):
    """Body of POST /addtravelroute: two labelled endpoints and their coordinates."""
    start: str = Field(description="Label of the starting place")
    end: str = Field(description="Label of the destination")
    lon1: float = Field(ge=-180, le=180, allow_inf_nan=False)
    lat1: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lon2: float = Field(ge=-180, le=180, allow_inf_nan=False)
    lat2: float = Field(ge=-90, le=90, allow_inf_nan=False)


class TravelRouteDelete(BaseModel):
    """Body of DELETE /deletetravelroute."""
    gid: int = Field(ge=1, le=MAX_SERIAL_ID)


class LineGeometry(BaseModel):
    """GeoJSON LineString: ordered [lon, lat] pairs, start first."""
    type: Literal["LineString"] = "LineString"
    coordinates: List[List[float]]


class TravelRouteResponse(BaseModel):
    gid: int
    start: str
    end: str
    geom: LineGeometry

    @field_validator("geom", mode="before")
    @classmethod
    def parse_geojson(cls, v):
        """Accepts the raw ST_AsGeoJSON text returned by PostGIS."""
        if isinstance(v, (str, bytes)):
            return json.loads(v)
        return v
