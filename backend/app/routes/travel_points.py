"""
TravelMap Backend - Travel Point Route Handlers
================================================

What:  HTTP surface for travel points.
How:   Extracts query parameters / validated bodies, delegates to
       TravelPointService, returns JSON.

Endpoints:
    GET    /searchtravelpoints[?name=X][&owner=Y]
    GET    /query-bbox?minLon&minLat&maxLon&maxLat[&owner=Y]
    POST   /addtravelpoints
    PUT    /updatetravelpoint
    DELETE /deletetravelpoint
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import ValidationError
from app.schemas.common import ErrorResponse, SuccessResponse
from app.schemas.travel_point import (
    BoundingBox,
    TravelPointCreate,
    TravelPointDelete,
    TravelPointResponse,
    TravelPointUpdate,
)
from app.services.travel_point_service import travel_point_service

router = APIRouter(tags=["Travel Points"])

ERROR_RESPONSES = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    500: {"description": "Database error", "model": ErrorResponse},
}


@router.get(
    "/searchtravelpoints",
    response_model=List[TravelPointResponse],
    responses=ERROR_RESPONSES,
    summary="List or search travel points",
)
async def search_travel_points(
    name: Optional[str] = Query(
        default=None,
        description="Case-insensitive substring of the place name",
    ),
    owner: Optional[str] = Query(
        default=None,
        description="Only points recorded by this owner",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[TravelPointResponse]:
    """
    Without `name`: every point (or every point of `owner`), newest first.
    With `name`:    points whose name contains the term, ignoring case.
    """
    if name is not None:
        return await travel_point_service.search_points(db, name=name, owner=owner)
    return await travel_point_service.list_points(db, owner=owner)


@router.get(
    "/query-bbox",
    response_model=List[TravelPointResponse],
    responses=ERROR_RESPONSES,
    summary="Travel points within a bounding box",
)
async def query_bbox(
    min_lon: Optional[float] = Query(default=None, alias="minLon", allow_inf_nan=False),
    min_lat: Optional[float] = Query(default=None, alias="minLat", allow_inf_nan=False),
    max_lon: Optional[float] = Query(default=None, alias="maxLon", allow_inf_nan=False),
    max_lat: Optional[float] = Query(default=None, alias="maxLat", allow_inf_nan=False),
    owner: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> List[TravelPointResponse]:
    """
    Points inside the envelope [minLon, maxLon] x [minLat, maxLat] (SRID 4326).

    All four bounds are required; a missing bound is a 400 and no query runs.
    """
    bounds = {"minLon": min_lon, "minLat": min_lat, "maxLon": max_lon, "maxLat": max_lat}
    missing = [key for key, value in bounds.items() if value is None]
    if missing:
        raise ValidationError(
            message=f"Missing required query parameters: {', '.join(missing)}",
            field=missing[0],
        )

    bbox = BoundingBox(min_lon=min_lon, min_lat=min_lat, max_lon=max_lon, max_lat=max_lat)
    return await travel_point_service.points_in_bbox(db, bbox=bbox, owner=owner)


@router.post(
    "/addtravelpoints",
    response_model=TravelPointResponse,
    responses=ERROR_RESPONSES,
    summary="Create a travel point",
)
async def add_travel_point(
    payload: TravelPointCreate,
    db: AsyncSession = Depends(get_db_session),
) -> TravelPointResponse:
    return await travel_point_service.create_point(db, payload)


@router.put(
    "/updatetravelpoint",
    response_model=TravelPointResponse,
    responses={
        **ERROR_RESPONSES,
        404: {"description": "No travel point with that gid", "model": ErrorResponse},
    },
    summary="Replace a travel point",
)
async def update_travel_point(
    payload: TravelPointUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> TravelPointResponse:
    return await travel_point_service.update_point(db, payload)


@router.delete(
    "/deletetravelpoint",
    response_model=SuccessResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a travel point (idempotent)",
)
async def delete_travel_point(
    payload: TravelPointDelete,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    return await travel_point_service.delete_point(db, payload.gid)
