"""
TravelMap Backend - Travel Route Handlers
==========================================

Endpoints:
    GET    /gettravelroutes
    POST   /addtravelroute
    DELETE /deletetravelroute
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse, SuccessResponse
from app.schemas.travel_route import (
    TravelRouteCreate,
    TravelRouteDelete,
    TravelRouteResponse,
)
from app.services.travel_route_service import travel_route_service

router = APIRouter(tags=["Travel Routes"])

ERROR_RESPONSES = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    500: {"description": "Database error", "model": ErrorResponse},
}


@router.get(
    "/gettravelroutes",
    response_model=List[TravelRouteResponse],
    responses=ERROR_RESPONSES,
    summary="List travel routes",
)
async def get_travel_routes(
    db: AsyncSession = Depends(get_db_session),
) -> List[TravelRouteResponse]:
    """Every route, geometry as a GeoJSON LineString."""
    return await travel_route_service.list_routes(db)


@router.post(
    "/addtravelroute",
    response_model=TravelRouteResponse,
    responses=ERROR_RESPONSES,
    summary="Create a travel route between two coordinates",
)
async def add_travel_route(
    payload: TravelRouteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> TravelRouteResponse:
    return await travel_route_service.create_route(db, payload)


@router.delete(
    "/deletetravelroute",
    response_model=SuccessResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a travel route (idempotent)",
)
async def delete_travel_route(
    payload: TravelRouteDelete,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    return await travel_route_service.delete_route(db, payload.gid)
