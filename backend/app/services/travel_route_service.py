"""
TravelMap Backend - Travel Route Service
=========================================

What:  List, create and delete two-point travel routes.
How:   Geometry is written with ST_MakeLine over two ST_MakePoint calls and
       read back with ST_AsGeoJSON, which TravelRouteResponse parses into a
       LineString object. Routes have no update operation.
"""

import logging
from typing import List

from sqlalchemy import asc, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.travel_route import TravelRoute
from app.schemas.common import SuccessResponse
from app.schemas.travel_route import TravelRouteCreate, TravelRouteResponse
from app.services.base import BaseService
from app.services.spatial import make_line

logger = logging.getLogger(__name__)

ROUTE_COLUMNS = (
    TravelRoute.gid,
    TravelRoute.start,
    TravelRoute.end,
    func.ST_AsGeoJSON(TravelRoute.geom).label("geom"),
)


class TravelRouteService(BaseService):

    async def list_routes(self, db: AsyncSession) -> List[TravelRouteResponse]:
        query = select(*ROUTE_COLUMNS).order_by(asc(TravelRoute.gid))
        rows = await self._fetch_all(db, query, "list_routes")
        return [TravelRouteResponse.model_validate(row) for row in rows]

    async def create_route(
        self,
        db: AsyncSession,
        payload: TravelRouteCreate,
    ) -> TravelRouteResponse:
        """Insert a route from (lon1, lat1) to (lon2, lat2) and return it."""
        statement = (
            insert(TravelRoute)
            .values(
                start=payload.start,
                end=payload.end,
                geom=make_line(payload.lon1, payload.lat1, payload.lon2, payload.lat2),
            )
            .returning(*ROUTE_COLUMNS)
        )
        rows = await self._fetch_all(db, statement, "create_route", commit=True)
        route = TravelRouteResponse.model_validate(rows[0])
        logger.info("Travel route %s created (%s -> %s)", route.gid, route.start, route.end)
        return route

    async def delete_route(self, db: AsyncSession, gid: int) -> SuccessResponse:
        """Idempotent: deleting an unknown gid still reports success."""
        statement = (
            delete(TravelRoute)
            .where(TravelRoute.gid == gid)
            .execution_options(synchronize_session=False)
        )
        await self._execute(db, statement, "delete_route")
        logger.info("Travel route %s deleted", gid)
        return SuccessResponse()


travel_route_service = TravelRouteService()
