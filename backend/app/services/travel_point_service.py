"""
TravelMap Backend - Travel Point Service
=========================================

What:  Listing, searching, spatial filtering, and CRUD for travel points.
How:   Each method builds one parameterized statement with SQLAlchemy + the
       PostGIS functions exposed through GeoAlchemy2, executes it on the
       request's session, and maps rows to TravelPointResponse.
Who:   Called by the travel point route handlers.

Query Patterns:
    - List:    SELECT ... ORDER BY created_at DESC            (idx_travelpoint_created_at)
    - Owner:   ... WHERE owner = :owner ORDER BY created_at DESC
    - Search:  ... WHERE name ILIKE '%' || :term || '%'
    - BBox:    ... WHERE geom && ST_MakeEnvelope(..., 4326)  (GiST index on geom)
               AND ST_X(geom) BETWEEN :min_lon AND :max_lon
               AND ST_Y(geom) BETWEEN :min_lat AND :max_lat
    - Create / Update return the written row via RETURNING, with lon/lat
      taken from ST_X(geom) / ST_Y(geom).

Filters compose: an owner filter can be combined with a name search or a
bounding box. Every listing is ordered newest first.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError
from app.models.travel_point import TravelPoint
from app.schemas.common import SuccessResponse
from app.schemas.travel_point import (
    BoundingBox,
    TravelPointCreate,
    TravelPointResponse,
    TravelPointUpdate,
)
from app.services.base import BaseService
from app.services.spatial import make_envelope, make_point

logger = logging.getLogger(__name__)

# Columns returned for every travel point, geometry flattened to lon/lat
POINT_COLUMNS = (
    TravelPoint.gid,
    TravelPoint.province,
    TravelPoint.name,
    TravelPoint.info,
    TravelPoint.owner,
    func.ST_X(TravelPoint.geom).label("lon"),
    func.ST_Y(TravelPoint.geom).label("lat"),
    TravelPoint.created_at,
)


def escape_like(term: str, escape: str = "\\") -> str:
    """Escapes LIKE wildcards so the search term matches literally."""
    return (
        term.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


class TravelPointService(BaseService):
    """
    Business logic layer for travel points.

    Responsibilities:
        - list_points():     all points, optionally for one owner
        - search_points():   case-insensitive substring match on name
        - points_in_bbox():  spatial containment in an envelope
        - create_point() / update_point() / delete_point()
    """

    def _listing(self, owner: Optional[str] = None):
        query = select(*POINT_COLUMNS)
        if owner is not None:
            query = query.where(TravelPoint.owner == owner)
        return query

    async def _run_listing(self, db: AsyncSession, query, operation: str) -> List[TravelPointResponse]:
        query = query.order_by(desc(TravelPoint.created_at))
        rows = await self._fetch_all(db, query, operation)
        return [TravelPointResponse.model_validate(row) for row in rows]

    async def list_points(
        self,
        db: AsyncSession,
        owner: Optional[str] = None,
    ) -> List[TravelPointResponse]:
        """All travel points (or one owner's), newest first."""
        return await self._run_listing(db, self._listing(owner), "list_points")

    async def search_points(
        self,
        db: AsyncSession,
        name: str,
        owner: Optional[str] = None,
    ) -> List[TravelPointResponse]:
        """
        Points whose name contains `name`, ignoring case.

        The term is matched literally: `%` and `_` typed by the user are not
        wildcards. An empty term matches every point.
        """
        query = self._listing(owner).where(
            TravelPoint.name.ilike(f"%{escape_like(name)}%", escape="\\")
        )
        return await self._run_listing(db, query, "search_points")

    async def points_in_bbox(
        self,
        db: AsyncSession,
        bbox: BoundingBox,
        owner: Optional[str] = None,
    ) -> List[TravelPointResponse]:
        """
        Points inside the envelope, edges included.

        `&&` compares float4 bounding boxes rounded outward, so it only serves as
        the GiST index prefilter; the BETWEEN checks on ST_X / ST_Y decide
        membership in double precision. A collapsed envelope (min == max) matches
        exactly the points lying on it.
        """
        query = self._listing(owner).where(
            TravelPoint.geom.op("&&", is_comparison=True)(make_envelope(bbox)),
            func.ST_X(TravelPoint.geom).between(bbox.min_lon, bbox.max_lon),
            func.ST_Y(TravelPoint.geom).between(bbox.min_lat, bbox.max_lat),
        )
        return await self._run_listing(db, query, "points_in_bbox")

    async def create_point(
        self,
        db: AsyncSession,
        payload: TravelPointCreate,
    ) -> TravelPointResponse:
        """
        Insert a travel point and return the stored row.

        Returns:
            TravelPointResponse including the generated gid and created_at
        """
        statement = (
            insert(TravelPoint)
            .values(
                province=payload.province,
                name=payload.name,
                info=payload.info,
                owner=payload.owner,
                geom=make_point(payload.lon, payload.lat),
            )
            .returning(*POINT_COLUMNS)
        )
        rows = await self._fetch_all(db, statement, "create_point", commit=True)
        point = TravelPointResponse.model_validate(rows[0])
        logger.info("Travel point %s created (name=%s, owner=%s)", point.gid, point.name, point.owner)
        return point

    async def update_point(
        self,
        db: AsyncSession,
        payload: TravelPointUpdate,
    ) -> TravelPointResponse:
        """
        Replace province, name, info and location of an existing point.

        Raises:
            NotFoundError: no row has `payload.gid` (→ 404)
        """
        values = {
            "province": payload.province,
            "name": payload.name,
            "info": payload.info,
            "geom": make_point(payload.lon, payload.lat),
        }
        if "owner" in payload.model_fields_set:
            values["owner"] = payload.owner

        statement = (
            update(TravelPoint)
            .where(TravelPoint.gid == payload.gid)
            .values(**values)
            .returning(*POINT_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        rows = await self._fetch_all(db, statement, "update_point", commit=True)
        if not rows:
            raise NotFoundError(resource="travel point", resource_id=str(payload.gid))

        logger.info("Travel point %s updated", payload.gid)
        return TravelPointResponse.model_validate(rows[0])

    async def delete_point(self, db: AsyncSession, gid: int) -> SuccessResponse:
        """Delete by gid. Reports success whether or not the row existed."""
        statement = (
            delete(TravelPoint)
            .where(TravelPoint.gid == gid)
            .execution_options(synchronize_session=False)
        )
        await self._execute(db, statement, "delete_point")
        logger.info("Travel point %s deleted", gid)
        return SuccessResponse()


# Stateless; one shared instance
travel_point_service = TravelPointService()
