"""
TravelMap Backend - Travel Route & Team Member Service Unit Tests
==================================================================

What we test:
    ✅ ST_AsGeoJSON text is parsed into a LineString response
    ✅ Route creation builds a two-point line from lon1/lat1 → lon2/lat2
    ✅ Listings are ordered by id
    ✅ Deletes are idempotent
    ✅ Driver errors surface as DatabaseError
"""

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import DBAPIError

from app.exceptions import DatabaseError
from app.schemas.member import TeamMemberCreate
from app.schemas.travel_route import TravelRouteCreate
from app.services.member_service import TeamMemberService
from app.services.travel_route_service import TravelRouteService


def executed_sql(mock_db_session) -> str:
    statement = mock_db_session.execute.await_args.args[0]
    return str(statement.compile(dialect=postgresql.dialect()))


class TestTravelRouteService:

    def setup_method(self):
        self.service = TravelRouteService()

    @pytest.mark.asyncio
    async def test_list_routes_parses_geojson(self, mock_db_session, set_db_rows, sample_route_row):
        set_db_rows([sample_route_row])

        result = await self.service.list_routes(mock_db_session)

        assert len(result) == 1
        route = result[0]
        assert route.start == "Beijing"
        assert route.end == "Shanghai"
        assert route.geom.type == "LineString"
        assert route.geom.coordinates == [[116.4, 39.9], [121.47, 31.23]]

        sql = executed_sql(mock_db_session)
        assert "ST_AsGeoJSON(travelroute.geom)" in sql
        assert "ORDER BY travelroute.gid ASC" in sql

    @pytest.mark.asyncio
    async def test_list_routes_empty(self, mock_db_session):
        assert await self.service.list_routes(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_create_route_builds_line(self, mock_db_session, set_db_rows, sample_route_row):
        set_db_rows([sample_route_row])
        payload = TravelRouteCreate(
            start="Beijing", end="Shanghai", lon1=116.4, lat1=39.9, lon2=121.47, lat2=31.23
        )

        result = await self.service.create_route(mock_db_session, payload)

        assert result.gid == 3
        mock_db_session.commit.assert_awaited_once()
        sql = executed_sql(mock_db_session)
        assert sql.startswith("INSERT INTO travelroute")
        assert '"end"' in sql
        assert "ST_MakeLine(ST_MakePoint(" in sql

    @pytest.mark.asyncio
    async def test_delete_route_idempotent(self, mock_db_session):
        first = await self.service.delete_route(mock_db_session, 3)
        second = await self.service.delete_route(mock_db_session, 3)

        assert first.success is True
        assert second.success is True
        assert mock_db_session.commit.await_count == 2

    @pytest.mark.asyncio
    async def test_invalid_geometry_error_passed_through(self, mock_db_session):
        mock_db_session.execute.side_effect = DBAPIError(
            "INSERT ...", {}, Exception("Invalid geometry")
        )
        payload = TravelRouteCreate(start="A", end="B", lon1=0, lat1=0, lon2=1, lat2=1)

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.create_route(mock_db_session, payload)

        assert exc_info.value.message == "Invalid geometry"


class TestTeamMemberService:

    def setup_method(self):
        self.service = TeamMemberService()

    @pytest.mark.asyncio
    async def test_list_members(self, mock_db_session, set_db_rows, sample_member_row):
        set_db_rows([sample_member_row])

        result = await self.service.list_members(mock_db_session)

        assert result[0].name == "Li Hua"
        assert result[0].page_link == "https://example.com/lihua"
        assert "ORDER BY members.id ASC" in executed_sql(mock_db_session)

    @pytest.mark.asyncio
    async def test_create_member(self, mock_db_session, set_db_rows, sample_member_row):
        set_db_rows([sample_member_row])
        payload = TeamMemberCreate(
            name="Li Hua",
            role="frontend",
            avatar="https://example.com/lihua.png",
            page_link="https://example.com/lihua",
        )

        result = await self.service.create_member(mock_db_session, payload)

        assert result.id == 7
        mock_db_session.commit.assert_awaited_once()
        assert executed_sql(mock_db_session).startswith("INSERT INTO members")

    @pytest.mark.asyncio
    async def test_delete_member(self, mock_db_session):
        result = await self.service.delete_member(mock_db_session, 7)

        assert result.success is True
        assert executed_sql(mock_db_session).startswith("DELETE FROM members WHERE members.id = ")
