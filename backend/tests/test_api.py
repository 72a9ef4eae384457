"""
TravelMap Backend - HTTP API Tests
===================================

What:  End-to-end tests of the HTTP contract: paths, status codes, JSON
       bodies, CORS headers, and error mapping.
How:   Requests go through the full middleware chain and routers via HTTPX
       ASGITransport; only the database session is mocked.

What we test:
    ✅ Every endpoint's success shape
    ✅ Invalid input → 400 {"error": ...} and no statement executed
    ✅ Unknown path or wrong method → 404 {"error": "not found"}
    ✅ OPTIONS on any path → 200, empty body, CORS headers
    ✅ CORS headers on error responses too
    ✅ Database errors → 500 with the driver's message
    ✅ Unexpected exceptions → 500, request timeout → 504
"""

import asyncio

import pytest
from sqlalchemy.exc import DBAPIError

CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET, POST, OPTIONS, DELETE, PUT",
    "access-control-allow-headers": "Content-Type",
}


def assert_cors(response):
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value


class TestTravelPointEndpoints:

    @pytest.mark.asyncio
    async def test_search_without_name_lists_all(self, test_client, set_db_rows, sample_point_row):
        set_db_rows([sample_point_row])

        response = await test_client.get("/searchtravelpoints")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert_cors(response)
        body = response.json()
        assert len(body) == 1
        assert body[0]["gid"] == 1
        assert body[0]["lon"] == 116.4
        assert body[0]["lat"] == 39.9
        assert body[0]["owner"] == "alice"

    @pytest.mark.asyncio
    async def test_search_by_name(self, test_client, mock_db_session):
        response = await test_client.get("/searchtravelpoints", params={"name": "wall"})

        assert response.status_code == 200
        assert response.json() == []
        statement = mock_db_session.execute.await_args.args[0]
        assert "%wall%" in statement.compile().params.values()

    @pytest.mark.asyncio
    async def test_query_bbox(self, test_client, set_db_rows, sample_point_row):
        set_db_rows([sample_point_row])

        response = await test_client.get(
            "/query-bbox",
            params={"minLon": 116, "minLat": 39, "maxLon": 117, "maxLat": 40},
        )

        assert response.status_code == 200
        assert [p["gid"] for p in response.json()] == [1]

    @pytest.mark.asyncio
    async def test_query_bbox_missing_bound(self, test_client, mock_db_session):
        response = await test_client.get(
            "/query-bbox",
            params={"minLon": 116, "minLat": 39, "maxLon": 117},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required query parameters: maxLat"}
        assert_cors(response)
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_query_bbox_non_numeric(self, test_client, mock_db_session):
        response = await test_client.get(
            "/query-bbox",
            params={"minLon": "west", "minLat": 39, "maxLon": 117, "maxLat": 40},
        )

        assert response.status_code == 400
        assert "minLon" in response.json()["error"]
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_travel_point(self, test_client, set_db_rows, sample_point_row, mock_db_session):
        set_db_rows([sample_point_row])

        response = await test_client.post(
            "/addtravelpoints",
            json={
                "lat": 39.9,
                "lon": 116.4,
                "province": "Beijing",
                "name": "Tiananmen",
                "info": "landmark",
                "owner": "alice",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["gid"] == 1
        assert body["name"] == "Tiananmen"
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_add_travel_point_out_of_range(self, test_client, mock_db_session):
        response = await test_client.post(
            "/addtravelpoints",
            json={"lat": 91, "lon": 0, "province": "P", "name": "N", "info": ""},
        )

        assert response.status_code == 400
        assert "lat" in response.json()["error"]
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_travel_point_missing_field(self, test_client, mock_db_session):
        response = await test_client.post(
            "/addtravelpoints",
            json={"lat": 10, "lon": 10, "province": "P"},
        )

        assert response.status_code == 400
        assert "name" in response.json()["error"]
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_travel_point_requires_info(self, test_client, mock_db_session):
        response = await test_client.post(
            "/addtravelpoints",
            json={"lat": 10, "lon": 10, "province": "P", "name": "N"},
        )

        assert response.status_code == 400
        assert "body.info" in response.json()["error"]
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_json(self, test_client, mock_db_session):
        response = await test_client.post(
            "/addtravelpoints",
            content=b'{"lat": 10, "lon":',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_travel_point(self, test_client, set_db_rows, sample_point_row):
        set_db_rows([{**sample_point_row, "info": "updated"}])

        response = await test_client.put(
            "/updatetravelpoint",
            json={"gid": 1, "province": "Beijing", "name": "Tiananmen", "info": "updated", "lat": 39.9, "lon": 116.4},
        )

        assert response.status_code == 200
        assert response.json()["info"] == "updated"

    @pytest.mark.asyncio
    async def test_update_unknown_gid(self, test_client):
        response = await test_client.put(
            "/updatetravelpoint",
            json={"gid": 404, "province": "P", "name": "N", "info": "", "lat": 1, "lon": 1},
        )

        assert response.status_code == 404
        assert response.json() == {"error": "travel point with ID '404' was not found"}

    @pytest.mark.asyncio
    async def test_update_travel_point_requires_info(self, test_client, mock_db_session):
        response = await test_client.put(
            "/updatetravelpoint",
            json={"gid": 1, "province": "P", "name": "N", "lat": 1, "lon": 1},
        )

        assert response.status_code == 400
        assert "body.info" in response.json()["error"]
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("gid", [0, -1, 2**31])
    async def test_update_gid_outside_serial_range(self, test_client, mock_db_session, gid):
        response = await test_client.put(
            "/updatetravelpoint",
            json={"gid": gid, "province": "P", "name": "N", "info": "", "lat": 1, "lon": 1},
        )

        assert response.status_code == 400
        assert "body.gid" in response.json()["error"]
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("gid", [0, 2**31, 2**63])
    async def test_delete_gid_outside_serial_range(self, test_client, mock_db_session, gid):
        response = await test_client.request("DELETE", "/deletetravelpoint", json={"gid": gid})

        assert response.status_code == 400
        assert "body.gid" in response.json()["error"]
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_largest_serial_gid(self, test_client):
        response = await test_client.request("DELETE", "/deletetravelpoint", json={"gid": 2**31 - 1})

        assert response.status_code == 200
        assert response.json() == {"success": True}

    @pytest.mark.asyncio
    async def test_delete_travel_point_twice(self, test_client):
        for _ in range(2):
            response = await test_client.request("DELETE", "/deletetravelpoint", json={"gid": 1})
            assert response.status_code == 200
            assert response.json() == {"success": True}

    @pytest.mark.asyncio
    async def test_delete_without_body(self, test_client, mock_db_session):
        response = await test_client.request("DELETE", "/deletetravelpoint")

        assert response.status_code == 400
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concurrent_creates(self, test_client, set_db_rows, sample_point_row, mock_db_session):
        set_db_rows([sample_point_row])
        body = {"lat": 1, "lon": 1, "province": "P", "name": "N", "info": ""}

        responses = await asyncio.gather(
            *(test_client.post("/addtravelpoints", json=body) for _ in range(5))
        )

        assert [r.status_code for r in responses] == [200] * 5
        assert mock_db_session.execute.await_count == 5
        assert mock_db_session.commit.await_count == 5


class TestTravelRouteEndpoints:

    @pytest.mark.asyncio
    async def test_get_travel_routes(self, test_client, set_db_rows, sample_route_row):
        set_db_rows([sample_route_row])

        response = await test_client.get("/gettravelroutes")

        assert response.status_code == 200
        assert response.json() == [
            {
                "gid": 3,
                "start": "Beijing",
                "end": "Shanghai",
                "geom": {
                    "type": "LineString",
                    "coordinates": [[116.4, 39.9], [121.47, 31.23]],
                },
            }
        ]

    @pytest.mark.asyncio
    async def test_add_travel_route(self, test_client, set_db_rows, sample_route_row):
        set_db_rows([sample_route_row])

        response = await test_client.post(
            "/addtravelroute",
            json={"start": "Beijing", "end": "Shanghai", "lon1": 116.4, "lat1": 39.9, "lon2": 121.47, "lat2": 31.23},
        )

        assert response.status_code == 200
        assert response.json()["geom"]["type"] == "LineString"

    @pytest.mark.asyncio
    async def test_add_travel_route_missing_coordinate(self, test_client, mock_db_session):
        response = await test_client.post(
            "/addtravelroute",
            json={"start": "A", "end": "B", "lon1": 1, "lat1": 1, "lon2": 2},
        )

        assert response.status_code == 400
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_travel_route(self, test_client):
        response = await test_client.request("DELETE", "/deletetravelroute", json={"gid": 3})

        assert response.status_code == 200
        assert response.json() == {"success": True}

    @pytest.mark.asyncio
    async def test_delete_travel_route_gid_too_large(self, test_client, mock_db_session):
        response = await test_client.request("DELETE", "/deletetravelroute", json={"gid": 2**31})

        assert response.status_code == 400
        assert "body.gid" in response.json()["error"]
        mock_db_session.execute.assert_not_awaited()


class TestMemberEndpoints:

    @pytest.mark.asyncio
    async def test_members(self, test_client, set_db_rows, sample_member_row):
        set_db_rows([sample_member_row])

        response = await test_client.get("/members")

        assert response.status_code == 200
        assert response.json() == [sample_member_row]

    @pytest.mark.asyncio
    async def test_add_member(self, test_client, set_db_rows, sample_member_row):
        set_db_rows([sample_member_row])
        body = {k: v for k, v in sample_member_row.items() if k != "id"}

        response = await test_client.post("/addmember", json=body)

        assert response.status_code == 200
        assert response.json()["id"] == 7

    @pytest.mark.asyncio
    async def test_delete_member(self, test_client):
        response = await test_client.request("DELETE", "/deletemember", json={"id": 7})

        assert response.status_code == 200
        assert response.json() == {"success": True}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("member_id", [0, 2**31])
    async def test_delete_member_id_outside_serial_range(self, test_client, mock_db_session, member_id):
        response = await test_client.request("DELETE", "/deletemember", json={"id": member_id})

        assert response.status_code == 400
        assert "body.id" in response.json()["error"]
        mock_db_session.execute.assert_not_awaited()


class TestRoutingAndCORS:

    @pytest.mark.asyncio
    async def test_unknown_path(self, test_client):
        response = await test_client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "not found"}
        assert_cors(response)

    @pytest.mark.asyncio
    async def test_wrong_method_is_not_found(self, test_client, mock_db_session):
        response = await test_client.get("/addtravelpoints")

        assert response.status_code == 404
        assert response.json() == {"error": "not found"}
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_options_preflight_any_path(self, test_client, mock_db_session):
        for path in ("/addtravelpoints", "/does-not-exist"):
            response = await test_client.options(path)

            assert response.status_code == 200
            assert response.content == b""
            assert_cors(response)
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/members", headers={"X-Request-ID": "abc123"})
        assert response.headers["x-request-id"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/members")
        assert len(response.headers["x-request-id"]) == 8


class TestErrorMapping:

    @pytest.mark.asyncio
    async def test_database_error_message_verbatim(self, test_client, mock_db_session):
        mock_db_session.execute.side_effect = DBAPIError(
            "SELECT ...", {}, Exception('relation "members" does not exist')
        )

        response = await test_client.get("/members")

        assert response.status_code == 500
        assert response.json() == {"error": 'relation "members" does not exist'}
        assert_cors(response)

    @pytest.mark.asyncio
    async def test_unexpected_exception(self, test_app, test_client):
        async def explode():
            raise RuntimeError("boom")

        test_app.add_api_route("/explode", explode)

        response = await test_client.get("/explode")

        assert response.status_code == 500
        assert response.json() == {"error": "boom"}
        assert_cors(response)

    @pytest.mark.asyncio
    async def test_request_timeout(self):
        from httpx import AsyncClient, ASGITransport

        from app.config import Settings
        from app.main import create_app

        app = create_app(Settings(request_timeout_seconds=0.05))

        async def stall():
            await asyncio.sleep(5)
            return {"ok": True}

        app.add_api_route("/stall", stall)

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/stall")

        assert response.status_code == 504
        assert response.json() == {"error": "request timed out"}
        assert_cors(response)


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_app, test_client):
        from unittest.mock import AsyncMock, MagicMock

        test_app.state.database = MagicMock(ping=AsyncMock())

        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_no_pool(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"

    @pytest.mark.asyncio
    async def test_database_down(self, test_app, test_client):
        from unittest.mock import AsyncMock, MagicMock

        test_app.state.database = MagicMock(ping=AsyncMock(side_effect=OSError("refused")))

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
