"""Tests for the JSON API: /api/status and /api/activities."""

import httpx
import pytest

from conftest import cookie_value, set_cookies, token_response
from strava_proxy.models import TokenRecord

TOKEN_PATH = "/oauth/token"
ACTIVITIES_PATH = "/api/v3/athlete/activities"

ACTIVITIES = [
    {"id": 9876543210, "name": "Morning Run", "type": "Run", "distance": 5000.0},
    {"id": 9876543211, "name": "Evening Ride", "type": "Ride", "distance": 21000.5},
]


class TestStatus:
    """Tests for GET /api/status."""

    @pytest.mark.asyncio
    async def test_no_cookie_is_disconnected(self, client):
        response = await client.get("/api/status")

        assert response.status_code == 200
        assert response.json() == {"connected": False, "athlete_id": None}

    @pytest.mark.asyncio
    async def test_valid_cookie_is_connected(self, client, cookie_for, valid_record):
        response = await client.get("/api/status", headers=cookie_for(valid_record))

        assert response.json() == {"connected": True, "athlete_id": 12345678}

    @pytest.mark.asyncio
    async def test_expired_cookie_reports_athlete_but_not_connected(
        self, client, strava, cookie_for, expired_record
    ):
        """Should not refresh; status only reflects the stored expiry."""
        response = await client.get("/api/status", headers=cookie_for(expired_record))

        assert response.json() == {"connected": False, "athlete_id": 12345678}
        assert strava.requests == []

    @pytest.mark.asyncio
    async def test_tampered_cookie_is_disconnected(self, client):
        response = await client.get(
            "/api/status", headers={"Cookie": "strava=not-a-signed-value"}
        )

        assert response.status_code == 200
        assert response.json() == {"connected": False, "athlete_id": None}


class TestActivities:
    """Tests for GET /api/activities."""

    @pytest.mark.asyncio
    async def test_no_cookie_is_401(self, client, strava):
        response = await client.get("/api/activities")

        assert response.status_code == 401
        assert response.json() == {"error": "not_authorized"}
        assert strava.requests == []

    @pytest.mark.asyncio
    async def test_valid_cookie_passes_payload_through(
        self, client, strava, cookie_for, valid_record
    ):
        """Should return Strava's JSON unchanged without refreshing."""
        strava.on("GET", ACTIVITIES_PATH, httpx.Response(200, json=ACTIVITIES))

        response = await client.get(
            "/api/activities",
            params={"page": 2, "per_page": 50},
            headers=cookie_for(valid_record),
        )

        assert response.status_code == 200
        assert response.json() == ACTIVITIES
        assert set_cookies(response) == []

        (call,) = strava.requests
        assert call.url.path == ACTIVITIES_PATH
        assert call.url.params["page"] == "2"
        assert call.url.params["per_page"] == "50"
        assert call.headers["authorization"] == f"Bearer {valid_record.access_token}"

    @pytest.mark.asyncio
    async def test_defaults_page_and_per_page(self, client, strava, cookie_for, valid_record):
        strava.on("GET", ACTIVITIES_PATH, httpx.Response(200, json=[]))

        response = await client.get("/api/activities", headers=cookie_for(valid_record))

        assert response.json() == []
        assert strava.requests[0].url.params["page"] == "1"
        assert strava.requests[0].url.params["per_page"] == "30"

    @pytest.mark.asyncio
    async def test_per_page_is_not_bounded_locally(
        self, client, strava, cookie_for, valid_record
    ):
        strava.on("GET", ACTIVITIES_PATH, httpx.Response(200, json=[]))

        await client.get(
            "/api/activities", params={"per_page": 1000}, headers=cookie_for(valid_record)
        )

        assert strava.requests[0].url.params["per_page"] == "1000"

    @pytest.mark.asyncio
    async def test_non_numeric_page_without_cookie_is_401(self, client, strava):
        response = await client.get("/api/activities", params={"page": "abc"})

        assert response.status_code == 401
        assert response.json() == {"error": "not_authorized"}
        assert strava.requests == []

    @pytest.mark.asyncio
    async def test_non_numeric_page_is_left_to_strava(
        self, client, strava, cookie_for, valid_record
    ):
        """Should forward the raw value and report Strava's refusal as a fetch failure."""
        strava.on(
            "GET",
            ACTIVITIES_PATH,
            httpx.Response(400, json={"message": "Bad Request", "errors": []}),
        )

        response = await client.get(
            "/api/activities",
            params={"page": "abc", "per_page": "ten"},
            headers=cookie_for(valid_record),
        )

        assert response.status_code == 500
        assert response.json() == {"error": "activities_failed"}
        call = strava.calls("GET", ACTIVITIES_PATH)[0]
        assert call.url.params["page"] == "abc"
        assert call.url.params["per_page"] == "ten"

    @pytest.mark.asyncio
    async def test_expired_cookie_is_refreshed_before_fetch(
        self, client, strava, store, cookie_for, expired_record
    ):
        """Should refresh, use the new token and send the refreshed cookie back."""
        strava.on(
            "POST",
            TOKEN_PATH,
            token_response(access_token="refreshed_token", expires_at=1893456000),
        )
        strava.on("GET", ACTIVITIES_PATH, httpx.Response(200, json=ACTIVITIES))

        response = await client.get("/api/activities", headers=cookie_for(expired_record))

        assert response.status_code == 200
        assert response.json() == ACTIVITIES
        assert len(strava.calls("POST", TOKEN_PATH)) == 1
        fetch = strava.calls("GET", ACTIVITIES_PATH)[0]
        assert fetch.headers["authorization"] == "Bearer refreshed_token"
        assert store.decode(cookie_value(response)) == TokenRecord(
            access_token="refreshed_token",
            refresh_token="new_refresh_token",
            expires_at=1893456000,
            athlete_id=expired_record.athlete_id,
        )

    @pytest.mark.asyncio
    async def test_failed_refresh_is_500(self, client, strava, cookie_for, expired_record):
        """Should report a broken connection, not a missing one."""
        strava.on("POST", TOKEN_PATH, httpx.Response(400, json={"message": "Bad Request"}))

        response = await client.get("/api/activities", headers=cookie_for(expired_record))

        assert response.status_code == 500
        assert response.json() == {"error": "activities_failed"}
        assert strava.calls("GET", ACTIVITIES_PATH) == []
        assert set_cookies(response) == []

    @pytest.mark.asyncio
    async def test_upstream_failure_is_500_without_upstream_body(
        self, client, strava, cookie_for, valid_record
    ):
        strava.on(
            "GET",
            ACTIVITIES_PATH,
            httpx.Response(503, json={"message": "secret upstream detail"}),
        )

        response = await client.get("/api/activities", headers=cookie_for(valid_record))

        assert response.status_code == 500
        assert response.json() == {"error": "activities_failed"}
        assert "secret upstream detail" not in response.text

    @pytest.mark.asyncio
    async def test_fetch_failure_after_refresh_keeps_refreshed_cookie(
        self, client, strava, store, cookie_for, expired_record
    ):
        strava.on("POST", TOKEN_PATH, token_response(access_token="refreshed_token"))
        strava.on("GET", ACTIVITIES_PATH, httpx.ConnectError("connection reset"))

        response = await client.get("/api/activities", headers=cookie_for(expired_record))

        assert response.status_code == 500
        assert response.json() == {"error": "activities_failed"}
        assert store.decode(cookie_value(response)).access_token == "refreshed_token"
