"""HTTP behaviour of the read endpoint and catalogues."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import DBAPIError

from conftest import USER_ID, utc
from healthhub.api.v1.dependencies import get_metric_store
from healthhub.database.metric_store import MetricStore
from healthhub.domain import MetricKind
from healthhub.enums import SleepStage
from healthhub.exceptions.errors import StoreUnavailableError
from healthhub.main import app

HEADERS = {"X-User-Id": str(USER_ID)}


class TestMetricEndpoint:
    @pytest.mark.asyncio
    async def test_heart_rate_series(self, client, add_rows):
        await add_rows(MetricKind.HEART_RATE, [
            (72, utc("2024-01-01T00:00:00Z")),
            (75, utc("2024-01-01T00:01:00Z")),
        ])
        response = await client.get("/metric/heart_rate", headers=HEADERS)
        assert response.status_code == 200
        assert response.json() == {
            "points": [
                {"value": 72, "timestamp": 1704067200},
                {"value": 75, "timestamp": 1704067260},
            ],
            "unit": "bpm",
        }

    @pytest.mark.asyncio
    async def test_lower_bound(self, client, add_rows):
        await add_rows(MetricKind.HEART_RATE, [
            (72, utc("2024-01-01T00:00:00Z")),
            (75, utc("2024-01-01T00:01:00Z")),
        ])
        response = await client.get(
            "/metric/heart_rate", headers=HEADERS, params={"from": "2024-01-01T00:00:30Z"}
        )
        assert response.status_code == 200
        assert response.json()["points"] == [{"value": 75, "timestamp": 1704067260}]

    @pytest.mark.asyncio
    async def test_sleep_stage_series(self, client, add_rows):
        await add_rows(MetricKind.SLEEP_STAGE, [(SleepStage.REM, utc("2024-01-02T03:00:00Z"))])
        response = await client.get("/metric/sleep_stage", headers=HEADERS)
        assert response.status_code == 200
        assert response.json() == {"points": [{"value": "rem", "timestamp": 1704164400}], "unit": ""}

    @pytest.mark.asyncio
    async def test_unknown_metric(self, client):
        response = await client.get("/metric/unknown_xyz", headers=HEADERS)
        assert response.status_code == 404
        assert response.json() == {"error": "Unknown metric: unknown_xyz"}

    @pytest.mark.asyncio
    async def test_corrupt_row_is_a_server_error(self, client, add_rows, add_raw_row):
        await add_rows(MetricKind.HEART_RATE, [(72, utc("2024-01-01T00:00:00Z"))])
        await add_raw_row(MetricKind.HEART_RATE, 70000, utc("2024-01-01T00:01:00Z"))
        response = await client.get("/metric/heart_rate", headers=HEADERS)
        assert response.status_code == 500
        body = response.json()
        assert "points" not in body
        assert body == {"error": "Stored heart_rate data could not be decoded"}

    @pytest.mark.asyncio
    async def test_empty_series(self, client):
        response = await client.get("/metric/weight", headers=HEADERS)
        assert response.status_code == 200
        assert response.json() == {"points": [], "unit": "kg"}

    @pytest.mark.asyncio
    async def test_float_values_and_closed_range(self, client, add_rows):
        await add_rows(MetricKind.VO2_MAX, [
            (41.0, utc("2024-01-01T00:00:00Z")),
            (42.5, utc("2024-01-02T00:00:00Z")),
            (43.0, utc("2024-01-03T00:00:00Z")),
        ])
        response = await client.get(
            "/metric/vo2_max",
            headers=HEADERS,
            params={"from": "2024-01-02T00:00:00Z", "to": "2024-01-03T00:00:00Z"},
        )
        assert response.json() == {
            "points": [
                {"value": 42.5, "timestamp": 1704153600},
                {"value": 43.0, "timestamp": 1704240000},
            ],
            "unit": "mL/kg/min",
        }

    @pytest.mark.asyncio
    async def test_reversed_range(self, client):
        response = await client.get(
            "/metric/heart_rate",
            headers=HEADERS,
            params={"from": "2024-01-02T00:00:00Z", "to": "2024-01-01T00:00:00Z"},
        )
        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_unparseable_bound(self, client):
        response = await client.get("/metric/heart_rate", headers=HEADERS, params={"from": "yesterday"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    @pytest.mark.parametrize("headers", [{}, {"X-User-Id": "not-a-uuid"}])
    async def test_missing_or_malformed_user(self, client, headers):
        response = await client.get("/metric/heart_rate", headers=headers)
        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_store_unavailable(self, client):
        class DownStore:
            async def fetch(self, kind, user_id, start=None, end=None, timeout=None):
                raise StoreUnavailableError(kind.value)

        app.dependency_overrides[get_metric_store] = lambda: DownStore()
        response = await client.get("/metric/weight", headers=HEADERS)
        assert response.status_code == 503
        assert response.json() == {"error": "Metric store unavailable while reading weight"}


class TestCatalogues:
    @pytest.mark.asyncio
    async def test_metrics(self, client):
        response = await client.get("/metrics")
        assert response.status_code == 200
        by_name = {entry["name"]: entry for entry in response.json()}
        assert set(by_name) == {kind.value for kind in MetricKind}
        assert by_name["heart_rate"] == {"name": "heart_rate", "display_name": "Heart rate", "unit": "bpm"}
        assert by_name["sleep_stage"]["unit"] == ""

    @pytest.mark.asyncio
    async def test_providers(self, client):
        response = await client.get("/providers")
        assert response.status_code == 200
        assert response.json() == [{
            "provider_id": "garmin_connect",
            "provider_name": "Garmin Connect",
            "supported_metrics": ["heart_rate", "weight"],
        }]

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": True}


class TestMetricResolutionOrder:
    @pytest.mark.asyncio
    async def test_unknown_metric_without_user_header(self, client):
        response = await client.get("/metric/unknown_xyz")
        assert response.status_code == 404
        assert response.json() == {"error": "Unknown metric: unknown_xyz"}

    @pytest.mark.asyncio
    async def test_unknown_metric_with_unparseable_bound(self, client):
        response = await client.get("/metric/unknown_xyz", headers=HEADERS, params={"from": "bad"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_driver_error_is_service_unavailable(self, client):
        class StartingUpSession:
            async def execute(self, statement):
                raise DBAPIError("SELECT value, timestamp FROM weight", {}, Exception("the database system is starting up"))

        app.dependency_overrides[get_metric_store] = lambda: MetricStore(StartingUpSession(), timeout=1)
        response = await client.get("/metric/weight", headers=HEADERS)
        assert response.status_code == 503
        assert response.json() == {"error": "Metric store unavailable while reading weight"}
