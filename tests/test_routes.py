"""Route tests: status codes and response bodies for /api/aqi and the health checks."""

import pytest
from fastapi.testclient import TestClient

from app import create_app
from errors import MissingCredentialError, TransportError, UpstreamTimeoutError
from services.aqi import AqiLookupService, get_aqi_service


@pytest.fixture
def app():
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def use_service(app, store):
    """Route /api/aqi through a service built on the given fake client."""

    def _use(fake_client) -> AqiLookupService:
        service = AqiLookupService(fake_client, store)
        app.dependency_overrides[get_aqi_service] = lambda: service
        return service

    return _use


class TestHealth:
    def test_api_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["message"] == "Air Quality Search API is running"

    def test_ready(self, client):
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["service"] == "air-quality-api"
        assert response.headers["X-Content-Type-Options"] == "nosniff"


class TestAqiRoute:
    @pytest.mark.parametrize("query", ["", "?city=", "?city=%20%20"])
    def test_missing_city_is_400(self, client, use_service, fake_client_cls, query):
        fake = fake_client_cls(response={})
        use_service(fake)

        response = client.get(f"/api/aqi{query}")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required query parameter 'city'."}
        assert fake.calls == []

    def test_found(self, client, use_service, fake_client_cls, delhi_feed):
        use_service(fake_client_cls(response=delhi_feed))

        response = client.get("/api/aqi", params={"city": "  Delhi "})

        assert response.status_code == 200
        body = response.json()
        assert body["query"] == "Delhi"
        assert body["aqi"]["value"] == 164
        assert body["aqi"]["label"] == "Unhealthy"
        assert body["measurements"] == {
            "pm25": {"value": 89, "label": "PM2.5 (fine particulate matter)", "unit": "µg/m³"}
        }
        assert body["dominantPollutant"] == "pm25"
        assert body["meta"]["cache"] == {"hit": False, "ttlMs": 300000}

    def test_second_request_reports_cache_hit(self, client, use_service, fake_client_cls, delhi_feed):
        fake = fake_client_cls(response=delhi_feed)
        use_service(fake)

        client.get("/api/aqi", params={"city": "Delhi"})
        response = client.get("/api/aqi", params={"city": "DELHI"})

        assert response.json()["meta"]["cache"]["hit"] is True
        assert len(fake.calls) == 1

    def test_no_data_is_404(self, client, use_service, fake_client_cls, store):
        use_service(fake_client_cls(response={"status": "error", "data": "Unknown station"}))

        response = client.get("/api/aqi", params={"city": "Atlantis "})

        assert response.status_code == 404
        assert response.json() == {"error": "No AQI data found for city 'Atlantis'."}
        assert len(store) == 0

    @pytest.mark.parametrize(
        "error",
        [
            MissingCredentialError(),
            TransportError("AQICN API request failed with status 500", 500, "Internal Server Error"),
            UpstreamTimeoutError(8),
        ],
    )
    def test_upstream_failure_is_502_without_detail(self, client, use_service, fake_client_cls, error):
        use_service(fake_client_cls(error=error))

        response = client.get("/api/aqi", params={"city": "Delhi"})

        assert response.status_code == 502
        assert response.json() == {"error": "Failed to fetch AQI data from upstream provider."}
