"""API endpoint tests"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_ingest_service, get_store
from app.main import app
from app.services.ingest_service import IngestService

PROVIDER_A_PAYLOAD = {
    "provider_name": "ProviderA",
    "id": "A-123",
    "cost": "123.45",
    "currency": "USD",
    "depart": "2025-11-01T09:00:00Z",
    "class": "economy",
}


class TestAPI:
    """Test API endpoints"""

    @pytest.fixture
    def client(self):
        """Create test client with the lifespan (store + janitor) running"""
        with TestClient(app) as client:
            yield client

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["offers_cached"] == 0
        assert body["janitor_running"] is True

    def test_accepted_then_duplicate(self, client):
        first = client.post("/normalize", json=PROVIDER_A_PAYLOAD)
        assert first.status_code == 201
        assert first.json()["status"] == "accepted"

        offer = first.json()["offer"]
        assert offer["provider_id"] == "ProviderA"
        assert offer["provider_ref"] == "A-123"
        assert offer["price"] == 123.45
        assert offer["fare_class"] == "economy"
        assert offer["depart_at"].startswith("2025-11-01T09:00:00")
        assert offer["offer_id"]
        assert offer["raw"] == PROVIDER_A_PAYLOAD

        second = client.post("/normalize", json=PROVIDER_A_PAYLOAD)
        assert second.status_code == 200
        assert second.json()["status"] == "duplicate"
        assert second.json()["offer"]["offer_id"] == offer["offer_id"]

    def test_unrecognized_schema_leaves_store_untouched(self, client):
        response = client.post("/normalize", json={"foo": "bar"})
        assert response.status_code == 400
        assert "unknown provider/schema" in response.json()["detail"]
        assert client.get("/offers").json() == []

    def test_invalid_json(self, client):
        response = client.post("/normalize", content=b"{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json()["detail"].startswith("invalid json")

    def test_oversized_integer_is_invalid_json(self, client):
        body = b'{"price": ' + b"1" * 5000 + b"}"
        response = client.post("/normalize", content=body, headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json()["detail"].startswith("invalid json")

    def test_lone_surrogate_escape_is_accepted(self, client):
        body = b'{"provider_name": "ProviderA", "id": "\\ud800", "cost": "1"}'
        headers = {"Content-Type": "application/json"}

        first = client.post("/normalize", content=body, headers=headers)
        assert first.status_code == 201
        assert first.json()["offer"]["provider_ref"] == "\ud800"

        second = client.post("/normalize", content=body, headers=headers)
        assert second.status_code == 200
        assert second.json()["status"] == "duplicate"

    def test_non_object_payload(self, client):
        response = client.post("/normalize", json=[PROVIDER_A_PAYLOAD])
        assert response.status_code == 400

    def test_only_post_allowed(self, client):
        response = client.get("/normalize")
        assert response.status_code == 405

    def test_cents_payload_and_raw_numbers(self, client):
        payload = {
            "vendor": "ProviderB",
            "sku": 999,
            "pricing": {"amount": 12345.0, "units": "cents"},
            "times": {"leave": 1698772345},
        }
        response = client.post("/normalize", json=payload)
        assert response.status_code == 201
        offer = response.json()["offer"]
        assert offer["price"] == 123.45
        assert offer["currency"] == "USD"
        assert offer["provider_ref"] == "999"
        assert offer["raw"]["pricing"]["amount"] == 12345.0

    def test_list_and_get_offers(self, client):
        client.post("/normalize", json=PROVIDER_A_PAYLOAD)
        client.post("/normalize", json={"price": 10, "currency": "EUR"})

        offers = client.get("/offers").json()
        assert {o["provider_id"] for o in offers} == {"ProviderA", "generic"}

        only_generic = client.get("/offers", params={"provider_id": "generic"}).json()
        assert len(only_generic) == 1

        offer_id = only_generic[0]["offer_id"]
        response = client.get(f"/offers/{offer_id}")
        assert response.status_code == 200
        assert response.json()["currency"] == "EUR"

    def test_offer_not_found(self, client):
        response = client.get("/offers/does-not-exist")
        assert response.status_code == 404

    def test_invalid_endpoint(self, client):
        response = client.get("/invalid")
        assert response.status_code == 404

    def test_ingest_runs_off_the_event_loop(self, client):
        loops = []

        class RecordingService(IngestService):
            def ingest(self, raw):
                try:
                    loops.append(asyncio.get_running_loop())
                except RuntimeError:
                    loops.append(None)
                return super().ingest(raw)

        app.dependency_overrides[get_ingest_service] = lambda: RecordingService(get_store())
        try:
            response = client.post("/normalize", json=PROVIDER_A_PAYLOAD)
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 201
        assert loops == [None]
