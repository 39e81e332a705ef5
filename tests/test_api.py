"""Tests for API routes."""
from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from brand_investigator.api.deps import get_credential_store
from brand_investigator.models.events import EventType, SSEEvent
from brand_investigator.services.credential_store import CredentialStore


@pytest.fixture
def store(tmp_path):
    return CredentialStore(tmp_path / "credentials.json")


@pytest.fixture
def app(store):
    from brand_investigator.main import app

    app.dependency_overrides[get_credential_store] = lambda: store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "brand_investigator"


def test_credentials_status_never_echoes_secrets(client):
    response = client.put("/api/credentials", json={"serper": "secret-serper", "gemini": "secret-gemini"})
    assert response.status_code == 200
    assert response.json() == {"serper": True, "gemini": True, "firecrawl": False, "rapidapi": False}
    assert "secret" not in response.text

    assert client.get("/api/credentials").json()["serper"] is True


def test_delete_credentials(client, store):
    client.put("/api/credentials", json={"serper": "s", "rapidapi": "r"})

    response = client.delete("/api/credentials/rapidapi")
    assert response.status_code == 200
    assert response.json()["rapidapi"] is False
    assert response.json()["serper"] is True

    assert client.delete("/api/credentials/unknown").status_code == 404

    response = client.delete("/api/credentials")
    assert response.json() == {"serper": False, "gemini": False, "firecrawl": False, "rapidapi": False}
    assert not store.path.exists()


def test_stream_investigation_emits_sse_events(client, store):
    from brand_investigator.models.investigation import Credentials

    store.save(Credentials(serper="stored-serper", gemini="stored-gemini"))
    seen: dict = {}

    class FakeOrchestrator:
        async def investigate(self, brand_name, product_category, credentials):
            seen["args"] = (brand_name, product_category, credentials)
            yield SSEEvent(event=EventType.PROGRESS, data={"step": 1, "text": "Validating inputs with AI...", "total": 7})
            yield SSEEvent(event=EventType.INVESTIGATION_COMPLETE, data={"aggregate": {"brand_name": brand_name}})

    with patch("brand_investigator.api.routes.investigations.InvestigationOrchestrator", FakeOrchestrator):
        response = client.post(
            "/api/investigations/stream",
            json={"brand_name": "Acme", "product_category": "mugs", "credentials": {"gemini": "explicit-gemini"}},
        )

    assert response.status_code == 200
    assert "event: progress" in response.text
    assert "event: investigation_complete" in response.text
    assert json.dumps({"aggregate": {"brand_name": "Acme"}}) in response.text

    brand, category, credentials = seen["args"]
    assert (brand, category) == ("Acme", "mugs")
    assert credentials.serper == "stored-serper"
    assert credentials.gemini == "explicit-gemini"
