from __future__ import annotations

import sys
from pathlib import Path

from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import qrmenu.api.routes.health as health_route
from qrmenu.api.main import create_app


def test_live_health_endpoint(fake_backend, fake_cache) -> None:
    client = TestClient(create_app(backend=fake_backend, cache=fake_cache))
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_health_endpoint_healthy_with_mocks(monkeypatch, fake_backend, fake_cache) -> None:
    monkeypatch.setattr(health_route, "ping_redis", lambda timeout_seconds=1.0: True)

    client = TestClient(create_app(backend=fake_backend, cache=fake_cache))
    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "checks": {"backend": True, "cache": True}}


def test_ready_reports_unavailable_backend(monkeypatch, fake_backend, fake_cache) -> None:
    monkeypatch.setattr(health_route, "ping_redis", lambda timeout_seconds=1.0: False)
    fake_backend.healthy = False

    client = TestClient(create_app(backend=fake_backend, cache=fake_cache))
    response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["checks"] == {"backend": False, "cache": False}
