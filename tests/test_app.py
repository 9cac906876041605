"""
DressStore Backend: Application & Lifecycle Tests
===================================================

What:  App factory wiring, service routes, lifespan (connect + seed) and
       configuration parsing.
How:   Service routes use the async test client; lifespan tests use
       Starlette's TestClient, which runs startup and shutdown.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError as PydanticValidationError

from dressstore.config import Settings
from dressstore.main import create_app
from dressstore.routes.health import WELCOME_TEXT

SEED_NAMES = ["Dress", "Hat", "Jacket", "Jeans", "Shoes", "Sweater"]


def lifespan_settings(db_path, **overrides):
    values = {
        "database_url": f"sqlite+aiosqlite:///{db_path}",
        "seed_on_startup": True,
        "seed_only_if_empty": True,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


def run_app(settings):
    """Start the app, list products, shut down. Returns the product names."""
    with patch("dressstore.main.setup_logging"):
        with TestClient(create_app(settings=settings)) as client:
            response = client.get("/product")
    assert response.status_code == 200
    return sorted(p["name"] for p in response.json())


class TestServiceRoutes:

    @pytest.mark.asyncio
    async def test_welcome(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.text == WELCOME_TEXT
        assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.asyncio
    async def test_health_connected(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_generated_request_id(self, test_client):
        response = await test_client.get("/")

        assert len(response.headers["X-Request-ID"]) == 8


class TestLifespan:

    def test_startup_seeds_catalogue(self, tmp_path):
        names = run_app(lifespan_settings(tmp_path / "store.db"))

        assert names == SEED_NAMES

    def test_restart_does_not_duplicate_by_default(self, tmp_path):
        settings = lifespan_settings(tmp_path / "store.db")
        run_app(settings)

        assert run_app(settings) == SEED_NAMES

    def test_restart_duplicates_when_unconditional(self, tmp_path):
        settings = lifespan_settings(tmp_path / "store.db", seed_only_if_empty=False)
        run_app(settings)

        assert run_app(settings) == sorted(SEED_NAMES * 2)

    def test_seeding_disabled(self, tmp_path):
        names = run_app(lifespan_settings(tmp_path / "store.db", seed_on_startup=False))

        assert names == []

    def test_unreachable_database_keeps_serving(self, tmp_path):
        settings = lifespan_settings(tmp_path / "missing" / "dir" / "store.db")

        with patch("dressstore.main.setup_logging"):
            with TestClient(create_app(settings=settings)) as client:
                welcome = client.get("/")
                health = client.get("/health")
                listing = client.get("/product")

        assert welcome.status_code == 200
        assert health.json()["database"] == "disconnected"
        assert listing.status_code == 500
        assert listing.json()["error"]


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        settings = Settings()

        assert settings.port == 3000
        assert settings.seed_only_if_empty is True

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")

        assert Settings().port == 8080

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="LOUD")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test")

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
