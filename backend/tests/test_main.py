"""Tests for application assembly."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from loginlog.main import app, lifespan, mount_static
from loginlog.services.record_store import LoginAttemptStore


def test_api_routes_registered():
    paths = app.openapi()["paths"]

    assert "post" in paths["/api/login"]
    assert {"get", "delete"} <= set(paths["/api/login-attempts"])
    assert "get" in paths["/health"]


def test_mount_static_without_directory():
    assert mount_static(FastAPI(), None) is False


def test_mount_static_missing_directory(tmp_path):
    assert mount_static(FastAPI(), str(tmp_path / "public")) is False


@pytest.mark.asyncio
async def test_mount_static_serves_index(tmp_path):
    (tmp_path / "index.html").write_text("<h1>Sign in</h1>")
    static_app = FastAPI()

    @static_app.get("/api/ping")
    async def ping():
        return {"ok": True}

    assert mount_static(static_app, str(tmp_path)) is True

    async with AsyncClient(transport=ASGITransport(app=static_app), base_url="http://test") as ac:
        index = await ac.get("/")
        api = await ac.get("/api/ping")

    assert index.status_code == 200
    assert "Sign in" in index.text
    assert api.json() == {"ok": True}


@pytest.mark.asyncio
async def test_lifespan_creates_record_store():
    test_app = FastAPI()

    with patch("loginlog.main.setup_logging"):
        async with lifespan(test_app):
            assert isinstance(test_app.state.record_store, LoginAttemptStore)
