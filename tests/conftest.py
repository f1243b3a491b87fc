"""
Pytest Configuration and Fixtures

Provides shared test fixtures for all test modules.

Author: Development Team
Version: 1.0.0
"""

import asyncio

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry

from route_metrics.config import Settings
from route_metrics.main import create_app


class UpstreamConflict(Exception):
    """Library-style error carrying its own status code."""

    status_code = 409


@pytest.fixture
def registry():
    """
    Fresh metrics registry.

    Each test registers its own instruments.
    """
    return CollectorRegistry()


@pytest.fixture
def settings():
    """Default settings without reading a .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def client(settings, registry):
    """
    Test client fixture for the example application.

    Server exceptions are turned into 500 responses.
    """
    app = create_app(settings, registry)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def bare_app():
    """
    Uninstrumented application with timing and failure routes.

    Tests install the middleware themselves.
    """
    app = FastAPI()

    @app.get("/users/{user_id}")
    async def get_user(user_id: int):
        await asyncio.sleep(0.01)
        return {"id": user_id}

    @app.get("/healthz")
    async def healthz():
        return {"status": "healthy"}

    @app.get("/teapot")
    async def teapot():
        raise HTTPException(status_code=418, detail="I'm a teapot")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("boom")

    @app.get("/conflict")
    async def conflict():
        raise UpstreamConflict("version mismatch")

    @app.post("/items")
    async def create_item():
        return {"created": True}

    return app
