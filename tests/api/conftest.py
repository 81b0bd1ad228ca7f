"""Fixtures for HTTP-level tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pillar.api.app import create_app


@pytest.fixture
def app(cloud_client: MagicMock) -> FastAPI:
    """A fresh app with the upstream double installed.

    The lifespan does NOT run for a ``TestClient`` used outside a ``with``
    block, so the client is set on app state directly.
    """
    application = create_app()
    application.state.cloud_client = cloud_client
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
