"""Shared test fixtures.

No network or Docker required: the provisioning server is replaced by a
``MagicMock`` constrained to the ``CloudClient`` protocol.
"""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest
from loguru import logger

from pillar.api.cloud.base import CloudClient
from pillar.api.context import RequestContext
from pillar.api.settings import _get_settings_cached


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Never leak cached settings between tests."""
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()


@pytest.fixture
def cloud_client() -> MagicMock:
    """Upstream client double; configure return values per test."""
    return MagicMock(spec=CloudClient)


@pytest.fixture
def ctx(cloud_client: MagicMock) -> RequestContext:
    return RequestContext(
        request_id="testrequest",
        logger=logger.bind(path="/test", request="testrequest"),
        cloud_client=cloud_client,
    )
