"""Shared enumerations used across the API."""

from __future__ import annotations

from enum import StrEnum


class InstallationAffinity(StrEnum):
    """Isolation policy of an upstream installation."""

    MULTI_TENANT = "multitenant"
    ISOLATED = "isolated"


class Edition(StrEnum):
    """Cloud edition a workspace is sold as."""

    FREE = "Cloud Free"
    PROFESSIONAL = "Cloud Professional"
    ENTERPRISE = "Cloud Enterprise"
