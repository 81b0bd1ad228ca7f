"""Provisioning server clients."""

from pillar.api.cloud.base import CloudClient, CloudClientError
from pillar.api.cloud.http import HTTPCloudClient

__all__ = ["CloudClient", "CloudClientError", "HTTPCloudClient"]
