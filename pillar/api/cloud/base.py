"""Provisioning server client interface.

The API reaches the cloud provisioning server only through this protocol.
Calls are synchronous and blocking; callers in async code offload them to a
worker thread.  ``None`` results mean "not found" and are not errors.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pillar.api.models.cloud import (
    CloudGroup,
    ClusterInstallation,
    ClusterInstallationFilter,
    Installation,
    InstallationFilter,
)


class CloudClientError(RuntimeError):
    """Raised when the provisioning server answers with an unexpected status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class CloudClient(Protocol):
    """Synchronous protocol for the subset of the provisioning API Pillar uses."""

    def get_installation(self, installation_id: str, *, include_group_config: bool = False) -> Installation | None:
        """Fetch one installation.  Returns ``None`` if it does not exist."""
        ...

    def get_installations(self, request: InstallationFilter) -> list[Installation]:
        """List installations matching the filter."""
        ...

    def get_cluster_installations(self, request: ClusterInstallationFilter) -> list[ClusterInstallation]:
        """List cluster installations matching the filter."""
        ...

    def exec_cluster_installation_cli(self, cluster_installation_id: str, command: str, args: list[str]) -> bytes:
        """Run a CLI command inside a cluster installation and return its raw output."""
        ...

    def get_group(self, group_id: str) -> CloudGroup | None:
        """Fetch one group.  Returns ``None`` if it does not exist."""
        ...
