"""HTTP implementation of the CloudClient protocol.

Talks to the provisioning server REST API with a blocking ``httpx.Client``.
The client owns a connection pool; create one per process and ``close()``
it on shutdown (the app lifespan does this).
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from pillar.api.cloud.base import CloudClientError
from pillar.api.models.cloud import (
    CloudGroup,
    ClusterInstallation,
    ClusterInstallationFilter,
    Installation,
    InstallationFilter,
)


class HTTPCloudClient:
    """Provisioning server client.

    ``timeout`` bounds every upstream call (connect, read, write, pool).
    ``transport`` is only meant for tests.
    """

    def __init__(
        self,
        address: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: float | None = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=address.rstrip("/"),
            headers=headers or {},
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> HTTPCloudClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # -- Installations ---------------------------------------------------------

    def get_installation(self, installation_id: str, *, include_group_config: bool = False) -> Installation | None:
        resp = self._client.get(
            f"/api/installation/{_segment(installation_id)}",
            params={"include_group_config": str(include_group_config).lower()},
        )
        if resp.status_code == httpx.codes.NOT_FOUND:
            return None
        _raise_for_status(resp)
        return Installation.model_validate(resp.json())

    def get_installations(self, request: InstallationFilter) -> list[Installation]:
        resp = self._client.get("/api/installations", params=request.to_params())
        _raise_for_status(resp)
        return [Installation.model_validate(item) for item in _json_list(resp)]

    # -- Cluster installations -------------------------------------------------

    def get_cluster_installations(self, request: ClusterInstallationFilter) -> list[ClusterInstallation]:
        resp = self._client.get("/api/cluster_installations", params=request.to_params())
        _raise_for_status(resp)
        return [ClusterInstallation.model_validate(item) for item in _json_list(resp)]

    def exec_cluster_installation_cli(self, cluster_installation_id: str, command: str, args: list[str]) -> bytes:
        logger.debug("Exec on cluster installation {}: {} {}", cluster_installation_id, command, " ".join(args))
        resp = self._client.post(
            f"/api/cluster_installation/{_segment(cluster_installation_id)}/exec/{_segment(command)}",
            json=args,
        )
        _raise_for_status(resp)
        return resp.content

    # -- Groups ----------------------------------------------------------------

    def get_group(self, group_id: str) -> CloudGroup | None:
        resp = self._client.get(f"/api/group/{_segment(group_id)}")
        if resp.status_code == httpx.codes.NOT_FOUND:
            return None
        _raise_for_status(resp)
        return CloudGroup.model_validate(resp.json())


def _raise_for_status(resp: httpx.Response) -> None:
    if resp.status_code != httpx.codes.OK:
        msg = f"failed with status code {resp.status_code}"
        raise CloudClientError(msg, status_code=resp.status_code)


def _json_list(resp: httpx.Response) -> list[Any]:
    """Decode a JSON array body.  A ``null`` body is an empty list."""
    data = resp.json()
    return data or []


def _segment(value: str) -> str:
    """Escape a value for use as a single URL path segment."""
    return quote(value, safe="")
