"""Programmatic client for a Pillar server."""

from __future__ import annotations

import httpx

from pillar.api.models.api import Workspace, WorkspaceDetail
from pillar.api.models.cloud import InstallationFilter

DEFAULT_SERVER = "http://localhost:8078"


class PillarClientError(RuntimeError):
    """Raised when the Pillar server answers with a non-200 status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(f"failed with status code {status_code}" + (f": {message}" if message else ""))
        self.status_code = status_code


class PillarClient:
    """Blocking client for the Pillar API.

    Pass ``http_client`` to reuse an existing ``httpx.Client`` (for example a
    FastAPI ``TestClient``); otherwise one is created and owned by this object.
    """

    def __init__(
        self,
        address: str = DEFAULT_SERVER,
        *,
        headers: dict[str, str] | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._address = address.rstrip("/")
        self._headers = headers or {}
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client()

    def __enter__(self) -> PillarClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _url(self, path: str) -> str:
        return f"{self._address}{path}"

    def list_workspaces(self, request: InstallationFilter | None = None) -> list[Workspace]:
        """List workspaces that match the provided filter."""
        body = (request or InstallationFilter()).model_dump(by_alias=True)
        resp = self._client.post(self._url("/api/v1/workspaces/list"), json=body, headers=self._headers)
        _check(resp)
        return [Workspace.model_validate(item) for item in resp.json() or []]

    def get_workspace(self, workspace_id: str) -> WorkspaceDetail:
        """Fetch a single workspace with its group and configuration."""
        resp = self._client.get(self._url(f"/api/v1/workspaces/{workspace_id}"), headers=self._headers)
        _check(resp)
        return WorkspaceDetail.model_validate(resp.json())


def _check(resp: httpx.Response) -> None:
    if resp.status_code == httpx.codes.OK:
        return
    message = None
    if resp.content:
        try:
            message = resp.json().get("message")
        except (ValueError, AttributeError):
            message = None
    raise PillarClientError(resp.status_code, message)
