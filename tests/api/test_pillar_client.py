"""Integration tests: PillarClient talking to the app in-process."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from pillar.api.cloud.base import CloudClientError
from pillar.api.models.cloud import CloudGroup, ClusterInstallation, Installation, InstallationFilter
from pillar.client import PillarClient, PillarClientError


@pytest.fixture
def pillar(client: TestClient) -> PillarClient:
    return PillarClient("http://testserver", http_client=client)


@pytest.mark.integration
def test_list_workspaces(pillar: PillarClient, cloud_client: MagicMock) -> None:
    cloud_client.get_installations.return_value = [Installation(id="1234", dns="joram.cloud.mattermost.com")]

    workspaces = pillar.list_workspaces(InstallationFilter(dns="joram.cloud.mattermost.com"))

    assert len(workspaces) == 1
    assert workspaces[0].id == "1234"
    (request,), _ = cloud_client.get_installations.call_args
    assert request.dns == "joram.cloud.mattermost.com"


@pytest.mark.integration
def test_list_workspaces_error(pillar: PillarClient, cloud_client: MagicMock) -> None:
    cloud_client.get_installations.side_effect = CloudClientError("some error")

    with pytest.raises(PillarClientError) as exc_info:
        pillar.list_workspaces()

    assert exc_info.value.status_code == 500
    assert "some error" in str(exc_info.value)


@pytest.mark.integration
def test_get_workspace(pillar: PillarClient, cloud_client: MagicMock) -> None:
    cloud_client.get_installation.return_value = Installation(id="installationid", group_id="groupid")
    cloud_client.get_cluster_installations.return_value = [ClusterInstallation(id="clusterinstallationid")]
    cloud_client.exec_cluster_installation_cli.return_value = b'{"ServiceSettings":{}}'
    cloud_client.get_group.return_value = CloudGroup(id="groupid")

    workspace = pillar.get_workspace("installationid")

    assert workspace.id == "installationid"
    assert workspace.group is not None
    assert workspace.group.id == "groupid"
    assert "ServiceSettings" in workspace.config


@pytest.mark.integration
def test_get_workspace_not_found(pillar: PillarClient, cloud_client: MagicMock) -> None:
    cloud_client.get_installation.return_value = None

    with pytest.raises(PillarClientError, match="failed with status code 404") as exc_info:
        pillar.get_workspace("installationid")
    assert exc_info.value.status_code == 404


@pytest.mark.integration
def test_close_does_not_close_borrowed_client(pillar: PillarClient, client: TestClient) -> None:
    pillar.close()
    assert client.is_closed is False


def test_list_workspaces_sends_pascal_case_filter() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    with PillarClient("http://pillar", http_client=http_client) as pillar:
        assert pillar.list_workspaces(InstallationFilter(owner_id="owner", per_page=5)) == []

    body = json.loads(seen[0].content)
    assert body["OwnerID"] == "owner"
    assert body["PerPage"] == 5
    assert "owner_id" not in body
