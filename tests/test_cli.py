"""Tests for the pillar command line."""

from __future__ import annotations

import json
from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from pillar.api.models.api import Group, Workspace, WorkspaceDetail
from pillar.cli import main
from pillar.client import PillarClientError


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def client_cls() -> Iterator[MagicMock]:
    """Patched PillarClient class used by the CLI."""
    with patch("pillar.cli.PillarClient") as cls:
        yield cls


@pytest.fixture
def pillar_client(client_cls: MagicMock) -> MagicMock:
    """The PillarClient instance the CLI will use."""
    return client_cls.return_value.__enter__.return_value


def test_workspace_list(runner: CliRunner, client_cls: MagicMock, pillar_client: MagicMock) -> None:
    pillar_client.list_workspaces.return_value = [Workspace(id="1"), Workspace(id="2")]

    result = runner.invoke(
        main,
        ["workspace", "--server", "http://pillar:8078", "list", "--owner", "o", "--per-page", "5", "--include-deleted"],
    )

    assert result.exit_code == 0, result.output
    assert [w["id"] for w in json.loads(result.output)] == ["1", "2"]
    client_cls.assert_called_once_with("http://pillar:8078")
    (request,), _ = pillar_client.list_workspaces.call_args
    assert request.owner_id == "o"
    assert request.per_page == 5
    assert request.include_deleted is True
    assert request.include_group_config is True


def test_workspace_list_error(runner: CliRunner, pillar_client: MagicMock) -> None:
    pillar_client.list_workspaces.side_effect = PillarClientError(500)

    result = runner.invoke(main, ["workspace", "list"])

    assert result.exit_code == 1
    assert "failed to query workspaces: failed with status code 500" in result.output


def test_workspace_get(runner: CliRunner, pillar_client: MagicMock) -> None:
    pillar_client.get_workspace.return_value = WorkspaceDetail(
        id="id1", group=Group(id="g1"), config={"ServiceSettings": {}}
    )

    result = runner.invoke(main, ["workspace", "get", "--id", "id1"])

    assert result.exit_code == 0, result.output
    body = json.loads(result.output)
    assert body["id"] == "id1"
    assert body["group"]["id"] == "g1"
    assert body["config"] == {"ServiceSettings": {}}
    pillar_client.get_workspace.assert_called_once_with("id1")


def test_workspace_get_requires_id(runner: CliRunner, pillar_client: MagicMock) -> None:
    result = runner.invoke(main, ["workspace", "get"])

    assert result.exit_code == 2
    pillar_client.get_workspace.assert_not_called()


def test_workspace_get_error(runner: CliRunner, pillar_client: MagicMock) -> None:
    pillar_client.get_workspace.side_effect = PillarClientError(404)

    result = runner.invoke(main, ["workspace", "get", "--id", "missing"])

    assert result.exit_code == 1
    assert "failed to fetch workspace" in result.output


def test_server_requires_cloud_url(runner: CliRunner) -> None:
    with patch("uvicorn.run") as run:
        result = runner.invoke(main, ["server"], env={"PILLAR_CLOUD_URL": ""})

    assert result.exit_code == 2
    assert "cloud provisioner" in result.output
    run.assert_not_called()


def test_server_runs_uvicorn(runner: CliRunner) -> None:
    with patch("uvicorn.run") as run:
        result = runner.invoke(
            main,
            ["server", "--cloud-url", "http://provisioner:8075", "--port", "9999", "--debug"],
            env={"PILLAR_CLOUD_URL": ""},
        )

    assert result.exit_code == 0, result.output
    (app,), kwargs = run.call_args
    assert app.state.settings.cloud_url == "http://provisioner:8075"
    assert app.state.settings.log_level == "DEBUG"
    assert kwargs["port"] == 9999
