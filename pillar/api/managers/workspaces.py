"""Workspace read operations.

A workspace is Pillar's support-facing view of a provisioning server
installation.  Listing is a plain translation of one upstream call.  Fetching
a single workspace aggregates three upstream sources:

1. the installation itself (sequential; nothing else runs without it),
2. its live configuration, read by running ``mmctl config show`` inside the
   first cluster installation, and
3. its group.

Steps 2 and 3 are independent and run in parallel worker threads.  Each
branch records its outcome in its own slot and never raises into the task
group, so a failing branch cannot cancel its sibling and the join always
waits for both.  Errors are then checked in a fixed order, config first,
group second; only the first one found is raised.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import anyio
from anyio import to_thread

from pillar.api.models.api import Group, Workspace, WorkspaceDetail
from pillar.api.models.cloud import ClusterInstallationFilter
from pillar.api.models.enums import Edition, InstallationAffinity

if TYPE_CHECKING:
    from collections.abc import Callable

    from pillar.api.cloud.base import CloudClient
    from pillar.api.context import RequestContext
    from pillar.api.models.cloud import CloudGroup, Installation, InstallationFilter

CONFIG_COMMAND = "mmctl"
CONFIG_COMMAND_ARGS = ("config", "show", "--local")
CLUSTER_INSTALLATION_PAGE_SIZE = 1000

T = TypeVar("T")


class WorkspaceNotFoundError(LookupError):
    """Raised when the provisioning server has no installation with the given ID."""


class WorkspaceLookupError(RuntimeError):
    """Raised when the installation itself could not be fetched."""


class NoClusterInstallationError(RuntimeError):
    """Raised when an installation has no cluster installation to read config from."""


class ConfigDecodeError(ValueError):
    """Raised when the config dump is not a JSON object."""


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


def edition_for_affinity(affinity: str) -> Edition:
    """Isolated installations are Enterprise; everything else is Professional."""
    if affinity == InstallationAffinity.ISOLATED:
        return Edition.ENTERPRISE
    return Edition.PROFESSIONAL


def convert_installation_to_workspace(installation: Installation | None) -> Workspace | None:
    if installation is None:
        return None

    return Workspace(
        id=installation.id,
        group_id=installation.group_id or "",
        version=installation.version,
        dns=installation.dns,
        size=installation.size,
        database=installation.database,
        filestore=installation.filestore,
        create_at=installation.create_at,
        delete_at=installation.delete_at,
        edition=edition_for_affinity(installation.affinity),
    )


def convert_installations_to_workspaces(installations: list[Installation] | None) -> list[Workspace]:
    return [convert_installation_to_workspace(installation) for installation in installations or []]


def convert_cloud_group_to_group(cloud_group: CloudGroup | None) -> Group | None:
    if cloud_group is None:
        return None

    return Group(id=cloud_group.id, name=cloud_group.name, description=cloud_group.description)


def decode_config(output: bytes) -> dict[str, Any]:
    """Decode a config dump.

    A JSON ``null`` decodes to an empty mapping.  Raises ``ConfigDecodeError``
    for anything else that is not a JSON object.
    """
    try:
        config = json.loads(output)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"failed to decode config output: {exc}"
        raise ConfigDecodeError(msg) from exc
    if config is None:
        return {}
    if not isinstance(config, dict):
        msg = f"config output is a JSON {type(config).__name__}, expected an object"
        raise ConfigDecodeError(msg)
    return config


def get_config_for_cluster_installation(client: CloudClient, cluster_installation_id: str) -> dict[str, Any]:
    """Dump the live configuration of one cluster installation."""
    output = client.exec_cluster_installation_cli(cluster_installation_id, CONFIG_COMMAND, list(CONFIG_COMMAND_ARGS))
    return decode_config(output)


# ---------------------------------------------------------------------------
# Branches (run in worker threads)
# ---------------------------------------------------------------------------


def _fetch_config(client: CloudClient, installation_id: str) -> dict[str, Any]:
    cluster_installations = client.get_cluster_installations(
        ClusterInstallationFilter(installation_id=installation_id, per_page=CLUSTER_INSTALLATION_PAGE_SIZE)
    )
    if not cluster_installations:
        msg = "workspace does not have a cluster installation"
        raise NoClusterInstallationError(msg)

    return get_config_for_cluster_installation(client, cluster_installations[0].id)


def _fetch_group(client: CloudClient, group_id: str) -> Group | None:
    if not group_id:
        return None
    return convert_cloud_group_to_group(client.get_group(group_id))


@dataclass
class _Outcome(Generic[T]):
    """Single-slot result of one branch: a value or the exception it raised."""

    value: T | None = None
    error: Exception | None = None


async def _run_branch(slot: _Outcome[T], func: Callable[[], T]) -> None:
    try:
        slot.value = await to_thread.run_sync(func)
    except Exception as exc:  # noqa: BLE001 - surfaced by the caller after the join
        slot.error = exc


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


async def list_workspaces(ctx: RequestContext, request: InstallationFilter) -> list[Workspace]:
    """List workspaces matching the filter, in upstream order."""
    installations = await to_thread.run_sync(partial(ctx.cloud_client.get_installations, request))
    ctx.logger.debug("Listed {} installations", len(installations))
    return convert_installations_to_workspaces(installations)


async def fetch_workspace_detail(ctx: RequestContext, workspace_id: str) -> WorkspaceDetail:
    """Fetch a workspace with its group and live configuration.

    Raises ``WorkspaceNotFoundError`` if the installation does not exist,
    ``WorkspaceLookupError`` if it could not be fetched, and otherwise the
    first branch error in config-then-group order.
    """
    client = ctx.cloud_client

    try:
        installation = await to_thread.run_sync(
            partial(client.get_installation, workspace_id, include_group_config=True)
        )
    except Exception as exc:
        msg = f"failed to get installation {workspace_id}: {exc}"
        raise WorkspaceLookupError(msg) from exc
    if installation is None:
        raise WorkspaceNotFoundError(workspace_id)

    workspace = convert_installation_to_workspace(installation)

    config: _Outcome[dict[str, Any]] = _Outcome()
    group: _Outcome[Group | None] = _Outcome()
    async with anyio.create_task_group() as tg:
        tg.start_soon(_run_branch, config, partial(_fetch_config, client, workspace.id))
        tg.start_soon(_run_branch, group, partial(_fetch_group, client, workspace.group_id))

    if config.error is not None:
        raise config.error
    if group.error is not None:
        raise group.error

    ctx.logger.debug("Fetched workspace detail (group={})", workspace.group_id or None)
    return WorkspaceDetail(
        **workspace.model_dump(),
        group=group.value,
        config=config.value or {},
    )
