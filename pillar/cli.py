import json

import click
import httpx

from pillar.api.models.cloud import InstallationFilter
from pillar.client import DEFAULT_SERVER, PillarClient, PillarClientError


@click.group(invoke_without_command=True)
@click.pass_context
def main(ctx: click.Context) -> None:
    """Pillar - customer support service for viewing cloud workspaces."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(server)


@main.command()
@click.option("--host", default=None, help="Bind host (default: from PILLAR_HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Bind port (default: from PILLAR_PORT or 8078).")
@click.option(
    "--cloud-url",
    default=None,
    help="Endpoint where the cloud provisioning server can be reached (include the scheme and port number). "
    "ENV: PILLAR_CLOUD_URL",
)
@click.option("--debug", is_flag=True, default=False, help="Whether to output debug logs.")
@click.option("--dev", is_flag=True, default=False, help="Run in dev mode.")
def server(host: str | None, port: int | None, cloud_url: str | None, debug: bool, dev: bool) -> None:
    """Run the customer web server."""
    import uvicorn

    from pillar.api.app import create_app
    from pillar.api.settings import PillarSettings

    updates: dict[str, object] = {}
    if host:
        updates["host"] = host
    if port:
        updates["port"] = port
    if cloud_url:
        updates["cloud_url"] = cloud_url
    if debug:
        updates["log_level"] = "DEBUG"
    if dev:
        updates["dev"] = True
    settings = PillarSettings().model_copy(update=updates)

    if not settings.cloud_url:
        msg = "a hostname and port number where a cloud provisioner endpoint can be found are required"
        raise click.UsageError(msg)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
        timeout_graceful_shutdown=settings.graceful_shutdown_timeout,
    )


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------


def _print_json(data: object) -> None:
    click.echo(json.dumps(data, indent=2))


@main.group()
@click.option("--server", "server_address", default=DEFAULT_SERVER, help="The pillar server whose API will be queried.")
@click.pass_context
def workspace(ctx: click.Context, server_address: str) -> None:
    """View workspaces."""
    ctx.obj = server_address


@workspace.command("list")
@click.option("--owner", default="", help="The owner by which to filter workspaces.")
@click.option("--group", default="", help="The group ID by which to filter workspaces.")
@click.option("--page", default=0, type=int, help="The page of workspaces to fetch, starting at 0.")
@click.option("--per-page", default=100, type=int, help="The number of workspaces to fetch per page.")
@click.option("--include-deleted", is_flag=True, default=False, help="Whether to include deleted workspaces.")
@click.option("--dns", default="", help="The dns to filter results by.")
@click.pass_obj
def list_workspaces(
    server_address: str,
    owner: str,
    group: str,
    page: int,
    per_page: int,
    include_deleted: bool,
    dns: str,
) -> None:
    """List workspaces."""
    request = InstallationFilter(
        owner_id=owner,
        group_id=group,
        dns=dns,
        page=page,
        per_page=per_page,
        include_deleted=include_deleted,
        include_group_config=True,
        include_group_config_overrides=False,
    )
    with PillarClient(server_address) as client:
        try:
            workspaces = client.list_workspaces(request)
        except (PillarClientError, httpx.HTTPError) as exc:
            msg = f"failed to query workspaces: {exc}"
            raise click.ClickException(msg) from exc

    _print_json([w.model_dump(mode="json") for w in workspaces])


@workspace.command("get")
@click.option("--id", "workspace_id", required=True, help="ID of the workspace to get.")
@click.pass_obj
def get_workspace(server_address: str, workspace_id: str) -> None:
    """Get a workspace."""
    with PillarClient(server_address) as client:
        try:
            detail = client.get_workspace(workspace_id)
        except (PillarClientError, httpx.HTTPError) as exc:
            msg = f"failed to fetch workspace: {exc}"
            raise click.ClickException(msg) from exc

    _print_json(detail.model_dump(mode="json"))


if __name__ == "__main__":
    main()
