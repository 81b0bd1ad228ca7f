"""Workspace endpoints (RPC-style).

Listing is a POST because the filter travels in the body; reads use GET.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, HTTPException, Response, status

from pillar.api.context import RequestContext
from pillar.api.deps import Context
from pillar.api.managers import workspaces
from pillar.api.models.api import ErrorResponse, Workspace, WorkspaceDetail
from pillar.api.models.cloud import InstallationFilter

router = APIRouter(prefix="/workspaces", tags=["workspaces"])

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def _internal_error(ctx: RequestContext, exc: Exception) -> HTTPException:
    ctx.logger.error("{}", exc)
    return HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.post("/list", response_model=list[Workspace], responses=_ERROR_RESPONSES)
async def list_workspaces(
    ctx: Context,
    body: Annotated[InstallationFilter | None, Body()] = None,
) -> list[Workspace]:
    """List workspaces that match the filters.  An empty body lists with defaults."""
    try:
        return await workspaces.list_workspaces(ctx, body or InstallationFilter())
    except Exception as exc:
        raise _internal_error(ctx, exc) from exc


@router.get(
    "/{workspace_id}",
    response_model=WorkspaceDetail,
    responses={
        status.HTTP_404_NOT_FOUND: {"description": "No installation with this ID (empty body)."},
        **_ERROR_RESPONSES,
    },
)
async def get_workspace(workspace_id: str, ctx: Context) -> WorkspaceDetail | Response:
    """Get a workspace together with its group and live configuration."""
    ctx = ctx.with_fields(workspace=workspace_id)
    try:
        return await workspaces.fetch_workspace_detail(ctx, workspace_id)
    except workspaces.WorkspaceNotFoundError:
        ctx.logger.debug("Workspace not found")
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    except Exception as exc:
        raise _internal_error(ctx, exc) from exc
