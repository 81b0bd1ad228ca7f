"""FastAPI dependency injection for the request context.

Usage in route handlers::

    @router.get("/things/{thing_id}")
    async def get_thing(thing_id: str, ctx: Context) -> ThingResponse:
        ...

The dependency raises HTTP 503 if no provisioning client was configured
(PILLAR_CLOUD_URL unset).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from loguru import logger

from pillar.api.cloud.base import CloudClient
from pillar.api.context import RequestContext, new_id


def get_cloud_client(request: Request) -> CloudClient:
    """Return the shared provisioning client."""
    client: CloudClient | None = getattr(request.app.state, "cloud_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Provisioner not configured (PILLAR_CLOUD_URL is unset).",
        )
    return client


def get_request_context(
    request: Request,
    cloud_client: Annotated[CloudClient, Depends(get_cloud_client)],
) -> RequestContext:
    """Build the context for this request.

    The request id is assigned by the request-id middleware; it is only
    generated here when the middleware did not run.
    """
    request_id = getattr(request.state, "request_id", None) or new_id()
    return RequestContext(
        request_id=request_id,
        logger=logger.bind(path=request.url.path, request=request_id),
        cloud_client=cloud_client,
    )


# -- Annotated type aliases for concise route signatures ---------------------

Context = Annotated[RequestContext, Depends(get_request_context)]
"""Annotated dependency: request-scoped context."""
