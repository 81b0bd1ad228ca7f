"""Static endpoints served outside the ``/api`` prefix."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["static"])

ROBOTS_TXT = "User-agent: *\nDisallow: /\n"


@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots() -> str:
    """Keep crawlers away from the support tool."""
    return ROBOTS_TXT
