"""API response schemas.

These are the documents Pillar hands to the support team: a view of an
installation without its sensitive fields, plus the related data that is
useful when answering a ticket.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from pillar.api.models.enums import Edition


class Workspace(BaseModel):
    """Summary of an installation, as listed."""

    id: str
    group_id: str = ""
    version: str = ""
    dns: str = ""
    size: str = ""
    database: str = ""
    filestore: str = ""
    create_at: int = 0
    delete_at: int = 0
    edition: Edition = Edition.PROFESSIONAL


class Group(BaseModel):
    """Installation group without its configuration payload."""

    id: str
    name: str = ""
    description: str = ""


class WorkspaceDetail(Workspace):
    """A workspace together with its group and live configuration."""

    group: Group | None = None
    config: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Body of every non-2xx response that carries one."""

    message: str
