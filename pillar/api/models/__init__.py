"""Data models for the Pillar API."""

from pillar.api.models.api import ErrorResponse, Group, Workspace, WorkspaceDetail
from pillar.api.models.cloud import (
    CloudGroup,
    ClusterInstallation,
    ClusterInstallationFilter,
    Installation,
    InstallationFilter,
)
from pillar.api.models.enums import Edition, InstallationAffinity

__all__ = [
    # Upstream
    "CloudGroup",
    "ClusterInstallation",
    "ClusterInstallationFilter",
    # Enums
    "Edition",
    # API schemas
    "ErrorResponse",
    "Group",
    "Installation",
    "InstallationAffinity",
    "InstallationFilter",
    "Workspace",
    "WorkspaceDetail",
]
