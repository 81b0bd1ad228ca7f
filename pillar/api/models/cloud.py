"""Upstream provisioning server data models.

These mirror the JSON documents returned by the provisioning server, whose
field names are PascalCase (``ID``, ``GroupID``, ...).  Only the fields
Pillar reads are declared; everything else in the payload is ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CloudModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Installation(_CloudModel):
    """An installation record (read-only snapshot)."""

    id: str = Field(alias="ID")
    owner_id: str = Field(default="", alias="OwnerID")
    group_id: str | None = Field(default=None, alias="GroupID")
    version: str = Field(default="", alias="Version")
    dns: str = Field(default="", alias="DNS")
    size: str = Field(default="", alias="Size")
    database: str = Field(default="", alias="Database")
    filestore: str = Field(default="", alias="Filestore")
    affinity: str = Field(default="", alias="Affinity")
    state: str = Field(default="", alias="State")
    create_at: int = Field(default=0, alias="CreateAt")
    delete_at: int = Field(default=0, alias="DeleteAt")


class ClusterInstallation(_CloudModel):
    """Placement of an installation inside a cluster."""

    id: str = Field(alias="ID")
    cluster_id: str = Field(default="", alias="ClusterID")
    installation_id: str = Field(default="", alias="InstallationID")
    namespace: str = Field(default="", alias="Namespace")
    state: str = Field(default="", alias="State")


class CloudGroup(_CloudModel):
    """An installation group."""

    id: str = Field(alias="ID")
    name: str = Field(default="", alias="Name")
    description: str = Field(default="", alias="Description")
    version: str = Field(default="", alias="Version")


# ---------------------------------------------------------------------------
# Request filters
# ---------------------------------------------------------------------------


class InstallationFilter(_CloudModel):
    """Criteria for listing installations.

    Doubles as the request body of ``POST /api/v1/workspaces/list``.  Keys
    are accepted both in the provisioning server's PascalCase form
    (``OwnerID``, ``PerPage``, ...) and by field name.
    """

    owner_id: str = Field(default="", alias="OwnerID")
    group_id: str = Field(default="", alias="GroupID")
    dns: str = Field(default="", alias="DNS")
    page: int = Field(default=0, ge=0, alias="Page")
    per_page: int = Field(default=100, ge=0, alias="PerPage")
    include_deleted: bool = Field(default=False, alias="IncludeDeleted")
    include_group_config: bool = Field(default=True, alias="IncludeGroupConfig")
    include_group_config_overrides: bool = Field(default=False, alias="IncludeGroupConfigOverrides")

    def to_params(self) -> dict[str, str | int]:
        """Render as provisioning server query parameters."""
        params: dict[str, str | int] = {
            "page": self.page,
            "per_page": self.per_page,
            "include_deleted": str(self.include_deleted).lower(),
            "include_group_config": str(self.include_group_config).lower(),
            "include_group_config_overrides": str(self.include_group_config_overrides).lower(),
        }
        if self.owner_id:
            params["owner"] = self.owner_id
        if self.group_id:
            params["group"] = self.group_id
        if self.dns:
            params["dns"] = self.dns
        return params


class ClusterInstallationFilter(BaseModel):
    """Criteria for listing cluster installations."""

    installation_id: str = ""
    cluster_id: str = ""
    page: int = 0
    per_page: int = 100
    include_deleted: bool = False

    def to_params(self) -> dict[str, str | int]:
        params: dict[str, str | int] = {
            "page": self.page,
            "per_page": self.per_page,
            "include_deleted": str(self.include_deleted).lower(),
        }
        if self.installation_id:
            params["installation"] = self.installation_id
        if self.cluster_id:
            params["cluster"] = self.cluster_id
        return params
