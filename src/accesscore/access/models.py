"""Data models for access definition files and resolved access records.

These are Pydantic models. ``AccessFile`` mirrors the on-disk YAML layout:

.. code-block:: yaml

    gcp:
      groups: [data-eng]
    gsudo:
      inherit: true
      escalations:
        billing-prod: [roles/viewer, custom/auditor]
    twingate:
      enabled: true
      admin: false

``AccessRecord`` is the parsed, normalized form with the identity attached.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import EntityType


def _none_to_empty(v: Any) -> Any:
    # An empty YAML section ("gsudo:") decodes to None
    return {} if v is None else v


class GCPAccess(BaseModel):
    """Google Workspace group memberships."""

    model_config = {"extra": "ignore"}

    groups: list[str] = Field(default_factory=list)

    @field_validator("groups", mode="before")
    @classmethod
    def validate_groups(cls, v: Any) -> Any:
        return [] if v is None else v


class EscalationAccess(BaseModel):
    """gsudo escalations: project name → roles a user may escalate to."""

    model_config = {"extra": "ignore"}

    escalations: dict[str, list[str]] = Field(default_factory=dict)
    inherit: bool = False

    @field_validator("escalations", mode="before")
    @classmethod
    def validate_escalations(cls, v: Any) -> Any:
        if v is None:
            return {}
        if isinstance(v, dict):
            return {project: ([] if roles is None else roles) for project, roles in v.items()}
        return v


class ResolvedRemoteAccess(BaseModel):
    """Twingate access with every field decided."""

    enabled: bool = False
    admin: bool = False


class RemoteAccess(BaseModel):
    """Twingate access.

    Both fields are tri-state: ``None`` means "not specified", which is
    different from an explicit ``False`` when inheriting from a group.
    """

    model_config = {"extra": "ignore"}

    enabled: Optional[bool] = None
    admin: Optional[bool] = None

    def resolved(self) -> ResolvedRemoteAccess:
        """Collapse unset fields to False. Admin requires enabled."""
        enabled = bool(self.enabled)
        return ResolvedRemoteAccess(enabled=enabled, admin=enabled and bool(self.admin))


class AccessFile(BaseModel):
    """Raw content of a definition file. Unknown sections are ignored."""

    model_config = {"extra": "ignore"}

    gcp: GCPAccess = Field(default_factory=GCPAccess)
    gsudo: EscalationAccess = Field(default_factory=EscalationAccess)
    twingate: RemoteAccess = Field(default_factory=RemoteAccess)

    @field_validator("gcp", "gsudo", "twingate", mode="before")
    @classmethod
    def validate_sections(cls, v: Any) -> Any:
        return _none_to_empty(v)


class AccessRecord(BaseModel):
    """Parsed access definition of one entity.

    ``gsudo`` and ``twingate`` of a user record are filled in by the
    inheritance resolver; everything else is fixed at parse time.
    """

    identity: str = Field(frozen=True)
    entity_type: EntityType = Field(frozen=True)
    groups: list[str] = Field(default_factory=list)
    gsudo: EscalationAccess = Field(default_factory=EscalationAccess)
    twingate: RemoteAccess = Field(default_factory=RemoteAccess)
    source_path: str = Field(default="", exclude=True)

    @property
    def escalations(self) -> dict[str, list[str]]:
        return self.gsudo.escalations

    @property
    def primary_group(self) -> Optional[str]:
        """First declared group, the only one consulted for Twingate."""
        return self.groups[0] if self.groups else None


__all__ = [
    "AccessFile",
    "AccessRecord",
    "EscalationAccess",
    "GCPAccess",
    "RemoteAccess",
    "ResolvedRemoteAccess",
]
