"""Inheritance of group access into user records.

Two policies, one per access domain:

- ``gsudo`` escalations are *merged*: with ``inherit: true`` the user gets
  the union of its own escalations and those of every group it belongs to.
- ``twingate`` access is *filled in*: only the first (primary) group is
  consulted, and a group value is adopted only where the user left the
  field unset. An explicit user value always wins.

The resolver does no file I/O; callers pass the already parsed group
records keyed by group name.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..exceptions import InheritanceError
from .constants import ENTITY_BEHAVIOURS
from .merge import merge_escalations
from .models import AccessRecord

logger = logging.getLogger(__name__)


def _ensure_inheritable(record: AccessRecord, operation: str) -> None:
    if not ENTITY_BEHAVIOURS[record.entity_type].can_inherit:
        raise InheritanceError(
            f"inheritance is only available for users, not {record.entity_type.value} {record.identity}",
            path=record.source_path,
            operation=operation,
            entity_type=record.entity_type.value,
        )


def _group(record: AccessRecord, groups: Mapping[str, AccessRecord], name: str, operation: str) -> AccessRecord:
    try:
        return groups[name]
    except KeyError:
        raise InheritanceError(
            f"group {name!r} of {record.identity} was not provided",
            path=record.source_path,
            operation=operation,
            group=name,
        ) from None


def required_groups(record: AccessRecord) -> list[str]:
    """Names of the groups needed to resolve ``record``.

    All groups when escalations are inherited, otherwise only the
    primary group for Twingate.
    """
    if record.gsudo.inherit:
        return list(record.groups)
    return record.groups[:1]


def inherit_escalations(record: AccessRecord, groups: Mapping[str, AccessRecord]) -> AccessRecord:
    """Merge the gsudo escalations of the user's groups into ``record``.

    No-op unless ``gsudo.inherit`` is set and the user belongs to at
    least one group. ``record`` is updated in place and returned.

    Raises:
        InheritanceError: ``record`` is not a user, or a group is missing from ``groups``.
    """
    _ensure_inheritable(record, "inherit_escalations")

    if not record.gsudo.inherit:
        return record

    escalations = record.gsudo.escalations
    for name in record.groups:
        group = _group(record, groups, name, "inherit_escalations")
        escalations = merge_escalations(escalations, group.gsudo.escalations)
    record.gsudo.escalations = escalations

    return record


def inherit_remote_access(record: AccessRecord, groups: Mapping[str, AccessRecord]) -> AccessRecord:
    """Fill unset Twingate fields of ``record`` from its primary group.

    ``admin`` is only taken from the group when the effective ``enabled``
    is true; when it is false, ``admin`` is forced to false.
    ``record`` is updated in place and returned.

    Raises:
        InheritanceError: ``record`` is not a user, or its primary group is missing from ``groups``.
    """
    _ensure_inheritable(record, "inherit_remote_access")

    name = record.primary_group
    if name is None:
        return record

    group = _group(record, groups, name, "inherit_remote_access").twingate
    access = record.twingate

    if access.enabled is None and group.enabled is not None:
        access.enabled = group.enabled

    if access.enabled is True:
        if access.admin is None and group.admin is not None:
            access.admin = group.admin
    elif access.enabled is False:
        access.admin = False

    return record


def resolve_inheritance(record: AccessRecord, groups: Mapping[str, AccessRecord]) -> AccessRecord:
    """Apply both inheritance policies to a user record."""
    inherit_escalations(record, groups)
    inherit_remote_access(record, groups)
    logger.debug(
        "Resolved %s: %d projects, twingate=%s",
        record.identity,
        len(record.gsudo.escalations),
        record.twingate.model_dump(),
    )
    return record


__all__ = [
    "inherit_escalations",
    "inherit_remote_access",
    "required_groups",
    "resolve_inheritance",
]
