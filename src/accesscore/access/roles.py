"""Expansion of shorthand custom role references.

``custom/<name>`` under project ``p`` becomes ``projects/p/roles/<name>``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .constants import CUSTOM_ROLE_PREFIX, PROJECT_ROLE_TEMPLATE


def expand_role(project: str, role: str) -> str:
    """Expand a single role reference for ``project``.

    The prefix is sliced off as-is, so ``custom/`` alone expands to
    ``projects/<project>/roles/`` rather than failing.

    Example::

        >>> expand_role("billing", "custom/auditor")
        'projects/billing/roles/auditor'
        >>> expand_role("billing", "roles/viewer")
        'roles/viewer'
    """
    if role.startswith(CUSTOM_ROLE_PREFIX):
        return PROJECT_ROLE_TEMPLATE.format(project=project, name=role[len(CUSTOM_ROLE_PREFIX) :])
    return role


def normalize_roles(escalations: Mapping[str, Sequence[str]]) -> dict[str, list[str]]:
    """Expand every ``custom/`` role in a project → roles mapping.

    Returns a new mapping; the input is left untouched. Order and
    duplicates within each list are preserved.

    Args:
        escalations: Project name → declared role strings.

    Returns:
        Project name → role strings with shorthand expanded.
    """
    return {project: [expand_role(project, role) for role in roles] for project, roles in escalations.items()}


__all__ = [
    "expand_role",
    "normalize_roles",
]
