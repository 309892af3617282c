"""Entity classification and identity derivation from file paths.

The parent directory of a definition file decides its entity type
(``users/`` → USER, ``groups/`` → GROUP, ``service-accounts/`` → SERVICE),
and the file name decides its identity:

- ``users/marie-josette_doe.yml`` → ``marie-josette.doe@ravelin.com``
- ``groups/data.yml``             → ``gcp-data@ravelin.com``
"""

from __future__ import annotations

import os
from pathlib import Path

from ..exceptions import ClassificationError, IdentityError
from .constants import (
    DEFAULT_EMAIL_DOMAIN,
    DEFAULT_GROUP_PREFIX,
    DIRECTORY_TO_ENTITY,
    ENTITY_BEHAVIOURS,
    EntityType,
)


def classify(path: str | os.PathLike[str]) -> EntityType:
    """Determine the entity type of a definition file.

    Only the immediate parent directory is considered, and it must match
    a known directory name exactly.

    Raises:
        ClassificationError: The parent directory is not a known entity directory.
    """
    parent = Path(path).parent.name
    try:
        return DIRECTORY_TO_ENTITY[parent]
    except KeyError:
        raise ClassificationError(
            f"unable to determine type of file {path}: parent directory {parent!r} "
            f"is not one of {sorted(DIRECTORY_TO_ENTITY)}",
            path=str(path),
            operation="classify",
        ) from None


def _file_stem(path: str | os.PathLike[str], expected: str) -> str:
    parts = Path(path).name.split(".")
    if len(parts) != 2 or not parts[0]:
        raise IdentityError(
            f"invalid file name {path}, expected format: {expected}",
            path=str(path),
            operation="derive_identity",
        )
    return parts[0]


def derive_identity(
    path: str | os.PathLike[str],
    entity_type: EntityType,
    *,
    email_domain: str = DEFAULT_EMAIL_DOMAIN,
    group_prefix: str = DEFAULT_GROUP_PREFIX,
) -> str:
    """Derive the email identity of an entity from its file name.

    Args:
        path: Definition file path; only the file name is used.
        entity_type: Type returned by :func:`classify`.
        email_domain: Domain appended after ``@``.
        group_prefix: Prefix of group identities.

    Raises:
        IdentityError: The file name is not ``<stem>.<ext>``, or the entity
            type has no identity (service accounts).
    """
    if not ENTITY_BEHAVIOURS[entity_type].has_identity:
        raise IdentityError(
            f"service accounts are not yet supported: {path}",
            path=str(path),
            operation="derive_identity",
            entity_type=entity_type.value,
        )

    if entity_type is EntityType.USER:
        stem = _file_stem(path, "<name>_<surname>.yml")
        return f"{stem.replace('_', '.')}@{email_domain}"

    stem = _file_stem(path, "<group-name>.yml")
    return f"{group_prefix}{stem}@{email_domain}"


__all__ = [
    "classify",
    "derive_identity",
]
