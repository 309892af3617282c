"""Reading and parsing of access definition files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..exceptions import AccessIOError, AccessParseError, EmptyFileError
from ..logging import safe_preview
from .classify import classify, derive_identity
from .constants import DEFAULT_EMAIL_DOMAIN, DEFAULT_GROUP_PREFIX, EntityType
from .models import AccessFile, AccessRecord
from .roles import normalize_roles

logger = logging.getLogger(__name__)


def read_access_file(path: str | os.PathLike[str]) -> bytes:
    """Read a definition file.

    Raises:
        AccessIOError: The file can't be read.
        EmptyFileError: The file has no content.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise AccessIOError(
            f"error reading file {path}: {e}",
            path=str(path),
            operation="read",
        ) from e
    if not data:
        raise EmptyFileError(f"file {path} is empty", path=str(path), operation="read")
    return data


def parse_access_record(
    data: bytes | str,
    path: str | os.PathLike[str],
    *,
    email_domain: str = DEFAULT_EMAIL_DOMAIN,
    group_prefix: str = DEFAULT_GROUP_PREFIX,
) -> AccessRecord:
    """Parse the content of one definition file into an AccessRecord.

    The entity type and identity come from ``path``; the sections from
    ``data``. Missing sections default to empty, Twingate fields stay
    unset, and ``custom/`` roles are expanded. Duplicate roles within a
    declared list are kept as written.

    Args:
        data: Raw YAML content.
        path: Path the content was read from (need not exist on disk).
        email_domain: Domain used for the identity.
        group_prefix: Prefix used for group identities.

    Raises:
        EmptyFileError: ``data`` is empty or decodes to nothing.
        AccessParseError: ``data`` is not a valid definition.
        ClassificationError: ``path`` is not under a known entity directory.
        IdentityError: No identity can be derived from ``path``.
    """
    if not data or not data.strip():
        raise EmptyFileError(f"file {path} is empty", path=str(path), operation="parse")

    entity_type = classify(path)
    identity = derive_identity(path, entity_type, email_domain=email_domain, group_prefix=group_prefix)

    try:
        content = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise AccessParseError(
            f"error unmarshaling IAM file {path}: {e}",
            path=str(path),
            operation="parse",
        ) from e

    if content is None:
        raise EmptyFileError(f"file {path} has no content", path=str(path), operation="parse")
    if not isinstance(content, dict):
        raise AccessParseError(
            f"IAM file {path} must contain a mapping, got {type(content).__name__}: {safe_preview(data, limit=80)}",
            path=str(path),
            operation="parse",
        )

    try:
        access = AccessFile.model_validate(content)
    except ValidationError as e:
        raise AccessParseError(
            f"invalid IAM file {path}: {e}",
            path=str(path),
            operation="parse",
        ) from e

    groups = access.gcp.groups
    if entity_type is not EntityType.USER and groups:
        logger.warning("Ignoring group memberships declared by %s %s", entity_type.value, path)
        groups = []

    access.gsudo.escalations = normalize_roles(access.gsudo.escalations)

    return AccessRecord(
        identity=identity,
        entity_type=entity_type,
        groups=groups,
        gsudo=access.gsudo,
        twingate=access.twingate,
        source_path=str(path),
    )


def load_access_record(
    path: str | os.PathLike[str],
    *,
    email_domain: str = DEFAULT_EMAIL_DOMAIN,
    group_prefix: str = DEFAULT_GROUP_PREFIX,
) -> AccessRecord:
    """Read and parse a definition file in one step."""
    return parse_access_record(
        read_access_file(path),
        path,
        email_domain=email_domain,
        group_prefix=group_prefix,
    )


__all__ = [
    "load_access_record",
    "parse_access_record",
    "read_access_file",
]
