"""Query surfaces over resolved user records.

- ``escalations_by_identity`` — identity → project → gsudo roles.
- ``remote_access_by_identity`` — identity → Twingate access, enabled users only.

Both accept an optional identity filter. An unknown identity is not an
error: the result is empty and carries a warning.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Optional

from ..config import AccessConfig
from ..exceptions import ConfigurationError
from .models import AccessRecord
from .walker import resolve_all

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    """Result of a query plus non-fatal warnings."""

    data: dict[str, Any] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


def _filter(result: QueryResult, identity: Optional[str]) -> QueryResult:
    if not identity:
        return result
    if identity in result.data:
        return QueryResult(data={identity: result.data[identity]}, warnings=result.warnings)

    warning = f"identity '{identity}' not found, returning empty result"
    logger.warning(warning)
    return QueryResult(data={}, warnings=[*result.warnings, warning])


def escalations_by_identity(records: Iterable[AccessRecord], identity: Optional[str] = None) -> QueryResult:
    """Map every user identity to its effective escalations."""
    data = {
        record.identity: {project: list(roles) for project, roles in record.gsudo.escalations.items()}
        for record in records
    }
    return _filter(QueryResult(data=data), identity)


def remote_access_by_identity(records: Iterable[AccessRecord], identity: Optional[str] = None) -> QueryResult:
    """Map identities with Twingate enabled to ``{"enabled", "admin"}``."""
    data = {}
    for record in records:
        resolved = record.twingate.resolved()
        if resolved.enabled:
            data[record.identity] = resolved.model_dump()
    return _filter(QueryResult(data=data), identity)


def _records_for(config: AccessConfig) -> list[AccessRecord]:
    if not config.iam_path:
        raise ConfigurationError(
            "missing IAM path: set iam_path to the directory containing user and group definitions",
            operation="query",
        )
    return resolve_all(config.iam_path, config=config)


def query_escalations(config: AccessConfig, identity: Optional[str] = None) -> QueryResult:
    """Resolve ``config.iam_path`` and return its escalations."""
    return escalations_by_identity(_records_for(config), identity)


def query_remote_access(config: AccessConfig, identity: Optional[str] = None) -> QueryResult:
    """Resolve ``config.iam_path`` and return its Twingate access."""
    return remote_access_by_identity(_records_for(config), identity)


__all__ = [
    "QueryResult",
    "escalations_by_identity",
    "query_escalations",
    "query_remote_access",
    "remote_access_by_identity",
]
