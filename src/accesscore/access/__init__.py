"""Access resolution for file-based IAM definitions.

Defines:
- EntityType: user / group / service, with per-type directory and rules
- classify() / derive_identity(): entity type and email from a file path
- normalize_roles(): ``custom/<name>`` → ``projects/<p>/roles/<name>``
- merge_escalations(): deduplicating union of project → roles mappings
- parse_access_record() / load_access_record(): YAML → AccessRecord
- inherit_escalations() / inherit_remote_access(): group inheritance
- resolve_all(): every user of an IAM directory
- escalations_by_identity() / remote_access_by_identity(): query surfaces
"""

from .classify import classify, derive_identity
from .constants import ENTITY_BEHAVIOURS, EntityBehaviour, EntityType
from .inheritance import (
    inherit_escalations,
    inherit_remote_access,
    required_groups,
    resolve_inheritance,
)
from .merge import dedup_roles, merge_escalations
from .models import (
    AccessFile,
    AccessRecord,
    EscalationAccess,
    GCPAccess,
    RemoteAccess,
    ResolvedRemoteAccess,
)
from .parser import load_access_record, parse_access_record, read_access_file
from .queries import (
    QueryResult,
    escalations_by_identity,
    query_escalations,
    query_remote_access,
    remote_access_by_identity,
)
from .roles import expand_role, normalize_roles
from .walker import GroupLoader, list_user_files, resolve_all, resolve_user, resolve_user_file

__all__ = [
    "ENTITY_BEHAVIOURS",
    "AccessFile",
    "AccessRecord",
    "EntityBehaviour",
    "EntityType",
    "EscalationAccess",
    "GCPAccess",
    "GroupLoader",
    "QueryResult",
    "RemoteAccess",
    "ResolvedRemoteAccess",
    "classify",
    "dedup_roles",
    "derive_identity",
    "escalations_by_identity",
    "expand_role",
    "inherit_escalations",
    "inherit_remote_access",
    "list_user_files",
    "load_access_record",
    "merge_escalations",
    "normalize_roles",
    "parse_access_record",
    "query_escalations",
    "query_remote_access",
    "read_access_file",
    "remote_access_by_identity",
    "required_groups",
    "resolve_all",
    "resolve_inheritance",
    "resolve_user",
    "resolve_user_file",
]
