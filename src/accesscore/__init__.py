from .config import AccessConfig, ErrorPolicy, LogLevel, load_access_config_from_env
from .logging import (
    AccessLogFormatter,
    AccessLoggerAdapter,
    get_access_logger,
    safe_preview,
    setup_logging,
)
from .exceptions import (
    AccessCoreError,
    AccessIOError,
    AccessParseError,
    ClassificationError,
    ConfigurationError,
    EmptyFileError,
    IdentityError,
    InheritanceError,
    ResolutionCancelled,
)
from .access import (
    AccessRecord,
    EntityType,
    EscalationAccess,
    GroupLoader,
    QueryResult,
    RemoteAccess,
    ResolvedRemoteAccess,
    classify,
    derive_identity,
    escalations_by_identity,
    inherit_escalations,
    inherit_remote_access,
    list_user_files,
    load_access_record,
    merge_escalations,
    normalize_roles,
    parse_access_record,
    query_escalations,
    query_remote_access,
    read_access_file,
    remote_access_by_identity,
    resolve_all,
    resolve_inheritance,
    resolve_user_file,
)

__all__ = [
    'AccessConfig',
    'ErrorPolicy',
    'LogLevel',
    'load_access_config_from_env',
    'AccessLogFormatter',
    'AccessLoggerAdapter',
    'get_access_logger',
    'safe_preview',
    'setup_logging',
    'AccessCoreError',
    'AccessIOError',
    'AccessParseError',
    'ClassificationError',
    'ConfigurationError',
    'EmptyFileError',
    'IdentityError',
    'InheritanceError',
    'ResolutionCancelled',
    'AccessRecord',
    'EntityType',
    'EscalationAccess',
    'GroupLoader',
    'QueryResult',
    'RemoteAccess',
    'ResolvedRemoteAccess',
    'classify',
    'derive_identity',
    'escalations_by_identity',
    'inherit_escalations',
    'inherit_remote_access',
    'list_user_files',
    'load_access_record',
    'merge_escalations',
    'normalize_roles',
    'parse_access_record',
    'query_escalations',
    'query_remote_access',
    'read_access_file',
    'remote_access_by_identity',
    'resolve_all',
    'resolve_inheritance',
    'resolve_user_file',
]
