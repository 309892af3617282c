"""Configuration contract for access resolution.

This module provides the Pydantic-validated configuration model used by
the directory walker, the query surfaces and logging setup.

Direct os.environ/os.getenv usage is FORBIDDEN outside of
:func:`load_access_config_from_env`.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorPolicy(str, Enum):
    """What a directory walk does when a single user fails to resolve.

    - FAIL_FAST: the first failure aborts the whole walk (default)
    - SKIP: the failure is logged and the user is left out of the result
    """

    FAIL_FAST = "fail_fast"
    SKIP = "skip"


class AccessConfig(BaseModel):
    """Configuration for resolving an IAM directory.

    RULE: All settings MUST come through this config.
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    # IAM directory
    iam_path: Optional[str] = Field(
        default=None,
        description="Root of the IAM directory containing users/ and groups/",
    )
    email_domain: str = Field(
        default="ravelin.com",
        description="Domain appended to every derived identity",
    )
    group_prefix: str = Field(
        default="gcp-",
        description="Prefix of the local part of a group identity",
    )

    # Walk behaviour
    error_policy: ErrorPolicy = Field(
        default=ErrorPolicy.FAIL_FAST,
        description="fail_fast aborts on the first failing user, skip logs and continues",
    )
    cache_groups: bool = Field(
        default=True,
        description="Read every group file once per walk instead of once per user",
    )

    @field_validator("iam_path")
    @classmethod
    def validate_iam_path(cls, v: Optional[str]) -> Optional[str]:
        """Reject blank IAM paths."""
        if v is None:
            return v
        if not v.strip():
            raise ValueError("IAM path must not be empty")
        return v

    @field_validator("email_domain")
    @classmethod
    def validate_email_domain(cls, v: str) -> str:
        """Domain is the part after '@', so it can't contain one."""
        if not v or "@" in v:
            raise ValueError(f"Invalid email domain: {v!r}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    @field_validator("error_policy", mode="before")
    @classmethod
    def validate_error_policy(cls, v: str | ErrorPolicy) -> ErrorPolicy:
        """Accept policy names in any case."""
        if isinstance(v, ErrorPolicy):
            return v
        if isinstance(v, str):
            try:
                return ErrorPolicy(v.strip().lower())
            except ValueError:
                raise ValueError(f"Invalid error policy: {v}. Must be one of {[e.value for e in ErrorPolicy]}")
        raise ValueError(f"Error policy must be string or ErrorPolicy enum, got {type(v)}")

    model_config = {
        "extra": "forbid",
    }


_TRUTHY = ("true", "1", "yes", "on")


def load_access_config_from_env() -> AccessConfig:
    """Load configuration from environment variables.

    This is the ONLY place where os.getenv is allowed.

    Environment variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)
    - IAM_PATH: Root of the IAM directory
    - ACCESS_EMAIL_DOMAIN: Identity domain (default: ravelin.com)
    - ACCESS_GROUP_PREFIX: Group identity prefix (default: gcp-)
    - ACCESS_ERROR_POLICY: fail_fast | skip
    - ACCESS_CACHE_GROUPS: Cache group files per walk (default: true)

    Returns:
        AccessConfig instance with values from environment or defaults.
    """
    import os

    return AccessConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=os.getenv("LOG_JSON", "false").lower() in _TRUTHY,
        iam_path=os.getenv("IAM_PATH") or None,
        email_domain=os.getenv("ACCESS_EMAIL_DOMAIN", "ravelin.com"),
        group_prefix=os.getenv("ACCESS_GROUP_PREFIX", "gcp-"),
        error_policy=os.getenv("ACCESS_ERROR_POLICY", "fail_fast"),
        cache_groups=os.getenv("ACCESS_CACHE_GROUPS", "true").lower() in _TRUTHY,
    )


__all__ = [
    "AccessConfig",
    "ErrorPolicy",
    "LogLevel",
    "load_access_config_from_env",
]
