"""Unified exception hierarchy for access resolution.

Every failure raised by accesscore inherits from AccessCoreError and
carries a stable error code plus the details needed to locate the
offending definition file (``path``, ``operation``, ...).

Usage:
    from accesscore.exceptions import AccessCoreError, ClassificationError

    try:
        records = resolve_all(root)
    except AccessCoreError as e:
        print(e.code, e.details.get("path"))
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, cast

__all__ = [
    # Base hierarchy
    "AccessCoreError",
    "ConfigurationError",
    "ClassificationError",
    "IdentityError",
    "AccessParseError",
    "EmptyFileError",
    "InheritanceError",
    "AccessIOError",
    "ResolutionCancelled",
    # Registry
    "ErrorRegistry",
    "error_registry",
    "register_error",
]


# ---- Exception Hierarchy ----------------------------------------------------


class AccessCoreError(Exception):
    """Base exception for access resolution.

    Attributes:
        code: Stable error code string (e.g. "PARSE_ERROR").
        message: Human-readable error description.
        details: Additional context as keyword arguments (path, operation, ...).
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)

    @property
    def path(self) -> str | None:
        """Path of the definition file involved, if any."""
        path = self.details.get("path")
        return str(path) if path is not None else None


class ConfigurationError(AccessCoreError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class ClassificationError(AccessCoreError):
    """File path does not map to a known entity directory."""

    code: str = "CLASSIFICATION_ERROR"
    message: str = "unable to determine type of file"


class IdentityError(AccessCoreError):
    """Identity can't be derived from a file name or entity type."""

    code: str = "IDENTITY_ERROR"


class AccessParseError(AccessCoreError):
    """Definition file content is not valid structured data."""

    code: str = "PARSE_ERROR"


class EmptyFileError(AccessParseError):
    """Definition file has no content."""

    code: str = "EMPTY_FILE"


class InheritanceError(AccessCoreError):
    """Inheritance unsupported for the entity, or a group can't be loaded."""

    code: str = "INHERITANCE_ERROR"
    message: str = "inheritance is only available for users"


class AccessIOError(AccessCoreError):
    """Underlying read failure (missing file, permission denied)."""

    code: str = "IO_ERROR"


class ResolutionCancelled(AccessCoreError):
    """The directory walk was aborted through its cancel token."""

    code: str = "CANCELLED"
    message: str = "resolution cancelled"


# ---- Error Registry ---------------------------------------------------------

_E = TypeVar("_E", bound=type[AccessCoreError])


class ErrorRegistry:
    """Registry mapping stable error codes to exception classes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[AccessCoreError]] = {}

    def register(self, code: str, error_cls: type[AccessCoreError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[AccessCoreError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[AccessCoreError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("MY_CUSTOM_ERROR")
        class MyCustomError(AccessCoreError):
            code = "MY_CUSTOM_ERROR"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


# Register base errors
error_registry.register("INTERNAL_ERROR", AccessCoreError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("CLASSIFICATION_ERROR", ClassificationError)
error_registry.register("IDENTITY_ERROR", IdentityError)
error_registry.register("PARSE_ERROR", AccessParseError)
error_registry.register("EMPTY_FILE", EmptyFileError)
error_registry.register("INHERITANCE_ERROR", InheritanceError)
error_registry.register("IO_ERROR", AccessIOError)
error_registry.register("CANCELLED", ResolutionCancelled)
