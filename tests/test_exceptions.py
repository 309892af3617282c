"""Tests for the exception hierarchy and error registry."""

from __future__ import annotations

from accesscore import (
    AccessCoreError,
    AccessParseError,
    ClassificationError,
    EmptyFileError,
    InheritanceError,
)
from accesscore.exceptions import error_registry, register_error


class TestAccessCoreError:
    """Tests for AccessCoreError and subclasses."""

    def test_defaults(self) -> None:
        """Class-level code and message are used when not given."""
        error = InheritanceError()
        assert error.code == "INHERITANCE_ERROR"
        assert str(error) == "inheritance is only available for users"
        assert error.path is None

    def test_details_and_path(self) -> None:
        """Keyword arguments end up in details."""
        error = ClassificationError("bad path", path="x/y.yml", operation="classify")
        assert error.path == "x/y.yml"
        assert error.details == {"path": "x/y.yml", "operation": "classify"}

    def test_empty_file_is_parse_error(self) -> None:
        """Empty files are a kind of parse error."""
        assert issubclass(EmptyFileError, AccessParseError)
        assert issubclass(AccessParseError, AccessCoreError)


class TestErrorRegistry:
    """Tests for the error registry."""

    def test_base_errors_registered(self) -> None:
        """Every base error is looked up by its code."""
        for code in ("PARSE_ERROR", "EMPTY_FILE", "CLASSIFICATION_ERROR", "IO_ERROR", "CANCELLED"):
            error_cls = error_registry.get(code)
            assert error_cls is not None
            assert error_cls.code == code

    def test_register_custom_error(self) -> None:
        """The decorator registers and returns the class."""

        @register_error("TEST_CUSTOM_ERROR")
        class CustomError(AccessCoreError):
            code = "TEST_CUSTOM_ERROR"

        assert error_registry.get("TEST_CUSTOM_ERROR") is CustomError
