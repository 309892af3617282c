"""Tests for AccessConfig."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from accesscore import AccessConfig, ErrorPolicy, LogLevel, load_access_config_from_env


class TestAccessConfig:
    """Tests for AccessConfig model."""

    def test_create_default_config(self) -> None:
        """Test creating an AccessConfig with defaults."""
        config = AccessConfig()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.iam_path is None
        assert config.email_domain == "ravelin.com"
        assert config.group_prefix == "gcp-"
        assert config.error_policy is ErrorPolicy.FAIL_FAST
        assert config.cache_groups is True

    def test_log_level_from_string(self) -> None:
        """Test log level given as a lower-case string."""
        config = AccessConfig(log_level="debug")
        assert config.log_level == LogLevel.DEBUG

    def test_log_level_invalid(self) -> None:
        """Test invalid log level."""
        with pytest.raises(ValueError, match="Invalid log level"):
            AccessConfig(log_level="INVALID")

    def test_error_policy_from_string(self) -> None:
        """Test error policy given as a string."""
        assert AccessConfig(error_policy="SKIP").error_policy is ErrorPolicy.SKIP

    def test_error_policy_invalid(self) -> None:
        """Test invalid error policy."""
        with pytest.raises(ValueError, match="Invalid error policy"):
            AccessConfig(error_policy="retry")

    def test_blank_iam_path(self) -> None:
        """Test blank IAM path is rejected."""
        with pytest.raises(ValueError, match="IAM path must not be empty"):
            AccessConfig(iam_path="  ")

    def test_email_domain_with_at(self) -> None:
        """Test domain containing '@' is rejected."""
        with pytest.raises(ValueError, match="Invalid email domain"):
            AccessConfig(email_domain="@ravelin.com")

    def test_extra_fields_forbidden(self) -> None:
        """Test that extra fields are forbidden."""
        with pytest.raises(Exception):  # Pydantic validation error
            AccessConfig(extra_field="value")  # type: ignore[call-arg]


class TestLoadAccessConfigFromEnv:
    """Tests for load_access_config_from_env function."""

    @patch.dict(os.environ, {}, clear=True)
    def test_load_defaults(self) -> None:
        """Test loading config with no environment variables."""
        config = load_access_config_from_env()
        assert config == AccessConfig()

    @patch.dict(
        os.environ,
        {
            "LOG_LEVEL": "DEBUG",
            "LOG_JSON": "yes",
            "IAM_PATH": "/srv/iam",
            "ACCESS_EMAIL_DOMAIN": "example.org",
            "ACCESS_GROUP_PREFIX": "grp-",
            "ACCESS_ERROR_POLICY": "skip",
            "ACCESS_CACHE_GROUPS": "false",
        },
        clear=True,
    )
    def test_load_from_env(self) -> None:
        """Test loading config from environment variables."""
        config = load_access_config_from_env()
        assert config.log_level == LogLevel.DEBUG
        assert config.log_json is True
        assert config.iam_path == "/srv/iam"
        assert config.email_domain == "example.org"
        assert config.group_prefix == "grp-"
        assert config.error_policy is ErrorPolicy.SKIP
        assert config.cache_groups is False

    def test_boolean_variants(self) -> None:
        """Test LOG_JSON accepts various true values."""
        for value in ("true", "1", "yes", "on", "TRUE"):
            with patch.dict(os.environ, {"LOG_JSON": value}, clear=True):
                assert load_access_config_from_env().log_json is True

    @patch.dict(os.environ, {"IAM_PATH": ""}, clear=True)
    def test_empty_iam_path_is_unset(self) -> None:
        """Test empty IAM_PATH means no path."""
        assert load_access_config_from_env().iam_path is None
