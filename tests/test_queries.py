"""Tests for the escalation and remote access query surfaces."""

from __future__ import annotations

import logging

import pytest

from accesscore import (
    AccessConfig,
    ConfigurationError,
    escalations_by_identity,
    query_escalations,
    query_remote_access,
    remote_access_by_identity,
    resolve_all,
)

FILES = {
    "users/john_doe.yml": "gcp:\n  groups: [ops]\ngsudo:\n  inherit: true\n  escalations:\n    p1: [roles/owner]\n",
    "users/jane_doe.yml": "gcp:\n  groups: [ops]\ntwingate:\n  admin: false\n",
    "users/bob_smith.yml": "twingate:\n  enabled: false\n",
    "groups/ops.yml": "gsudo:\n  escalations:\n    p2: [custom/deployer]\ntwingate:\n  enabled: true\n  admin: true\n",
}


@pytest.fixture
def records(iam_tree):
    return resolve_all(iam_tree(FILES))


class TestEscalationsByIdentity:
    """Tests for escalations_by_identity()."""

    def test_all_users(self, records) -> None:
        """Every user is present, with or without escalations."""
        result = escalations_by_identity(records)
        assert result.warnings == []
        assert result.data == {
            "bob.smith@ravelin.com": {},
            "jane.doe@ravelin.com": {},
            "john.doe@ravelin.com": {"p1": ["roles/owner"], "p2": ["projects/p2/roles/deployer"]},
        }

    def test_filter(self, records) -> None:
        """A known identity narrows the result."""
        result = escalations_by_identity(records, "john.doe@ravelin.com")
        assert list(result.data) == ["john.doe@ravelin.com"]

    def test_filter_not_found(self, records, caplog: pytest.LogCaptureFixture) -> None:
        """An unknown identity gives an empty result and a warning."""
        with caplog.at_level(logging.WARNING, logger="accesscore"):
            result = escalations_by_identity(records, "nobody@ravelin.com")
        assert result.data == {}
        assert result.warnings == ["identity 'nobody@ravelin.com' not found, returning empty result"]
        assert "nobody@ravelin.com" in caplog.text


class TestRemoteAccessByIdentity:
    """Tests for remote_access_by_identity()."""

    def test_only_enabled_users(self, records) -> None:
        """Disabled users are left out."""
        result = remote_access_by_identity(records)
        assert result.data == {
            "jane.doe@ravelin.com": {"enabled": True, "admin": False},
            "john.doe@ravelin.com": {"enabled": True, "admin": True},
        }

    def test_filter_disabled_user(self, records) -> None:
        """Filtering on a disabled user warns."""
        result = remote_access_by_identity(records, "bob.smith@ravelin.com")
        assert result.data == {}
        assert len(result.warnings) == 1


class TestQueryFromConfig:
    """Tests for query_escalations() / query_remote_access()."""

    def test_missing_iam_path(self) -> None:
        """iam_path is required."""
        with pytest.raises(ConfigurationError, match="missing IAM path"):
            query_escalations(AccessConfig())

    def test_resolves_config_path(self, iam_tree) -> None:
        """The IAM directory comes from the config."""
        config = AccessConfig(iam_path=str(iam_tree(FILES)))
        assert "john.doe@ravelin.com" in query_escalations(config).data
        assert query_remote_access(config, "jane.doe@ravelin.com").data == {
            "jane.doe@ravelin.com": {"enabled": True, "admin": False}
        }
