"""Tests for entity classification and identity derivation."""

from __future__ import annotations

import pytest

from accesscore import ClassificationError, EntityType, IdentityError, classify, derive_identity
from accesscore.access import ENTITY_BEHAVIOURS


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("users/john_doe.yml", EntityType.USER),
            ("service-accounts/john_doe.yml", EntityType.SERVICE),
            ("groups/john_doe.yml", EntityType.GROUP),
            ("path/users/john_doe.yml", EntityType.USER),
            ("path/service-accounts/john_doe.yml", EntityType.SERVICE),
            ("/abs/path/groups/john_doe.yaml", EntityType.GROUP),
        ],
    )
    def test_known_directories(self, path: str, expected: EntityType) -> None:
        """Parent directory decides the entity type."""
        assert classify(path) is expected

    def test_unknown_directory(self) -> None:
        """Any other parent directory fails."""
        with pytest.raises(ClassificationError, match="unable to determine type") as exc:
            classify("path/john_doe.yml")
        assert exc.value.path == "path/john_doe.yml"

    def test_segment_must_match_exactly(self) -> None:
        """A directory merely ending in 'users' is not a users directory."""
        with pytest.raises(ClassificationError):
            classify("path/superusers/john_doe.yml")

    def test_only_immediate_parent_counts(self) -> None:
        """A 'users' segment higher up the path is ignored."""
        with pytest.raises(ClassificationError):
            classify("users/archive/john_doe.yml")

    def test_behaviour_table_covers_every_type(self) -> None:
        """Every EntityType has a behaviour entry."""
        assert set(ENTITY_BEHAVIOURS) == set(EntityType)
        assert ENTITY_BEHAVIOURS[EntityType.USER].can_inherit
        assert not ENTITY_BEHAVIOURS[EntityType.GROUP].can_inherit


class TestDeriveIdentity:
    """Tests for derive_identity()."""

    def test_user(self) -> None:
        """Underscores become dots."""
        assert derive_identity("/mnt/c/iam/users/john_doe.yaml", EntityType.USER) == "john.doe@ravelin.com"

    def test_user_with_hyphens(self) -> None:
        """Hyphens are kept."""
        assert (
            derive_identity("../../iam/users/marie-josette_doe.yml", EntityType.USER)
            == "marie-josette.doe@ravelin.com"
        )

    def test_group(self) -> None:
        """Groups get the gcp- prefix."""
        assert derive_identity("groups/data-eng.yml", EntityType.GROUP) == "gcp-data-eng@ravelin.com"

    def test_custom_domain_and_prefix(self) -> None:
        """Domain and group prefix are configurable."""
        assert (
            derive_identity("groups/ops.yml", EntityType.GROUP, email_domain="example.org", group_prefix="g-")
            == "g-ops@example.org"
        )

    @pytest.mark.parametrize("name", ["john.doe.yml", "john_doe", ".yml"])
    def test_user_bad_file_name(self, name: str) -> None:
        """File name must be exactly <stem>.<ext>."""
        with pytest.raises(IdentityError, match="expected format"):
            derive_identity(f"users/{name}", EntityType.USER)

    def test_service_unsupported(self) -> None:
        """Service accounts have no identity yet."""
        with pytest.raises(IdentityError, match="not yet supported") as exc:
            derive_identity("service-accounts/bot.yml", EntityType.SERVICE)
        assert exc.value.code == "IDENTITY_ERROR"
