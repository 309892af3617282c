"""Shared fixtures: an IAM directory on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def iam_tree(tmp_path: Path) -> Callable[..., Path]:
    """Build an IAM directory from ``{"users/john_doe.yml": "..."}`` mappings.

    ``users/`` and ``groups/`` always exist.
    """

    def build(*files: dict[str, str | bytes]) -> Path:
        (tmp_path / "users").mkdir(exist_ok=True)
        (tmp_path / "groups").mkdir(exist_ok=True)
        for mapping in files:
            for rel, content in mapping.items():
                target = tmp_path / rel
                target.parent.mkdir(parents=True, exist_ok=True)
                if isinstance(content, bytes):
                    target.write_bytes(content)
                else:
                    target.write_text(content)
        return tmp_path

    return build
