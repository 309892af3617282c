"""Set-union merge of project → role list mappings."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence


def dedup_roles(roles: Iterable[str]) -> list[str]:
    """Deduplicated, sorted list of roles."""
    return sorted(set(roles))


def merge_escalations(
    dst: Mapping[str, Sequence[str]] | None,
    src: Mapping[str, Sequence[str]] | None,
) -> dict[str, list[str]]:
    """Merge two project → roles mappings into a new one.

    Every key of either input is present in the result, mapped to the
    sorted, deduplicated union of its roles. Neither input is mutated;
    ``None`` is treated as an empty mapping.

    Example::

        >>> merge_escalations({"a": ["2", "1"]}, {"a": ["1", "3"], "b": ["4"]})
        {'a': ['1', '2', '3'], 'b': ['4']}
    """
    dst = dst or {}
    src = src or {}

    merged: dict[str, list[str]] = {}
    for project in dict.fromkeys([*dst, *src]):
        merged[project] = dedup_roles([*dst.get(project, ()), *src.get(project, ())])
    return merged


__all__ = [
    "dedup_roles",
    "merge_escalations",
]
