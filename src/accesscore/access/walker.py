"""Resolution of every user of an IAM directory.

Layout of an IAM directory::

    <root>/users/<name>_<surname>.yml
    <root>/groups/<group-name>.yml
    <root>/service-accounts/...      (recognised, not resolved)

Only ``users/`` is enumerated. Group names come from user files and must
be plain file names inside ``groups/``; group files are cached for the
duration of one walk. With a thread pool, users are parsed and their
groups loaded on the calling thread before inheritance fans out.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from ..config import AccessConfig, ErrorPolicy
from ..exceptions import AccessCoreError, AccessIOError, EmptyFileError, InheritanceError, ResolutionCancelled
from ..logging import get_access_logger
from .constants import GROUPS_DIR, USERS_DIR, YAML_SUFFIXES
from .inheritance import required_groups, resolve_inheritance
from .models import AccessRecord
from .parser import load_access_record

logger = logging.getLogger(__name__)


def list_user_files(root: str | os.PathLike[str]) -> list[Path]:
    """YAML files directly under ``<root>/users``, sorted by name.

    Raises:
        AccessIOError: The users directory can't be listed.
    """
    users_dir = Path(root) / USERS_DIR
    try:
        entries = list(users_dir.iterdir())
    except OSError as e:
        raise AccessIOError(
            f"error retrieving a list of user files from IAM directory {root}: {e}",
            path=str(users_dir),
            operation="list_user_files",
        ) from e

    files = []
    for entry in entries:
        if not entry.is_file():
            continue
        if entry.suffix not in YAML_SUFFIXES:
            logger.info("Skipping non-YAML file: %s", entry)
            continue
        files.append(entry)
    return sorted(files, key=lambda p: p.name)


class GroupLoader:
    """Loads group records by name from a groups directory.

    Group names must be plain file names; anything that would resolve
    outside ``groups_dir`` is rejected.

    With ``cache=True`` each group file is read at most once, and a group
    that failed to load keeps failing with the same error. The cache is
    guarded by a lock so one loader can serve several worker threads.
    """

    def __init__(self, groups_dir: str | os.PathLike[str], config: Optional[AccessConfig] = None, cache: bool = True):
        self.groups_dir = Path(groups_dir)
        self.config = config or AccessConfig()
        self.cache = cache
        self._records: dict[str, AccessRecord | AccessCoreError] = {}
        self._lock = threading.Lock()

    def _check_name(self, name: str) -> None:
        separators = [sep for sep in ("/", os.sep, os.altsep) if sep]
        if not name or name in (".", "..") or any(sep in name for sep in separators) or Path(name).is_absolute():
            raise InheritanceError(
                f"invalid group name {name!r}: expected a file name under {self.groups_dir}",
                path=str(self.groups_dir),
                operation="load_group",
                group=name,
            )

    def group_path(self, name: str) -> Path:
        """Path of the definition file of group ``name``.

        Raises:
            InheritanceError: ``name`` is not a plain file name, or its file
                resolves outside the groups directory.
            AccessIOError: No ``.yml`` or ``.yaml`` file exists for the group.
        """
        self._check_name(name)
        for suffix in YAML_SUFFIXES:
            candidate = self.groups_dir / f"{name}{suffix}"
            if not candidate.is_file():
                continue
            if not candidate.resolve().is_relative_to(self.groups_dir.resolve()):
                raise InheritanceError(
                    f"group file {candidate} resolves outside {self.groups_dir}",
                    path=str(candidate),
                    operation="load_group",
                    group=name,
                )
            return candidate
        expected = self.groups_dir / f"{name}{YAML_SUFFIXES[0]}"
        raise AccessIOError(
            f"error reading group file {expected}: no such file",
            path=str(expected),
            operation="load_group",
        )

    def _load(self, name: str) -> AccessRecord:
        return load_access_record(
            self.group_path(name),
            email_domain=self.config.email_domain,
            group_prefix=self.config.group_prefix,
        )

    def _cached(self, name: str) -> AccessRecord | AccessCoreError:
        with self._lock:
            entry = self._records.get(name)
            if entry is None:
                logger.debug("Group cache miss: %s", name)
                try:
                    entry = self._load(name)
                except AccessCoreError as e:
                    entry = e
                self._records[name] = entry
            else:
                logger.debug("Group cache hit: %s", name)
        return entry

    def preload(self, names: Iterable[str]) -> None:
        """Fill the cache with ``names`` so later lookups do no I/O.

        Failures are cached too and raised by :meth:`load` for the users
        that need the group.
        """
        if not self.cache:
            return
        for name in dict.fromkeys(names):
            self._cached(name)

    def load(self, name: str) -> AccessRecord:
        """Load the record of group ``name``.

        Cached records are shared between users and must not be modified.
        """
        if not self.cache:
            return self._load(name)

        entry = self._cached(name)
        if isinstance(entry, AccessCoreError):
            raise type(entry)(entry.message, code=entry.code, **entry.details) from entry
        return entry

    def load_many(self, names: Iterable[str]) -> dict[str, AccessRecord]:
        """Load several groups keyed by name.

        Raises:
            InheritanceError: A group can't be read or parsed.
        """
        groups: dict[str, AccessRecord] = {}
        for name in names:
            if name in groups:
                continue
            try:
                groups[name] = self.load(name)
            except AccessCoreError as e:
                raise InheritanceError(
                    f"error loading group {name!r}: {e.message}",
                    path=e.details.get("path", str(self.groups_dir)),
                    operation="load_group",
                    group=name,
                ) from e
        return groups


def resolve_user(user_path: str | os.PathLike[str], loader: GroupLoader) -> AccessRecord:
    """Parse one user file and apply inheritance from its groups."""
    record = load_access_record(
        user_path,
        email_domain=loader.config.email_domain,
        group_prefix=loader.config.group_prefix,
    )
    groups = loader.load_many(required_groups(record))
    return resolve_inheritance(record, groups)


def resolve_user_file(user_path: str | os.PathLike[str], config: Optional[AccessConfig] = None) -> AccessRecord:
    """Resolve a single user file, looking up groups in ``<user dir>/../groups``."""
    config = config or AccessConfig()
    groups_dir = Path(user_path).parent.parent / GROUPS_DIR
    return resolve_user(user_path, GroupLoader(groups_dir, config=config, cache=False))


class _Walk:
    """State of one resolve_all() run."""

    def __init__(self, root: Path, config: AccessConfig, cancel_event: Optional[threading.Event]):
        self.root = root
        self.config = config
        self.cancel_event = cancel_event
        self.loader = GroupLoader(root / GROUPS_DIR, config=config, cache=config.cache_groups)

    def check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise ResolutionCancelled(f"resolution of {self.root} cancelled", path=str(self.root))

    def _attempt(self, user_path: Path, step: Callable[[], AccessRecord]) -> Optional[AccessRecord]:
        """Run one step for a user under the error policy; None if skipped."""
        log = get_access_logger(__name__, source_path=user_path)
        try:
            return step()
        except EmptyFileError:
            log.info("Skipping empty user file: %s", user_path)
            return None
        except ResolutionCancelled:
            raise
        except AccessCoreError as e:
            log.error("Failed to resolve user file %s: [%s] %s", user_path, e.code, e.message)
            if self.config.error_policy is ErrorPolicy.FAIL_FAST:
                raise
            return None

    def parse(self, user_path: Path) -> Optional[AccessRecord]:
        self.check_cancelled()
        return self._attempt(
            user_path,
            lambda: load_access_record(
                user_path,
                email_domain=self.config.email_domain,
                group_prefix=self.config.group_prefix,
            ),
        )

    def inherit(self, record: AccessRecord) -> Optional[AccessRecord]:
        self.check_cancelled()
        return self._attempt(
            Path(record.source_path),
            lambda: resolve_inheritance(record, self.loader.load_many(required_groups(record))),
        )

    def resolve(self, user_path: Path) -> Optional[AccessRecord]:
        record = self.parse(user_path)
        return None if record is None else self.inherit(record)


def resolve_all(
    root: str | os.PathLike[str],
    *,
    config: Optional[AccessConfig] = None,
    cancel_event: Optional[threading.Event] = None,
    max_workers: Optional[int] = None,
) -> list[AccessRecord]:
    """Resolve the effective access of every user under ``root``.

    With ``max_workers > 1`` user files are parsed on the calling thread,
    every group they need is loaded into the cache, and only then is
    inheritance fanned out to a thread pool. Workers never read files.

    Args:
        root: IAM directory containing ``users/`` and ``groups/``.
        config: Identity and error policy settings (defaults if None).
        cancel_event: When set, the walk stops before the next user.
        max_workers: Resolve users on a thread pool of this size when > 1.

    Returns:
        Resolved user records in enumeration order.

    Raises:
        ResolutionCancelled: ``cancel_event`` was set.
        AccessCoreError: A user failed and the error policy is ``fail_fast``,
            or the users directory can't be listed.
    """
    config = config or AccessConfig()
    walk = _Walk(Path(root), config, cancel_event)
    user_files = list_user_files(root)

    if max_workers and max_workers > 1:
        parsed = [record for record in (walk.parse(path) for path in user_files) if record is not None]
        walk.loader.preload(name for record in parsed for name in required_groups(record))
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = [pool.submit(walk.inherit, record) for record in parsed]
            try:
                results = [future.result() for future in futures]
            except BaseException:
                for future in futures:
                    future.cancel()
                raise
    else:
        results = [walk.resolve(path) for path in user_files]

    records = [record for record in results if record is not None]
    logger.info(
        "Resolved %d users from %s (%d skipped)",
        len(records),
        root,
        len(user_files) - len(records),
    )
    return records


__all__ = [
    "GroupLoader",
    "list_user_files",
    "resolve_all",
    "resolve_user",
    "resolve_user_file",
]
