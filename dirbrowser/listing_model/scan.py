"""Concurrent directory scanning into flat entry lists.

One unit of work runs per directory entry on a bounded thread pool. A unit
stats its entry and, when recursing into a directory, lists that directory so
the coordinator can submit its children as further units. Units never wait on
each other, so the pool size only limits parallelism and cannot deadlock on
deep trees. Only the coordinator thread touches the combined result list.
"""

from __future__ import annotations

import logging
import os
import stat
import time
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from ..errors import DirectoryReadError, SubtreeReadError
from .types import Entry

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8

DirectoryIdentity = tuple[int, int]


@dataclass(frozen=True)
class _UnitResult:
    """Outcome of one unit: its entry plus listed children for recursion."""

    entry: Entry | None
    identity: DirectoryIdentity | None = None
    children: tuple[Path, ...] = ()


def _list_directory(directory: Path) -> list[Path]:
    """Return child paths of ``directory``; raises ``OSError`` when unreadable."""
    with os.scandir(directory) as entries:
        return [Path(child.path) for child in entries]


def _identity(stat_result: os.stat_result) -> DirectoryIdentity:
    return (int(stat_result.st_dev), int(stat_result.st_ino))


def _modified_at(timestamp: float) -> datetime:
    try:
        return datetime.fromtimestamp(timestamp).astimezone()
    except (OverflowError, ValueError, OSError):
        # outside the platform range; clamp to the nearest representable end
        clamped = datetime.max if timestamp > 0 else datetime.min
        return clamped.replace(tzinfo=timezone.utc)


def entry_from_stat(name: str, stat_result: os.stat_result) -> Entry:
    """Build an ``Entry`` from a stat result; directories get size ``0``."""
    is_directory = stat.S_ISDIR(stat_result.st_mode)
    return Entry(
        name=name,
        size=0 if is_directory else int(stat_result.st_size),
        is_directory=is_directory,
        permissions=stat.S_IMODE(stat_result.st_mode) & 0o777,
        modified_at=_modified_at(stat_result.st_mtime),
    )


def _stat_entry(path: Path, follow_symlinks: bool) -> os.stat_result:
    try:
        return os.stat(path, follow_symlinks=follow_symlinks)
    except FileNotFoundError:
        if not follow_symlinks:
            raise
    # dangling symlink: report the link itself
    return os.stat(path, follow_symlinks=False)


def _scan_unit(path: Path, recurse: bool, follow_symlinks: bool) -> _UnitResult:
    try:
        stat_result = _stat_entry(path, follow_symlinks)
    except OSError as exc:
        logger.warning("cannot stat %s: %s", path, exc)
        return _UnitResult(entry=None)

    entry = entry_from_stat(path.name, stat_result)
    if not (entry.is_directory and recurse):
        return _UnitResult(entry=entry)

    try:
        children = _list_directory(path)
    except OSError as exc:
        logger.warning("%s", SubtreeReadError(path, exc))
        return _UnitResult(entry=entry)
    return _UnitResult(entry=entry, identity=_identity(stat_result), children=tuple(children))


def scan_directory(
    path: Path | str,
    recurse: bool,
    *,
    max_workers: int | None = None,
    follow_symlinks: bool = False,
) -> list[Entry]:
    """Scan ``path`` and return one ``Entry`` per child (and descendant).

    Raises ``DirectoryReadError`` when ``path`` itself cannot be listed.
    Nested directories that cannot be listed are logged and contribute only
    their own entry. Directory identities (device, inode) are tracked for the
    whole scan, so a directory reached twice through symlinks is listed as an
    entry but not descended into again.

    The returned order is completion order and varies between runs.
    """
    root = Path(path)
    started = time.monotonic()
    try:
        children = _list_directory(root)
        root_stat = os.stat(root)
    except OSError as exc:
        raise DirectoryReadError(root, exc) from exc

    entries: list[Entry] = []
    if not children:
        return entries

    visited: set[DirectoryIdentity] = {_identity(root_stat)}
    workers = max(1, max_workers if max_workers is not None else DEFAULT_MAX_WORKERS)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="dirbrowser-scan") as executor:
        pending = {executor.submit(_scan_unit, child, recurse, follow_symlinks) for child in children}
        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            for future in done:
                result = future.result()
                if result.entry is None:
                    continue
                entries.append(result.entry)
                if result.identity is None:
                    continue
                if result.identity in visited:
                    logger.debug("not descending into already visited directory %s", result.entry.name)
                    continue
                visited.add(result.identity)
                for child in result.children:
                    pending.add(executor.submit(_scan_unit, child, recurse, follow_symlinks))

    logger.debug(
        "scanned %s: %d entries in %.3fs (recurse=%s, workers=%d)",
        root,
        len(entries),
        time.monotonic() - started,
        recurse,
        workers,
    )
    return entries


__all__ = [
    "DEFAULT_MAX_WORKERS",
    "entry_from_stat",
    "scan_directory",
]
