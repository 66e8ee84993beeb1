"""Sort flat entry lists by the session's selected mode."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .types import Entry, SortMode

_SORT_KEYS: dict[SortMode, Callable[[Entry], object]] = {
    SortMode.NAME: lambda entry: entry.name,
    SortMode.SIZE: lambda entry: entry.size,
    SortMode.MODIFIED: lambda entry: entry.modified_at,
    SortMode.PERMISSIONS: lambda entry: entry.permissions,
}

_SORT_MODE_ALIASES: dict[str, SortMode] = {
    "": SortMode.NONE,
    "none": SortMode.NONE,
    "name": SortMode.NAME,
    "size": SortMode.SIZE,
    "mtime": SortMode.MODIFIED,
    "modified": SortMode.MODIFIED,
    "time": SortMode.MODIFIED,
    "perm": SortMode.PERMISSIONS,
    "permissions": SortMode.PERMISSIONS,
}


def sort_entries(entries: Iterable[Entry], mode: SortMode) -> list[Entry]:
    """Return entries ordered ascending by ``mode``'s key.

    ``SortMode.NONE`` keeps scan order. The sort is stable, so entries with
    equal keys keep their relative scan order. Names compare by code point.
    """
    ordered = list(entries)
    key = _SORT_KEYS.get(mode)
    if key is None:
        return ordered
    ordered.sort(key=key)
    return ordered


def parse_sort_mode(value: str) -> SortMode:
    """Map a config/CLI sort name to a ``SortMode``; raises ``ValueError``."""
    normalized = value.strip().lower()
    try:
        return _SORT_MODE_ALIASES[normalized]
    except KeyError:
        raise ValueError(f"unknown sort mode: {value!r}") from None


def sort_mode_names() -> tuple[str, ...]:
    """Canonical sort-mode names in menu order."""
    return tuple(mode.value for mode in SortMode)


__all__ = [
    "sort_entries",
    "parse_sort_mode",
    "sort_mode_names",
]
