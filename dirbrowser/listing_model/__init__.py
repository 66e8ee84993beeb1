"""Domain model for flat directory listings.

This package contains non-UI listing primitives:
- the ``Entry`` metadata snapshot and ``SortMode`` enum
- the concurrent directory scanner
- sort helpers applied after each scan
"""

from __future__ import annotations

from .types import Entry, SortMode
from .scan import DEFAULT_MAX_WORKERS, entry_from_stat, scan_directory
from .sorting import parse_sort_mode, sort_entries, sort_mode_names

__all__ = [
    "Entry",
    "SortMode",
    "DEFAULT_MAX_WORKERS",
    "entry_from_stat",
    "scan_directory",
    "parse_sort_mode",
    "sort_entries",
    "sort_mode_names",
]
