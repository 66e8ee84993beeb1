"""Domain datatypes for flat directory listings."""

from __future__ import annotations

import enum
import stat
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Entry:
    """Metadata snapshot of one filesystem object captured at scan time.

    Entries carry no parent/child links: a recursive scan produces a flat
    list where nested children are indistinguishable from direct ones.
    """

    name: str
    size: int
    is_directory: bool
    permissions: int
    modified_at: datetime

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("entry name must be non-empty")

    @property
    def permissions_text(self) -> str:
        """Return ``ls -l`` style mode text, e.g. ``drwxr-xr-x``."""
        type_bits = stat.S_IFDIR if self.is_directory else stat.S_IFREG
        return stat.filemode(type_bits | (self.permissions & 0o777))


class SortMode(enum.Enum):
    """Listing order selected by the session."""

    NONE = "none"
    NAME = "name"
    SIZE = "size"
    MODIFIED = "mtime"
    PERMISSIONS = "permissions"


__all__ = [
    "Entry",
    "SortMode",
]
