"""Exception types raised by scanning and session navigation."""

from __future__ import annotations

from pathlib import Path


class DirBrowserError(Exception):
    """Base class for all dirbrowser errors."""


class DirectoryReadError(DirBrowserError):
    """The directory a scan was started on could not be listed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"cannot read directory {path}: {cause.strerror or cause}")


class SubtreeReadError(DirBrowserError):
    """A nested directory could not be listed during a recursive scan.

    Only ever logged; the subtree is dropped from the scan result.
    """

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"error scanning subdirectory {path}: {cause.strerror or cause}")


class NavigationTargetMissing(DirBrowserError):
    """Descend target does not exist."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause.strerror or cause}")


class NavigationTargetNotDirectory(DirBrowserError):
    """Descend target exists but is not a directory."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"{path}: not a directory")


class InvalidMenuChoice(DirBrowserError):
    """Menu input did not name one of the known actions."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"invalid menu choice: {raw!r}")


__all__ = [
    "DirBrowserError",
    "DirectoryReadError",
    "SubtreeReadError",
    "NavigationTargetMissing",
    "NavigationTargetNotDirectory",
    "InvalidMenuChoice",
]
