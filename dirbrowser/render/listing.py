"""Listing rows for scanned entries.

Rows mirror a plain numbered listing: directories are tagged, files show
size, ``ls -l`` style permissions, and modification time. Colouring goes
through ``pygments.console`` so output stays plain when colour is off.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from pygments.console import ansiformat, colorize

from ..listing_model import Entry

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f\udc80-\udcff]")


def _escape_char(match: re.Match[str]) -> str:
    code = ord(match.group())
    if code >= 0xDC80:
        # undecodable filename byte carried as a surrogate by os.fsdecode
        code -= 0xDC00
    return f"\\x{code:02x}"


def sanitize_terminal_text(source: str) -> str:
    """Escape control bytes and undecodable filename bytes.

    The result is always encodable as UTF-8, and file names cannot move the
    cursor or ring the bell.
    """
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(_escape_char, source)


def format_entry_row(index: int, entry: Entry, *, color: bool = False) -> str:
    """Render one 1-based listing row."""
    name = sanitize_terminal_text(entry.name)
    if entry.is_directory:
        label = ansiformat("*blue*", name) if color else name
        return f"{index}. {label} (Directory)"

    size = f"{entry.size} bytes"
    if color:
        size = colorize("cyan", size)
    modified = entry.modified_at.strftime(TIMESTAMP_FORMAT)
    return f"{index}. {name} (Size: {size}, Permissions: {entry.permissions_text}, Modification: {modified})"


def format_listing(entries: Sequence[Entry], *, color: bool = False) -> list[str]:
    """Render the ``Files:`` heading plus one row per entry."""
    heading = ansiformat("*white*", "Files:") if color else "Files:"
    rows = [heading]
    rows.extend(format_entry_row(idx, entry, color=color) for idx, entry in enumerate(entries, start=1))
    return rows


def format_current_directory(path: Path, *, color: bool = False) -> str:
    shown = sanitize_terminal_text(str(path))
    if color:
        shown = ansiformat("*green*", shown)
    return f"Current directory: {shown}"


__all__ = [
    "TIMESTAMP_FORMAT",
    "sanitize_terminal_text",
    "format_entry_row",
    "format_listing",
    "format_current_directory",
]
