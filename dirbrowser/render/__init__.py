"""Presentation helpers for listings and the action menu.

Everything here returns strings; printing is left to the session loop.
"""

from __future__ import annotations

from .listing import format_current_directory, format_entry_row, format_listing, sanitize_terminal_text
from .menu import (
    CHOICE_PROMPT,
    DIRECTORY_PROMPT,
    EMPTY_DIRECTORY_MESSAGE,
    INVALID_CHOICE_MESSAGE,
    format_menu,
)

__all__ = [
    "format_current_directory",
    "format_entry_row",
    "format_listing",
    "sanitize_terminal_text",
    "CHOICE_PROMPT",
    "DIRECTORY_PROMPT",
    "EMPTY_DIRECTORY_MESSAGE",
    "INVALID_CHOICE_MESSAGE",
    "format_menu",
]
