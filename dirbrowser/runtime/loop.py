"""Interactive menu loop for the directory browser.

Each iteration rescans the current path, sorts and prints the listing, shows
the menu, and applies one action. There is no dirty tracking: the listing is
always rebuilt from disk. Console access goes through ``SessionIO`` so tests
can drive the loop with scripted input.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import DirectoryReadError, InvalidMenuChoice, NavigationTargetMissing, NavigationTargetNotDirectory
from ..listing_model import Entry, scan_directory, sort_entries
from ..render import (
    CHOICE_PROMPT,
    DIRECTORY_PROMPT,
    EMPTY_DIRECTORY_MESSAGE,
    INVALID_CHOICE_MESSAGE,
    format_current_directory,
    format_listing,
    format_menu,
)
from .config import BrowserOptions
from .session import SORT_ACTIONS, MenuAction, SessionState, parse_menu_choice

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SCAN_FAILED = 1

ScanFunction = Callable[..., list[Entry]]


@dataclass(frozen=True)
class SessionIO:
    """Console operations used by ``run_session``.

    ``read_line`` shows a prompt and returns the entered line, or ``None`` at
    end of input.
    """

    read_line: Callable[[str], str | None]
    write: Callable[[str], None]


def _read_console_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def _write_console_line(text: str) -> None:
    stream = sys.stdout
    encoding = getattr(stream, "encoding", None) or "utf-8"
    # error messages can still carry undecodable path bytes
    print(text.encode(encoding, errors="backslashreplace").decode(encoding), file=stream)


def console_io() -> SessionIO:
    """``SessionIO`` bound to stdin/stdout."""
    return SessionIO(read_line=_read_console_line, write=_write_console_line)


def apply_action(
    state: SessionState,
    action: MenuAction,
    io: SessionIO,
    options: BrowserOptions,
) -> bool:
    """Apply one menu action; returns ``False`` when the session should end."""
    if action is MenuAction.EXIT:
        return False

    if action is MenuAction.DESCEND:
        name = io.read_line(DIRECTORY_PROMPT) or ""
        try:
            target = state.descend(name, require_directory=options.descend_requires_directory)
        except (NavigationTargetMissing, NavigationTargetNotDirectory) as exc:
            io.write(f"Error: {exc}")
        else:
            logger.info("changed directory to %s", target)
        return True

    if action is MenuAction.TOGGLE_RECURSION:
        enabled = state.toggle_recursion()
        logger.info("recursive listing %s", "enabled" if enabled else "disabled")
        return True

    state.set_sort_mode(SORT_ACTIONS[action])
    return True


def run_session(
    state: SessionState,
    options: BrowserOptions,
    io: SessionIO,
    *,
    scan: ScanFunction = scan_directory,
) -> int:
    """Run the browse loop until exit and return the process exit status.

    Returns ``EXIT_SCAN_FAILED`` when the current path cannot be listed.
    An empty listing ends the session with ``EXIT_OK`` unless
    ``options.exit_on_empty`` is off, in which case the menu is shown again.
    """
    color = options.color
    while True:
        io.write(format_current_directory(state.current_path, color=color))
        try:
            entries = scan(
                state.current_path,
                state.include_subdirectories,
                max_workers=options.max_workers,
                follow_symlinks=options.follow_symlinks,
            )
        except DirectoryReadError as exc:
            logger.debug("top-level scan failed", exc_info=True)
            io.write(f"Error: {exc}")
            return EXIT_SCAN_FAILED

        if not entries:
            io.write(EMPTY_DIRECTORY_MESSAGE)
            if options.exit_on_empty:
                return EXIT_OK
        else:
            for line in format_listing(sort_entries(entries, state.sort_mode), color=color):
                io.write(line)

        for line in format_menu(state.include_subdirectories, state.sort_mode, color=color):
            io.write(line)

        raw_choice = io.read_line(CHOICE_PROMPT)
        if raw_choice is None:
            return EXIT_OK
        try:
            action = parse_menu_choice(raw_choice)
        except InvalidMenuChoice:
            io.write(INVALID_CHOICE_MESSAGE)
            continue

        if not apply_action(state, action, io, options):
            return EXIT_OK


__all__ = [
    "EXIT_OK",
    "EXIT_SCAN_FAILED",
    "SessionIO",
    "console_io",
    "apply_action",
    "run_session",
]
