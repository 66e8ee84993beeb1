"""Session state and the menu actions that mutate it.

This module has no I/O beyond ``stat`` for navigation checks; the
interactive loop in ``runtime.loop`` does all reading and printing.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path

from ..actions import SORT_ACTIONS, MenuAction
from ..errors import InvalidMenuChoice, NavigationTargetMissing, NavigationTargetNotDirectory
from ..listing_model import SortMode


def parse_menu_choice(raw: str) -> MenuAction:
    """Parse one line of menu input; raises ``InvalidMenuChoice``."""
    text = raw.strip()
    try:
        return MenuAction(int(text))
    except ValueError:
        raise InvalidMenuChoice(text) from None


def join_navigation_path(current: Path, name: str) -> Path:
    """Join ``name`` under ``current`` and normalize ``.``/``..`` segments.

    Absolute names are still joined below ``current`` rather than replacing it.
    """
    return Path(os.path.normpath(f"{current}{os.sep}{name}"))


@dataclass
class SessionState:
    """The only state that survives between loop iterations."""

    current_path: Path
    include_subdirectories: bool = False
    sort_mode: SortMode = SortMode.NONE

    def descend(self, name: str, *, require_directory: bool = False) -> Path:
        """Switch ``current_path`` to ``current_path/name`` when it exists.

        Any existing target is accepted unless ``require_directory`` is set.
        On failure the state is left untouched and the error is raised.
        """
        target = join_navigation_path(self.current_path, name.strip())
        try:
            target_stat = os.stat(target)
        except OSError as exc:
            raise NavigationTargetMissing(target, exc) from exc
        if require_directory and not stat.S_ISDIR(target_stat.st_mode):
            raise NavigationTargetNotDirectory(target)
        self.current_path = target
        return target

    def toggle_recursion(self) -> bool:
        self.include_subdirectories = not self.include_subdirectories
        return self.include_subdirectories

    def set_sort_mode(self, mode: SortMode) -> None:
        self.sort_mode = mode


__all__ = [
    "MenuAction",
    "SORT_ACTIONS",
    "parse_menu_choice",
    "join_navigation_path",
    "SessionState",
]
