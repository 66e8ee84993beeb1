"""Menu text shown after every listing."""

from __future__ import annotations

from pygments.console import ansiformat

from ..actions import SORT_ACTIONS, MenuAction
from ..listing_model import SortMode

MENU_LABELS: dict[MenuAction, str] = {
    MenuAction.DESCEND: "Enter directory",
    MenuAction.TOGGLE_RECURSION: "Toggle subdirectories",
    MenuAction.SORT_BY_NAME: "Sort by Name",
    MenuAction.SORT_BY_SIZE: "Sort by Size",
    MenuAction.SORT_BY_MODIFIED: "Sort by Modification Time",
    MenuAction.SORT_BY_PERMISSIONS: "Sort by Permissions",
    MenuAction.EXIT: "Exit",
}

CHOICE_PROMPT = "Enter your choice: "
DIRECTORY_PROMPT = "Enter directory name: "
INVALID_CHOICE_MESSAGE = "Invalid choice. Please try again."
EMPTY_DIRECTORY_MESSAGE = "No files found in the specified directory."


def format_menu(include_subdirectories: bool, sort_mode: SortMode, *, color: bool = False) -> list[str]:
    """Return menu lines, with the current recursion flag on the toggle row."""
    heading = ansiformat("*white*", "Options:") if color else "Options:"
    lines = ["", heading]
    for action in MenuAction:
        label = MENU_LABELS[action]
        if action is MenuAction.TOGGLE_RECURSION:
            flag = "true" if include_subdirectories else "false"
            label = f"{label} (Currently: {flag})"
        elif SORT_ACTIONS.get(action) is sort_mode:
            label = f"{label} *"
        key = ansiformat("yellow", str(int(action))) if color else str(int(action))
        lines.append(f"{key}. {label}")
    return lines


__all__ = [
    "MENU_LABELS",
    "CHOICE_PROMPT",
    "DIRECTORY_PROMPT",
    "INVALID_CHOICE_MESSAGE",
    "EMPTY_DIRECTORY_MESSAGE",
    "format_menu",
]
