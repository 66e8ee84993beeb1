"""Numbered menu actions shared by the session loop and menu rendering."""

from __future__ import annotations

import enum

from .listing_model import SortMode


class MenuAction(enum.IntEnum):
    """Numbered menu actions, in menu order."""

    DESCEND = 1
    TOGGLE_RECURSION = 2
    SORT_BY_NAME = 3
    SORT_BY_SIZE = 4
    SORT_BY_MODIFIED = 5
    SORT_BY_PERMISSIONS = 6
    EXIT = 7


SORT_ACTIONS: dict[MenuAction, SortMode] = {
    MenuAction.SORT_BY_NAME: SortMode.NAME,
    MenuAction.SORT_BY_SIZE: SortMode.SIZE,
    MenuAction.SORT_BY_MODIFIED: SortMode.MODIFIED,
    MenuAction.SORT_BY_PERMISSIONS: SortMode.PERMISSIONS,
}


__all__ = [
    "MenuAction",
    "SORT_ACTIONS",
]
