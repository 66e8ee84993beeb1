"""Public runtime entry points.

This package groups session state, persisted config, and the interactive
menu loop. ``run_session`` is imported lazily to keep package imports light.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import SessionIO


def run_session(*args, **kwargs):
    """Lazily import the loop runner to avoid package-import cycles."""
    from .loop import run_session as _run_session

    return _run_session(*args, **kwargs)


def __getattr__(name: str):
    if name == "SessionIO":
        from . import loop as _loop

        return _loop.SessionIO
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_session",
    "SessionIO",
]
