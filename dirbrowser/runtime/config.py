"""Persistent JSON config helpers.

Stores scan worker limits, symlink handling, and session behavior switches.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..listing_model import DEFAULT_MAX_WORKERS, SortMode, parse_sort_mode

logger = logging.getLogger(__name__)

APP_NAME = "dirbrowser"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


@dataclass(frozen=True)
class BrowserOptions:
    """Effective settings for one browser session."""

    max_workers: int = DEFAULT_MAX_WORKERS
    follow_symlinks: bool = False
    exit_on_empty: bool = True
    descend_requires_directory: bool = False
    color: bool = True
    sort_mode: SortMode = SortMode.NONE


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never stops the browser.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot write config %s: %s", CONFIG_PATH, exc)


def _coerce_bool(value: object, default: bool) -> bool:
    """Only explicit JSON booleans are accepted."""
    return value if isinstance(value, bool) else default


def _coerce_positive_int(value: object, default: int) -> int:
    """Booleans, non-integers and values below 1 fall back to ``default``."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return default
    return value


def _coerce_sort_mode(value: object) -> SortMode:
    if not isinstance(value, str):
        return SortMode.NONE
    try:
        return parse_sort_mode(value)
    except ValueError:
        logger.warning("ignoring unknown sort mode in config: %r", value)
        return SortMode.NONE


def load_browser_options() -> BrowserOptions:
    """Load ``BrowserOptions`` from config with per-key validation."""
    data = load_config()
    defaults = BrowserOptions()
    return BrowserOptions(
        max_workers=_coerce_positive_int(data.get("max_workers"), defaults.max_workers),
        follow_symlinks=_coerce_bool(data.get("follow_symlinks"), defaults.follow_symlinks),
        exit_on_empty=_coerce_bool(data.get("exit_on_empty"), defaults.exit_on_empty),
        descend_requires_directory=_coerce_bool(
            data.get("descend_requires_directory"),
            defaults.descend_requires_directory,
        ),
        color=_coerce_bool(data.get("color"), defaults.color),
        sort_mode=_coerce_sort_mode(data.get("sort")),
    )


def save_browser_options(options: BrowserOptions) -> None:
    """Persist ``options`` while keeping unrelated keys in the config file."""
    config = load_config()
    config.update(
        {
            "max_workers": max(1, int(options.max_workers)),
            "follow_symlinks": bool(options.follow_symlinks),
            "exit_on_empty": bool(options.exit_on_empty),
            "descend_requires_directory": bool(options.descend_requires_directory),
            "color": bool(options.color),
            "sort": options.sort_mode.value,
        }
    )
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "BrowserOptions",
    "load_config",
    "save_config",
    "load_browser_options",
    "save_browser_options",
]
