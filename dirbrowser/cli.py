"""Command-line front door for dirbrowser.

Parses CLI options, merges them over persisted config, sets up logging, and
dispatches into the interactive session loop.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from .listing_model import SortMode, parse_sort_mode, sort_mode_names
from .runtime import run_session
from .runtime.config import BrowserOptions, load_browser_options, save_browser_options
from .runtime.loop import console_io
from .runtime.session import SessionState

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _sort_mode(value: str) -> SortMode:
    try:
        return parse_sort_mode(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse a directory interactively: list, sort, recurse, and descend."
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to start in. Defaults to current directory.")
    parser.add_argument(
        "--sort",
        type=_sort_mode,
        default=None,
        metavar="MODE",
        help=f"Initial sort mode ({', '.join(sort_mode_names())}).",
    )
    parser.add_argument("-r", "--recursive", action="store_true", help="Start with subdirectories included.")
    parser.add_argument(
        "--max-workers",
        type=_positive_int,
        default=None,
        help="Upper bound on concurrent scan workers.",
    )
    parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Treat symlinks to directories as directories (cycles are skipped).",
    )
    parser.add_argument(
        "--continue-on-empty",
        action="store_true",
        help="Show the menu again for empty directories instead of exiting.",
    )
    parser.add_argument(
        "--strict-descend",
        action="store_true",
        help="Only allow entering targets that are directories.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist the effective options to the config file before starting.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log scan details to stderr (-v info, -vv debug).",
    )
    return parser


def configure_logging(verbosity: int) -> None:
    """Route log records to stderr at a level chosen by ``-v`` count."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def resolve_options(args: argparse.Namespace, base: BrowserOptions) -> BrowserOptions:
    """Overlay explicitly passed CLI flags on config-derived options."""
    overrides: dict[str, object] = {}
    if args.max_workers is not None:
        overrides["max_workers"] = args.max_workers
    if args.follow_symlinks:
        overrides["follow_symlinks"] = True
    if args.continue_on_empty:
        overrides["exit_on_empty"] = False
    if args.strict_descend:
        overrides["descend_requires_directory"] = True
    if args.no_color:
        overrides["color"] = False
    if args.sort is not None:
        overrides["sort_mode"] = args.sort
    return dataclasses.replace(base, **overrides)


def main(default_path: Path | None = None, argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the browser session.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. Exits with a non-zero status when the start directory
    cannot be listed.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    options = resolve_options(args, load_browser_options())
    if args.save_defaults:
        save_browser_options(options)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path) if args.path is not None else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    if options.color and not sys.stdout.isatty():
        options = dataclasses.replace(options, color=False)

    state = SessionState(
        current_path=path,
        include_subdirectories=args.recursive,
        sort_mode=options.sort_mode,
    )
    status = run_session(state, options, console_io())
    if status:
        raise SystemExit(status)


if __name__ == "__main__":
    main()
