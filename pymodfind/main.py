"""Main CLI entry point for pymodfind.

Provides commands: find, cache
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from pymodfind.cli.cache import cache_command
from pymodfind.cli.find import find_command
from pymodfind.locator.cache import DEFAULT_CACHE_FILE

logger = logging.getLogger("pymodfind.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pymodfind",
        description="pymodfind - locate installed Python modules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    find_parser = subparsers.add_parser(
        "find",
        help="Locate Python modules and print the search path they need",
    )
    find_parser.add_argument(
        "modules",
        nargs="+",
        help="Names of the Python modules to look for",
    )
    find_parser.add_argument(
        "--python",
        help=(
            "Python interpreter used to import each module and report its "
            "location. Looked up on PATH when not absolute."
        ),
    )
    find_parser.add_argument(
        "-p",
        "--path",
        action="append",
        default=[],
        metavar="DIR",
        help="Directory searched first for every module (repeatable)",
    )
    find_parser.add_argument(
        "--no-pythonpath",
        action="store_true",
        help="Do not consider the PYTHONPATH environment variable",
    )
    find_parser.add_argument(
        "--no-default-path",
        action="store_true",
        help="Do not look in any default path such as PYTHONPATH",
    )
    find_parser.add_argument(
        "-r",
        "--required",
        action="store_true",
        help="Exit with non-zero status when any module is missing",
    )
    find_parser.add_argument(
        "--search-path",
        help=(
            "Previously combined search path (os.pathsep separated) that "
            "found directories are appended to"
        ),
    )
    find_parser.add_argument(
        "--cache-file",
        help=(
            "JSON file remembering results across runs (default: config "
            f"cache_file, then {DEFAULT_CACHE_FILE}). Modules recorded as "
            "NOTFOUND are not looked up again until cleared."
        ),
    )
    find_parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Neither read nor write the cache file",
    )
    find_parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional configuration. Can be a path to a TOML/JSON file or an "
            "inline TOML/JSON string. Command-line options take precedence."
        ),
    )
    find_parser.add_argument(
        "-f",
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )

    cache_parser = subparsers.add_parser(
        "cache",
        help="Show or clear stored results",
    )
    cache_parser.add_argument(
        "action",
        choices=["show", "clear"],
        help="show: list entries; clear: forget entries so they are looked up again",
    )
    cache_parser.add_argument(
        "modules",
        nargs="*",
        help="Modules to clear (default: all)",
    )
    cache_parser.add_argument(
        "--cache-file",
        default=DEFAULT_CACHE_FILE,
        help=f"Cache file (default: {DEFAULT_CACHE_FILE})",
    )

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == "find":
        return find_command(args)
    elif args.command == "cache":
        return cache_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
