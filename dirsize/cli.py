from __future__ import annotations
import argparse
import logging
from typing import List, Optional
from rich.logging import RichHandler
from . import __version__
from .drives import describe, partition_usage
from .errors import InvalidSortKey, OutputWriteError, PathStructureError
from .report import (
    DEFAULT_SORT, SortBy, make_console, print_space_usage, print_top_extensions, write_lines,
)
from .scanner import scan_path

APP_NAME = "dirsize"
DEFAULT_ROOT = "."

logger = logging.getLogger(APP_NAME)

def _sort_key(value: str) -> SortBy:
    try:
        return SortBy.parse(value)
    except InvalidSortKey as e:
        raise argparse.ArgumentTypeError(str(e)) from e

def _non_negative(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Show how much space each directory under ROOT takes, "
                    "and optionally which file types use the most.",
    )
    parser.add_argument("root", nargs="?", default=DEFAULT_ROOT,
                        help="directory to scan (default: current directory)")
    parser.add_argument("-e", "--top-exts", type=_non_negative, metavar="N",
                        help="number of file extensions taking up the most space to show")
    parser.add_argument("-s", "--sort", dest="sort_by", type=_sort_key,
                        default=DEFAULT_SORT, metavar="{name,size}",
                        help="order directories by name or size (default: %(default)s)")
    parser.add_argument("-r", "--reverse", action="store_true",
                        help="reverse the listing order")
    parser.add_argument("--si", action="store_true",
                        help="use powers of 1000 (kB, MB) instead of 1024 (KiB, MiB)")
    parser.add_argument("--fs", action="store_true",
                        help="also show usage of the filesystem holding ROOT")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser

def setup_logging(verbose: bool = False) -> None:
    handler = RichHandler(console=make_console(stderr=True), show_time=False,
                          show_path=False, markup=False)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(message)s", handlers=[handler], force=True)

def run(args: argparse.Namespace, console=None) -> int:
    if console is None:
        console = make_console()
    try:
        result = scan_path(args.root)
        if args.top_exts is not None:
            print_top_extensions(console, result.extensions.items(), args.top_exts,
                                 args.reverse, args.si)
        print_space_usage(console, args.root, result.tree, args.sort_by,
                          args.reverse, args.si)
        if args.fs:
            usage = partition_usage(args.root)
            if usage is not None:
                write_lines(console, ["", describe(usage, args.si)])
    except PathStructureError as e:
        logger.error("Walk produced a path outside the scan root: %s", e)
        return 1
    except OutputWriteError as e:
        logger.error("%s", e)
        return 1
    if result.errors:
        logger.info("%d entries could not be read", len(result.errors))
    return 0

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    return run(args)
