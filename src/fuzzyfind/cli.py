"""
Command line interface for the fuzzy finder.

    ff [-dilDNtv] [-c CHAR] [-r ROOT] [--config FILE] [--] query

Matching paths are printed one per line as they are found.
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, Optional, Sequence

from . import __version__
from .config.parser import ConfigParser, ConfigurationError
from .tools.errors import WalkerError
from .tools.fs_walker import FSWalker
from .tools.selftest import run_self_test


logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ff",
        description="Recursively search a directory tree for paths matching a fuzzy query.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Query syntax:
  abc       a, b and c appear in order, not necessarily adjacent
  a=bc=d    b and c must be adjacent
  src/mc    "src" matches within one directory name, then m and c below it

Examples:
  %(prog)s -r ~/code s/mc          # src/main.c
  %(prog)s -D -r . test            # directories only
  %(prog)s -- -weird               # query starting with '-'
        """,
    )
    parser.add_argument("query", nargs="?", help="Fuzzy query pattern")
    parser.add_argument("-c", dest="conseq_char", metavar="CHAR",
                        help="char to toggle Consecutive match (default: '=')")
    parser.add_argument("-d", dest="dotfiles", action="store_true", default=None,
                        help="show Dotfiles")
    parser.add_argument("-i", dest="case_insensitive", action="store_true", default=None,
                        help="case-Insensitive search")
    parser.add_argument("-l", dest="follow_links", action="store_true", default=None,
                        help="follow Links")
    parser.add_argument("-D", dest="only_dirs", action="store_true", default=None,
                        help="only print Directories")
    parser.add_argument("-N", dest="recurse", action="store_const", const=False, default=None,
                        help="do Not recurse into subdirectories")
    parser.add_argument("-r", dest="root", metavar="ROOT",
                        help="set search Root (default: ~)")
    parser.add_argument("-t", dest="run_tests", action="store_true",
                        help="run Tests and exit")
    parser.add_argument("-v", dest="verbose", action="store_true",
                        help="Verbose diagnostics on stderr")
    parser.add_argument("--config", metavar="FILE",
                        help="read option defaults from FILE")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="ff: %(message)s",
        stream=sys.stderr,
    )


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    names = ('conseq_char', 'dotfiles', 'case_insensitive', 'follow_links',
             'only_dirs', 'recurse', 'root')
    return {name: getattr(args, name) for name in names}


def _print_matches(walker: FSWalker) -> None:
    for path in walker.walk_paths():
        print(path, flush=True)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.run_tests:
        return EXIT_SUCCESS if run_self_test(sys.stdout) == 0 else EXIT_FAILURE

    if not args.query:
        parser.error("a query is required")

    config_parser = ConfigParser()
    try:
        result = config_parser.load_defaults(args.config)
        config = config_parser.build_config(args.query, result.defaults, _overrides(args))
    except ConfigurationError as e:
        logger.error(str(e))
        return EXIT_FAILURE

    logger.debug(str(config))
    walker = FSWalker(config)
    try:
        _print_matches(walker)
    except WalkerError as e:
        logger.error(str(e))
        return EXIT_FAILURE
    except BrokenPipeError:
        # Reader went away (e.g. piped into head); silence the flush at exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return EXIT_SUCCESS
    finally:
        logger.debug(f"Walk statistics: {walker.get_stats()}")

    return EXIT_SUCCESS
