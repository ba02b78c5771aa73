"""Main CLI dispatcher for sitescan.

Each command lives in its own module that contributes a parser
(``add_*_parser``) and a runner (``run_*``); this module wires them up.
"""

import argparse
import logging
import sys

from sitescan import __version__
from .scan import add_scan_parser, add_stats_parser, run_scan, run_stats
from .dump import add_dump_parser, run_dump

COMMANDS = {
    "scan": run_scan,
    "stats": run_stats,
    "dump": run_dump,
}


def setup_logging(args):
    level = logging.DEBUG if args.debug else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def build_parser():
    parser = argparse.ArgumentParser(
        description="sitescan - Doop names for Java allocation sites, methods and field accesses",
        prog="sitescan",
    )
    parser.add_argument("--version", action="version", version="sitescan %s" % __version__)

    subparsers = parser.add_subparsers(
        dest="command", help="Available commands", required=True
    )
    add_scan_parser(subparsers)
    add_stats_parser(subparsers)
    add_dump_parser(subparsers)
    return parser


def main(argv=None):
    """Main entry point for the sitescan CLI.

    Returns:
        int: Exit code (0 for success, 1 if any source failed).
    """
    args = build_parser().parse_args(argv)
    setup_logging(args)
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
