"""Dump command: print the typed tree of one Java source."""

import logging

from sitescan.application import ScanConfig, SiteScanError, parseSource
from sitescan.application.pipeline import readSource
from sitescan.analysis import nodecount
from sitescan.language.asttools import astpprint
from sitescan.util.io import formatting

from .scan import add_common_options

LOG = logging.getLogger(__name__)


def add_dump_parser(subparsers):
    """Add dump subcommand parser."""
    dump_parser = subparsers.add_parser(
        "dump",
        help="Print the typed tree of a Java source"
    )
    add_common_options(dump_parser)
    dump_parser.add_argument(
        "source",
        help="Java file to dump"
    )
    dump_parser.add_argument(
        "--no-attrs",
        action="store_true",
        help="Leave symbols, types and offsets out of the dump"
    )


def run_dump(args):
    try:
        unit = parseSource(readSource(args.source), args.source, ScanConfig.fromArgs(args))
    except SiteScanError as e:
        LOG.error("%s", e)
        return 1

    if unit.syntaxErrors:
        LOG.warning("%s: %s", args.source, formatting.plural(unit.syntaxErrors, "syntax error"))
    LOG.info("%s: %d nodes", args.source, nodecount.total(nodecount.countVisited(unit.tree)))
    astpprint.pprint(unit.tree, attrs=not args.no_attrs)
    return 0
