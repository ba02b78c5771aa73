"""Scan and stats commands."""

import json
import logging
import sys

from sitescan.application import ScanConfig, SiteScanError, scanFiles
from sitescan.language.java.linemap import DEFAULT_TAB_WIDTH
from sitescan.util.application.console import Console

LOG = logging.getLogger(__name__)

PHASES = ("parse", "convert", "scan")


def add_common_options(parser):
    """Options every command that parses sources accepts."""
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output (phase timings on stderr)"
    )
    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Debug output"
    )
    parser.add_argument(
        "--tab-width",
        type=int,
        default=DEFAULT_TAB_WIDTH,
        help="Tab stop width for column numbers (default: %(default)s)"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject sources with syntax errors"
    )


def add_scan_options(parser):
    add_common_options(parser)
    parser.add_argument(
        "sources",
        nargs="+",
        help="Java files or directories to scan"
    )
    parser.add_argument(
        "-k", "--keep-going",
        action="store_true",
        help="Skip sources that fail instead of stopping"
    )
    parser.add_argument(
        "--stale-method-context",
        action="store_true",
        help="Name allocations outside methods after the last method seen"
    )
    parser.add_argument(
        "--shared-scanner",
        action="store_true",
        help="Number allocations across all sources instead of per source"
    )


def add_scan_parser(subparsers):
    """Add scan subcommand parser."""
    scan_parser = subparsers.add_parser(
        "scan",
        help="Name allocation sites, method declarations and field accesses"
    )
    add_scan_options(scan_parser)
    scan_parser.add_argument(
        "-o", "--output",
        help="Write the JSON result to this file instead of stdout"
    )
    scan_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: %(default)s)"
    )


def add_stats_parser(subparsers):
    """Add stats subcommand parser."""
    stats_parser = subparsers.add_parser(
        "stats",
        help="Count what a scan finds"
    )
    add_scan_options(stats_parser)


def scan_with_args(args):
    config = ScanConfig.fromArgs(args)
    console = Console(enabled=args.verbose or args.debug)
    with console.scope("sitescan"):
        result = scanFiles(args.sources, config=config, console=console)
    console.summary(PHASES)
    return result


def run_scan(args):
    """Scan the sources and write the three maps as JSON."""
    try:
        result = scan_with_args(args)
    except SiteScanError as e:
        LOG.error("%s", e)
        return 1

    document = result.toDict()
    if result.failures:
        document["failures"] = [
            {"sourcefile": sourcefile, "error": message}
            for sourcefile, message in result.failures
        ]

    if args.output:
        with open(args.output, "w") as f:
            json.dump(document, f, indent=args.indent, sort_keys=True)
            f.write("\n")
    else:
        json.dump(document, sys.stdout, indent=args.indent, sort_keys=True)
        sys.stdout.write("\n")

    return 1 if result.failures else 0


def run_stats(args):
    try:
        result = scan_with_args(args)
    except SiteScanError as e:
        LOG.error("%s", e)
        return 1

    for name, value in result.stats().items():
        print("%-20s %d" % (name, value))
    for sourcefile, message in result.failures:
        print("failed: %s: %s" % (sourcefile, message))
    return 1 if result.failures else 0
