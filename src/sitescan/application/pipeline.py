"""Scan pipeline: source text to ScanResult.

Each unit goes through three timed phases:

    parse    tree-sitter concrete syntax tree
    convert  typed Java tree with symbols bound (sitescan.frontend)
    scan     InitialScanner over the typed tree

By default every unit gets a fresh scanner and the per-unit results are
merged. With ``ScanConfig.sharedScanner`` one scanner sees every unit, so
allocation counters keep counting across units.
"""

import logging
import os

from sitescan.util.application.console import Console
from sitescan.util.io import formatting
from sitescan.util.typedispatch import TypeDispatchError
from sitescan.analysis.initialscanner import InitialScanner
from sitescan.language.java.linemap import LineMap
from sitescan import frontend

from . import errors
from .config import ScanConfig
from .result import ScanResult

LOG = logging.getLogger(__name__)

JAVA_SUFFIX = ".java"


class ParsedUnit(object):
    """
    A compilation unit ready to scan.

    Attributes:
        sourcefile: Name the unit is reported under.
        tree: The typed CompilationUnit.
        lineMap: Offset to line/column map of the unit's text.
        syntaxErrors: Number of syntax errors recovered from.
    """
    __slots__ = "sourcefile", "tree", "lineMap", "syntaxErrors"

    def __init__(self, sourcefile, tree, lineMap, syntaxErrors=0):
        self.sourcefile = sourcefile
        self.tree = tree
        self.lineMap = lineMap
        self.syntaxErrors = syntaxErrors


def readSource(path):
    """Read a Java source file as text."""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise errors.SourceError("cannot read %s: %s" % (path, e)) from e

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise errors.SourceError("%s is not valid UTF-8: %s" % (path, e)) from e


def collectSources(paths):
    """Expand directories into the .java files below them, sorted by path."""
    result = []
    for path in paths:
        if os.path.isdir(path):
            found = []
            for dirpath, dirnames, filenames in os.walk(path):
                dirnames.sort()
                for filename in filenames:
                    if filename.endswith(JAVA_SUFFIX):
                        found.append(os.path.join(dirpath, filename))
            result.extend(sorted(found))
        else:
            result.append(path)
    return result


class Pipeline(object):
    """
    Runs the parse, convert and scan phases over one or more units.

    Attributes:
        config: ScanConfig for every phase.
        console: Console the phases are timed on.
        builder: SignatureBuilder handed to the scanners (None for the default).
    """

    def __init__(self, config=None, console=None, builder=None):
        self.config = config if config is not None else ScanConfig()
        self.console = console if console is not None else Console()
        self.builder = builder

    def makeScanner(self):
        return InitialScanner(
            builder=self.builder, staleMethodContext=self.config.staleMethodContext
        )

    def parse(self, text, sourcefile):
        with self.console.scope("parse"):
            cst = frontend.parse(text)
        with self.console.scope("convert"):
            tree, syntaxErrors = frontend.convert(cst, text, sourcefile)

        if syntaxErrors:
            if self.config.failOnSyntaxError:
                raise errors.SourceError(
                    "%s has %s" % (sourcefile, formatting.plural(syntaxErrors, "syntax error"))
                )
            LOG.debug("%s: recovered from %s", sourcefile, formatting.plural(syntaxErrors, "syntax error"))

        lineMap = LineMap(text, self.config.tabWidth)
        return ParsedUnit(sourcefile, tree, lineMap, syntaxErrors)

    def scanParsed(self, unit, scanner):
        with self.console.scope("scan"):
            try:
                scanner.scanUnit(unit.tree, unit.lineMap)
            except TypeDispatchError as e:
                errors.abort(unit.sourcefile, e)

    def scanUnits(self, units):
        """Scan already parsed units; used directly for hand-built trees."""
        if self.config.sharedScanner:
            scanner = self.makeScanner()
            for unit in units:
                self.scanParsed(unit, scanner)
            result = ScanResult.fromScanner(scanner)
            result.sourcefiles.extend(unit.sourcefile for unit in units)
            return result

        result = ScanResult()
        for unit in units:
            scanner = self.makeScanner()
            self.scanParsed(unit, scanner)
            partial = ScanResult.fromScanner(scanner)
            partial.sourcefiles.append(unit.sourcefile)
            result.merge(partial)
        return result

    def scanSource(self, text, sourcefile="<string>"):
        with self.console.scope(sourcefile):
            unit = self.parse(text, sourcefile)
            return self.scanUnits([unit])

    def scanFiles(self, paths):
        """Scan every file (directories are searched for .java files)."""
        paths = collectSources(paths)

        units = []
        failures = []
        scanner = self.makeScanner() if self.config.sharedScanner else None
        result = ScanResult()

        for path in paths:
            with self.console.scope(path):
                try:
                    unit = self.parse(readSource(path), path)
                    if scanner is not None:
                        self.scanParsed(unit, scanner)
                    else:
                        partial = self.scanUnits([unit])
                        result.merge(partial)
                    units.append(unit)
                except errors.SiteScanError as e:
                    if not self.config.keepGoing:
                        raise
                    LOG.exception("Skipping %s", path)
                    failures.append((path, str(e)))

        if scanner is not None:
            result = ScanResult.fromScanner(scanner)
        result.sourcefiles = [unit.sourcefile for unit in units]
        result.failures = failures
        return result


def scanSource(text, sourcefile="<string>", config=None, console=None, builder=None):
    """Scan one unit given as text."""
    return Pipeline(config, console, builder).scanSource(text, sourcefile)


def scanFile(path, config=None, console=None, builder=None):
    return Pipeline(config, console, builder).scanFiles([path])


def scanFiles(paths, config=None, console=None, builder=None):
    return Pipeline(config, console, builder).scanFiles(paths)


def parseSource(text, sourcefile="<string>", config=None):
    """Parse and convert one unit without scanning it."""
    return Pipeline(config).parse(text, sourcefile)
