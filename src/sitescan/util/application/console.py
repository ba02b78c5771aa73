"""
Phase timing console.

A scan is split into named phases (one scope per source file, with parse,
convert and scan below it). The console keeps the tree of scopes, times each
one, and reports begin/end lines when enabled. Reports go to stderr so that a
JSON document written to stdout stays clean.
"""

import collections
import contextlib
import sys
import time
from sitescan.util.io import formatting


class Scope(object):
    """A timed node in the phase tree.

    Attributes:
        parent: Parent scope, or None for the root.
        name: Name of this scope.
        children: Child scopes in creation order.
        elapsed: Seconds the scope was open, None while it still is.
    """
    __slots__ = "parent", "name", "children", "start", "elapsed"

    def __init__(self, parent, name):
        self.parent = parent
        self.name = name
        self.children = []
        self.start = time.perf_counter()
        self.elapsed = None

    def close(self):
        self.elapsed = time.perf_counter() - self.start

    def path(self):
        """Tuple of scope names from the root (excluded) to this scope."""
        if self.parent is None:
            return ()
        return self.parent.path() + (self.name,)

    def walk(self):
        yield self
        for child in self.children:
            for scope in child.walk():
                yield scope


class Console(object):
    """Hierarchical phase reporting with timing.

    Attributes:
        out: Output stream (default: sys.stderr).
        root: Root scope of the hierarchy.
        current: Currently open scope.
        enabled: If False, scopes are still timed but nothing is written.
    """

    def __init__(self, out=None, enabled=False):
        self.out = out if out is not None else sys.stderr
        self.root = Scope(None, "root")
        self.current = self.root
        self.enabled = enabled

    def path(self):
        """Formatted path of the current scope, e.g. ``[ scan | Foo.java ]``."""
        return "[ %s ]" % " | ".join(self.current.path())

    @contextlib.contextmanager
    def scope(self, name):
        """Time the ``with`` block as ``name``, a child of the current scope.

        Example:
            with console.scope("parse"):
                tree = parser.parse(source)
        """
        scope = Scope(self.current, name)
        self.current.children.append(scope)
        self.current = scope
        self.output("begin %s" % self.path(), 0)
        try:
            yield scope
        finally:
            scope.close()
            self.output("end   %s %s" % (self.path(), formatting.elapsedTime(scope.elapsed)), 0)
            self.current = scope.parent

    def phaseTotals(self, names):
        """Total seconds spent in closed scopes named in ``names``, by name."""
        totals = collections.OrderedDict((name, 0.0) for name in names)
        for scope in self.root.walk():
            if scope.name in totals and scope.elapsed is not None:
                totals[scope.name] += scope.elapsed
        return totals

    def summary(self, names):
        """Write one line per phase with its total time over every file."""
        for name, total in self.phaseTotals(names).items():
            self.output("%-8s %s" % (name, formatting.elapsedTime(total)))

    def output(self, s, tabs=1):
        """Write a line, indented by ``tabs`` tab characters."""
        if not self.enabled:
            return
        self.out.write("\t" * tabs + s + "\n")
