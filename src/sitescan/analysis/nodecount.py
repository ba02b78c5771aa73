"""Node counting, two independent ways.

``countReachable`` walks the generated ``visitChildren`` of each node, which
comes straight from the node schemas. ``VisitCounter`` counts what a
TreeScanner actually visits through its hand-written rules. For any tree the
two totals must agree; a difference means a rule skips or repeats a child.
"""

import collections

from sitescan.analysis.treescanner import TreeScanner


def countReachable(root):
    """Number of nodes per kind reachable from ``root`` through the node schemas."""
    counts = collections.Counter()

    def visit(node):
        counts[type(node)] += 1
        node.visitChildren(visit)

    visit(root)
    return counts


class VisitCounter(TreeScanner):
    """A TreeScanner that records how often it visits each node kind."""

    def __init__(self):
        self.counts = collections.Counter()

    def scan(self, tree):
        if tree is not None and not isinstance(tree, (list, tuple)):
            self.counts[type(tree)] += 1
        TreeScanner.scan(self, tree)


def countVisited(root):
    counter = VisitCounter()
    counter.scan(root)
    return counter.counts


def total(counts):
    return sum(counts.values())
