"""
Pretty printing for AST nodes.

Prints a node's kind and set attributes on one line, then each structural
field indented below it.
"""

import sys
import io
from .metaast import ASTNode


class ASTPrettyPrinter(object):
    """Indented tree printer.

    Attributes:
        out: Output stream for writing formatted output.
        eol: End-of-line string (default: "\\n").
        attrs: If True, print the plain attributes of each node.
    """

    def __init__(self, out=None, eol="\n", attrs=True):
        if out is None:
            out = sys.stdout
        self.out = out
        self.eol = eol
        self.attrs = attrs

    def isLeaf(self, node):
        if isinstance(node, ASTNode):
            return False
        else:
            return not isinstance(node, (list, tuple))

    def header(self, node):
        parts = []
        if self.attrs:
            for attr in node.__attrs__:
                value = getattr(node, attr.name)
                if value is not None:
                    parts.append("%s=%s" % (attr.name, value))
        if parts:
            return "%s(%s)" % (type(node).__name__, ", ".join(parts))
        return type(node).__name__

    def handleContainer(self, node, label, tabs):
        if isinstance(node, list):
            l, r = "[", "]"
        else:
            l, r = "(", ")"

        if not node:
            self.out.write("%s%s%s%s%s" % (tabs, label, l, r, self.eol))
        else:
            self.out.write("%s%s%s%s" % (tabs, label, l, self.eol))
            for i, child in enumerate(node):
                self(child, "%d = " % i, tabs + "\t")
            self.out.write("%s%s%s" % (tabs, r, self.eol))

    def __call__(self, node, label, tabs):
        if isinstance(node, (list, tuple)):
            self.handleContainer(node, label, tabs)
        elif self.isLeaf(node):
            self.out.write("%s%s%r%s" % (tabs, label, node, self.eol))
        else:
            self.out.write("%s%s%s%s" % (tabs, label, self.header(node), self.eol))
            for name, child in node.fields():
                self(child, "%s = " % name, tabs + "\t")

    def process(self, node):
        self(node, "", "")


def pprint(node, out=None, eol="\n", attrs=True):
    """Pretty print ``node`` to ``out`` (default: stdout)."""
    ASTPrettyPrinter(out=out, eol=eol, attrs=attrs).process(node)


def toString(node, eol="\n", attrs=True):
    """Return the pretty printed form of ``node``."""
    out = io.StringIO()
    pprint(node, out=out, eol=eol, attrs=attrs)
    return out.getvalue()
