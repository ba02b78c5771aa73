"""tree-sitter parsing of Java source.

tree-sitter works on UTF-8 bytes while every offset in the typed tree is a
character offset into the unit's text, so conversion goes through an
OffsetMap.
"""

import tree_sitter_java
from tree_sitter import Language, Parser

JAVA_LANGUAGE = Language(tree_sitter_java.language())

_parser = None


def getParser():
    global _parser
    if _parser is None:
        _parser = Parser(JAVA_LANGUAGE)
    return _parser


def parse(text):
    """Parse Java source text into a tree-sitter Tree."""
    return getParser().parse(text.encode("utf-8"))


class OffsetMap(object):
    """Translates UTF-8 byte offsets of a text into character offsets."""

    def __init__(self, text):
        data = text.encode("utf-8")
        if len(data) == len(text):
            self.charOffsets = None
        else:
            offsets = []
            for index, ch in enumerate(text):
                offsets.extend([index] * len(ch.encode("utf-8")))
            offsets.append(len(text))
            self.charOffsets = offsets

    def __call__(self, byteOffset):
        if self.charOffsets is None:
            return byteOffset
        return self.charOffsets[byteOffset]


COMMENT_KINDS = frozenset(["line_comment", "block_comment"])


def nodeText(node):
    return node.text.decode("utf-8")


def nodeKey(node):
    """Identity of a node that survives re-wrapping by the binding."""
    return (node.start_byte, node.end_byte, node.type)


def namedChildren(node):
    return [child for child in node.named_children if child.type not in COMMENT_KINDS]


def childOfType(node, *kinds):
    for child in node.named_children:
        if child.type in kinds:
            return child
    return None


def childrenOfType(node, *kinds):
    return [child for child in node.named_children if child.type in kinds]


def modifierFlags(node):
    """Keyword modifiers (``public``, ``static``, ...) of a declaration node."""
    mods = childOfType(node, "modifiers")
    if mods is None:
        return frozenset()
    return frozenset(child.type for child in mods.children if not child.is_named)


def dimensionCount(node):
    """Number of ``[]`` pairs in a ``dimensions`` node (0 for None)."""
    if node is None:
        return 0
    return sum(1 for child in node.children if child.type == "[")


def isSyntaxError(node):
    return node.type == "ERROR" or node.is_missing


def countSyntaxErrors(root):
    """Number of ERROR and MISSING nodes below ``root``."""
    if not root.has_error:
        return 0
    count = 0
    pending = [root]
    while pending:
        node = pending.pop()
        if isSyntaxError(node):
            count += 1
        if node.has_error:
            pending.extend(node.children)
    return count
