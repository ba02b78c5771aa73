"""Abstract node categories of the Java syntax tree.

Concrete node kinds live in ``sitescan.language.java.ast``; they derive from
one of the categories below, mirroring javac's tree hierarchy: type
references are expressions, and class and variable declarations are
statements (they can appear in blocks).
"""

from sitescan.language.asttools.metaast import ASTNode

__all__ = ["JavaTree", "Expression", "Statement", "isJavaTree"]


def isJavaTree(node):
    return isinstance(node, JavaTree)


class JavaTree(ASTNode):
    """Root of the Java node family.

    Every concrete kind has a ``pos`` attribute: the raw character offset
    that identifies the node in its compilation unit, or -1 when unknown.
    Which offset that is depends on the kind; for named declarations and
    member selects it is the offset of the name.
    """

    def isExpression(self):
        return False

    def isStatement(self):
        return False


class Expression(JavaTree):
    """Expressions, including type references."""

    def isExpression(self):
        return True


class Statement(JavaTree):
    """Statements, including local class and variable declarations."""

    def isStatement(self):
        return True
