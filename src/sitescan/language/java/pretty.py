"""Printed form of type references.

Mirrors what javac's tree printer produces for the subtrees that can name a
type (identifiers, qualified names, parameterized and array types,
wildcards, annotated types) and for the constant expressions an annotation
may carry as arguments. The length of this text is what allocation
spans are measured with.
"""

from sitescan.util.typedispatch import *
from sitescan.language.java import ast

PREFIX = {"preinc": "++", "predec": "--"}
POSTFIX = {"postinc": "++", "postdec": "--"}

ESCAPES = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
    "\"": "\\\"",
    "'": "\\'",
    "\\": "\\\\",
}


def quote(text, delimiter):
    return delimiter + "".join(ESCAPES.get(c, c) for c in text) + delimiter


def literalToString(typetag, value):
    """Java spelling of a literal value.

    Converted trees keep the source text, which is returned unchanged. Values
    built in Python (True, None, unquoted strings) are spelled as Java writes them.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if typetag == "String" and isinstance(value, str):
        if value.startswith("\"") and len(value) > 1 and value.endswith("\""):
            return value
        return quote(value, "\"")
    if typetag == "char" and isinstance(value, str):
        if value.startswith("'") and len(value) > 1 and value.endswith("'"):
            return value
        return quote(value, "'")
    if typetag == "long" and isinstance(value, int):
        return "%dL" % value
    if typetag == "float" and isinstance(value, float):
        return "%rf" % value
    return str(value)


class TypePrinter(TypeDispatcher):
    __concrete__ = True

    @dispatch(ast.Ident)
    def visitIdent(self, node):
        return node.name

    @dispatch(ast.FieldAccess)
    def visitFieldAccess(self, node):
        return "%s.%s" % (self(node.selected), node.name)

    @dispatch(ast.TypeApply)
    def visitTypeApply(self, node):
        return "%s<%s>" % (self(node.clazz), ", ".join(self(arg) for arg in node.arguments))

    @dispatch(ast.ArrayTypeTree)
    def visitArrayTypeTree(self, node):
        return "%s[]" % self(node.elemtype)

    @dispatch(ast.PrimitiveTypeTree)
    def visitPrimitiveTypeTree(self, node):
        return node.typetag

    @dispatch(ast.Wildcard)
    def visitWildcard(self, node):
        kind = node.kind.kind
        if kind == "extends" or kind == "super":
            return "? %s %s" % (kind, self(node.inner))
        return "?"

    @dispatch(ast.TypeUnion)
    def visitTypeUnion(self, node):
        return " | ".join(self(alt) for alt in node.alternatives)

    @dispatch(ast.TypeIntersection)
    def visitTypeIntersection(self, node):
        return " & ".join(self(bound) for bound in node.bounds)

    @dispatch(ast.AnnotatedType)
    def visitAnnotatedType(self, node):
        annotations = " ".join(self(a) for a in node.annotations)
        return "%s %s" % (annotations, self(node.underlyingType))

    @dispatch(ast.Annotation)
    def visitAnnotation(self, node):
        if node.args:
            return "@%s(%s)" % (
                self(node.annotationType),
                ", ".join(self(arg) for arg in node.args),
            )
        return "@%s" % self(node.annotationType)

    @dispatch(ast.Assign)
    def visitAssign(self, node):
        return "%s = %s" % (self(node.lhs), self(node.rhs))

    @dispatch(ast.Literal)
    def visitLiteral(self, node):
        return literalToString(node.typetag, node.value)

    @dispatch(ast.Parens)
    def visitParens(self, node):
        return "(%s)" % self(node.expr)

    @dispatch(ast.Binary)
    def visitBinary(self, node):
        return "%s %s %s" % (self(node.lhs), node.operator, self(node.rhs))

    @dispatch(ast.Unary)
    def visitUnary(self, node):
        if node.operator in POSTFIX:
            return "%s%s" % (self(node.arg), POSTFIX[node.operator])
        return "%s%s" % (PREFIX.get(node.operator, node.operator), self(node.arg))

    @dispatch(ast.Conditional)
    def visitConditional(self, node):
        return "%s ? %s : %s" % (self(node.cond), self(node.truepart), self(node.falsepart))

    @dispatch(ast.TypeCast)
    def visitTypeCast(self, node):
        return "(%s)%s" % (self(node.clazz), self(node.expr))

    @dispatch(ast.NewArray)
    def visitNewArray(self, node):
        # annotation element values only ever hold the initializer form
        return "{%s}" % ", ".join(self(elem) for elem in node.elems)

    @dispatch(ast.Erroneous)
    def visitErroneous(self, node):
        if node.text:
            return node.text
        return "(ERROR)"


_printer = TypePrinter()


def typeToString(node):
    """Printed form of a type reference tree."""
    return _printer(node)
