"""Concrete node kinds of the Java syntax tree.

Each kind declares its structural children in ``__fields__`` (in source
order) and its non-child attributes in ``__attrs__``; see
``sitescan.language.asttools.metaast`` for the notation. The layout follows
javac's trees so that every kind owns exactly the children javac's do.

Attributes used by the scanners:
    pos: raw source offset (-1 if unknown)
    sym: resolved symbol (ClassSymbol, MethodSymbol or VarSymbol), or None
    type: resolved Type of a type reference, or None
"""

from sitescan.language.asttools import metaast
from sitescan.language.java.javabase import *


### Top level ###

class CompilationUnit(JavaTree):
    __fields__ = "packageAnnotations:Annotation* pid:Expression? defs:JavaTree*"
    __attrs__ = "sourcefile pos=-1"


class Import(JavaTree):
    __fields__ = "qualid:Expression"
    __attrs__ = "staticImport=False pos=-1"


### Declarations ###

class ClassDecl(Statement):
    __fields__ = """mods:Modifiers typarams:TypeParameter* extending:Expression?
                    implementing:Expression* defs:JavaTree*"""
    __attrs__ = "name sym pos=-1"


class MethodDecl(JavaTree):
    __fields__ = """mods:Modifiers restype:Expression? typarams:TypeParameter*
                    recvparam:VariableDecl? params:VariableDecl* thrown:Expression*
                    defaultValue:Expression? body:Block?"""
    __attrs__ = "name sym pos=-1"


class VariableDecl(Statement):
    __fields__ = "mods:Modifiers vartype:Expression? nameexpr:Expression? init:Expression?"
    __attrs__ = "name sym pos=-1"


### Statements ###

class Skip(Statement):
    __fields__ = ""
    __attrs__ = "pos=-1"


class Block(Statement):
    __fields__ = "stats:Statement*"
    __attrs__ = "isStatic=False pos=-1"


class DoWhileLoop(Statement):
    __fields__ = "body:Statement cond:Expression"
    __attrs__ = "pos=-1"


class WhileLoop(Statement):
    __fields__ = "cond:Expression body:Statement"
    __attrs__ = "pos=-1"


class ForLoop(Statement):
    __fields__ = "init:Statement* cond:Expression? step:ExpressionStatement* body:Statement"
    __attrs__ = "pos=-1"


class EnhancedForLoop(Statement):
    __fields__ = "var:VariableDecl expr:Expression body:Statement"
    __attrs__ = "pos=-1"


class Labeled(Statement):
    __fields__ = "body:Statement"
    __attrs__ = "label pos=-1"


class Switch(Statement):
    __fields__ = "selector:Expression cases:Case*"
    __attrs__ = "pos=-1"


class Case(JavaTree):
    # A default case has no labels. Arrow cases carry their target in body.
    __fields__ = "labels:JavaTree* guard:Expression? stats:Statement* body:JavaTree?"
    __attrs__ = "isDefault=False isRule=False pos=-1"


class Synchronized(Statement):
    __fields__ = "lock:Expression body:Block"
    __attrs__ = "pos=-1"


class Try(Statement):
    __fields__ = "resources:JavaTree* body:Block catchers:Catch* finalizer:Block?"
    __attrs__ = "pos=-1"


class Catch(JavaTree):
    __fields__ = "param:VariableDecl body:Block"
    __attrs__ = "pos=-1"


class If(Statement):
    __fields__ = "cond:Expression thenpart:Statement elsepart:Statement?"
    __attrs__ = "pos=-1"


class ExpressionStatement(Statement):
    __fields__ = "expr:Expression"
    __attrs__ = "pos=-1"


class Break(Statement):
    __fields__ = ""
    __attrs__ = "label pos=-1"


class Continue(Statement):
    __fields__ = ""
    __attrs__ = "label pos=-1"


class Return(Statement):
    __fields__ = "expr:Expression?"
    __attrs__ = "pos=-1"


class Yield(Statement):
    __fields__ = "value:Expression"
    __attrs__ = "pos=-1"


class Throw(Statement):
    __fields__ = "expr:Expression"
    __attrs__ = "pos=-1"


class Assert(Statement):
    __fields__ = "cond:Expression detail:Expression?"
    __attrs__ = "pos=-1"


### Expressions ###

class SwitchExpression(Expression):
    __fields__ = "selector:Expression cases:Case*"
    __attrs__ = "pos=-1"


class Conditional(Expression):
    __fields__ = "cond:Expression truepart:Expression falsepart:Expression"
    __attrs__ = "pos=-1"


class MethodInvocation(Expression):
    __fields__ = "typeargs:Expression* meth:Expression args:Expression*"
    __attrs__ = "pos=-1"


class NewClass(Expression):
    # body is the anonymous class declaration, if any.
    __fields__ = "encl:Expression? typeargs:Expression* clazz:Expression args:Expression* body:ClassDecl?"
    __attrs__ = "pos=-1"


class NewArray(Expression):
    # elemtype is None for a bare array initializer ({1, 2}).
    __fields__ = """annotations:Annotation* elemtype:Expression? dims:Expression*
                    dimAnnotations:Annotation** elems:Expression*"""
    __attrs__ = "pos=-1"


class Lambda(Expression):
    __fields__ = "params:VariableDecl* body:JavaTree"
    __attrs__ = "pos=-1"


class Parens(Expression):
    __fields__ = "expr:Expression"
    __attrs__ = "pos=-1"


class Assign(Expression):
    __fields__ = "lhs:Expression rhs:Expression"
    __attrs__ = "pos=-1"


class AssignOp(Expression):
    __fields__ = "lhs:Expression rhs:Expression"
    __attrs__ = "operator pos=-1"


class Unary(Expression):
    __fields__ = "arg:Expression"
    __attrs__ = "operator pos=-1"


class Binary(Expression):
    __fields__ = "lhs:Expression rhs:Expression"
    __attrs__ = "operator pos=-1"


class TypeCast(Expression):
    __fields__ = "clazz:Expression expr:Expression"
    __attrs__ = "pos=-1"


class InstanceOf(Expression):
    # pattern is a type reference or a BindingPattern.
    __fields__ = "expr:Expression pattern:JavaTree"
    __attrs__ = "pos=-1"


class BindingPattern(JavaTree):
    __fields__ = "var:VariableDecl"
    __attrs__ = "pos=-1"


class ArrayAccess(Expression):
    __fields__ = "indexed:Expression index:Expression"
    __attrs__ = "pos=-1"


class FieldAccess(Expression):
    __fields__ = "selected:Expression"
    __attrs__ = "name sym type pos=-1"


class MemberReference(Expression):
    __fields__ = "expr:Expression typeargs:Expression*"
    __attrs__ = "name pos=-1"


class Ident(Expression):
    __fields__ = ""
    __attrs__ = "name sym type pos=-1"


class Literal(Expression):
    __fields__ = ""
    __attrs__ = "typetag value pos=-1"


### Type references ###

class PrimitiveTypeTree(Expression):
    __fields__ = ""
    __attrs__ = "typetag type pos=-1"


class ArrayTypeTree(Expression):
    __fields__ = "elemtype:Expression"
    __attrs__ = "type pos=-1"


class TypeApply(Expression):
    __fields__ = "clazz:Expression arguments:Expression*"
    __attrs__ = "type pos=-1"


class TypeUnion(Expression):
    __fields__ = "alternatives:Expression*"
    __attrs__ = "pos=-1"


class TypeIntersection(Expression):
    __fields__ = "bounds:Expression*"
    __attrs__ = "pos=-1"


class TypeParameter(JavaTree):
    __fields__ = "annotations:Annotation* bounds:Expression*"
    __attrs__ = "name type pos=-1"


class Wildcard(Expression):
    __fields__ = "kind:TypeBoundKind inner:JavaTree?"
    __attrs__ = "pos=-1"


class TypeBoundKind(JavaTree):
    __fields__ = ""
    __attrs__ = "kind pos=-1"


### Modifiers and annotations ###

class Modifiers(JavaTree):
    __fields__ = "annotations:Annotation*"
    __attrs__ = "flags=frozenset() pos=-1"


class Annotation(Expression):
    __fields__ = "annotationType:Expression args:Expression*"
    __attrs__ = "pos=-1"


class AnnotatedType(Expression):
    __fields__ = "annotations:Annotation* underlyingType:Expression"
    __attrs__ = "type pos=-1"


### Error recovery and desugaring ###

class Erroneous(Expression):
    __fields__ = ""
    __attrs__ = "text pos=-1"


class LetExpr(Expression):
    __fields__ = "defs:Statement* expr:JavaTree"
    __attrs__ = "pos=-1"


nodeKinds = tuple(metaast.concreteKinds(JavaTree))

leafKinds = tuple(kind for kind in nodeKinds if kind.__leaf__)


def emptyModifiers():
    return Modifiers([])
