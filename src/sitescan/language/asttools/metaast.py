"""
Metaclass for declaratively specified AST nodes.

A node kind lists its structural children in ``__fields__`` and its plain
(non-child) attributes in ``__attrs__``::

    class If(Statement):
        __fields__ = "cond:Expression thenpart:Statement elsepart:Statement?"
        __attrs__ = "pos=-1"

Field syntax is ``name:Type`` with an optional suffix: ``?`` (may be None),
``*`` (list of Type) or ``**`` (list of lists of Type). Type names are looked
up in the module that defines the node class, at construction time.

From this the metaclass generates ``__init__`` (with type checks),
``__repr__``, ``children``, ``fields`` and ``visitChildren``. A class that
declares ``__fields__`` itself is a concrete node kind; classes without it are
abstract categories.
"""

import collections
import sys

from . import codegeneration

__all__ = ["ASTNode", "Field", "Attribute", "parseFields", "parseAttrs", "concreteKinds"]


Field = collections.namedtuple("Field", "name type optional repeated")
Attribute = collections.namedtuple("Attribute", "name default")


def parseFields(spec):
    """Parse a ``__fields__`` declaration into a list of Field descriptors."""
    desc = []
    for token in spec.split():
        name, sep, tn = token.partition(":")
        if not sep or not tn:
            raise SyntaxError("Field %r has no type" % token)

        optional = False
        repeated = 0
        if tn.endswith("?"):
            optional = True
            tn = tn[:-1]
        while tn.endswith("*"):
            repeated += 1
            tn = tn[:-1]

        if optional and repeated:
            raise SyntaxError("Field %r cannot be both optional and repeated" % token)

        desc.append(Field(name, tn, optional, repeated))
    return desc


def parseAttrs(spec):
    """Parse an ``__attrs__`` declaration; attributes default to None."""
    attrs = []
    for token in spec.split():
        name, sep, default = token.partition("=")
        attrs.append(Attribute(name, default if sep else "None"))
    return attrs


class astnode(type):
    def __new__(self, name, bases, d):
        if "__fields__" in d:
            desc = parseFields(d["__fields__"])
            attrs = parseAttrs(d.get("__attrs__", ""))

            names = [field.name for field in desc] + [attr.name for attr in attrs]
            if len(set(names)) != len(names):
                raise SyntaxError("%s declares a field or attribute twice" % name)

            module = sys.modules.get(d.get("__module__"))
            g = module.__dict__ if module is not None else {}

            d["__fields__"] = tuple(desc)
            d["__attrs__"] = tuple(attrs)
            d["__leaf__"] = not desc
            d["__slots__"] = tuple(names)

            d["__init__"] = codegeneration.compileFunc(
                name, codegeneration.makeInit(name, desc, attrs), g
            )
            d["__repr__"] = codegeneration.compileFunc(
                name, codegeneration.makeRepr(name, desc, attrs), g
            )
            d["children"] = codegeneration.compileFunc(
                name, codegeneration.makeGetChildren(desc), g
            )
            d["fields"] = codegeneration.compileFunc(
                name, codegeneration.makeGetFields(desc), g
            )
            d["visitChildren"] = codegeneration.compileFunc(
                name, codegeneration.makeVisit(name, desc, vargs=True), g
            )
        elif "__slots__" not in d:
            d["__slots__"] = ()

        return type.__new__(self, name, bases, d)


class ASTNode(object, metaclass=astnode):
    """Root of every declaratively specified node family."""

    __slots__ = ("__weakref__",)
    __leaf__ = True

    def __init__(self):
        raise NotImplementedError("%s is an abstract node category" % type(self).__name__)

    @classmethod
    def isConcreteKind(cls):
        return "__fields__" in cls.__dict__ and cls is not ASTNode


def concreteKinds(root):
    """Every concrete node kind below ``root`` (inclusive), in definition order."""
    result = []
    seen = set()
    pending = [root]
    while pending:
        cls = pending.pop(0)
        if cls in seen:
            continue
        seen.add(cls)
        if cls.isConcreteKind():
            result.append(cls)
        pending.extend(cls.__subclasses__())
    return result
