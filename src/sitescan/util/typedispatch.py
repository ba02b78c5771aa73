"""Type-based dispatch for tree walkers.

A TypeDispatcher routes a call to the handler registered for the runtime type
of its first argument. Handlers are marked with the @dispatch decorator and
collected into a per-class dispatch table when the class is created.

Walkers over a closed family of node kinds can declare that family in
``__exhaustive__``; the class is then rejected at creation time unless every
kind in the family has a handler, so a missing rule is a registration error
rather than a silently truncated traversal.
"""

__all__ = [
    "TypeDispatcher",
    "defaultdispatch",
    "dispatch",
    "TypeDispatchError",
    "TypeDispatchDeclarationError",
    "UnhandledNodeKind",
]

import inspect


def flattenTypes(types):
    """Flatten nested lists of types.

    Raises:
        TypeDispatchDeclarationError: If a non-type object is found.
    """
    result = []
    pending = list(types)
    while pending:
        child = pending.pop(0)
        if isinstance(child, (list, tuple)):
            pending[:0] = child
        elif isinstance(child, type):
            result.append(child)
        else:
            raise TypeDispatchDeclarationError("Expected a type, got %r instead." % (child,))
    return result


def dispatch(*types):
    """Decorator marking a method as the handler for ``types``.

    The function itself is returned; the metaclass reads the mark.
    """
    handled = flattenTypes(types)

    def dispatchF(f):
        f.__dispatchtypes__ = handled
        return f

    return dispatchF


def defaultdispatch(f):
    """Decorator marking the handler used when no type-specific one matches."""
    f.__dispatchtypes__ = (None,)
    return f


def dispatch__call__(self, p, *args):
    """Dispatch a call on the type of the first argument.

    Lookup order:
    1. the exact type in the dispatch table
    2. unless the dispatcher is concrete, the type's MRO
    3. the default handler

    The handler found for a type is cached in the table.
    """
    t = type(p)
    table = self.__typeDispatchTable__

    func = table.get(t)

    if func is None:
        possible = (t,) if self.__concrete__ else t.mro()
        for supercls in possible:
            func = table.get(supercls)
            if func is not None:
                break
        else:
            func = table[None]
        table[t] = func

    return func(self, p, *args)


class TypeDispatchError(Exception):
    """Raised when a dispatcher is called with a type it cannot handle."""
    pass


class UnhandledNodeKind(TypeDispatchError):
    """Raised by a tree walker that reaches a node kind with no recursion rule.

    Attributes:
        walker: Name of the dispatcher class.
        kind: The node's class.
        node: The offending node.
    """

    def __init__(self, walker, node):
        self.walker = walker
        self.kind = type(node)
        self.node = node
        TypeDispatchError.__init__(
            self, "%s has no rule for node kind %s" % (walker, self.kind.__name__)
        )


class TypeDispatchDeclarationError(Exception):
    """Raised when a dispatcher class is declared incorrectly.

    This happens if two handlers claim the same type, if no default handler
    exists, or if an exhaustive dispatcher leaves a kind of its family
    uncovered.
    """
    pass


def exceptionDefault(self, node, *args):
    """Default handler: refuse the node."""
    raise TypeDispatchError("%r cannot handle %r\n%r" % (type(self), type(node), node))


def ownHandlers(name, d):
    """Dispatch table entries declared directly in the class body ``d``."""
    lut = {}
    for v in d.values():
        for t in getattr(v, "__dispatchtypes__", ()):
            if t in lut:
                raise TypeDispatchDeclarationError(
                    "%s has declared with multiple handlers for type %s"
                    % (name, "default" if t is None else t.__name__)
                )
            lut[t] = v
    return lut


def exhaustiveFamily(d, bases):
    family = d.get("__exhaustive__")
    if family is None:
        for base in bases:
            family = getattr(base, "__exhaustive__", None)
            if family is not None:
                break
    return family


class typedispatcher(type):
    """Metaclass that builds the dispatch table of a TypeDispatcher class.

    The table maps each registered type to its handler, inherits entries from
    base classes that the new class does not override, and must contain a
    default entry under the key None.
    """

    def __new__(self, name, bases, d):
        lut = ownHandlers(name, d)

        for base in bases:
            for t in inspect.getmro(base):
                for k, v in getattr(t, "__typeDispatchTable__", {}).items():
                    lut.setdefault(k, v)

        if None not in lut:
            raise TypeDispatchDeclarationError("%s has no default dispatch" % (name,))

        family = exhaustiveFamily(d, bases)
        if family:
            missing = [t for t in family if t not in lut]
            if missing:
                raise TypeDispatchDeclarationError(
                    "%s has no rule for %s"
                    % (name, ", ".join(t.__name__ for t in missing))
                )

        d["__typeDispatchTable__"] = lut

        return type.__new__(self, name, bases, d)


class TypeDispatcher(object, metaclass=typedispatcher):
    """Base class for type-dispatched visitors.

    Usage:
        1. Inherit from TypeDispatcher
        2. Decorate handlers with @dispatch(Type)
        3. Optionally replace the default handler with @defaultdispatch
        4. Call the dispatcher with an object

    Example:
        >>> class Kinds(TypeDispatcher):
        ...     @dispatch(int)
        ...     def visitInt(self, obj):
        ...         return "integer"
        ...     @defaultdispatch
        ...     def visitOther(self, obj):
        ...         return "other"
        >>> Kinds()(42)
        'integer'

    Attributes:
        __concrete__: If True, only exact type matches are considered.
        __exhaustive__: Optional sequence of types that must all have a handler.
    """
    __dispatch__ = dispatch__call__
    __call__ = dispatch__call__
    exceptionDefault = defaultdispatch(exceptionDefault)
    __concrete__ = False
    __exhaustive__ = ()
