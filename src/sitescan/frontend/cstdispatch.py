"""Dispatch on tree-sitter node kinds.

The counterpart of ``sitescan.util.typedispatch`` for concrete syntax trees,
whose nodes all share one Python type and differ only in their ``type``
string. The same kind can mean different things in different positions
(``switch_expression`` is a statement or an expression, ``block`` a statement
or an initializer), so rules are registered per position:

    @rule("statement", "if_statement")
    def convertIf(self, node): ...

The table is built when the class is created and inherited by subclasses.
"""

__all__ = ["rule", "CSTDispatcher"]


def rule(position, *kinds):
    """Decorator marking a method as the converter for ``kinds`` in ``position``."""
    def ruleF(f):
        f.__cstrules__ = [(position, kind) for kind in kinds]
        return f
    return ruleF


class cstdispatcher(type):
    def __new__(self, name, bases, d):
        table = {}
        for base in bases:
            table.update(getattr(base, "__cstTable__", {}))

        own = {}
        for v in d.values():
            for key in getattr(v, "__cstrules__", ()):
                if key in own:
                    raise TypeError("%s has multiple rules for %s %r" % (name, key[0], key[1]))
                own[key] = v
        table.update(own)

        d["__cstTable__"] = table
        return type.__new__(self, name, bases, d)


class CSTDispatcher(object, metaclass=cstdispatcher):

    def dispatch(self, position, node, *args):
        f = self.__cstTable__.get((position, node.type))
        if f is None:
            return self.defaultRule(position, node, *args)
        return f(self, node, *args)

    def defaultRule(self, position, node, *args):
        raise NotImplementedError(
            "%s has no %s rule for %r" % (type(self).__name__, position, node.type)
        )
