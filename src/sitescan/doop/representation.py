"""Doop-style names for methods, fields and heap allocations.

The scanner does not decide how a method or field is spelled; it asks a
SignatureBuilder. DoopRepresentationBuilder spells them the way Doop (and
Soot's Jimple) does:

    method      <p.Owner: ret name(p1,p2)>      constructors are <init>
    compact     p.Owner.name
    field       <p.Owner: type name>
    allocation  <method name form>/new p.Type

Types are erased and classes are written by binary name (``p.Outer$Inner``,
``p.Outer$1`` for anonymous classes).
"""

from abc import ABC, abstractmethod

from sitescan.language.java.symbols import OBJECT_TYPE


class SignatureBuilder(ABC):
    """The naming functions the initial scan depends on."""

    @abstractmethod
    def buildMethodSignature(self, method):
        """Globally unique, overload-aware name of a MethodSymbol."""

    @abstractmethod
    def buildMethodCompactName(self, method):
        """Short name of a MethodSymbol; not unique across overloads."""

    @abstractmethod
    def buildFieldSignature(self, field):
        """Globally unique name of a field VarSymbol."""

    @abstractmethod
    def buildHeapAllocation(self, methodName, typeName):
        """Base identifier of an allocation of ``typeName`` inside ``methodName``."""


class DoopRepresentationBuilder(SignatureBuilder):

    def typeName(self, t):
        """Erased binary name of a Type; unknown types print as Object."""
        if t is None:
            t = OBJECT_TYPE
        return str(t.erasure())

    def ownerName(self, sym):
        owner = sym.owner
        if owner is None:
            return "?"
        return owner.flatname

    def buildMethodSignature(self, method):
        params = ",".join(self.typeName(t) for t in method.parameterTypes())
        return "<%s: %s %s(%s)>" % (
            self.ownerName(method),
            self.typeName(method.returnType),
            method.name,
            params,
        )

    def buildMethodCompactName(self, method):
        return "%s.%s" % (self.ownerName(method), method.name)

    def buildFieldSignature(self, field):
        return "<%s: %s %s>" % (self.ownerName(field), self.typeName(field.type), field.name)

    def buildHeapAllocation(self, methodName, typeName):
        return "%s/new %s" % (methodName, typeName)


_instance = None


def getInstance():
    """Shared default builder; it is stateless."""
    global _instance
    if _instance is None:
        _instance = DoopRepresentationBuilder()
    return _instance
