"""Initial scan: names heap allocations, method declarations and field accesses.

The InitialScanner walks compilation units and fills three maps that the
later, identifier-level passes consume:

    methodDeclarations  method signature  -> MethodRecord
    heapAllocations     allocation id     -> AllocationRecord
    fieldAccesses       field signature   -> set of SourceSpan

Allocation ids have the form ``<base>/<n>``. The base combines the enclosing
method's name with the erased allocated type; the method is named by its full
signature when its class declares another method of the same name, and by its
compact name otherwise. ``n`` counts earlier allocations with the same base,
over everything this scanner instance has seen.

Allocations outside any method (field initializers, initializer blocks, enum
constants) are attributed to the class's ``<clinit>`` pseudo-method when the
context is static and to ``<init>`` otherwise. With ``staleMethodContext``
the scanner instead keeps whatever method it saw last, as earlier versions
did.
"""

import collections
import logging

from sitescan.util.typedispatch import *
from sitescan.util.io import formatting
from sitescan.analysis.treescanner import TreeScanner
from sitescan.doop import representation
from sitescan.doop.records import SourceSpan, MethodRecord, AllocationRecord
from sitescan.language.java import ast
from sitescan.language.java.pretty import typeToString
from sitescan.language.java.symbols import MethodSymbol, VarSymbol, syntheticInitializer

LOG = logging.getLogger(__name__)

UNKNOWN_METHOD = "<unknown>"

NO_SPAN = SourceSpan(0, 0, 0)


# The cached names of the method enclosing the current node.
MethodContext = collections.namedtuple("MethodContext", "symbol signature compactName")


class InitialScanner(TreeScanner):
    """Scans compilation units for heap allocations and method definitions.

    Attributes:
        lineMap: Line map of the unit being scanned.
        builder: SignatureBuilder used for every name.
        staleMethodContext: Keep the last method context outside methods.
        methodNamesPerClass: ClassSymbol -> Counter of declared method names.
        heapAllocationCounters: allocation base -> last sequence number used.
        heapAllocations: allocation id -> AllocationRecord.
        methodDeclarations: method signature -> MethodRecord.
        fieldAccesses: field signature -> set of SourceSpan.
    """

    def __init__(self, lineMap=None, builder=None, staleMethodContext=False):
        self.lineMap = lineMap
        self.builder = builder if builder is not None else representation.getInstance()
        self.staleMethodContext = staleMethodContext

        self.currentClassSymbol = None
        self.currentMethod = None
        self.staticInitializer = False
        self.initializerContexts = {}

        self.methodNamesPerClass = {}
        self.heapAllocationCounters = {}

        self.heapAllocations = {}
        self.methodDeclarations = {}
        self.fieldAccesses = {}

    def scanUnit(self, unit, lineMap):
        """Scan one compilation unit whose offsets ``lineMap`` translates."""
        self.lineMap = lineMap
        self.scan(unit)

    ### Positions ###

    def span(self, pos, length):
        if pos < 0:
            return NO_SPAN
        lineMap = self.lineMap
        return SourceSpan(
            lineMap.getLineNumber(pos),
            lineMap.getColumnNumber(pos),
            lineMap.getColumnNumber(pos + length),
        )

    def hasSourcePosition(self, sym):
        return self.lineMap.getLineNumber(sym.pos) > 0

    ### Overload table ###

    def methodNames(self, classSymbol):
        """Occurrences of each method name declared directly on ``classSymbol``.

        Built on first request and never rebuilt.
        """
        table = self.methodNamesPerClass.get(classSymbol)
        if table is None:
            table = collections.Counter()
            for symbol in classSymbol.getEnclosedElements():
                if isinstance(symbol, MethodSymbol):
                    table[symbol.getQualifiedName()] += 1
            self.methodNamesPerClass[classSymbol] = table
        return table

    def isOverloaded(self, method):
        if method.owner is None:
            return False
        return self.methodNames(method.owner)[method.getQualifiedName()] > 1

    ### Method context ###

    def methodContext(self, method):
        return MethodContext(
            method,
            self.builder.buildMethodSignature(method),
            self.builder.buildMethodCompactName(method),
        )

    def initializerContext(self):
        """Context of the class's <clinit> or <init>, for code outside methods."""
        if self.currentClassSymbol is None:
            return None
        key = (self.currentClassSymbol, self.staticInitializer)
        context = self.initializerContexts.get(key)
        if context is None:
            method = syntheticInitializer(self.currentClassSymbol, self.staticInitializer)
            context = self.methodContext(method)
            self.initializerContexts[key] = context
        return context

    def allocationMethodName(self):
        context = self.currentMethod
        if context is None:
            context = self.initializerContext()
        if context is None:
            return UNKNOWN_METHOD

        if self.isOverloaded(context.symbol):
            return context.signature
        else:
            return context.compactName

    def isStaticMember(self, classSymbol, member):
        if isinstance(member, ast.Block):
            return member.isStatic
        if member.sym is not None:
            return member.sym.isStatic
        if classSymbol is not None and classSymbol.kind in ("interface", "annotation"):
            return True
        return "static" in member.mods.flags

    ### Visitor methods ###

    @dispatch(ast.ClassDecl)
    def visitClassDef(self, tree):
        enclosingClass = self.currentClassSymbol
        enclosingMethod = self.currentMethod
        enclosingStatic = self.staticInitializer

        self.currentClassSymbol = tree.sym
        if tree.sym is not None:
            self.methodNames(tree.sym)
        if not self.staleMethodContext:
            self.currentMethod = None

        self.scan(tree.mods)
        self.scan(tree.typarams)
        self.scan(tree.extending)
        self.scan(tree.implementing)
        for member in tree.defs:
            if isinstance(member, (ast.VariableDecl, ast.Block)):
                self.staticInitializer = self.isStaticMember(tree.sym, member)
            self.scan(member)

        self.currentClassSymbol = enclosingClass
        self.staticInitializer = enclosingStatic
        if not self.staleMethodContext:
            self.currentMethod = enclosingMethod

    @dispatch(ast.MethodDecl)
    def visitMethodDef(self, tree):
        enclosingMethod = self.currentMethod

        if tree.sym is not None:
            self.currentMethod = self.methodContext(tree.sym)
        else:
            LOG.debug("Method %s has no symbol", tree.name)
            self.currentMethod = None

        self.scan(tree.mods)
        self.scan(tree.restype)

        if self.currentMethod is not None:
            signature = self.currentMethod.signature
            if signature in self.methodDeclarations:
                LOG.warning("Duplicate method declaration: %s", signature)
            span = self.span(tree.pos, len(tree.name))
            self.methodDeclarations[signature] = MethodRecord(span, signature)
            LOG.debug("Found method declaration: %s at %s", signature, formatting.spanText(span))

        self.scan(tree.typarams)
        self.scan(tree.recvparam)
        self.scan(tree.params)
        self.scan(tree.thrown)
        self.scan(tree.defaultValue)
        self.scan(tree.body)

        if not self.staleMethodContext:
            self.currentMethod = enclosingMethod

    @dispatch(ast.NewClass)
    def visitNewClass(self, tree):
        self.scan(tree.encl)
        self.scan(tree.typeargs)
        self.scan(tree.clazz)
        self.scan(tree.args)
        self.scan(tree.body)

        clazz = tree.clazz
        printed = typeToString(clazz)
        allocatedType = getattr(clazz, "type", None)
        if tree.body is not None and tree.body.sym is not None:
            # anonymous classes allocate their own binary name (Outer$1)
            typeName = tree.body.sym.flatname
        elif allocatedType is not None:
            typeName = str(allocatedType.erasure())
        else:
            typeName = printed

        heapAllocation = self.builder.buildHeapAllocation(
            self.allocationMethodName(), typeName
        )

        counter = self.heapAllocationCounters.get(heapAllocation, -1) + 1
        self.heapAllocationCounters[heapAllocation] = counter
        heapAllocation = "%s/%d" % (heapAllocation, counter)

        span = self.span(clazz.pos, len(printed))
        self.heapAllocations[heapAllocation] = AllocationRecord(span, heapAllocation)
        LOG.debug("Found heap allocation: %s at %s", heapAllocation, formatting.spanText(span))

    @dispatch(ast.FieldAccess)
    def visitSelect(self, tree):
        self.scan(tree.selected)

        sym = tree.sym
        if not isinstance(sym, VarSymbol):
            return

        fieldSignature = self.builder.buildFieldSignature(sym)

        positions = self.fieldAccesses.get(fieldSignature)
        if positions is None:
            positions = set()
            self.fieldAccesses[fieldSignature] = positions

        if self.hasSourcePosition(sym):
            positions.add(self.span(tree.pos, len(sym.getQualifiedName())))
        else:
            LOG.debug("Field %s has no source position", fieldSignature)
