"""Name environments for binding one compilation unit.

Only names declared in the unit itself can be bound to symbols. Types from
elsewhere are still named, by qualifying the written name through the
unit's imports and package:

    1. classes declared in the unit (member, local and top-level)
    2. single-type imports
    3. well-known java.lang types
    4. the first on-demand import, if any
    5. the unit's own package

Qualified names split into package and nested classes at the first segment
that starts with an upper-case letter (``java.util.Map.Entry`` is the binary
name ``java.util.Map$Entry``).
"""

from sitescan.language.java.symbols import ClassType, ClassSymbol, MethodSymbol

JAVA_LANG = frozenset(
    """
    AbstractMethodError Appendable ArithmeticException ArrayIndexOutOfBoundsException
    ArrayStoreException AssertionError AutoCloseable Boolean Byte CharSequence Character
    Class ClassCastException ClassLoader ClassNotFoundException CloneNotSupportedException
    Cloneable Comparable Deprecated Double Enum Error Exception ExceptionInInitializerError
    Float FunctionalInterface IllegalAccessException IllegalArgumentException
    IllegalMonitorStateException IllegalStateException IndexOutOfBoundsException
    InheritableThreadLocal InstantiationException Integer InterruptedException Iterable
    LinkageError Long Math Module NegativeArraySizeException NoSuchFieldException
    NoSuchMethodException NullPointerException Number NumberFormatException Object
    OutOfMemoryError Override Package Process ProcessBuilder Readable Record
    ReflectiveOperationException Runnable Runtime RuntimeException SafeVarargs
    SecurityException Short StackOverflowError StackTraceElement StrictMath String
    StringBuffer StringBuilder StringIndexOutOfBoundsException SuppressWarnings System
    Thread ThreadGroup ThreadLocal Throwable TypeNotPresentException
    UnsupportedOperationException VirtualMachineError Void
    """.split()
)


def binaryName(qualified):
    """Binary name of a dotted name, guessing where the package ends."""
    parts = qualified.split(".")
    for i, part in enumerate(parts):
        if part[:1].isupper():
            return ".".join(parts[: i + 1]) + "".join("$" + p for p in parts[i + 1:])
    return qualified


def supertypeSymbols(classSymbol):
    """Symbols of the direct supertypes declared in the unit."""
    result = []
    for t in [classSymbol.superclass] + list(classSymbol.interfaces):
        if isinstance(t, ClassType) and t.sym is not None:
            result.append(t.sym)
    return result


def walkHierarchy(classSymbol):
    """``classSymbol`` and its supertypes known to the unit, nearest first."""
    seen = set()
    pending = [classSymbol]
    while pending:
        current = pending.pop(0)
        if current in seen:
            continue
        seen.add(current)
        yield current
        pending.extend(supertypeSymbols(current))


def findField(classSymbol, name):
    for current in walkHierarchy(classSymbol):
        field = current.lookupField(name)
        if field is not None:
            return field
    return None


def findMemberClass(classSymbol, name):
    for current in walkHierarchy(classSymbol):
        for member in current.members:
            if isinstance(member, ClassSymbol) and member.name == name:
                return member
    return None


def findMethod(classSymbol, name, argumentCount):
    """First method named ``name`` that accepts ``argumentCount`` arguments."""
    for current in walkHierarchy(classSymbol):
        for member in current.members:
            if not isinstance(member, MethodSymbol) or member.name != name:
                continue
            count = len(member.params)
            if count == argumentCount or (member.isVarargs and argumentCount >= count - 1):
                return member
    return None


class UnitScope(object):
    """
    Names visible throughout one compilation unit.

    Attributes:
        packageName: Declared package, "" for the default package.
        singleImports: simple name -> binary name of single-type imports.
        onDemandImports: Packages (or types) imported with ``.*``.
        topLevel: simple name -> ClassSymbol of top-level classes.
        classes: binary name -> every ClassSymbol declared in the unit.
    """

    def __init__(self, packageName=""):
        self.packageName = packageName
        self.singleImports = {}
        self.onDemandImports = []
        self.topLevel = {}
        self.classes = {}

    def addImport(self, qualified, staticImport=False, onDemand=False):
        if staticImport:
            return
        if onDemand:
            self.onDemandImports.append(qualified)
        else:
            simple = qualified.rsplit(".", 1)[-1]
            self.singleImports[simple] = binaryName(qualified)

    def declareClass(self, sym):
        self.classes[sym.flatname] = sym
        if sym.owner is None:
            self.topLevel[sym.name] = sym

    def qualify(self, name):
        if self.packageName:
            return "%s.%s" % (self.packageName, name)
        return name

    def classType(self, binary):
        sym = self.classes.get(binary)
        if sym is not None:
            return sym.asType()
        return ClassType(binary)

    def findType(self, name):
        """Type named by a simple name, if an import or the unit declares it."""
        sym = self.topLevel.get(name)
        if sym is not None:
            return sym.asType()
        binary = self.singleImports.get(name)
        if binary is not None:
            return self.classType(binary)
        if name in JAVA_LANG:
            return ClassType("java.lang." + name)
        return None

    def lookupType(self, name):
        t = self.findType(name)
        if t is not None:
            return t
        if self.onDemandImports:
            return self.classType(binaryName("%s.%s" % (self.onDemandImports[0], name)))
        return self.classType(self.qualify(name))


class Env(object):
    """
    One level of lexical scope.

    Attributes:
        parent: Enclosing Env, or None at unit level.
        unit: The UnitScope at the root of the chain.
        classSymbol: Set on the level that a class body opens.
        owner: Symbol that owns variables declared here (method or class).
        types: simple name -> Type for type variables and local classes.
        variables: simple name -> VarSymbol for locals and parameters.
    """
    __slots__ = "parent", "unit", "classSymbol", "owner", "types", "variables"

    def __init__(self, parent=None, unit=None, classSymbol=None, owner=None):
        self.parent = parent
        self.unit = unit if unit is not None else parent.unit
        self.classSymbol = classSymbol
        if owner is None:
            owner = classSymbol
        if owner is None and parent is not None:
            owner = parent.owner
        self.owner = owner
        self.types = {}
        self.variables = {}

    def child(self, classSymbol=None, owner=None):
        return Env(self, classSymbol=classSymbol, owner=owner)

    def enclosingClass(self):
        env = self
        while env is not None:
            if env.classSymbol is not None:
                return env.classSymbol
            env = env.parent
        return None

    def outerClass(self, name):
        """The enclosing class with simple name ``name`` (for ``Outer.this``)."""
        env = self
        while env is not None:
            if env.classSymbol is not None and env.classSymbol.name == name:
                return env.classSymbol
            env = env.parent
        return None

    def declare(self, sym):
        self.variables[sym.name] = sym
        return sym

    def lookupVariable(self, name):
        env = self
        while env is not None:
            sym = env.variables.get(name)
            if sym is not None:
                return sym
            if env.classSymbol is not None:
                field = findField(env.classSymbol, name)
                if field is not None:
                    return field
            env = env.parent
        return None

    def findType(self, name):
        env = self
        while env is not None:
            t = env.types.get(name)
            if t is not None:
                return t
            if env.classSymbol is not None:
                member = findMemberClass(env.classSymbol, name)
                if member is not None:
                    return member.asType()
            env = env.parent
        return self.unit.findType(name)

    def lookupType(self, name):
        t = self.findType(name)
        if t is not None:
            return t
        return self.unit.lookupType(name)

    def lookupQualifiedType(self, parts):
        """Type named by the dotted segments ``parts``."""
        t = self.findType(parts[0])
        if t is None:
            if len(parts) > 1 and not parts[0][:1].isupper():
                return self.unit.classType(binaryName(".".join(parts)))
            t = self.lookupType(parts[0])
        return self.memberType(t, parts[1:])

    def memberType(self, t, names):
        for name in names:
            sym = getattr(t, "sym", None)
            member = findMemberClass(sym, name) if sym is not None else None
            if member is not None:
                t = member.asType()
            else:
                t = self.unit.classType("%s$%s" % (t.erasure(), name))
        return t
