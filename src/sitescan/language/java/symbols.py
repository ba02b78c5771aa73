"""Resolved Java symbols and types.

Symbols are what a syntax tree node refers to once names are bound: classes,
methods (including constructors, named ``<init>``) and variables (fields,
enum constants, parameters and locals). Types are attached to type references
and variables; only their printed and erased forms matter here.

Every symbol carries ``pos``, the raw character offset of its declaration in
its compilation unit, or NOPOS when it has no source position (synthetic
members such as an array's ``length``).
"""

NOPOS = -1

CONSTRUCTOR_NAME = "<init>"
CLASS_INITIALIZER_NAME = "<clinit>"


class Type(object):
    __slots__ = ()

    def erasure(self):
        return self

    def isPrimitive(self):
        return False

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, self)


class PrimitiveType(Type):
    """``int``, ``boolean``, ..., and ``void``."""
    __slots__ = ("name",)

    def __init__(self, name):
        self.name = name

    def isPrimitive(self):
        return True

    def __str__(self):
        return self.name

    def __eq__(self, other):
        return isinstance(other, PrimitiveType) and other.name == self.name

    def __hash__(self):
        return hash(("prim", self.name))


class ClassType(Type):
    """A (possibly parameterized) reference to a class or interface.

    Attributes:
        qualifiedName: Binary name of the class, e.g. ``java.util.Map$Entry``.
        typeArguments: Type arguments as written, already resolved.
        sym: The ClassSymbol when the class is declared in the scanned unit.
    """
    __slots__ = ("qualifiedName", "typeArguments", "sym")

    def __init__(self, qualifiedName, typeArguments=(), sym=None):
        self.qualifiedName = qualifiedName
        self.typeArguments = tuple(typeArguments)
        self.sym = sym

    def erasure(self):
        if not self.typeArguments:
            return self
        return ClassType(self.qualifiedName, (), self.sym)

    def __str__(self):
        if self.typeArguments:
            return "%s<%s>" % (
                self.qualifiedName,
                ",".join(str(t) for t in self.typeArguments),
            )
        return self.qualifiedName

    def __eq__(self, other):
        return (
            isinstance(other, ClassType)
            and other.qualifiedName == self.qualifiedName
            and other.typeArguments == self.typeArguments
        )

    def __hash__(self):
        return hash(("class", self.qualifiedName, self.typeArguments))


class ArrayType(Type):
    __slots__ = ("elemtype",)

    def __init__(self, elemtype):
        self.elemtype = elemtype

    def erasure(self):
        elem = self.elemtype.erasure()
        if elem is self.elemtype:
            return self
        return ArrayType(elem)

    def __str__(self):
        return "%s[]" % self.elemtype

    def __eq__(self, other):
        return isinstance(other, ArrayType) and other.elemtype == self.elemtype

    def __hash__(self):
        return hash(("array", self.elemtype))


class TypeVar(Type):
    """A type variable; erases to its first bound, or Object."""
    __slots__ = ("name", "bound")

    def __init__(self, name, bound=None):
        self.name = name
        self.bound = bound

    def erasure(self):
        if self.bound is None:
            return OBJECT_TYPE
        return self.bound.erasure()

    def __str__(self):
        return self.name


class WildcardType(Type):
    """``?``, ``? extends T`` or ``? super T`` as a type argument."""
    __slots__ = ("kind", "bound")

    def __init__(self, kind, bound=None):
        self.kind = kind
        self.bound = bound

    def erasure(self):
        if self.kind == "extends" and self.bound is not None:
            return self.bound.erasure()
        return OBJECT_TYPE

    def __str__(self):
        if self.bound is None:
            return "?"
        return "? %s %s" % (self.kind, self.bound)


OBJECT_TYPE = ClassType("java.lang.Object")
VOID_TYPE = PrimitiveType("void")
INT_TYPE = PrimitiveType("int")

PRIMITIVE_NAMES = frozenset(
    ["boolean", "byte", "char", "short", "int", "long", "float", "double", "void"]
)


class Symbol(object):
    """Base of all symbols.

    Attributes:
        name: Simple name.
        owner: Enclosing symbol (class for members, method for locals), or None.
        pos: Declaration offset, NOPOS if synthetic.
    """
    __slots__ = ("name", "owner", "pos")

    def __init__(self, name, owner=None, pos=NOPOS):
        self.name = name
        self.owner = owner
        self.pos = pos

    def getQualifiedName(self):
        return self.name

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, self)

    def __str__(self):
        return self.getQualifiedName()


class ClassSymbol(Symbol):
    """A class, interface, enum, record or annotation type.

    Attributes:
        packageName: Package of the compilation unit ("" for the default package).
        flatname: Binary name, with ``$`` separating nested, local and
            anonymous classes (``p.Outer$Inner``, ``p.Outer$1``).
        fullname: Source-level qualified name (``p.Outer.Inner``); equal to
            flatname for local and anonymous classes.
        kind: "class", "interface", "enum", "record" or "annotation".
        members: Directly declared members in declaration order.
        superclass: ClassType of the declared superclass, or None.
        interfaces: ClassTypes of declared superinterfaces.
        typeParameters: TypeVars declared on the class.
        isStatic: True for static nested classes and all top-level classes.
    """
    __slots__ = (
        "packageName",
        "flatname",
        "fullname",
        "kind",
        "members",
        "superclass",
        "interfaces",
        "typeParameters",
        "isStatic",
        "isAnonymous",
    )

    def __init__(self, name, flatname, owner=None, pos=NOPOS, packageName="",
                 fullname=None, kind="class"):
        Symbol.__init__(self, name, owner, pos)
        self.packageName = packageName
        self.flatname = flatname
        self.fullname = fullname if fullname is not None else flatname
        self.kind = kind
        self.members = []
        self.superclass = None
        self.interfaces = []
        self.typeParameters = []
        self.isStatic = owner is None
        self.isAnonymous = False

    def getQualifiedName(self):
        return self.fullname

    def getEnclosedElements(self):
        return list(self.members)

    def enter(self, member):
        self.members.append(member)
        return member

    def methods(self):
        return [m for m in self.members if isinstance(m, MethodSymbol)]

    def fields(self):
        return [m for m in self.members if isinstance(m, VarSymbol)]

    def lookupField(self, name):
        """Find a field declared directly on this class."""
        for member in self.members:
            if isinstance(member, VarSymbol) and member.name == name:
                return member
        return None

    def asType(self):
        return ClassType(self.flatname, (), self)

    def __str__(self):
        return self.flatname


class MethodSymbol(Symbol):
    """A method or constructor.

    Attributes:
        params: Parameter VarSymbols in order.
        returnType: Declared return type; void for constructors.
        typeParameters: TypeVars declared on the method.
        isStatic: Declared static.
        isVarargs: Last parameter is variadic.
        synthetic: Not declared in source (class initialization pseudo-methods).
    """
    __slots__ = ("params", "returnType", "typeParameters", "isStatic", "isVarargs",
                 "synthetic")

    def __init__(self, name, owner, pos=NOPOS, returnType=VOID_TYPE, isStatic=False):
        Symbol.__init__(self, name, owner, pos)
        self.params = []
        self.returnType = returnType
        self.typeParameters = []
        self.isStatic = isStatic
        self.isVarargs = False
        self.synthetic = False

    def isConstructor(self):
        return self.name == CONSTRUCTOR_NAME

    def parameterTypes(self):
        return [param.type for param in self.params]

    def __str__(self):
        return "%s.%s(%s)" % (
            self.owner,
            self.name,
            ",".join(str(t.erasure()) for t in self.parameterTypes()),
        )


class VarSymbol(Symbol):
    """A variable: field, enum constant, parameter, local or resource.

    Attributes:
        type: Declared type (may be None when it cannot be determined, e.g.
            ``var`` locals and implicitly typed lambda parameters).
        kind: "field", "enum_constant", "parameter", "local" or "exception".
        isStatic: Static field or enum constant.
    """
    __slots__ = ("type", "kind", "isStatic")

    def __init__(self, name, owner, type=None, pos=NOPOS, kind="field", isStatic=False):
        Symbol.__init__(self, name, owner, pos)
        self.type = type
        self.kind = kind
        self.isStatic = isStatic

    def isField(self):
        return self.kind in ("field", "enum_constant")


def syntheticInitializer(owner, static):
    """The pseudo-method that runs a class's static or instance initializers."""
    name = CLASS_INITIALIZER_NAME if static else CONSTRUCTOR_NAME
    method = MethodSymbol(name, owner, NOPOS, VOID_TYPE, isStatic=static)
    method.synthetic = True
    return method


# The pseudo-class owning members shared by all array types.
ARRAY_CLASS = ClassSymbol("Array", "Array")

# An array's implicit ``length`` field; it has no source position.
ARRAY_LENGTH = ARRAY_CLASS.enter(VarSymbol("length", ARRAY_CLASS, INT_TYPE, NOPOS))
