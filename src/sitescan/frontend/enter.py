"""Declaration entry: symbols for everything a compilation unit declares.

Runs before conversion, in two passes over the concrete syntax tree:

1. Every class, interface, enum, record and annotation type gets a
   ClassSymbol with its binary name, including local classes
   (``Outer$1Local``) and anonymous classes (``Outer$1``), numbered per
   enclosing class in source order.
2. Class headers (supertypes, type parameter bounds) are resolved, then
   members are entered: fields, enum constants, methods, constructors and the
   members the compiler adds implicitly (default constructors, ``values`` and
   ``valueOf`` of enums, record fields, accessors and canonical
   constructors).

The converter looks symbols up by the syntax node that declares them.
"""

import logging

from sitescan.language.java.symbols import (
    NOPOS,
    CONSTRUCTOR_NAME,
    OBJECT_TYPE,
    VOID_TYPE,
    ArrayType,
    ClassSymbol,
    ClassType,
    MethodSymbol,
    PrimitiveType,
    TypeVar,
    VarSymbol,
    WildcardType,
)
from .parser import (
    nodeText,
    nodeKey,
    namedChildren,
    childOfType,
    childrenOfType,
    modifierFlags,
    dimensionCount,
)
from .scopes import Env

LOG = logging.getLogger(__name__)

CLASS_KINDS = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
    "record_declaration": "record",
    "annotation_type_declaration": "annotation",
}

METHOD_KINDS = frozenset(
    [
        "method_declaration",
        "constructor_declaration",
        "compact_constructor_declaration",
        "annotation_type_element_declaration",
    ]
)

PRIMITIVE_KINDS = frozenset(["integral_type", "floating_point_type", "boolean_type", "void_type"])

ANNOTATION_KINDS = frozenset(["annotation", "marker_annotation"])

STRING_TYPE = ClassType("java.lang.String")


### Types ###

def qualifiedParts(node):
    """Segments of a (scoped) identifier or type identifier, annotations dropped."""
    if node.type in ("identifier", "type_identifier"):
        return [nodeText(node)]
    parts = []
    for child in namedChildren(node):
        if child.type in ("identifier", "type_identifier"):
            parts.append(nodeText(child))
        elif child.type in ("scoped_identifier", "scoped_type_identifier"):
            parts.extend(qualifiedParts(child))
        elif child.type == "generic_type":
            parts.extend(qualifiedParts(namedChildren(child)[0]))
    return parts


def wrapDimensions(t, count):
    if t is None:
        return None
    for _ in range(count):
        t = ArrayType(t)
    return t


def resolveType(node, env):
    """Type denoted by a type syntax node, or None if it has none (``var``)."""
    if node is None:
        return None
    kind = node.type

    if kind in PRIMITIVE_KINDS:
        return PrimitiveType(nodeText(node))

    if kind in ("type_identifier", "identifier"):
        name = nodeText(node)
        if name == "var":
            return None
        return env.lookupType(name)

    if kind in ("scoped_type_identifier", "scoped_identifier"):
        return env.lookupQualifiedType(qualifiedParts(node))

    if kind == "generic_type":
        base = None
        arguments = []
        for child in namedChildren(node):
            if child.type == "type_arguments":
                arguments = [resolveType(arg, env) or OBJECT_TYPE for arg in namedChildren(child)]
            elif base is None:
                base = resolveType(child, env)
        if isinstance(base, ClassType):
            return ClassType(base.qualifiedName, arguments, base.sym)
        return base

    if kind == "array_type":
        element = resolveType(node.child_by_field_name("element"), env)
        return wrapDimensions(element, dimensionCount(node.child_by_field_name("dimensions")))

    if kind == "annotated_type":
        underlying = [c for c in namedChildren(node) if c.type not in ANNOTATION_KINDS]
        return resolveType(underlying[-1], env) if underlying else None

    if kind == "wildcard":
        boundKind = None
        bound = None
        for child in node.children:
            if child.type == "extends" or child.type == "super":
                boundKind = child.type
            elif child.is_named and child.type not in ANNOTATION_KINDS:
                bound = child
        if boundKind is None:
            return WildcardType(None)
        return WildcardType(boundKind, resolveType(bound, env))

    return None


def typeListNodes(node):
    """Type nodes of a ``super_interfaces``/``extends_interfaces``/``superclass`` node."""
    if node is None:
        return []
    typeList = childOfType(node, "type_list")
    if typeList is not None:
        return namedChildren(typeList)
    return namedChildren(node)


### Entry ###

class Enter(object):
    """
    Symbol table of one compilation unit, keyed by declaring syntax node.

    Attributes:
        unit: UnitScope of the compilation unit.
        classes: node key -> ClassSymbol (for anonymous classes, the key of
            their ``class_body``).
        classEnvs: ClassSymbol -> Env holding the class's type variables.
        methodEnvs: node key of a method -> Env holding its type variables.
        members: node key -> MethodSymbol or VarSymbol of fields, enum
            constants, methods, constructors and their parameters.
    """

    def __init__(self, unit, offsets):
        self.unit = unit
        self.offsets = offsets
        self.rootEnv = Env(unit=unit)

        self.classes = {}
        self.classEnvs = {}
        self.methodEnvs = {}
        self.members = {}

        self.entered = []
        self.flatnames = set()
        self.typeBounds = []
        self.anonymousSupertypes = {}

    def pos(self, node):
        return self.offsets(node.start_byte)

    def run(self, root):
        self.enterClasses(root, self.rootEnv, None)

        for sym, node, env in self.entered:
            self.completeHeader(sym, node, env)
        for tv, bounds, env in self.typeBounds:
            if bounds:
                tv.bound = resolveType(bounds[0], env)
        for sym, node, env in self.entered:
            self.enterMembers(sym, node, env)
        return self

    def classSymbol(self, node):
        return self.classes.get(nodeKey(node))

    def member(self, node):
        return self.members.get(nodeKey(node))

    ### Pass 1: classes ###

    def localClassName(self, enclosing, name):
        base = enclosing.flatname if enclosing is not None else self.unit.packageName
        i = 1
        while True:
            flatname = "%s$%d%s" % (base, i, name)
            if flatname not in self.flatnames:
                return flatname
            i += 1

    def declareTypeParameters(self, node, env, target):
        params = node.child_by_field_name("type_parameters") or childOfType(node, "type_parameters")
        if params is None:
            return
        for param in childrenOfType(params, "type_parameter"):
            nameNode = childOfType(param, "type_identifier", "identifier")
            if nameNode is None:
                continue
            tv = TypeVar(nodeText(nameNode))
            env.types[tv.name] = tv
            target.append(tv)
            bound = childOfType(param, "type_bound")
            self.typeBounds.append((tv, namedChildren(bound) if bound is not None else [], env))

    def register(self, sym, key, node, env):
        self.flatnames.add(sym.flatname)
        self.unit.declareClass(sym)
        self.classes[key] = sym
        classEnv = env.child(classSymbol=sym)
        self.classEnvs[sym] = classEnv
        self.entered.append((sym, node, classEnv))
        return classEnv

    def enterClass(self, node, kind, env, enclosing, memberOf):
        nameNode = node.child_by_field_name("name")
        name = nodeText(nameNode) if nameNode is not None else ""
        flags = modifierFlags(node)

        if memberOf is not None:
            flatname = "%s$%s" % (memberOf.flatname, name)
            fullname = "%s.%s" % (memberOf.fullname, name)
        elif enclosing is None:
            flatname = fullname = self.unit.qualify(name)
        else:
            flatname = fullname = self.localClassName(enclosing, name)

        sym = ClassSymbol(
            name,
            flatname,
            owner=memberOf if memberOf is not None else enclosing,
            pos=self.pos(nameNode) if nameNode is not None else NOPOS,
            packageName=self.unit.packageName,
            fullname=fullname,
            kind=kind,
        )

        if memberOf is not None:
            sym.isStatic = (
                "static" in flags
                or kind != "class"
                or memberOf.kind in ("interface", "annotation")
            )
            memberOf.enter(sym)
        elif enclosing is not None:
            sym.isStatic = kind != "class"
            env.types[name] = sym.asType()

        classEnv = self.register(sym, nodeKey(node), node, env)
        self.declareTypeParameters(node, classEnv, sym.typeParameters)
        LOG.debug("Entered %s %s", kind, flatname)
        return sym, classEnv

    def enterAnonymous(self, body, env, enclosing, supertype):
        flatname = self.localClassName(enclosing, "")
        sym = ClassSymbol(
            "",
            flatname,
            owner=enclosing,
            pos=self.pos(body),
            packageName=self.unit.packageName,
            kind="class",
        )
        sym.isStatic = False
        sym.isAnonymous = True
        classEnv = self.register(sym, nodeKey(body), body, env)
        self.anonymousSupertypes[sym] = (supertype, env)
        LOG.debug("Entered anonymous class %s", flatname)
        return sym, classEnv

    def enterBody(self, body, classEnv, sym):
        for child in namedChildren(body):
            if child.type == "enum_body_declarations":
                self.enterBody(child, classEnv, sym)
            elif child.type in CLASS_KINDS:
                self.enterClasses(child, classEnv, sym, memberOf=sym)
            else:
                self.enterClasses(child, classEnv, sym)

    def enterClasses(self, node, env, enclosing, memberOf=None):
        kind = CLASS_KINDS.get(node.type)
        if kind is not None:
            sym, classEnv = self.enterClass(node, kind, env, enclosing, memberOf)
            body = node.child_by_field_name("body")
            if body is not None:
                self.enterBody(body, classEnv, sym)
            return

        if node.type in METHOD_KINDS:
            methodEnv = env.child()
            self.declareTypeParameters(node, methodEnv, [])
            self.methodEnvs[nodeKey(node)] = methodEnv
            env = methodEnv

        if node.type in ("object_creation_expression", "enum_constant"):
            body = childOfType(node, "class_body")
            for child in namedChildren(node):
                if body is None or nodeKey(child) != nodeKey(body):
                    self.enterClasses(child, env, enclosing)
            if body is not None:
                if node.type == "enum_constant":
                    supertype = ("enum", enclosing)
                else:
                    supertype = ("type", node.child_by_field_name("type"))
                sym, classEnv = self.enterAnonymous(body, env, enclosing, supertype)
                self.enterBody(body, classEnv, sym)
            return

        for child in namedChildren(node):
            self.enterClasses(child, env, enclosing)

    ### Pass 2: headers and members ###

    def completeHeader(self, sym, node, env):
        if sym.isAnonymous:
            (how, what), outerEnv = self.anonymousSupertypes[sym]
            if how == "enum":
                supertype = what.asType() if what is not None else OBJECT_TYPE
            else:
                supertype = resolveType(what, outerEnv)
            if isinstance(supertype, ClassType) and supertype.sym is not None and \
                    supertype.sym.kind in ("interface", "annotation"):
                sym.superclass = OBJECT_TYPE
                sym.interfaces = [supertype]
            else:
                sym.superclass = supertype if supertype is not None else OBJECT_TYPE
            return

        kind = sym.kind
        if kind == "class":
            superNodes = typeListNodes(node.child_by_field_name("superclass"))
            if superNodes:
                sym.superclass = resolveType(superNodes[0], env)
            elif sym.flatname != OBJECT_TYPE.qualifiedName:
                sym.superclass = OBJECT_TYPE
            interfaceNodes = typeListNodes(node.child_by_field_name("interfaces"))
        elif kind == "interface":
            interfaceNodes = typeListNodes(childOfType(node, "extends_interfaces"))
        elif kind == "enum":
            sym.superclass = ClassType("java.lang.Enum", [sym.asType()])
            interfaceNodes = typeListNodes(node.child_by_field_name("interfaces"))
        elif kind == "record":
            sym.superclass = ClassType("java.lang.Record")
            interfaceNodes = typeListNodes(node.child_by_field_name("interfaces"))
        else:
            interfaceNodes = []
            sym.interfaces = [ClassType("java.lang.annotation.Annotation")]

        for interfaceNode in interfaceNodes:
            t = resolveType(interfaceNode, env)
            if t is not None:
                sym.interfaces.append(t)

    def bodyMembers(self, body):
        for child in namedChildren(body):
            if child.type == "enum_body_declarations":
                for member in self.bodyMembers(child):
                    yield member
            else:
                yield child

    def enterMembers(self, sym, node, env):
        if sym.isAnonymous:
            body = node
        else:
            body = node.child_by_field_name("body")

        components = []
        if sym.kind == "record":
            components = self.enterRecordComponents(sym, node, env)

        implicitStatic = sym.kind in ("interface", "annotation")
        constructors = []
        hasCompactConstructor = False

        if body is not None:
            for member in self.bodyMembers(body):
                kind = member.type
                if kind == "enum_constant":
                    self.enterEnumConstant(sym, member)
                elif kind in ("field_declaration", "constant_declaration"):
                    self.enterFields(sym, member, env, implicitStatic)
                elif kind == "method_declaration":
                    self.enterMethod(sym, member, env)
                elif kind == "annotation_type_element_declaration":
                    self.enterMethod(sym, member, env)
                elif kind == "constructor_declaration":
                    constructors.append(self.enterConstructor(sym, member, env))
                elif kind == "compact_constructor_declaration":
                    hasCompactConstructor = True
                    constructors.append(self.enterCompactConstructor(sym, member, components))

        self.enterImplicitMembers(sym, constructors, components, hasCompactConstructor)

    def enterEnumConstant(self, sym, node):
        nameNode = node.child_by_field_name("name")
        constant = VarSymbol(
            nodeText(nameNode), sym, sym.asType(), self.pos(nameNode), "enum_constant", True
        )
        sym.enter(constant)
        self.members[nodeKey(node)] = constant

    def enterFields(self, sym, node, env, implicitStatic):
        flags = modifierFlags(node)
        isStatic = implicitStatic or "static" in flags
        baseType = resolveType(node.child_by_field_name("type"), env)
        for declarator in childrenOfType(node, "variable_declarator"):
            nameNode = declarator.child_by_field_name("name")
            fieldType = wrapDimensions(
                baseType, dimensionCount(declarator.child_by_field_name("dimensions"))
            )
            field = VarSymbol(
                nodeText(nameNode), sym, fieldType, self.pos(nameNode), "field", isStatic
            )
            sym.enter(field)
            self.members[nodeKey(declarator)] = field

    def methodEnv(self, node, env):
        return self.methodEnvs.get(nodeKey(node), env)

    def enterParameters(self, method, paramsNode, env):
        if paramsNode is None:
            return
        for param in namedChildren(paramsNode):
            if param.type == "formal_parameter":
                nameNode = param.child_by_field_name("name")
                paramType = wrapDimensions(
                    resolveType(param.child_by_field_name("type"), env),
                    dimensionCount(param.child_by_field_name("dimensions")),
                )
            elif param.type == "spread_parameter":
                declarator = childOfType(param, "variable_declarator")
                nameNode = declarator.child_by_field_name("name") if declarator else None
                typeNodes = [
                    c for c in namedChildren(param)
                    if c.type not in ("modifiers", "variable_declarator") and c.type not in ANNOTATION_KINDS
                ]
                elemType = resolveType(typeNodes[0], env) if typeNodes else None
                paramType = ArrayType(elemType if elemType is not None else OBJECT_TYPE)
                method.isVarargs = True
            else:
                continue

            if nameNode is None:
                continue
            var = VarSymbol(nodeText(nameNode), method, paramType, self.pos(nameNode), "parameter")
            method.params.append(var)
            self.members[nodeKey(param)] = var

    def enterMethod(self, sym, node, env):
        methodEnv = self.methodEnv(node, env)
        nameNode = node.child_by_field_name("name")
        returnType = wrapDimensions(
            resolveType(node.child_by_field_name("type"), methodEnv),
            dimensionCount(node.child_by_field_name("dimensions")),
        )
        method = MethodSymbol(
            nodeText(nameNode),
            sym,
            self.pos(nameNode),
            returnType if returnType is not None else OBJECT_TYPE,
            isStatic="static" in modifierFlags(node),
        )
        method.typeParameters = [t for t in methodEnv.types.values() if isinstance(t, TypeVar)]
        self.enterParameters(method, node.child_by_field_name("parameters"), methodEnv)
        sym.enter(method)
        self.members[nodeKey(node)] = method
        return method

    def enterConstructor(self, sym, node, env):
        methodEnv = self.methodEnv(node, env)
        nameNode = node.child_by_field_name("name")
        method = MethodSymbol(CONSTRUCTOR_NAME, sym, self.pos(nameNode), VOID_TYPE)
        self.enterParameters(method, node.child_by_field_name("parameters"), methodEnv)
        sym.enter(method)
        self.members[nodeKey(node)] = method
        return method

    def enterCompactConstructor(self, sym, node, components):
        nameNode = node.child_by_field_name("name")
        pos = self.pos(nameNode) if nameNode is not None else self.pos(node)
        method = MethodSymbol(CONSTRUCTOR_NAME, sym, pos, VOID_TYPE)
        for component in components:
            method.params.append(
                VarSymbol(component.name, method, component.type, component.pos, "parameter")
            )
        sym.enter(method)
        self.members[nodeKey(node)] = method
        return method

    def enterRecordComponents(self, sym, node, env):
        components = []
        paramsNode = node.child_by_field_name("parameters")
        if paramsNode is None:
            return components
        for param in childrenOfType(paramsNode, "formal_parameter"):
            nameNode = param.child_by_field_name("name")
            if nameNode is None:
                continue
            field = VarSymbol(
                nodeText(nameNode),
                sym,
                resolveType(param.child_by_field_name("type"), env),
                self.pos(nameNode),
                "field",
            )
            sym.enter(field)
            self.members[nodeKey(param)] = field
            components.append(field)
        return components

    def enterImplicitMembers(self, sym, constructors, components, hasCompactConstructor):
        if sym.kind == "record":
            declared = set(m.name for m in sym.methods() if not m.params)
            for component in components:
                if component.name not in declared:
                    accessor = MethodSymbol(component.name, sym, NOPOS, component.type)
                    accessor.synthetic = True
                    sym.enter(accessor)

            componentTypes = [str(c.type) for c in components]
            canonical = hasCompactConstructor or any(
                [str(t) for t in ctor.parameterTypes()] == componentTypes for ctor in constructors
            )
            if not canonical:
                ctor = MethodSymbol(CONSTRUCTOR_NAME, sym, NOPOS, VOID_TYPE)
                ctor.synthetic = True
                for component in components:
                    ctor.params.append(
                        VarSymbol(component.name, ctor, component.type, NOPOS, "parameter")
                    )
                sym.enter(ctor)

        elif sym.kind in ("class", "enum") and not constructors:
            ctor = MethodSymbol(CONSTRUCTOR_NAME, sym, NOPOS, VOID_TYPE)
            ctor.synthetic = True
            sym.enter(ctor)

        if sym.kind == "enum":
            values = MethodSymbol("values", sym, NOPOS, ArrayType(sym.asType()), isStatic=True)
            values.synthetic = True
            sym.enter(values)

            valueOf = MethodSymbol("valueOf", sym, NOPOS, sym.asType(), isStatic=True)
            valueOf.synthetic = True
            valueOf.params.append(VarSymbol("name", valueOf, STRING_TYPE, NOPOS, "parameter"))
            sym.enter(valueOf)
