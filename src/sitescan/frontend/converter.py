"""Conversion of tree-sitter syntax trees into typed Java trees.

The converter rebuilds the concrete syntax tree as the node family of
``sitescan.language.java.ast`` (javac's layout) and binds names as it goes:

- declarations get the symbols Enter created for them;
- locals, parameters and pattern variables get fresh VarSymbols, scoped by
  block, loop, catch clause and lambda;
- identifiers and member selects are bound to fields and variables when the
  qualifier's class is declared in the unit, and array ``length`` to the
  shared array length symbol;
- type references carry their resolved Type.

Offsets (``pos``) are character offsets. For named declarations and member
selects in expressions they point at the name; type references point at
their first character. Syntax errors are recovered from: an ERROR node
becomes an Erroneous node holding its text.
"""

import contextlib
import logging

from sitescan.language.java import ast
from sitescan.language.java.symbols import (
    ARRAY_LENGTH,
    CONSTRUCTOR_NAME,
    INT_TYPE,
    ArrayType,
    ClassType,
    MethodSymbol,
    PrimitiveType,
    TypeVar,
    VarSymbol,
)
from .cstdispatch import CSTDispatcher, rule
from .enter import (
    ANNOTATION_KINDS,
    CLASS_KINDS,
    PRIMITIVE_KINDS,
    STRING_TYPE,
    Enter,
    qualifiedParts,
    resolveType,
    typeListNodes,
    wrapDimensions,
)
from .parser import (
    COMMENT_KINDS,
    OffsetMap,
    childOfType,
    childrenOfType,
    countSyntaxErrors,
    dimensionCount,
    modifierFlags,
    namedChildren,
    nodeKey,
    nodeText,
    parse,
)
from .scopes import Env, UnitScope, findField, findMemberClass, findMethod

LOG = logging.getLogger(__name__)

TYPE_KINDS = frozenset(
    [
        "type_identifier",
        "scoped_type_identifier",
        "generic_type",
        "array_type",
        "annotated_type",
    ]
) | PRIMITIVE_KINDS

INTEGER_LITERALS = frozenset(
    [
        "decimal_integer_literal",
        "hex_integer_literal",
        "octal_integer_literal",
        "binary_integer_literal",
    ]
)

FLOAT_LITERALS = frozenset(["decimal_floating_point_literal", "hex_floating_point_literal"])

ENUM_CONSTANT_FLAGS = frozenset(["public", "static", "final"])
RECORD_COMPONENT_FLAGS = frozenset(["private", "final"])

CLASS_TYPE = ClassType("java.lang.Class")


def literalTypetag(node):
    kind = node.type
    text = nodeText(node)
    if kind in INTEGER_LITERALS:
        return "long" if text[-1:] in "lL" else "int"
    if kind in FLOAT_LITERALS:
        return "float" if text[-1:] in "fF" else "double"
    if kind in ("true", "false"):
        return "boolean"
    if kind == "character_literal":
        return "char"
    if kind in ("string_literal", "text_block"):
        return "String"
    return "null"


class Converter(CSTDispatcher):
    """
    Converts one parsed compilation unit.

    Attributes:
        text: Source text of the unit.
        sourcefile: Name recorded on the CompilationUnit.
        offsets: Byte to character offset map.
        unit: UnitScope built from the package and imports.
        enter: Declared symbols of the unit.
        env: Current lexical Env.
    """

    def __init__(self, text, sourcefile="<string>"):
        self.text = text
        self.sourcefile = sourcefile
        self.offsets = OffsetMap(text)
        self.unit = None
        self.enter = None
        self.env = None

    def pos(self, node):
        return self.offsets(node.start_byte)

    def convert(self, tree):
        root = tree.root_node
        self.unit = UnitScope(self.packageName(root))
        for node in childrenOfType(root, "import_declaration"):
            self.declareImport(node)
        self.enter = Enter(self.unit, self.offsets).run(root)
        self.env = Env(unit=self.unit)
        return self.dispatch("unit", root)

    @contextlib.contextmanager
    def scope(self, env=None):
        saved = self.env
        self.env = env if env is not None else saved.child()
        try:
            yield self.env
        finally:
            self.env = saved

    def dispatch(self, position, node, *args):
        """Convert ``node`` as a ``position``.

        A subtree that contains syntax errors and cannot be rebuilt (a
        required child is missing or malformed) becomes an Erroneous node.
        The unit itself is always rebuilt.
        """
        if position == "unit" or not node.has_error:
            return CSTDispatcher.dispatch(self, position, node, *args)
        try:
            return CSTDispatcher.dispatch(self, position, node, *args)
        except (AttributeError, IndexError, TypeError) as e:
            LOG.debug("%s: dropping malformed %s: %s", self.sourcefile, node.type, e)
            return self.defaultRule(position, node)

    def defaultRule(self, position, node, *args):
        if position == "statement":
            return self.erroneousStatement(node)
        return self.erroneous(node)

    def erroneous(self, node):
        LOG.debug("%s: cannot convert %s at offset %d", self.sourcefile, node.type, self.pos(node))
        return ast.Erroneous(text=nodeText(node), pos=self.pos(node))

    def erroneousStatement(self, node):
        return ast.ExpressionStatement(self.erroneous(node), pos=self.pos(node))

    ### Unit level ###

    def packageName(self, root):
        package = childOfType(root, "package_declaration")
        if package is None:
            return ""
        name = childOfType(package, "scoped_identifier", "identifier")
        return ".".join(qualifiedParts(name)) if name is not None else ""

    def declareImport(self, node):
        name = childOfType(node, "scoped_identifier", "identifier")
        if name is None:
            return
        self.unit.addImport(
            ".".join(qualifiedParts(name)),
            staticImport=any(c.type == "static" for c in node.children),
            onDemand=childOfType(node, "asterisk") is not None,
        )

    @rule("unit", "program")
    def convertProgram(self, node):
        annotations = []
        pid = None
        defs = []
        for child in namedChildren(node):
            if child.type == "package_declaration":
                annotations = [self.convertAnnotation(a) for a in childrenOfType(child, *ANNOTATION_KINDS)]
                name = childOfType(child, "scoped_identifier", "identifier")
                if name is not None:
                    pid = self.convertName(name)
            elif child.type == "import_declaration":
                defs.append(self.convertImport(child))
            elif child.type in CLASS_KINDS:
                defs.append(self.dispatch("member", child))
            else:
                defs.append(self.erroneous(child))
        return ast.CompilationUnit(annotations, pid, defs, sourcefile=self.sourcefile, pos=0)

    def convertImport(self, node):
        name = childOfType(node, "scoped_identifier", "identifier")
        qualid = self.convertName(name) if name is not None else self.erroneous(node)
        asterisk = childOfType(node, "asterisk")
        if asterisk is not None:
            qualid = ast.FieldAccess(qualid, name="*", pos=self.pos(asterisk))
        return ast.Import(
            qualid,
            staticImport=any(c.type == "static" for c in node.children),
            pos=self.pos(node),
        )

    def convertName(self, node):
        """Plain dotted name (package names, annotation types, import targets)."""
        if node.type == "scoped_identifier":
            scope = node.child_by_field_name("scope")
            name = node.child_by_field_name("name")
            return ast.FieldAccess(
                self.convertName(scope), name=nodeText(name), pos=self.pos(name)
            )
        return ast.Ident(name=nodeText(node), pos=self.pos(node))

    ### Modifiers and annotations ###

    def convertModifiers(self, node, implicit=frozenset()):
        mods = childOfType(node, "modifiers")
        if mods is None:
            return ast.Modifiers([], flags=frozenset(implicit))
        annotations = [self.convertAnnotation(a) for a in childrenOfType(mods, *ANNOTATION_KINDS)]
        return ast.Modifiers(
            annotations, flags=modifierFlags(node) | implicit, pos=self.pos(mods)
        )

    def annotationsOf(self, node):
        return [self.convertAnnotation(a) for a in childrenOfType(node, *ANNOTATION_KINDS)]

    def convertAnnotation(self, node):
        nameNode = node.child_by_field_name("name")
        annotationType = self.convertAnnotationType(nameNode)
        args = []
        argsNode = node.child_by_field_name("arguments")
        if argsNode is not None:
            for arg in namedChildren(argsNode):
                if arg.type == "element_value_pair":
                    key = arg.child_by_field_name("key")
                    args.append(
                        ast.Assign(
                            ast.Ident(name=nodeText(key), pos=self.pos(key)),
                            self.convertElementValue(arg.child_by_field_name("value")),
                            pos=self.pos(arg),
                        )
                    )
                else:
                    args.append(self.convertElementValue(arg))
        return ast.Annotation(annotationType, args, pos=self.pos(node))

    def convertAnnotationType(self, node):
        tree = self.convertName(node)
        tree.type = resolveType(node, self.env)
        return tree

    def convertElementValue(self, node):
        if node is None:
            return None
        if node.type == "element_value_array_initializer":
            elems = [self.convertElementValue(c) for c in namedChildren(node)]
            return ast.NewArray([], None, [], [], elems, pos=self.pos(node))
        if node.type in ANNOTATION_KINDS:
            return self.convertAnnotation(node)
        return self.convertExpression(node)

    ### Types ###

    def convertType(self, node):
        if node is None:
            return None
        return self.dispatch("type", node)

    def annotate(self, annotations, tree):
        """``tree`` under its type-use annotations, if it has any."""
        if not annotations or tree is None:
            return tree
        return ast.AnnotatedType(
            annotations, tree, type=getattr(tree, "type", None), pos=annotations[0].pos
        )

    def annotationsAfter(self, node, token):
        """Converted annotations among the children of ``node`` that follow ``token``."""
        annotations = []
        seen = False
        for child in node.children:
            if child.type == token:
                seen = True
            elif seen and child.type in ANNOTATION_KINDS:
                annotations.append(self.convertAnnotation(child))
        return annotations

    def dimensionAnnotations(self, node):
        """Annotations of each ``[]`` pair of a ``dimensions`` node, outermost first."""
        levels = []
        if node is None:
            return levels
        pending = []
        for child in node.children:
            if child.type in ANNOTATION_KINDS:
                pending.append(self.convertAnnotation(child))
            elif child.type == "[":
                levels.append(pending)
                pending = []
        return levels

    def wrapArrayTypeTree(self, tree, levels):
        """Wrap ``tree`` in one ArrayTypeTree per entry of ``levels``.

        ``levels`` holds the annotations of each ``[]`` pair in source order,
        so the last entry is the innermost array level.
        """
        for annotations in reversed(levels):
            elemType = getattr(tree, "type", None)
            tree = ast.ArrayTypeTree(
                tree, type=ArrayType(elemType) if elemType is not None else None, pos=tree.pos
            )
            tree = self.annotate(annotations, tree)
        return tree

    @rule("type", "integral_type", "floating_point_type", "boolean_type", "void_type")
    def convertPrimitiveType(self, node):
        name = nodeText(node)
        return ast.PrimitiveTypeTree(typetag=name, type=PrimitiveType(name), pos=self.pos(node))

    @rule("type", "type_identifier", "identifier")
    def convertTypeIdentifier(self, node):
        name = nodeText(node)
        if name == "var":
            return None
        return ast.Ident(name=name, type=self.env.lookupType(name), pos=self.pos(node))

    @rule("type", "scoped_type_identifier", "scoped_identifier")
    def convertScopedType(self, node):
        children = [c for c in namedChildren(node) if c.type not in ANNOTATION_KINDS]
        selected = self.convertType(children[0])
        name = children[-1]
        tree = ast.FieldAccess(
            selected,
            name=nodeText(name),
            type=resolveType(node, self.env),
            pos=self.pos(node),
        )
        return self.annotate(self.annotationsOf(node), tree)

    @rule("type", "generic_type")
    def convertGenericType(self, node):
        base = None
        arguments = []
        for child in namedChildren(node):
            if child.type == "type_arguments":
                arguments = self.convertTypeArguments(child)
            elif base is None:
                base = self.convertType(child)
        if base is None:
            return self.erroneous(node)
        return ast.TypeApply(base, arguments, type=resolveType(node, self.env), pos=self.pos(node))

    @rule("type", "array_type")
    def convertArrayType(self, node):
        element = self.convertType(node.child_by_field_name("element"))
        if element is None:
            return self.erroneous(node)
        return self.wrapArrayTypeTree(
            element, self.dimensionAnnotations(node.child_by_field_name("dimensions"))
        )

    @rule("type", "annotated_type")
    def convertAnnotatedType(self, node):
        underlying = [c for c in namedChildren(node) if c.type not in ANNOTATION_KINDS]
        if not underlying:
            return self.erroneous(node)
        tree = self.convertType(underlying[-1])
        if tree is None:
            return self.erroneous(node)
        return ast.AnnotatedType(
            self.annotationsOf(node),
            tree,
            type=getattr(tree, "type", None),
            pos=self.pos(node),
        )

    @rule("type", "wildcard")
    def convertWildcard(self, node):
        kind = "unbound"
        inner = None
        kindPos = self.pos(node)
        for child in node.children:
            if child.type == "extends" or child.type == "super":
                kind = child.type
                kindPos = self.pos(child)
            elif child.is_named and child.type not in ANNOTATION_KINDS and \
                    child.type not in COMMENT_KINDS:
                inner = self.convertType(child)
        wildcard = ast.Wildcard(
            ast.TypeBoundKind(kind=kind, pos=kindPos), inner, pos=self.pos(node)
        )
        return self.annotate(self.annotationsOf(node), wildcard)

    def convertTypeArguments(self, node):
        if node is None:
            return []
        return [t for t in (self.convertType(c) for c in namedChildren(node)) if t is not None]

    def convertTypeParameters(self, node):
        params = node.child_by_field_name("type_parameters") or childOfType(node, "type_parameters")
        if params is None:
            return []
        result = []
        for param in childrenOfType(params, "type_parameter"):
            nameNode = childOfType(param, "type_identifier", "identifier")
            name = nodeText(nameNode) if nameNode is not None else ""
            bound = childOfType(param, "type_bound")
            bounds = [self.convertType(b) for b in namedChildren(bound)] if bound is not None else []
            tv = self.env.types.get(name)
            result.append(
                ast.TypeParameter(
                    self.annotationsOf(param),
                    bounds,
                    name=name,
                    type=tv if isinstance(tv, TypeVar) else None,
                    pos=self.pos(nameNode if nameNode is not None else param),
                )
            )
        return result

    ### Declarations ###

    def classEnv(self, sym):
        env = self.env.child(classSymbol=sym)
        template = self.enter.classEnvs.get(sym)
        if template is not None:
            env.types.update(template.types)
        return env

    def methodEnv(self, node, sym):
        env = self.env.child(owner=sym)
        template = self.enter.methodEnvs.get(nodeKey(node))
        if template is not None:
            env.types.update(template.types)
        return env

    def convertClass(self, node, local=False):
        sym = self.enter.classSymbol(node)
        nameNode = node.child_by_field_name("name")
        name = nodeText(nameNode) if nameNode is not None else ""
        kind = CLASS_KINDS[node.type]
        mods = self.convertModifiers(node)

        if local and sym is not None:
            self.env.types[sym.name] = sym.asType()

        extending = None
        implementing = []
        defs = []
        with self.scope(self.classEnv(sym)):
            typarams = self.convertTypeParameters(node)
            if kind == "class":
                superNodes = typeListNodes(node.child_by_field_name("superclass"))
                if superNodes:
                    extending = self.convertType(superNodes[0])
                interfaceNodes = typeListNodes(node.child_by_field_name("interfaces"))
            elif kind == "interface":
                interfaceNodes = typeListNodes(childOfType(node, "extends_interfaces"))
            elif kind in ("enum", "record"):
                interfaceNodes = typeListNodes(node.child_by_field_name("interfaces"))
            else:
                interfaceNodes = []
            implementing = [t for t in (self.convertType(n) for n in interfaceNodes) if t is not None]

            if kind == "record":
                defs.extend(self.convertRecordComponents(node))
            body = node.child_by_field_name("body")
            if body is not None:
                defs.extend(self.convertClassBody(body))

        return ast.ClassDecl(
            mods,
            typarams,
            extending,
            implementing,
            defs,
            name=name,
            sym=sym,
            pos=self.pos(nameNode) if nameNode is not None else self.pos(node),
        )

    def convertAnonymousBody(self, body):
        sym = self.enter.classSymbol(body)
        with self.scope(self.classEnv(sym)):
            defs = self.convertClassBody(body)
        return ast.ClassDecl(
            ast.emptyModifiers(), [], None, [], defs, name="", sym=sym, pos=self.pos(body)
        )

    def convertClassBody(self, body):
        defs = []
        for member in namedChildren(body):
            if member.type == "enum_body_declarations":
                defs.extend(self.convertClassBody(member))
                continue
            converted = self.dispatch("member", member)
            if isinstance(converted, list):
                defs.extend(converted)
            elif converted is not None:
                defs.append(converted)
        return defs

    def convertRecordComponents(self, node):
        paramsNode = node.child_by_field_name("parameters")
        if paramsNode is None:
            return []
        decls = []
        for param in childrenOfType(paramsNode, "formal_parameter"):
            nameNode = param.child_by_field_name("name")
            if nameNode is None:
                continue
            decls.append(
                ast.VariableDecl(
                    self.convertModifiers(param, RECORD_COMPONENT_FLAGS),
                    self.convertType(param.child_by_field_name("type")),
                    name=nodeText(nameNode),
                    sym=self.enter.member(param),
                    pos=self.pos(nameNode),
                )
            )
        return decls

    @rule("member", *CLASS_KINDS)
    def convertMemberClass(self, node):
        return self.convertClass(node)

    @rule("member", "field_declaration", "constant_declaration")
    def convertFieldDecl(self, node):
        typeNode = node.child_by_field_name("type")
        return [
            self.convertDeclarator(node, typeNode, declarator, self.enter.member(declarator))
            for declarator in childrenOfType(node, "variable_declarator")
        ]

    def convertDeclarator(self, node, typeNode, declarator, sym):
        """VariableDecl for one declarator of a field or local declaration."""
        nameNode = declarator.child_by_field_name("name")
        vartype = self.convertType(typeNode)
        if vartype is not None:
            vartype = self.wrapArrayTypeTree(
                vartype, self.dimensionAnnotations(declarator.child_by_field_name("dimensions"))
            )
        value = declarator.child_by_field_name("value")
        init = self.convertInitializer(value) if value is not None else None
        return ast.VariableDecl(
            self.convertModifiers(node),
            vartype,
            None,
            init,
            name=nodeText(nameNode),
            sym=sym,
            pos=self.pos(nameNode),
        )

    def convertInitializer(self, node):
        if node.type == "array_initializer":
            return self.convertArrayInitializer(node)
        return self.convertExpression(node)

    @rule("member", "enum_constant")
    def convertEnumConstant(self, node):
        sym = self.enter.member(node)
        nameNode = node.child_by_field_name("name")
        pos = self.pos(nameNode)
        enum = self.env.enclosingClass()
        enumName = enum.name if enum is not None else ""
        enumType = enum.asType() if enum is not None else None

        args = self.convertArguments(node.child_by_field_name("arguments"))
        body = childOfType(node, "class_body")
        init = ast.NewClass(
            None,
            [],
            ast.Ident(name=enumName, type=enumType, pos=pos),
            args,
            self.convertAnonymousBody(body) if body is not None else None,
            pos=pos,
        )
        return ast.VariableDecl(
            self.convertModifiers(node, ENUM_CONSTANT_FLAGS),
            ast.Ident(name=enumName, type=enumType, pos=pos),
            None,
            init,
            name=nodeText(nameNode),
            sym=sym,
            pos=pos,
        )

    @rule("member", "method_declaration", "annotation_type_element_declaration")
    def convertMethod(self, node):
        sym = self.enter.member(node)
        nameNode = node.child_by_field_name("name")
        mods = self.convertModifiers(node)
        with self.scope(self.methodEnv(node, sym)):
            typarams = self.convertTypeParameters(node)
            restype = self.convertType(node.child_by_field_name("type"))
            if restype is not None:
                restype = self.wrapArrayTypeTree(
                    restype, self.dimensionAnnotations(node.child_by_field_name("dimensions"))
                )
            recvparam, params = self.convertParameters(node.child_by_field_name("parameters"))
            thrown = self.convertThrows(node)
            defaultValue = self.convertElementValue(node.child_by_field_name("value"))
            bodyNode = node.child_by_field_name("body")
            body = self.convertBlock(bodyNode) if bodyNode is not None else None
        return ast.MethodDecl(
            mods,
            restype,
            typarams,
            recvparam,
            params,
            thrown,
            defaultValue,
            body,
            name=nodeText(nameNode),
            sym=sym,
            pos=self.pos(nameNode),
        )

    @rule("member", "constructor_declaration", "compact_constructor_declaration")
    def convertConstructor(self, node):
        sym = self.enter.member(node)
        nameNode = node.child_by_field_name("name")
        mods = self.convertModifiers(node)
        with self.scope(self.methodEnv(node, sym)):
            typarams = self.convertTypeParameters(node)
            if node.type == "compact_constructor_declaration":
                recvparam, params = None, []
                if sym is not None:
                    for param in sym.params:
                        self.env.declare(param)
            else:
                recvparam, params = self.convertParameters(node.child_by_field_name("parameters"))
            thrown = self.convertThrows(node)
            bodyNode = node.child_by_field_name("body")
            body = self.convertBlock(bodyNode) if bodyNode is not None else None
        return ast.MethodDecl(
            mods,
            None,
            typarams,
            recvparam,
            params,
            thrown,
            None,
            body,
            name=CONSTRUCTOR_NAME,
            sym=sym,
            pos=self.pos(nameNode) if nameNode is not None else self.pos(node),
        )

    @rule("member", "static_initializer")
    def convertStaticInitializer(self, node):
        block = childOfType(node, "block")
        stats = self.convertBlock(block).stats if block is not None else []
        return ast.Block(stats, isStatic=True, pos=self.pos(node))

    @rule("member", "block")
    def convertInstanceInitializer(self, node):
        return self.convertBlock(node)

    def convertThrows(self, node):
        throws = childOfType(node, "throws")
        if throws is None:
            return []
        return [t for t in (self.convertType(c) for c in namedChildren(throws)) if t is not None]

    def declareLocal(self, name, t, pos, kind="local"):
        return self.env.declare(VarSymbol(name, self.env.owner, t, pos, kind))

    def convertParameters(self, node):
        """Receiver parameter (or None) and the VariableDecls of a parameter list."""
        recvparam = None
        params = []
        if node is None:
            return recvparam, params
        for param in namedChildren(node):
            if param.type == "receiver_parameter":
                typeNodes = [c for c in namedChildren(param) if c.type in TYPE_KINDS]
                recvparam = ast.VariableDecl(
                    self.convertModifiers(param),
                    self.convertType(typeNodes[0]) if typeNodes else None,
                    ast.Ident(name="this", pos=self.pos(param)),
                    name="this",
                    pos=self.pos(param),
                )
            elif param.type == "formal_parameter":
                params.append(self.convertFormalParameter(param))
            elif param.type == "spread_parameter":
                params.append(self.convertSpreadParameter(param))
        return recvparam, params

    def convertFormalParameter(self, param, kind="parameter"):
        nameNode = param.child_by_field_name("name")
        vartype = self.convertType(param.child_by_field_name("type"))
        if vartype is not None:
            vartype = self.wrapArrayTypeTree(
                vartype, self.dimensionAnnotations(param.child_by_field_name("dimensions"))
            )
        name = nodeText(nameNode)
        sym = self.enter.member(param)
        if sym is None:
            sym = VarSymbol(
                name,
                self.env.owner,
                vartype.type if vartype is not None else None,
                self.pos(nameNode),
                kind,
            )
        self.env.declare(sym)
        return ast.VariableDecl(
            self.convertModifiers(param), vartype, name=name, sym=sym, pos=self.pos(nameNode)
        )

    def convertSpreadParameter(self, param):
        declarator = childOfType(param, "variable_declarator")
        nameNode = declarator.child_by_field_name("name")
        typeNodes = [c for c in namedChildren(param) if c.type in TYPE_KINDS]
        elemtype = self.convertType(typeNodes[0]) if typeNodes else None
        vartype = None
        if elemtype is not None:
            vartype = self.wrapArrayTypeTree(elemtype, [self.annotationsOf(param)])
        name = nodeText(nameNode)
        sym = self.enter.member(param)
        if sym is None:
            sym = VarSymbol(
                name,
                self.env.owner,
                vartype.type if vartype is not None else None,
                self.pos(nameNode),
                "parameter",
            )
        self.env.declare(sym)
        return ast.VariableDecl(
            self.convertModifiers(param, frozenset(["varargs"])),
            vartype,
            name=name,
            sym=sym,
            pos=self.pos(nameNode),
        )

    @rule("member", "ERROR")
    def convertErroneousMember(self, node):
        return self.erroneous(node)

    ### Statements ###

    def convertStatement(self, node):
        """A statement in a single-statement slot (loop and if bodies)."""
        converted = self.dispatch("statement", node)
        if isinstance(converted, list):
            return ast.Block(converted, pos=self.pos(node))
        return converted

    def convertStatementList(self, node):
        converted = self.dispatch("statement", node)
        if isinstance(converted, list):
            return converted
        return [converted]

    def convertStatements(self, nodes):
        stats = []
        for child in nodes:
            if child.type == ";":
                stats.append(ast.Skip(pos=self.pos(child)))
            elif child.is_named and child.type not in COMMENT_KINDS:
                stats.extend(self.convertStatementList(child))
        return stats

    def convertBlock(self, node, isStatic=False):
        with self.scope():
            stats = self.convertStatements(node.children)
        return ast.Block(stats, isStatic=isStatic, pos=self.pos(node))

    @rule("statement", "block", "constructor_body")
    def convertBlockStatement(self, node):
        return self.convertBlock(node)

    @rule("statement", *CLASS_KINDS)
    def convertLocalClass(self, node):
        return self.convertClass(node, local=True)

    @rule("statement", "local_variable_declaration")
    def convertLocalVariables(self, node):
        typeNode = node.child_by_field_name("type")
        baseType = resolveType(typeNode, self.env)
        decls = []
        for declarator in childrenOfType(node, "variable_declarator"):
            nameNode = declarator.child_by_field_name("name")
            t = wrapDimensions(baseType, dimensionCount(declarator.child_by_field_name("dimensions")))
            sym = self.declareLocal(nodeText(nameNode), t, self.pos(nameNode))
            decls.append(self.convertDeclarator(node, typeNode, declarator, sym))
        return decls

    @rule("statement", "expression_statement")
    def convertExpressionStatement(self, node):
        children = namedChildren(node)
        if not children:
            return ast.Skip(pos=self.pos(node))
        return ast.ExpressionStatement(self.convertExpression(children[0]), pos=self.pos(node))

    @rule("statement", "if_statement")
    def convertIf(self, node):
        alternative = node.child_by_field_name("alternative")
        return ast.If(
            self.convertExpression(node.child_by_field_name("condition")),
            self.convertStatement(node.child_by_field_name("consequence")),
            self.convertStatement(alternative) if alternative is not None else None,
            pos=self.pos(node),
        )

    @rule("statement", "while_statement")
    def convertWhile(self, node):
        return ast.WhileLoop(
            self.convertExpression(node.child_by_field_name("condition")),
            self.convertStatement(node.child_by_field_name("body")),
            pos=self.pos(node),
        )

    @rule("statement", "do_statement")
    def convertDoWhile(self, node):
        return ast.DoWhileLoop(
            self.convertStatement(node.child_by_field_name("body")),
            self.convertExpression(node.child_by_field_name("condition")),
            pos=self.pos(node),
        )

    @rule("statement", "for_statement")
    def convertFor(self, node):
        with self.scope():
            init = []
            for child in node.children_by_field_name("init"):
                if child.type == "local_variable_declaration":
                    init.extend(self.convertLocalVariables(child))
                else:
                    init.append(
                        ast.ExpressionStatement(self.convertExpression(child), pos=self.pos(child))
                    )
            condition = node.child_by_field_name("condition")
            cond = self.convertExpression(condition) if condition is not None else None
            step = [
                ast.ExpressionStatement(self.convertExpression(child), pos=self.pos(child))
                for child in node.children_by_field_name("update")
            ]
            body = self.convertStatement(node.child_by_field_name("body"))
        return ast.ForLoop(init, cond, step, body, pos=self.pos(node))

    @rule("statement", "enhanced_for_statement")
    def convertEnhancedFor(self, node):
        expr = self.convertExpression(node.child_by_field_name("value"))
        with self.scope():
            nameNode = node.child_by_field_name("name")
            typeNode = node.child_by_field_name("type")
            vartype = self.convertType(typeNode)
            levels = self.dimensionAnnotations(node.child_by_field_name("dimensions"))
            if vartype is not None:
                vartype = self.wrapArrayTypeTree(vartype, levels)
            sym = self.declareLocal(
                nodeText(nameNode),
                wrapDimensions(resolveType(typeNode, self.env), len(levels)),
                self.pos(nameNode),
            )
            var = ast.VariableDecl(
                self.convertModifiers(node),
                vartype,
                name=sym.name,
                sym=sym,
                pos=self.pos(nameNode),
            )
            body = self.convertStatement(node.child_by_field_name("body"))
        return ast.EnhancedForLoop(var, expr, body, pos=self.pos(node))

    @rule("statement", "labeled_statement")
    def convertLabeled(self, node):
        children = namedChildren(node)
        label = childOfType(node, "identifier")
        return ast.Labeled(
            self.convertStatement(children[-1]),
            label=nodeText(label) if label is not None else None,
            pos=self.pos(node),
        )

    @rule("statement", "switch_expression")
    def convertSwitchStatement(self, node):
        return ast.Switch(
            self.convertExpression(node.child_by_field_name("condition")),
            self.convertSwitchBlock(node.child_by_field_name("body")),
            pos=self.pos(node),
        )

    def convertSwitchLabel(self, node):
        """Labels, guard and default flag of one ``switch_label``."""
        labels = []
        guard = None
        isDefault = any(c.type == "default" for c in node.children)
        for child in namedChildren(node):
            if child.type == "guard":
                condition = namedChildren(child)
                if condition:
                    guard = self.convertExpression(condition[0])
            elif child.type in ("pattern", "type_pattern", "record_pattern"):
                labels.append(self.convertPattern(child))
            else:
                labels.append(self.convertExpression(child))
        return labels, guard, isDefault

    def convertSwitchBlock(self, node):
        cases = []
        if node is None:
            return cases
        for child in namedChildren(node):
            labels = []
            guard = None
            isDefault = False
            with self.scope():
                if child.type == "switch_block_statement_group":
                    stats = []
                    rest = []
                    for c in child.children:
                        if c.type == "switch_label":
                            l, g, d = self.convertSwitchLabel(c)
                            labels.extend(l)
                            guard = guard if g is None else g
                            isDefault = isDefault or d
                        else:
                            rest.append(c)
                    stats = self.convertStatements(rest)
                    cases.append(
                        ast.Case(labels, guard, stats, None, isDefault=isDefault, pos=self.pos(child))
                    )
                elif child.type == "switch_rule":
                    parts = namedChildren(child)
                    for c in parts[:-1]:
                        if c.type == "switch_label":
                            l, g, d = self.convertSwitchLabel(c)
                            labels.extend(l)
                            guard = guard if g is None else g
                            isDefault = isDefault or d
                    body = self.convertStatement(parts[-1])
                    cases.append(
                        ast.Case(
                            labels, guard, [], body,
                            isDefault=isDefault, isRule=True, pos=self.pos(child),
                        )
                    )
        return cases

    @rule("statement", "synchronized_statement")
    def convertSynchronized(self, node):
        lock = childOfType(node, "parenthesized_expression")
        return ast.Synchronized(
            self.convertExpression(lock),
            self.convertBlock(node.child_by_field_name("body")),
            pos=self.pos(node),
        )

    @rule("statement", "try_statement", "try_with_resources_statement")
    def convertTry(self, node):
        with self.scope():
            resources = []
            resourceList = node.child_by_field_name("resources")
            if resourceList is not None:
                for resource in childrenOfType(resourceList, "resource"):
                    resources.append(self.convertResource(resource))
            body = self.convertBlock(node.child_by_field_name("body"))
        catchers = [self.convertCatch(c) for c in childrenOfType(node, "catch_clause")]
        finalizer = None
        finallyClause = childOfType(node, "finally_clause")
        if finallyClause is not None:
            finalizer = self.convertBlock(childOfType(finallyClause, "block"))
        return ast.Try(resources, body, catchers, finalizer, pos=self.pos(node))

    def convertResource(self, node):
        value = node.child_by_field_name("value")
        if value is None:
            children = namedChildren(node)
            return self.convertExpression(children[0]) if children else self.erroneous(node)
        nameNode = node.child_by_field_name("name")
        typeNode = node.child_by_field_name("type")
        sym = self.declareLocal(nodeText(nameNode), resolveType(typeNode, self.env), self.pos(nameNode))
        return ast.VariableDecl(
            self.convertModifiers(node),
            self.convertType(typeNode),
            None,
            self.convertExpression(value),
            name=sym.name,
            sym=sym,
            pos=self.pos(nameNode),
        )

    def convertCatch(self, node):
        param = childOfType(node, "catch_formal_parameter")
        with self.scope():
            catchType = childOfType(param, "catch_type")
            alternatives = [self.convertType(t) for t in namedChildren(catchType)] if catchType else []
            alternatives = [t for t in alternatives if t is not None]
            if len(alternatives) == 1:
                vartype = alternatives[0]
                t = vartype.type
            else:
                vartype = ast.TypeUnion(alternatives, pos=self.pos(catchType or param))
                t = None
            nameNode = param.child_by_field_name("name")
            sym = self.declareLocal(nodeText(nameNode), t, self.pos(nameNode), "exception")
            var = ast.VariableDecl(
                self.convertModifiers(param), vartype, name=sym.name, sym=sym, pos=self.pos(nameNode)
            )
            body = self.convertBlock(node.child_by_field_name("body"))
        return ast.Catch(var, body, pos=self.pos(node))

    def optionalExpression(self, node):
        children = namedChildren(node)
        return self.convertExpression(children[0]) if children else None

    @rule("statement", "return_statement")
    def convertReturn(self, node):
        return ast.Return(self.optionalExpression(node), pos=self.pos(node))

    @rule("statement", "yield_statement")
    def convertYield(self, node):
        value = self.optionalExpression(node)
        if value is None:
            return self.erroneousStatement(node)
        return ast.Yield(value, pos=self.pos(node))

    @rule("statement", "throw_statement")
    def convertThrow(self, node):
        expr = self.optionalExpression(node)
        if expr is None:
            return self.erroneousStatement(node)
        return ast.Throw(expr, pos=self.pos(node))

    @rule("statement", "break_statement")
    def convertBreak(self, node):
        label = childOfType(node, "identifier")
        return ast.Break(label=nodeText(label) if label is not None else None, pos=self.pos(node))

    @rule("statement", "continue_statement")
    def convertContinue(self, node):
        label = childOfType(node, "identifier")
        return ast.Continue(label=nodeText(label) if label is not None else None, pos=self.pos(node))

    @rule("statement", "assert_statement")
    def convertAssert(self, node):
        exprs = [self.convertExpression(c) for c in namedChildren(node)]
        if not exprs:
            return self.erroneousStatement(node)
        return ast.Assert(exprs[0], exprs[1] if len(exprs) > 1 else None, pos=self.pos(node))

    @rule("statement", "explicit_constructor_invocation")
    def convertConstructorInvocation(self, node):
        ctorNode = node.child_by_field_name("constructor")
        objectNode = node.child_by_field_name("object")
        name = nodeText(ctorNode)
        if objectNode is not None:
            meth = ast.FieldAccess(
                self.convertExpression(objectNode), name=name, pos=self.pos(ctorNode)
            )
        else:
            meth = ast.Ident(name=name, pos=self.pos(ctorNode))
        invocation = ast.MethodInvocation(
            self.convertTypeArguments(node.child_by_field_name("type_arguments")),
            meth,
            self.convertArguments(node.child_by_field_name("arguments")),
            pos=self.pos(node),
        )
        return ast.ExpressionStatement(invocation, pos=self.pos(node))

    @rule("statement", "ERROR")
    def convertErroneousStatement(self, node):
        return self.erroneousStatement(node)

    ### Expressions ###

    def convertExpression(self, node):
        if node is None:
            return None
        return self.dispatch("expression", node)

    def convertArguments(self, node):
        if node is None:
            return []
        return [self.convertExpression(c) for c in namedChildren(node)]

    def classOf(self, t):
        """ClassSymbol behind a Type, if the unit declares it."""
        if t is None:
            return None
        t = t.erasure() if isinstance(t, TypeVar) else t
        if not isinstance(t, ClassType):
            return None
        if t.sym is not None:
            return t.sym
        return self.unit.classes.get(t.qualifiedName)

    def typeOf(self, tree):
        """Static type of an expression tree, where the binding knows it."""
        if isinstance(tree, (ast.Ident, ast.FieldAccess)):
            if isinstance(tree.sym, VarSymbol):
                return tree.sym.type
            return tree.type
        if isinstance(tree, ast.Parens):
            return self.typeOf(tree.expr)
        if isinstance(tree, ast.TypeCast):
            return tree.clazz.type if hasattr(tree.clazz, "type") else None
        if isinstance(tree, ast.NewClass):
            if tree.body is not None and tree.body.sym is not None:
                return tree.body.sym.asType()
            return getattr(tree.clazz, "type", None)
        if isinstance(tree, ast.ArrayAccess):
            t = self.typeOf(tree.indexed)
            return t.elemtype if isinstance(t, ArrayType) else None
        if isinstance(tree, ast.MethodInvocation):
            if isinstance(tree.meth.sym, MethodSymbol):
                return tree.meth.sym.returnType
            return None
        if isinstance(tree, ast.Literal):
            if tree.typetag == "String":
                return STRING_TYPE
            if tree.typetag == "null":
                return None
            return PrimitiveType(tree.typetag)
        if isinstance(tree, ast.Conditional):
            return self.typeOf(tree.truepart) or self.typeOf(tree.falsepart)
        if isinstance(tree, (ast.Assign, ast.AssignOp)):
            return self.typeOf(tree.lhs)
        if isinstance(tree, ast.NewArray) and tree.elemtype is not None:
            t = getattr(tree.elemtype, "type", None)
            return wrapDimensions(t, max(len(tree.dims), 1))
        return None

    def nameParts(self, tree):
        """Segments of an unbound dotted name, or None if it is not one."""
        if isinstance(tree, ast.Ident):
            return [tree.name] if tree.sym is None and tree.type is None else None
        if isinstance(tree, ast.FieldAccess) and tree.sym is None and tree.type is None:
            parts = self.nameParts(tree.selected)
            return parts + [tree.name] if parts is not None else None
        return None

    def selectMember(self, selected, name):
        """(symbol, type) of ``selected.name`` for a field or nested class."""
        qualifierType = self.typeOf(selected)
        if qualifierType is None:
            parts = self.nameParts(selected)
            if parts is not None and name[:1].isupper():
                return None, self.env.lookupQualifiedType(parts + [name])
            return None, None

        if isinstance(qualifierType, ArrayType):
            if name == "length":
                return ARRAY_LENGTH, INT_TYPE
            return None, None

        classSymbol = self.classOf(qualifierType)
        if classSymbol is not None:
            field = findField(classSymbol, name)
            if field is not None:
                return field, field.type
            member = findMemberClass(classSymbol, name)
            if member is not None:
                return None, member.asType()
            return None, None

        isTypeName = isinstance(selected, (ast.Ident, ast.FieldAccess)) and selected.sym is None
        if isTypeName and name[:1].isupper() and isinstance(qualifierType, ClassType):
            return None, self.env.memberType(qualifierType, [name])
        return None, None

    def convertQualifier(self, node):
        if node.type == "super":
            return self.convertSuper(node)
        return self.convertExpression(node)

    def qualifiedSuper(self, node, selected):
        """``Outer.super`` in ``Outer.super.name``, if ``node`` spells it."""
        supers = [c for c in node.named_children if c.type == "super"]
        objectNode = node.child_by_field_name("object")
        if supers and (objectNode is None or objectNode.type != "super"):
            outer = self.env.outerClass(selected.name) if isinstance(selected, ast.Ident) else None
            superType = outer.superclass if outer is not None else None
            return ast.FieldAccess(selected, name="super", type=superType, pos=self.pos(supers[0]))
        return selected

    @rule("expression", "field_access")
    def convertFieldAccess(self, node):
        objectNode = node.child_by_field_name("object")
        fieldNode = node.child_by_field_name("field")
        selected = self.qualifiedSuper(node, self.convertQualifier(objectNode))
        name = nodeText(fieldNode)

        if name == "this":
            outer = self.env.outerClass(selected.name) if isinstance(selected, ast.Ident) else None
            return ast.FieldAccess(
                selected,
                name=name,
                type=outer.asType() if outer is not None else None,
                pos=self.pos(fieldNode),
            )

        sym, t = self.selectMember(selected, name)
        if sym is None:
            LOG.debug("%s: unresolved select .%s at offset %d", self.sourcefile, name, self.pos(fieldNode))
        return ast.FieldAccess(selected, name=name, sym=sym, type=t, pos=self.pos(fieldNode))

    @rule("expression", "identifier")
    def convertIdentifier(self, node):
        name = nodeText(node)
        sym = self.env.lookupVariable(name)
        if sym is not None:
            return ast.Ident(name=name, sym=sym, type=sym.type, pos=self.pos(node))
        return ast.Ident(name=name, type=self.env.findType(name), pos=self.pos(node))

    @rule("expression", "this")
    def convertThis(self, node):
        current = self.env.enclosingClass()
        return ast.Ident(
            name="this", type=current.asType() if current is not None else None, pos=self.pos(node)
        )

    @rule("expression", "super")
    def convertSuper(self, node):
        current = self.env.enclosingClass()
        return ast.Ident(
            name="super", type=current.superclass if current is not None else None, pos=self.pos(node)
        )

    def findMethodInScope(self, name, argumentCount):
        env = self.env
        while env is not None:
            if env.classSymbol is not None:
                method = findMethod(env.classSymbol, name, argumentCount)
                if method is not None:
                    return method
            env = env.parent
        return None

    @rule("expression", "method_invocation")
    def convertMethodInvocation(self, node):
        objectNode = node.child_by_field_name("object")
        nameNode = node.child_by_field_name("name")
        name = nodeText(nameNode)
        typeargs = self.convertTypeArguments(node.child_by_field_name("type_arguments"))

        if objectNode is None:
            selected = None
        else:
            selected = self.qualifiedSuper(node, self.convertQualifier(objectNode))
        args = self.convertArguments(node.child_by_field_name("arguments"))

        if selected is None:
            method = self.findMethodInScope(name, len(args))
            meth = ast.Ident(name=name, sym=method, pos=self.pos(nameNode))
        else:
            classSymbol = self.classOf(self.typeOf(selected))
            method = findMethod(classSymbol, name, len(args)) if classSymbol is not None else None
            meth = ast.FieldAccess(selected, name=name, sym=method, pos=self.pos(nameNode))
        return ast.MethodInvocation(typeargs, meth, args, pos=self.pos(node))

    @rule("expression", "object_creation_expression")
    def convertNewClass(self, node):
        encl = None
        for child in node.children:
            if child.type == "new":
                break
            if child.is_named and child.type not in COMMENT_KINDS:
                encl = self.convertExpression(child)

        typeNode = node.child_by_field_name("type")
        typeargs = self.convertTypeArguments(node.child_by_field_name("type_arguments"))
        clazz = self.convertType(typeNode) if typeNode is not None else None
        if clazz is None:
            clazz = self.erroneous(typeNode if typeNode is not None else node)
        elif encl is not None:
            self.bindInnerClass(clazz, encl)
        clazz = self.annotate(self.annotationsAfter(node, "new"), clazz)

        args = self.convertArguments(node.child_by_field_name("arguments"))
        bodyNode = childOfType(node, "class_body")
        body = self.convertAnonymousBody(bodyNode) if bodyNode is not None else None
        return ast.NewClass(encl, typeargs, clazz, args, body, pos=self.pos(node))

    def bindInnerClass(self, clazz, encl):
        """Resolve the class of ``outer.new Inner()`` against the outer instance's type."""
        classSymbol = self.classOf(self.typeOf(encl))
        if classSymbol is None:
            return
        simple = clazz.clazz if isinstance(clazz, ast.TypeApply) else clazz
        name = getattr(simple, "name", None)
        member = findMemberClass(classSymbol, name) if name else None
        if member is None:
            return
        simple.type = member.asType()
        if isinstance(clazz, ast.TypeApply) and isinstance(clazz.type, ClassType):
            clazz.type = ClassType(member.flatname, clazz.type.typeArguments, member)

    @rule("expression", "array_creation_expression")
    def convertNewArray(self, node):
        # annotations between new and the element type annotate the element type
        elemtype = self.annotate(
            self.annotationsAfter(node, "new"), self.convertType(node.child_by_field_name("type"))
        )
        dims = []
        dimAnnotations = []
        for dimension in childrenOfType(node, "dimensions_expr"):
            exprs = [c for c in namedChildren(dimension) if c.type not in ANNOTATION_KINDS]
            if exprs:
                dims.append(self.convertExpression(exprs[0]))
                dimAnnotations.append(self.annotationsOf(dimension))
        trailing = self.dimensionAnnotations(childOfType(node, "dimensions"))
        value = node.child_by_field_name("value")

        # with an initializer the first [] is the created array itself
        annotations = []
        if not dims and trailing:
            annotations = trailing[0]
            trailing = trailing[1:]
        if elemtype is not None:
            elemtype = self.wrapArrayTypeTree(elemtype, trailing)
        elems = self.arrayElements(value) if value is not None else []
        return ast.NewArray(annotations, elemtype, dims, dimAnnotations, elems, pos=self.pos(node))

    def arrayElements(self, node):
        return [self.convertInitializer(c) for c in namedChildren(node)]

    @rule("expression", "array_initializer")
    def convertArrayInitializer(self, node):
        return ast.NewArray([], None, [], [], self.arrayElements(node), pos=self.pos(node))

    @rule("expression", "array_access")
    def convertArrayAccess(self, node):
        return ast.ArrayAccess(
            self.convertExpression(node.child_by_field_name("array")),
            self.convertExpression(node.child_by_field_name("index")),
            pos=self.pos(node),
        )

    @rule("expression", "assignment_expression")
    def convertAssignment(self, node):
        lhs = self.convertExpression(node.child_by_field_name("left"))
        rhs = self.convertExpression(node.child_by_field_name("right"))
        operator = nodeText(node.child_by_field_name("operator"))
        if operator == "=":
            return ast.Assign(lhs, rhs, pos=self.pos(node))
        return ast.AssignOp(lhs, rhs, operator=operator, pos=self.pos(node))

    @rule("expression", "binary_expression")
    def convertBinary(self, node):
        return ast.Binary(
            self.convertExpression(node.child_by_field_name("left")),
            self.convertExpression(node.child_by_field_name("right")),
            operator=nodeText(node.child_by_field_name("operator")),
            pos=self.pos(node),
        )

    @rule("expression", "unary_expression")
    def convertUnary(self, node):
        return ast.Unary(
            self.convertExpression(node.child_by_field_name("operand")),
            operator=nodeText(node.child_by_field_name("operator")),
            pos=self.pos(node),
        )

    @rule("expression", "update_expression")
    def convertUpdate(self, node):
        operand = namedChildren(node)[0]
        token = [c for c in node.children if not c.is_named][0]
        prefix = "pre" if token.start_byte < operand.start_byte else "post"
        operator = prefix + ("inc" if token.type == "++" else "dec")
        return ast.Unary(self.convertExpression(operand), operator=operator, pos=self.pos(node))

    @rule("expression", "ternary_expression")
    def convertConditional(self, node):
        return ast.Conditional(
            self.convertExpression(node.child_by_field_name("condition")),
            self.convertExpression(node.child_by_field_name("consequence")),
            self.convertExpression(node.child_by_field_name("alternative")),
            pos=self.pos(node),
        )

    @rule("expression", "cast_expression")
    def convertCast(self, node):
        types = [t for t in (self.convertType(c) for c in node.children_by_field_name("type")) if t is not None]
        if len(types) == 1:
            clazz = types[0]
        else:
            clazz = ast.TypeIntersection(types, pos=self.pos(node))
        return ast.TypeCast(
            clazz, self.convertExpression(node.child_by_field_name("value")), pos=self.pos(node)
        )

    @rule("expression", "instanceof_expression")
    def convertInstanceOf(self, node):
        expr = self.convertExpression(node.child_by_field_name("left"))
        pattern = node.child_by_field_name("pattern")
        if pattern is not None:
            return ast.InstanceOf(expr, self.convertPattern(pattern), pos=self.pos(node))

        typeNode = node.child_by_field_name("right")
        nameNode = node.child_by_field_name("name")
        vartype = self.convertType(typeNode) or self.erroneous(typeNode)
        if nameNode is None:
            return ast.InstanceOf(expr, vartype, pos=self.pos(node))

        sym = self.declareLocal(nodeText(nameNode), getattr(vartype, "type", None), self.pos(nameNode))
        var = ast.VariableDecl(
            ast.emptyModifiers(), vartype, name=sym.name, sym=sym, pos=self.pos(nameNode)
        )
        return ast.InstanceOf(expr, ast.BindingPattern(var, pos=self.pos(typeNode)), pos=self.pos(node))

    def convertPattern(self, node):
        inner = node
        if node.type == "pattern":
            children = namedChildren(node)
            if not children:
                return self.erroneous(node)
            inner = children[0]
        if inner.type != "type_pattern":
            return self.erroneous(inner)

        parts = [c for c in namedChildren(inner) if c.type != "modifiers"]
        typeNode = parts[0]
        nameNode = parts[-1] if len(parts) > 1 else None
        vartype = self.convertType(typeNode)
        if nameNode is None:
            return vartype if vartype is not None else self.erroneous(inner)

        sym = self.declareLocal(nodeText(nameNode), getattr(vartype, "type", None), self.pos(nameNode))
        var = ast.VariableDecl(
            self.convertModifiers(inner), vartype, name=sym.name, sym=sym, pos=self.pos(nameNode)
        )
        return ast.BindingPattern(var, pos=self.pos(inner))

    @rule("expression", "lambda_expression")
    def convertLambda(self, node):
        paramsNode = node.child_by_field_name("parameters")
        bodyNode = node.child_by_field_name("body")
        with self.scope():
            params = []
            if paramsNode is not None:
                if paramsNode.type == "identifier":
                    params.append(self.lambdaParameter(paramsNode))
                elif paramsNode.type == "inferred_parameters":
                    for ident in childrenOfType(paramsNode, "identifier"):
                        params.append(self.lambdaParameter(ident))
                else:
                    params = self.convertParameters(paramsNode)[1]
            if bodyNode.type == "block":
                body = self.convertBlock(bodyNode)
            else:
                body = self.convertExpression(bodyNode)
        return ast.Lambda(params, body, pos=self.pos(node))

    def lambdaParameter(self, node):
        sym = self.declareLocal(nodeText(node), None, self.pos(node), "parameter")
        return ast.VariableDecl(ast.emptyModifiers(), name=sym.name, sym=sym, pos=self.pos(node))

    @rule("expression", "method_reference")
    def convertMemberReference(self, node):
        children = namedChildren(node)
        first = children[0]
        if first.type in TYPE_KINDS:
            expr = self.convertType(first)
        else:
            expr = self.convertQualifier(first)

        typeargs = self.convertTypeArguments(childOfType(node, "type_arguments"))
        if any(c.type == "new" for c in node.children):
            name = "<init>"
        else:
            name = nodeText(children[-1]) if len(children) > 1 else ""
        return ast.MemberReference(expr, typeargs, name=name, pos=self.pos(node))

    @rule("expression", "parenthesized_expression")
    def convertParens(self, node):
        children = namedChildren(node)
        if not children:
            return self.erroneous(node)
        return ast.Parens(self.convertExpression(children[0]), pos=self.pos(node))

    @rule("expression", "class_literal")
    def convertClassLiteral(self, node):
        typeNode = namedChildren(node)[0]
        selected = self.convertType(typeNode) or self.erroneous(typeNode)
        return ast.FieldAccess(selected, name="class", type=CLASS_TYPE, pos=self.pos(node))

    @rule(
        "expression",
        "decimal_integer_literal",
        "hex_integer_literal",
        "octal_integer_literal",
        "binary_integer_literal",
        "decimal_floating_point_literal",
        "hex_floating_point_literal",
        "true",
        "false",
        "character_literal",
        "string_literal",
        "text_block",
        "null_literal",
    )
    def convertLiteral(self, node):
        return ast.Literal(typetag=literalTypetag(node), value=nodeText(node), pos=self.pos(node))

    @rule("expression", "switch_expression")
    def convertSwitchExpression(self, node):
        return ast.SwitchExpression(
            self.convertExpression(node.child_by_field_name("condition")),
            self.convertSwitchBlock(node.child_by_field_name("body")),
            pos=self.pos(node),
        )

    @rule("expression", "ERROR")
    def convertErroneousExpression(self, node):
        return self.erroneous(node)


def convert(tree, text, sourcefile="<string>"):
    """Typed CompilationUnit of a parsed unit, and its number of syntax errors."""
    unit = Converter(text, sourcefile).convert(tree)
    return unit, countSyntaxErrors(tree.root_node)


def convertSource(text, sourcefile="<string>"):
    return convert(parse(text), text, sourcefile)
