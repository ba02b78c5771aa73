"""
Code generation for AST node classes.

The node metaclass describes each node kind by a list of field descriptors.
The functions here turn those descriptors into Python source for the
generated methods (__init__, __repr__, children, fields, visitChildren) and
compile it into functions.
"""


def compileFunc(clsname, s, g=None):
    """Compile a function from generated code.

    Args:
        clsname: Class name (used for the pseudo filename).
        s: Python source defining exactly one function.
        g: Global namespace the function resolves names in.

    Returns:
        The compiled function object.
    """
    l = {}
    eval(compile(s, "<metaast - %s>" % clsname, "exec"), g, l)
    assert len(l) == 1
    return list(l.values())[0]


def makeTypecheck(target, tn, optional):
    """Expression that is true when ``target`` is *not* a valid ``tn``."""
    t = "not isinstance(%s, %s)" % (target, tn)
    if optional:
        t = "%s is not None and %s" % (target, t)
    return t


def raiseTypeError(nodeName, typeName, fieldName, fieldSource):
    """Statement raising a TypeError for a bad field value."""
    return (
        'raise TypeError("Expected %s for field %s.%s, but got %%s instead." %% (%s.__class__.__name__))'
        % (str(typeName), nodeName, fieldName, fieldSource)
    )


def makeScalarTypecheckStatement(
    name, fieldName, fieldSource, tn, optional, tabs, output
):
    t = makeTypecheck(fieldSource, tn, optional)
    r = raiseTypeError(name, tn, fieldName, fieldSource)
    output.append("%sif %s: %s\n" % (tabs, t, r))


def makeRepeatedTypecheckStatement(name, fieldName, source, tn, depth, tabs, output):
    """Check that ``source`` is a list nested ``depth`` deep holding ``tn`` values."""
    r = raiseTypeError(name, "(list, tuple)", fieldName, source)
    output.append("%sif not isinstance(%s, (list, tuple)): %s\n" % (tabs, source, r))

    element = "_e%d" % depth
    output.append("%sfor %s in %s:\n" % (tabs, element, source))
    if depth > 1:
        makeRepeatedTypecheckStatement(
            name, fieldName + "[]", element, tn, depth - 1, tabs + "\t", output
        )
    else:
        makeScalarTypecheckStatement(
            name, fieldName + "[]", element, tn, False, tabs + "\t", output
        )


def makeInitStatements(clsname, desc):
    inits = []
    for field in desc:
        if field.repeated:
            makeRepeatedTypecheckStatement(
                clsname, field.name, field.name, field.type, field.repeated, "\t", inits
            )
            inits.append("\tself.%s = list(%s)\n" % (field.name, field.name))
        else:
            makeScalarTypecheckStatement(
                clsname, field.name, field.name, field.type, field.optional, "\t", inits
            )
            inits.append("\tself.%s = %s\n" % (field.name, field.name))
    return inits


def fieldDefault(field):
    if field.repeated:
        return "()"
    elif field.optional:
        return "None"
    return None


def argsFromDesc(desc, attrs):
    """Argument list: fields positionally, then attributes as keywords.

    A trailing run of optional or repeated fields gets defaults (None and an
    empty tuple respectively).
    """
    fieldArgs = []
    defaulted = True
    for field in reversed(desc):
        default = fieldDefault(field) if defaulted else None
        if default is None:
            defaulted = False
            fieldArgs.append(field.name)
        else:
            fieldArgs.append("%s=%s" % (field.name, default))
    fieldArgs.reverse()

    args = ["self"] + fieldArgs
    for attr in attrs:
        args.append("%s=%s" % (attr.name, attr.default))
    return ", ".join(args)


def makeBody(code):
    if not code:
        return "\tpass\n"
    else:
        return code


def makeInit(name, desc, attrs):
    """Generate __init__ for a node kind.

    Structural fields are type checked; attributes are stored as given.
    """
    inits = makeInitStatements(name, desc)
    for attr in attrs:
        inits.append("\tself.%s = %s\n" % (attr.name, attr.name))

    code = "def __init__(%s):\n%s" % (argsFromDesc(desc, attrs), makeBody("".join(inits)))
    return code


def makeRepr(name, desc, attrs):
    """Generate __repr__ showing fields, then attributes that are set."""
    fields = ", ".join("repr(self.%s)" % field.name for field in desc)

    lines = ["def __repr__(self):\n"]
    lines.append("\tparts = [%s]\n" % fields)
    for attr in attrs:
        lines.append("\tif self.%s is not None:\n" % attr.name)
        lines.append('\t\tparts.append("%s=%%r" %% (self.%s,))\n' % (attr.name, attr.name))
    lines.append('\treturn "%s(%%s)" %% ", ".join(parts)\n' % name)
    return "".join(lines)


def makeGetChildren(desc):
    """Generate children(): a tuple of every field value, lists included."""
    children = " ".join(["self.%s," % field.name for field in desc])
    code = """def children(self):
    return (%s)
""" % (
        children
    )

    return code


def makeGetFields(desc):
    """Generate fields(): a tuple of (name, value) pairs."""
    children = " ".join(["(%r, self.%s)," % (field.name, field.name) for field in desc])
    code = """def fields(self):
    return (%s)
""" % (
        children
    )

    return code


def makeVisit(clsname, desc, vargs=False):
    """Generate visitChildren(_callback): call back on every child node in order.

    None values of optional fields are skipped and repeated fields are
    flattened, so the callback only ever sees nodes.
    """
    args = "self, _callback"

    additionalargs = ""
    if vargs:
        additionalargs += ", *vargs"
    args += additionalargs

    statements = []

    for field in desc:
        indent = "\t"

        if field.optional:
            statements.append("%sif self.%s is not None:\n" % (indent, field.name))
            indent += "\t"

        src = "self." + field.name
        for depth in range(field.repeated):
            child = "_child%d" % depth
            statements.append("%sfor %s in %s:\n" % (indent, child, src))
            indent += "\t"
            src = child

        statements.append("%s_callback(%s%s)\n" % (indent, src, additionalargs))

    body = makeBody("".join(statements))

    code = "def visitChildren(%s):\n%s" % (args, body)

    return code
