"""Generic depth-first scanner over Java syntax trees.

TreeScanner visits a node and, recursively, every child the node owns,
left to right in source order, exactly once. It does nothing else; scanners
that collect information subclass it and override the rules for the node
kinds they care about, calling the inherited rule (or ``scan`` on the
children) to keep descending.

There is one rule per node kind. The class declares the Java node family as
exhaustive, so a scanner missing a rule cannot even be defined, and a node
of a kind outside the family aborts the scan with UnhandledNodeKind instead
of silently skipping its subtree.
"""

from sitescan.util.typedispatch import *
from sitescan.language.java import ast


class TreeScanner(TypeDispatcher):
    __concrete__ = True
    __exhaustive__ = ast.nodeKinds

    def scan(self, tree):
        """Scan a node, or every node of a (possibly nested) list. None is skipped."""
        if tree is None:
            return
        if isinstance(tree, (list, tuple)):
            for child in tree:
                self.scan(child)
        else:
            self(tree)

    @defaultdispatch
    def visitTree(self, tree):
        raise UnhandledNodeKind(type(self).__name__, tree)

    ### Top level ###

    @dispatch(ast.CompilationUnit)
    def visitTopLevel(self, tree):
        self.scan(tree.packageAnnotations)
        self.scan(tree.pid)
        self.scan(tree.defs)

    @dispatch(ast.Import)
    def visitImport(self, tree):
        self.scan(tree.qualid)

    ### Declarations ###

    @dispatch(ast.ClassDecl)
    def visitClassDef(self, tree):
        self.scan(tree.mods)
        self.scan(tree.typarams)
        self.scan(tree.extending)
        self.scan(tree.implementing)
        self.scan(tree.defs)

    @dispatch(ast.MethodDecl)
    def visitMethodDef(self, tree):
        self.scan(tree.mods)
        self.scan(tree.restype)
        self.scan(tree.typarams)
        self.scan(tree.recvparam)
        self.scan(tree.params)
        self.scan(tree.thrown)
        self.scan(tree.defaultValue)
        self.scan(tree.body)

    @dispatch(ast.VariableDecl)
    def visitVarDef(self, tree):
        self.scan(tree.mods)
        self.scan(tree.vartype)
        self.scan(tree.nameexpr)
        self.scan(tree.init)

    ### Statements ###

    @dispatch(ast.Skip)
    def visitSkip(self, tree):
        pass

    @dispatch(ast.Block)
    def visitBlock(self, tree):
        self.scan(tree.stats)

    @dispatch(ast.DoWhileLoop)
    def visitDoLoop(self, tree):
        self.scan(tree.body)
        self.scan(tree.cond)

    @dispatch(ast.WhileLoop)
    def visitWhileLoop(self, tree):
        self.scan(tree.cond)
        self.scan(tree.body)

    @dispatch(ast.ForLoop)
    def visitForLoop(self, tree):
        self.scan(tree.init)
        self.scan(tree.cond)
        self.scan(tree.step)
        self.scan(tree.body)

    @dispatch(ast.EnhancedForLoop)
    def visitForeachLoop(self, tree):
        self.scan(tree.var)
        self.scan(tree.expr)
        self.scan(tree.body)

    @dispatch(ast.Labeled)
    def visitLabelled(self, tree):
        self.scan(tree.body)

    @dispatch(ast.Switch)
    def visitSwitch(self, tree):
        self.scan(tree.selector)
        self.scan(tree.cases)

    @dispatch(ast.Case)
    def visitCase(self, tree):
        self.scan(tree.labels)
        self.scan(tree.guard)
        self.scan(tree.stats)
        self.scan(tree.body)

    @dispatch(ast.Synchronized)
    def visitSynchronized(self, tree):
        self.scan(tree.lock)
        self.scan(tree.body)

    @dispatch(ast.Try)
    def visitTry(self, tree):
        self.scan(tree.resources)
        self.scan(tree.body)
        self.scan(tree.catchers)
        self.scan(tree.finalizer)

    @dispatch(ast.Catch)
    def visitCatch(self, tree):
        self.scan(tree.param)
        self.scan(tree.body)

    @dispatch(ast.If)
    def visitIf(self, tree):
        self.scan(tree.cond)
        self.scan(tree.thenpart)
        self.scan(tree.elsepart)

    @dispatch(ast.ExpressionStatement)
    def visitExec(self, tree):
        self.scan(tree.expr)

    @dispatch(ast.Break)
    def visitBreak(self, tree):
        pass

    @dispatch(ast.Continue)
    def visitContinue(self, tree):
        pass

    @dispatch(ast.Return)
    def visitReturn(self, tree):
        self.scan(tree.expr)

    @dispatch(ast.Yield)
    def visitYield(self, tree):
        self.scan(tree.value)

    @dispatch(ast.Throw)
    def visitThrow(self, tree):
        self.scan(tree.expr)

    @dispatch(ast.Assert)
    def visitAssert(self, tree):
        self.scan(tree.cond)
        self.scan(tree.detail)

    ### Expressions ###

    @dispatch(ast.SwitchExpression)
    def visitSwitchExpression(self, tree):
        self.scan(tree.selector)
        self.scan(tree.cases)

    @dispatch(ast.Conditional)
    def visitConditional(self, tree):
        self.scan(tree.cond)
        self.scan(tree.truepart)
        self.scan(tree.falsepart)

    @dispatch(ast.MethodInvocation)
    def visitApply(self, tree):
        self.scan(tree.typeargs)
        self.scan(tree.meth)
        self.scan(tree.args)

    @dispatch(ast.NewClass)
    def visitNewClass(self, tree):
        self.scan(tree.encl)
        self.scan(tree.typeargs)
        self.scan(tree.clazz)
        self.scan(tree.args)
        self.scan(tree.body)

    @dispatch(ast.NewArray)
    def visitNewArray(self, tree):
        self.scan(tree.annotations)
        self.scan(tree.elemtype)
        self.scan(tree.dims)
        for annotations in tree.dimAnnotations:
            self.scan(annotations)
        self.scan(tree.elems)

    @dispatch(ast.Lambda)
    def visitLambda(self, tree):
        self.scan(tree.params)
        self.scan(tree.body)

    @dispatch(ast.Parens)
    def visitParens(self, tree):
        self.scan(tree.expr)

    @dispatch(ast.Assign)
    def visitAssign(self, tree):
        self.scan(tree.lhs)
        self.scan(tree.rhs)

    @dispatch(ast.AssignOp)
    def visitAssignop(self, tree):
        self.scan(tree.lhs)
        self.scan(tree.rhs)

    @dispatch(ast.Unary)
    def visitUnary(self, tree):
        self.scan(tree.arg)

    @dispatch(ast.Binary)
    def visitBinary(self, tree):
        self.scan(tree.lhs)
        self.scan(tree.rhs)

    @dispatch(ast.TypeCast)
    def visitTypeCast(self, tree):
        self.scan(tree.clazz)
        self.scan(tree.expr)

    @dispatch(ast.InstanceOf)
    def visitTypeTest(self, tree):
        self.scan(tree.expr)
        self.scan(tree.pattern)

    @dispatch(ast.BindingPattern)
    def visitBindingPattern(self, tree):
        self.scan(tree.var)

    @dispatch(ast.ArrayAccess)
    def visitIndexed(self, tree):
        self.scan(tree.indexed)
        self.scan(tree.index)

    @dispatch(ast.FieldAccess)
    def visitSelect(self, tree):
        self.scan(tree.selected)

    @dispatch(ast.MemberReference)
    def visitReference(self, tree):
        self.scan(tree.expr)
        self.scan(tree.typeargs)

    @dispatch(ast.Ident)
    def visitIdent(self, tree):
        pass

    @dispatch(ast.Literal)
    def visitLiteral(self, tree):
        pass

    ### Type references ###

    @dispatch(ast.PrimitiveTypeTree)
    def visitTypeIdent(self, tree):
        pass

    @dispatch(ast.ArrayTypeTree)
    def visitTypeArray(self, tree):
        self.scan(tree.elemtype)

    @dispatch(ast.TypeApply)
    def visitTypeApply(self, tree):
        self.scan(tree.clazz)
        self.scan(tree.arguments)

    @dispatch(ast.TypeUnion)
    def visitTypeUnion(self, tree):
        self.scan(tree.alternatives)

    @dispatch(ast.TypeIntersection)
    def visitTypeIntersection(self, tree):
        self.scan(tree.bounds)

    @dispatch(ast.TypeParameter)
    def visitTypeParameter(self, tree):
        self.scan(tree.annotations)
        self.scan(tree.bounds)

    @dispatch(ast.Wildcard)
    def visitWildcard(self, tree):
        self.scan(tree.kind)
        self.scan(tree.inner)

    @dispatch(ast.TypeBoundKind)
    def visitTypeBoundKind(self, tree):
        pass

    ### Modifiers and annotations ###

    @dispatch(ast.Modifiers)
    def visitModifiers(self, tree):
        self.scan(tree.annotations)

    @dispatch(ast.Annotation)
    def visitAnnotation(self, tree):
        self.scan(tree.annotationType)
        self.scan(tree.args)

    @dispatch(ast.AnnotatedType)
    def visitAnnotatedType(self, tree):
        self.scan(tree.annotations)
        self.scan(tree.underlyingType)

    ### Error recovery and desugaring ###

    @dispatch(ast.Erroneous)
    def visitErroneous(self, tree):
        pass

    @dispatch(ast.LetExpr)
    def visitLetExpr(self, tree):
        self.scan(tree.defs)
        self.scan(tree.expr)
