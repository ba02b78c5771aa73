"""TreeScanner visits every child of every node kind exactly once."""

import unittest

from sitescan.analysis import nodecount
from sitescan.analysis.treescanner import TreeScanner
from sitescan.language.java import ast
from sitescan.util.typedispatch import *

LEAVES = {
    "JavaTree": lambda: ast.Skip(),
    "Statement": lambda: ast.Skip(),
    "Expression": lambda: ast.Ident(name="x"),
}


def sampleOf(typeName, depth):
    if typeName in LEAVES:
        return LEAVES[typeName]()
    return sample(getattr(ast, typeName), depth)


def sample(kind, depth=0):
    """An instance of ``kind`` with every field filled at the top level."""
    args = []
    for field in kind.__fields__:
        if depth > 0 and (field.optional or field.repeated):
            value = [] if field.repeated else None
        else:
            value = sampleOf(field.type, depth + 1)
            for _ in range(field.repeated):
                value = [value]
        args.append(value)
    return kind(*args)


def everyKind():
    return ast.CompilationUnit([], None, [sample(kind) for kind in ast.nodeKinds])


class TestTreeScanner(unittest.TestCase):
    def testVisitsWhatSchemasReach(self):
        tree = everyKind()
        reachable = nodecount.countReachable(tree)
        visited = nodecount.countVisited(tree)

        self.assertEqual(visited, reachable)
        self.assertEqual(set(visited), set(ast.nodeKinds))

    def testEveryKindHasARule(self):
        table = TreeScanner.__typeDispatchTable__
        for kind in ast.nodeKinds:
            self.assertIn(kind, table)

    def testSkipsNoneAndFlattensLists(self):
        counter = nodecount.VisitCounter()
        counter.scan(None)
        counter.scan([ast.Skip(), [ast.Skip(), None]])
        self.assertEqual(nodecount.total(counter.counts), 2)

    def testUnhandledKind(self):
        with self.assertRaises(UnhandledNodeKind) as cm:
            TreeScanner().scan(42)
        self.assertEqual(cm.exception.kind, int)
        self.assertIn("TreeScanner", str(cm.exception))

    def testMissingRuleIsADeclarationError(self):
        with self.assertRaises(TypeDispatchDeclarationError):
            class Partial(TypeDispatcher):
                __concrete__ = True
                __exhaustive__ = ast.nodeKinds

                @dispatch(ast.Block)
                def visitBlock(self, tree):
                    pass

    def testSubclassOverride(self):
        class Blocks(TreeScanner):
            def __init__(self):
                self.blocks = 0

            @dispatch(ast.Block)
            def visitBlock(self, tree):
                self.blocks += 1
                TreeScanner.visitBlock(self, tree)

        scanner = Blocks()
        scanner.scan(ast.Block([ast.Block([]), ast.If(ast.Ident(name="c"), ast.Block([]))]))
        self.assertEqual(scanner.blocks, 3)


if __name__ == "__main__":
    unittest.main()
