import unittest

from sitescan.language.asttools import astpprint, metaast
from sitescan.language.java import ast


class TestFieldSyntax(unittest.TestCase):
    def testParseFields(self):
        fields = metaast.parseFields("a:Expression b:Statement? c:JavaTree* d:Annotation**")
        self.assertEqual(
            fields,
            [
                metaast.Field("a", "Expression", False, 0),
                metaast.Field("b", "Statement", True, 0),
                metaast.Field("c", "JavaTree", False, 1),
                metaast.Field("d", "Annotation", False, 2),
            ],
        )

    def testMissingType(self):
        with self.assertRaises(SyntaxError):
            metaast.parseFields("a")

    def testOptionalAndRepeated(self):
        with self.assertRaises(SyntaxError):
            metaast.parseFields("a:Expression*?")

    def testAttrDefaults(self):
        attrs = metaast.parseAttrs("name pos=-1")
        self.assertEqual(attrs, [metaast.Attribute("name", "None"), metaast.Attribute("pos", "-1")])


class TestGeneratedNodes(unittest.TestCase):
    def testDefaults(self):
        node = ast.Return()
        self.assertIsNone(node.expr)
        self.assertEqual(node.pos, -1)

        block = ast.Block([])
        self.assertFalse(block.isStatic)

    def testTypeChecks(self):
        with self.assertRaises(TypeError):
            ast.If(ast.Skip(), ast.Skip())
        with self.assertRaises(TypeError):
            ast.Block(ast.Skip())
        with self.assertRaises(TypeError):
            ast.Block([ast.Ident(name="x")])

    def testChildrenAndFields(self):
        cond = ast.Ident(name="c")
        thenpart = ast.Skip()
        node = ast.If(cond, thenpart, pos=3)

        self.assertEqual(node.children(), (cond, thenpart, None))
        self.assertEqual(
            node.fields(), (("cond", cond), ("thenpart", thenpart), ("elsepart", None))
        )
        self.assertEqual(node.pos, 3)

    def testVisitChildrenFlattensLists(self):
        stats = [ast.Skip(), ast.Skip()]
        seen = []
        ast.Block(stats).visitChildren(seen.append)
        self.assertEqual(seen, stats)

    def testAbstractCategory(self):
        with self.assertRaises(NotImplementedError):
            ast.Expression()

    def testKinds(self):
        self.assertIn(ast.Ident, ast.nodeKinds)
        self.assertNotIn(ast.Expression, ast.nodeKinds)
        self.assertIn(ast.Skip, ast.leafKinds)
        self.assertNotIn(ast.Block, ast.leafKinds)

    def testRepr(self):
        self.assertIn("Ident", repr(ast.Ident(name="x")))


class TestPrettyPrint(unittest.TestCase):
    def testToString(self):
        tree = ast.Block([ast.Return(ast.Ident(name="x"))])
        text = astpprint.toString(tree)
        self.assertIn("Block", text)
        self.assertIn("Return", text)
        self.assertIn("name=x", text)

        bare = astpprint.toString(tree, attrs=False)
        self.assertNotIn("name=x", bare)


if __name__ == "__main__":
    unittest.main()
