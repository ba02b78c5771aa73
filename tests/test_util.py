import io
import unittest

from sitescan.util.typedispatch import *
from sitescan.util.io import formatting
from sitescan.util.application.console import Console
from sitescan.doop.records import SourceSpan


class TestTypeDisbatch(unittest.TestCase):
    def testTD(self):
        def visitNumber(self, node):
            return "number"

        def visitDefault(self, node):
            return "default"

        class FooBar(TypeDispatcher):
            num = dispatch(int)(visitNumber)
            default = defaultdispatch(visitDefault)

        self.assertEqual(FooBar.__dict__["num"], visitNumber)
        self.assertEqual(FooBar.__dict__["default"], visitDefault)

        foo = FooBar()

        self.assertEqual(foo(1), "number")
        self.assertEqual(foo(2**70), "number")
        self.assertEqual(foo(1.0), "default")

    def testInheritance(self):
        class Base(TypeDispatcher):
            @dispatch(int)
            def visitInt(self, node):
                return "base int"

            @dispatch(str)
            def visitStr(self, node):
                return "base str"

        class Derived(Base):
            @dispatch(str)
            def visitStr(self, node):
                return "derived str"

        self.assertEqual(Derived()(1), "base int")
        self.assertEqual(Derived()("a"), "derived str")

    def testSubclassMatch(self):
        class Kinds(TypeDispatcher):
            @dispatch(int)
            def visitInt(self, node):
                return "int"

        # bool is an int subclass
        self.assertEqual(Kinds()(True), "int")

    def testConcrete(self):
        class Kinds(TypeDispatcher):
            __concrete__ = True

            @dispatch(int)
            def visitInt(self, node):
                return "int"

            @defaultdispatch
            def visitOther(self, node):
                return "other"

        self.assertEqual(Kinds()(1), "int")
        self.assertEqual(Kinds()(True), "other")

    def testDefaultRaises(self):
        class Kinds(TypeDispatcher):
            @dispatch(int)
            def visitInt(self, node):
                return "int"

        with self.assertRaises(TypeDispatchError):
            Kinds()("not an int")

    def testDuplicateHandler(self):
        with self.assertRaises(TypeDispatchDeclarationError):
            class Kinds(TypeDispatcher):
                @dispatch(int)
                def visitA(self, node):
                    pass

                @dispatch(int)
                def visitB(self, node):
                    pass

    def testExhaustive(self):
        class A(object):
            pass

        class B(object):
            pass

        with self.assertRaises(TypeDispatchDeclarationError) as cm:
            class Partial(TypeDispatcher):
                __exhaustive__ = (A, B)

                @dispatch(A)
                def visitA(self, node):
                    pass

        self.assertIn("B", str(cm.exception))

        class Complete(TypeDispatcher):
            __exhaustive__ = (A, B)

            @dispatch(A, B)
            def visitAB(self, node):
                return "ab"

        self.assertEqual(Complete()(B()), "ab")

    def testExhaustiveInherited(self):
        class A(object):
            pass

        class Base(TypeDispatcher):
            __exhaustive__ = (A,)

            @dispatch(A)
            def visitA(self, node):
                return "base"

        class Derived(Base):
            pass

        self.assertEqual(Derived()(A()), "base")


class TestFormatting(unittest.TestCase):
    def testElapsedTime(self):
        self.assertTrue(formatting.elapsedTime(0.5).endswith(" ms"))
        self.assertTrue(formatting.elapsedTime(5.0).endswith(" s"))
        self.assertTrue(formatting.elapsedTime(120.0).endswith(" m"))
        self.assertTrue(formatting.elapsedTime(7200.0).endswith(" h"))

    def testPlural(self):
        self.assertEqual(formatting.plural(1, "unit"), "1 unit")
        self.assertEqual(formatting.plural(0, "unit"), "0 units")
        self.assertEqual(formatting.plural(3, "unit"), "3 units")

    def testSpanText(self):
        self.assertEqual(formatting.spanText(SourceSpan(5, 24, 30)), "5:24-30")


class TestConsole(unittest.TestCase):
    def testNestedScopes(self):
        out = io.StringIO()
        console = Console(out=out, enabled=True)
        with console.scope("A.java"):
            with console.scope("parse"):
                pass
        with console.scope("B.java"):
            with console.scope("parse"):
                pass

        lines = out.getvalue().splitlines()
        self.assertEqual(lines[0], "begin [ A.java ]")
        self.assertEqual(lines[1], "begin [ A.java | parse ]")
        self.assertTrue(lines[2].startswith("end   [ A.java | parse ]"))
        self.assertIs(console.current, console.root)

        totals = console.phaseTotals(["parse", "scan"])
        self.assertEqual(list(totals), ["parse", "scan"])
        self.assertGreaterEqual(totals["parse"], 0.0)
        self.assertEqual(totals["scan"], 0.0)

    def testDisabledConsoleIsSilent(self):
        out = io.StringIO()
        console = Console(out=out)
        with console.scope("A.java"):
            console.summary(["parse"])
        self.assertEqual(out.getvalue(), "")

    def testScopeClosesOnError(self):
        console = Console(out=io.StringIO())
        with self.assertRaises(ValueError):
            with console.scope("A.java") as scope:
                raise ValueError
        self.assertIsNotNone(scope.elapsed)
        self.assertIs(console.current, console.root)


if __name__ == "__main__":
    unittest.main()
