import unittest

from sitescan.frontend.scopes import Env, UnitScope, binaryName, findField, findMethod
from sitescan.language.java.symbols import INT_TYPE, ClassSymbol, ClassType, MethodSymbol, VarSymbol


class TestBinaryName(unittest.TestCase):
    def testSplitsAtFirstClassSegment(self):
        self.assertEqual(binaryName("java.util.Map.Entry"), "java.util.Map$Entry")
        self.assertEqual(binaryName("java.util.List"), "java.util.List")
        self.assertEqual(binaryName("p.q"), "p.q")


class TestUnitScope(unittest.TestCase):
    def setUp(self):
        self.unit = UnitScope("p")
        self.unit.addImport("java.util.List")
        self.unit.addImport("java.util.Map.Entry")
        self.unit.addImport("java.io", onDemand=True)
        self.unit.addImport("java.lang.Math.max", staticImport=True)
        self.a = ClassSymbol("A", "p.A", packageName="p")
        self.unit.declareClass(self.a)

    def testLookupOrder(self):
        self.assertIs(self.unit.lookupType("A").sym, self.a)
        self.assertEqual(str(self.unit.lookupType("List")), "java.util.List")
        self.assertEqual(str(self.unit.lookupType("Entry")), "java.util.Map$Entry")
        self.assertEqual(str(self.unit.lookupType("String")), "java.lang.String")
        self.assertEqual(str(self.unit.lookupType("File")), "java.io.File")

    def testStaticImportsAreIgnored(self):
        self.assertNotIn("max", self.unit.singleImports)

    def testPackageFallback(self):
        unit = UnitScope("p")
        self.assertEqual(str(unit.lookupType("Helper")), "p.Helper")
        self.assertIsNone(unit.findType("Helper"))
        self.assertEqual(str(UnitScope().lookupType("Helper")), "Helper")


class TestEnv(unittest.TestCase):
    def setUp(self):
        self.unit = UnitScope("p")
        self.base = ClassSymbol("Base", "p.Base", packageName="p")
        self.field = self.base.enter(VarSymbol("count", self.base, INT_TYPE, 10))
        self.a = ClassSymbol("A", "p.A", packageName="p")
        self.a.superclass = self.base.asType()
        for sym in (self.base, self.a):
            self.unit.declareClass(sym)

    def testInheritedFields(self):
        self.assertIs(findField(self.a, "count"), self.field)
        self.assertIsNone(findField(self.a, "missing"))

    def testVariablesShadowFields(self):
        classEnv = Env(unit=self.unit).child(classSymbol=self.a)
        self.assertIs(classEnv.lookupVariable("count"), self.field)

        method = MethodSymbol("m", self.a)
        methodEnv = classEnv.child(owner=method)
        local = methodEnv.declare(VarSymbol("count", method, INT_TYPE, 20, "local"))
        self.assertIs(methodEnv.child().lookupVariable("count"), local)
        self.assertIs(classEnv.lookupVariable("count"), self.field)

    def testOwners(self):
        root = Env(unit=self.unit)
        classEnv = root.child(classSymbol=self.a)
        method = MethodSymbol("m", self.a)
        methodEnv = classEnv.child(owner=method)
        self.assertIs(classEnv.owner, self.a)
        self.assertIs(methodEnv.child().owner, method)
        self.assertIs(methodEnv.enclosingClass(), self.a)
        self.assertIs(methodEnv.child(classSymbol=self.base).owner, self.base)

    def testFindMethodByArity(self):
        one = self.a.enter(MethodSymbol("f", self.a))
        one.params.append(VarSymbol("x", one, INT_TYPE, 0, "parameter"))
        varargs = self.a.enter(MethodSymbol("g", self.a))
        varargs.params.append(VarSymbol("xs", varargs, ClassType("java.lang.Object"), 0, "parameter"))
        varargs.isVarargs = True

        self.assertIs(findMethod(self.a, "f", 1), one)
        self.assertIsNone(findMethod(self.a, "f", 2))
        self.assertIs(findMethod(self.a, "g", 0), varargs)
        self.assertIs(findMethod(self.a, "g", 3), varargs)

    def testQualifiedTypes(self):
        env = Env(unit=self.unit)
        inner = ClassSymbol("Inner", "p.A$Inner", self.a, packageName="p")
        self.a.enter(inner)
        self.assertIs(env.lookupQualifiedType(["A", "Inner"]).sym, inner)
        self.assertEqual(str(env.lookupQualifiedType(["java", "util", "Map", "Entry"])), "java.util.Map$Entry")


if __name__ == "__main__":
    unittest.main()
