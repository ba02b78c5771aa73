import unittest

from sitescan.doop import representation
from sitescan.doop.records import SourceSpan, spanToList
from sitescan.language.java.symbols import (
    INT_TYPE,
    ArrayType,
    ClassSymbol,
    ClassType,
    MethodSymbol,
    PrimitiveType,
    TypeVar,
    VarSymbol,
    syntheticInitializer,
)


class TestDoopRepresentation(unittest.TestCase):
    def setUp(self):
        self.builder = representation.getInstance()
        self.owner = ClassSymbol("A", "p.A", packageName="p")

    def method(self, name, returnType, *paramTypes):
        method = MethodSymbol(name, self.owner, 0, returnType)
        for i, t in enumerate(paramTypes):
            method.params.append(VarSymbol("a%d" % i, method, t, 0, "parameter"))
        return method

    def testSharedInstance(self):
        self.assertIs(representation.getInstance(), self.builder)

    def testMethodSignature(self):
        method = self.method(
            "put",
            ClassType("java.lang.Object"),
            ClassType("java.lang.String"),
            ArrayType(INT_TYPE),
        )
        self.assertEqual(
            self.builder.buildMethodSignature(method),
            "<p.A: java.lang.Object put(java.lang.String,int[])>",
        )
        self.assertEqual(self.builder.buildMethodCompactName(method), "p.A.put")

    def testSignatureErasesTypes(self):
        t = TypeVar("T", ClassType("java.lang.Number"))
        listOfT = ClassType("java.util.List", [t])
        method = self.method("f", TypeVar("R"), t, listOfT)
        self.assertEqual(
            self.builder.buildMethodSignature(method),
            "<p.A: java.lang.Object f(java.lang.Number,java.util.List)>",
        )

    def testConstructorAndInitializers(self):
        ctor = self.method("<init>", PrimitiveType("void"), INT_TYPE)
        self.assertEqual(self.builder.buildMethodSignature(ctor), "<p.A: void <init>(int)>")

        clinit = syntheticInitializer(self.owner, True)
        self.assertEqual(self.builder.buildMethodSignature(clinit), "<p.A: void <clinit>()>")
        self.assertEqual(self.builder.buildMethodCompactName(clinit), "p.A.<clinit>")
        self.assertTrue(clinit.synthetic)

    def testNestedClassOwner(self):
        inner = ClassSymbol("Inner", "p.A$Inner", self.owner, packageName="p")
        method = MethodSymbol("run", inner, 0)
        self.assertEqual(self.builder.buildMethodSignature(method), "<p.A$Inner: void run()>")

    def testFieldSignature(self):
        field = VarSymbol("count", self.owner, INT_TYPE, 0)
        self.assertEqual(self.builder.buildFieldSignature(field), "<p.A: int count>")

        untyped = VarSymbol("x", self.owner, None, 0)
        self.assertEqual(self.builder.buildFieldSignature(untyped), "<p.A: java.lang.Object x>")

    def testHeapAllocation(self):
        self.assertEqual(
            self.builder.buildHeapAllocation("p.A.m", "java.util.ArrayList"),
            "p.A.m/new java.util.ArrayList",
        )

    def testCustomBuilder(self):
        class Short(representation.SignatureBuilder):
            def buildMethodSignature(self, method):
                return method.name

            def buildMethodCompactName(self, method):
                return method.name

            def buildFieldSignature(self, field):
                return field.name

            def buildHeapAllocation(self, methodName, typeName):
                return "%s:%s" % (methodName, typeName)

        self.assertEqual(Short().buildHeapAllocation("m", "T"), "m:T")
        with self.assertRaises(TypeError):
            representation.SignatureBuilder()


class TestRecords(unittest.TestCase):
    def testSpanToList(self):
        self.assertEqual(spanToList(SourceSpan(3, 5, 9)), [3, 5, 9])

    def testSpansCompareByValue(self):
        self.assertEqual(SourceSpan(1, 2, 3), SourceSpan(1, 2, 3))
        self.assertEqual(len(set([SourceSpan(1, 2, 3), SourceSpan(1, 2, 3)])), 1)


if __name__ == "__main__":
    unittest.main()
