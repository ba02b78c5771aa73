"""Tests for the tree-sitter frontend: conversion, binding and the resulting scan."""

import unittest

from sitescan.application import ScanConfig, scanSource
from sitescan.frontend import convertSource
from sitescan.language.java import ast
from sitescan.language.java.symbols import ClassSymbol, MethodSymbol, VarSymbol


def source(*lines):
    return "\n".join(lines) + "\n"


def scan(text, **config):
    return scanSource(text, "Test.java", config=ScanConfig(**config)).toDict()


def classes(tree):
    return [d for d in tree.defs if isinstance(d, ast.ClassDecl)]


class TestConversion(unittest.TestCase):
    def testClassAndMembers(self):
        tree, errors = convertSource(
            source(
                "package p;",
                "import java.util.List;",
                "class A {",
                "    int x;",
                "    A() {}",
                "    void m(int y) {}",
                "}",
            )
        )
        self.assertEqual(errors, 0)
        self.assertIsInstance(tree, ast.CompilationUnit)
        self.assertIsInstance(tree.defs[0], ast.Import)

        [cls] = classes(tree)
        self.assertEqual(cls.name, "A")
        self.assertIsInstance(cls.sym, ClassSymbol)
        self.assertEqual(cls.sym.flatname, "p.A")

        field, ctor, method = cls.defs
        self.assertIsInstance(field, ast.VariableDecl)
        self.assertIsInstance(field.sym, VarSymbol)
        self.assertEqual(ctor.name, "<init>")
        self.assertIsNone(ctor.restype)
        self.assertIsInstance(method.sym, MethodSymbol)
        self.assertEqual([p.name for p in method.params], ["y"])

    def testPositionsAreNameOffsets(self):
        text = source("class A {", "    void run() {}", "}")
        tree, _ = convertSource(text)
        [cls] = classes(tree)
        self.assertEqual(cls.pos, text.index("A"))
        self.assertEqual(cls.defs[0].pos, text.index("run"))

    def testCharacterOffsets(self):
        text = source("class Ä {", "    void run() {}", "}")
        tree, _ = convertSource(text)
        [cls] = classes(tree)
        self.assertEqual(cls.defs[0].pos, text.index("run"))

    def testEnumConstantsBecomeAllocations(self):
        tree, _ = convertSource(source("enum Color {", "    RED, GREEN;", "}"))
        [cls] = classes(tree)
        red = cls.defs[0]
        self.assertIsInstance(red, ast.VariableDecl)
        self.assertIn("static", red.mods.flags)
        self.assertIsInstance(red.init, ast.NewClass)
        self.assertEqual(red.init.clazz.name, "Color")

    def testInitializerBlocks(self):
        tree, _ = convertSource(source("class A {", "    static {}", "    {}", "}"))
        [cls] = classes(tree)
        self.assertEqual([b.isStatic for b in cls.defs], [True, False])

    def testAnonymousClassBody(self):
        tree, _ = convertSource(
            source(
                "class A {",
                "    Object r = new Object() {",
                "        public String toString() { return null; }",
                "    };",
                "}",
            )
        )
        [cls] = classes(tree)
        alloc = cls.defs[0].init
        self.assertIsInstance(alloc.body, ast.ClassDecl)
        self.assertEqual(alloc.body.sym.flatname, "A$1")
        self.assertTrue(alloc.body.sym.isAnonymous)

    def testAnnotatedAllocationType(self):
        tree, errors = convertSource(
            source(
                "class A {",
                "    Object o = new @Deprecated Object();",
                "    int[][] xs = new int @Deprecated [] @Deprecated [] {};",
                "}",
            )
        )
        self.assertEqual(errors, 0)
        [cls] = classes(tree)
        alloc = cls.defs[0].init
        self.assertIsInstance(alloc.clazz, ast.AnnotatedType)
        self.assertEqual(alloc.clazz.underlyingType.name, "Object")
        self.assertEqual(str(alloc.clazz.type.erasure()), "java.lang.Object")

        array = cls.defs[1].init
        self.assertEqual(len(array.annotations), 1)
        self.assertIsInstance(array.elemtype, ast.AnnotatedType)
        self.assertIsInstance(array.elemtype.underlyingType, ast.ArrayTypeTree)

    def testSyntaxErrorsBecomeErroneous(self):
        tree, errors = convertSource(source("class A {", "    void m() { int = ; }", "}"))
        self.assertGreater(errors, 0)
        self.assertIsInstance(tree, ast.CompilationUnit)


class TestScan(unittest.TestCase):
    def testMethodsAndAllocations(self):
        result = scan(
            source(
                "package p;",
                "",
                "class A {",
                "    void m() {",
                "        Runnable r = new Runnable() {",
                "            public void run() {",
                "                Object o = new Object();",
                "            }",
                "        };",
                "    }",
                "}",
            )
        )
        self.assertEqual(
            result["methodDeclarations"],
            {"<p.A: void m()>": [4, 10, 11], "<p.A$1: void run()>": [6, 25, 28]},
        )
        self.assertEqual(
            result["heapAllocations"],
            {
                "p.A.m/new p.A$1/0": [5, 26, 34],
                "p.A$1.run/new java.lang.Object/0": [7, 32, 38],
            },
        )

    def testOverloadsAndConstructors(self):
        result = scan(
            source(
                "package p;",
                "class B {",
                "    B() {}",
                "    B(int x) { this(); }",
                "    void f() { new B(); }",
                "    void f(String s) {}",
                "}",
            )
        )
        self.assertEqual(
            sorted(result["methodDeclarations"]),
            [
                "<p.B: void <init>()>",
                "<p.B: void <init>(int)>",
                "<p.B: void f()>",
                "<p.B: void f(java.lang.String)>",
            ],
        )
        self.assertEqual(result["methodDeclarations"]["<p.B: void <init>()>"], [3, 5, 11])
        self.assertEqual(list(result["heapAllocations"]), ["<p.B: void f()>/new p.B/0"])

    def testEnumConstants(self):
        result = scan(source("package p;", "enum Color {", "    RED, GREEN;", "}"))
        self.assertEqual(
            result["heapAllocations"],
            {
                "p.Color.<clinit>/new p.Color/0": [3, 5, 10],
                "p.Color.<clinit>/new p.Color/1": [3, 10, 15],
            },
        )

    def testInitializers(self):
        text = source(
            "package p;",
            "class E {",
            "    static Object a = new Object();",
            "    Object b = new Object();",
            "    void m() {}",
            "    static { new Object(); }",
            "    { new Object(); }",
            "}",
        )
        self.assertEqual(
            sorted(scan(text)["heapAllocations"]),
            [
                "p.E.<clinit>/new java.lang.Object/0",
                "p.E.<clinit>/new java.lang.Object/1",
                "p.E.<init>/new java.lang.Object/0",
                "p.E.<init>/new java.lang.Object/1",
            ],
        )
        self.assertEqual(
            sorted(scan(text, staleMethodContext=True)["heapAllocations"]),
            [
                "p.E.<clinit>/new java.lang.Object/0",
                "p.E.<init>/new java.lang.Object/0",
                "p.E.m/new java.lang.Object/0",
                "p.E.m/new java.lang.Object/1",
            ],
        )

    def testTypeQualification(self):
        result = scan(
            source(
                "package p;",
                "import java.util.ArrayList;",
                "import java.util.*;",
                "class D {",
                "    void m() {",
                "        ArrayList<String> a = new ArrayList<String>();",
                "        Map<String, Integer> b = new HashMap<>();",
                "        java.util.Set<String> c = new java.util.TreeSet<String>();",
                "    }",
                "}",
            )
        )
        self.assertEqual(
            result["heapAllocations"],
            {
                "p.D.m/new java.util.ArrayList/0": [6, 35, 52],
                "p.D.m/new java.util.HashMap/0": [7, 38, 47],
                "p.D.m/new java.util.TreeSet/0": [8, 39, 64],
            },
        )

    def testFieldAccesses(self):
        result = scan(
            source(
                "package p;",
                "class C {",
                "    static int counter;",
                "    static class Inner {",
                "        int value;",
                "    }",
                "    void m(Inner inner) {",
                "        C.counter++;",
                "        inner.value = C.counter;",
                "        int[] xs = new int[3];",
                "        int n = xs.length;",
                "    }",
                "}",
            )
        )
        self.assertEqual(
            result["fieldAccesses"],
            {
                "<p.C: int counter>": [[8, 11, 18], [9, 25, 32]],
                "<p.C$Inner: int value>": [[9, 15, 20]],
                "<Array: int length>": [],
            },
        )
        self.assertEqual(result["heapAllocations"], {})

    def testFieldAccessesInTypeAnnotations(self):
        result = scan(
            source(
                "package p;",
                "import java.util.List;",
                "@interface A { int value(); }",
                "class K { static final int X = 1; }",
                "class C {",
                "    int @A(K.X) [] f;",
                "    void m(List<@A(K.X) ? extends Object> xs) {",
                "        Object o = new @A(K.X) Object();",
                "        int[] a = new @A(K.X) int[3];",
                "        String @A(K.X) [] s = null;",
                "        int[] b = new int @A(K.X) [] {};",
                "    }",
                "}",
            )
        )
        self.assertEqual(
            sorted(result["fieldAccesses"]["<p.K: int X>"]),
            [[6, 14, 15], [7, 22, 23], [8, 29, 30], [9, 28, 29], [10, 21, 22], [11, 32, 33]],
        )
        self.assertEqual(
            result["heapAllocations"], {"p.C.m/new java.lang.Object/0": [8, 24, 38]}
        )

    def testLocalClassesAndLambdas(self):
        result = scan(
            source(
                "package p;",
                "class F {",
                "    void m() {",
                "        class Local {",
                "            void n() { new Object(); }",
                "        }",
                "        Runnable r = () -> new Object();",
                "    }",
                "}",
            )
        )
        self.assertIn("<p.F$1Local: void n()>", result["methodDeclarations"])
        self.assertEqual(
            sorted(result["heapAllocations"]),
            ["p.F$1Local.n/new java.lang.Object/0", "p.F.m/new java.lang.Object/0"],
        )

    def testUnknownFieldsAreNotRecorded(self):
        result = scan(
            source(
                "class G {",
                "    void m() {",
                "        System.out.println(1);",
                "    }",
                "}",
            )
        )
        self.assertEqual(result["fieldAccesses"], {})


if __name__ == "__main__":
    unittest.main()
