"""Tests for the scan pipeline, from source text and from hand-built trees."""

import io
import os
import os.path as path
import shutil
import sys
import tempfile
import unittest

# Add the tests directory to Python path so we can import javatrees
sys.path.insert(0, path.dirname(path.dirname(path.abspath(__file__))))

from javatrees import at, classDecl, classSymbol, lineMap, methodDecl, methodSymbol, newObject, statement, unit

from sitescan.application import (
    ParsedUnit,
    Pipeline,
    ScanAbort,
    ScanConfig,
    SourceError,
    parseSource,
    scanFiles,
    scanSource,
)
from sitescan.application.pipeline import collectSources
from sitescan.language.java import ast
from sitescan.util.application.console import Console

SOURCE_A = "\n".join(
    [
        "package p;",
        "",
        "public class A {",
        "    void m() {",
        "        Object o = new Object();",
        "    }",
        "}",
        "",
    ]
)

SOURCE_B = "\n".join(
    [
        "package p;",
        "",
        "class B {",
        "    int x;",
        "    void n(B other) {",
        "        other.x = 1;",
        "    }",
        "}",
        "",
    ]
)


def parsedUnit(sourcefile):
    a = classSymbol("A")
    m = methodSymbol(a, "m")
    tree = unit(classDecl(a, [methodDecl(m, [statement(newObject(at(4, 13)))])]))
    return ParsedUnit(sourcefile, tree, lineMap())


class TestScanUnits(unittest.TestCase):
    def testSeparateScannersRestartCounters(self):
        result = Pipeline().scanUnits([parsedUnit("A.java"), parsedUnit("A2.java")])
        self.assertEqual(list(result.heapAllocations), ["p.A.m/new java.lang.Object/0"])
        self.assertEqual(result.sourcefiles, ["A.java", "A2.java"])

    def testSharedScannerKeepsCounting(self):
        pipeline = Pipeline(ScanConfig(sharedScanner=True))
        result = pipeline.scanUnits([parsedUnit("A.java"), parsedUnit("A2.java")])
        self.assertEqual(
            sorted(result.heapAllocations),
            ["p.A.m/new java.lang.Object/0", "p.A.m/new java.lang.Object/1"],
        )

    def testWalkerFailureAbortsUnit(self):
        broken = ParsedUnit("Broken.java", "not a tree", lineMap())
        with self.assertRaises(ScanAbort) as cm:
            Pipeline().scanUnits([broken])
        self.assertEqual(cm.exception.sourcefile, "Broken.java")
        self.assertIn("Broken.java", str(cm.exception))


class TestScanSource(unittest.TestCase):
    def testEndToEnd(self):
        result = scanSource(SOURCE_A, "A.java")
        self.assertEqual(result.sourcefiles, ["A.java"])
        self.assertEqual(result.toDict()["methodDeclarations"], {"<p.A: void m()>": [4, 10, 11]})
        self.assertEqual(
            result.toDict()["heapAllocations"], {"p.A.m/new java.lang.Object/0": [5, 24, 30]}
        )

    def testFieldAccessThroughParameter(self):
        result = scanSource(SOURCE_B, "B.java")
        self.assertEqual(result.toDict()["fieldAccesses"], {"<p.B: int x>": [[6, 15, 16]]})

    def testTabWidth(self):
        text = SOURCE_A.replace("        Object o", "\tObject o")
        result = scanSource(text, "A.java", config=ScanConfig(tabWidth=4))
        self.assertEqual(
            result.toDict()["heapAllocations"], {"p.A.m/new java.lang.Object/0": [5, 20, 26]}
        )

    def testSyntaxErrorsAreRecovered(self):
        text = SOURCE_A.replace("    void m() {", "    void m() { int = ;")
        parsed = parseSource(text, "A.java")
        self.assertGreater(parsed.syntaxErrors, 0)
        self.assertIsInstance(parsed.tree, ast.CompilationUnit)

    def testStrictRejectsSyntaxErrors(self):
        text = SOURCE_A.replace("    void m() {", "    void m() { int = ;")
        with self.assertRaises(SourceError):
            scanSource(text, "A.java", config=ScanConfig(failOnSyntaxError=True))

    def testConsoleReportsPhases(self):
        out = io.StringIO()
        scanSource(SOURCE_A, "A.java", console=Console(out=out, enabled=True))
        report = out.getvalue()
        for phase in ("parse", "convert", "scan"):
            self.assertIn("A.java | %s" % phase, report)


class TestScanFiles(unittest.TestCase):
    def setUp(self):
        self.root = tempfile.mkdtemp()
        os.makedirs(os.path.join(self.root, "p"))
        self.write("p/A.java", SOURCE_A)
        self.write("p/B.java", SOURCE_B)
        self.write("notes.txt", "not java")

    def tearDown(self):
        shutil.rmtree(self.root)

    def write(self, name, text):
        with open(os.path.join(self.root, name), "w") as f:
            f.write(text)

    def testCollectSources(self):
        sources = collectSources([self.root])
        self.assertEqual(
            sources,
            [os.path.join(self.root, "p", "A.java"), os.path.join(self.root, "p", "B.java")],
        )

    def testDirectory(self):
        result = scanFiles([self.root])
        self.assertEqual(len(result.sourcefiles), 2)
        self.assertIn("<p.A: void m()>", result.methodDeclarations)
        self.assertIn("<p.B: void n(p.B)>", result.methodDeclarations)
        self.assertEqual(result.failures, [])

    def testMissingFileStops(self):
        missing = os.path.join(self.root, "Missing.java")
        with self.assertRaises(SourceError):
            scanFiles([missing, self.root])

    def testKeepGoing(self):
        missing = os.path.join(self.root, "Missing.java")
        result = scanFiles([missing, self.root], config=ScanConfig(keepGoing=True))
        self.assertEqual(len(result.sourcefiles), 2)
        self.assertEqual([sourcefile for sourcefile, _ in result.failures], [missing])

    def testSharedScannerAcrossFiles(self):
        self.write("p/Copy.java", SOURCE_A)
        shared = scanFiles([self.root], config=ScanConfig(sharedScanner=True))
        self.assertEqual(
            sorted(shared.heapAllocations),
            ["p.A.m/new java.lang.Object/0", "p.A.m/new java.lang.Object/1"],
        )
        self.assertEqual(len(shared.sourcefiles), 3)

        separate = scanFiles([self.root])
        self.assertEqual(list(separate.heapAllocations), ["p.A.m/new java.lang.Object/0"])


if __name__ == "__main__":
    unittest.main()
