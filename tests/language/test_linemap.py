import unittest

from sitescan.language.java.linemap import LineMap, lineStarts


class TestLineMap(unittest.TestCase):
    def testLineStarts(self):
        self.assertEqual(lineStarts("a\nb\r\nc\rd"), [0, 2, 5, 7])
        self.assertEqual(lineStarts(""), [0])

    def testLinesAndColumns(self):
        lineMap = LineMap("class A {\n  int x;\n}\n")
        self.assertEqual(lineMap.getLineNumber(0), 1)
        self.assertEqual(lineMap.getColumnNumber(0), 1)

        pos = lineMap.text.index("int")
        self.assertEqual(lineMap.getLineNumber(pos), 2)
        self.assertEqual(lineMap.getColumnNumber(pos), 3)
        self.assertEqual(lineMap.getPosition(2, 3), pos)

    def testNoPosition(self):
        lineMap = LineMap("class A {}")
        self.assertEqual(lineMap.getLineNumber(-1), 0)
        self.assertEqual(lineMap.getColumnNumber(-1), 0)

    def testTabsExpandToTabStops(self):
        lineMap = LineMap("\tx\n  \ty\n")
        self.assertEqual(lineMap.getColumnNumber(lineMap.text.index("x")), 9)
        self.assertEqual(lineMap.getColumnNumber(lineMap.text.index("y")), 9)

        narrow = LineMap("\tx\n", tabWidth=4)
        self.assertEqual(narrow.getColumnNumber(1), 5)

    def testEndOfText(self):
        lineMap = LineMap("new A")
        # the column just past the last token still counts
        self.assertEqual(lineMap.getColumnNumber(5), 6)
        self.assertEqual(lineMap.getColumnNumber(7), 8)

    def testInvalidTabWidth(self):
        with self.assertRaises(ValueError):
            LineMap("", tabWidth=0)

    def testLineCount(self):
        self.assertEqual(LineMap("a\nb\n").lineCount(), 3)


if __name__ == "__main__":
    unittest.main()
