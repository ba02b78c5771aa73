"""Offset to line/column translation for one compilation unit.

Follows javac's conventions: lines and columns are 1-based, a tab advances
the column to the next multiple of the tab width, and ``\\n``, ``\\r\\n`` and
``\\r`` all end a line. Offsets before the start of the unit (NOPOS) map to
line 0, which callers treat as "no real source position".
"""

import bisect

DEFAULT_TAB_WIDTH = 8


def lineStarts(text):
    """Offsets at which each line of ``text`` starts."""
    starts = [0]
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\r":
            if i + 1 < n and text[i + 1] == "\n":
                i += 1
            starts.append(i + 1)
        elif ch == "\n":
            starts.append(i + 1)
        i += 1
    return starts


class LineMap(object):
    """Line and column lookup over an in-memory source text.

    Attributes:
        text: The unit's source text.
        tabWidth: Column advance of a tab stop.
    """

    def __init__(self, text, tabWidth=DEFAULT_TAB_WIDTH):
        if tabWidth < 1:
            raise ValueError("tab width must be positive, got %r" % (tabWidth,))
        self.text = text
        self.tabWidth = tabWidth
        self.starts = lineStarts(text)

    def getLineNumber(self, pos):
        """1-based line of ``pos``; 0 for negative offsets."""
        if pos < 0:
            return 0
        return bisect.bisect_right(self.starts, pos)

    def getColumnNumber(self, pos):
        """1-based column of ``pos``, with tabs expanded.

        Offsets past the end of the text keep counting one column per
        position, so ``pos + length`` of a token at the very end still
        yields its end column.
        """
        if pos < 0:
            return 0
        lineStart = self.starts[self.getLineNumber(pos) - 1]
        column = 0
        text = self.text
        end = min(pos, len(text))
        for bp in range(lineStart, end):
            if text[bp] == "\t":
                column = (column // self.tabWidth * self.tabWidth) + self.tabWidth
            else:
                column += 1
        column += pos - end
        return column + 1

    def getPosition(self, line, column):
        """Inverse of the lookups for tab-free lines: offset of (line, column)."""
        return self.starts[line - 1] + column - 1

    def lineCount(self):
        return len(self.starts)
