"""
Records produced by the initial scan.

All records are immutable named tuples so they can be stored in sets, compared
by value, and serialized without custom encoders.
"""

import collections

__all__ = ["SourceSpan", "MethodRecord", "AllocationRecord"]


# A token or sub-expression location.
# Fields:
#   line: 1-based line number
#   startColumn: 1-based column of the first character
#   endColumn: column just past the last character
SourceSpan = collections.namedtuple("SourceSpan", "line startColumn endColumn")


# One per method declaration, keyed by its disambiguating signature.
MethodRecord = collections.namedtuple("MethodRecord", "span signature")


# One per object-creation expression, keyed by its identifier.
# The span locates the instantiated type reference.
AllocationRecord = collections.namedtuple("AllocationRecord", "span identifier")


def spanToList(span):
    return [span.line, span.startColumn, span.endColumn]
