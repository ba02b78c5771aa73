"""
AST tools: declarative node classes and pretty printing.
"""

from . import metaast
from . import astpprint

__all__ = [
    "metaast",
    "astpprint",
]
