"""
Java frontend: tree-sitter parsing and conversion to typed Java trees.
"""

from .parser import parse
from .converter import convert, convertSource

__all__ = ["parse", "convert", "convertSource"]
