"""
sitescan command-line tools.

- scan: name allocation sites, method declarations and field accesses
- stats: count what a scan finds
- dump: print the typed tree of a unit
"""

from .main import main

__all__ = ["main"]
