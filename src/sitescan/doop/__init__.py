"""Doop-facing names and records."""

from .records import SourceSpan, MethodRecord, AllocationRecord
from .representation import SignatureBuilder, DoopRepresentationBuilder

__all__ = [
    "SourceSpan",
    "MethodRecord",
    "AllocationRecord",
    "SignatureBuilder",
    "DoopRepresentationBuilder",
]
