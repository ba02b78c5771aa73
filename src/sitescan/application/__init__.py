"""Configuration, errors and the scan pipeline."""

from .errors import SiteScanError, ScanAbort, SourceError, ConfigError
from .config import ScanConfig
from .result import ScanResult
from .pipeline import Pipeline, ParsedUnit, scanSource, scanFile, scanFiles, parseSource

__all__ = [
    "SiteScanError",
    "ScanAbort",
    "SourceError",
    "ConfigError",
    "ScanConfig",
    "ScanResult",
    "Pipeline",
    "ParsedUnit",
    "scanSource",
    "scanFile",
    "scanFiles",
    "parseSource",
]
