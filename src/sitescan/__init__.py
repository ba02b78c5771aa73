"""sitescan - Doop identifiers for Java allocation sites, methods and field accesses.
"""

__version__ = "0.1.0"

# Import main components for easy access
from .application import Pipeline, ScanConfig, ScanResult, scanSource, scanFiles
from .analysis.initialscanner import InitialScanner

__all__ = [
    "Pipeline",
    "ScanConfig",
    "ScanResult",
    "scanSource",
    "scanFiles",
    "InitialScanner",
    "__version__",
]
