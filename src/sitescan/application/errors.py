"""
Errors raised by sitescan outside the tree walkers.

The walkers raise the type-dispatch exceptions (UnhandledNodeKind,
TypeDispatchDeclarationError); the pipeline turns a walker failure on a
particular unit into a ScanAbort naming that unit.
"""


class SiteScanError(Exception):
    """Base class of every error the application layer raises."""
    pass


class ScanAbort(SiteScanError):
    """
    A compilation unit could not be scanned.

    Attributes:
        sourcefile: Name of the unit being scanned.
        cause: The underlying exception.
    """

    def __init__(self, sourcefile, cause):
        self.sourcefile = sourcefile
        self.cause = cause
        SiteScanError.__init__(self, "scan of %s aborted: %s" % (sourcefile, cause))


class SourceError(SiteScanError):
    """A source file could not be read, or (on request) failed to parse cleanly."""
    pass


class ConfigError(SiteScanError):
    """Invalid configuration."""
    pass


def abort(sourcefile, cause):
    """Raise ScanAbort for ``sourcefile``, chained to ``cause``."""
    raise ScanAbort(sourcefile, cause) from cause
