"""Scan configuration."""

from sitescan.language.java.linemap import DEFAULT_TAB_WIDTH
from .errors import ConfigError


class ScanConfig(object):
    """
    Options shared by every phase of a scan.

    Attributes:
        tabWidth: Tab stop width used for column numbers.
        staleMethodContext: Name allocations outside methods after the last
            method seen, instead of the class's <clinit>/<init>.
        failOnSyntaxError: Reject units that contain syntax errors.
        keepGoing: Skip failing units of a multi-unit scan instead of stopping.
        sharedScanner: Scan all units of a multi-unit scan with one scanner,
            so allocation counters accumulate across units.
    """
    __slots__ = (
        "tabWidth",
        "staleMethodContext",
        "failOnSyntaxError",
        "keepGoing",
        "sharedScanner",
    )

    def __init__(self, tabWidth=DEFAULT_TAB_WIDTH, staleMethodContext=False,
                 failOnSyntaxError=False, keepGoing=False, sharedScanner=False):
        self.tabWidth = tabWidth
        self.staleMethodContext = staleMethodContext
        self.failOnSyntaxError = failOnSyntaxError
        self.keepGoing = keepGoing
        self.sharedScanner = sharedScanner
        self.validate()

    def validate(self):
        if not isinstance(self.tabWidth, int) or self.tabWidth < 1:
            raise ConfigError("tab width must be a positive integer, got %r" % (self.tabWidth,))

    @classmethod
    def fromArgs(cls, args):
        """Build a configuration from parsed command-line arguments."""
        return cls(
            tabWidth=getattr(args, "tab_width", DEFAULT_TAB_WIDTH),
            staleMethodContext=getattr(args, "stale_method_context", False),
            failOnSyntaxError=getattr(args, "strict", False),
            keepGoing=getattr(args, "keep_going", False),
            sharedScanner=getattr(args, "shared_scanner", False),
        )

    def __repr__(self):
        return "ScanConfig(%s)" % ", ".join(
            "%s=%r" % (name, getattr(self, name)) for name in self.__slots__
        )
