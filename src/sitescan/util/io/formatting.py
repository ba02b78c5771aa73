"""
Formatting helpers for console and log output.
"""

# (upper bound in seconds, divisor, unit)
TIME_UNITS = (
    (1.0, 0.001, "ms"),
    (60.0, 1.0, "s"),
    (3600.0, 60.0, "m"),
)


def elapsedTime(t):
    """
    Format a duration in seconds with a unit suited to its size.

    Args:
        t: Duration in seconds (float)

    Returns:
        A string such as "123.4 ms" or "45.6 s".
    """
    for bound, divisor, unit in TIME_UNITS:
        if t < bound:
            return "%5.4g %s" % (t / divisor, unit)
    return "%5.4g h" % (t / 3600.0)


def plural(count, word):
    """Return ``"<count> <word>"`` with a trailing s unless count is one."""
    if count == 1:
        return "%d %s" % (count, word)
    return "%d %ss" % (count, word)


def spanText(span):
    """``line:start-end`` form of a SourceSpan."""
    return "%d:%d-%d" % (span.line, span.startColumn, span.endColumn)
