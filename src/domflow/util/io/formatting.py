"""
Formatting utilities for human-readable output.

Provides functions to format time durations and block id collections in
readable representations.
"""


def elapsedTime(t):
    """
    Format a time duration in seconds as a human-readable string.

    Automatically selects the most appropriate unit:
    - Milliseconds for times < 1 second
    - Seconds for times < 1 minute
    - Minutes for times < 1 hour
    - Hours for times >= 1 hour

    Args:
        t: Time duration in seconds (float)

    Returns:
        Formatted string with appropriate unit (e.g., "123.4 ms", "45.6 s")
    """
    if t < 1.0:
        return "%5.4g ms" % (t * 1000.0)
    elif t < 60.0:
        return "%5.4g s" % (t)
    elif t < 3600.0:
        return "%5.4g m" % (t / 60.0)
    else:
        return "%5.4g h" % (t / 3600.0)


def idList(ids):
    """
    Format block ids as a comma separated list, keeping their order.

    Example:
        idList([3, 1, 2]) -> "3, 1, 2"
    """
    return ", ".join(str(i) for i in ids)


def idSet(ids):
    """
    Format block ids as a set literal.

    Ids are sorted when they are mutually comparable and otherwise sorted by
    their string form, so the output is stable either way.

    Example:
        idSet({2, 0, 1}) -> "{0, 1, 2}"
    """
    try:
        ordered = sorted(ids)
    except TypeError:
        ordered = sorted(ids, key=str)
    return "{%s}" % idList(ordered)
