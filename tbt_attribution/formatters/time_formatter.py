"""
Time formatting utilities for human-readable output.
"""


def format_time(ms: float) -> str:
    """
    Format a duration in milliseconds as a human-readable string.

    Negative durations keep their sign; they only show up for anomalous
    self impacts.

    Args:
        ms: Duration in milliseconds

    Returns:
        Formatted time string (e.g., "123.45 ms", "2.34 s", "1m 30.50s")
    """
    sign = '-' if ms < 0 else ''
    ms = abs(ms)
    if ms < 1000:
        return f"{sign}{ms:.2f} ms"
    if ms < 60000:
        return f"{sign}{ms / 1000:.2f} s"
    minutes = int(ms // 60000)
    seconds = (ms % 60000) / 1000
    return f"{sign}{minutes}m {seconds:.2f}s"
