"""
Time formatting utilities for human-readable output.
"""

US_PER_MS = 1_000
US_PER_SEC = 1_000_000


def to_seconds(us: int) -> float:
    """Convert microseconds to seconds."""
    return us / US_PER_SEC


def to_milliseconds(us: int) -> float:
    """Convert microseconds to milliseconds."""
    return us / US_PER_MS


def format_duration(us: int) -> str:
    """
    Format a duration in microseconds to a human-readable string.

    Args:
        us: Duration in microseconds

    Returns:
        Formatted time string (e.g., "850 us", "123.45 ms", "2.34 s", "1m 30.50s")
    """
    if us < US_PER_MS:
        return f"{us} us"
    ms = us / US_PER_MS
    if ms < 1000:
        return f"{ms:.2f} ms"
    elif ms < 60000:
        return f"{ms/1000:.2f} s"
    else:
        minutes = int(ms / 60000)
        seconds = (ms % 60000) / 1000
        return f"{minutes}m {seconds:.2f}s"
