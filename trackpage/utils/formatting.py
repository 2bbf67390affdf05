"""
Helper functions for formatting data into human-readable strings.
"""


def format_duration(seconds: float) -> str:
    """
    Formats a duration in seconds into a short human-readable string
    (e.g., '850 ms', '2.4s', '1m 05s').
    """
    if seconds < 1:
        return f"{int(seconds * 1000)} ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m {secs:02d}s"


def pluralize(count: int, word: str, plural: str | None = None) -> str:
    """Returns '1 track' / '3 tracks' style strings."""
    if count == 1:
        return f"{count} {word}"
    return f"{count} {plural or word + 's'}"
