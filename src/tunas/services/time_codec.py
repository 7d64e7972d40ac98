"""Swim time string parsing and formatting.

Times arrive from the API as strings like "1:05.40" or "45.20". Charts and
sorting need them as seconds, and axis labels need them back as strings.
"""

import math
import re

# Matches M:SS.ff (minutes may have any number of digits)
TIME_PATTERN_MINUTES = re.compile(r"^(\d+):(\d+(?:\.\d+)?)$")
# Matches SS.ff
TIME_PATTERN_SECONDS = re.compile(r"^\d+(?:\.\d+)?$")


class MalformedTimeError(ValueError):
    """Raised when a time string is not in M:SS.ff or SS.ff form."""

    def __init__(self, time_str: str):
        self.time_str = time_str
        super().__init__(f"Invalid time format: '{time_str}'. Expected 'SS.ff' or 'M:SS.ff'")


def parse_time(time_str: str) -> float:
    """Parse a swim time string into seconds.

    Examples:
        "45.20" -> 45.2
        "1:05.40" -> 65.4
        "16:32.09" -> 992.09

    Raises:
        MalformedTimeError: For any other shape (two colons, empty parts,
            signs, letters).
    """
    if not isinstance(time_str, str):
        raise MalformedTimeError(repr(time_str))

    value = time_str.strip()

    match = TIME_PATTERN_MINUTES.match(value)
    if match:
        return int(match.group(1)) * 60 + float(match.group(2))

    if TIME_PATTERN_SECONDS.match(value):
        return float(value)

    raise MalformedTimeError(time_str)


def format_seconds(seconds: float) -> str:
    """Format seconds as a swim time string.

    Values of a minute or more become "M:SS.ff" with the seconds zero-padded
    ("1:09.40", not "1:9.4"). Shorter values become "SS.ff".

    Raises:
        ValueError: If seconds is negative or not finite.
    """
    if not math.isfinite(seconds) or seconds < 0:
        raise ValueError(f"Cannot format time of {seconds} seconds")

    if seconds >= 60:
        minutes = int(seconds // 60)
        secs = seconds % 60
        if round(secs, 2) >= 60:
            minutes += 1
            secs = 0.0
        return f"{minutes}:{secs:05.2f}"
    return f"{seconds:.2f}"
