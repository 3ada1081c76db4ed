"""
Utility functions for the debugging-leftover checker.
"""

import math
import re
from typing import Iterator, List, Sequence, Tuple

TODO_PATTERN = re.compile(r"(TODO|FIXME):", re.IGNORECASE)


def split_lines(source: str) -> List[str]:
    """Split a unit into lines; index 0 is line 1."""
    return source.split("\n")


def is_blank(line: str) -> bool:
    """True if the line holds only whitespace."""
    return line.strip() == ""


def is_line_comment(line: str) -> bool:
    """True if the line is a ``//`` comment."""
    return line.strip().startswith("//")


def blank_runs(lines: Sequence[str], min_length: int = 2) -> Iterator[Tuple[int, int]]:
    """Yield ``(first, last)`` 1-based line numbers of runs of blank lines."""
    start = None
    for i, line in enumerate(lines, 1):
        if is_blank(line):
            if start is None:
                start = i
            continue
        if start is not None and i - start >= min_length:
            yield start, i - 1
        start = None
    if start is not None and len(lines) + 1 - start >= min_length:
        yield start, len(lines)


def js_round(value: float, digits: int = 2) -> float:
    """Round half up, the way ``Math.round(x * 100) / 100`` does."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
