"""
Suppression directives embedded in comments.

Three forms are recognized, case-insensitively, after a ``//`` marker:

    // @nr-analyzer-ignore-start ... // @nr-analyzer-ignore-end
    statement;  // @nr-analyzer-ignore-line
    // @nr-analyzer-ignore-next

A start directive without a later end directive is dropped, so the rest of
the unit is still checked.
"""

import re
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Sequence, Tuple

DEFAULT_DIRECTIVE_PREFIX = "@nr-analyzer-ignore"


@dataclass(frozen=True)
class IgnoreRegion:
    """Inclusive 1-based line span."""
    start_line: int
    end_line: int

    def contains(self, line_number: int) -> bool:
        return self.start_line <= line_number <= self.end_line


@dataclass(frozen=True)
class SuppressionMap:
    """Lines excluded from every rule."""
    regions: Tuple[IgnoreRegion, ...] = ()
    single_lines: FrozenSet[int] = field(default_factory=frozenset)
    next_lines: FrozenSet[int] = field(default_factory=frozenset)

    def is_suppressed(self, line_number: int) -> bool:
        if any(region.contains(line_number) for region in self.regions):
            return True
        return line_number in self.single_lines or line_number in self.next_lines

    def any_suppressed(self, line_numbers: Iterable[int]) -> bool:
        return any(self.is_suppressed(n) for n in line_numbers)


def _directive_pattern(prefix: str, suffix: str) -> "re.Pattern[str]":
    return re.compile(r"//\s*" + re.escape(prefix) + "-" + suffix, re.IGNORECASE)


def parse_ignore_directives(
    lines: Sequence[str],
    prefix: str = DEFAULT_DIRECTIVE_PREFIX,
) -> SuppressionMap:
    """Build the suppression map for a unit's lines (index 0 is line 1)."""
    start_re = _directive_pattern(prefix, "start")
    end_re = _directive_pattern(prefix, "end")
    line_re = _directive_pattern(prefix, "line")
    next_re = _directive_pattern(prefix, "next")

    regions: List[IgnoreRegion] = []
    single_lines = set()
    next_lines = set()

    for i, line in enumerate(lines):
        text = line.strip()

        if start_re.search(text):
            for j in range(i + 1, len(lines)):
                if end_re.search(lines[j].strip()):
                    regions.append(IgnoreRegion(i + 1, j + 1))
                    break

        if line_re.search(text):
            single_lines.add(i + 1)

        if next_re.search(text) and i + 1 < len(lines):
            next_lines.add(i + 2)

    return SuppressionMap(tuple(regions), frozenset(single_lines), frozenset(next_lines))
