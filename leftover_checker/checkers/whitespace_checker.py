"""
Blank line run detection.
"""

from ..checker_base import LineRule
from ..issue import IssueKind, SourceRange
from ..utils import blank_runs


class BlankRunChecker(LineRule):
    """Two or more consecutive empty lines."""

    kinds = (IssueKind.EXCESSIVE_BLANK_RUN,)

    def _run_checks(self):
        for first, last in blank_runs(self.lines):
            if self.context.suppression.any_suppressed(range(first, last + 1)):
                continue
            count = last - first + 1
            self._add_issue(
                IssueKind.EXCESSIVE_BLANK_RUN,
                f"Remove excessive empty lines ({count} consecutive empty lines)",
                SourceRange.from_lines(first, 1, last, 1),
            )
