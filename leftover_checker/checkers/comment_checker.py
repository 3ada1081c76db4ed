"""
Comment-based checks: TODO/FIXME markers and commented-out code.
"""

import re
from typing import List

from ..checker_base import LineRule
from ..issue import IssueKind, SourceRange
from ..utils import TODO_PATTERN, is_blank, is_line_comment


class TodoCommentChecker(LineRule):
    """Lines carrying a ``TODO:`` or ``FIXME:`` marker."""

    kinds = (IssueKind.TODO_OR_FIXME_COMMENT,)

    def _run_checks(self):
        for i, line in enumerate(self.lines, 1):
            match = TODO_PATTERN.search(line)
            if not match:
                continue
            self._add_issue(
                IssueKind.TODO_OR_FIXME_COMMENT,
                f"{match.group(1).upper()} comment found - consider resolving",
                SourceRange.from_lines(i, match.start() + 1, i, len(line) + 1),
            )


class CommentedOutCodeChecker(LineRule):
    """Runs of two or more ``//`` comment lines; blank lines do not end a run.

    Suppression directives are not counted as comment lines.
    """

    kinds = (IssueKind.COMMENTED_OUT_CODE_RUN,)
    min_run = 2

    def _run_checks(self):
        directive = re.compile(
            r"//\s*" + re.escape(self.profile.directive_prefix), re.IGNORECASE
        )
        run: List[int] = []
        for i, line in enumerate(self.lines, 1):
            if is_blank(line):
                continue
            if is_line_comment(line) and not directive.search(line):
                run.append(i)
                continue
            self._flush(run)
            run = []
        self._flush(run)

    def _flush(self, run: List[int]):
        if len(run) < self.min_run:
            return
        first, last = run[0], run[-1]
        if self.context.suppression.any_suppressed(range(first, last + 1)):
            return
        self._add_issue(
            IssueKind.COMMENTED_OUT_CODE_RUN,
            f"Remove commented-out code ({len(run)} consecutive comment lines)",
            SourceRange.from_lines(first, 1, last, len(self.lines[last - 1]) + 1),
        )
