"""
Unused declaration detection.
"""

from ..checker_base import BaseChecker
from ..issue import IssueKind
from ..scope_tracker import ScopeTracker


class UnusedDeclarationChecker(BaseChecker):
    """Variables declared and never referenced in their scope."""

    kinds = (IssueKind.UNUSED_DECLARATION,)

    def _run_checks(self):
        tracker = ScopeTracker(
            exempt_names=self.profile.ambient_globals,
            exempt_prefix=self.profile.unused_exempt_prefix,
        )
        for binding in tracker.analyze(self.context.unit.program):
            if binding.site.range is None:
                continue
            self._add_issue(
                IssueKind.UNUSED_DECLARATION,
                f"Variable '{binding.name}' is declared but never used",
                binding.site.range,
            )
