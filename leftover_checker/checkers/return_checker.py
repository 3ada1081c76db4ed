"""
Empty top-level return detection.
"""

from ..checker_base import TreeRule
from ..issue import IssueKind
from ..syntax_tree import Ancestors, CatchClause, Control, FunctionNode, Program, Return


class TopLevelReturnChecker(TreeRule):
    """Flags ``return;`` that unconditionally ends the whole unit."""

    kinds = (IssueKind.TOP_LEVEL_EMPTY_RETURN,)

    def visit_Return(self, node: Return, ancestors: Ancestors):
        if node.argument is not None or node.range is None:
            return
        if self._is_unconditional_top_level(ancestors):
            self._add_issue(
                IssueKind.TOP_LEVEL_EMPTY_RETURN,
                "Remove this top-level return statement",
                node.range,
            )

    def _is_unconditional_top_level(self, ancestors: Ancestors) -> bool:
        """Walk outward until the first function or program boundary."""
        in_control = False
        for ancestor in reversed(ancestors):
            if isinstance(ancestor, (Control, CatchClause)):
                in_control = True
            elif isinstance(ancestor, FunctionNode):
                if not ancestor.synthetic:
                    self._log("Return at %s is inside a nested function", ancestor.line)
                    return False
                break
            elif isinstance(ancestor, Program):
                break
        if in_control:
            self._log("Return is inside a control structure; not flagged")
        return not in_control
