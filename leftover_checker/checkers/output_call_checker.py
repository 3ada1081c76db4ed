"""
Debug output and breakpoint detection.
"""

from ..checker_base import TreeRule
from ..issue import IssueKind
from ..syntax_tree import Ancestors, Call, Debugger, Identifier, Member, PropertyName


class DebugOutputChecker(TreeRule):
    """Console calls, host warn calls and ``debugger`` statements."""

    kinds = (
        IssueKind.CONSOLE_OUTPUT_CALL,
        IssueKind.HOST_WARN_CALL,
        IssueKind.DEBUGGER_STATEMENT,
    )

    def visit_Call(self, node: Call, ancestors: Ancestors):
        callee = node.callee
        if node.is_new or not isinstance(callee, Member) or callee.computed:
            return
        if not isinstance(callee.object, Identifier) or not isinstance(callee.property, PropertyName):
            return
        owner, method = callee.object.name, callee.property.name

        if owner == self.profile.console_object:
            self._add_issue(
                IssueKind.CONSOLE_OUTPUT_CALL,
                f"Remove this {owner}.{method}() debugging statement",
                node.range,
            )
        elif owner == self.profile.node_object and method == self.profile.warn_method:
            self._add_issue(
                IssueKind.HOST_WARN_CALL,
                f"Remove this {owner}.{method}() debugging statement",
                node.range,
            )

    def visit_Debugger(self, node: Debugger, ancestors: Ancestors):
        self._add_issue(IssueKind.DEBUGGER_STATEMENT, "Remove this debugger statement", node.range)
