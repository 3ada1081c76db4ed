"""
Hardcoded placeholder value detection.
"""

from typing import Optional

from ..checker_base import TreeRule
from ..issue import IssueKind, SentinelVariant
from ..syntax_tree import Ancestors, Assignment, Literal, LiteralKind, Node, VariableDeclarator

SENTINEL_STRINGS = {
    "test": SentinelVariant.TEST,
    "debug": SentinelVariant.DEBUG,
    "temp": SentinelVariant.TEMP,
}
SENTINEL_NUMBER = 123


class SentinelValueChecker(TreeRule):
    """``"test"`` / ``"debug"`` / ``"temp"`` / ``123`` stored in a variable."""

    kinds = (IssueKind.HARDCODED_SENTINEL_VALUE,)

    def visit_VariableDeclarator(self, node: VariableDeclarator, ancestors: Ancestors):
        self._check_value(node.init)

    def visit_Assignment(self, node: Assignment, ancestors: Ancestors):
        self._check_value(node.value)

    def _check_value(self, value: Optional[Node]):
        if not isinstance(value, Literal) or value.range is None:
            return
        if value.kind == LiteralKind.STRING:
            text = value.value.lower()
            variant = SENTINEL_STRINGS.get(text)
            if variant is not None:
                self._add_issue(
                    IssueKind.HARDCODED_SENTINEL_VALUE,
                    f"Remove hardcoded {text} value",
                    value.range,
                    variant,
                )
        elif value.kind == LiteralKind.NUMBER and value.value == SENTINEL_NUMBER:
            self._add_issue(
                IssueKind.HARDCODED_SENTINEL_VALUE,
                "Remove hardcoded test number",
                value.range,
                SentinelVariant.NUMBER,
            )
