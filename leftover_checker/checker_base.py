"""
Base checker classes for debugging-leftover rules.
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

from .ignore_directives import DEFAULT_DIRECTIVE_PREFIX, SuppressionMap
from .issue import Issue, IssueKind, SentinelVariant, SourceRange
from .syntax_tree import Ancestors, Node, walk
from .tree_builder import DEFAULT_WRAPPER_NAME, ParsedUnit

logger = logging.getLogger(__name__)

NODE_RED_GLOBALS = frozenset({"msg", "node", "context", "flow", "global", "env", "RED"})


@dataclass(frozen=True)
class HostProfile:
    """Names the host runtime injects into every code unit."""
    console_object: str = "console"
    node_object: str = "node"
    warn_method: str = "warn"
    ambient_globals: FrozenSet[str] = field(default_factory=lambda: NODE_RED_GLOBALS)
    wrapper_name: str = DEFAULT_WRAPPER_NAME
    directive_prefix: str = DEFAULT_DIRECTIVE_PREFIX
    unused_exempt_prefix: str = "_"


NODE_RED = HostProfile()


@dataclass
class AnalysisContext:
    """Everything rules may look at for one analysis call."""
    source: str
    lines: List[str]
    unit: ParsedUnit
    suppression: SuppressionMap
    level: int
    profile: HostProfile = NODE_RED
    verbose: bool = False


class BaseChecker:
    """Base class for all checkers."""

    kinds: Tuple[IssueKind, ...] = ()

    def __init__(self):
        self.issues: List[Issue] = []
        self.context: Optional[AnalysisContext] = None

    def enabled(self, level: int) -> bool:
        """True if any kind this checker reports is active at ``level``."""
        return any(kind.level <= level for kind in self.kinds)

    def begin(self, context: AnalysisContext, sink: Optional[List[Issue]] = None):
        """Bind the checker to one analysis call; issues go to ``sink`` when given."""
        self.context = context
        self.issues = sink if sink is not None else []

    def check(self, context: AnalysisContext) -> List[Issue]:
        """Run checks for the given unit."""
        self.begin(context)
        self._run_checks()
        return self.issues

    def _run_checks(self):
        """Override in subclasses to implement specific checks."""
        pass

    @property
    def profile(self) -> HostProfile:
        return self.context.profile

    def _log(self, message: str, *args):
        if self.context is not None and self.context.verbose:
            logger.debug(message, *args)

    def _is_suppressed(self, line_number: int) -> bool:
        return self.context.suppression.is_suppressed(line_number)

    def _add_issue(
        self,
        kind: IssueKind,
        message: str,
        source_range: SourceRange,
        variant: Optional[SentinelVariant] = None,
    ) -> bool:
        """Add an issue unless its kind is above the level or its start line is suppressed."""
        if kind.level > self.context.level:
            return False
        if self._is_suppressed(source_range.start.line):
            self._log("Suppressed %s on line %d", kind.value, source_range.start.line)
            return False
        self.issues.append(Issue(kind, message, source_range, kind.default_severity, variant))
        return True


class TreeRule(BaseChecker):
    """A checker that inspects syntax tree nodes.

    Subclasses define ``visit_<NodeClass>(node, ancestors)`` methods. The
    detector feeds every node of one shared traversal to all enabled tree
    rules, so their issues come out in traversal order.
    """

    def _run_checks(self):
        for node, ancestors in walk(self.context.unit.program):
            self.visit(node, ancestors)

    def visit(self, node: Node, ancestors: Ancestors):
        method = getattr(self, "visit_" + type(node).__name__, None)
        if method is not None:
            method(node, ancestors)


class LineRule(BaseChecker):
    """A checker that works on the raw lines of a unit."""

    @property
    def lines(self) -> List[str]:
        return self.context.lines
