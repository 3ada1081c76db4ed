"""
Main detector class that coordinates all checkers.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from .checker_base import NODE_RED, AnalysisContext, BaseChecker, HostProfile, TreeRule
from .checkers import (
    BlankRunChecker,
    CommentedOutCodeChecker,
    DebugOutputChecker,
    SentinelValueChecker,
    TodoCommentChecker,
    TopLevelReturnChecker,
    UnusedDeclarationChecker,
)
from .ignore_directives import parse_ignore_directives
from .issue import Issue
from .syntax_tree import walk
from .tree_builder import ParseFailure, TreeBuilder
from .utils import split_lines

logger = logging.getLogger(__name__)

MIN_LEVEL = 1
MAX_LEVEL = 3
DEFAULT_LEVEL = 2


def clamp_level(level: Any) -> int:
    """Coerce a detection level into the supported 1-3 range."""
    try:
        value = int(level)
    except (TypeError, ValueError):
        return DEFAULT_LEVEL
    return max(MIN_LEVEL, min(MAX_LEVEL, value))


class LeftoverDetector:
    """Runs every debugging-leftover rule over a code unit."""

    def __init__(self, profile: Optional[HostProfile] = None):
        self.profile = profile or NODE_RED
        self.builder = TreeBuilder(self.profile.wrapper_name)

        # Tree rules share one traversal; their order decides the order of
        # issues found on the same node. Rules keep per-call state, so each
        # call gets fresh instances.
        self.tree_rules: List[Type[TreeRule]] = [
            TopLevelReturnChecker,
            DebugOutputChecker,
            SentinelValueChecker,
        ]
        self.scope_rules: List[Type[BaseChecker]] = [UnusedDeclarationChecker]
        self.line_rules: List[Type[BaseChecker]] = [
            BlankRunChecker,
            CommentedOutCodeChecker,
            TodoCommentChecker,
        ]

    def detect(self, source: Any, level: Any = DEFAULT_LEVEL, verbose: bool = False) -> List[Issue]:
        """Return the ordered issue list for ``source``; never raises."""
        if not isinstance(source, str) or not source:
            return []
        level = clamp_level(level)

        try:
            unit = self.builder.build(source)
        except ParseFailure as exc:
            if verbose:
                logger.warning("Skipping unit that failed to parse: %s", exc)
            return []
        if verbose and unit.wrapped:
            logger.debug("Unit returns at top level; analyzed inside %s()", self.profile.wrapper_name)

        lines = split_lines(source)
        context = AnalysisContext(
            source=source,
            lines=lines,
            unit=unit,
            suppression=parse_ignore_directives(lines, self.profile.directive_prefix),
            level=level,
            profile=self.profile,
            verbose=verbose,
        )

        issues: List[Issue] = []
        active = [rule for rule in (cls() for cls in self.tree_rules) if rule.enabled(level)]
        for rule in active:
            rule.begin(context, issues)
        if active:
            for node, ancestors in walk(unit.program):
                for rule in active:
                    rule.visit(node, ancestors)

        for cls in self.scope_rules + self.line_rules:
            checker = cls()
            if checker.enabled(level):
                issues.extend(checker.check(context))

        if verbose:
            logger.debug("Found %d issue(s) at level %d", len(issues), level)
        return issues

    def detect_units(self, sources: Dict[str, str], level: Any = DEFAULT_LEVEL) -> Dict[str, List[Issue]]:
        """Analyze several units.

        Args:
            sources: Mapping of unit id to source text

        Returns:
            Dictionary mapping unit id to the issues found in that unit
        """
        return {unit_id: self.detect(source, level) for unit_id, source in sources.items()}


def detect(source: Any, level: Any = DEFAULT_LEVEL, verbose: bool = False, profile: Optional[HostProfile] = None) -> List[Issue]:
    """Analyze one code unit with a fresh detector."""
    return LeftoverDetector(profile).detect(source, level, verbose)
