"""
Issue data models for the debugging-leftover checker.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Severity(Enum):
    """Issue severity levels."""
    WARNING = "warning"
    INFO = "info"


class ImpactLevel(Enum):
    """How strongly an issue kind weighs on the quality score."""
    CRITICAL = "critical"
    IMPORTANT = "important"
    MINOR = "minor"


class IssueKind(Enum):
    """Closed set of leftover kinds the detector reports."""
    TOP_LEVEL_EMPTY_RETURN = "top-level-empty-return"
    CONSOLE_OUTPUT_CALL = "console-output-call"
    HOST_WARN_CALL = "host-warn-call"
    DEBUGGER_STATEMENT = "debugger-statement"
    UNUSED_DECLARATION = "unused-declaration"
    TODO_OR_FIXME_COMMENT = "todo-or-fixme-comment"
    HARDCODED_SENTINEL_VALUE = "hardcoded-sentinel-value"
    EXCESSIVE_BLANK_RUN = "excessive-blank-run"
    COMMENTED_OUT_CODE_RUN = "commented-out-code-run"

    @property
    def default_severity(self) -> Severity:
        return _DEFAULT_SEVERITY[self]

    @property
    def level(self) -> int:
        """Lowest detection level at which the kind is reported."""
        return _DETECTION_LEVEL[self]


_DEFAULT_SEVERITY = {
    IssueKind.TOP_LEVEL_EMPTY_RETURN: Severity.WARNING,
    IssueKind.CONSOLE_OUTPUT_CALL: Severity.INFO,
    IssueKind.HOST_WARN_CALL: Severity.INFO,
    IssueKind.DEBUGGER_STATEMENT: Severity.WARNING,
    IssueKind.UNUSED_DECLARATION: Severity.INFO,
    IssueKind.TODO_OR_FIXME_COMMENT: Severity.INFO,
    IssueKind.HARDCODED_SENTINEL_VALUE: Severity.WARNING,
    IssueKind.EXCESSIVE_BLANK_RUN: Severity.INFO,
    IssueKind.COMMENTED_OUT_CODE_RUN: Severity.INFO,
}

_DETECTION_LEVEL = {
    IssueKind.TOP_LEVEL_EMPTY_RETURN: 1,
    IssueKind.CONSOLE_OUTPUT_CALL: 2,
    IssueKind.HOST_WARN_CALL: 2,
    IssueKind.DEBUGGER_STATEMENT: 2,
    IssueKind.UNUSED_DECLARATION: 2,
    IssueKind.TODO_OR_FIXME_COMMENT: 2,
    IssueKind.COMMENTED_OUT_CODE_RUN: 2,
    IssueKind.HARDCODED_SENTINEL_VALUE: 3,
    IssueKind.EXCESSIVE_BLANK_RUN: 3,
}


class SentinelVariant(Enum):
    """Sub-kinds of hardcoded-sentinel-value."""
    TEST = "test"
    DEBUG = "debug"
    TEMP = "temp"
    NUMBER = "number"


@dataclass(frozen=True)
class SourcePosition:
    """1-based line and column."""
    line: int
    column: int


@dataclass(frozen=True)
class SourceRange:
    """Start and end positions of a construct."""
    start: SourcePosition
    end: SourcePosition

    @classmethod
    def from_lines(cls, line: int, column: int, end_line: int, end_column: int) -> "SourceRange":
        return cls(SourcePosition(line, column), SourcePosition(end_line, end_column))


@dataclass(frozen=True)
class Issue:
    """A single debugging leftover found in a code unit."""
    kind: IssueKind
    message: str
    range: SourceRange
    severity: Severity
    variant: Optional[SentinelVariant] = None

    @property
    def line(self) -> int:
        return self.range.start.line

    @property
    def column(self) -> int:
        return self.range.start.column

    @property
    def end_line(self) -> int:
        return self.range.end.line

    @property
    def end_column(self) -> int:
        return self.range.end.column

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping for JSON payloads and storage."""
        return {
            "kind": self.kind.value,
            "variant": self.variant.value if self.variant else None,
            "message": self.message,
            "severity": self.severity.value,
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Issue":
        """Rebuild an issue from :meth:`to_dict` output."""
        kind = IssueKind(data["kind"])
        line = int(data.get("line", 1))
        column = int(data.get("column", 1))
        variant = data.get("variant")
        severity = data.get("severity")
        return cls(
            kind=kind,
            message=data.get("message", ""),
            range=SourceRange.from_lines(
                line,
                column,
                int(data.get("end_line") or line),
                int(data.get("end_column") or column),
            ),
            severity=Severity(severity) if severity else kind.default_severity,
            variant=SentinelVariant(variant) if variant else None,
        )
