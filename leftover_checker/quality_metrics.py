"""
Quality scoring for code units, groups and the whole system.

Scores are 0-100 and rounded half up to two decimals. Critical issue kinds
(empty top-level returns and debugger statements) cap the achievable score at
every level of aggregation.
"""

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .issue import ImpactLevel, Issue, IssueKind
from .records import (
    GroupQualityRecord,
    GroupQualityReport,
    IssueImpact,
    QualityGrade,
    Recommendation,
    SystemTrendRecord,
    UnitQualityRecord,
    UnitSample,
)
from .utils import is_blank, is_line_comment, js_round

DEFAULT_WEIGHTS: Dict[IssueKind, float] = {
    # critical
    IssueKind.TOP_LEVEL_EMPTY_RETURN: 60,
    IssueKind.DEBUGGER_STATEMENT: 50,
    # important
    IssueKind.HOST_WARN_CALL: 30,
    IssueKind.CONSOLE_OUTPUT_CALL: 25,
    IssueKind.TODO_OR_FIXME_COMMENT: 15,
    IssueKind.UNUSED_DECLARATION: 10,
    # minor
    IssueKind.HARDCODED_SENTINEL_VALUE: 12,
    IssueKind.COMMENTED_OUT_CODE_RUN: 3,
    IssueKind.EXCESSIVE_BLANK_RUN: 3,
}
FALLBACK_WEIGHT = 1.0

CRITICAL_MULTIPLIER = 1.5
CRITICAL_CAP = 40
MULTI_CRITICAL_CAP = 15
SIZE_SCALE_LINES = 150
MAX_SIZE_MULTIPLIER = 2.5

COMPLEXITY_FACTORS = {
    "lines_of_code": 0.1,
    "cyclomatic": 2.0,
    "nesting_depth": 1.5,
    "function_count": 0.5,
}

# JavaScript word boundaries: ASCII word characters, Unicode whitespace.
_W = r"[A-Za-z0-9_]"

CYCLOMATIC_PATTERNS = [
    re.compile(p)
    for p in (
        rf"(?<!{_W})if\s*\(",
        rf"(?<!{_W})while\s*\(",
        rf"(?<!{_W})for\s*\(",
        rf"(?<!{_W})catch\s*\(",
        rf"(?<!{_W})switch\s*\(",
        rf"(?<!{_W})case\s+",
        r"&&|\|\|",
        r"\?.*:",
    )
]
NAMED_FUNCTION_PATTERN = re.compile(rf"function\s+{_W}+\s*\(")

_CRITICAL_KINDS = frozenset({IssueKind.TOP_LEVEL_EMPTY_RETURN, IssueKind.DEBUGGER_STATEMENT})
_IMPORTANT_KINDS = frozenset({
    IssueKind.CONSOLE_OUTPUT_CALL,
    IssueKind.HOST_WARN_CALL,
    IssueKind.UNUSED_DECLARATION,
    IssueKind.TODO_OR_FIXME_COMMENT,
})

_IMPACTS = {
    ImpactLevel.CRITICAL: IssueImpact(ImpactLevel.CRITICAL, "#dc2626", 1),
    ImpactLevel.IMPORTANT: IssueImpact(ImpactLevel.IMPORTANT, "#f59e0b", 2),
    ImpactLevel.MINOR: IssueImpact(ImpactLevel.MINOR, "#3b82f6", 3),
}

# (minimum score, grade) in descending order
GRADE_TABLE = [
    (98, QualityGrade("A+", "#22c55e", "Excellent")),
    (95, QualityGrade("A", "#16a34a", "Very Good")),
    (90, QualityGrade("A-", "#65a30d", "Good")),
    (85, QualityGrade("B+", "#84cc16", "Above Average")),
    (80, QualityGrade("B", "#eab308", "Average")),
    (70, QualityGrade("B-", "#f59e0b", "Below Average")),
    (60, QualityGrade("C+", "#f97316", "Fair")),
    (50, QualityGrade("C", "#ea580c", "Poor")),
    (35, QualityGrade("D", "#dc2626", "Very Poor")),
    (20, QualityGrade("D-", "#b91c1c", "Critical")),
]
FAILING_GRADE = QualityGrade("F", "#991b1b", "Failing")


def _kind_of(kind: Any) -> Optional[IssueKind]:
    if isinstance(kind, IssueKind):
        return kind
    try:
        return IssueKind(kind)
    except ValueError:
        return None


class QualityMetrics:
    """Weighted, capped quality scores."""

    def __init__(self, weights: Optional[Mapping[IssueKind, float]] = None):
        self.weights: Dict[IssueKind, float] = dict(DEFAULT_WEIGHTS)
        if weights:
            self.weights.update(weights)

    # issue classification

    def get_issue_impact(self, kind: Any) -> IssueImpact:
        """Impact tier of an issue kind (enum member or its string value)."""
        resolved = _kind_of(kind)
        if resolved in _CRITICAL_KINDS:
            return _IMPACTS[ImpactLevel.CRITICAL]
        if resolved in _IMPORTANT_KINDS:
            return _IMPACTS[ImpactLevel.IMPORTANT]
        return _IMPACTS[ImpactLevel.MINOR]

    def is_critical(self, kind: Any) -> bool:
        return self.get_issue_impact(kind).level == ImpactLevel.CRITICAL

    def weight_of(self, kind: IssueKind) -> float:
        return self.weights.get(kind, FALLBACK_WEIGHT)

    # unit level

    def calculate_unit_quality_score(self, issues: Sequence[Issue], lines_of_code: int = 0) -> float:
        """0-100 score of one unit."""
        base_score = 100.0
        deduction = 0.0
        critical_count = 0

        for issue in issues:
            weight = self.weight_of(issue.kind)
            if self.is_critical(issue.kind):
                critical_count += 1
                deduction += weight * CRITICAL_MULTIPLIER
            else:
                deduction += weight

        if critical_count:
            base_score = min(base_score, CRITICAL_CAP)
        if critical_count >= 2:
            base_score = min(base_score, MULTI_CRITICAL_CAP)

        size_multiplier = min(1 + max(lines_of_code, 0) / SIZE_SCALE_LINES, MAX_SIZE_MULTIPLIER)
        deduction *= size_multiplier

        return js_round(max(0.0, base_score - deduction))

    def calculate_complexity_score(self, source: Any) -> float:
        """Heuristic complexity of a unit's source text."""
        if not isinstance(source, str) or not source:
            return 0.0

        lines = source.split("\n")
        code_lines = sum(1 for line in lines if not is_blank(line) and not is_line_comment(line))
        complexity = code_lines * COMPLEXITY_FACTORS["lines_of_code"]

        for pattern in CYCLOMATIC_PATTERNS:
            complexity += len(pattern.findall(source)) * COMPLEXITY_FACTORS["cyclomatic"]

        max_nesting = 0
        nesting = 0
        for char in source:
            if char == "{":
                nesting += 1
                max_nesting = max(max_nesting, nesting)
            elif char == "}":
                nesting -= 1
        complexity += max_nesting * COMPLEXITY_FACTORS["nesting_depth"]

        complexity += len(NAMED_FUNCTION_PATTERN.findall(source)) * COMPLEXITY_FACTORS["function_count"]
        return js_round(complexity)

    def build_unit_record(self, sample: UnitSample) -> UnitQualityRecord:
        issues = list(sample.issues)
        return UnitQualityRecord(
            unit_id=sample.unit_id,
            unit_name=sample.unit_name,
            issues=issues,
            lines_of_code=sample.lines_of_code,
            complexity_score=sample.complexity,
            quality_score=self.calculate_unit_quality_score(issues, sample.lines_of_code),
            has_critical_issue=any(self.is_critical(i.kind) for i in issues),
        )

    # group level

    def calculate_group_quality_metrics(
        self,
        units: Iterable[UnitSample],
        group_id: str = "",
        group_name: str = "",
    ) -> GroupQualityRecord:
        """Aggregate unit scores with penalties for critical and faulty units."""
        records = [self.build_unit_record(unit) for unit in units]
        total_units = len(records)
        total_issues = sum(r.issue_count for r in records)
        faulty = [r for r in records if r.issues]
        critical = [r for r in faulty if r.has_critical_issue]

        kinds: List[str] = []
        for record in faulty:
            for issue in record.issues:
                if issue.kind.value not in kinds:
                    kinds.append(issue.kind.value)

        score = 100.0
        mean_complexity = 0.0
        if total_units:
            mean_complexity = sum(r.complexity_score for r in records) / total_units
            score = sum(r.quality_score for r in records) / total_units
            score -= len(critical) / total_units * 60
            score -= len(faulty) / total_units * 25
            if faulty:
                score -= min(mean_complexity / 1.5, 40)
        if critical:
            score = min(score, 50)
        if total_units and len(faulty) / total_units > 0.5:
            score = min(score, 30)

        return GroupQualityRecord(
            group_id=group_id,
            group_name=group_name,
            total_issues=total_issues,
            units_with_issues=len(faulty),
            units_with_critical_issues=len(critical),
            total_units=total_units,
            distinct_issue_kinds=kinds,
            quality_score=max(0.0, js_round(score)),
            complexity_score=js_round(mean_complexity),
            unit_records=records,
        )

    # system level

    def calculate_system_quality_trends(self, groups: Sequence[GroupQualityRecord]) -> SystemTrendRecord:
        """Unit-weighted aggregate of group scores with system-wide caps."""
        if not groups:
            return SystemTrendRecord(100.0, 0.0, 0.0, 0, 0, 0)

        total_units = sum(g.total_units for g in groups)
        total_issues = sum(g.total_issues for g in groups)
        affected = sum(g.units_with_issues for g in groups)
        critical = sum(g.units_with_critical_issues for g in groups)

        overall = 100.0
        technical_debt = 0.0
        complexity = 0.0
        if total_units:
            overall = sum(g.quality_score * g.total_units for g in groups) / total_units
            overall -= critical / total_units * 70
            if affected / total_units > 0.25:
                overall = min(overall, 60)
            if critical:
                overall = min(overall, 65)

            technical_debt = min(total_issues / total_units * 35, 100)
            technical_debt = min(technical_debt + critical / total_units * 40, 100)
            complexity = sum(g.complexity_score * g.total_units for g in groups) / total_units

        return SystemTrendRecord(
            overall_quality=max(0.0, js_round(overall)),
            technical_debt=js_round(technical_debt),
            complexity=js_round(complexity),
            group_count=len(groups),
            affected_units=affected,
            critical_units=critical,
        )

    # presentation

    def get_quality_grade(self, score: float) -> QualityGrade:
        for threshold, grade in GRADE_TABLE:
            if score >= threshold:
                return grade
        return FAILING_GRADE

    def generate_group_quality_report(self, record: GroupQualityRecord) -> GroupQualityReport:
        """Grade, health percentage and recommendations for a group."""
        impacts = [self.get_issue_impact(kind).level for kind in record.distinct_issue_kinds]
        healthy = record.total_units - record.units_with_issues
        return GroupQualityReport(
            record=record,
            grade=self.get_quality_grade(record.quality_score),
            critical_issues=impacts.count(ImpactLevel.CRITICAL),
            warning_issues=impacts.count(ImpactLevel.IMPORTANT),
            health_percentage=int(js_round(healthy / max(1, record.total_units) * 100, 0)),
            recommendations=self.generate_recommendations(record),
        )

    def generate_recommendations(self, record: GroupQualityRecord) -> List[Recommendation]:
        if record.total_issues == 0:
            return [Recommendation(
                "success",
                "Excellent! No code quality issues detected.",
                "Maintain current coding standards",
            )]

        kinds = set(record.distinct_issue_kinds)
        recommendations = []
        if IssueKind.TOP_LEVEL_EMPTY_RETURN.value in kinds:
            recommendations.append(Recommendation(
                "critical",
                "Remove top-level return statements",
                "Refactor functions to use proper control flow",
            ))
        if IssueKind.DEBUGGER_STATEMENT.value in kinds:
            recommendations.append(Recommendation(
                "critical",
                "Remove debugger statements",
                "Clean up debugging code before deployment",
            ))
        if IssueKind.CONSOLE_OUTPUT_CALL.value in kinds:
            recommendations.append(Recommendation(
                "warning",
                "Replace console.log with proper logging",
                "Use node.log() or remove debugging statements",
            ))
        if IssueKind.UNUSED_DECLARATION.value in kinds:
            recommendations.append(Recommendation(
                "info",
                "Remove unused variables",
                "Clean up variable declarations to improve readability",
            ))
        if record.complexity_score > 20:
            recommendations.append(Recommendation(
                "warning",
                "High code complexity detected",
                "Consider breaking down complex functions into smaller ones",
            ))
        if record.total_units and record.units_with_issues / record.total_units > 0.5:
            recommendations.append(Recommendation(
                "warning",
                "Many nodes have quality issues",
                "Focus on systematic code review and refactoring",
            ))
        return recommendations


_default = QualityMetrics()


def score_unit(issues: Sequence[Issue], lines_of_code: int) -> float:
    return _default.calculate_unit_quality_score(issues, lines_of_code)


def complexity_of(source: Any) -> float:
    return _default.calculate_complexity_score(source)


def score_group(units: Iterable[UnitSample], group_id: str = "", group_name: str = "") -> GroupQualityRecord:
    return _default.calculate_group_quality_metrics(units, group_id, group_name)


def score_system(groups: Sequence[GroupQualityRecord]) -> SystemTrendRecord:
    return _default.calculate_system_quality_trends(groups)


def quality_grade(score: float) -> QualityGrade:
    return _default.get_quality_grade(score)
