"""
Quality records produced by the scoring engine.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from .issue import ImpactLevel, Issue


@dataclass
class UnitQualityRecord:
    """Score of one code unit."""
    unit_id: str
    unit_name: str
    issues: List[Issue]
    lines_of_code: int
    complexity_score: float
    quality_score: float
    has_critical_issue: bool

    @property
    def issue_count(self) -> int:
        return len(self.issues)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit_id": self.unit_id,
            "unit_name": self.unit_name,
            "issues": [issue.to_dict() for issue in self.issues],
            "issue_count": self.issue_count,
            "lines_of_code": self.lines_of_code,
            "complexity_score": self.complexity_score,
            "quality_score": self.quality_score,
            "has_critical_issue": self.has_critical_issue,
        }


@dataclass
class GroupQualityRecord:
    """Aggregate over the units of one group (flow)."""
    group_id: str
    group_name: str
    total_issues: int
    units_with_issues: int
    units_with_critical_issues: int
    total_units: int
    distinct_issue_kinds: List[str]
    quality_score: float
    complexity_score: float
    unit_records: List[UnitQualityRecord] = field(default_factory=list)

    def to_dict(self, include_units: bool = True) -> Dict[str, Any]:
        data = {
            "group_id": self.group_id,
            "group_name": self.group_name,
            "total_issues": self.total_issues,
            "units_with_issues": self.units_with_issues,
            "units_with_critical_issues": self.units_with_critical_issues,
            "total_units": self.total_units,
            "distinct_issue_kinds": list(self.distinct_issue_kinds),
            "quality_score": self.quality_score,
            "complexity_score": self.complexity_score,
        }
        if include_units:
            data["unit_records"] = [unit.to_dict() for unit in self.unit_records]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GroupQualityRecord":
        """Rebuild a group record from stored or posted fields (unit records are not restored)."""
        return cls(
            group_id=str(data.get("group_id", "")),
            group_name=str(data.get("group_name", "")),
            total_issues=int(data.get("total_issues", 0)),
            units_with_issues=int(data.get("units_with_issues", 0)),
            units_with_critical_issues=int(data.get("units_with_critical_issues", 0)),
            total_units=int(data.get("total_units", 0)),
            distinct_issue_kinds=list(data.get("distinct_issue_kinds") or []),
            quality_score=float(data.get("quality_score", 100)),
            complexity_score=float(data.get("complexity_score", 0)),
        )


@dataclass
class SystemTrendRecord:
    """Aggregate over every group of the system."""
    overall_quality: float
    technical_debt: float
    complexity: float
    group_count: int
    affected_units: int
    critical_units: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class QualityGrade:
    grade: str
    color: str
    description: str


@dataclass(frozen=True)
class IssueImpact:
    """Severity classification of an issue kind for scoring and alerts."""
    level: ImpactLevel
    color: str
    priority: int


@dataclass(frozen=True)
class Recommendation:
    type: str
    message: str
    action: str


@dataclass
class GroupQualityReport:
    """A group record with its grade, health and recommendations."""
    record: GroupQualityRecord
    grade: QualityGrade
    critical_issues: int
    warning_issues: int
    health_percentage: int
    recommendations: List[Recommendation]

    def to_dict(self) -> Dict[str, Any]:
        data = self.record.to_dict()
        data.update({
            "grade": asdict(self.grade),
            "critical_issues": self.critical_issues,
            "warning_issues": self.warning_issues,
            "health_percentage": self.health_percentage,
            "recommendations": [asdict(r) for r in self.recommendations],
        })
        return data


@dataclass
class UnitSample:
    """Inputs the group score needs for one unit."""
    issues: List[Issue]
    lines_of_code: int
    complexity: float = 0.0
    unit_id: str = ""
    unit_name: str = ""
