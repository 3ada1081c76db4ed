"""Pydantic request/response models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# --- Issue ---


class IssueOut(BaseModel):
    """Single debugging leftover."""

    kind: str = Field(..., description="Issue kind, e.g. top-level-empty-return")
    variant: Optional[str] = Field(default=None, description="Sentinel variant for hardcoded-sentinel-value")
    message: str
    severity: str = Field(..., description="warning or info")
    line: int
    column: int
    end_line: int
    end_column: int


class IssueIn(BaseModel):
    """Issue as posted to the scoring endpoints. Only the kind is required."""

    kind: str
    variant: Optional[str] = None
    message: str = ""
    severity: Optional[str] = None
    line: int = 1
    column: int = 1
    end_line: Optional[int] = None
    end_column: Optional[int] = None


# --- Check ---


class CheckRequest(BaseModel):
    """Request body for POST /check."""

    code: str = Field(..., description="Function node source to analyze")
    detection_level: Optional[int] = Field(default=None, description="1 (critical only) to 3 (everything)")
    verbose: Optional[bool] = Field(default=None, description="Log parse failures and return decisions")
    unit_name: str = Field(default="input", description="Name used in the text report")
    include_report: bool = Field(default=False, description="Also return a plain-text report")


class UnitQualityOut(BaseModel):
    """Quality of one analyzed unit."""

    quality_score: float
    complexity_score: float
    lines_of_code: int
    issue_count: int
    has_critical_issue: bool
    grade: str
    grade_description: str


class CheckResponse(BaseModel):
    """Response for POST /check."""

    issues: List[IssueOut] = Field(default_factory=list)
    summary: Dict[str, int] = Field(default_factory=dict, description="Issue count by kind")
    quality: UnitQualityOut
    report: Optional[str] = None


# --- Scoring ---


class UnitScoreRequest(BaseModel):
    """Request body for POST /score/unit."""

    issues: List[IssueIn] = Field(default_factory=list)
    lines_of_code: int = Field(default=0, ge=0)


class UnitScoreResponse(BaseModel):
    quality_score: float
    has_critical_issue: bool
    grade: str


class UnitIn(BaseModel):
    """One unit of a group to score."""

    issues: List[IssueIn] = Field(default_factory=list)
    lines_of_code: int = Field(default=0, ge=0)
    complexity: float = Field(default=0.0, ge=0)
    unit_id: str = ""
    unit_name: str = ""


class GroupScoreRequest(BaseModel):
    """Request body for POST /score/group."""

    units: List[UnitIn] = Field(default_factory=list)
    group_id: str = ""
    group_name: str = ""


class GroupRecordIn(BaseModel):
    """A group record as returned by /score/group or /scan."""

    group_id: str = ""
    group_name: str = ""
    total_issues: int = 0
    units_with_issues: int = 0
    units_with_critical_issues: int = 0
    total_units: int = 0
    distinct_issue_kinds: List[str] = Field(default_factory=list)
    quality_score: float = 100
    complexity_score: float = 0


class SystemScoreRequest(BaseModel):
    """Request body for POST /score/system."""

    groups: List[GroupRecordIn] = Field(default_factory=list)


class GradeOut(BaseModel):
    grade: str
    color: str
    description: str


class RecommendationOut(BaseModel):
    type: str
    message: str
    action: str


class UnitRecordOut(BaseModel):
    unit_id: str
    unit_name: str
    issues: List[IssueOut] = Field(default_factory=list)
    issue_count: int
    lines_of_code: int
    complexity_score: float
    quality_score: float
    has_critical_issue: bool


class GroupReportOut(BaseModel):
    """Group record plus grade, health and recommendations."""

    group_id: str
    group_name: str
    total_issues: int
    units_with_issues: int
    units_with_critical_issues: int
    total_units: int
    distinct_issue_kinds: List[str] = Field(default_factory=list)
    quality_score: float
    complexity_score: float
    unit_records: List[UnitRecordOut] = Field(default_factory=list)
    grade: GradeOut
    critical_issues: int
    warning_issues: int
    health_percentage: int
    recommendations: List[RecommendationOut] = Field(default_factory=list)


class SystemTrendOut(BaseModel):
    overall_quality: float
    technical_debt: float
    complexity: float
    group_count: int
    affected_units: int
    critical_units: int


# --- Scan ---


class ScanRequest(BaseModel):
    """Either flows_path (absolute path to flows.json on the server) or flows (inline export)."""

    flows_path: Optional[str] = None
    flows: Optional[List[Dict[str, Any]]] = None
    detection_level: Optional[int] = None
    persist: bool = Field(default=False, description="Store records in the metrics database")
    notify: bool = Field(default=False, description="Send an alert for every group with issues")


class ScanResponse(BaseModel):
    groups: List[GroupReportOut] = Field(default_factory=list)
    system: SystemTrendOut
    persisted: bool = False
    notified: List[str] = Field(default_factory=list)


# --- Metrics ---


class GroupMetricsResponse(BaseModel):
    """Latest stored record of a group and its history, newest first."""

    latest: GroupRecordIn
    history: List[Dict[str, Any]] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """Error response detail."""

    detail: str = Field(..., description="Error message")
