"""Checker service: wraps leftover_checker and maps to API models."""

from deps import Any, Dict, List, Optional, Tuple, logging

from leftover_checker.flow_source import FlowFileSource
from leftover_checker.issue import Issue
from leftover_checker.main_checker import LeftoverDetector, clamp_level
from leftover_checker.metrics_store import MetricsStore
from leftover_checker.notifier import SlackNotifier
from leftover_checker.quality_metrics import QualityMetrics
from leftover_checker.records import GroupQualityRecord, UnitSample
from leftover_checker.reporter import ReportGenerator
from leftover_checker.scanner import QualityScanner, unit_record_for

from ..config import (
    get_analyzer_verbose,
    get_detection_level,
    get_metrics_db_path,
    get_metrics_retention_days,
    get_node_red_base_url,
    get_slack_webhook_url,
)
from ..schemas import (
    CheckResponse,
    GroupRecordIn,
    GroupReportOut,
    IssueIn,
    IssueOut,
    ScanResponse,
    SystemTrendOut,
    UnitIn,
    UnitQualityOut,
    UnitScoreResponse,
)

logger = logging.getLogger(__name__)


def _issue_to_out(i: Issue) -> IssueOut:
    return IssueOut(**i.to_dict())


def _issue_from_in(i: IssueIn) -> Issue:
    """Raises ValueError for an unknown kind, variant or severity."""
    return Issue.from_dict(i.model_dump())


def _log_alert(message: str) -> None:
    logger.info("Code analysis alert:\n%s", message)


class CheckerService:
    """Wraps LeftoverDetector, QualityMetrics and the metrics store for use by the API."""

    def __init__(
        self,
        detector: Optional[LeftoverDetector] = None,
        metrics: Optional[QualityMetrics] = None,
        store: Optional[MetricsStore] = None,
        notifier: Optional[SlackNotifier] = None,
    ):
        self.detector = detector or LeftoverDetector()
        self.metrics = metrics or QualityMetrics()
        self._store = store
        self.notifier = notifier or SlackNotifier(get_slack_webhook_url(), fallback=_log_alert)

    @property
    def store(self) -> Optional[MetricsStore]:
        """Opened on first use; None when METRICS_DB_PATH is empty."""
        if self._store is None:
            path = get_metrics_db_path()
            if path:
                self._store = MetricsStore(path, get_metrics_retention_days())
        return self._store

    def _level(self, level: Optional[int]) -> int:
        return get_detection_level() if level is None else clamp_level(level)

    def analyze_code(
        self,
        code: str,
        level: Optional[int] = None,
        verbose: Optional[bool] = None,
        unit_name: str = "input",
        include_report: bool = False,
    ) -> CheckResponse:
        """Detect leftovers in one unit and score it."""
        verbose = get_analyzer_verbose() if verbose is None else verbose
        record = unit_record_for(
            code,
            self._level(level),
            unit_name=unit_name,
            detector=self.detector,
            metrics=self.metrics,
            verbose=verbose,
        )
        grade = self.metrics.get_quality_grade(record.quality_score)
        quality = UnitQualityOut(
            quality_score=record.quality_score,
            complexity_score=record.complexity_score,
            lines_of_code=record.lines_of_code,
            issue_count=record.issue_count,
            has_critical_issue=record.has_critical_issue,
            grade=grade.grade,
            grade_description=grade.description,
        )
        return CheckResponse(
            issues=[_issue_to_out(i) for i in record.issues],
            summary=ReportGenerator.generate_summary(record.issues),
            quality=quality,
            report=ReportGenerator.generate_text_report(record.issues, unit_name) if include_report else None,
        )

    def score_unit(self, issues: List[IssueIn], lines_of_code: int) -> UnitScoreResponse:
        converted = [_issue_from_in(i) for i in issues]
        score = self.metrics.calculate_unit_quality_score(converted, lines_of_code)
        return UnitScoreResponse(
            quality_score=score,
            has_critical_issue=any(self.metrics.is_critical(i.kind) for i in converted),
            grade=self.metrics.get_quality_grade(score).grade,
        )

    def score_group(self, units: List[UnitIn], group_id: str = "", group_name: str = "") -> GroupReportOut:
        samples = [
            UnitSample(
                issues=[_issue_from_in(i) for i in unit.issues],
                lines_of_code=unit.lines_of_code,
                complexity=unit.complexity,
                unit_id=unit.unit_id,
                unit_name=unit.unit_name,
            )
            for unit in units
        ]
        record = self.metrics.calculate_group_quality_metrics(samples, group_id, group_name)
        return GroupReportOut(**self.metrics.generate_group_quality_report(record).to_dict())

    def score_system(self, groups: List[GroupRecordIn]) -> SystemTrendOut:
        records = [GroupQualityRecord.from_dict(g.model_dump()) for g in groups]
        return SystemTrendOut(**self.metrics.calculate_system_quality_trends(records).to_dict())

    def scan(
        self, source: FlowFileSource, level: Optional[int] = None, persist: bool = False, notify: bool = False
    ) -> ScanResponse:
        """Scan every function node of a flow export."""
        scanner = QualityScanner(
            source,
            detector=self.detector,
            metrics=self.metrics,
            sink=self.store if persist else None,
            notifier=self.notifier if notify else None,
            instance_url=get_node_red_base_url(),
        )
        result = scanner.scan(self._level(level), persist=persist, notify=notify)
        if result.persisted:
            self.store.prune_old_data()
        return ScanResponse(**result.to_dict())

    def group_metrics(self, group_id: str, limit: int = 50) -> Optional[Tuple[GroupRecordIn, List[Dict[str, Any]]]]:
        """Latest record and history of a group; None when nothing is stored."""
        store = self.store
        if store is None:
            return None
        record = store.latest_group_record(group_id)
        if record is None:
            return None
        latest = GroupRecordIn(**record.to_dict(include_units=False))
        return latest, store.group_history(group_id, limit)
