"""
Scans every unit of every group and aggregates the results.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .interfaces import MetricsSink, NotificationSink, UnitSource, UnitSourceProvider
from .main_checker import DEFAULT_LEVEL, LeftoverDetector, clamp_level
from .metrics_store import MetricsStore
from .notifier import build_alert_payload
from .quality_metrics import QualityMetrics
from .records import GroupQualityRecord, GroupQualityReport, SystemTrendRecord, UnitQualityRecord, UnitSample

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    reports: List[GroupQualityReport] = field(default_factory=list)
    system: Optional[SystemTrendRecord] = None
    persisted: bool = False
    notified: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "groups": [report.to_dict() for report in self.reports],
            "system": self.system.to_dict() if self.system else None,
            "persisted": self.persisted,
            "notified": list(self.notified),
        }


class QualityScanner:
    """Provider -> unit records -> group records -> system record."""

    def __init__(
        self,
        provider: UnitSourceProvider,
        detector: Optional[LeftoverDetector] = None,
        metrics: Optional[QualityMetrics] = None,
        sink: Optional[MetricsSink] = None,
        notifier: Optional[NotificationSink] = None,
        instance_url: Optional[str] = None,
    ):
        self.provider = provider
        self.detector = detector or LeftoverDetector()
        self.metrics = metrics or QualityMetrics()
        self.sink = sink
        self.notifier = notifier
        self.instance_url = instance_url

    def scan_unit(self, unit: UnitSource, level: int = DEFAULT_LEVEL) -> UnitSample:
        source = unit.source_text
        return UnitSample(
            issues=self.detector.detect(source, level),
            lines_of_code=len(source.split("\n")),
            complexity=self.metrics.calculate_complexity_score(source),
            unit_id=unit.id,
            unit_name=unit.name,
        )

    def scan_group(self, group_id: str, level: int = DEFAULT_LEVEL) -> GroupQualityRecord:
        samples = [self.scan_unit(unit, level) for unit in self.provider.units(group_id)]
        return self.metrics.calculate_group_quality_metrics(
            samples, group_id, self.provider.group_name(group_id)
        )

    def scan(self, level: Any = DEFAULT_LEVEL, persist: bool = True, notify: bool = True) -> ScanResult:
        """Scan all groups; storage and notification failures are logged, never raised."""
        level = clamp_level(level)
        result = ScanResult()
        groups: List[GroupQualityRecord] = []

        for group_id in self.provider.group_ids():
            record = self.scan_group(group_id, level)
            groups.append(record)
            result.reports.append(self.metrics.generate_group_quality_report(record))
            logger.info(
                "Scanned group %s: %d unit(s), %d issue(s), score %.2f",
                record.group_name, record.total_units, record.total_issues, record.quality_score,
            )
            if notify and record.total_issues > 0:
                if self._notify(record):
                    result.notified.append(record.group_id)

        result.system = self.metrics.calculate_system_quality_trends(groups)
        if persist and self.sink is not None:
            result.persisted = self._persist(groups, result.system)
        return result

    def _persist(self, groups: List[GroupQualityRecord], system: SystemTrendRecord) -> bool:
        try:
            if isinstance(self.sink, MetricsStore):
                self.sink.store_scan(groups, system)
            else:
                for record in groups:
                    for unit in record.unit_records:
                        self.sink.store_unit_record(record.group_id, unit)
                    self.sink.store_group_record(record)
                self.sink.store_system_record(system)
        except Exception as exc:
            logger.error("Failed to store quality metrics in %s: %s", type(self.sink).__name__, exc)
            return False
        return True

    def _notify(self, record: GroupQualityRecord) -> bool:
        if self.notifier is None:
            return False
        payload = build_alert_payload(record, self.instance_url)
        try:
            return bool(self.notifier.send(payload.to_dict()))
        except Exception as exc:
            logger.warning("Failed to notify for group %s: %s", record.group_id, exc)
            return False


def unit_record_for(
    source: str,
    level: Any = DEFAULT_LEVEL,
    unit_id: str = "",
    unit_name: str = "",
    detector: Optional[LeftoverDetector] = None,
    metrics: Optional[QualityMetrics] = None,
    verbose: bool = False,
) -> UnitQualityRecord:
    """Detect and score a single unit of source text."""
    detector = detector or LeftoverDetector()
    metrics = metrics or QualityMetrics()
    text = source if isinstance(source, str) else ""
    return metrics.build_unit_record(UnitSample(
        issues=detector.detect(text, level, verbose),
        lines_of_code=len(text.split("\n")) if text else 0,
        complexity=metrics.calculate_complexity_score(text),
        unit_id=unit_id,
        unit_name=unit_name,
    ))
