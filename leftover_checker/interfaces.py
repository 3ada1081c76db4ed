"""
Collaborator contracts used by the scanner.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol, runtime_checkable

from .records import GroupQualityRecord, SystemTrendRecord, UnitQualityRecord


@dataclass(frozen=True)
class UnitSource:
    """One analyzable code unit."""
    id: str
    name: str
    source_text: str


@runtime_checkable
class UnitSourceProvider(Protocol):
    def group_ids(self) -> List[str]:
        """Identifiers of every group the provider knows."""
        ...

    def group_name(self, group_id: str) -> str:
        ...

    def units(self, group_id: str) -> Iterable[UnitSource]:
        """Every analyzable unit of ``group_id``."""
        ...


@runtime_checkable
class MetricsSink(Protocol):
    def store_unit_record(self, group_id: str, record: UnitQualityRecord) -> None:
        ...

    def store_group_record(self, record: GroupQualityRecord) -> None:
        ...

    def store_system_record(self, record: SystemTrendRecord) -> None:
        ...


@runtime_checkable
class NotificationSink(Protocol):
    def send(self, payload: Dict[str, Any]) -> bool:
        """Deliver a formatted alert payload; True when it was delivered."""
        ...


@dataclass
class AlertPayload:
    """Data behind one group alert: counts, per-unit breakdown and the message."""
    group_id: str
    group_name: str
    total_issues: int
    affected_units: int
    text: str
    units: List[Dict[str, Any]]
    instance_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group_id": self.group_id,
            "group_name": self.group_name,
            "total_issues": self.total_issues,
            "affected_units": self.affected_units,
            "text": self.text,
            "units": self.units,
            "instance_url": self.instance_url,
        }
