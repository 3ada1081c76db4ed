"""
SQLite metrics sink.

Every record is inserted with a timestamp and never overwritten, so the
history of a group can be queried over time. Old rows are removed by
:meth:`MetricsStore.prune_old_data` according to the retention period.
"""

import json
import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from .records import GroupQualityRecord, SystemTrendRecord, UnitQualityRecord

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 7
MIN_RETENTION_DAYS = 1
MAX_RETENTION_DAYS = 30

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS unit_quality (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        group_id TEXT NOT NULL,
        unit_id TEXT NOT NULL,
        unit_name TEXT NOT NULL,
        issue_count INTEGER NOT NULL,
        issues_json TEXT NOT NULL,
        lines_of_code INTEGER NOT NULL,
        complexity_score REAL NOT NULL,
        quality_score REAL NOT NULL,
        has_critical_issue INTEGER NOT NULL CHECK (has_critical_issue IN (0, 1)),
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS group_quality (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        group_id TEXT NOT NULL,
        group_name TEXT NOT NULL,
        total_issues INTEGER NOT NULL,
        units_with_issues INTEGER NOT NULL,
        units_with_critical_issues INTEGER NOT NULL,
        total_units INTEGER NOT NULL,
        issue_kinds_json TEXT NOT NULL,
        quality_score REAL NOT NULL,
        complexity_score REAL NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS system_quality (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        overall_quality REAL NOT NULL,
        technical_debt REAL NOT NULL,
        complexity REAL NOT NULL,
        group_count INTEGER NOT NULL,
        affected_units INTEGER NOT NULL,
        critical_units INTEGER NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_unit_quality_created_at ON unit_quality(created_at)",
    "CREATE INDEX IF NOT EXISTS idx_unit_quality_group ON unit_quality(group_id)",
    "CREATE INDEX IF NOT EXISTS idx_group_quality_created_at ON group_quality(created_at)",
    "CREATE INDEX IF NOT EXISTS idx_group_quality_group ON group_quality(group_id)",
    "CREATE INDEX IF NOT EXISTS idx_system_quality_created_at ON system_quality(created_at)",
)

_TABLES = ("unit_quality", "group_quality", "system_quality")


class MetricsStoreError(Exception):
    """A storage operation failed."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def clamp_retention_days(days: Any) -> int:
    try:
        value = int(days)
    except (TypeError, ValueError):
        return DEFAULT_RETENTION_DAYS
    return max(MIN_RETENTION_DAYS, min(MAX_RETENTION_DAYS, value))


class MetricsStore:
    """History-preserving store for unit, group and system quality records."""

    def __init__(self, path: Union[str, Path], retention_days: int = DEFAULT_RETENTION_DAYS):
        self.path = str(path)
        self.retention_days = clamp_retention_days(retention_days)
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(self.path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            with self._conn:
                for statement in _SCHEMA:
                    self._conn.execute(statement)
        except sqlite3.Error as exc:
            raise MetricsStoreError(f"Failed to initialize metrics database at {self.path}: {exc}") from exc

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Serialize access to the single connection; commit or roll back."""
        with self._lock:
            try:
                with self._conn:
                    yield self._conn
            except sqlite3.Error as exc:
                raise MetricsStoreError(str(exc)) from exc

    def _query(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        with self.transaction() as conn:
            return [dict(row) for row in conn.execute(sql, tuple(params)).fetchall()]

    # writes

    def store_unit_record(self, group_id: str, record: UnitQualityRecord, created_at: Optional[datetime] = None):
        with self.transaction() as conn:
            _insert_unit(conn, group_id, record, (created_at or _now()).isoformat())

    def store_group_record(self, record: GroupQualityRecord, created_at: Optional[datetime] = None):
        with self.transaction() as conn:
            _insert_group(conn, record, (created_at or _now()).isoformat())

    def store_system_record(self, record: SystemTrendRecord, created_at: Optional[datetime] = None):
        with self.transaction() as conn:
            _insert_system(conn, record, (created_at or _now()).isoformat())

    def store_scan(
        self,
        groups: Sequence[GroupQualityRecord],
        system: SystemTrendRecord,
        created_at: Optional[datetime] = None,
    ):
        """Store every record of one scan in a single transaction; all or nothing."""
        stamp = (created_at or _now()).isoformat()
        with self.transaction() as conn:
            for record in groups:
                for unit in record.unit_records:
                    _insert_unit(conn, record.group_id, unit, stamp)
                _insert_group(conn, record, stamp)
            _insert_system(conn, system, stamp)

    # reads

    def latest_group_record(self, group_id: str) -> Optional[GroupQualityRecord]:
        rows = self._query(
            "SELECT * FROM group_quality WHERE group_id = ? ORDER BY created_at DESC, id DESC LIMIT 1",
            (group_id,),
        )
        return _group_from_row(rows[0]) if rows else None

    def group_history(self, group_id: str, limit: int = 50) -> List[Dict[str, Any]]:
        rows = self._query(
            """
            SELECT created_at, quality_score, complexity_score, total_issues,
                   units_with_issues, units_with_critical_issues, total_units
            FROM group_quality WHERE group_id = ?
            ORDER BY created_at DESC, id DESC LIMIT ?
            """,
            (group_id, limit),
        )
        return rows

    def unit_history(self, group_id: str, unit_id: str, limit: int = 50) -> List[Dict[str, Any]]:
        rows = self._query(
            """
            SELECT created_at, unit_name, issue_count, issues_json, lines_of_code,
                   complexity_score, quality_score, has_critical_issue
            FROM unit_quality WHERE group_id = ? AND unit_id = ?
            ORDER BY created_at DESC, id DESC LIMIT ?
            """,
            (group_id, unit_id, limit),
        )
        for row in rows:
            row["issues"] = json.loads(row.pop("issues_json"))
            row["has_critical_issue"] = bool(row["has_critical_issue"])
        return rows

    def system_history(self, limit: int = 50) -> List[Dict[str, Any]]:
        return self._query(
            "SELECT * FROM system_quality ORDER BY created_at DESC, id DESC LIMIT ?",
            (limit,),
        )

    def get_stats(self) -> Dict[str, Any]:
        stats: Dict[str, Any] = {}
        for table in _TABLES:
            rows = self._query(f"SELECT COUNT(*) AS total, MIN(created_at) AS oldest, MAX(created_at) AS newest FROM {table}")
            stats[table] = rows[0]
        return stats

    # retention

    def set_retention_days(self, days: int) -> int:
        self.retention_days = clamp_retention_days(days)
        return self.retention_days

    def prune_old_data(self, retention_days: Optional[int] = None, now: Optional[datetime] = None) -> int:
        """Delete rows older than the retention period; returns the number removed."""
        days = clamp_retention_days(retention_days) if retention_days is not None else self.retention_days
        cutoff = ((now or _now()) - timedelta(days=days)).isoformat()
        removed = 0
        with self.transaction() as conn:
            for table in _TABLES:
                removed += conn.execute(f"DELETE FROM {table} WHERE created_at < ?", (cutoff,)).rowcount
        logger.info("Pruned %d metric row(s) older than %d day(s)", removed, days)
        return removed

    def clear_all(self):
        with self.transaction() as conn:
            for table in _TABLES:
                conn.execute(f"DELETE FROM {table}")

    def close(self):
        with self._lock:
            self._conn.close()

    def __enter__(self) -> "MetricsStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def _group_from_row(row: Dict[str, Any]) -> GroupQualityRecord:
    data = dict(row)
    data["distinct_issue_kinds"] = json.loads(data.pop("issue_kinds_json") or "[]")
    return GroupQualityRecord.from_dict(data)


def _insert_unit(conn: sqlite3.Connection, group_id: str, record: UnitQualityRecord, created_at: str):
    conn.execute(
        """
        INSERT INTO unit_quality (
            group_id, unit_id, unit_name, issue_count, issues_json, lines_of_code,
            complexity_score, quality_score, has_critical_issue, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            group_id,
            record.unit_id,
            record.unit_name,
            record.issue_count,
            json.dumps([issue.to_dict() for issue in record.issues]),
            record.lines_of_code,
            record.complexity_score,
            record.quality_score,
            int(record.has_critical_issue),
            created_at,
        ),
    )


def _insert_group(conn: sqlite3.Connection, record: GroupQualityRecord, created_at: str):
    conn.execute(
        """
        INSERT INTO group_quality (
            group_id, group_name, total_issues, units_with_issues,
            units_with_critical_issues, total_units, issue_kinds_json,
            quality_score, complexity_score, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            record.group_id,
            record.group_name,
            record.total_issues,
            record.units_with_issues,
            record.units_with_critical_issues,
            record.total_units,
            json.dumps(list(record.distinct_issue_kinds)),
            record.quality_score,
            record.complexity_score,
            created_at,
        ),
    )


def _insert_system(conn: sqlite3.Connection, record: SystemTrendRecord, created_at: str):
    conn.execute(
        """
        INSERT INTO system_quality (
            overall_quality, technical_debt, complexity, group_count,
            affected_units, critical_units, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (
            record.overall_quality,
            record.technical_debt,
            record.complexity,
            record.group_count,
            record.affected_units,
            record.critical_units,
            created_at,
        ),
    )
