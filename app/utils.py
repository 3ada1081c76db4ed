"""Utility functions for the API."""

from deps import HTTPException, Path

from leftover_checker.flow_source import FlowFileSource
from leftover_checker.metrics_store import MetricsStoreError

from .schemas import (
    CheckRequest,
    CheckResponse,
    GroupMetricsResponse,
    GroupReportOut,
    GroupScoreRequest,
    ScanRequest,
    ScanResponse,
    SystemScoreRequest,
    SystemTrendOut,
    UnitScoreRequest,
    UnitScoreResponse,
)
from .services import CheckerService

checker_svc = CheckerService()


def run_check(req: CheckRequest) -> CheckResponse:
    """Analyze and score one unit of code."""
    return checker_svc.analyze_code(
        req.code,
        level=req.detection_level,
        verbose=req.verbose,
        unit_name=req.unit_name,
        include_report=req.include_report,
    )


def run_score_unit(req: UnitScoreRequest) -> UnitScoreResponse:
    try:
        return checker_svc.score_unit(req.issues, req.lines_of_code)
    except ValueError as e:
        raise HTTPException(400, f"Invalid issue: {e}")


def run_score_group(req: GroupScoreRequest) -> GroupReportOut:
    try:
        return checker_svc.score_group(req.units, req.group_id, req.group_name)
    except ValueError as e:
        raise HTTPException(400, f"Invalid issue: {e}")


def run_score_system(req: SystemScoreRequest) -> SystemTrendOut:
    return checker_svc.score_system(req.groups)


def load_flow_source(req: ScanRequest) -> FlowFileSource:
    """Flow export from flows_path or inline flows."""
    if req.flows_path:
        p = Path(req.flows_path)
        if not p.is_absolute():
            raise HTTPException(400, "flows_path must be absolute")
        if not p.exists():
            raise HTTPException(404, f"File not found: {req.flows_path}")
        try:
            return FlowFileSource.from_path(p)
        except (ValueError, OSError) as e:
            raise HTTPException(400, f"Could not read flow export: {e}")
    if req.flows is not None:
        return FlowFileSource.from_data(req.flows)
    raise HTTPException(400, "Provide either flows_path or flows.")


def run_scan(req: ScanRequest) -> ScanResponse:
    source = load_flow_source(req)
    try:
        return checker_svc.scan(source, req.detection_level, persist=req.persist, notify=req.notify)
    except MetricsStoreError as e:
        raise HTTPException(503, f"Metrics database unavailable: {e}")


def run_group_metrics(group_id: str, limit: int = 50) -> GroupMetricsResponse:
    try:
        if checker_svc.store is None:
            raise HTTPException(503, "Metrics persistence is disabled (METRICS_DB_PATH is empty)")
        found = checker_svc.group_metrics(group_id, limit)
    except MetricsStoreError as e:
        raise HTTPException(503, f"Metrics database unavailable: {e}")
    if found is None:
        raise HTTPException(404, f"No quality records for group: {group_id}")
    latest, history = found
    return GroupMetricsResponse(latest=latest, history=history)
