"""Scoring routes for already-detected issues."""

from deps import APIRouter

from ..schemas import (
    ErrorDetail,
    GroupReportOut,
    GroupScoreRequest,
    SystemScoreRequest,
    SystemTrendOut,
    UnitScoreRequest,
    UnitScoreResponse,
)
from ..utils import run_score_group, run_score_system, run_score_unit

router = APIRouter(prefix="/score")


@router.post("/unit", response_model=UnitScoreResponse, responses={400: {"model": ErrorDetail}})
def score_unit(req: UnitScoreRequest) -> UnitScoreResponse:
    return run_score_unit(req)


@router.post("/group", response_model=GroupReportOut, responses={400: {"model": ErrorDetail}})
def score_group(req: GroupScoreRequest) -> GroupReportOut:
    """Aggregate unit results into a flow record with grade and recommendations."""
    return run_score_group(req)


@router.post("/system", response_model=SystemTrendOut)
def score_system(req: SystemScoreRequest) -> SystemTrendOut:
    return run_score_system(req)
