"""Stored quality history."""

from deps import APIRouter, Query

from ..schemas import ErrorDetail, GroupMetricsResponse
from ..utils import run_group_metrics

router = APIRouter(prefix="/metrics")


@router.get(
    "/groups/{group_id}",
    response_model=GroupMetricsResponse,
    responses={404: {"model": ErrorDetail}, 503: {"model": ErrorDetail}},
)
def group_metrics(group_id: str, limit: int = Query(default=50, ge=1, le=500)) -> GroupMetricsResponse:
    """Latest record of a flow plus its history, newest first."""
    return run_group_metrics(group_id, limit)
