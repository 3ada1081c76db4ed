"""Scan route (whole flow export)."""

from deps import APIRouter

from ..schemas import ErrorDetail, ScanRequest, ScanResponse
from ..utils import run_scan

router = APIRouter()


@router.post(
    "/scan",
    response_model=ScanResponse,
    responses={400: {"model": ErrorDetail}, 404: {"model": ErrorDetail}, 503: {"model": ErrorDetail}},
)
def scan(req: ScanRequest) -> ScanResponse:
    """Analyze every function node of a flows.json export, grouped by tab."""
    return run_scan(req)
