"""Check route (leftover detection for one function body)."""

from deps import APIRouter, HTMLResponse

from ..schemas import CheckRequest, CheckResponse
from ..templates import render_template
from ..utils import run_check

router = APIRouter()


@router.get("/check", response_class=HTMLResponse)
def check_get() -> str:
    """GET /check: usage page. Use POST with JSON body to analyze code."""
    return render_template("check.html", title="Check")


@router.post("/check", response_model=CheckResponse)
def check(req: CheckRequest) -> CheckResponse:
    """Detect debugging leftovers and score the unit."""
    return run_check(req)
