"""Route handlers."""

from .check import router as check_router
from .health import router as health_router
from .metrics import router as metrics_router
from .root import router as root_router
from .scan import router as scan_router
from .score import router as score_router

__all__ = ["root_router", "health_router", "check_router", "score_router", "scan_router", "metrics_router"]
