"""FastAPI app: /health, /check, /score, /scan, /metrics."""

from deps import CORSMiddleware, FastAPI

from .routes import check_router, health_router, metrics_router, root_router, scan_router, score_router
from .startup import configure_logging, validate_config

configure_logging()

app = FastAPI(
    title="Node-RED Function Quality API",
    description="Detects debugging leftovers in Node-RED function nodes and scores unit, flow and system quality.",
    version="0.1.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root_router)
app.include_router(health_router)
app.include_router(check_router)
app.include_router(score_router)
app.include_router(scan_router)
app.include_router(metrics_router)


@app.on_event("startup")
def _validate_config() -> None:
    """Warn at startup about disabled optional features."""
    validate_config()


if __name__ == "__main__":
    import uvicorn

    from .config import get_host, get_port

    uvicorn.run(app, host=get_host(), port=get_port())
