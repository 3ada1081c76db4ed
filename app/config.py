"""Configuration from environment."""

from deps import load_dotenv, os

load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name, "").strip().lower()
    if not value:
        return default
    return value in ("1", "true", "yes", "on")


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, str(default)))
    except ValueError:
        return default


def get_host() -> str:
    return os.environ.get("HOST", "0.0.0.0").strip()


def get_port() -> int:
    return _get_int("PORT", 8000)


def get_log_level() -> str:
    """Root log level name. Default: INFO."""
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def get_detection_level() -> int:
    """Default detection level (1-3) for requests that omit it."""
    return max(1, min(3, _get_int("DETECTION_LEVEL", 2)))


def get_analyzer_verbose() -> bool:
    """Log parse failures and top-level return decisions."""
    return _get_bool("ANALYZER_VERBOSE", False)


def get_metrics_db_path() -> str:
    """SQLite file for quality history. Empty string disables persistence."""
    return os.environ.get("METRICS_DB_PATH", "quality_metrics.db").strip()


def get_metrics_retention_days() -> int:
    return max(1, min(30, _get_int("METRICS_RETENTION_DAYS", 7)))


def get_slack_webhook_url() -> str:
    """Slack incoming webhook for code analysis alerts (optional)."""
    return os.environ.get("SLACK_WEBHOOK_URL", "").strip()


def get_node_red_base_url() -> str:
    """Instance URL shown in alerts."""
    return os.environ.get("NODE_RED_BASE_URL", "").strip() or "http://localhost:1880"
