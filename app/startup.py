"""Startup validation and configuration checks."""

from deps import Path, logging

from .config import get_log_level, get_metrics_db_path, get_slack_webhook_url

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure the root logger once, at the level from LOG_LEVEL."""
    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def validate_config() -> None:
    """Warn about settings that disable optional features."""
    if not Path(".env").exists():
        logger.info(".env file not found; using environment variables and defaults.")
    if not get_metrics_db_path():
        logger.warning("METRICS_DB_PATH is empty. Quality history will not be stored.")
    if not get_slack_webhook_url():
        logger.warning("SLACK_WEBHOOK_URL not set. Code analysis alerts will only be logged.")
