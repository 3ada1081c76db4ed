"""Services for the checker, scoring and metrics."""

from .checker import CheckerService

__all__ = ["CheckerService"]
