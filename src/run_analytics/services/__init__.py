"""Services for run-analytics."""

from .analytics import AnalyticsService

__all__ = [
    "AnalyticsService",
]
