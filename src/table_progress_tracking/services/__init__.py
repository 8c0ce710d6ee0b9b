"""Business logic services."""

from table_progress_tracking.services.progress_service import ProgressService

__all__ = [
    "ProgressService",
]
