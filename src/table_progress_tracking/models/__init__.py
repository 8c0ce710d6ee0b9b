"""Database models package."""

from table_progress_tracking.models.table_progress import TableProgress

__all__ = [
    "TableProgress",
]
