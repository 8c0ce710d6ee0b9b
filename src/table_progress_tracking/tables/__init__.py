"""Progress table processing.

Augments a rendered HTML table with a checkbox column so viewers can track
which rows they have completed.
"""

from table_progress_tracking.tables.arguments import TagArguments
from table_progress_tracking.tables.duplicates import duplicate_table_ids, has_duplicate_tables
from table_progress_tracking.tables.errors import ProcessingError, ProcessingErrorReason
from table_progress_tracking.tables.guard import Clock
from table_progress_tracking.tables.limits import ProcessingLimits
from table_progress_tracking.tables.processor import (
    ProcessingState,
    ProgressTableProcessor,
    render_error_box,
)
from table_progress_tracking.tables.render import MarkdownRenderer, RenderContext, Renderer
from table_progress_tracking.tables.row_ids import resolve_row_id, sanitize_row_id
from table_progress_tracking.tables.tags import render_page, render_progress_table

__all__ = [
    "Clock",
    "MarkdownRenderer",
    "ProcessingError",
    "ProcessingErrorReason",
    "ProcessingLimits",
    "ProcessingState",
    "ProgressTableProcessor",
    "RenderContext",
    "Renderer",
    "TagArguments",
    "duplicate_table_ids",
    "has_duplicate_tables",
    "render_error_box",
    "render_page",
    "render_progress_table",
    "resolve_row_id",
    "sanitize_row_id",
]
