"""Row identifier resolution.

A data row's identifier comes from, in order of priority:

1. ``data-row-id`` on the ``tr``, else the last ``data-row-id`` found on
   any ``td`` in the row (authors sometimes mark more than one cell).
2. The trimmed text of the cell in the unique column, when one is set.
3. ``row_<n>``, the row's zero-based position among data rows.

Values from 1 and 2 are sanitized to ``[A-Za-z0-9_-]``.
"""

import re

from bs4 import Tag

from table_progress_tracking.tables.errors import (
    MaxRowsExceededError,
    MissingRowIdentifiersError,
)
from table_progress_tracking.tables.guard import Clock
from table_progress_tracking.tables.limits import ProcessingLimits
from table_progress_tracking.tables.parser import data_rows

ROW_ID_ATTRIBUTE = "data-row-id"
FALLBACK_PREFIX = "row_"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_row_id(value: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_-]`` with ``_``."""
    return _UNSAFE_CHARS.sub("_", value)


def explicit_row_id(row: Tag) -> str | None:
    """Return the author-supplied identifier of a row, unsanitized."""
    row_id = row.get(ROW_ID_ATTRIBUTE)
    if row_id:
        return str(row_id)

    last_cell_id = None
    for cell in row.find_all("td"):
        cell_id = cell.get(ROW_ID_ATTRIBUTE)
        if cell_id:
            last_cell_id = str(cell_id)
    return last_cell_id


def unique_column_text(row: Tag, column_index: int) -> str | None:
    """Trimmed text of the row's ``td`` at ``column_index``, if non-empty."""
    cells = row.find_all("td")
    if column_index < 0 or column_index >= len(cells):
        return None
    text = cells[column_index].get_text().strip()
    return text or None


def resolve_row_id(row: Tag, row_index: int, unique_column_index: int | None = None) -> str:
    """Resolve the canonical identifier for one data row."""
    row_id = explicit_row_id(row)
    if row_id:
        return sanitize_row_id(row_id)

    if unique_column_index is not None:
        text = unique_column_text(row, unique_column_index)
        if text:
            return sanitize_row_id(text)

    return f"{FALLBACK_PREFIX}{row_index}"


def validate_row_identifiers(table: Tag, limits: ProcessingLimits, clock: Clock) -> int:
    """Require an explicit identifier on every data row.

    Used when no unique column is configured, since the row-index fallback
    would not survive rows being inserted or reordered.

    Returns:
        Number of data rows checked.

    Raises:
        ProcessingTimeoutError: The deadline passed during the scan.
        MaxRowsExceededError: More than ``max_rows`` data rows.
        MissingRowIdentifiersError: A data row has no ``data-row-id``.
    """
    stage = "validating the row identifiers"
    clock.checkpoint(stage)

    checked = 0
    for row in data_rows(table):
        clock.checkpoint(stage)
        if checked >= limits.max_rows:
            raise MaxRowsExceededError(limits.max_rows)
        if not explicit_row_id(row):
            raise MissingRowIdentifiersError()
        checked += 1
    return checked
