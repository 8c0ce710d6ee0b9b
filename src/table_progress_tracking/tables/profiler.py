"""Column profiling and unique-column-index validation."""

from bs4 import Tag

from table_progress_tracking.tables.errors import (
    ColumnOutOfRangeError,
    MaxColumnsExceededError,
    NegativeColumnIndexError,
)
from table_progress_tracking.tables.guard import Clock
from table_progress_tracking.tables.limits import ProcessingLimits
from table_progress_tracking.tables.parser import cell_count, table_rows

_STAGE = "measuring the table columns"


def profile_columns(table: Tag, limits: ProcessingLimits, clock: Clock) -> int:
    """Return the widest row's cell count among the first ``max_rows`` rows.

    Header and data rows are both counted. Rows past ``max_rows`` are not
    examined; that alone is not an error here.

    Raises:
        MaxColumnsExceededError: A row has more than ``max_columns`` cells.
        ProcessingTimeoutError: The deadline passed during the scan.
    """
    clock.checkpoint(_STAGE)

    widest = 0
    for processed, row in enumerate(table_rows(table)):
        if processed >= limits.max_rows:
            break
        clock.checkpoint(_STAGE)

        count = cell_count(row)
        if count > limits.max_columns:
            raise MaxColumnsExceededError(limits.max_columns)
        widest = max(widest, count)

    clock.checkpoint(_STAGE)
    return widest


def validate_unique_column_index(
    table: Tag,
    column_index: int,
    limits: ProcessingLimits,
    clock: Clock,
) -> int:
    """Check a zero-based column index against the table's width.

    Returns:
        The profiled column count.
    """
    if column_index < 0:
        raise NegativeColumnIndexError()

    column_count = profile_columns(table, limits, clock)
    if column_index >= column_count:
        raise ColumnOutOfRangeError(column_index, column_count)
    return column_count
