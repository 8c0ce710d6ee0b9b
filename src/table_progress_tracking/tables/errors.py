"""Errors raised while processing a progress table.

Every stage of the processor stops at its first failure by raising one of
these. They never escape ``ProgressTableProcessor.process()``: the processor
turns them into the escaped error box shown in place of the table.
"""

from enum import Enum


class ProcessingErrorReason(str, Enum):
    """Tag identifying why a table could not be processed."""

    EMPTY_INPUT = "EmptyInput"
    INPUT_TOO_LARGE = "InputTooLarge"
    MISSING_TABLE_ID = "MissingTableId"
    EMPTY_OUTPUT = "EmptyOutput"
    OUTPUT_TOO_LARGE = "OutputTooLarge"
    TIMEOUT = "Timeout"
    NO_TABLE_FOUND = "NoTableFound"
    NEGATIVE_COLUMN_INDEX = "NegativeColumnIndex"
    COLUMN_OUT_OF_RANGE = "ColumnOutOfRange"
    MAX_COLUMNS_EXCEEDED = "MaxColumnsExceeded"
    MAX_ROWS_EXCEEDED = "MaxRowsExceeded"
    MISSING_ROW_IDENTIFIERS = "MissingRowIdentifiers"


class ProcessingError(Exception):
    """Base class for table processing failures."""

    reason: ProcessingErrorReason

    def __init__(self, message: str, reason: ProcessingErrorReason | None = None):
        self.message = message
        if reason is not None:
            self.reason = reason
        super().__init__(message)


class EmptyInputError(ProcessingError):
    """The tag had no content between its opening and closing tags."""

    reason = ProcessingErrorReason.EMPTY_INPUT

    def __init__(self) -> None:
        super().__init__("No content found inside the <table-progress-tracking> tag.")


class InputTooLargeError(ProcessingError):
    """Raw tag content exceeds the configured input size."""

    reason = ProcessingErrorReason.INPUT_TOO_LARGE

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"The content of this progress table is {size} bytes, "
            f"which exceeds the maximum of {limit:,} bytes."
        )


class MissingTableIdError(ProcessingError):
    """The required table-id argument was not given."""

    reason = ProcessingErrorReason.MISSING_TABLE_ID

    def __init__(self) -> None:
        super().__init__("The table-id argument is required.")


class EmptyOutputError(ProcessingError):
    """Rendering produced no markup."""

    reason = ProcessingErrorReason.EMPTY_OUTPUT

    def __init__(self) -> None:
        super().__init__("Rendering the table content resulted in empty HTML.")


class OutputTooLargeError(ProcessingError):
    """Rendered markup exceeds the configured HTML size."""

    reason = ProcessingErrorReason.OUTPUT_TOO_LARGE

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"The rendered table is {size} bytes, which exceeds the maximum of {limit:,} bytes."
        )


class ProcessingTimeoutError(ProcessingError):
    """The processing deadline passed at a checkpoint."""

    reason = ProcessingErrorReason.TIMEOUT

    def __init__(self, stage: str):
        self.stage = stage
        super().__init__(f"Processing timeout exceeded while {stage}.")


class NoTableFoundError(ProcessingError):
    """The rendered markup contains no table element."""

    reason = ProcessingErrorReason.NO_TABLE_FOUND

    def __init__(self) -> None:
        super().__init__(
            "No table was provided for progress tracking. Please include a table "
            "between the <table-progress-tracking> tags."
        )


class NegativeColumnIndexError(ProcessingError):
    """unique-column-index resolved to a negative position."""

    reason = ProcessingErrorReason.NEGATIVE_COLUMN_INDEX

    def __init__(self) -> None:
        super().__init__("unique-column-index must be 1 or greater.")


class ColumnOutOfRangeError(ProcessingError):
    """unique-column-index points past the widest row of the table."""

    reason = ProcessingErrorReason.COLUMN_OUT_OF_RANGE

    def __init__(self, column_index: int, column_count: int):
        self.column_index = column_index
        self.column_count = column_count
        super().__init__(
            f"unique-column-index ({column_index}) is out of range. "
            f"Table has {column_count} columns (0-{column_count - 1})."
        )


class MaxColumnsExceededError(ProcessingError):
    """A row has more cells than allowed."""

    reason = ProcessingErrorReason.MAX_COLUMNS_EXCEEDED

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Progress tables may not have more than {limit} columns.")


class MaxRowsExceededError(ProcessingError):
    """The table has more data rows than allowed."""

    reason = ProcessingErrorReason.MAX_ROWS_EXCEEDED

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Progress tables may not have more than {limit} rows.")


class MissingRowIdentifiersError(ProcessingError):
    """A data row has no data-row-id while no unique column is configured."""

    reason = ProcessingErrorReason.MISSING_ROW_IDENTIFIERS

    def __init__(self) -> None:
        super().__init__(
            "When unique-column-index is not provided, all data rows must have "
            "a data-row-id attribute."
        )
