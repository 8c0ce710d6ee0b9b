"""Arguments of the ``<table-progress-tracking>`` tag."""

import re
from collections.abc import Mapping
from dataclasses import dataclass

from table_progress_tracking.tables.errors import MissingTableIdError

TABLE_ID_ARG = "table-id"
UNIQUE_COLUMN_INDEX_ARG = "unique-column-index"
HEADER_LABEL_ARG = "header-label"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int_prefix(value: str) -> int:
    """Parse the leading integer of ``value``; 0 when there is none."""
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else 0


@dataclass(frozen=True)
class TagArguments:
    """Validated tag arguments.

    Attributes:
        table_id: Identifier of the table on its page.
        unique_column_index: Zero-based column holding each row's unique
            value, or None when rows carry their own ``data-row-id``.
        header_label: Text for the progress column header, or None to use
            the checkbox icon.
    """

    table_id: str
    unique_column_index: int | None = None
    header_label: str | None = None

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, str]) -> "TagArguments":
        """Build arguments from raw tag attributes.

        ``unique-column-index`` is 1-based for authors and stored 0-based.

        Raises:
            MissingTableIdError: If ``table-id`` is absent or blank.
        """
        attrs = {key.lower(): value for key, value in attributes.items()}

        table_id = attrs.get(TABLE_ID_ARG)
        if not table_id or not table_id.strip():
            raise MissingTableIdError()

        unique_column_index = None
        if UNIQUE_COLUMN_INDEX_ARG in attrs:
            unique_column_index = parse_int_prefix(attrs[UNIQUE_COLUMN_INDEX_ARG] or "") - 1

        return cls(
            table_id=table_id,
            unique_column_index=unique_column_index,
            header_label=attrs.get(HEADER_LABEL_ARG) or None,
        )
