"""Insert the progress tracking column into a validated table."""

from bs4 import Tag

from table_progress_tracking.tables.arguments import TagArguments
from table_progress_tracking.tables.errors import MaxRowsExceededError
from table_progress_tracking.tables.guard import Clock
from table_progress_tracking.tables.limits import ProcessingLimits
from table_progress_tracking.tables.parser import ParsedTable, data_rows, first_header_row
from table_progress_tracking.tables.row_ids import ROW_ID_ATTRIBUTE, resolve_row_id

TABLE_ID_ATTRIBUTE = "data-progress-table-id"
TABLE_CLASS = "progress-tracking-table"
CHECKBOX_CELL_CLASS = "progress-tracker-checkbox-cell"
HEADER_ICON_CLASS = "ext-tableProgressTracking-icon-check"


class TableMutator:
    """Writes table metadata, the progress header and one checkbox per data row.

    Only run after validation succeeded. Identifiers for every row are
    resolved before the first write, so a timeout during resolution leaves
    the tree untouched.
    """

    def __init__(
        self,
        parsed: ParsedTable,
        arguments: TagArguments,
        limits: ProcessingLimits,
        clock: Clock,
    ) -> None:
        self._parsed = parsed
        self._table = parsed.table
        self._arguments = arguments
        self._limits = limits
        self._clock = clock

    def apply(self) -> list[str]:
        """Mutate the table in place.

        Returns:
            The resolved row identifiers, in document order.

        Raises:
            MaxRowsExceededError: More than ``max_rows`` data rows.
            ProcessingTimeoutError: The deadline passed.
        """
        stage = "adding progress tracking to the table"
        self._clock.checkpoint(stage)

        rows = data_rows(self._table)
        if len(rows) > self._limits.max_rows:
            raise MaxRowsExceededError(self._limits.max_rows)

        resolved: list[tuple[Tag, str]] = []
        for index, row in enumerate(rows):
            self._clock.checkpoint(stage)
            resolved.append((row, resolve_row_id(row, index, self._arguments.unique_column_index)))

        self._set_table_attributes()
        self._add_progress_header()
        for row, row_id in resolved:
            self._add_checkbox_cell(row, row_id)

        return [row_id for _, row_id in resolved]

    def _set_table_attributes(self) -> None:
        # The serializer escapes attribute values.
        self._table[TABLE_ID_ATTRIBUTE] = self._arguments.table_id
        classes = self._table.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        if TABLE_CLASS not in classes:
            classes = [*classes, TABLE_CLASS]
        self._table["class"] = classes

    def _add_progress_header(self) -> None:
        header_row = first_header_row(self._table)
        if header_row is None:
            return

        header = self._parsed.new_tag("th")
        if self._arguments.header_label:
            header.string = self._arguments.header_label
        else:
            header.append(self._parsed.new_tag("span", {"class": HEADER_ICON_CLASS}))
        header_row.insert(0, header)

    def _add_checkbox_cell(self, row: Tag, row_id: str) -> None:
        row[ROW_ID_ATTRIBUTE] = row_id

        # Disabled until the client script has loaded the viewer's progress.
        checkbox = self._parsed.new_tag(
            "input",
            {
                "type": "checkbox",
                "class": "cdx-checkbox__input",
                ROW_ID_ATTRIBUTE: row_id,
                "id": row_id,
                "disabled": "disabled",
            },
        )
        icon = self._parsed.new_tag("span", {"class": "cdx-checkbox__icon"})

        label_text = self._parsed.new_tag("span", {"class": "cdx-label__label__text"})
        label_text.string = " "
        label = self._parsed.new_tag("label", {"for": row_id, "class": "cdx-label__label"})
        label.append(label_text)
        label_container = self._parsed.new_tag("div", {"class": "cdx-checkbox__label cdx-label"})
        label_container.append(label)

        wrapper = self._parsed.new_tag("div", {"class": "cdx-checkbox__wrapper"})
        wrapper.append(checkbox)
        wrapper.append(icon)
        wrapper.append(label_container)

        widget = self._parsed.new_tag("div", {"class": "cdx-checkbox"})
        widget.append(wrapper)

        cell = self._parsed.new_tag("td", {"class": CHECKBOX_CELL_CLASS})
        cell.append(widget)
        row.insert(0, cell)
