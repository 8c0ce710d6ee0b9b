"""Unit tests for row identifier resolution."""

import re

import pytest
from bs4 import BeautifulSoup

from table_progress_tracking.tables import ProcessingLimits
from table_progress_tracking.tables.errors import (
    MaxRowsExceededError,
    MissingRowIdentifiersError,
    ProcessingErrorReason,
    ProcessingTimeoutError,
)
from table_progress_tracking.tables.guard import Clock
from table_progress_tracking.tables.parser import HTML_PARSER
from table_progress_tracking.tables.row_ids import (
    explicit_row_id,
    resolve_row_id,
    sanitize_row_id,
    unique_column_text,
    validate_row_identifiers,
)

SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


def _row(html: str):
    return BeautifulSoup(f"<table>{html}</table>", HTML_PARSER).find("tr")


def _table(html: str):
    return BeautifulSoup(html, HTML_PARSER).find("table")


def _clock() -> Clock:
    clock = Clock(5.0)
    clock.start()
    return clock


class TestSanitizeRowId:
    """Tests for sanitize_row_id."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("alpha!", "alpha_"),
            ("Item 7", "Item_7"),
            ("already-safe_1", "already-safe_1"),
            ("a.b/c", "a_b_c"),
            ("café", "caf_"),
        ],
    )
    def test_sanitize(self, value: str, expected: str) -> None:
        """Test unsafe characters become underscores."""
        result = sanitize_row_id(value)
        assert result == expected
        assert SAFE_ID.match(result)


class TestExplicitRowId:
    """Tests for explicit_row_id."""

    def test_row_attribute(self) -> None:
        """Test the tr attribute is used first."""
        row = _row('<tr data-row-id="r1"><td data-row-id="c1">x</td></tr>')
        assert explicit_row_id(row) == "r1"

    def test_last_cell_attribute(self) -> None:
        """Test the last marked cell wins when the row has no marker."""
        row = _row('<tr><td data-row-id="c1">x</td><td>y</td><td data-row-id="c3">z</td></tr>')
        assert explicit_row_id(row) == "c3"

    def test_empty_marker_is_absent(self) -> None:
        """Test an empty data-row-id counts as no marker."""
        row = _row('<tr data-row-id=""><td>x</td></tr>')
        assert explicit_row_id(row) is None

    def test_no_marker(self) -> None:
        """Test rows without markers have no explicit id."""
        assert explicit_row_id(_row("<tr><td>x</td></tr>")) is None


class TestUniqueColumnText:
    """Tests for unique_column_text."""

    def test_trimmed_text(self) -> None:
        """Test cell text is stripped."""
        row = _row("<tr><td>  Item 7 \n</td><td>x</td></tr>")
        assert unique_column_text(row, 0) == "Item 7"

    def test_nested_markup_text(self) -> None:
        """Test text is collected from nested elements."""
        row = _row("<tr><td><b>Bold</b> text</td></tr>")
        assert unique_column_text(row, 0) == "Bold text"

    def test_out_of_range(self) -> None:
        """Test a row shorter than the index has no text."""
        assert unique_column_text(_row("<tr><td>x</td></tr>"), 3) is None

    def test_blank_cell(self) -> None:
        """Test a whitespace-only cell has no text."""
        assert unique_column_text(_row("<tr><td>   </td></tr>"), 0) is None


class TestResolveRowId:
    """Tests for resolve_row_id priority."""

    def test_explicit_beats_column(self) -> None:
        """Test an explicit marker beats the unique column."""
        row = _row('<tr data-row-id="alpha!"><td>Item 7</td></tr>')
        assert resolve_row_id(row, 0, unique_column_index=0) == "alpha_"

    def test_column_text(self) -> None:
        """Test the unique column text is sanitized."""
        row = _row("<tr><td>Item 7</td><td>x</td><td>y</td></tr>")
        assert resolve_row_id(row, 0, unique_column_index=0) == "Item_7"

    def test_fallback_to_index(self) -> None:
        """Test rows with nothing usable get row_<n>."""
        row = _row("<tr><td></td></tr>")
        assert resolve_row_id(row, 4, unique_column_index=0) == "row_4"

    def test_fallback_without_column(self) -> None:
        """Test the index fallback applies without a unique column."""
        assert resolve_row_id(_row("<tr><td>x</td></tr>"), 0) == "row_0"


class TestValidateRowIdentifiers:
    """Tests for validate_row_identifiers."""

    def test_all_rows_marked(self, limits: ProcessingLimits) -> None:
        """Test a fully marked table passes and header rows are skipped."""
        table = _table(
            "<table><tr><th>H</th></tr>"
            '<tr data-row-id="a"><td>1</td></tr>'
            '<tr><td data-row-id="b">2</td></tr></table>'
        )
        assert validate_row_identifiers(table, limits, _clock()) == 2

    def test_missing_marker(self, limits: ProcessingLimits) -> None:
        """Test the alpha! example fails on the unmarked row."""
        table = _table(
            '<table><tr data-row-id="alpha!"><td>A</td></tr><tr><td>B</td></tr></table>'
        )
        with pytest.raises(MissingRowIdentifiersError) as exc_info:
            validate_row_identifiers(table, limits, _clock())
        assert exc_info.value.reason == ProcessingErrorReason.MISSING_ROW_IDENTIFIERS

    def test_max_rows_exceeded(self) -> None:
        """Test more data rows than max_rows fails."""
        table = _table(
            "<table>"
            + "".join(f'<tr data-row-id="r{i}"><td>{i}</td></tr>' for i in range(3))
            + "</table>"
        )
        with pytest.raises(MaxRowsExceededError):
            validate_row_identifiers(table, ProcessingLimits(max_rows=2), _clock())

    def test_exactly_max_rows(self) -> None:
        """Test exactly max_rows data rows passes."""
        table = _table(
            "<table>"
            + "".join(f'<tr data-row-id="r{i}"><td>{i}</td></tr>' for i in range(2))
            + "</table>"
        )
        assert validate_row_identifiers(table, ProcessingLimits(max_rows=2), _clock()) == 2

    def test_timeout(self, limits: ProcessingLimits) -> None:
        """Test an exhausted clock stops the validation pass."""
        ticks = {"now": 0.0}
        clock = Clock(1.0, now=lambda: ticks["now"])
        clock.start()
        ticks["now"] = 5.0
        table = _table('<table><tr data-row-id="a"><td>A</td></tr></table>')
        with pytest.raises(ProcessingTimeoutError, match="validating the row identifiers"):
            validate_row_identifiers(table, limits, clock)
