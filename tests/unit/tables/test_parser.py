"""Unit tests for rendering and parsing tag content."""

import pytest
from bs4 import BeautifulSoup

from table_progress_tracking.tables import ProcessingLimits, RenderContext
from table_progress_tracking.tables.errors import (
    EmptyOutputError,
    NoTableFoundError,
    OutputTooLargeError,
    ProcessingTimeoutError,
)
from table_progress_tracking.tables.guard import Clock
from table_progress_tracking.tables.parser import (
    HTML_PARSER,
    cell_count,
    data_rows,
    first_header_row,
    is_header_row,
    parse_table,
    table_rows,
)


class StaticRenderer:
    """Renderer returning a fixed HTML string."""

    def __init__(self, html: str) -> None:
        self.html = html

    def render(self, raw_input: str, context: RenderContext) -> str:
        return self.html


def _clock() -> Clock:
    clock = Clock(5.0)
    clock.start()
    return clock


class TestParseTable:
    """Tests for parse_table."""

    def test_finds_first_table(self, limits: ProcessingLimits) -> None:
        """Test the first table in document order is selected."""
        renderer = StaticRenderer(
            '<p>intro</p><table id="a"><tr><td>1</td></tr></table><table id="b"></table>'
        )
        parsed = parse_table("src", renderer, RenderContext(), limits, _clock())
        assert parsed.table.name == "table"
        assert parsed.table["id"] == "a"

    @pytest.mark.parametrize("html", ["", "   \n\t"])
    def test_empty_output(self, html: str, limits: ProcessingLimits) -> None:
        """Test whitespace-only rendering fails."""
        with pytest.raises(EmptyOutputError):
            parse_table("src", StaticRenderer(html), RenderContext(), limits, _clock())

    def test_output_too_large(self) -> None:
        """Test rendered HTML over max_html_size fails."""
        html = "<table><tr><td>x</td></tr></table>"
        limits = ProcessingLimits(max_html_size=len(html) - 1)
        with pytest.raises(OutputTooLargeError):
            parse_table("src", StaticRenderer(html), RenderContext(), limits, _clock())

    def test_output_at_limit_accepted(self) -> None:
        """Test rendered HTML of exactly max_html_size passes."""
        html = "<table><tr><td>x</td></tr></table>"
        limits = ProcessingLimits(max_html_size=len(html))
        parsed = parse_table("src", StaticRenderer(html), RenderContext(), limits, _clock())
        assert parsed.table is not None

    def test_no_table_disables_cache(self, limits: ProcessingLimits) -> None:
        """Test missing table fails and turns off page caching."""
        context = RenderContext()
        with pytest.raises(NoTableFoundError):
            parse_table("src", StaticRenderer("<p>just text</p>"), context, limits, _clock())
        assert context.cache_expiry == 0
        assert context.cacheable is False

    def test_timeout_after_render(self, limits: ProcessingLimits) -> None:
        """Test a slow renderer trips the checkpoint after rendering."""
        ticks = {"now": 0.0}
        clock = Clock(1.0, now=lambda: ticks["now"])
        clock.start()

        class SlowRenderer:
            def render(self, raw_input: str, context: RenderContext) -> str:
                ticks["now"] += 10
                return "<table></table>"

        with pytest.raises(ProcessingTimeoutError, match="rendering the table content"):
            parse_table("src", SlowRenderer(), RenderContext(), limits, clock)

    def test_implied_end_tags(self, limits: ProcessingLimits) -> None:
        """Test rows and cells without closing tags are closed implicitly."""
        html = "<table><tr><th>Name<th>Qty<tr><td>Apple<td>3<tr><td>Pear<td>5</table>"
        parsed = parse_table("src", StaticRenderer(html), RenderContext(), limits, _clock())

        rows = table_rows(parsed.table)
        assert [[cell.get_text() for cell in row.find_all(["td", "th"])] for row in rows] == [
            ["Name", "Qty"],
            ["Apple", "3"],
            ["Pear", "5"],
        ]
        assert len(data_rows(parsed.table)) == 2

    def test_serialize_returns_table_only(self, limits: ProcessingLimits) -> None:
        """Test serialization covers the table and not surrounding markup."""
        parsed = parse_table(
            "src",
            StaticRenderer("<p>before</p><table><tr><td>x</td></tr></table><p>after</p>"),
            RenderContext(),
            limits,
            _clock(),
        )
        output = parsed.serialize()
        assert output.startswith("<table>")
        assert "before" not in output
        assert "after" not in output


class TestRowHelpers:
    """Tests for row classification helpers."""

    @pytest.fixture
    def table(self):
        soup = BeautifulSoup(
            "<table>"
            "<tr><th>Name</th><th>Qty</th></tr>"
            "<tr><td>Apple</td><td>1</td></tr>"
            "<tr><td>Pear</td><td>2</td><td>extra</td></tr>"
            "</table>",
            HTML_PARSER,
        )
        return soup.find("table")

    def test_header_row_detection(self, table) -> None:
        """Test rows with a direct th child are header rows."""
        rows = table_rows(table)
        assert [is_header_row(row) for row in rows] == [True, False, False]

    def test_data_rows(self, table) -> None:
        """Test data rows exclude header rows."""
        assert len(data_rows(table)) == 2

    def test_first_header_row(self, table) -> None:
        """Test the first header row is found."""
        assert first_header_row(table) is table_rows(table)[0]

    def test_no_header_row(self) -> None:
        """Test tables without th have no header row."""
        soup = BeautifulSoup("<table><tr><td>a</td></tr></table>", HTML_PARSER)
        assert first_header_row(soup.find("table")) is None

    def test_cell_count(self, table) -> None:
        """Test td and th are both counted."""
        assert [cell_count(row) for row in table_rows(table)] == [2, 2, 3]
