"""Unit tests for the tag hook."""

from bs4 import BeautifulSoup

from table_progress_tracking.tables import RenderContext, render_page, render_progress_table
from table_progress_tracking.tables.parser import HTML_PARSER
from table_progress_tracking.tables.render import SCRIPTS_MODULE, STYLES_MODULE
from table_progress_tracking.tables.tags import parse_tag_attributes


class TestParseTagAttributes:
    """Tests for parse_tag_attributes."""

    def test_quoting_styles(self) -> None:
        """Test double-quoted, single-quoted and bare values."""
        attrs = parse_tag_attributes(' table-id="a" header-label=\'Done\' unique-column-index=2')
        assert attrs == {"table-id": "a", "header-label": "Done", "unique-column-index": "2"}

    def test_names_lowercased_and_entities_decoded(self) -> None:
        """Test names are lowercased and values entity-decoded."""
        attrs = parse_tag_attributes(' Header-Label="Tom &amp; Jerry"')
        assert attrs == {"header-label": "Tom & Jerry"}

    def test_valueless_attribute(self) -> None:
        """Test an attribute without a value maps to an empty string."""
        assert parse_tag_attributes(" table-id") == {"table-id": ""}


class TestRenderProgressTable:
    """Tests for render_progress_table."""

    def test_empty_input(self, renderer, render_context, limits) -> None:
        """Test a tag without content renders the empty input error."""
        output = render_progress_table("", {"table-id": "t"}, renderer, render_context, limits)
        assert "No content found inside the &lt;table-progress-tracking&gt; tag." in output
        assert renderer.calls == []

    def test_self_closing(self, renderer, render_context, limits) -> None:
        """Test a self-closing tag is treated as empty."""
        output = render_progress_table(None, {"table-id": "t"}, renderer, render_context, limits)
        assert "cdx-message--error" in output

    def test_modules_added(self, renderer, render_context, limits) -> None:
        """Test the client modules are requested for every occurrence."""
        render_progress_table("", {}, renderer, render_context, limits)
        assert render_context.modules == [STYLES_MODULE, SCRIPTS_MODULE]

    def test_success(self, renderer, render_context, limits) -> None:
        """Test a valid tag returns the augmented table."""
        output = render_progress_table(
            '<table><tr data-row-id="a"><td>A</td></tr></table>',
            {"table-id": "t"},
            renderer,
            render_context,
            limits,
        )
        assert BeautifulSoup(output, HTML_PARSER).find("input") is not None


class TestRenderPage:
    """Tests for render_page."""

    def test_text_and_tags_in_order(self, renderer, limits) -> None:
        """Test surrounding text and tables keep their order."""
        text = (
            "<p>Intro</p>"
            '<table-progress-tracking table-id="one">'
            '<table><tr data-row-id="a"><td>A</td></tr></table>'
            "</table-progress-tracking>"
            "<p>Middle</p>"
            '<table-progress-tracking table-id="two" />'
            "<p>End</p>"
        )
        context = RenderContext(article_id=7)
        html = render_page(text, renderer, context, limits)

        assert html.index("Intro") < html.index('data-progress-table-id="one"')
        assert html.index('data-progress-table-id="one"') < html.index("Middle")
        assert html.index("Middle") < html.index("cdx-message--error")
        assert html.index("cdx-message--error") < html.index("End")
        assert "table-progress-tracking>" not in html

    def test_occurrences_are_independent(self, renderer, render_context, limits) -> None:
        """Test an error in one tag does not affect the next."""
        text = (
            '<table-progress-tracking table-id="bad"><table><tr><td>x</td></tr></table>'
            "</table-progress-tracking>"
            '<table-progress-tracking table-id="good">'
            '<table><tr data-row-id="r"><td>x</td></tr></table>'
            "</table-progress-tracking>"
        )
        html = render_page(text, renderer, render_context, limits)
        soup = BeautifulSoup(html, HTML_PARSER)
        assert soup.find("div", class_="cdx-message--error") is not None
        assert soup.find("table", attrs={"data-progress-table-id": "good"}) is not None

    def test_page_without_tags(self, renderer, render_context, limits) -> None:
        """Test pages without tags are rendered whole."""
        assert render_page("<p>plain</p>", renderer, render_context, limits) == "<p>plain</p>"
        assert render_context.modules == []

    def test_angle_bracket_in_attribute_value(self, renderer, render_context, limits) -> None:
        """Test a ">" inside a quoted attribute value stays in the value."""
        text = (
            '<table-progress-tracking table-id="t" header-label="a>b">'
            "<table><tr><th>Item</th></tr><tr data-row-id=\"r\"><td>x</td></tr></table>"
            "</table-progress-tracking>"
        )
        html = render_page(text, renderer, render_context, limits)
        table = BeautifulSoup(html, HTML_PARSER).find("table")
        assert table["data-progress-table-id"] == "t"
        assert table.find("th").get_text() == "a>b"
