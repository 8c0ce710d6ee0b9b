"""Render tag content to HTML, parse it, and locate the table.

Also holds the row classification helpers shared by the later stages:
a *header row* is a ``tr`` with a direct ``th`` child, every other ``tr``
is a *data row*. Rows are collected from all descendants of the table, so
rows of nested tables are seen too.
"""

from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from table_progress_tracking.core.logging_utils import get_logger
from table_progress_tracking.tables.errors import (
    EmptyOutputError,
    NoTableFoundError,
    OutputTooLargeError,
)
from table_progress_tracking.tables.guard import Clock
from table_progress_tracking.tables.limits import ProcessingLimits
from table_progress_tracking.tables.render import RenderContext, Renderer

logger = get_logger(__name__)

# libxml2 closes implied end tags (<td>, <th>, <tr> without a closing tag).
HTML_PARSER = "lxml"


@dataclass
class ParsedTable:
    """Parsed document plus the table selected for processing."""

    document: BeautifulSoup
    table: Tag

    def new_tag(self, name: str, attrs: dict[str, str] | None = None) -> Tag:
        return self.document.new_tag(name, attrs=attrs or {})

    def serialize(self) -> str:
        return self.table.decode()


def parse_table(
    raw_input: str,
    renderer: Renderer,
    context: RenderContext,
    limits: ProcessingLimits,
    clock: Clock,
) -> ParsedTable:
    """Render ``raw_input`` and return the first table it contains.

    Raises:
        EmptyOutputError: Rendering produced only whitespace.
        OutputTooLargeError: The rendered HTML exceeds ``max_html_size``.
        ProcessingTimeoutError: The deadline passed after rendering or parsing.
        NoTableFoundError: No ``table`` element was rendered. Caching of
            the page is disabled since the author may still be editing.
    """
    clock.checkpoint("initialising")

    html = renderer.render(raw_input, context)

    if not html or not html.strip():
        raise EmptyOutputError()

    html_size = len(html.encode("utf-8"))
    if html_size > limits.max_html_size:
        raise OutputTooLargeError(html_size, limits.max_html_size)

    clock.checkpoint("rendering the table content")

    document = BeautifulSoup(html, HTML_PARSER)

    clock.checkpoint("parsing the rendered HTML")

    table = document.find("table")
    if not isinstance(table, Tag):
        context.disable_cache()
        raise NoTableFoundError()

    logger.debug("TABLE_PARSED", html_size=html_size, elapsed_s=round(clock.elapsed(), 4))
    return ParsedTable(document=document, table=table)


def table_rows(table: Tag) -> list[Tag]:
    return table.find_all("tr")


def is_header_row(row: Tag) -> bool:
    return row.find("th", recursive=False) is not None


def data_rows(table: Tag) -> list[Tag]:
    """Rows without a direct header cell, in document order."""
    return [row for row in table_rows(table) if not is_header_row(row)]


def first_header_row(table: Tag) -> Tag | None:
    for row in table_rows(table):
        if is_header_row(row):
            return row
    return None


def cell_count(row: Tag) -> int:
    """Number of ``td`` and ``th`` elements anywhere inside the row."""
    return len(row.find_all(["td", "th"]))
