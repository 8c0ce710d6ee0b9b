"""The ``<table-progress-tracking>`` tag hook.

``render_page`` plays the host parser's part: it finds each tag in a page's
source, hands its content and attributes to ``render_progress_table`` and
renders the text around the tags with the page renderer.
"""

import html
import re
from collections.abc import Mapping

from table_progress_tracking.core.logging_utils import get_logger
from table_progress_tracking.tables.errors import EmptyInputError
from table_progress_tracking.tables.limits import ProcessingLimits
from table_progress_tracking.tables.processor import ProgressTableProcessor, render_error_box
from table_progress_tracking.tables.render import (
    SCRIPTS_MODULE,
    STYLES_MODULE,
    RenderContext,
    Renderer,
)

logger = get_logger(__name__)

TAG_NAME = "table-progress-tracking"

# An "=" with its quoted value taken whole, or any other character but ">",
# so a ">" inside a quoted attribute value does not end the opening tag.
TAG_CHAR = r"""(?:=\s*"[^"]*"|=\s*'[^']*'|[^>])"""

TAG_PATTERN = re.compile(
    rf"<{TAG_NAME}(?P<attrs>(?:\s{TAG_CHAR}*?)?)(?:/>|>(?P<body>.*?)</{TAG_NAME}\s*>)",
    re.IGNORECASE | re.DOTALL,
)

_ATTRIBUTE_PATTERN = re.compile(
    r"""([\w:.-]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>=`]+)))?""",
)


def parse_tag_attributes(attribute_text: str) -> dict[str, str]:
    """Parse ``name="value"`` pairs of an opening tag.

    Names are lowercased, values are entity-decoded, valueless attributes
    map to an empty string and later duplicates win.
    """
    attributes: dict[str, str] = {}
    for match in _ATTRIBUTE_PATTERN.finditer(attribute_text):
        name, double_quoted, single_quoted, bare = match.groups()
        value = next((v for v in (double_quoted, single_quoted, bare) if v is not None), "")
        attributes[name.lower()] = html.unescape(value)
    return attributes


def render_progress_table(
    raw_input: str | None,
    attributes: Mapping[str, str],
    renderer: Renderer,
    context: RenderContext,
    limits: ProcessingLimits,
) -> str:
    """Render one tag occurrence.

    Args:
        raw_input: Text between the opening and closing tags, None for a
            self-closing tag.
        attributes: Tag attributes.
        renderer: Renderer for the tag content.
        context: Render context of the page being rendered.
        limits: Processing limits.

    Returns:
        The augmented table HTML or an error box.
    """
    context.add_modules(STYLES_MODULE, SCRIPTS_MODULE)

    try:
        if not raw_input:
            return render_error_box(EmptyInputError().message)

        processor = ProgressTableProcessor(raw_input, attributes, renderer, context, limits)
        return processor.process()
    except Exception as e:
        logger.exception("PROGRESS_TAG_FAILED", error_type=type(e).__name__)
        return render_error_box(str(e) or type(e).__name__)


def render_page(
    text: str,
    renderer: Renderer,
    context: RenderContext,
    limits: ProcessingLimits,
) -> str:
    """Render a page, expanding every progress table tag in order.

    Each tag occurrence gets its own processor; nothing is shared between
    occurrences apart from the page's render context.
    """
    parts: list[str] = []
    position = 0
    tables = 0

    for match in TAG_PATTERN.finditer(text):
        before = text[position:match.start()]
        if before.strip():
            parts.append(renderer.render(before, context))

        attributes = parse_tag_attributes(match.group("attrs") or "")
        parts.append(
            render_progress_table(match.group("body"), attributes, renderer, context, limits)
        )
        position = match.end()
        tables += 1

    rest = text[position:]
    if rest.strip():
        parts.append(renderer.render(rest, context))

    logger.debug("PAGE_RENDERED", article_id=context.article_id, tables=tables)
    return "".join(parts)
