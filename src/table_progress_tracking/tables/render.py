"""Render collaborators: the markup renderer and the per-page render context.

The processor never converts authored markup into HTML itself. It calls a
``Renderer`` supplied by the host and reports side effects (cache policy,
tracking categories, client modules) through a ``RenderContext``.
"""

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from markdown_it import MarkdownIt

STYLES_MODULE = "ext.tableProgressTracking.styles"
SCRIPTS_MODULE = "ext.tableProgressTracking.scripts"


@dataclass
class RenderContext:
    """Output state of one page render.

    Attributes:
        article_id: Page the tables belong to.
        tracking_categories: Usage markers added by successful renders.
        modules: Client-side modules the page needs.
        cache_expiry: Seconds the rendered page may be cached, None for
            the host default, 0 to disable caching.
    """

    article_id: int | None = None
    tracking_categories: set[str] = field(default_factory=set)
    modules: list[str] = field(default_factory=list)
    cache_expiry: int | None = None

    def add_tracking_category(self, category: str) -> None:
        self.tracking_categories.add(category)

    def add_modules(self, *modules: str) -> None:
        for module in modules:
            if module not in self.modules:
                self.modules.append(module)

    def update_cache_expiry(self, seconds: int) -> None:
        """Lower the cache expiry; never raises an existing lower value."""
        if self.cache_expiry is None or seconds < self.cache_expiry:
            self.cache_expiry = seconds

    def disable_cache(self) -> None:
        self.update_cache_expiry(0)

    @property
    def cacheable(self) -> bool:
        return self.cache_expiry != 0


@runtime_checkable
class Renderer(Protocol):
    """Converts authored markup into HTML."""

    def render(self, raw_input: str, context: RenderContext) -> str:
        """Render ``raw_input`` to an HTML string."""
        ...


class MarkdownRenderer:
    """Default renderer: CommonMark with raw HTML and pipe tables.

    Authors may write the table either as an HTML ``<table>`` (so they can
    put ``data-row-id`` on rows and cells) or as a Markdown pipe table.
    """

    def __init__(self) -> None:
        self._md = MarkdownIt("commonmark", {"html": True}).enable("table")

    def render(self, raw_input: str, context: RenderContext) -> str:
        return self._md.render(raw_input)
