"""Resource limits applied to a single progress table render."""

from pydantic import BaseModel, Field

# MediaWiki-style default article size limit, in kilobytes.
DEFAULT_MAX_ARTICLE_SIZE_KB = 2048

# Share of the article size limit the rendered table HTML may occupy
# when max_html_size is not configured explicitly.
DEFAULT_HTML_SHARE = 0.25


def default_max_html_size(max_article_size_kb: int = DEFAULT_MAX_ARTICLE_SIZE_KB) -> int:
    """Derive the rendered HTML ceiling from the host article size limit."""
    return int(max_article_size_kb * 1024 * DEFAULT_HTML_SHARE)


class ProcessingLimits(BaseModel):
    """Limits for one invocation of the table processor.

    Immutable for the duration of an invocation; built once from the
    central application configuration and passed to the processor.
    """

    max_rows: int = Field(default=1000, gt=0)
    max_columns: int = Field(default=50, gt=0)
    max_html_size: int = Field(default_factory=default_max_html_size, gt=0)
    max_processing_seconds: float = Field(default=5.0, gt=0)
    max_input_size: int = Field(default=50 * 1024, gt=0)

    model_config = {"frozen": True}
