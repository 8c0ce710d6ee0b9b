"""Page rendering Pydantic schemas."""

from pydantic import Field

from table_progress_tracking.schemas.common import BaseSchema


class RenderPageRequest(BaseSchema):
    """Request schema for rendering page source."""

    article_id: int | None = None
    text: str = Field(..., description="Page source, may contain <table-progress-tracking> tags")


class RenderPageResponse(BaseSchema):
    """Rendered page HTML plus the metadata collected while rendering."""

    html: str
    cacheable: bool
    tracking_categories: list[str] = Field(default_factory=list)
    modules: list[str] = Field(default_factory=list)


class ValidatePageRequest(BaseSchema):
    """Request schema for checking page source before it is saved."""

    text: str


class ValidatePageResponse(BaseSchema):
    """Result of a successful pre-save check."""

    valid: bool = True
