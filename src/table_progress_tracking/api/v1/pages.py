"""Page rendering and pre-save validation endpoints."""

from fastapi import APIRouter, Depends

from table_progress_tracking.core.app_config import get_processing_limits
from table_progress_tracking.core.exceptions import DuplicateTableIdError
from table_progress_tracking.core.logging_utils import get_logger, timed_operation
from table_progress_tracking.schemas.common import ErrorResponse
from table_progress_tracking.schemas.pages import (
    RenderPageRequest,
    RenderPageResponse,
    ValidatePageRequest,
    ValidatePageResponse,
)
from table_progress_tracking.tables import (
    MarkdownRenderer,
    ProcessingLimits,
    RenderContext,
    Renderer,
    duplicate_table_ids,
    render_page,
)

logger = get_logger(__name__)

router = APIRouter()


def get_renderer() -> Renderer:
    """FastAPI dependency returning the page renderer."""
    return MarkdownRenderer()


@router.post("/render", response_model=RenderPageResponse)
def render(
    request: RenderPageRequest,
    renderer: Renderer = Depends(get_renderer),
    limits: ProcessingLimits = Depends(get_processing_limits),
) -> RenderPageResponse:
    """Render page source, expanding every progress table tag.

    Runs in the threadpool; rendering is bounded by max_processing_seconds.
    """
    context = RenderContext(article_id=request.article_id)
    with timed_operation(logger, "render_page", article_id=request.article_id) as timing:
        html = render_page(request.text, renderer, context, limits)
        timing["html_size"] = len(html)

    return RenderPageResponse(
        html=html,
        cacheable=context.cacheable,
        tracking_categories=sorted(context.tracking_categories),
        modules=list(context.modules),
    )


@router.post(
    "/validate",
    response_model=ValidatePageResponse,
    responses={409: {"model": ErrorResponse}},
)
async def validate(request: ValidatePageRequest) -> ValidatePageResponse:
    """Reject page source that reuses a table-id."""
    duplicates = duplicate_table_ids(request.text)
    if duplicates:
        logger.warning("PAGE_SAVE_REJECTED", duplicate_table_ids=duplicates)
        raise DuplicateTableIdError(duplicates)
    return ValidatePageResponse(valid=True)
