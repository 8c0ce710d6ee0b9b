"""Progress tracking endpoints."""

from fastapi import APIRouter, Response, status

from table_progress_tracking.core.exceptions import ValidationError
from table_progress_tracking.db.session import DbSession
from table_progress_tracking.middleware.auth import RegisteredUser
from table_progress_tracking.models.table_progress import ENTITY_ID_MAX_LENGTH
from table_progress_tracking.schemas.common import ErrorResponse
from table_progress_tracking.schemas.progress import ProgressEntityRequest
from table_progress_tracking.services.progress_service import ProgressService

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


def _require_entity_id(request: ProgressEntityRequest | None) -> str:
    """Return the request's entity id or raise a 400."""
    entity_id = request.entity_id if request else None
    if entity_id is None:
        raise ValidationError("entity_id is required.", field="entity_id")
    if not entity_id or len(entity_id) > ENTITY_ID_MAX_LENGTH:
        raise ValidationError(
            f"entity_id must be between 1 and {ENTITY_ID_MAX_LENGTH} characters.",
            field="entity_id",
        )
    return entity_id


@router.get("/{article_id}/{table_id}", response_model=list[str])
async def get_progress(
    article_id: int,
    table_id: str,
    user: RegisteredUser,
    db: DbSession,
) -> list[str]:
    """List the entity ids the caller has checked in a table."""
    service = ProgressService(db)
    return await service.get_progress(article_id, table_id, user.user_id)


@router.post("/{article_id}/{table_id}", status_code=status.HTTP_201_CREATED)
async def track_progress(
    article_id: int,
    table_id: str,
    user: RegisteredUser,
    db: DbSession,
    request: ProgressEntityRequest | None = None,
) -> Response:
    """Mark a row as checked for the caller."""
    entity_id = _require_entity_id(request)
    service = ProgressService(db)
    await service.track_progress(article_id, table_id, user.user_id, entity_id)
    return Response(status_code=status.HTTP_201_CREATED)


@router.delete("/{article_id}/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_progress(
    article_id: int,
    table_id: str,
    user: RegisteredUser,
    db: DbSession,
    request: ProgressEntityRequest | None = None,
) -> Response:
    """Unmark a checked row for the caller."""
    entity_id = _require_entity_id(request)
    service = ProgressService(db)
    await service.delete_progress(article_id, table_id, user.user_id, entity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
