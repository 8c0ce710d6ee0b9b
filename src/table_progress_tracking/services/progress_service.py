"""Progress service for reading and writing checked table rows."""

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from table_progress_tracking.core.exceptions import ProgressStoreError
from table_progress_tracking.core.logging_utils import get_logger
from table_progress_tracking.models.table_progress import TableProgress

logger = get_logger(__name__)


class ProgressService:
    """Service for per-user progress on progress tables."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize progress service.

        Args:
            session: Database session.
        """
        self._session = session

    async def get_progress(self, article_id: int, table_id: str, user_id: str) -> list[str]:
        """Get the entity ids a user has checked in one table.

        Args:
            article_id: Page the table lives on.
            table_id: Table identifier from the tag's table-id argument.
            user_id: User ID.

        Returns:
            Checked entity ids, oldest first.
        """
        result = await self._session.execute(
            select(TableProgress.entity_id)
            .where(
                TableProgress.page_id == article_id,
                TableProgress.table_id == table_id,
                TableProgress.user_id == user_id,
            )
            .order_by(TableProgress.tpt_timestamp, TableProgress.entity_id)
        )
        return list(result.scalars().all())

    async def track_progress(
        self, article_id: int, table_id: str, user_id: str, entity_id: str
    ) -> None:
        """Mark a row as checked.

        Uses INSERT ... ON CONFLICT DO NOTHING so checking an already
        checked row succeeds without a second record.

        Raises:
            ProgressStoreError: If the database rejects the write.
        """
        stmt = pg_insert(TableProgress).values(
            page_id=article_id,
            table_id=table_id,
            user_id=user_id,
            entity_id=entity_id,
        ).on_conflict_do_nothing(
            index_elements=["page_id", "table_id", "user_id", "entity_id"]
        )

        try:
            await self._session.execute(stmt)
            await self._session.flush()
        except SQLAlchemyError as e:
            logger.error(
                "PROGRESS_TRACK_FAILED",
                article_id=article_id,
                table_id=table_id,
                entity_id=entity_id,
                error=str(e),
            )
            raise ProgressStoreError(
                "Failed to store progress.", operation="track"
            ) from e

        logger.info(
            "PROGRESS_TRACKED",
            article_id=article_id,
            table_id=table_id,
            entity_id=entity_id,
        )

    async def delete_progress(
        self, article_id: int, table_id: str, user_id: str, entity_id: str
    ) -> None:
        """Unmark a checked row.

        Raises:
            ProgressStoreError: If nothing was deleted or the database fails.
        """
        try:
            result = await self._session.execute(
                delete(TableProgress).where(
                    TableProgress.page_id == article_id,
                    TableProgress.table_id == table_id,
                    TableProgress.user_id == user_id,
                    TableProgress.entity_id == entity_id,
                )
            )
            await self._session.flush()
        except SQLAlchemyError as e:
            logger.error(
                "PROGRESS_DELETE_FAILED",
                article_id=article_id,
                table_id=table_id,
                entity_id=entity_id,
                error=str(e),
            )
            raise ProgressStoreError(
                "Failed to delete progress.", operation="delete"
            ) from e

        if result.rowcount == 0:
            logger.warning(
                "PROGRESS_DELETE_NO_ROWS",
                article_id=article_id,
                table_id=table_id,
                entity_id=entity_id,
            )
            raise ProgressStoreError("Failed to delete progress.", operation="delete")

        logger.info(
            "PROGRESS_DELETED",
            article_id=article_id,
            table_id=table_id,
            entity_id=entity_id,
        )
