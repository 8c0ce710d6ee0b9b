"""TableProgress SQLAlchemy model."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from table_progress_tracking.db.base import Base, UUIDMixin

ENTITY_ID_MAX_LENGTH = 255


class TableProgress(Base, UUIDMixin):
    """One row of one progress table checked by one user.

    Keyed by (page_id, table_id, user_id, entity_id); the entity id is the
    row identifier stamped onto the table when it was rendered.
    """

    __tablename__ = "table_progress_tracking"
    __table_args__ = (
        UniqueConstraint(
            "page_id",
            "table_id",
            "user_id",
            "entity_id",
            name="uq_table_progress_tracking_entry",
        ),
        Index("ix_table_progress_tracking_lookup", "page_id", "table_id", "user_id"),
    )

    page_id: Mapped[int] = mapped_column(Integer, nullable=False)

    table_id: Mapped[str] = mapped_column(String(255), nullable=False)

    # Databricks workspace user ID
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)

    # VARCHAR so numeric and non-numeric row identifiers both fit
    entity_id: Mapped[str] = mapped_column(String(ENTITY_ID_MAX_LENGTH), nullable=False)

    tpt_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
