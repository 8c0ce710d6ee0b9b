"""Progress tracking Pydantic schemas."""

from pydantic import field_validator

from table_progress_tracking.schemas.common import BaseSchema


class ProgressEntityRequest(BaseSchema):
    """Request body naming one row of a progress table.

    Row identifiers arrive from the browser as strings or numbers and are
    stored as strings.
    """

    entity_id: str | int | None = None

    @field_validator("entity_id", mode="after")
    @classmethod
    def cast_to_string(cls, v: str | int | None) -> str | None:
        """Normalize numeric identifiers to strings."""
        if v is None:
            return None
        return str(v)
