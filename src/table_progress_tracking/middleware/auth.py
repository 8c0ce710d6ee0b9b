"""Databricks authentication dependencies."""

from typing import Annotated

from fastapi import Depends, Header, Request

from table_progress_tracking.core.auth import (
    UserIdentity,
    extract_forwarded_token,
    get_current_user,
    get_workspace_client,
)
from table_progress_tracking.core.exceptions import AuthorizationError
from table_progress_tracking.core.logging_utils import get_logger

logger = get_logger(__name__)


async def get_current_user_identity(
    request: Request,
    x_forwarded_access_token: str | None = Header(None),
) -> UserIdentity:
    """FastAPI dependency to get current user identity.

    Uses the token forwarded by the Databricks Apps proxy when present.
    Callers the workspace cannot identify are treated as anonymous.
    """
    token = x_forwarded_access_token or extract_forwarded_token(dict(request.headers))

    try:
        client = get_workspace_client(token=token)
        user = get_current_user(client)
    except Exception as e:
        logger.warning("AUTH_FALLBACK_ANONYMOUS", error_type=type(e).__name__)
        user = UserIdentity.anonymous()

    request.state.user = user
    return user


# Type alias for dependency injection
CurrentUser = Annotated[UserIdentity, Depends(get_current_user_identity)]


def require_registered_user(user: CurrentUser) -> UserIdentity:
    """Dependency that rejects anonymous callers with 403.

    Progress is stored per user, so there is nothing to read or write
    for an anonymous viewer.
    """
    if not user.is_registered:
        raise AuthorizationError("You must be logged in to track progress.")
    return user


RegisteredUser = Annotated[UserIdentity, Depends(require_registered_user)]
