"""Databricks authentication utilities."""

from dataclasses import dataclass
from typing import Any

from databricks.sdk import WorkspaceClient

from table_progress_tracking.core.config import get_settings

ANONYMOUS_USER_ID = "anonymous"


@dataclass(frozen=True)
class UserIdentity:
    """User identity extracted from Databricks authentication."""

    user_id: str
    email: str
    display_name: str

    @property
    def is_registered(self) -> bool:
        """Whether the caller is a real workspace user."""
        return self.user_id != ANONYMOUS_USER_ID

    @classmethod
    def from_workspace_user(cls, user: Any) -> "UserIdentity":
        """Create from Databricks workspace user object."""
        return cls(
            user_id=str(user.id) if user.id else user.user_name,
            email=user.user_name or "",
            display_name=user.display_name or user.user_name or "Unknown User",
        )

    @classmethod
    def anonymous(cls) -> "UserIdentity":
        """Create anonymous user for development/testing."""
        return cls(
            user_id=ANONYMOUS_USER_ID,
            email="anonymous@local.dev",
            display_name="Anonymous User",
        )


def get_workspace_client(token: str | None = None) -> WorkspaceClient:
    """Get Databricks WorkspaceClient.

    Args:
        token: OAuth token forwarded for the calling user. If not provided,
            uses the profile or token from settings, then the SDK default.

    Returns:
        Configured WorkspaceClient instance.
    """
    settings = get_settings()

    if token:
        return WorkspaceClient(host=settings.databricks_host, token=token)

    if settings.databricks_config_profile:
        return WorkspaceClient(profile=settings.databricks_config_profile)

    if settings.databricks_host and settings.databricks_token:
        return WorkspaceClient(
            host=settings.databricks_host,
            token=settings.databricks_token,
        )

    return WorkspaceClient()


def get_current_user(client: WorkspaceClient) -> UserIdentity:
    """Get current authenticated user from WorkspaceClient.

    Falls back to the anonymous identity when the workspace cannot
    identify the caller.
    """
    try:
        current_user = client.current_user.me()
        return UserIdentity.from_workspace_user(current_user)
    except Exception:
        return UserIdentity.anonymous()


def extract_forwarded_token(headers: dict[str, str]) -> str | None:
    """Extract the user's OAuth token forwarded by the Databricks Apps proxy."""
    return headers.get("x-forwarded-access-token")
