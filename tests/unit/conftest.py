"""Unit test fixtures.

These fixtures provide:
- Mocked AsyncSession (SQLAlchemy database sessions)
- UserIdentity instances (registered and anonymous)
- Processing limits, render context and renderers for table processing
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from table_progress_tracking.core.auth import UserIdentity
from table_progress_tracking.tables import ProcessingLimits, RenderContext

# ---------------------------------------------------------------------------
# Database Session Mocks
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """Create a mocked AsyncSession for unit tests.

    Returns:
        Mocked AsyncSession with common methods configured.
    """
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.add = MagicMock()
    return session


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_user() -> UserIdentity:
    """Create a registered test user identity."""
    return UserIdentity(
        user_id="test-user-123",
        email="test@example.com",
        display_name="Test User",
    )


@pytest.fixture
def mock_anonymous_user() -> UserIdentity:
    """Create the anonymous identity."""
    return UserIdentity.anonymous()


# ---------------------------------------------------------------------------
# Table Processing
# ---------------------------------------------------------------------------


class PassthroughRenderer:
    """Renderer returning its input unchanged, so tests control the HTML exactly."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def render(self, raw_input: str, context: RenderContext) -> str:
        self.calls.append(raw_input)
        return raw_input


@pytest.fixture
def limits() -> ProcessingLimits:
    """Default processing limits."""
    return ProcessingLimits()


@pytest.fixture
def render_context() -> RenderContext:
    """Render context for article 42."""
    return RenderContext(article_id=42)


@pytest.fixture
def renderer() -> PassthroughRenderer:
    """Renderer that passes HTML through untouched."""
    return PassthroughRenderer()
