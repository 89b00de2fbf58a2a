import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


_load_env_file(ENV_TEST_PATH)

TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'envelope_budget_test.db'}",
)

# Settings are read at import time, so these must be set before the app loads.
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("APP_ENV", "test")

from envelope_budget.api.deps import get_feed_client, get_feed_reader  # noqa: E402
from envelope_budget.db.session import get_db  # noqa: E402
from envelope_budget.feed import FeedPage, FeedReader  # noqa: E402
from envelope_budget.main import app  # noqa: E402

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    Not autouse, so pure unit tests run without touching the database.
    """
    from envelope_budget.models.base import Base

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await test_engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session with fresh connection per test."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Create a registered user with a local identity."""
    from envelope_budget.identity import LocalIdentityProvider
    from envelope_budget.repositories.user import UserRepository
    from envelope_budget.services.auth import AuthService

    service = AuthService(LocalIdentityProvider(db_session), UserRepository(db_session))
    return await service.register("testuser@example.com", "password123", "Test User")


@pytest.fixture
async def linked_user(db_session: AsyncSession, test_user):
    """The test user with a bank account linked and no cursor yet."""
    from envelope_budget.repositories.user import UserRepository

    await UserRepository(db_session).set_bank_link(test_user.id, "access-sandbox-test", "item-1")
    await db_session.refresh(test_user)
    return test_user


@pytest.fixture
async def auth_headers(test_user):
    """Provide authentication headers with valid JWT token."""
    from envelope_budget.core.security import create_access_token

    token = create_access_token(test_user.subject_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def fake_feed():
    """Bank feed double; script pages through ``fetch_page.side_effect``."""
    feed = AsyncMock()
    feed.fetch_page.return_value = FeedPage(next_cursor="cursor-empty")
    feed.is_sandbox = True
    return feed


@pytest.fixture
async def client(db_session: AsyncSession, fake_feed):
    """Provide test client with database and bank feed overrides."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_feed_client] = lambda: fake_feed
    app.dependency_overrides[get_feed_reader] = lambda: FeedReader(fake_feed)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
