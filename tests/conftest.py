import asyncio
import os
import sys
import tempfile
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"
TEST_DB_PATH = Path(tempfile.gettempdir()) / "clarity_test.db"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


# Settings are read at import time, so the environment must be ready first.
_load_env_file(ENV_TEST_PATH)
os.environ.setdefault("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{TEST_DB_PATH}")
os.environ.setdefault("DATABASE_URL", os.environ["TEST_DATABASE_URL"])
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ["GROQ_API_KEY"] = ""

from clarity.api.deps import get_category_resolver  # noqa: E402
from clarity.db.session import get_db  # noqa: E402
from clarity.main import app  # noqa: E402

TEST_DATABASE_URL = os.environ["TEST_DATABASE_URL"]

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    Not autouse: pure unit tests never touch the database.
    """
    from clarity.models.base import Base

    async with test_engine.begin() as conn:
        # Leftovers from an interrupted run would leak rows into this test
        await conn.run_sync(Base.metadata.drop_all)
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
    """Create a test user for authentication tests."""
    from clarity.core.security import hash_password
    from clarity.models.user import User
    from clarity.repositories.user import UserRepository

    repo = UserRepository(db_session)
    user = User(
        email="testuser@example.com",
        password_hash=hash_password("password123"),
        name="Test User",
    )
    return await repo.create(user)


@pytest.fixture
async def other_user(db_session: AsyncSession):
    """Create a second user for ownership tests."""
    from clarity.core.security import hash_password
    from clarity.models.user import User
    from clarity.repositories.user import UserRepository

    repo = UserRepository(db_session)
    user = User(
        email="other@example.com",
        password_hash=hash_password("password456"),
        name="Other User",
    )
    return await repo.create(user)


@pytest.fixture
async def auth_headers(test_user):
    """Provide authentication headers with valid JWT token."""
    from clarity.core.security import create_access_token

    token = create_access_token(user_id=test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def other_auth_headers(other_user):
    from clarity.core.security import create_access_token

    token = create_access_token(user_id=other_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


class FakeBackend:
    """Categorization backend returning a canned answer."""

    def __init__(self, answer: str | None = None, error: Exception | None = None, delay: float = 0):
        self.answer = answer
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def fake_backend():
    """The FakeBackend class, for tests that build their own resolver."""
    return FakeBackend


@pytest.fixture
def use_backend():
    """Swap the app's category resolver for one using the given backend."""
    from clarity.categorization.resolver import CategoryResolver

    def _install(backend) -> None:
        resolver = CategoryResolver(backend, timeout_seconds=1)
        app.dependency_overrides[get_category_resolver] = lambda: resolver

    yield _install
    app.dependency_overrides.pop(get_category_resolver, None)
