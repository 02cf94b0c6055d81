from typing import AsyncGenerator, Callable
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from nt_savitarna.core.database import create_all, create_sessionmaker
from nt_savitarna.core.database.entities import User
from nt_savitarna.core.database.repositories import UserRepository
from nt_savitarna.core.models.domain.enums import UserRole
from nt_savitarna.server.core.constant import AUTH_COOKIE_NAME
from nt_savitarna.server.core.security import create_access_token, hash_password

# Use in-memory SQLite for testing
# Note: We use check_same_thread=False for SQLite with async
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_PASSWORD = "admin123"
CLIENT_PASSWORD = "client123"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from nt_savitarna.core.database import get_session
    from nt_savitarna.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("nt_savitarna.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()


async def _create_user(session: AsyncSession, email: str, password: str, role: UserRole, **fields) -> User:
    user = User(email=email, password_hash=hash_password(password, rounds=4), role=role.value, **fields)
    return await UserRepository(session).create(user)


@pytest_asyncio.fixture
async def admin_user(session: AsyncSession) -> User:
    return await _create_user(session, "admin@1partner.lt", ADMIN_PASSWORD, UserRole.admin)


@pytest_asyncio.fixture
async def client_user(session: AsyncSession) -> User:
    return await _create_user(
        session,
        "klientas@example.lt",
        CLIENT_PASSWORD,
        UserRole.client,
        first_name="Jonas",
        last_name="Klientas",
        phone="+37061234567",
    )


@pytest.fixture
def login(client: AsyncClient) -> Callable[[User], AsyncClient]:
    """Put a session cookie for ``user`` on the test client."""

    def _login(user: User) -> AsyncClient:
        client.cookies.set(AUTH_COOKIE_NAME, create_access_token(user.id, user.email, user.role))
        return client

    return _login


@pytest.fixture
def as_admin(login, admin_user: User) -> AsyncClient:
    return login(admin_user)


@pytest.fixture
def as_client(login, client_user: User) -> AsyncClient:
    return login(client_user)
