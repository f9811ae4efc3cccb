"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient, Response
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing the app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-at-least-32-characters-long")
os.environ.setdefault("DEBUG", "true")

from simple_blog.config import get_settings
from simple_blog.database import get_db, init_db
from simple_blog.main import app
from simple_blog.utils.security import SessionTokenCodec, get_token_codec

COOKIE_NAME = get_settings().session_cookie_name


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine shared by every session in a test."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """A standalone session for store-level tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def codec() -> SessionTokenCodec:
    """The token codec the app itself uses."""
    return get_token_codec()


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing the app against the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


def session_cookie(token: str) -> dict[str, str]:
    """Request headers carrying a session cookie."""
    return {"Cookie": f"{COOKIE_NAME}={token}"}


def session_token_from(response: Response) -> str | None:
    """Extract the session token from a response's Set-Cookie header."""
    header = response.headers.get("set-cookie")
    if not header or not header.startswith(f"{COOKIE_NAME}="):
        return None
    return header.split(";", 1)[0].split("=", 1)[1]


@pytest.fixture
def make_user(session_factory: async_sessionmaker[AsyncSession]):
    """Factory that inserts a user and returns it."""
    from simple_blog.services.users import CredentialStore
    from simple_blog.utils.security import hash_password

    async def _make_user(username: str = "alice1", password: str = "secret1"):
        async with session_factory() as session:
            user = await CredentialStore(session).create(username, hash_password(password))
            await session.commit()
            return user

    return _make_user


@pytest.fixture
def make_post(session_factory: async_sessionmaker[AsyncSession]):
    """Factory that inserts a post and returns it."""
    from simple_blog.services.posts import PostStore

    async def _make_post(author_id: int, title: str = "Hi", body: str = "World"):
        async with session_factory() as session:
            post = await PostStore(session).create(title, body, author_id)
            await session.commit()
            return post

    return _make_post
