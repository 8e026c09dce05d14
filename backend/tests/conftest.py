"""
Pytest configuration and shared fixtures for backend tests.
"""

import os
import sys
from pathlib import Path

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings are read at import time; point them at throwaway backends first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("REDIS_URL", "")
os.environ.setdefault("RESEND_API_KEY", "")

import pytest
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Import after path is set
from core.domain import Project, ProjectMemberRole, Task, User
from infrastructure.database.connection import get_db
from infrastructure.database.models import Base
from infrastructure.database.repositories import (
    SqlAlchemyProjectRepository,
    SqlAlchemyTaskRepository,
    SqlAlchemyUserRepository,
)


# Database URL for testing (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_maker(db_engine) -> async_sessionmaker:
    return async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_maker() as session:
        yield session
        await session.rollback()


# ============================================================================
# Users, projects and tasks
# ============================================================================


async def create_user(db_session: AsyncSession, email: str, name: str) -> User:
    user = await SqlAlchemyUserRepository(db_session).add(User(email=email, name=name))
    await db_session.commit()
    return user


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Project owner and default actor."""
    return await create_user(db_session, "test@example.com", "Test User")


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A second user with no project access."""
    return await create_user(db_session, "other@example.com", "Other User")


@pytest.fixture
async def test_project(db_session: AsyncSession, test_user: User) -> Project:
    projects = SqlAlchemyProjectRepository(db_session)
    project = await projects.add(Project(name="Launch", owner_id=test_user.id))
    await projects.add_member(project.id, test_user.id, ProjectMemberRole.OWNER)
    await db_session.commit()
    return project


@pytest.fixture
async def test_task(db_session: AsyncSession, test_project: Project, test_user: User) -> Task:
    task = await SqlAlchemyTaskRepository(db_session).add(
        Task(project_id=test_project.id, title="Write release notes", created_by=test_user.id)
    )
    await db_session.commit()
    return task


# ============================================================================
# HTTP client
# ============================================================================


def make_auth_headers(user: User) -> dict:
    from api.dependencies import token_service

    access_token = token_service.create_access_token(user_id=user.id, email=user.email)
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Generate authentication headers for test user."""
    return make_auth_headers(test_user)


@pytest.fixture
def other_auth_headers(other_user: User) -> dict:
    return make_auth_headers(other_user)


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    # Import app here so the environment above is applied first
    from main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    # Reset rate limiter state between tests to prevent cross-test 429s
    app.state.limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
