"""
Test configuration and fixtures for the rental premises API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

# Settings are read at import time; keep tests off the deployment database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")

import io
import pytest
from typing import AsyncGenerator, Optional
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from starlette.datastructures import Headers, UploadFile
from httpx import AsyncClient, ASGITransport

from rental_premises.main import app
from rental_premises.database import Base, get_db, transaction
from rental_premises.models.user import User, UserRole, AuditLogEntry
from rental_premises.models.building import Building
from rental_premises.repositories.base import BaseRepository
from rental_premises.repositories.user import UserRepository
from rental_premises.repositories.building import BuildingRepository
from rental_premises.repositories.image import ImageRepository
from rental_premises.services.auth import AuthService
from rental_premises.services.building import BuildingService
from rental_premises.utils.auth import create_access_token


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def building_repository(db_session: AsyncSession) -> BuildingRepository:
    return BuildingRepository(db_session)


@pytest.fixture
def image_repository(db_session: AsyncSession) -> ImageRepository:
    return ImageRepository(db_session)


@pytest.fixture
def log_repository(db_session: AsyncSession) -> BaseRepository:
    return BaseRepository(AuditLogEntry, db_session)


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    return AuthService(db_session)


@pytest.fixture
def building_service(db_session: AsyncSession) -> BuildingService:
    return BuildingService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        username: str = "owner",
        password: str = "testpassword123",
        role: UserRole = UserRole.USER,
        is_active: bool = True
    ) -> User:
        """Create and commit a test user."""
        async with transaction(user_repo.db):
            return await user_repo.create_user({
                "username": username,
                "password": password,
                "role": role,
                "is_active": is_active,
            })


class BuildingFactory:
    """Factory for creating test buildings without going through the service."""

    @staticmethod
    async def create_building(
        building_repo: BuildingRepository,
        owner: User,
        name: str = "Test Premises",
        location: str = "Test City",
        price: int = 1000,
        approved: bool = False
    ) -> Building:
        async with transaction(building_repo.db):
            return await building_repo.save(Building(
                name=name,
                location=location,
                price=price,
                approved=approved,
                owner=owner
            ))


class UploadFactory:
    """Factory for in-memory uploads shaped like multipart files."""

    @staticmethod
    def create_upload(
        data: bytes = b"\xff\xd8\xff\xe0fake-jpeg",
        filename: str = "photo.jpg",
        content_type: str = "image/jpeg",
        size: Optional[int] = None,
        unknown_size: bool = False
    ) -> UploadFile:
        return UploadFile(
            file=io.BytesIO(data),
            filename=filename,
            size=None if unknown_size else (len(data) if size is None else size),
            headers=Headers({"content-type": content_type})
        )

    @staticmethod
    def empty_upload(filename: str = "") -> UploadFile:
        return UploadFactory.create_upload(data=b"", filename=filename, content_type="application/octet-stream")


class FailingUpload:
    """Upload whose payload cannot be read."""

    filename = "broken.jpg"
    content_type = "image/jpeg"
    size = 10

    async def read(self, size: int = -1) -> bytes:
        raise OSError("disk read failed")


# Common test fixtures
@pytest.fixture
async def test_owner(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, username="owner")


@pytest.fixture
async def test_other_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, username="neighbour")


@pytest.fixture
async def test_admin(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, username="admin", role=UserRole.ADMIN)


@pytest.fixture
async def test_building(building_repository: BuildingRepository, test_owner: User) -> Building:
    return await BuildingFactory.create_building(
        building_repository,
        owner=test_owner,
        name="Loft",
        location="Moscow",
        price=50000
    )


def auth_headers(user: User) -> dict:
    """Bearer header for a stored user."""
    token = create_access_token(username=user.username, role=user.role)
    return {"Authorization": f"Bearer {token}"}
