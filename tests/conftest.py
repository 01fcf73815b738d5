"""Pytest configuration for all tests."""

import os

os.environ.setdefault("OUTLETBASE_ENVIRONMENT", "testing")
os.environ.setdefault("OUTLETBASE_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("OUTLETBASE_SECRET_KEY", "test-secret-key-for-outletbase-tests")
os.environ.setdefault("OUTLETBASE_GEOCODING_ENABLED", "false")
os.environ.setdefault("OUTLETBASE_EMAIL_PROVIDER", "console")
os.environ.setdefault("OUTLETBASE_EXTERNAL_URL", "https://shop.example.com")

import uuid
from typing import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from outletbase.core.config import Settings, get_settings
from outletbase.domain.entities import Coordinates, CurrentUser
from outletbase.infrastructure.auth import jwt_service
from outletbase.infrastructure.persistence.database import Base
from outletbase.infrastructure.persistence.models import OutletAdminModel, OutletModel, UserModel
from outletbase.infrastructure.services.email import EmailProvider
from outletbase.infrastructure.services.email_service import EmailService


class FakeGeocoder:
    """Geocoder answering from a fixed table keyed by postal code or address."""

    def __init__(self) -> None:
        self.places: dict[str, Coordinates] = {}
        self.calls: list[tuple[str, str | None]] = []

    async def resolve(self, address: str, postal_code: str | None = None) -> Coordinates | None:
        self.calls.append((address, postal_code))
        if postal_code and postal_code in self.places:
            return self.places[postal_code]
        return self.places.get(address)


class RecordingProvider(EmailProvider):
    """Email provider that keeps sent messages in memory."""

    name = "recording"

    def __init__(self) -> None:
        self.sent: list[dict[str, str | None]] = []
        self.fail = False

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
        reply_to: str | None = None,
    ) -> bool:
        if self.fail:
            raise ConnectionError("SMTP connection refused")
        self.sent.append(
            {"to": to, "subject": subject, "html": html_body, "text": text_body}
        )
        return True


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def email_provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def email_service(email_provider: RecordingProvider, settings: Settings) -> EmailService:
    return EmailService(email_provider, settings=settings)


@pytest.fixture
def owner() -> CurrentUser:
    return CurrentUser(user_id="owner-1", email="owner@example.com", name="Olivia Owner")


@pytest.fixture
def invitee() -> CurrentUser:
    return CurrentUser(user_id="invitee-1", email="Admin@Example.com", name="Arun Admin")


@pytest.fixture
def stranger() -> CurrentUser:
    return CurrentUser(user_id="stranger-1", email="stranger@example.com")


@pytest.fixture
def make_outlet(
    db_session: AsyncSession,
) -> Callable[..., Awaitable[OutletModel]]:
    """Factory inserting an outlet (and its owner row) directly."""

    async def _make(
        owner: CurrentUser,
        name: str = "Marina Kitchen",
        postal_code: str = "600001",
        latitude: float | None = 13.0827,
        longitude: float | None = 80.2707,
        delivery_radius_km: float = 10.0,
        is_active: bool = True,
    ) -> OutletModel:
        if await db_session.get(UserModel, owner.user_id) is None:
            db_session.add(UserModel(id=owner.user_id, email=owner.email, name=owner.name))
        outlet = OutletModel(
            id=str(uuid.uuid4()),
            name=name,
            address=f"{name} Road, Chennai",
            postal_code=postal_code,
            latitude=latitude,
            longitude=longitude,
            delivery_radius_km=delivery_radius_km,
            owner_id=owner.user_id,
            is_active=is_active,
        )
        db_session.add(outlet)
        await db_session.commit()
        return outlet

    return _make


@pytest.fixture
def make_admin(
    db_session: AsyncSession,
) -> Callable[[OutletModel, CurrentUser], Awaitable[CurrentUser]]:
    """Factory granting a user the admin role on an outlet directly."""

    async def _make(outlet: OutletModel, user: CurrentUser) -> CurrentUser:
        if await db_session.get(UserModel, user.user_id) is None:
            db_session.add(UserModel(id=user.user_id, email=user.email, name=user.name))
        db_session.add(
            OutletAdminModel(
                id=str(uuid.uuid4()), outlet_id=outlet.id, user_id=user.user_id, role="admin"
            )
        )
        await db_session.commit()
        return user

    return _make


@pytest.fixture
def auth_headers() -> Callable[[CurrentUser], dict[str, str]]:
    """Build an Authorization header for a user."""

    def _headers(user: CurrentUser) -> dict[str, str]:
        token = jwt_service.create_access_token(user.user_id, user.email, user.name)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    geocoder: FakeGeocoder,
    email_service: EmailService,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database, geocoder and email."""
    from outletbase.infrastructure.api.app import app
    from outletbase.infrastructure.api.dependencies import get_email_service, get_geocoder
    from outletbase.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[get_email_service] = lambda: email_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}
