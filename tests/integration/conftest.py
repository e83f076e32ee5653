"""
Integration Test Fixtures.

The FastAPI app runs in-process over httpx's ASGI transport with the
database dependency pointed at the per-test SQLite session.
"""

from collections.abc import AsyncGenerator
from datetime import date, timedelta
from decimal import Decimal
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient, Response
from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.core.database import get_db_session
from kashmir_tours.backend.core.security import create_access_token, hash_password
from kashmir_tours.backend.core.utils import generate_booking_reference, utc_today
from kashmir_tours.backend.main import create_app
from kashmir_tours.backend.models.booking import Booking, BookingStatus
from kashmir_tours.backend.models.destination import Destination
from kashmir_tours.backend.models.tour import Tour
from kashmir_tours.backend.models.user import User, UserRole
from kashmir_tours.backend.repositories.booking import BookingRepository
from kashmir_tours.backend.repositories.destination import DestinationRepository
from kashmir_tours.backend.repositories.tour import TourRepository
from kashmir_tours.backend.repositories.user import UserRepository

API = "/api/v1"
PASSWORD = "dal-lake-2026"


# =============================================================================
# HTTP Client
# =============================================================================


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the app, sharing the test database session."""
    app = create_app()

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


class ApiAssertions:
    """Checks for the standard response envelope."""

    @staticmethod
    def assert_success(response: Response, status_code: int = 200) -> Any:
        assert response.status_code == status_code, response.text
        body = response.json()
        assert body["success"] is True
        assert body["error"] is None
        return body["data"]

    @staticmethod
    def assert_error(response: Response, status_code: int, code: str | None = None) -> dict[str, Any]:
        assert response.status_code == status_code, response.text
        body = response.json()
        assert body["success"] is False
        assert body["data"] is None
        if code is not None:
            assert body["error"]["code"] == code
        return body["error"]

    @staticmethod
    def assert_validation_error(response: Response) -> dict[str, Any]:
        return ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")

    @staticmethod
    def assert_paginated(response: Response, total: int) -> list[dict[str, Any]]:
        assert response.status_code == 200, response.text
        body = response.json()
        assert body["success"] is True
        assert body["pagination"]["total"] == total
        return body["data"]


@pytest.fixture
def api() -> type[ApiAssertions]:
    return ApiAssertions


# =============================================================================
# Users
# =============================================================================


async def _create_user(session: AsyncSession, email: str, role: UserRole) -> User:
    return await UserRepository(session).create(
        email=email,
        full_name=email.split("@")[0].title(),
        hashed_password=hash_password(PASSWORD),
        role=role,
    )


def _auth_headers(user: User) -> dict[str, str]:
    token = create_access_token({"sub": user.id, "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def customer(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "aisha@example.com", UserRole.CUSTOMER)


@pytest.fixture
async def other_customer(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "omar@example.com", UserRole.CUSTOMER)


@pytest.fixture
async def admin(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "ops@example.com", UserRole.ADMIN)


@pytest.fixture
def customer_headers(customer: User) -> dict[str, str]:
    return _auth_headers(customer)


@pytest.fixture
def other_headers(other_customer: User) -> dict[str, str]:
    return _auth_headers(other_customer)


@pytest.fixture
def admin_headers(admin: User) -> dict[str, str]:
    return _auth_headers(admin)


# =============================================================================
# Catalogue
# =============================================================================


@pytest.fixture
async def destination(db_session: AsyncSession) -> Destination:
    return await DestinationRepository(db_session).create(
        name="Gulmarg",
        slug="gulmarg",
        region="Baramulla",
        description="Meadow of flowers",
    )


@pytest.fixture
async def tour(db_session: AsyncSession, destination: Destination) -> Tour:
    return await TourRepository(db_session).create(
        destination_id=destination.id,
        title="Gulmarg Gondola Day Trip",
        slug="gulmarg-gondola-day-trip",
        summary="Both gondola phases to Apharwat",
        duration_days=1,
        price_per_person=Decimal("4200.00"),
        max_group_size=10,
    )


@pytest.fixture
def travel_date() -> date:
    """A date comfortably inside the booking window."""
    return utc_today() + timedelta(days=30)


@pytest.fixture
def make_booking(db_session: AsyncSession):
    """
    Insert a booking directly, bypassing the booking rules.

    Lets tests set up past travel dates and any status.
    """

    async def _make(
        user: User,
        tour: Tour,
        travel_date: date,
        travelers: int = 2,
        status: BookingStatus = BookingStatus.PENDING,
    ) -> Booking:
        return await BookingRepository(db_session).create(
            reference=generate_booking_reference("EKT"),
            user_id=user.id,
            tour_id=tour.id,
            travel_date=travel_date,
            travelers=travelers,
            total_price=Decimal(tour.price_per_person) * travelers,
            status=status,
            contact_name=user.full_name,
            contact_phone="+91 94190 00000",
        )

    return _make
