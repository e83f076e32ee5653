"""
Unit Test Fixtures.

Fixtures for unit tests - database access is mocked.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from kashmir_tours.backend.core.config_schema import BookingRulesSchema
from kashmir_tours.backend.models.user import UserRole


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = BookingService(mock_db_session, rules=booking_rules)
    """
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def booking_rules() -> BookingRulesSchema:
    """Booking rules with the same values as application.yaml."""
    return BookingRulesSchema(
        min_lead_days=2,
        max_advance_days=365,
        max_travelers_per_booking=12,
        cancellation_cutoff_hours=48,
        reference_prefix="EKT",
    )


def _user(user_id: str, role: UserRole) -> MagicMock:
    user = MagicMock()
    user.id = user_id
    user.role = role
    user.is_admin = role == UserRole.ADMIN
    user.is_active = True
    return user


@pytest.fixture
def customer() -> MagicMock:
    return _user("customer-1", UserRole.CUSTOMER)


@pytest.fixture
def other_customer() -> MagicMock:
    return _user("customer-2", UserRole.CUSTOMER)


@pytest.fixture
def admin() -> MagicMock:
    return _user("admin-1", UserRole.ADMIN)
