"""
Unit Tests for Review Service.
"""

from unittest.mock import MagicMock, patch

import pytest

from kashmir_tours.backend.core.exceptions import AuthorizationError, ConflictError, NotFoundError
from kashmir_tours.backend.schemas.review import ReviewCreate
from kashmir_tours.backend.services.review import ReviewService


@pytest.fixture
def service(mock_db_session):
    return ReviewService(mock_db_session)


@pytest.fixture
def tour():
    tour = MagicMock()
    tour.id = "tour-1"
    return tour


class TestTourLookup:
    async def test_unknown_slug(self, service):
        with patch.object(service.tours, "get_bookable_by_slug", return_value=None):
            with pytest.raises(NotFoundError, match="Tour not found"):
                await service.list_reviews("atlantis")

    async def test_lists_by_resolved_tour_id(self, service, tour):
        with patch.object(service.tours, "get_bookable_by_slug", return_value=tour), \
             patch.object(service.repo, "list_for_tour", return_value=[]) as mock_list, \
             patch.object(service.repo, "rating_summary", return_value=(None, 0)):
            reviews, total = await service.list_reviews("gulmarg-gondola-day-trip", limit=5)

        assert (reviews, total) == ([], 0)
        mock_list.assert_called_once_with("tour-1", limit=5, offset=0)


class TestCreateReview:
    async def test_requires_completed_booking(self, service, tour, customer):
        with patch.object(service.tours, "get_bookable_by_slug", return_value=tour), \
             patch.object(service.bookings, "has_completed_booking", return_value=False):
            with pytest.raises(AuthorizationError):
                await service.create_review("gulmarg-gondola-day-trip", customer, ReviewCreate(rating=5))

    async def test_one_review_per_tour(self, service, tour, customer):
        with patch.object(service.tours, "get_bookable_by_slug", return_value=tour), \
             patch.object(service.bookings, "has_completed_booking", return_value=True), \
             patch.object(service.repo, "exists_for", return_value=True):
            with pytest.raises(ConflictError):
                await service.create_review("gulmarg-gondola-day-trip", customer, ReviewCreate(rating=4))

    async def test_creates_for_resolved_tour(self, service, tour, customer):
        review = MagicMock()
        with patch.object(service.tours, "get_bookable_by_slug", return_value=tour), \
             patch.object(service.bookings, "has_completed_booking", return_value=True), \
             patch.object(service.repo, "exists_for", return_value=False), \
             patch.object(service.repo, "create", return_value=review) as mock_create:
            result = await service.create_review(
                "gulmarg-gondola-day-trip", customer, ReviewCreate(rating=5, comment="Snow all the way up"),
            )

        assert result is review
        mock_create.assert_called_once_with(
            user_id="customer-1", tour_id="tour-1", rating=5, comment="Snow all the way up",
        )
