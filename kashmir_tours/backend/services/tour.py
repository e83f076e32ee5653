"""
Tour Service.

Business logic for the tour catalogue and seat availability.
"""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.core.exceptions import ConflictError, NotFoundError, ValidationError
from kashmir_tours.backend.core.utils import slugify, utc_today
from kashmir_tours.backend.models.tour import Tour
from kashmir_tours.backend.repositories.booking import BookingRepository
from kashmir_tours.backend.repositories.destination import DestinationRepository
from kashmir_tours.backend.repositories.review import ReviewRepository
from kashmir_tours.backend.repositories.tour import TourFilters, TourRepository
from kashmir_tours.backend.schemas.tour import AvailabilityResponse, TourCreate, TourUpdate
from kashmir_tours.backend.services.base import BaseService


class TourService(BaseService):
    """Service for tours."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = TourRepository(session)
        self.destinations = DestinationRepository(session)
        self.bookings = BookingRepository(session)
        self.reviews = ReviewRepository(session)

    async def list_tours(
        self,
        filters: TourFilters,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Tour], int]:
        """
        List bookable tours with total count for pagination.

        Raises:
            ValidationError: If min_price is greater than max_price
        """
        if (
            filters.min_price is not None
            and filters.max_price is not None
            and filters.min_price > filters.max_price
        ):
            raise ValidationError(
                "min_price must not exceed max_price",
                details={"min_price": str(filters.min_price), "max_price": str(filters.max_price)},
            )

        tours = await self.repo.list_catalogue(filters, limit=limit, offset=offset)
        total = await self.repo.count_catalogue(filters)
        return tours, total

    async def get_tour(self, slug: str) -> Tour:
        """
        Get a bookable tour by slug.

        Raises:
            NotFoundError: If missing, inactive, or its destination is inactive
        """
        tour = await self.repo.get_bookable_by_slug(slug)
        if tour is None:
            raise NotFoundError("Tour not found")
        return tour

    async def get_rating(self, tour_id: str) -> tuple[float | None, int]:
        """Average rating rounded to one decimal, and review count."""
        average, count = await self.reviews.rating_summary(tour_id)
        return (round(average, 1) if average is not None else None), count

    async def get_availability(self, slug: str, travel_date: date) -> AvailabilityResponse:
        """Seats held and remaining on one travel date."""
        tour = await self.get_tour(slug)
        booked = await self.bookings.booked_seats(tour.id, travel_date)
        return AvailabilityResponse(
            tour_id=tour.id,
            travel_date=travel_date,
            capacity=tour.max_group_size,
            booked=booked,
            remaining=max(tour.max_group_size - booked, 0),
        )

    async def create_tour(self, data: TourCreate) -> Tour:
        """
        Create a tour under an active destination.

        Raises:
            NotFoundError: If the destination is missing or inactive
            ConflictError: If the title produces a slug already in use
        """
        await self._require_active_destination(data.destination_id)

        slug = slugify(data.title)
        if await self.repo.slug_taken(slug):
            raise ConflictError("A tour with this title already exists")

        self._log_operation("Creating tour", slug=slug, destination_id=data.destination_id)
        return await self._execute_db_operation(
            "create_tour",
            self.repo.create(slug=slug, **data.model_dump()),
        )

    async def update_tour(self, tour_id: str, data: TourUpdate) -> Tour:
        """
        Update a tour. Retitling regenerates the slug.

        Raises:
            NotFoundError: If the tour or a new destination is not found
            ConflictError: If the new slug is taken, or the group size would
                drop below seats already held on an upcoming date
        """
        tour = await self.repo.get_by_id(tour_id)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return tour

        if update_data.get("destination_id") not in (None, tour.destination_id):
            await self._require_active_destination(update_data["destination_id"])

        if "title" in update_data:
            update_data["slug"] = slugify(update_data["title"])
            if await self.repo.slug_taken(update_data["slug"], exclude_id=tour.id):
                raise ConflictError("A tour with this title already exists")

        new_size = update_data.get("max_group_size")
        if new_size is not None and new_size < tour.max_group_size:
            held = await self.bookings.max_booked_seats_from(tour.id, utc_today())
            if new_size < held:
                raise ConflictError(
                    "Group size is below seats already booked on an upcoming date",
                    details={"requested": new_size, "booked": held},
                )

        self._log_operation("Updating tour", tour_id=tour_id, fields=list(update_data.keys()))
        return await self._execute_db_operation(
            "update_tour",
            self.repo.update(tour_id, **update_data),
        )

    async def deactivate_tour(self, tour_id: str) -> Tour:
        """Soft-delete a tour. Existing bookings are left untouched."""
        await self.repo.get_by_id(tour_id)
        self._log_operation("Deactivating tour", tour_id=tour_id)
        return await self._execute_db_operation(
            "deactivate_tour",
            self.repo.update(tour_id, is_active=False),
        )

    async def _require_active_destination(self, destination_id: str) -> None:
        destination = await self.destinations.get_by_id_or_none(destination_id)
        if destination is None or not destination.is_active:
            raise NotFoundError("Destination not found")
