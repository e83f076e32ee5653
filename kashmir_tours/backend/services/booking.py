"""
Booking Service.

Seat reservation, the booking status machine and who may drive it.

Status changes:
    pending   -> confirmed   admin
    pending   -> cancelled   owner or admin
    confirmed -> cancelled   admin, or owner up to the cancellation cutoff
    confirmed -> completed   admin, once the travel date has been reached
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.core.config import get_app_config
from kashmir_tours.backend.core.config_schema import BookingRulesSchema
from kashmir_tours.backend.core.exceptions import (
    CapacityExceededError,
    ConflictError,
    DatabaseError,
    InvalidStateTransitionError,
    NotFoundError,
    ValidationError,
)
from kashmir_tours.backend.core.utils import generate_booking_reference, utc_now, utc_today
from kashmir_tours.backend.models.booking import Booking, BookingStatus, can_transition
from kashmir_tours.backend.models.user import User
from kashmir_tours.backend.repositories.booking import BookingRepository
from kashmir_tours.backend.repositories.tour import TourRepository
from kashmir_tours.backend.schemas.booking import BookingCreate
from kashmir_tours.backend.services.base import BaseService

REFERENCE_ATTEMPTS = 5


class BookingService(BaseService):
    """Service for bookings."""

    def __init__(self, session: AsyncSession, rules: BookingRulesSchema | None = None) -> None:
        super().__init__(session)
        self.repo = BookingRepository(session)
        self.tours = TourRepository(session)
        self.rules = rules or get_app_config().application.booking

    async def create_booking(self, user: User, data: BookingCreate) -> Booking:
        """
        Reserve seats on a tour for one travel date.

        The tour row is locked for the rest of the transaction so two
        concurrent bookings cannot both take the last seats.

        Raises:
            ValidationError: Travel date outside the booking window, or too
                many travelers for one booking
            NotFoundError: Tour missing or inactive
            CapacityExceededError: Not enough seats left on the date
        """
        self._validate_travel_date(data.travel_date)
        if data.travelers > self.rules.max_travelers_per_booking:
            raise ValidationError(
                f"At most {self.rules.max_travelers_per_booking} travelers per booking",
                details={"travelers": data.travelers},
            )

        tour = await self.tours.get_for_update(data.tour_id)
        if tour is None or not tour.is_active:
            raise NotFoundError("Tour not found")

        booked = await self.repo.booked_seats(tour.id, data.travel_date)
        remaining = tour.max_group_size - booked
        if data.travelers > remaining:
            raise CapacityExceededError(
                details={"requested": data.travelers, "remaining": max(remaining, 0)},
            )

        reference = await self._new_reference()
        total_price = (Decimal(tour.price_per_person) * data.travelers).quantize(Decimal("0.01"))

        self._log_operation(
            "Creating booking",
            reference=reference,
            tour_id=tour.id,
            travel_date=data.travel_date.isoformat(),
            travelers=data.travelers,
        )
        return await self._execute_db_operation(
            "create_booking",
            self.repo.create(
                reference=reference,
                user_id=user.id,
                tour_id=tour.id,
                travel_date=data.travel_date,
                travelers=data.travelers,
                total_price=total_price,
                status=BookingStatus.PENDING,
                contact_name=data.contact_name,
                contact_phone=data.contact_phone,
                special_requests=data.special_requests,
            ),
        )

    async def get_booking(self, reference: str, actor: User) -> Booking:
        """
        Get a booking visible to the caller.

        Raises:
            NotFoundError: Unknown reference, or the caller is neither the
                owner nor an admin
        """
        booking = await self.repo.get_by_reference(reference)
        if booking is None or (booking.user_id != actor.id and not actor.is_admin):
            raise NotFoundError("Booking not found")
        return booking

    async def list_user_bookings(
        self,
        user: User,
        status: BookingStatus | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Booking], int]:
        filters = {"user_id": user.id, "status": status}
        bookings = await self.repo.list_filtered(limit=limit, offset=offset, **filters)
        total = await self.repo.count_filtered(**filters)
        return bookings, total

    async def list_all_bookings(
        self,
        status: BookingStatus | None = None,
        tour_id: str | None = None,
        travel_date: date | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Booking], int]:
        filters = {"status": status, "tour_id": tour_id, "travel_date": travel_date}
        bookings = await self.repo.list_filtered(limit=limit, offset=offset, **filters)
        total = await self.repo.count_filtered(**filters)
        return bookings, total

    async def cancel_booking(self, reference: str, actor: User, reason: str | None = None) -> Booking:
        """
        Cancel a booking, releasing its seats.

        Raises:
            NotFoundError: Booking not visible to the caller
            InvalidStateTransitionError: Booking already cancelled or completed
            ConflictError: Owner cancelling a confirmed booking inside the cutoff
        """
        booking = await self.get_booking(reference, actor)
        self._check_transition(booking, BookingStatus.CANCELLED)

        if booking.status == BookingStatus.CONFIRMED and not actor.is_admin:
            starts_at = datetime.combine(booking.travel_date, time.min)
            cutoff = timedelta(hours=self.rules.cancellation_cutoff_hours)
            if starts_at - utc_now() < cutoff:
                raise ConflictError(
                    "Confirmed bookings can no longer be cancelled online",
                    code="BOOKING_CANCELLATION_CLOSED",
                    details={"cutoff_hours": self.rules.cancellation_cutoff_hours},
                )

        return await self._set_status(
            booking,
            BookingStatus.CANCELLED,
            actor,
            cancelled_at=utc_now(),
            cancellation_reason=reason,
        )

    async def confirm_booking(self, reference: str, actor: User) -> Booking:
        """Confirm a pending booking (admin)."""
        booking = await self.get_booking(reference, actor)
        self._check_transition(booking, BookingStatus.CONFIRMED)
        return await self._set_status(booking, BookingStatus.CONFIRMED, actor)

    async def complete_booking(self, reference: str, actor: User) -> Booking:
        """
        Mark a confirmed booking as travelled (admin).

        Raises:
            ConflictError: Travel date still in the future
        """
        booking = await self.get_booking(reference, actor)
        self._check_transition(booking, BookingStatus.COMPLETED)
        if booking.travel_date > utc_today():
            raise ConflictError(
                "Booking cannot be completed before its travel date",
                code="BOOKING_NOT_TRAVELLED",
                details={"travel_date": booking.travel_date.isoformat()},
            )
        return await self._set_status(booking, BookingStatus.COMPLETED, actor)

    def _validate_travel_date(self, travel_date: date) -> None:
        today = utc_today()
        earliest = today + timedelta(days=self.rules.min_lead_days)
        latest = today + timedelta(days=self.rules.max_advance_days)
        if not earliest <= travel_date <= latest:
            raise ValidationError(
                "Travel date is outside the booking window",
                details={"earliest": earliest.isoformat(), "latest": latest.isoformat()},
            )

    @staticmethod
    def _check_transition(booking: Booking, target: BookingStatus) -> None:
        if not can_transition(booking.status, target):
            raise InvalidStateTransitionError(booking.status.value, target.value)

    async def _set_status(self, booking: Booking, target: BookingStatus, actor: User, **fields) -> Booking:
        self._log_operation(
            "Booking status changed",
            reference=booking.reference,
            from_status=booking.status.value,
            to_status=target.value,
            actor_id=actor.id,
        )
        return await self._execute_db_operation(
            f"booking_{target.value}",
            self.repo.update(booking.id, status=target, **fields),
        )

    async def _new_reference(self) -> str:
        for _ in range(REFERENCE_ATTEMPTS):
            reference = generate_booking_reference(self.rules.reference_prefix)
            if not await self.repo.reference_exists(reference):
                return reference
        raise DatabaseError("Could not allocate a booking reference")
