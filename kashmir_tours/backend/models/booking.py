"""
Booking Model.

A customer's reservation of seats on a tour for one travel date.
"""

import enum
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, DateTime, Enum, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kashmir_tours.backend.models.base import Base, TimestampMixin, UUIDMixin


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# Statuses whose travelers occupy seats on the travel date
SEAT_HOLDING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    """Return True if the status machine allows ``current -> target``."""
    return target in ALLOWED_TRANSITIONS[current]


class Booking(UUIDMixin, TimestampMixin, Base):
    """
    Booking record.

    ``total_price`` is fixed when the booking is made; later tour price
    changes do not affect it.
    """

    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("travelers >= 1", name="ck_bookings_travelers_positive"),
        Index("ix_bookings_tour_date_status", "tour_id", "travel_date", "status"),
    )

    reference: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    tour_id: Mapped[str] = mapped_column(
        ForeignKey("tours.id", ondelete="RESTRICT"),
        nullable=False,
    )
    travel_date: Mapped[date] = mapped_column(Date, nullable=False)
    travelers: Mapped[int] = mapped_column(nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, native_enum=False, length=16, values_callable=lambda e: [m.value for m in e]),
        default=BookingStatus.PENDING,
        nullable=False,
    )
    contact_name: Mapped[str] = mapped_column(String(120), nullable=False)
    contact_phone: Mapped[str] = mapped_column(String(32), nullable=False)
    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    cancellation_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Booking(reference={self.reference!r}, status={self.status.value})>"
