"""
Tour Model.

A bookable package anchored at one destination.
"""

import enum
from decimal import Decimal

from sqlalchemy import CheckConstraint, Enum, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kashmir_tours.backend.models.base import Base, TimestampMixin, UUIDMixin


class TourDifficulty(str, enum.Enum):
    EASY = "easy"
    MODERATE = "moderate"
    CHALLENGING = "challenging"


class Tour(UUIDMixin, TimestampMixin, Base):
    """
    Tour package.

    ``max_group_size`` is the number of seats available on any single
    travel date, shared by all bookings for that date.
    """

    __tablename__ = "tours"
    __table_args__ = (
        CheckConstraint("duration_days >= 1", name="ck_tours_duration_positive"),
        CheckConstraint("max_group_size >= 1", name="ck_tours_group_size_positive"),
        CheckConstraint("price_per_person > 0", name="ck_tours_price_positive"),
    )

    destination_id: Mapped[str] = mapped_column(
        ForeignKey("destinations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(220), unique=True, nullable=False, index=True)
    summary: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration_days: Mapped[int] = mapped_column(nullable=False)
    price_per_person: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    max_group_size: Mapped[int] = mapped_column(nullable=False)
    difficulty: Mapped[TourDifficulty] = mapped_column(
        Enum(TourDifficulty, native_enum=False, length=16, values_callable=lambda e: [m.value for m in e]),
        default=TourDifficulty.EASY,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Tour(id={self.id}, slug={self.slug!r})>"
