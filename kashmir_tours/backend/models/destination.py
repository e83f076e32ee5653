"""
Destination Model.

A place in the valley that tours visit (Srinagar, Gulmarg, Pahalgam, ...).
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kashmir_tours.backend.models.base import Base, TimestampMixin, UUIDMixin


class Destination(UUIDMixin, TimestampMixin, Base):
    """Destination with a unique name and URL slug. Deleting only deactivates it."""

    __tablename__ = "destinations"

    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(140), unique=True, nullable=False, index=True)
    region: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Destination(id={self.id}, slug={self.slug!r})>"
