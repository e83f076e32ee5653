"""
User Repository.

Data access layer for accounts.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.models.user import User
from kashmir_tours.backend.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model. Email lookups are case-insensitive."""

    model = User

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_email(self, email: str) -> User | None:
        """Find a user by email address."""
        result = await self.session.execute(
            select(User).where(User.email == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check whether an account already uses this email."""
        result = await self.session.execute(
            select(User.id).where(User.email == email.strip().lower())
        )
        return result.scalar_one_or_none() is not None
