"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, handle transactions, and implement
business rules.

Usage:
    from kashmir_tours.backend.services.base import BaseService

    class DestinationService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = DestinationRepository(session)

        async def create_destination(self, data: DestinationCreate) -> Destination:
            if await self.repo.name_or_slug_taken(data.name, slugify(data.name)):
                raise ConflictError("Destination already exists")
            return await self._execute_db_operation(
                "create_destination",
                self.repo.create(**data.model_dump()),
            )
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.core.exceptions import ConflictError, DatabaseError
from kashmir_tours.backend.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session management
    - Logging context
    - Error wrapping for database operations

    Subclasses should:
    - Call super().__init__(session) in their __init__
    - Initialize repositories in __init__
    - Implement business logic methods
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
    ) -> T:
        """
        Execute a database operation with error handling.

        Wraps database operations to convert SQLAlchemy exceptions
        to application-specific exceptions.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute

        Returns:
            Result of the coroutine

        Raises:
            ConflictError: For unique constraint violations
            DatabaseError: For other database errors
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e)},
            )
            error_str = str(e).lower()
            if "unique" in error_str or "duplicate" in error_str:
                raise ConflictError("Resource already exists") from e
            raise DatabaseError(f"Database constraint violation: {operation}") from e
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}") from e

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Log a service operation with context."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(self, message: str, **context: Any) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
