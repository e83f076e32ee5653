"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        code: str = "SYS_INTERNAL_ERROR",
        details: dict | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        super().__init__(message, code="VAL_VALIDATION_ERROR", details=details)


class AuthenticationError(ApplicationError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, code="AUTH_UNAUTHORIZED")


class AuthorizationError(ApplicationError):
    """Raised when authorization fails."""

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message, code="AUTHZ_FORBIDDEN")


class ConflictError(ApplicationError):
    """Raised when there is a state conflict."""

    def __init__(
        self,
        message: str = "Resource conflict",
        code: str = "RES_CONFLICT",
        details: dict | None = None,
    ) -> None:
        super().__init__(message, code=code, details=details)


class CapacityExceededError(ConflictError):
    """Raised when a booking would overfill a tour departure."""

    def __init__(self, message: str = "Not enough seats left", details: dict | None = None) -> None:
        super().__init__(message, code="BOOKING_CAPACITY_EXCEEDED", details=details)


class InvalidStateTransitionError(ConflictError):
    """Raised when a booking cannot move to the requested status."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            f"Cannot change booking from {current} to {target}",
            code="BOOKING_INVALID_TRANSITION",
            details={"current_status": current, "requested_status": target},
        )


class RateLimitError(ApplicationError):
    """Raised when rate limit is exceeded."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after_seconds: int = 0) -> None:
        super().__init__(
            message,
            code="RATE_LIMITED",
            details={"retry_after_seconds": retry_after_seconds},
        )
        self.retry_after_seconds = retry_after_seconds


class DatabaseError(ApplicationError):
    """Raised when a database operation fails."""

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR")
