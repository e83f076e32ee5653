"""
FastAPI Dependencies.

Shared dependencies for request handling: database session,
request ID, and the authenticated caller.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.core.database import get_db_session
from kashmir_tours.backend.core.exceptions import AuthenticationError, AuthorizationError
from kashmir_tours.backend.core.logging import get_logger
from kashmir_tours.backend.core.security import ACCESS_TOKEN_TYPE, decode_token
from kashmir_tours.backend.models.user import User
from kashmir_tours.backend.repositories.user import UserRepository

logger = get_logger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

# auto_error=False so missing credentials go through our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """
    Extract or generate request ID from headers.

    Used for request tracing and correlation.
    """
    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_user(
    db: DbSession,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    """
    Resolve the caller from a bearer access token.

    Raises:
        AuthenticationError: Missing, invalid or expired token, refresh
            token used as access token, or unknown/inactive user
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")

    payload = decode_token(credentials.credentials, expected_type=ACCESS_TOKEN_TYPE)
    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid or expired token")

    user = await UserRepository(db).get_by_id_or_none(user_id)
    if user is None or not user.is_active:
        logger.warning("Token for unknown or inactive user", extra={"user_id": user_id})
        raise AuthenticationError("Invalid or expired token")

    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def require_admin(user: CurrentUser) -> User:
    """Allow only administrators through."""
    if not user.is_admin:
        raise AuthorizationError("Administrator access required")
    return user


AdminUser = Annotated[User, Depends(require_admin)]
