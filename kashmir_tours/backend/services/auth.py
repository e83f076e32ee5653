"""
Auth Service.

Account registration, password login, token refresh and the
administrator bootstrap used by the CLI.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.core.config import get_app_config
from kashmir_tours.backend.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from kashmir_tours.backend.core.rate_limiter import get_rate_limiter
from kashmir_tours.backend.core.security import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from kashmir_tours.backend.models.user import User, UserRole
from kashmir_tours.backend.repositories.user import UserRepository
from kashmir_tours.backend.schemas.user import TokenResponse, UserLogin, UserRegister, normalize_email
from kashmir_tours.backend.services.base import BaseService

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService(BaseService):
    """Service for account and token operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = UserRepository(session)

    async def register(self, data: UserRegister) -> User:
        """
        Create a customer account.

        Raises:
            AuthorizationError: If self-registration is disabled
            ConflictError: If the email is already registered
        """
        if not get_app_config().features.auth_allow_registration:
            raise AuthorizationError("Registration is closed")

        return await self._create_user(
            email=data.email,
            password=data.password,
            full_name=data.full_name,
            phone=data.phone,
            role=UserRole.CUSTOMER,
        )

    async def create_admin(self, email: str, password: str, full_name: str) -> User:
        """
        Create an administrator account.

        Raises:
            ValidationError: If the email address is malformed
            ConflictError: If the email is already registered
        """
        try:
            email = normalize_email(email)
        except ValueError as e:
            raise ValidationError(str(e)) from None
        return await self._create_user(
            email=email,
            password=password,
            full_name=full_name,
            phone=None,
            role=UserRole.ADMIN,
        )

    async def promote_to_admin(self, email: str) -> User:
        """
        Grant the admin role to an existing account.

        Raises:
            NotFoundError: If no account uses this email
        """
        user = await self.repo.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        self._log_operation("Promoting user to admin", user_id=user.id)
        return await self._execute_db_operation(
            "promote_to_admin",
            self.repo.update(user.id, role=UserRole.ADMIN),
        )

    async def _create_user(
        self,
        email: str,
        password: str,
        full_name: str,
        phone: str | None,
        role: UserRole,
    ) -> User:
        if await self.repo.exists_by_email(email):
            raise ConflictError("Email already registered")

        self._log_operation("Creating user", role=role.value)
        user = await self._execute_db_operation(
            "create_user",
            self.repo.create(
                email=email,
                full_name=full_name,
                phone=phone,
                hashed_password=hash_password(password),
                role=role,
            ),
        )
        self._log_debug("User created", user_id=user.id)
        return user

    async def login(self, data: UserLogin, client_host: str | None = None) -> TokenResponse:
        """
        Exchange email and password for a token pair.

        Unknown email, wrong password and inactive account all produce
        the same error so callers cannot probe for accounts.

        Raises:
            RateLimitError: Too many attempts from this client or for this email
            AuthenticationError: Credentials rejected
        """
        if get_app_config().features.auth_rate_limit_enabled:
            self._check_rate_limit(data.email, client_host)

        user = await self.repo.get_by_email(data.email)
        if user is None or not verify_password(data.password, user.hashed_password):
            self._logger.warning("Login rejected", extra={"reason": "bad_credentials"})
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not user.is_active:
            self._logger.warning("Login rejected", extra={"reason": "inactive", "user_id": user.id})
            raise AuthenticationError(INVALID_CREDENTIALS)

        self._log_operation("User logged in", user_id=user.id)
        return self.issue_tokens(user)

    async def refresh(self, refresh_token: str) -> TokenResponse:
        """
        Exchange a refresh token for a new token pair.

        Raises:
            AuthenticationError: Invalid token, access token presented,
                or account no longer active
        """
        payload = decode_token(refresh_token, expected_type=REFRESH_TOKEN_TYPE)
        user = await self.repo.get_by_id_or_none(payload.get("sub", ""))
        if user is None or not user.is_active:
            raise AuthenticationError("Invalid or expired token")
        return self.issue_tokens(user)

    def issue_tokens(self, user: User) -> TokenResponse:
        claims = {"sub": user.id, "role": user.role.value}
        expire_minutes = get_app_config().security.jwt.access_token_expire_minutes
        return TokenResponse(
            access_token=create_access_token(claims),
            refresh_token=create_refresh_token({"sub": user.id}),
            expires_in=expire_minutes * 60,
        )

    def _check_rate_limit(self, email: str, client_host: str | None) -> None:
        limiter = get_rate_limiter()
        keys = [f"email:{email}"]
        if client_host:
            keys.insert(0, f"ip:{client_host}")
        for key in keys:
            result = limiter.check(key)
            if not result.allowed:
                raise RateLimitError(
                    "Too many login attempts, try again later",
                    retry_after_seconds=result.retry_after_seconds,
                )
