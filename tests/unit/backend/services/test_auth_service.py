"""
Unit Tests for Auth Service.
"""

from unittest.mock import MagicMock, patch

import pytest

from kashmir_tours.backend.core.config import get_app_config
from kashmir_tours.backend.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from kashmir_tours.backend.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
)
from kashmir_tours.backend.models.user import UserRole
from kashmir_tours.backend.schemas.user import UserLogin, UserRegister
from kashmir_tours.backend.services.auth import INVALID_CREDENTIALS, AuthService

PASSWORD = "dal-lake-2026"


@pytest.fixture
def service(mock_db_session):
    return AuthService(mock_db_session)


@pytest.fixture
def stored_user():
    user = MagicMock()
    user.id = "user-1"
    user.role = UserRole.CUSTOMER
    user.is_active = True
    user.hashed_password = hash_password(PASSWORD)
    return user


def _registration() -> UserRegister:
    return UserRegister(email="guest@example.com", password=PASSWORD, full_name="Guest Traveller")


class TestRegister:
    async def test_creates_customer(self, service, stored_user):
        with patch.object(service.repo, "exists_by_email", return_value=False), \
             patch.object(service.repo, "create", return_value=stored_user) as mock_create:
            user = await service.register(_registration())

        assert user is stored_user
        kwargs = mock_create.call_args.kwargs
        assert kwargs["role"] == UserRole.CUSTOMER
        assert kwargs["email"] == "guest@example.com"
        assert kwargs["hashed_password"] != PASSWORD

    async def test_duplicate_email(self, service):
        with patch.object(service.repo, "exists_by_email", return_value=True):
            with pytest.raises(ConflictError, match="Email already registered"):
                await service.register(_registration())

    async def test_registration_closed(self, service, monkeypatch):
        monkeypatch.setattr(get_app_config().features, "auth_allow_registration", False)

        with pytest.raises(AuthorizationError, match="Registration is closed"):
            await service.register(_registration())


class TestLogin:
    async def test_issues_token_pair(self, service, stored_user):
        with patch.object(service.repo, "get_by_email", return_value=stored_user):
            tokens = await service.login(UserLogin(email="guest@example.com", password=PASSWORD))

        assert decode_token(tokens.access_token, expected_type="access")["sub"] == "user-1"
        assert decode_token(tokens.refresh_token, expected_type="refresh")["sub"] == "user-1"
        assert tokens.expires_in == 30 * 60

    async def test_wrong_password(self, service, stored_user):
        with patch.object(service.repo, "get_by_email", return_value=stored_user):
            with pytest.raises(AuthenticationError, match=INVALID_CREDENTIALS):
                await service.login(UserLogin(email="guest@example.com", password="wrong-password"))

    async def test_unknown_email(self, service):
        with patch.object(service.repo, "get_by_email", return_value=None):
            with pytest.raises(AuthenticationError, match=INVALID_CREDENTIALS):
                await service.login(UserLogin(email="nobody@example.com", password=PASSWORD))

    async def test_inactive_user_gets_same_error(self, service, stored_user):
        stored_user.is_active = False
        with patch.object(service.repo, "get_by_email", return_value=stored_user):
            with pytest.raises(AuthenticationError, match=INVALID_CREDENTIALS):
                await service.login(UserLogin(email="guest@example.com", password=PASSWORD))

    async def test_rate_limited_per_email(self, service, stored_user):
        limit = get_app_config().security.rate_limiting.login.attempts_per_minute
        login = UserLogin(email="guest@example.com", password="wrong-password")

        with patch.object(service.repo, "get_by_email", return_value=stored_user):
            for _ in range(limit):
                with pytest.raises(AuthenticationError):
                    await service.login(login)

            with pytest.raises(RateLimitError) as exc_info:
                await service.login(login)

        assert exc_info.value.retry_after_seconds > 0

    async def test_rate_limit_can_be_disabled(self, service, stored_user, monkeypatch):
        monkeypatch.setattr(get_app_config().features, "auth_rate_limit_enabled", False)
        limit = get_app_config().security.rate_limiting.login.attempts_per_minute
        login = UserLogin(email="guest@example.com", password="wrong-password")

        with patch.object(service.repo, "get_by_email", return_value=stored_user):
            for _ in range(limit + 2):
                with pytest.raises(AuthenticationError):
                    await service.login(login, client_host="10.0.0.9")


class TestRefresh:
    async def test_refresh_issues_new_pair(self, service, stored_user):
        refresh_token = create_refresh_token({"sub": "user-1"})

        with patch.object(service.repo, "get_by_id_or_none", return_value=stored_user):
            tokens = await service.refresh(refresh_token)

        assert decode_token(tokens.access_token, expected_type="access")["sub"] == "user-1"

    async def test_access_token_rejected(self, service):
        with pytest.raises(AuthenticationError):
            await service.refresh(create_access_token({"sub": "user-1"}))

    async def test_deactivated_user_rejected(self, service, stored_user):
        stored_user.is_active = False
        refresh_token = create_refresh_token({"sub": "user-1"})

        with patch.object(service.repo, "get_by_id_or_none", return_value=stored_user):
            with pytest.raises(AuthenticationError):
                await service.refresh(refresh_token)


class TestAdminBootstrap:
    async def test_create_admin_normalises_email(self, service, stored_user):
        with patch.object(service.repo, "exists_by_email", return_value=False), \
             patch.object(service.repo, "create", return_value=stored_user) as mock_create:
            await service.create_admin(" Ops@Example.com ", PASSWORD, "Operations")

        kwargs = mock_create.call_args.kwargs
        assert kwargs["email"] == "ops@example.com"
        assert kwargs["role"] == UserRole.ADMIN

    async def test_create_admin_rejects_malformed_email(self, service):
        with patch.object(service.repo, "create") as mock_create:
            with pytest.raises(ValidationError, match="Invalid email address"):
                await service.create_admin("not-an-email", PASSWORD, "Operations")

        mock_create.assert_not_called()

    async def test_promote_unknown_email(self, service):
        with patch.object(service.repo, "get_by_email", return_value=None):
            with pytest.raises(NotFoundError):
                await service.promote_to_admin("nobody@example.com")

    async def test_promote_sets_admin_role(self, service, stored_user):
        with patch.object(service.repo, "get_by_email", return_value=stored_user), \
             patch.object(service.repo, "update", return_value=stored_user) as mock_update:
            await service.promote_to_admin("guest@example.com")

        mock_update.assert_called_once_with("user-1", role=UserRole.ADMIN)
