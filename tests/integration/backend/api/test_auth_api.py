"""
Integration Tests for the auth API.
"""

from kashmir_tours.backend.core.config import get_app_config
from kashmir_tours.backend.core.security import create_refresh_token

API = "/api/v1/auth"
PASSWORD = "dal-lake-2026"


class TestRegister:
    async def test_register_customer(self, client, api):
        response = await client.post(f"{API}/register", json={
            "email": "Guest@Example.com",
            "password": "chinar-leaf-77",
            "full_name": "Guest Traveller",
        })

        data = api.assert_success(response, 201)
        assert data["email"] == "guest@example.com"
        assert data["role"] == "customer"
        assert "hashed_password" not in data

    async def test_duplicate_email(self, client, api, customer):
        response = await client.post(f"{API}/register", json={
            "email": customer.email,
            "password": "chinar-leaf-77",
            "full_name": "Someone Else",
        })

        api.assert_error(response, 409, "RES_CONFLICT")

    async def test_short_password(self, client, api):
        response = await client.post(f"{API}/register", json={
            "email": "guest@example.com",
            "password": "short",
            "full_name": "Guest",
        })

        api.assert_validation_error(response)

    async def test_registration_closed(self, client, api, monkeypatch):
        monkeypatch.setattr(get_app_config().features, "auth_allow_registration", False)

        response = await client.post(f"{API}/register", json={
            "email": "guest@example.com",
            "password": "chinar-leaf-77",
            "full_name": "Guest",
        })

        api.assert_error(response, 403, "AUTHZ_FORBIDDEN")


class TestLogin:
    async def test_login_and_me(self, client, api, customer):
        response = await client.post(f"{API}/login", json={"email": customer.email, "password": PASSWORD})
        tokens = api.assert_success(response)
        assert tokens["token_type"] == "bearer"

        me = await client.get(f"{API}/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
        data = api.assert_success(me)
        assert data["id"] == customer.id

    async def test_wrong_password(self, client, api, customer):
        response = await client.post(f"{API}/login", json={"email": customer.email, "password": "nope-nope"})

        error = api.assert_error(response, 401, "AUTH_UNAUTHORIZED")
        assert error["message"] == "Invalid email or password"

    async def test_rate_limited(self, client, api, customer):
        limit = get_app_config().security.rate_limiting.login.attempts_per_minute
        for _ in range(limit):
            await client.post(f"{API}/login", json={"email": customer.email, "password": "nope-nope"})

        response = await client.post(f"{API}/login", json={"email": customer.email, "password": PASSWORD})

        api.assert_error(response, 429, "RATE_LIMITED")
        assert int(response.headers["Retry-After"]) > 0


class TestTokens:
    async def test_refresh(self, client, api, customer):
        response = await client.post(
            f"{API}/refresh",
            json={"refresh_token": create_refresh_token({"sub": customer.id})},
        )

        tokens = api.assert_success(response)
        assert tokens["access_token"]

    async def test_refresh_token_is_not_an_access_token(self, client, api, customer):
        token = create_refresh_token({"sub": customer.id})

        response = await client.get(f"{API}/me", headers={"Authorization": f"Bearer {token}"})

        api.assert_error(response, 401)

    async def test_me_requires_token(self, client, api):
        response = await client.get(f"{API}/me")

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")

    async def test_garbage_token(self, client, api):
        response = await client.get(f"{API}/me", headers={"Authorization": "Bearer not-a-jwt"})

        api.assert_error(response, 401)
