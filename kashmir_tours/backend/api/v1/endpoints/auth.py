"""
Auth API Endpoints.

Registration, login, token refresh and the caller's profile.
"""

from fastapi import APIRouter, Request

from kashmir_tours.backend.core.dependencies import CurrentUser, DbSession
from kashmir_tours.backend.schemas.base import ApiResponse
from kashmir_tours.backend.schemas.user import (
    RefreshRequest,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from kashmir_tours.backend.services.auth import AuthService

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=201,
    summary="Register a customer account",
)
async def register(data: UserRegister, db: DbSession) -> ApiResponse[UserResponse]:
    user = await AuthService(db).register(data)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.post(
    "/login",
    response_model=ApiResponse[TokenResponse],
    summary="Log in",
    description="Exchange email and password for an access/refresh token pair.",
)
async def login(data: UserLogin, request: Request, db: DbSession) -> ApiResponse[TokenResponse]:
    client_host = request.client.host if request.client else None
    tokens = await AuthService(db).login(data, client_host=client_host)
    return ApiResponse(data=tokens)


@router.post(
    "/refresh",
    response_model=ApiResponse[TokenResponse],
    summary="Refresh tokens",
    description="Exchange a refresh token for a new token pair.",
)
async def refresh(data: RefreshRequest, db: DbSession) -> ApiResponse[TokenResponse]:
    tokens = await AuthService(db).refresh(data.refresh_token)
    return ApiResponse(data=tokens)


@router.get(
    "/me",
    response_model=ApiResponse[UserResponse],
    summary="Current user",
)
async def me(user: CurrentUser) -> ApiResponse[UserResponse]:
    return ApiResponse(data=UserResponse.model_validate(user))
