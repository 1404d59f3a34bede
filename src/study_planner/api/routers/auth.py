"""Routes handling registration, login and the caller's profile."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...core.security import AccessToken
from ...deps import CurrentIdentityDependency, SettingsDependency, StoreDependency
from ...errors import ApplicationError, NotFoundError
from ...models import User
from ...schemas import AuthResponse, LoginRequest, RegisterRequest, UserPublic, UserSummary
from ...services import AuthService, UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def _build_response(user: User, token: AccessToken) -> AuthResponse:
    return AuthResponse(
        token=token.value,
        expires_in=token.lifetime_seconds,
        user=UserSummary.model_validate(user),
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
async def register(
    payload: RegisterRequest,
    store: StoreDependency,
    settings: SettingsDependency,
) -> AuthResponse:
    service = AuthService(store, settings)
    user = await service.register_user(
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return _build_response(user, service.issue_token(user))


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Authenticate using email and password",
)
async def login(
    payload: LoginRequest,
    store: StoreDependency,
    settings: SettingsDependency,
) -> AuthResponse:
    service = AuthService(store, settings)
    user = await service.authenticate_user(payload.email, payload.password)
    if user is None:
        raise ApplicationError(
            "Invalid Credentials",
            code="invalid_credentials",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return _build_response(user, service.issue_token(user))


@router.get("/me", response_model=UserPublic, summary="Return the current user's profile")
async def read_current_user(
    identity: CurrentIdentityDependency,
    store: StoreDependency,
) -> UserPublic:
    user = await UserService(store).get_user(identity.user_id)
    if user is None:
        raise NotFoundError("User not found")
    return UserPublic.model_validate(user)
