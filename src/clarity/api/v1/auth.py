"""Authentication endpoints for signup, login and the current profile."""

from fastapi import APIRouter, Depends, status

from clarity.api.deps import get_auth_service, get_current_user
from clarity.models.user import User
from clarity.schemas.auth import AuthResponse, LoginRequest, SignupRequest, UserResponse
from clarity.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
    description="Create a new account and receive a bearer token.",
)
async def signup(
    data: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Register a new user account.

    Raises:
        400: Missing fields, invalid email, short password, or email taken
    """
    return await auth_service.signup(
        email=data.email,
        password=data.password,
        name=data.name,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in",
    description="Authenticate with email and password to receive a bearer token.",
)
async def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Authenticate user and return a token.

    Raises:
        400: Missing fields
        401: Invalid credentials
    """
    return await auth_service.login(email=data.email, password=data.password)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
)
async def get_me(
    current_user: User = Depends(get_current_user),
) -> UserResponse:
    """Return the authenticated user's public profile."""
    return UserResponse.model_validate(current_user)
