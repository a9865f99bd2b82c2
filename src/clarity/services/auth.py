"""Authentication service with business logic."""

import logging

from sqlalchemy.exc import IntegrityError

from clarity.core.exceptions import AuthError, ValidationError
from clarity.core.security import create_access_token, hash_password, verify_password
from clarity.models.user import User
from clarity.repositories.user import UserRepository
from clarity.schemas.auth import AuthResponse, UserResponse

logger = logging.getLogger(__name__)


class AuthService:
    """Service for signup and login."""

    def __init__(self, user_repo: UserRepository):
        """
        Initialize authentication service.

        Args:
            user_repo: User repository for database operations
        """
        self.user_repo = user_repo

    @staticmethod
    def _auth_response(user: User, message: str) -> AuthResponse:
        return AuthResponse(
            message=message,
            token=create_access_token(user.id),
            user=UserResponse.model_validate(user),
        )

    async def signup(self, email: str, password: str, name: str) -> AuthResponse:
        """
        Register a new user and issue a token.

        Args:
            email: User email address
            password: Plain text password
            name: Display name

        Returns:
            Token and public user profile

        Raises:
            ValidationError: If email already exists
        """
        if await self.user_repo.email_exists(email):
            raise ValidationError(error_code="AUTH_004")

        user = User(
            email=email,
            password_hash=hash_password(password),
            name=name.strip(),
        )
        try:
            created_user = await self.user_repo.create(user)
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            raise ValidationError(error_code="AUTH_004")
        logger.info("User signed up", extra={"user_id": str(created_user.id)})

        return self._auth_response(created_user, "User created successfully")

    async def login(self, email: str, password: str) -> AuthResponse:
        """
        Authenticate user and issue a token.

        Args:
            email: User email address
            password: Plain text password

        Returns:
            Token and public user profile

        Raises:
            AuthError: If credentials are invalid (unknown email or wrong password)
        """
        user = await self.user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthError(error_code="AUTH_003", http_status=401)

        return self._auth_response(user, "Login successful")
