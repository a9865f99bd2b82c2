"""FastAPI dependency injection for authentication, database and services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from clarity.categorization.backends import build_backend
from clarity.categorization.resolver import CategoryResolver
from clarity.core.exceptions import AuthError
from clarity.core.security import get_user_id_from_token
from clarity.db.session import get_db
from clarity.models.user import User
from clarity.repositories.transaction import TransactionRepository
from clarity.repositories.user import UserRepository
from clarity.services.auth import AuthService
from clarity.services.transaction import TransactionService

# Missing credentials are reported by get_current_user, not by HTTPBearer.
security = HTTPBearer(auto_error=False)


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    """
    Get user repository instance.

    Args:
        db: Database session

    Returns:
        UserRepository instance
    """
    return UserRepository(db)


async def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        user_repo: User repository

    Returns:
        AuthService instance
    """
    return AuthService(user_repo)


async def get_transaction_service(
    db: AsyncSession = Depends(get_db),
) -> TransactionService:
    return TransactionService(TransactionRepository(db))


@lru_cache
def get_category_resolver() -> CategoryResolver:
    """Process-wide resolver, built once on first use."""
    return CategoryResolver(build_backend())


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    user_repo: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Extract and validate user from JWT token.

    Args:
        request: Incoming request (user id is stored on its state for logging)
        credentials: HTTP bearer token credentials, if any
        user_repo: User repository for database queries

    Returns:
        Authenticated user object

    Raises:
        AuthError: 401 if no token was sent, 403 if it is invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise AuthError(error_code="AUTH_001", http_status=401)

    try:
        user_id = get_user_id_from_token(credentials.credentials)
    except JWTError:
        raise AuthError()
    except ValueError:
        raise AuthError()

    user = await user_repo.get_by_id(user_id)
    if user is None:
        raise AuthError(details={"reason": "unknown user"})

    request.state.user_id = user.id
    return user
