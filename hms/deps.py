"""
FastAPI dependencies for services and authentication.

Services are built once from settings and shared by every request; nothing
else in the package reads the settings object at request time.
"""
from datetime import timedelta
from functools import lru_cache
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .auth.exceptions import InvalidTokenException, PermissionDeniedException
from .auth.models import User
from .auth.service import AuthService, get_user_by_email
from .core.permissions import Permission, has_permission
from .core.security import PasswordHasher, TokenService
from .doctors.service import DoctorService

# Bearer token from the Authorization header; missing tokens are reported by get_current_user
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/authenticate", auto_error=False)


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.bcrypt_rounds)


@lru_cache()
def get_token_service() -> TokenService:
    return TokenService(
        secret_key=settings.secret_key,
        algorithm=settings.algorithm,
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes)
    )


@lru_cache()
def get_auth_service() -> AuthService:
    return AuthService(
        hasher=get_password_hasher(),
        tokens=get_token_service(),
        password_min_length=settings.password_min_length
    )


@lru_cache()
def get_doctor_service() -> DoctorService:
    return DoctorService(
        hasher=get_password_hasher(),
        password_min_length=settings.password_min_length
    )


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service)
) -> User:
    """
    Get current authenticated user from the bearer token.

    Args:
        token: Bearer token from Authorization header
        db: Database session
        tokens: Token validator

    Returns:
        User: Current authenticated user

    Raises:
        InvalidTokenException: If the token is missing, invalid, expired or its user no longer exists
    """
    payload = tokens.validate(token)

    user = get_user_by_email(db, payload["sub"])
    if user is None:
        raise InvalidTokenException("User not found")

    return user


def require_permission(permission: Permission):
    """
    Dependency factory to require a permission of the caller's role.

    Runs before the request body is validated, so callers without the
    permission get 401/403 whatever they sent.

    Args:
        permission: Permission the stored role must grant

    Returns:
        Function that returns the current user when allowed
    """
    def permission_checker(current_user: User = Depends(get_current_user)) -> User:
        if not has_permission(current_user.role, permission):
            raise PermissionDeniedException(f"Access denied. Missing permission: {permission.value}")
        return current_user
    return permission_checker
