"""
Authentication-specific exceptions.
"""
from fastapi import status
from ..exceptions import AppException

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}

class AuthException(AppException):
    """Base class for authentication exceptions."""

class InvalidCredentialsException(AuthException):
    """Raised on login failure. Unknown email and wrong password look the same."""
    error_code = "INVALID_CREDENTIALS"

    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail, headers=BEARER_CHALLENGE)

class EmailAlreadyExistsException(AuthException):
    """Exception raised when email already exists."""
    error_code = "DUPLICATE_EMAIL"

    def __init__(self, detail: str = "Email already registered"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class InvalidTokenException(AuthException):
    """Missing, malformed or forged bearer token."""
    error_code = "INVALID_TOKEN"

    def __init__(self, detail: str = "Invalid token"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail, headers=BEARER_CHALLENGE)

class TokenExpiredException(InvalidTokenException):
    """Exception raised when token has expired."""
    def __init__(self, detail: str = "Token has expired"):
        super().__init__(detail=detail)

class PermissionDeniedException(AuthException):
    """Exception raised when user doesn't have required role."""
    error_code = "FORBIDDEN"

    def __init__(self, detail: str = "Permission denied"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
