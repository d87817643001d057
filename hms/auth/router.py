"""
Authentication routes for the hospital management system.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..deps import get_auth_service, get_current_user
from .models import User
from .schemas import AuthenticationRequest, AuthenticationResponse, RegisterRequest, UserResponse
from .service import AuthService

# Create API router
router = APIRouter(tags=["Authentication"])


@router.post("/auth/register", response_model=AuthenticationResponse, summary="Patient Self-Registration")
def register(
    request: RegisterRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new patient account and return a token for immediate sign-in.

    Returns 409 when the email is already registered and 400 when the email
    or password is missing or the password is too short.
    """
    return auth_service.register(db, request)


@router.post("/auth/authenticate", response_model=AuthenticationResponse, summary="Login")
def authenticate(
    request: AuthenticationRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Exchange email and password for a bearer token.

    Unknown email and wrong password both return 401 with the same message.
    """
    return auth_service.authenticate(db, request.email, request.password)


@router.get("/profile", response_model=UserResponse, summary="Current User")
def get_profile(current_user: User = Depends(get_current_user)):
    """
    Return the identity behind the bearer token.
    """
    return current_user
