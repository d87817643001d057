"""
Authentication service layer for business logic.

Also exposes the identity helpers (email normalisation, lookups, password
rules) reused by the doctor service, which creates DOCTOR identities through
its own privileged path.
"""
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.permissions import authorities_of
from ..core.security import PasswordHasher, TokenService
from ..exceptions import PersistenceException, ValidationException
from .exceptions import EmailAlreadyExistsException, InvalidCredentialsException
from .models import Gender, User, UserRole
from .schemas import AuthenticationResponse, RegisterRequest, UserProfileFields, UserResponse

# Set up logging
logger = logging.getLogger(__name__)

PROFILE_FIELDS = tuple(UserProfileFields.model_fields)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """
    Look a user up by email, ignoring case.

    Args:
        db: Database session
        email: Email address in any case

    Returns:
        User or None
    """
    return db.query(User).filter(User.email == normalize_email(email)).first()


def validate_password(password: Optional[str], min_length: int) -> None:
    """
    Raises:
        ValidationException: If the password is blank or shorter than min_length
    """
    if password is None or not password.strip():
        raise ValidationException("Password is required")
    if len(password) < min_length:
        raise ValidationException(f"Password must be at least {min_length} characters")


def apply_profile_fields(user: User, fields: UserProfileFields) -> None:
    """Copy the personal fields of a request onto a user."""
    for field in PROFILE_FIELDS:
        setattr(user, field, getattr(fields, field))
    if user.gender is None:
        user.gender = Gender.OTHER


class AuthService:
    """
    Registration and login flows.

    Args:
        hasher: Password hasher
        tokens: Bearer token issuer
        password_min_length: Minimum accepted password length at registration
    """
    def __init__(self, hasher: PasswordHasher, tokens: TokenService, password_min_length: int = 8):
        self.hasher = hasher
        self.tokens = tokens
        self.password_min_length = password_min_length

    def issue_token(self, user: User) -> str:
        """Issue a bearer token for a user, carrying its role permissions."""
        permissions = sorted(permission.value for permission in authorities_of(user.role))
        return self.tokens.issue(user.email, user.role, extra_claims={"permissions": permissions})

    def register(self, db: Session, request: RegisterRequest) -> AuthenticationResponse:
        """
        Register a new patient user and sign them in.

        Args:
            db: Database session
            request: Registration data

        Returns:
            AuthenticationResponse with the token and the created user

        Raises:
            ValidationException: If email or password is blank or too short
            EmailAlreadyExistsException: If email already exists (any case)
        """
        email = normalize_email(request.email)
        if not email:
            raise ValidationException("Email is required")
        validate_password(request.password, self.password_min_length)

        logger.info(f"Registration attempt for email: {email}")

        if get_user_by_email(db, email):
            logger.warning(f"Registration failed: Email {email} already registered")
            raise EmailAlreadyExistsException()

        user = User(
            email=email,
            password_hash=self.hasher.hash(request.password),
            role=UserRole.PATIENT
        )
        apply_profile_fields(user, request)

        try:
            db.add(user)
            db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration of the same email
            db.rollback()
            logger.warning(f"Registration failed: Email {email} registered concurrently")
            raise EmailAlreadyExistsException()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Error registering user {email}")
            raise PersistenceException()

        db.refresh(user)
        logger.info(f"Patient account created: {user.id}")

        return AuthenticationResponse(
            token=self.issue_token(user),
            user=UserResponse.model_validate(user)
        )

    def authenticate(self, db: Session, email: str, password: str) -> AuthenticationResponse:
        """
        Check credentials and issue a token.

        Args:
            db: Database session
            email: User's email address
            password: User's plain text password

        Returns:
            AuthenticationResponse with the token

        Raises:
            InvalidCredentialsException: If the email is unknown or the password is wrong
        """
        user = get_user_by_email(db, email)
        if user is None:
            self.hasher.dummy_verify()
            logger.warning(f"Login failed for {normalize_email(email)}")
            raise InvalidCredentialsException()

        if not self.hasher.verify(password or "", user.password_hash):
            logger.warning(f"Login failed for {user.email}")
            raise InvalidCredentialsException()

        logger.info(f"User {user.id} authenticated")
        return AuthenticationResponse(token=self.issue_token(user))
