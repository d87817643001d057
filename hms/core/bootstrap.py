"""
Bootstrap utilities for first admin creation.
Creates the first admin user from settings when no admin exists yet.
"""
import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..auth.models import User, UserRole
from ..auth.service import get_user_by_email, normalize_email
from .security import PasswordHasher

logger = logging.getLogger(__name__)

def admin_exists(db: Session) -> bool:
    """
    Check if any admin user exists in the database.

    Args:
        db: Database session

    Returns:
        bool: True if at least one admin exists, False otherwise
    """
    return db.query(User).filter(User.role == UserRole.ADMIN).count() > 0

def bootstrap_admin_if_needed(
    db: Session,
    hasher: PasswordHasher,
    email: Optional[str],
    password: Optional[str],
    full_name: str = "System Administrator"
) -> Optional[User]:
    """
    Create the first admin when none exists and credentials are configured.

    Args:
        db: Database session
        hasher: Password hasher
        email: Admin email, bootstrap is skipped when empty
        password: Admin password, bootstrap is skipped when empty
        full_name: Admin display name

    Returns:
        The created admin, or None when nothing was created
    """
    if admin_exists(db):
        logger.info("Admin users found. Bootstrap not needed.")
        return None

    if not email or not password:
        logger.warning(
            "No admin users found and bootstrap credentials are not set. "
            "Set BOOTSTRAP_ADMIN_EMAIL and BOOTSTRAP_ADMIN_PASSWORD to create the first admin."
        )
        return None

    if get_user_by_email(db, email):
        logger.warning(f"Bootstrap skipped: Email {normalize_email(email)} already belongs to a non-admin user")
        return None

    admin = User(
        email=normalize_email(email),
        full_name=full_name,
        password_hash=hasher.hash(password),
        role=UserRole.ADMIN
    )
    try:
        db.add(admin)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create bootstrap admin")
        raise

    db.refresh(admin)
    logger.info(f"Bootstrap admin created: {admin.email} (ID: {admin.id})")
    return admin
