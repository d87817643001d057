"""
Doctor Service - Business logic for the doctor aggregate.

A doctor aggregate is one DOCTOR user, its doctor profile and the profile's
schedule entries. Create, update and delete each run in a single database
transaction: either every row change commits or none does. Only
administrators may change an aggregate; reads are open to everyone.
"""
from contextlib import contextmanager
from typing import List, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
import logging

from ..auth.exceptions import EmailAlreadyExistsException
from ..auth.models import User, UserRole
from ..auth.service import apply_profile_fields, get_user_by_email, normalize_email, validate_password
from ..core.permissions import require_roles
from ..core.security import PasswordHasher
from ..exceptions import PersistenceException, ValidationException
from .exceptions import DoctorNotFoundException, LicenseAlreadyExistsException
from .models import Doctor, DoctorSchedule
from .schemas import DoctorRequest, DoctorResponse, ScheduleRequest

# Set up logging
logger = logging.getLogger(__name__)

MANAGER_ROLES = {UserRole.ADMIN}


class DoctorService:
    """
    Transactional lifecycle of doctor aggregates.

    Args:
        hasher: Password hasher for the doctor's login
        password_min_length: Minimum accepted password length
    """
    def __init__(self, hasher: PasswordHasher, password_min_length: int = 8):
        self.hasher = hasher
        self.password_min_length = password_min_length

    def list_doctors(self, db: Session) -> List[DoctorResponse]:
        """
        Get every doctor with its current user snapshot and schedule.

        Args:
            db: Database session

        Returns:
            List of doctor responses ordered by profile id
        """
        doctors = (
            db.query(Doctor)
            .options(selectinload(Doctor.user), selectinload(Doctor.schedules))
            .order_by(Doctor.id)
            .all()
        )
        return [DoctorResponse.model_validate(doctor) for doctor in doctors]

    def get_doctor(self, db: Session, doctor_id: int) -> DoctorResponse:
        """
        Raises:
            DoctorNotFoundException: If doctor profile not found
        """
        return DoctorResponse.model_validate(self._load(db, doctor_id))

    def create_doctor(self, db: Session, actor: User, request: DoctorRequest) -> DoctorResponse:
        """
        Create a doctor user, its profile and its schedule in one transaction.

        Args:
            db: Database session
            actor: Authenticated user making the request
            request: Doctor data

        Returns:
            DoctorResponse: The created aggregate

        Raises:
            PermissionDeniedException: If the actor is not an administrator
            ValidationException: If a field is blank or out of range
            EmailAlreadyExistsException: If the email belongs to another user
            LicenseAlreadyExistsException: If the license belongs to another doctor
        """
        require_roles(actor, MANAGER_ROLES)
        self._validate(request, creating=True)

        email = normalize_email(request.email)
        license_number = request.license_number.strip()
        self._ensure_unique(db, email, license_number)

        with self._transaction(db, email, license_number):
            user = User(
                email=email,
                password_hash=self.hasher.hash(request.password),
                role=UserRole.DOCTOR
            )
            apply_profile_fields(user, request)
            db.add(user)
            db.flush()

            doctor = Doctor(
                user_id=user.id,
                specialty=request.specialty.strip(),
                license_number=license_number,
                years_of_experience=request.years_of_experience
            )
            db.add(doctor)
            db.flush()

            db.add_all(self._build_schedules(doctor.id, request.schedules))
            db.flush()

        logger.info(f"Doctor profile {doctor.id} (user {user.id}) created by user {actor.id}")
        return DoctorResponse.model_validate(doctor)

    def update_doctor(self, db: Session, actor: User, doctor_id: int, request: DoctorRequest) -> DoctorResponse:
        """
        Update a doctor's user and profile and replace its whole schedule.

        Old schedule entries are deleted and the requested ones inserted in the
        same transaction as the profile change. A blank or missing password
        keeps the stored hash.

        Args:
            db: Database session
            actor: Authenticated user making the request
            doctor_id: ID of the doctor profile
            request: New doctor data

        Returns:
            DoctorResponse: The updated aggregate

        Raises:
            PermissionDeniedException: If the actor is not an administrator
            DoctorNotFoundException: If doctor profile not found
            ValidationException: If a field is blank or out of range
            EmailAlreadyExistsException: If the new email belongs to another user
            LicenseAlreadyExistsException: If the new license belongs to another doctor
        """
        require_roles(actor, MANAGER_ROLES)
        doctor = self._load(db, doctor_id)
        user = doctor.user
        self._validate(request, creating=False)

        email = normalize_email(request.email)
        license_number = request.license_number.strip()
        self._ensure_unique(db, email, license_number, user_id=user.id, doctor_id=doctor.id)

        with self._transaction(db, email, license_number, user_id=user.id, doctor_id=doctor.id):
            user.email = email
            apply_profile_fields(user, request)
            if request.password and request.password.strip():
                user.password_hash = self.hasher.hash(request.password)

            doctor.specialty = request.specialty.strip()
            doctor.license_number = license_number
            doctor.years_of_experience = request.years_of_experience

            db.query(DoctorSchedule).filter(DoctorSchedule.doctor_id == doctor.id).delete()
            db.flush()
            db.add_all(self._build_schedules(doctor.id, request.schedules))
            db.flush()

        logger.info(f"Doctor profile {doctor_id} updated by user {actor.id}")
        return DoctorResponse.model_validate(doctor)

    def delete_doctor(self, db: Session, actor: User, doctor_id: int) -> None:
        """
        Delete a doctor aggregate: schedule entries, then the profile, then the user.

        Args:
            db: Database session
            actor: Authenticated user making the request
            doctor_id: ID of the doctor profile

        Raises:
            PermissionDeniedException: If the actor is not an administrator
            DoctorNotFoundException: If doctor profile not found
        """
        require_roles(actor, MANAGER_ROLES)
        doctor = self._load(db, doctor_id)
        user = doctor.user
        user_id = user.id

        with self._transaction(db):
            db.query(DoctorSchedule).filter(DoctorSchedule.doctor_id == doctor.id).delete()
            db.flush()
            db.delete(doctor)
            db.flush()
            db.delete(user)
            db.flush()

        logger.info(f"Doctor profile {doctor_id} and user {user_id} deleted by user {actor.id}")

    def _load(self, db: Session, doctor_id: int) -> Doctor:
        doctor = db.query(Doctor).filter(Doctor.id == doctor_id).first()
        if not doctor:
            raise DoctorNotFoundException(doctor_id)
        return doctor

    def _validate(self, request: DoctorRequest, creating: bool) -> None:
        """
        Check business rules before anything is written.

        Raises:
            ValidationException: On the first rule that fails
        """
        if not request.specialty or not request.specialty.strip():
            raise ValidationException("Specialty is required")
        if not request.license_number or not request.license_number.strip():
            raise ValidationException("License number is required")
        if request.years_of_experience is None or request.years_of_experience < 0:
            raise ValidationException("Years of experience must be a non-negative number")

        if creating:
            validate_password(request.password, self.password_min_length)
        elif request.password and request.password.strip():
            validate_password(request.password, self.password_min_length)

        for position, schedule in enumerate(request.schedules, start=1):
            if schedule.start_time >= schedule.end_time:
                raise ValidationException(
                    f"Schedule entry {position} ({schedule.day_of_week.value}): start time must be before end time"
                )

    def _ensure_unique(
        self,
        db: Session,
        email: str,
        license_number: str,
        user_id: Optional[int] = None,
        doctor_id: Optional[int] = None
    ) -> None:
        """
        Raises:
            LicenseAlreadyExistsException: If another doctor holds the license
            EmailAlreadyExistsException: If another user holds the email
        """
        query = db.query(Doctor).filter(Doctor.license_number == license_number)
        if doctor_id is not None:
            query = query.filter(Doctor.id != doctor_id)
        if query.first():
            logger.warning(f"License number {license_number} already registered")
            raise LicenseAlreadyExistsException()

        existing_user = get_user_by_email(db, email)
        if existing_user and existing_user.id != user_id:
            logger.warning(f"Email {email} already registered")
            raise EmailAlreadyExistsException()

    @staticmethod
    def _build_schedules(doctor_id: int, schedules: List[ScheduleRequest]) -> List[DoctorSchedule]:
        return [
            DoctorSchedule(
                doctor_id=doctor_id,
                day_of_week=schedule.day_of_week,
                start_time=schedule.start_time,
                end_time=schedule.end_time,
                is_active=schedule.is_active
            )
            for schedule in schedules
        ]

    @contextmanager
    def _transaction(
        self,
        db: Session,
        email: Optional[str] = None,
        license_number: Optional[str] = None,
        user_id: Optional[int] = None,
        doctor_id: Optional[int] = None
    ):
        """
        Commit the enclosed writes together or roll all of them back.

        A unique constraint violation means a concurrent writer claimed the
        email or license after the pre-check; it is reported as the matching
        duplicate error rather than a server error.
        """
        try:
            yield
            db.commit()
        except IntegrityError:
            db.rollback()
            if email is not None and license_number is not None:
                self._ensure_unique(db, email, license_number, user_id=user_id, doctor_id=doctor_id)
            logger.exception("Integrity error while writing doctor aggregate")
            raise PersistenceException()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Database error while writing doctor aggregate")
            raise PersistenceException()
        except Exception:
            db.rollback()
            raise
