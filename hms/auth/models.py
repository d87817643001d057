"""
User Model - Stores identity information for every account in the system.

A user is the root of the doctor aggregate: a doctor profile always belongs to
exactly one user with the DOCTOR role.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Enum
from sqlalchemy.sql import func
import enum
from ..database import Base

class UserRole(str, enum.Enum):
    """
    Enumeration for user roles in the hospital system.

    Roles:
    - ADMIN: System administrators, the only role allowed to manage doctors
    - DOCTOR: Medical practitioners, created by an administrator
    - PATIENT: Self-registered users
    """
    ADMIN = "ADMIN"
    DOCTOR = "DOCTOR"
    PATIENT = "PATIENT"

class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"

class BloodType(str, enum.Enum):
    A_POSITIVE = "A_POSITIVE"
    A_NEGATIVE = "A_NEGATIVE"
    B_POSITIVE = "B_POSITIVE"
    B_NEGATIVE = "B_NEGATIVE"
    AB_POSITIVE = "AB_POSITIVE"
    AB_NEGATIVE = "AB_NEGATIVE"
    O_POSITIVE = "O_POSITIVE"
    O_NEGATIVE = "O_NEGATIVE"

class User(Base):
    """
    User Model - Stores all user information in the system

    Fields:
    - id: Primary key for user identification
    - email: Unique email address for login, always stored lower-cased
    - password_hash: Securely hashed password (never store raw passwords)
    - full_name: User's complete name (optional)
    - phone_number: User's contact number (optional)
    - gender: User's gender, OTHER when not given
    - blood_type: User's blood type (optional)
    - address: User's physical address (optional)
    - date_of_birth: User's date of birth (optional)
    - emergency_contact_name / emergency_contact_phone: Emergency contact (optional)
    - role: User role (admin, doctor, patient)
    - created_at: Timestamp when user was created
    - updated_at: Timestamp when user was last updated
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)
    gender = Column(Enum(Gender), nullable=False, default=Gender.OTHER)
    blood_type = Column(Enum(BloodType), nullable=True)
    address = Column(String, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    emergency_contact_name = Column(String, nullable=True)
    emergency_contact_phone = Column(String, nullable=True)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.PATIENT)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role})>"
