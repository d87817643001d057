"""
User Schemas - Pydantic models for authentication requests and user responses.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from datetime import date, datetime
from .models import UserRole, Gender, BloodType

class UserProfileFields(BaseModel):
    """
    Optional personal fields shared by registration and doctor requests.
    """
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    gender: Optional[Gender] = None
    blood_type: Optional[BloodType] = None
    address: Optional[str] = None
    date_of_birth: Optional[date] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None

class RegisterRequest(UserProfileFields):
    """
    Registration Schema - Used for patient self-registration

    Fields:
    - email: User's email address
    - password: User's plain text password (will be hashed before storage)
    - profile fields from UserProfileFields
    """
    email: EmailStr
    password: str = Field(..., description="Plain text password, hashed before storage")

class AuthenticationRequest(BaseModel):
    """
    Login Schema - Used for authentication

    Fields:
    - email: User's email address
    - password: User's plain text password
    """
    email: EmailStr
    password: str

class UserResponse(BaseModel):
    """
    User Response Schema - Identity fields returned to clients. Never includes the password hash.
    """
    id: int
    email: str
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    gender: Optional[Gender] = None
    blood_type: Optional[BloodType] = None
    address: Optional[str] = None
    date_of_birth: Optional[date] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True

class AuthenticationResponse(BaseModel):
    """
    Authentication Response Schema

    Fields:
    - token: Signed bearer token
    - token_type: Always "bearer"
    - user: Created user, only present after registration
    """
    token: str
    token_type: str = "bearer"
    user: Optional[UserResponse] = None
