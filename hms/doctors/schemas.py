"""
Doctor Schemas - Pydantic models for doctor profile data validation and serialization.

Requests are typed here; business rules (non-blank fields, non-negative
experience, start before end) are checked by the doctor service so the same
rules hold for every caller.
"""
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime, time
from ..auth.schemas import UserProfileFields, UserResponse
from .models import DayOfWeek

class ScheduleRequest(BaseModel):
    """
    Schema for one weekly availability window

    Fields:
    - day_of_week: MONDAY..SUNDAY
    - start_time: Start time (HH:MM or HH:MM:SS)
    - end_time: End time, must be after start_time
    - is_active: Whether the window is offered (default true)
    """
    day_of_week: DayOfWeek
    start_time: time
    end_time: time
    is_active: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_local_time(cls, v: time) -> time:
        """Schedule times are wall-clock times; offsets cannot be stored."""
        if v.tzinfo is not None:
            raise ValueError("Time must not carry a timezone offset")
        return v

class DoctorRequest(UserProfileFields):
    """
    Doctor Request Schema - Used to create or replace a doctor aggregate

    Fields:
    - email: Login email for the doctor's account
    - password: Required on create; on update a blank or missing value keeps the current one
    - profile fields from UserProfileFields
    - specialty: Medical specialty
    - license_number: Medical license number, unique across doctors
    - years_of_experience: Years in practice
    - schedules: Full weekly schedule; on update it replaces the stored one
    """
    email: EmailStr
    password: Optional[str] = None
    specialty: str
    license_number: str
    years_of_experience: int
    schedules: List[ScheduleRequest] = Field(default_factory=list)

class ScheduleResponse(BaseModel):
    id: int
    day_of_week: DayOfWeek
    start_time: time
    end_time: time
    is_active: bool

    class Config:
        from_attributes = True

class DoctorResponse(BaseModel):
    """
    Doctor Response Schema - Used when returning doctor data

    Fields:
    - id: Doctor profile ID
    - user: Owning user's identity fields
    - full_name: Doctor's name, copied from the user
    - specialty, license_number, years_of_experience: Profile fields
    - schedules: Current weekly schedule
    - created_at / updated_at: Profile timestamps
    """
    id: int
    user: UserResponse
    full_name: Optional[str] = None
    specialty: str
    license_number: str
    years_of_experience: int
    schedules: List[ScheduleResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True
