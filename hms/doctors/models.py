"""
Doctor Models - Doctor profiles and their weekly availability schedule.

A doctor profile belongs to exactly one DOCTOR user and owns its schedule
entries. Foreign keys carry no ON DELETE cascade and the relationships never
touch children on delete: the doctor service removes schedules, then the
profile, then the user, in that order.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Time, ForeignKey, Enum, CheckConstraint, func
from sqlalchemy.orm import relationship
import enum
from ..database import Base

class DayOfWeek(str, enum.Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

class Doctor(Base):
    """
    Doctor Model - Stores doctor-specific information

    Fields:
    - id: Primary key for doctor profile
    - user_id: Foreign key to User model, unique (one profile per user)
    - specialty: Doctor's medical specialty
    - license_number: Medical license number, unique across all doctors
    - years_of_experience: Years in practice (>= 0)
    - created_at: When the doctor profile was created
    - updated_at: When the doctor profile was last updated
    """
    __tablename__ = "doctors"
    __table_args__ = (
        CheckConstraint("years_of_experience >= 0", name="ck_doctors_years_of_experience"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    specialty = Column(String, nullable=False)
    license_number = Column(String, unique=True, index=True, nullable=False)
    years_of_experience = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User")
    schedules = relationship(
        "DoctorSchedule",
        order_by="DoctorSchedule.id",
        passive_deletes="all",
    )

    def __repr__(self):
        """String representation of the Doctor model"""
        return f"<Doctor(id={self.id}, user_id={self.user_id}, specialty='{self.specialty}')>"

    @property
    def full_name(self) -> str:
        """Get doctor's full name from associated user"""
        return self.user.full_name if self.user else None

    @property
    def email(self) -> str:
        """Get doctor's email from associated user"""
        return self.user.email if self.user else None

class DoctorSchedule(Base):
    """
    Doctor Schedule Model - One weekly availability window

    Fields:
    - id: Primary key
    - doctor_id: Owning doctor profile
    - day_of_week: Day the window applies to
    - start_time / end_time: Window bounds, start strictly before end
    - is_active: Whether the window is currently offered
    """
    __tablename__ = "doctor_schedules"
    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_doctor_schedules_time_order"),
    )

    id = Column(Integer, primary_key=True, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), index=True, nullable=False)
    day_of_week = Column(Enum(DayOfWeek), nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<DoctorSchedule(id={self.id}, doctor_id={self.doctor_id}, {self.day_of_week} {self.start_time}-{self.end_time})>"
