"""
Doctor Router - API endpoints for doctor profile management.

Listing and reading doctors is public. Creating, updating and deleting
require a bearer token and the matching permission, checked before the
body is validated; the service repeats the administrator check.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..core.permissions import Permission
from ..deps import get_doctor_service, require_permission
from ..auth.models import User
from .schemas import DoctorRequest, DoctorResponse
from .service import DoctorService

router = APIRouter(prefix="/doctors", tags=["Doctors"])


@router.get("", response_model=List[DoctorResponse])
def list_doctors(
    db: Session = Depends(get_db),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """
    Get every doctor with its schedule
    """
    return doctor_service.list_doctors(db)


@router.get("/{doctor_id}", response_model=DoctorResponse)
def get_doctor(
    doctor_id: int,
    db: Session = Depends(get_db),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    return doctor_service.get_doctor(db, doctor_id)


@router.post("", response_model=DoctorResponse)
def create_doctor(
    doctor_data: DoctorRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(Permission.CREATE_DOCTOR)),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """
    Create a doctor account, profile and weekly schedule

    Administrators only. Everything is stored together or not at all.
    """
    return doctor_service.create_doctor(db, current_user, doctor_data)


@router.put("/{doctor_id}", response_model=DoctorResponse)
def update_doctor(
    doctor_id: int,
    doctor_data: DoctorRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(Permission.UPDATE_DOCTOR)),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """
    Update a doctor profile

    Administrators only. The schedule in the body replaces the stored schedule.
    """
    return doctor_service.update_doctor(db, current_user, doctor_id, doctor_data)


@router.delete("/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_doctor(
    doctor_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(Permission.DELETE_DOCTOR)),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """
    Delete a doctor profile together with its schedule and user account

    Administrators only.
    """
    doctor_service.delete_doctor(db, current_user, doctor_id)
