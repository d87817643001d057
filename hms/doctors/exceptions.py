"""
Doctor-specific exceptions.
"""
from fastapi import status
from ..exceptions import AppException, ResourceNotFoundException

class LicenseAlreadyExistsException(AppException):
    """Exception raised when a license number is already held by another doctor."""
    error_code = "DUPLICATE_LICENSE"

    def __init__(self, detail: str = "License number already registered"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class DoctorNotFoundException(ResourceNotFoundException):
    def __init__(self, doctor_id: int):
        super().__init__(detail=f"Doctor profile {doctor_id} not found")
