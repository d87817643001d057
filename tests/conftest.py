"""
Test configuration for the hospital management backend.
"""
import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-hms")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("BOOTSTRAP_ADMIN_EMAIL", None)
os.environ.pop("BOOTSTRAP_ADMIN_PASSWORD", None)

from datetime import time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hms.database import Base, get_db
from hms.main import app
from hms.deps import get_auth_service, get_doctor_service, get_password_hasher, get_token_service
from hms.auth.models import User, UserRole
from hms.doctors.models import DayOfWeek
from hms.doctors.schemas import DoctorRequest, ScheduleRequest

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_EMAIL = "admin@hospital.com"
ADMIN_PASSWORD = "AdminPass123"


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """
    Create a test client with a test database session.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    # Override the get_db dependency
    app.dependency_overrides[get_db] = override_get_db

    # Create test client
    with TestClient(app) as client:
        yield client

    # Remove dependency override
    app.dependency_overrides = {}


@pytest.fixture
def hasher():
    return get_password_hasher()


@pytest.fixture
def token_service():
    return get_token_service()


@pytest.fixture
def auth_service():
    return get_auth_service()


@pytest.fixture
def doctor_service():
    return get_doctor_service()


@pytest.fixture
def admin(db, hasher):
    """An administrator stored in the test database."""
    user = User(
        email=ADMIN_EMAIL,
        full_name="Test Admin",
        password_hash=hasher.hash(ADMIN_PASSWORD),
        role=UserRole.ADMIN
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def patient(db, hasher):
    user = User(
        email="patient@hospital.com",
        full_name="Test Patient",
        password_hash=hasher.hash("PatientPass123"),
        role=UserRole.PATIENT
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_headers(admin, auth_service):
    return {"Authorization": f"Bearer {auth_service.issue_token(admin)}"}


@pytest.fixture
def patient_headers(patient, auth_service):
    return {"Authorization": f"Bearer {auth_service.issue_token(patient)}"}


def build_doctor_request(**overrides) -> DoctorRequest:
    data = {
        "email": "house@hospital.com",
        "password": "DoctorPass123",
        "full_name": "Gregory House",
        "phone_number": "555-0100",
        "specialty": "Diagnostics",
        "license_number": "LIC-1",
        "years_of_experience": 20,
        "schedules": [
            ScheduleRequest(day_of_week=DayOfWeek.MONDAY, start_time=time(9, 0), end_time=time(12, 0)),
            ScheduleRequest(day_of_week=DayOfWeek.WEDNESDAY, start_time=time(13, 0), end_time=time(17, 0)),
        ],
    }
    data.update(overrides)
    return DoctorRequest(**data)


@pytest.fixture
def make_doctor_request():
    """Factory for a valid doctor request; keyword arguments replace fields."""
    return build_doctor_request


@pytest.fixture
def doctor_payload():
    """Factory for the JSON body of the doctor endpoints."""
    def payload(**overrides) -> dict:
        return build_doctor_request(**overrides).model_dump(mode="json")
    return payload
