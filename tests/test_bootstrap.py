"""
Tests for first admin creation.
"""
from hms.auth.models import User, UserRole
from hms.core.bootstrap import admin_exists, bootstrap_admin_if_needed


def test_bootstrap_creates_admin(db, hasher):
    admin = bootstrap_admin_if_needed(db, hasher, "Root@Hospital.com", "RootPass123", "Root")

    assert admin is not None
    assert admin.email == "root@hospital.com"
    assert admin.role == UserRole.ADMIN
    assert hasher.verify("RootPass123", admin.password_hash)
    assert admin_exists(db)


def test_bootstrap_skipped_when_admin_exists(db, hasher, admin):
    assert bootstrap_admin_if_needed(db, hasher, "root@hospital.com", "RootPass123") is None
    assert db.query(User).count() == 1


def test_bootstrap_skipped_without_credentials(db, hasher):
    assert bootstrap_admin_if_needed(db, hasher, None, None) is None
    assert bootstrap_admin_if_needed(db, hasher, "root@hospital.com", "") is None
    assert not admin_exists(db)


def test_bootstrap_does_not_take_over_existing_email(db, hasher, patient):
    assert bootstrap_admin_if_needed(db, hasher, "patient@hospital.com", "RootPass123") is None

    db.refresh(patient)
    assert patient.role == UserRole.PATIENT
    assert not admin_exists(db)
