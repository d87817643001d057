"""
Tests for registration, login and the profile endpoint.
"""
import pytest

from hms.auth.exceptions import EmailAlreadyExistsException, InvalidCredentialsException
from hms.auth.models import User, UserRole
from hms.auth.schemas import RegisterRequest
from hms.exceptions import ValidationException


def test_register_then_authenticate_round_trip(db, auth_service, token_service):
    registered = auth_service.register(db, RegisterRequest(email="a@x.com", password="password123"))

    assert registered.user.email == "a@x.com"
    assert registered.user.role == UserRole.PATIENT
    assert token_service.validate(registered.token)["sub"] == "a@x.com"

    login = auth_service.authenticate(db, "a@x.com", "password123")
    claims = token_service.validate(login.token)
    assert claims["sub"] == "a@x.com"
    assert claims["role"] == "PATIENT"
    assert "read:doctors" in claims["permissions"]


def test_password_is_stored_hashed(db, auth_service, hasher):
    auth_service.register(db, RegisterRequest(email="a@x.com", password="password123"))

    user = db.query(User).filter(User.email == "a@x.com").one()
    assert user.password_hash != "password123"
    assert hasher.verify("password123", user.password_hash)


def test_register_keeps_profile_fields(db, auth_service):
    response = auth_service.register(db, RegisterRequest(
        email="a@x.com",
        password="password123",
        full_name="Ada Lovelace",
        phone_number="555-0101",
        gender="FEMALE",
        blood_type="O_NEGATIVE",
        date_of_birth="1815-12-10"
    ))

    assert response.user.full_name == "Ada Lovelace"
    assert response.user.gender == "FEMALE"
    assert response.user.blood_type == "O_NEGATIVE"
    assert str(response.user.date_of_birth) == "1815-12-10"


def test_register_defaults_gender_to_other(db, auth_service):
    response = auth_service.register(db, RegisterRequest(email="a@x.com", password="password123"))
    assert response.user.gender == "OTHER"


def test_duplicate_email_is_rejected_ignoring_case(db, auth_service):
    auth_service.register(db, RegisterRequest(email="a@x.com", password="password123"))

    with pytest.raises(EmailAlreadyExistsException):
        auth_service.register(db, RegisterRequest(email="A@X.com", password="password456"))

    assert db.query(User).count() == 1


@pytest.mark.parametrize("password", ["", "   ", "short"])
def test_blank_or_short_password_is_rejected(db, auth_service, password):
    with pytest.raises(ValidationException):
        auth_service.register(db, RegisterRequest(email="a@x.com", password=password))

    assert db.query(User).count() == 0


def test_wrong_password_and_unknown_email_fail_the_same_way(db, auth_service):
    auth_service.register(db, RegisterRequest(email="a@x.com", password="password123"))

    with pytest.raises(InvalidCredentialsException) as wrong_password:
        auth_service.authenticate(db, "a@x.com", "wrong-password")
    with pytest.raises(InvalidCredentialsException) as unknown_email:
        auth_service.authenticate(db, "nobody@x.com", "password123")

    assert wrong_password.value.detail == unknown_email.value.detail
    assert wrong_password.value.status_code == unknown_email.value.status_code == 401


def test_login_email_is_case_insensitive(db, auth_service):
    auth_service.register(db, RegisterRequest(email="a@x.com", password="password123"))
    assert auth_service.authenticate(db, "A@X.COM", "password123").token


def test_register_and_login_over_http(client, token_service):
    response = client.post("/auth/register", json={"email": "a@x.com", "password": "password123"})
    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["user"]["email"] == "a@x.com"
    assert "password" not in data["user"]
    assert "password_hash" not in data["user"]

    response = client.post("/auth/authenticate", json={"email": "a@x.com", "password": "wrong-password"})
    assert response.status_code == 401
    assert response.json()["error"] == "INVALID_CREDENTIALS"

    response = client.post("/auth/authenticate", json={"email": "a@x.com", "password": "password123"})
    assert response.status_code == 200
    assert token_service.validate(response.json()["token"])["sub"] == "a@x.com"


def test_register_duplicate_over_http_is_409(client):
    client.post("/auth/register", json={"email": "a@x.com", "password": "password123"})

    response = client.post("/auth/register", json={"email": "a@x.com", "password": "password123"})

    assert response.status_code == 409
    assert response.json()["error"] == "DUPLICATE_EMAIL"


def test_register_without_password_is_400(client):
    response = client.post("/auth/register", json={"email": "a@x.com"})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_profile_returns_token_owner(client):
    token = client.post(
        "/auth/register",
        json={"email": "a@x.com", "password": "password123", "full_name": "Ada"}
    ).json()["token"]

    response = client.get("/profile", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["email"] == "a@x.com"
    assert response.json()["full_name"] == "Ada"


def test_profile_requires_token(client):
    response = client.get("/profile")
    assert response.status_code == 401
    assert response.json()["error"] == "INVALID_TOKEN"
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_profile_rejects_bad_token(client):
    response = client.get("/profile", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json()["error"] == "INVALID_TOKEN"


def test_profile_rejects_token_of_deleted_user(client, db, auth_service):
    response = auth_service.register(db, RegisterRequest(email="a@x.com", password="password123"))
    db.query(User).delete()
    db.commit()

    response = client.get("/profile", headers={"Authorization": f"Bearer {response.token}"})

    assert response.status_code == 401


def test_concurrent_registration_of_same_email_is_duplicate(db, auth_service, monkeypatch):
    auth_service.register(db, RegisterRequest(email="a@x.com", password="password123"))
    # Another request registered the email after this one checked it
    monkeypatch.setattr("hms.auth.service.get_user_by_email", lambda db, email: None)

    with pytest.raises(EmailAlreadyExistsException):
        auth_service.register(db, RegisterRequest(email="a@x.com", password="password456"))

    assert db.query(User).count() == 1
