import logging
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from sqlmodel import select

from streamsphere.core.security import create_access_token, hash_password, verify_password
from streamsphere.models.common import as_utc, utcnow
from streamsphere.models.movie import Movie
from streamsphere.models.user import User
from streamsphere.models.password_reset import PasswordReset


def test_register_defaults_to_user_role(client):
    r = client.post(
        "/api/auth/register",
        json={"name": "Ana", "email": "ana@example.com", "password": "password123"},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["role"] == "user"
    assert body["emailVerified"] is False
    assert "hashedPassword" not in body and "hashed_password" not in body


def test_register_as_creator(register):
    user, _ = register(role="creator")
    assert user["role"] == "creator"


def test_register_duplicate_email(client):
    payload = {"name": "Ana", "email": "ana@example.com", "password": "password123"}
    assert client.post("/api/auth/register", json=payload).status_code == 201
    r = client.post("/api/auth/register", json={**payload, "email": "ANA@example.com"})
    assert r.status_code == 400
    assert r.json()["code"] == "USER_ALREADY_EXISTS"


def test_register_rejects_short_password_and_unknown_role(client):
    r = client.post(
        "/api/auth/register",
        json={"name": "Ana", "email": "ana@example.com", "password": "short"},
    )
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"

    r = client.post(
        "/api/auth/register",
        json={"name": "Ana", "email": "ana@example.com", "password": "password123", "role": "admin"},
    )
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_login_wrong_password(client, register):
    user, _ = register()
    r = client.post("/api/auth/login", json={"email": user["email"], "password": "nope-nope"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid email or password", "code": "INVALID_CREDENTIALS"}


def test_session_requires_token(client):
    r = client.get("/api/auth/session")
    assert r.status_code == 401
    assert r.json()["code"] == "UNAUTHORIZED"

    r = client.get("/api/auth/session", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_session_reflects_current_role(client, register):
    user, headers = register(role="user")
    client.post("/api/user/switch-role", json={"role": "creator"}, headers=headers)

    # the token predates the switch; the session answer comes from the store
    r = client.get("/api/auth/session", headers=headers)
    assert r.status_code == 200
    assert r.json()["user"]["id"] == user["id"]
    assert r.json()["user"]["role"] == "creator"


def test_password_reset_flow(client, session, register):
    user, _ = register()

    r = client.post("/api/auth/forgot-password", json={"email": user["email"]})
    assert r.status_code == 200
    assert r.json() == {"status": True}

    reset = session.exec(select(PasswordReset)).one()
    assert reset.user_id == user["id"]

    r = client.post(
        "/api/auth/reset-password",
        json={"token": reset.token, "newPassword": "brand-new-pass"},
    )
    assert r.status_code == 200

    r = client.post("/api/auth/login", json={"email": user["email"], "password": "brand-new-pass"})
    assert r.status_code == 200

    # single use
    r = client.post(
        "/api/auth/reset-password",
        json={"token": reset.token, "newPassword": "another-pass"},
    )
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_TOKEN"


def test_forgot_password_unknown_email_is_silent(client, session):
    r = client.post("/api/auth/forgot-password", json={"email": "ghost@example.com"})
    assert r.status_code == 200
    assert session.exec(select(PasswordReset)).all() == []


def test_expired_reset_token(client, session, register):
    user, _ = register()
    client.post("/api/auth/forgot-password", json={"email": user["email"]})
    reset = session.exec(select(PasswordReset)).one()
    reset.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    session.add(reset)
    session.commit()

    r = client.post(
        "/api/auth/reset-password",
        json={"token": reset.token, "newPassword": "brand-new-pass"},
    )
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_TOKEN"


def test_password_hashing():
    hashed = hash_password("correct horse")
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_token_for_missing_user_is_not_found(client):
    token = create_access_token({"sub": "does-not-exist"})
    r = client.get("/api/user/profile", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 404
    assert r.json()["code"] == "USER_NOT_FOUND"


def test_login_token_carries_identity_only(client, register):
    user, headers = register(role="creator")
    token = headers["Authorization"].split(" ", 1)[1]
    claims = jwt.get_unverified_claims(token)
    assert claims["sub"] == user["id"]
    assert "role" not in claims


def test_reset_link_uses_site_path(client, caplog, register):
    user, _ = register()
    caplog.set_level(logging.INFO, logger="streamsphere.services.user_service")

    r = client.post(
        "/api/auth/forgot-password",
        json={"email": user["email"], "redirectTo": "/account/reset"},
    )
    assert r.status_code == 200
    assert "http://localhost:3000/account/reset?token=" in caplog.text


@pytest.mark.parametrize(
    "redirect",
    ["@evil.example/x", "//evil.example/x", "/\\evil.example/x", "https://evil.example/x", ""],
)
def test_reset_redirect_must_stay_on_site(client, session, register, redirect):
    user, _ = register()
    r = client.post(
        "/api/auth/forgot-password",
        json={"email": user["email"], "redirectTo": redirect},
    )
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_REDIRECT"
    assert session.exec(select(PasswordReset)).all() == []


def test_new_rows_get_aware_utc_timestamps():
    user = User(name="Tz", email="tz@example.com", hashed_password="x")
    movie = Movie(
        title="T", description="D", genre="Drama", release_year=2020, director="X",
        cast="Y", poster_url="http://p", trailer_url="http://t", creator_id=user.id,
    )
    reset = PasswordReset(token="t", user_id=user.id, expires_at=utcnow())
    for stamp in (user.created_at, user.updated_at, movie.created_at, movie.updated_at, reset.created_at):
        assert stamp.utcoffset() == timedelta(0)


def test_as_utc_treats_naive_values_as_utc():
    naive = datetime(2024, 5, 1, 12, 0)
    assert as_utc(naive) == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    aware = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert as_utc(aware) is aware

