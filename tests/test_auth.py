from __future__ import annotations

import jwt
import pytest

from auth import security

from .conftest import register


def test_register_then_login(client):
    body = register(client, "Carol@Example.com")
    assert body["user"]["email"] == "carol@example.com"
    assert body["token_type"] == "bearer"

    resp = client.post("/auth/login", json={"email": "carol@example.com", "password": "correct-horse"})
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == body["user"]["id"]


def test_register_duplicate_email_conflicts(client):
    register(client, "dave@example.com")
    resp = client.post("/auth/register", json={"email": "DAVE@example.com", "password": "whatever1"})
    assert resp.status_code == 409
    assert resp.json() == {"error": "Email is already registered."}


def test_login_with_wrong_password(client):
    register(client, "erin@example.com")
    resp = client.post("/auth/login", json={"email": "erin@example.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid email or password."}


def test_me_returns_caller(client, auth_headers):
    resp = client.get("/auth/me", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "alice@example.com"
    assert "password_hash" not in resp.json()


@pytest.mark.parametrize(
    "header, message",
    [
        (None, "Missing Authorization header."),
        ("Bearer", "Invalid Authorization header format."),
        ("Basic abc", "Authorization must be: Bearer <token>."),
    ],
)
def test_malformed_authorization_header(client, header, message):
    headers = {"Authorization": header} if header is not None else {}
    resp = client.get("/auth/me", headers=headers)
    assert resp.status_code == 401
    assert resp.json() == {"error": message}


def test_token_for_unknown_user(client):
    token = security.build_access_token(user_id=4242, email="ghost@example.com")
    resp = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "User not found."}


def test_expired_token(client, auth_headers, monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MIN", "-5")
    token = security.build_access_token(user_id=1, email="alice@example.com")
    resp = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Access token is expired."}


def test_non_access_token_is_rejected():
    token = jwt.encode(
        {"sub": "1", "type": "refresh"},
        security.jwt_secret(),
        algorithm=security.jwt_algorithm(),
    )
    with pytest.raises(security.AuthSecurityError, match="not an access token"):
        security.decode_access_token(token)


def test_password_hashing():
    hashed = security.hash_password("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert security.verify_password("s3cret-pass", hashed)
    assert not security.verify_password("other", hashed)
    assert not security.verify_password("s3cret-pass", "not-a-bcrypt-hash")
    with pytest.raises(security.AuthSecurityError):
        security.hash_password("")


def test_access_token_round_trip_claims():
    token = security.build_access_token(user_id=7, email="gina@example.com")
    claims = security.decode_access_token(token)
    assert claims.user_id == 7
    assert claims.email == "gina@example.com"
    assert claims.expires_at > 0


def test_non_numeric_subject_is_rejected(client):
    token = jwt.encode(
        {"sub": "abc", "type": "access"},
        security.jwt_secret(),
        algorithm=security.jwt_algorithm(),
    )
    resp = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid access token subject."}


def test_parse_bearer_strips_token():
    from auth.dependencies import parse_bearer

    assert parse_bearer("  bearer   abc.def  ") == "abc.def"
