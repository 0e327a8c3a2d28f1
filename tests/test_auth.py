import uuid
from datetime import timedelta

import jwt

from taskmaster.auth.passwords import hash_password, verify_password
from taskmaster.auth.tokens import decode_access_token
from taskmaster.config import settings
from taskmaster.models.base import now_utc

def login(client, email: str, password: str = "password123"):
    return client.post("/auth/login", json={"email": email, "password": password})

def auth(jwt_: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt_}"}

def test_login_returns_user_and_token(client, lead):
    r = login(client, lead.email)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["user"] == {"id": str(lead.id), "email": lead.email, "name": lead.name, "role": "LEAD"}

    claims = decode_access_token(body["token"])
    assert claims["sub"] == str(lead.id)
    assert claims["email"] == lead.email
    assert claims["role"] == "LEAD"
    # one day validity window
    assert claims["exp"] - claims["iat"] == 24 * 60 * 60

def test_login_is_case_insensitive_on_email(client, team):
    r = login(client, team.email.upper())
    assert r.status_code == 200, r.text

def test_bad_credentials_share_one_message(client, lead):
    wrong_password = login(client, lead.email, "not-the-password")
    unknown_email = login(client, "nobody@example.com")

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json()["detail"] == unknown_email.json()["detail"] == "invalid credentials"

def test_login_requires_email_and_password(client):
    r = client.post("/auth/login", json={"email": "lead@example.com"})
    assert r.status_code == 400

def test_register_then_login(client):
    r = client.post(
        "/auth/register",
        json={"name": "New Person", "email": "New.Person@Example.com", "password": "secret1", "role": "TEAM"},
    )
    assert r.status_code == 201, r.text
    assert r.json() == {"message": "user registered successfully"}

    r = login(client, "new.person@example.com", "secret1")
    assert r.status_code == 200, r.text
    assert r.json()["user"]["role"] == "TEAM"

def test_register_rejects_duplicates_and_bad_input(client, lead):
    r = client.post(
        "/auth/register",
        json={"name": "Dupe", "email": lead.email, "password": "secret1", "role": "LEAD"},
    )
    assert r.status_code == 409

    r = client.post("/auth/register", json={"name": "Shorty", "email": "s@example.com", "password": "12345"})
    assert r.status_code == 400
    assert "password" in r.json()["detail"]

    r = client.post("/auth/register", json={"name": "X", "email": "x@example.com", "password": "secret1"})
    assert r.status_code == 400

    r = client.post(
        "/auth/register",
        json={"name": "Admin", "email": "a@example.com", "password": "secret1", "role": "ADMIN"},
    )
    assert r.status_code == 400

def test_me_reflects_token_identity(client, team, team_jwt):
    r = client.get("/auth/me", headers=auth(team_jwt))
    assert r.status_code == 200
    assert r.json() == {"id": str(team.id), "email": team.email, "role": "TEAM"}

def test_missing_or_invalid_token_is_unauthorized(client):
    r = client.get("/tasks")
    assert r.status_code == 401

    r = client.get("/tasks", headers=auth("not-a-jwt"))
    assert r.status_code == 401
    assert r.json()["detail"] == "invalid token"

def test_expired_token_is_unauthorized(client, lead):
    past = now_utc() - timedelta(days=2)
    token = jwt.encode(
        {
            "sub": str(lead.id),
            "email": lead.email,
            "role": "LEAD",
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
            "iat": int(past.timestamp()),
            "exp": int((past + timedelta(days=1)).timestamp()),
        },
        settings.jwt_secret,
        algorithm="HS256",
    )
    r = client.get("/tasks", headers=auth(token))
    assert r.status_code == 401

def test_token_for_unknown_user_is_unauthorized(client):
    iat = now_utc()
    token = jwt.encode(
        {
            "sub": str(uuid.uuid4()),
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
            "iat": int(iat.timestamp()),
            "exp": int((iat + timedelta(minutes=5)).timestamp()),
        },
        settings.jwt_secret,
        algorithm="HS256",
    )
    r = client.get("/tasks", headers=auth(token))
    assert r.status_code == 401
    assert r.json()["detail"] == "user not found"

def test_password_hashes_are_salted_and_verifiable():
    a = hash_password("hunter22", iterations=1000)
    b = hash_password("hunter22", iterations=1000)

    assert a != b
    assert a.startswith("pbkdf2_sha256$1000$")
    assert verify_password("hunter22", a)
    assert not verify_password("hunter23", a)
    assert not verify_password("hunter22", "garbage")
