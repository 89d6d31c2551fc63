"""Tests for sign-up, login and the session endpoints."""

import pytest
from fastapi import status

from beloved.models.profile import UserRole

from conftest import DEFAULT_PASSWORD, auth_headers

pytestmark = pytest.mark.asyncio

SIGNUP = {
    "email": "Walter.Green@example.com",
    "password": "supersecret",
    "full_name": "Walter Green",
    "phone": "317-555-0102",
}


async def test_signup_creates_member_with_member_number(client):
    response = await client.post("/api/auth/signup", json=SIGNUP)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["redirect_to"] == "/member-dashboard"
    assert data["user"]["email"] == "walter.green@example.com"
    assert data["user"]["user_role"] == "member"
    assert data["user"]["member_id"] == "0000001"
    assert "access_token=" in response.headers["set-cookie"]
    assert "HttpOnly" in response.headers["set-cookie"]


async def test_member_numbers_increase(client):
    await client.post("/api/auth/signup", json=SIGNUP)
    response = await client.post(
        "/api/auth/signup", json={**SIGNUP, "email": "dolores@example.com", "full_name": "Dolores Price"}
    )
    assert response.json()["user"]["member_id"] == "0000002"


async def test_signup_validation_errors(client):
    response = await client.post(
        "/api/auth/signup", json={"email": "bad", "password": "short", "full_name": "", "phone": "12"}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    body = response.json()
    assert body["detail"] == "Validation failed"
    assert body["errors"] == {
        "full_name": "Full name is required",
        "email": "Invalid email format",
        "phone": "Invalid phone number format",
        "password": "Password must be at least 8 characters",
    }


@pytest.mark.parametrize("email", ["ruth@clinic.local", "ruth@beloved.test", "ruth@@example.com"])
async def test_signup_rejects_addresses_login_cannot_accept(client, email):
    response = await client.post("/api/auth/signup", json={**SIGNUP, "email": email})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["errors"] == {"email": "Invalid email format"}

    response = await client.post("/api/auth/login", json={"email": email, "password": SIGNUP["password"]})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


async def test_signup_then_login(client):
    response = await client.post("/api/auth/signup", json=SIGNUP)
    assert response.status_code == status.HTTP_201_CREATED

    response = await client.post(
        "/api/auth/login", json={"email": SIGNUP["email"], "password": SIGNUP["password"]}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["user"]["email"] == "walter.green@example.com"
    assert data["redirect_to"] == "/member-dashboard"


async def test_signup_duplicate_email(client):
    await client.post("/api/auth/signup", json=SIGNUP)
    response = await client.post("/api/auth/signup", json={**SIGNUP, "email": "walter.green@EXAMPLE.com"})
    assert response.status_code == status.HTTP_409_CONFLICT


async def test_signup_with_owner_address_creates_super_admin(client):
    response = await client.post(
        "/api/auth/signup", json={**SIGNUP, "email": "owner@example.com", "full_name": "Owner"}
    )

    data = response.json()
    assert data["user"]["user_role"] == "super_admin"
    assert data["user"]["member_id"] is None
    assert data["redirect_to"] == "/super-admin-dashboard"


async def test_login_returns_dashboard_for_role(client, make_user):
    driver = await make_user(UserRole.DRIVER, email="james@example.com", full_name="James Carter")

    response = await client.post(
        "/api/auth/login", json={"email": "james@example.com", "password": DEFAULT_PASSWORD}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["user"]["id"] == str(driver.id)
    assert data["redirect_to"] == "/driver-dashboard"


async def test_login_wrong_password(client, member):
    response = await client.post("/api/auth/login", json={"email": member.email, "password": "wrong-password"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


async def test_login_unknown_email(client):
    response = await client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


async def test_login_inactive_account(client, admin):
    await client.post(
        "/api/members",
        json={
            "full_name": "Henry Adams",
            "email": "henry@example.com",
            "phone": "317-555-0104",
            "password": DEFAULT_PASSWORD,
            "status": "inactive",
        },
        headers=auth_headers(admin),
    )

    response = await client.post(
        "/api/auth/login", json={"email": "henry@example.com", "password": DEFAULT_PASSWORD}
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


async def test_me_requires_session(client):
    response = await client.get("/api/auth/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Not authenticated"


async def test_me_rejects_garbage_token(client):
    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid token"


async def test_me_returns_profile(client, member):
    response = await client.get("/api/auth/me", headers=auth_headers(member))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["email"] == member.email
    assert response.json()["home_address"]["city"] == "Indianapolis"


async def test_update_me(client, member):
    response = await client.patch(
        "/api/auth/me",
        json={"full_name": "Ruth A. Johnson", "home_address": {"address": "44 Oak Ave", "city": "Carmel"}},
        headers=auth_headers(member),
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["full_name"] == "Ruth A. Johnson"
    assert data["phone"] == "317-555-0100"
    assert data["home_address"]["address"] == "44 Oak Ave"


async def test_update_me_validates_phone(client, member):
    response = await client.patch("/api/auth/me", json={"phone": "123"}, headers=auth_headers(member))
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["errors"] == {"phone": "Invalid phone number format"}


async def test_logout_clears_cookie(client):
    response = await client.post("/api/auth/logout")
    assert response.status_code == status.HTTP_200_OK
    assert "access_token" in response.headers.get("set-cookie", "")


async def test_security_headers_present(client):
    response = await client.get("/healthz")
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
