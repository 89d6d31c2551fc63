"""Tests for role-based page access."""

import uuid

import pytest
from fastapi import status

from beloved.core.guards import dashboard_path_for, normalize_path, resolve_page_access
from beloved.models.profile import Profile, UserRole

from conftest import auth_headers


def profile(role: UserRole) -> Profile:
    return Profile(id=uuid.uuid4(), email=f"{role.value}@example.com", full_name="Test", user_role=role)


@pytest.mark.parametrize("role,path", [
    (UserRole.MEMBER, "/member-dashboard"),
    (UserRole.DRIVER, "/driver-dashboard"),
    (UserRole.ADMIN, "/admin-dashboard"),
    (UserRole.SUPER_ADMIN, "/super-admin-dashboard"),
])
def test_dashboard_path_for_role(role, path):
    assert dashboard_path_for(role) == path


def test_dashboard_path_without_role_is_home():
    assert dashboard_path_for(None) == "/"


def test_normalize_path():
    assert normalize_path("member-dashboard/") == "/member-dashboard"
    assert normalize_path("/my-rides?page=2") == "/my-rides"
    assert normalize_path("") == "/"


def test_public_pages_need_no_session():
    assert resolve_page_access("/login", None).allowed is True
    assert resolve_page_access("/", None).allowed is True


def test_anonymous_user_is_sent_home():
    access = resolve_page_access("/member-dashboard", None)
    assert access.allowed is False
    assert access.redirect_to == "/"
    assert access.reason == "unauthenticated"


def test_wrong_role_is_sent_home():
    access = resolve_page_access("/admin-dashboard", profile(UserRole.MEMBER))
    assert access.allowed is False
    assert access.redirect_to == "/"
    assert access.reason == "forbidden"


def test_super_admin_may_open_admin_pages():
    assert resolve_page_access("/admin-dashboard", profile(UserRole.SUPER_ADMIN)).allowed is True
    assert resolve_page_access("/create-driver", profile(UserRole.SUPER_ADMIN)).allowed is True


def test_admin_may_not_open_super_admin_pages():
    access = resolve_page_access("/super-admin-dashboard", profile(UserRole.ADMIN))
    assert access.allowed is False


def test_nested_pages_use_their_prefix():
    assert resolve_page_access("/my-rides/T000001", profile(UserRole.MEMBER)).allowed is True
    assert resolve_page_access("/my-rides/T000001", profile(UserRole.DRIVER)).allowed is False


@pytest.mark.parametrize("role", list(UserRole))
def test_trips_page_forwards_to_dashboard(role):
    access = resolve_page_access("/trips", profile(role))
    assert access.allowed is False
    assert access.redirect_to == dashboard_path_for(role)
    assert access.reason == "role_dispatch"


def test_profile_page_open_to_every_role():
    for role in UserRole:
        assert resolve_page_access("/profile", profile(role)).allowed is True


@pytest.mark.asyncio
async def test_page_access_endpoint_anonymous(client):
    response = await client.get("/api/pages/access", params={"path": "/driver-dashboard"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "path": "/driver-dashboard",
        "allowed": False,
        "redirect_to": "/",
        "reason": "unauthenticated",
    }


@pytest.mark.asyncio
async def test_page_access_endpoint_with_session(client, driver):
    response = await client.get(
        "/api/pages/access", params={"path": "/driver-schedule"}, headers=auth_headers(driver)
    )
    assert response.json()["allowed"] is True


@pytest.mark.asyncio
async def test_dashboard_endpoint(client, member):
    response = await client.get("/api/pages/dashboard", headers=auth_headers(member))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["redirect_to"] == "/member-dashboard"
