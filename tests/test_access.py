"""Tests for the role/capability table and endpoint authorization"""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from qrmenu.models.restaurant import Restaurant
from qrmenu.models.user import Role, User
from qrmenu.services.access import Capability, check_access


def make_user(role: Role, **kwargs) -> User:
    return User(id=uuid4(), email=f"{uuid4().hex}@example.com", role_id=role.value, is_active=True, **kwargs)


def test_super_admin_has_every_capability():
    admin = make_user(Role.SUPER_ADMIN)
    restaurant = Restaurant(id=uuid4(), owner_id=uuid4())

    for capability in Capability:
        assert check_access(admin, capability, restaurant)


def test_platform_staff_is_read_only():
    staff = make_user(Role.SUPER_ADMIN_STAFF)
    restaurant = Restaurant(id=uuid4(), owner_id=uuid4())

    assert check_access(staff, Capability.PLATFORM_READ)
    assert check_access(staff, Capability.TENANT_READ, restaurant)

    decision = check_access(staff, Capability.TENANT_WRITE, restaurant)
    assert not decision
    assert decision.reason == "Insufficient permissions"
    assert not check_access(staff, Capability.PLATFORM_MANAGE)
    assert not check_access(staff, Capability.INVITE_OWNER)


def test_owner_is_scoped_to_owned_restaurants():
    owner = make_user(Role.OWNER)
    own = Restaurant(id=uuid4(), owner_id=owner.id)
    foreign = Restaurant(id=uuid4(), owner_id=uuid4())

    assert check_access(owner, Capability.TENANT_WRITE, own)
    assert check_access(owner, Capability.INVITE_STAFF)

    decision = check_access(owner, Capability.TENANT_READ, foreign)
    assert not decision
    assert decision.reason == "Access denied to this restaurant"

    assert not check_access(owner, Capability.PLATFORM_READ)
    assert not check_access(owner, Capability.INVITE_OWNER)


def test_owner_staff_is_scoped_to_invited_restaurant():
    restaurant = Restaurant(id=uuid4(), owner_id=uuid4())
    staff = make_user(Role.OWNER_STAFF, restaurant_id=restaurant.id)

    assert check_access(staff, Capability.TENANT_WRITE, restaurant)
    assert not check_access(staff, Capability.TENANT_READ, Restaurant(id=uuid4(), owner_id=uuid4()))
    assert not check_access(staff, Capability.INVITE_STAFF)


def test_inactive_user_is_denied():
    owner = make_user(Role.OWNER)
    owner.is_active = False

    decision = check_access(owner, Capability.TENANT_READ, Restaurant(id=uuid4(), owner_id=owner.id))
    assert not decision
    assert decision.reason == "User account is disabled"


@pytest.mark.asyncio
async def test_missing_token_is_401(client: AsyncClient, restaurant):
    response = await client.get(f"/api/restaurants/{restaurant.id}/locations")

    assert response.status_code == 401
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_garbage_token_is_401(client: AsyncClient, restaurant):
    response = await client.get(
        f"/api/restaurants/{restaurant.id}/locations",
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Could not validate credentials"}


@pytest.mark.asyncio
async def test_other_owner_gets_403(client: AsyncClient, auth_headers, other_owner, restaurant):
    response = await client.get(
        f"/api/restaurants/{restaurant.id}/menus",
        headers=auth_headers(other_owner),
    )

    assert response.status_code == 403
    assert response.json() == {"error": "Access denied to this restaurant"}


@pytest.mark.asyncio
async def test_unknown_restaurant_is_404(client: AsyncClient, auth_headers, owner):
    response = await client.get(f"/api/restaurants/{uuid4()}", headers=auth_headers(owner))

    assert response.status_code == 404
    assert response.json() == {"error": "Restaurant not found"}


@pytest.mark.asyncio
async def test_platform_staff_can_read_but_not_write(
    client: AsyncClient, auth_headers, platform_staff, restaurant
):
    headers = auth_headers(platform_staff)

    response = await client.get(f"/api/restaurants/{restaurant.id}/locations", headers=headers)
    assert response.status_code == 200

    response = await client.post(
        f"/api/restaurants/{restaurant.id}/locations",
        json={"name": "Harbour"},
        headers=headers,
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_owner_staff_writes_inside_scope_only(
    client: AsyncClient, auth_headers, owner_staff, restaurant, other_restaurant
):
    headers = auth_headers(owner_staff)

    response = await client.post(
        f"/api/restaurants/{restaurant.id}/menus",
        json={"name": "Lunch"},
        headers=headers,
    )
    assert response.status_code == 201

    response = await client.post(
        f"/api/restaurants/{other_restaurant.id}/menus",
        json={"name": "Lunch"},
        headers=headers,
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_nested_child_of_other_restaurant_is_404(
    client: AsyncClient, auth_headers, other_owner, location, other_restaurant
):
    """A location addressed under the wrong restaurant is not found, not leaked"""
    response = await client.get(
        f"/api/restaurants/{other_restaurant.id}/locations/{location.id}",
        headers=auth_headers(other_owner),
    )

    assert response.status_code == 404
