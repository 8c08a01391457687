"""Tests for restaurants, locations, menus, categories and items"""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from qrmenu.models.audit import AuditLog
from qrmenu.models.menu import Category, Item, LocationMenu, Menu
from qrmenu.models.qr_code import QRCode
from qrmenu.models.restaurant import Location, Restaurant


async def count(db, model, *criteria) -> int:
    result = await db.execute(select(func.count()).select_from(model).where(*criteria))
    return result.scalar()


@pytest.mark.asyncio
async def test_owner_creates_restaurant(client: AsyncClient, auth_headers, owner):
    response = await client.post(
        "/api/restaurants",
        json={"name": "Jade Garden", "address": "88 Market Street"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["slug"] == "jade-garden"
    assert data["owner_id"] == str(owner.id)
    assert data["is_active"] is True


@pytest.mark.asyncio
async def test_restaurant_slug_is_unique_platform_wide(
    client: AsyncClient, auth_headers, other_owner, restaurant
):
    response = await client.post(
        "/api/restaurants",
        json={"name": "Jade  GARDEN!"},
        headers=auth_headers(other_owner),
    )

    assert response.status_code == 409
    assert "jade-garden" in response.json()["error"]


@pytest.mark.asyncio
async def test_only_owners_create_restaurants(client: AsyncClient, auth_headers, owner_staff):
    response = await client.post(
        "/api/restaurants", json={"name": "Side Project"}, headers=auth_headers(owner_staff)
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_restaurant_list_is_scoped(
    client: AsyncClient, auth_headers, owner, super_admin, restaurant, other_restaurant
):
    response = await client.get("/api/restaurants", headers=auth_headers(owner))
    assert [r["slug"] for r in response.json()] == ["jade-garden"]

    response = await client.get("/api/restaurants", headers=auth_headers(super_admin))
    assert {r["slug"] for r in response.json()} == {"jade-garden", "blue-fin"}


@pytest.mark.asyncio
async def test_renaming_restaurant_regenerates_slug(client: AsyncClient, auth_headers, owner, restaurant):
    response = await client.put(
        f"/api/restaurants/{restaurant.id}",
        json={"name": "Jade Garden Express"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    assert response.json()["slug"] == "jade-garden-express"


@pytest.mark.asyncio
async def test_location_crud(client: AsyncClient, auth_headers, owner, restaurant):
    headers = auth_headers(owner)
    base = f"/api/restaurants/{restaurant.id}/locations"

    response = await client.post(base, json={"name": "Downtown Branch"}, headers=headers)
    assert response.status_code == 201
    location = response.json()
    assert location["slug"] == "downtown-branch"

    response = await client.post(base, json={"name": "downtown branch"}, headers=headers)
    assert response.status_code == 409

    response = await client.put(
        f"{base}/{location['id']}",
        json={"address": "1 Harbour Road", "is_active": False},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["address"] == "1 Harbour Road"
    assert response.json()["is_active"] is False
    assert response.json()["slug"] == "downtown-branch"

    response = await client.get(base, headers=headers)
    assert [loc["id"] for loc in response.json()] == [location["id"]]


@pytest.mark.asyncio
async def test_same_location_slug_allowed_in_other_restaurant(
    client: AsyncClient, auth_headers, other_owner, location, other_restaurant
):
    response = await client.post(
        f"/api/restaurants/{other_restaurant.id}/locations",
        json={"name": "Downtown Branch"},
        headers=auth_headers(other_owner),
    )

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_menu_slug_is_unique_per_restaurant(client: AsyncClient, auth_headers, owner, menu, restaurant):
    response = await client.post(
        f"/api/restaurants/{restaurant.id}/menus",
        json={"name": "DINNER"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_name_without_slug_characters_is_400(client: AsyncClient, auth_headers, owner, restaurant):
    response = await client.post(
        f"/api/restaurants/{restaurant.id}/menus",
        json={"name": "???"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_negative_price_is_400(client: AsyncClient, auth_headers, owner, test_db, menu):
    category = Category(menu_id=menu.id, name="Mains", display_order=1)
    test_db.add(category)
    await test_db.commit()

    response = await client.post(
        f"/api/categories/{category.id}/items",
        json={"name": "Freebie", "price_cents": -1},
        headers=auth_headers(owner),
    )

    assert response.status_code == 400
    assert "price_cents" in response.json()["error"]


@pytest.mark.asyncio
async def test_item_update(client: AsyncClient, auth_headers, owner, served_menu, test_db):
    item = (await test_db.execute(select(Item).where(Item.name == "Mapo Tofu"))).scalar_one()

    response = await client.put(
        f"/api/items/{item.id}",
        json={"price_cents": 1400, "is_available": False},
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    assert response.json()["price_cents"] == 1400
    assert response.json()["is_available"] is False
    assert response.json()["display_order"] == 2


@pytest.mark.asyncio
async def test_delete_menu_cascades(
    client: AsyncClient, auth_headers, owner, test_db, restaurant, location, served_menu
):
    menu_id, location_id = served_menu.id, location.id
    test_db.add(QRCode(location_id=location_id, menu_id=menu_id, image_url="https://cdn.example/qr/dinner.png"))
    await test_db.commit()

    response = await client.delete(
        f"/api/restaurants/{restaurant.id}/menus/{menu_id}",
        headers=auth_headers(owner),
    )
    assert response.status_code == 204

    assert await count(test_db, Menu, Menu.id == menu_id) == 0
    assert await count(test_db, Category, Category.menu_id == menu_id) == 0
    assert await count(test_db, Item) == 0
    assert await count(test_db, LocationMenu, LocationMenu.menu_id == menu_id) == 0
    assert await count(test_db, QRCode, QRCode.menu_id == menu_id) == 0
    assert await count(test_db, Location, Location.id == location_id) == 1

    entry = (await test_db.execute(select(AuditLog).where(AuditLog.action == "delete_menu"))).scalar_one()
    assert entry.actor_id == owner.id
    assert entry.data_json["orphaned_qr_images"] == ["https://cdn.example/qr/dinner.png"]


@pytest.mark.asyncio
async def test_delete_location_cascades(
    client: AsyncClient, auth_headers, owner, test_db, restaurant, location, served_menu
):
    location_id, menu_id = location.id, served_menu.id
    test_db.add_all([
        QRCode(location_id=location_id, menu_id=None, image_url="https://cdn.example/qr/loc.png"),
        QRCode(location_id=location_id, menu_id=menu_id, image_url="https://cdn.example/qr/dinner.png"),
    ])
    await test_db.commit()

    response = await client.delete(
        f"/api/restaurants/{restaurant.id}/locations/{location_id}",
        headers=auth_headers(owner),
    )
    assert response.status_code == 204

    assert await count(test_db, Location, Location.id == location_id) == 0
    assert await count(test_db, QRCode) == 0
    assert await count(test_db, LocationMenu) == 0
    # Menus belong to the restaurant and survive
    assert await count(test_db, Menu, Menu.id == menu_id) == 1
    assert await count(test_db, Item) == 2

    entry = (await test_db.execute(select(AuditLog).where(AuditLog.action == "delete_location"))).scalar_one()
    assert sorted(entry.data_json["orphaned_qr_images"]) == [
        "https://cdn.example/qr/dinner.png",
        "https://cdn.example/qr/loc.png",
    ]


@pytest.mark.asyncio
async def test_delete_category_removes_items(client: AsyncClient, auth_headers, owner, test_db, served_menu):
    category = (await test_db.execute(select(Category))).scalar_one()
    category_id = category.id

    response = await client.delete(f"/api/categories/{category_id}", headers=auth_headers(owner))
    assert response.status_code == 204

    assert await count(test_db, Category) == 0
    assert await count(test_db, Item) == 0
    assert await count(test_db, Menu) == 1


@pytest.mark.asyncio
async def test_deleted_item_is_gone(client: AsyncClient, auth_headers, owner, test_db, served_menu):
    item = (await test_db.execute(select(Item).where(Item.name == "Kung Pao Chicken"))).scalar_one()
    item_id = item.id
    headers = auth_headers(owner)

    response = await client.delete(f"/api/items/{item_id}", headers=headers)
    assert response.status_code == 204

    response = await client.get(f"/api/items/{item_id}", headers=headers)
    assert response.status_code == 404
    assert await count(test_db, Item) == 1


@pytest.mark.asyncio
async def test_admin_lists_and_toggles_restaurants(
    client: AsyncClient, auth_headers, super_admin, owner, restaurant, test_db
):
    headers = auth_headers(super_admin)

    response = await client.get("/api/admin/restaurants", headers=headers)
    assert response.status_code == 200
    assert response.json()[0]["owner_email"] == owner.email

    response = await client.patch(
        f"/api/admin/restaurants/{restaurant.id}",
        json={"is_active": False},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    assert await count(test_db, AuditLog, AuditLog.action == "toggle_restaurant") == 1
    assert await count(test_db, Restaurant, Restaurant.is_active.is_(False)) == 1


@pytest.mark.asyncio
async def test_platform_staff_cannot_toggle_restaurants(
    client: AsyncClient, auth_headers, platform_staff, restaurant
):
    headers = auth_headers(platform_staff)

    response = await client.get("/api/admin/restaurants", headers=headers)
    assert response.status_code == 200

    response = await client.patch(
        f"/api/admin/restaurants/{restaurant.id}",
        json={"is_active": False},
        headers=headers,
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_owner_cannot_use_admin_endpoints(client: AsyncClient, auth_headers, owner):
    response = await client.get("/api/admin/restaurants", headers=auth_headers(owner))

    assert response.status_code == 403
    assert response.json() == {"error": "Insufficient permissions"}


@pytest.mark.asyncio
async def test_null_required_fields_are_rejected(
    client: AsyncClient, auth_headers, owner, test_db, restaurant, location, served_menu
):
    headers = auth_headers(owner)
    category = (await test_db.execute(select(Category))).scalar_one()
    item = (await test_db.execute(select(Item).where(Item.name == "Mapo Tofu"))).scalar_one()

    cases = [
        (f"/api/restaurants/{restaurant.id}", {"name": None}, "name"),
        (f"/api/restaurants/{restaurant.id}/locations/{location.id}", {"is_active": None}, "is_active"),
        (f"/api/restaurants/{restaurant.id}/menus/{served_menu.id}", {"is_active": None}, "is_active"),
        (f"/api/categories/{category.id}", {"name": None}, "name"),
        (f"/api/items/{item.id}", {"price_cents": None}, "price_cents"),
        (f"/api/items/{item.id}", {"is_available": None}, "is_available"),
    ]
    for url, body, field in cases:
        response = await client.put(url, json=body, headers=headers)
        assert response.status_code == 400, url
        assert response.json()["error"].startswith(f"{field}:")

    response = await client.get(f"/api/restaurants/{restaurant.id}/menus", headers=headers)
    assert response.status_code == 200
    assert response.json()[0]["is_active"] is True

    response = await client.get(f"/api/items/{item.id}", headers=headers)
    assert response.json()["price_cents"] == 1300


@pytest.mark.asyncio
async def test_optional_fields_can_be_cleared(
    client: AsyncClient, auth_headers, owner, restaurant, location
):
    response = await client.put(
        f"/api/restaurants/{restaurant.id}/locations/{location.id}",
        json={"address": None},
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    assert response.json()["address"] is None


@pytest.mark.asyncio
async def test_status_toggles_are_audited(
    client: AsyncClient, auth_headers, owner, test_db, restaurant, location, served_menu
):
    headers = auth_headers(owner)
    category = (await test_db.execute(select(Category))).scalar_one()
    item = (await test_db.execute(select(Item).where(Item.name == "Mapo Tofu"))).scalar_one()
    location_id, menu_id, category_id, item_id = location.id, served_menu.id, category.id, item.id

    toggles = [
        (f"/api/restaurants/{restaurant.id}/locations/{location_id}", {"is_active": False}),
        (f"/api/restaurants/{restaurant.id}/menus/{menu_id}", {"is_active": False}),
        (f"/api/categories/{category_id}", {"is_active": False}),
        (f"/api/items/{item_id}", {"is_available": False}),
    ]
    for url, body in toggles:
        response = await client.put(url, json=body, headers=headers)
        assert response.status_code == 200, url

    entries = (await test_db.execute(select(AuditLog).order_by(AuditLog.created_at))).scalars().all()
    assert [(e.action, e.resource_id, e.data_json) for e in entries] == [
        ("toggle_location", location_id, {"is_active": False}),
        ("toggle_menu", menu_id, {"is_active": False}),
        ("toggle_category", category_id, {"is_active": False}),
        ("toggle_item", item_id, {"is_available": False}),
    ]
    assert all(e.actor_id == owner.id and e.restaurant_id == restaurant.id for e in entries)


@pytest.mark.asyncio
async def test_unchanged_status_is_not_audited(
    client: AsyncClient, auth_headers, owner, test_db, restaurant, menu
):
    response = await client.put(
        f"/api/restaurants/{restaurant.id}/menus/{menu.id}",
        json={"is_active": True, "description": "Served from 5pm"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    assert await count(test_db, AuditLog) == 0
