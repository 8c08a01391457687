"""Tests for display ordering of menus, categories and items"""

import pytest
from httpx import AsyncClient

from qrmenu.models.menu import Menu
from qrmenu.services.ordering import DOWN, UP, swap_with_neighbour


async def _create_menus(client, headers, restaurant, names):
    ids = []
    for name in names:
        response = await client.post(
            f"/api/restaurants/{restaurant.id}/menus",
            json={"name": name},
            headers=headers,
        )
        assert response.status_code == 201
        ids.append(response.json()["id"])
    return ids


async def _menu_names(client, headers, restaurant):
    response = await client.get(f"/api/restaurants/{restaurant.id}/menus", headers=headers)
    assert response.status_code == 200
    return [(menu["name"], menu["display_order"]) for menu in response.json()]


@pytest.mark.asyncio
async def test_create_appends_with_next_order(client: AsyncClient, auth_headers, owner, restaurant):
    headers = auth_headers(owner)
    await _create_menus(client, headers, restaurant, ["Breakfast", "Lunch", "Dinner"])

    assert await _menu_names(client, headers, restaurant) == [
        ("Breakfast", 1),
        ("Lunch", 2),
        ("Dinner", 3),
    ]


@pytest.mark.asyncio
async def test_reorder_swaps_with_neighbour(client: AsyncClient, auth_headers, owner, restaurant):
    headers = auth_headers(owner)
    _, _, dinner_id = await _create_menus(client, headers, restaurant, ["Breakfast", "Lunch", "Dinner"])

    response = await client.put(
        f"/api/restaurants/{restaurant.id}/menus/{dinner_id}",
        json={"action": "reorder", "direction": "up"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["display_order"] == 2

    assert await _menu_names(client, headers, restaurant) == [
        ("Breakfast", 1),
        ("Dinner", 2),
        ("Lunch", 3),
    ]


@pytest.mark.asyncio
async def test_reorder_past_either_end_is_a_no_op(
    client: AsyncClient, auth_headers, owner, restaurant
):
    headers = auth_headers(owner)
    first_id, _, last_id = await _create_menus(client, headers, restaurant, ["A", "B", "C"])

    response = await client.put(
        f"/api/restaurants/{restaurant.id}/menus/{first_id}",
        json={"action": "reorder", "direction": "up"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["display_order"] == 1

    response = await client.put(
        f"/api/restaurants/{restaurant.id}/menus/{last_id}",
        json={"action": "reorder", "direction": "down"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["display_order"] == 3

    assert await _menu_names(client, headers, restaurant) == [("A", 1), ("B", 2), ("C", 3)]


@pytest.mark.asyncio
async def test_reorder_without_direction_is_400(client: AsyncClient, auth_headers, owner, menu, restaurant):
    response = await client.put(
        f"/api/restaurants/{restaurant.id}/menus/{menu.id}",
        json={"action": "reorder"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "direction is required to reorder"}


@pytest.mark.asyncio
async def test_unknown_direction_is_400(client: AsyncClient, auth_headers, owner, menu, restaurant):
    response = await client.put(
        f"/api/restaurants/{restaurant.id}/menus/{menu.id}",
        json={"action": "reorder", "direction": "sideways"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_duplicate_orders_are_renumbered_before_swap(test_db, restaurant):
    """Rows sharing an order value still move"""
    menus = [
        Menu(restaurant_id=restaurant.id, name=name, slug=name.lower(), display_order=1)
        for name in ("First", "Second", "Third")
    ]
    test_db.add_all(menus)
    await test_db.commit()

    # Siblings tie on display_order; ordering falls back to created_at, then id
    siblings = sorted(menus, key=lambda m: (m.display_order, m.created_at, m.id))
    mover = siblings[2]

    moved = await swap_with_neighbour(test_db, Menu, Menu.restaurant_id, restaurant.id, mover, UP)
    await test_db.commit()

    assert moved is True
    orders = sorted(m.display_order for m in menus)
    assert orders == [1, 2, 3]
    assert mover.display_order == 2
    assert siblings[1].display_order == 3


@pytest.mark.asyncio
async def test_swap_at_edge_returns_false(test_db, menu, restaurant):
    assert await swap_with_neighbour(test_db, Menu, Menu.restaurant_id, restaurant.id, menu, DOWN) is False
    assert menu.display_order == 1


@pytest.mark.asyncio
async def test_categories_and_items_are_ordered(client: AsyncClient, auth_headers, owner, menu):
    headers = auth_headers(owner)

    category_ids = []
    for name in ("Starters", "Mains"):
        response = await client.post(
            f"/api/menus/{menu.id}/categories", json={"name": name}, headers=headers
        )
        assert response.status_code == 201
        category_ids.append(response.json()["id"])

    response = await client.put(
        f"/api/categories/{category_ids[1]}",
        json={"action": "reorder", "direction": "up"},
        headers=headers,
    )
    assert response.status_code == 200

    response = await client.get(f"/api/menus/{menu.id}/categories", headers=headers)
    assert [c["name"] for c in response.json()] == ["Mains", "Starters"]

    item_ids = []
    for name, price in (("Spring Rolls", 650), ("Dumplings", 850), ("Wontons", 700)):
        response = await client.post(
            f"/api/categories/{category_ids[0]}/items",
            json={"name": name, "price_cents": price},
            headers=headers,
        )
        assert response.status_code == 201
        item_ids.append(response.json()["id"])

    assert [i["display_order"] for i in (await client.get(
        f"/api/categories/{category_ids[0]}/items", headers=headers
    )).json()] == [1, 2, 3]

    response = await client.put(
        f"/api/items/{item_ids[0]}",
        json={"action": "reorder", "direction": "down"},
        headers=headers,
    )
    assert response.status_code == 200

    response = await client.get(f"/api/categories/{category_ids[0]}/items", headers=headers)
    assert [i["name"] for i in response.json()] == ["Dumplings", "Spring Rolls", "Wontons"]
