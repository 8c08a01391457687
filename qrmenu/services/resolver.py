"""Slug-based resolution of the public (diner-facing) menu pages.

Every step must be active: restaurant, location, the location-menu
assignment and the menu itself. Any failed step yields the same 404 so an
inactive tenant is indistinguishable from a missing one.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.exceptions import NotFoundError
from qrmenu.models.menu import Category, Item, LocationMenu, Menu
from qrmenu.models.restaurant import Location, Restaurant
from qrmenu.schemas.public import (
    PublicCategory,
    PublicItem,
    PublicLocation,
    PublicLocationPage,
    PublicMenu,
    PublicMenuPage,
    PublicRestaurant,
)
from qrmenu.services.qr_codes import build_menu_path


async def get_active_restaurant(db: AsyncSession, restaurant_slug: str) -> Restaurant:
    result = await db.execute(
        select(Restaurant).where(
            Restaurant.slug == restaurant_slug,
            Restaurant.is_active.is_(True),
        )
    )
    restaurant = result.scalar_one_or_none()

    if not restaurant:
        raise NotFoundError("Restaurant not found")

    return restaurant


async def _active_location(
    db: AsyncSession,
    restaurant: Restaurant,
    location_slug: str,
) -> Location:
    result = await db.execute(
        select(Location).where(
            Location.restaurant_id == restaurant.id,
            Location.slug == location_slug,
            Location.is_active.is_(True),
        )
    )
    location = result.scalar_one_or_none()

    if not location:
        raise NotFoundError("Location not found")

    return location


def _served_menus_query(location: Location):
    return (
        select(Menu)
        .join(LocationMenu, LocationMenu.menu_id == Menu.id)
        .where(
            LocationMenu.location_id == location.id,
            LocationMenu.is_active.is_(True),
            Menu.is_active.is_(True),
        )
        .order_by(Menu.display_order, Menu.created_at)
    )


async def _menu_tree(db: AsyncSession, menus: List[Menu]) -> List[PublicMenu]:
    """Attach active categories and available items, both in display order"""
    if not menus:
        return []

    menu_ids = [menu.id for menu in menus]
    categories = (
        await db.execute(
            select(Category)
            .where(Category.menu_id.in_(menu_ids), Category.is_active.is_(True))
            .order_by(Category.display_order, Category.created_at)
        )
    ).scalars().all()

    category_ids = [category.id for category in categories]
    items = []
    if category_ids:
        items = (
            await db.execute(
                select(Item)
                .where(Item.category_id.in_(category_ids), Item.is_available.is_(True))
                .order_by(Item.display_order, Item.created_at)
            )
        ).scalars().all()

    items_by_category = {}
    for item in items:
        items_by_category.setdefault(item.category_id, []).append(PublicItem.model_validate(item))

    categories_by_menu = {}
    for category in categories:
        categories_by_menu.setdefault(category.menu_id, []).append(
            PublicCategory(
                id=category.id,
                name=category.name,
                description=category.description,
                items=items_by_category.get(category.id, []),
            )
        )

    return [
        PublicMenu(
            id=menu.id,
            name=menu.name,
            slug=menu.slug,
            description=menu.description,
            categories=categories_by_menu.get(menu.id, []),
        )
        for menu in menus
    ]


async def resolve_location_page(
    db: AsyncSession,
    restaurant_slug: str,
    location_slug: str,
) -> PublicLocationPage:
    restaurant = await get_active_restaurant(db, restaurant_slug)
    location = await _active_location(db, restaurant, location_slug)

    menus = (await db.execute(_served_menus_query(location))).scalars().all()

    return PublicLocationPage(
        restaurant=PublicRestaurant.model_validate(restaurant),
        location=PublicLocation.model_validate(location),
        menus=await _menu_tree(db, list(menus)),
    )


async def resolve_menu_page(
    db: AsyncSession,
    restaurant_slug: str,
    location_slug: str,
    menu_slug: str,
) -> PublicMenuPage:
    restaurant = await get_active_restaurant(db, restaurant_slug)
    location = await _active_location(db, restaurant, location_slug)

    result = await db.execute(
        _served_menus_query(location).where(
            Menu.slug == menu_slug,
            Menu.restaurant_id == restaurant.id,
        )
    )
    menu = result.scalar_one_or_none()

    if not menu:
        raise NotFoundError("Menu not found")

    tree = await _menu_tree(db, [menu])

    return PublicMenuPage(
        restaurant=PublicRestaurant.model_validate(restaurant),
        location=PublicLocation.model_validate(location),
        menu=tree[0],
    )


async def default_location_path(db: AsyncSession, restaurant_slug: str) -> str:
    """Path of the restaurant's earliest active location (legacy short links)"""
    restaurant = await get_active_restaurant(db, restaurant_slug)

    result = await db.execute(
        select(Location.slug)
        .where(Location.restaurant_id == restaurant.id, Location.is_active.is_(True))
        .order_by(Location.created_at)
        .limit(1)
    )
    location_slug: Optional[str] = result.scalar_one_or_none()

    if not location_slug:
        raise NotFoundError("Location not found")

    return build_menu_path(restaurant.slug, location_slug)
