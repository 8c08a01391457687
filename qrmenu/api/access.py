"""Resource loaders that authorize the caller against the owning restaurant.

Each loader walks the ownership chain up to the restaurant (404 if any link
is missing) and then applies ``check_access`` (403 on denial).
"""

from typing import Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.exceptions import ForbiddenError, NotFoundError
from qrmenu.models.menu import Category, Item, Menu
from qrmenu.models.qr_code import QRCode
from qrmenu.models.restaurant import Location, Restaurant
from qrmenu.models.user import User
from qrmenu.services.access import Capability, check_access
from qrmenu.services import locations as location_service
from qrmenu.services import menus as menu_service
from qrmenu.services import qr_codes as qr_service
from qrmenu.services import restaurants as restaurant_service


def require(user: User, capability: Capability, restaurant: Restaurant = None) -> None:
    decision = check_access(user, capability, restaurant)
    if not decision:
        raise ForbiddenError(decision.reason)


async def authorize_restaurant(
    db: AsyncSession,
    user: User,
    restaurant_id: UUID,
    capability: Capability,
) -> Restaurant:
    restaurant = await restaurant_service.get_restaurant(db, restaurant_id)
    require(user, capability, restaurant)
    return restaurant


async def authorize_location(
    db: AsyncSession,
    user: User,
    location_id: UUID,
    capability: Capability,
    restaurant_id: UUID = None,
) -> Tuple[Location, Restaurant]:
    """Load a location; ``restaurant_id`` pins it under a nested route"""
    location = await location_service.get_location(db, location_id)
    if restaurant_id is not None and location.restaurant_id != restaurant_id:
        raise NotFoundError("Location not found")

    restaurant = await restaurant_service.get_restaurant(db, location.restaurant_id)
    require(user, capability, restaurant)
    return location, restaurant


async def authorize_menu(
    db: AsyncSession,
    user: User,
    menu_id: UUID,
    capability: Capability,
    restaurant_id: UUID = None,
) -> Tuple[Menu, Restaurant]:
    menu = await menu_service.get_menu(db, menu_id)
    if restaurant_id is not None and menu.restaurant_id != restaurant_id:
        raise NotFoundError("Menu not found")

    restaurant = await restaurant_service.get_restaurant(db, menu.restaurant_id)
    require(user, capability, restaurant)
    return menu, restaurant


async def authorize_category(
    db: AsyncSession,
    user: User,
    category_id: UUID,
    capability: Capability,
) -> Tuple[Category, Restaurant]:
    category = await menu_service.get_category(db, category_id)
    _, restaurant = await authorize_menu(db, user, category.menu_id, capability)
    return category, restaurant


async def authorize_item(
    db: AsyncSession,
    user: User,
    item_id: UUID,
    capability: Capability,
) -> Tuple[Item, Restaurant]:
    item = await menu_service.get_item(db, item_id)
    _, restaurant = await authorize_category(db, user, item.category_id, capability)
    return item, restaurant


async def authorize_qr_code(
    db: AsyncSession,
    user: User,
    location_id: UUID,
    qr_code_id: UUID,
    capability: Capability,
) -> Tuple[QRCode, Location, Restaurant]:
    qr_code = await qr_service.get_qr_code(db, location_id, qr_code_id)
    location, restaurant = await authorize_location(db, user, location_id, capability)
    return qr_code, location, restaurant
