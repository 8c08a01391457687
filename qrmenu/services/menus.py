"""Menu, category and item operations.

Creates take ``max(display_order) + 1`` under a locked parent; reorders swap
with the adjacent sibling; deletes cascade explicitly in dependency order
(items, categories, location assignments, QR codes, menu) within a single
transaction.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from qrmenu.database import commit_or_conflict
from qrmenu.exceptions import ConflictError, NotFoundError, ValidationError
from qrmenu.models.menu import Category, Item, LocationMenu, Menu
from qrmenu.models.qr_code import QRCode
from qrmenu.models.restaurant import Restaurant
from qrmenu.models.user import User
from qrmenu.schemas.menu import (
    CategoryCreate,
    CategoryUpdate,
    ItemCreate,
    ItemUpdate,
    MenuCreate,
    MenuUpdate,
    ReorderFields,
)
from qrmenu.services import audit
from qrmenu.services.ordering import lock_parent, next_display_order, swap_with_neighbour
from qrmenu.services.slugs import require_slug

logger = structlog.get_logger()


def _require_direction(data: ReorderFields) -> str:
    if not data.direction:
        raise ValidationError("direction is required to reorder")
    return data.direction


# ---------------------------------------------------------------- menus

async def get_menu(db: AsyncSession, menu_id: UUID) -> Menu:
    result = await db.execute(select(Menu).where(Menu.id == menu_id))
    menu = result.scalar_one_or_none()

    if not menu:
        raise NotFoundError("Menu not found")

    return menu


async def list_menus(db: AsyncSession, restaurant_id: UUID) -> List[Menu]:
    result = await db.execute(
        select(Menu)
        .where(Menu.restaurant_id == restaurant_id)
        .order_by(Menu.display_order, Menu.created_at)
    )
    return list(result.scalars().all())


async def ensure_menu_slug_available(
    db: AsyncSession,
    restaurant_id: UUID,
    slug: str,
    exclude_id: Optional[UUID] = None,
) -> None:
    query = select(Menu.id).where(Menu.restaurant_id == restaurant_id, Menu.slug == slug)
    if exclude_id is not None:
        query = query.where(Menu.id != exclude_id)

    result = await db.execute(query)
    if result.first() is not None:
        raise ConflictError(f"A menu with the slug '{slug}' already exists for this restaurant")


async def create_menu(db: AsyncSession, restaurant: Restaurant, data: MenuCreate) -> Menu:
    slug = require_slug(data.name)

    await lock_parent(db, Restaurant, restaurant.id)
    await ensure_menu_slug_available(db, restaurant.id, slug)
    display_order = await next_display_order(db, Menu, Menu.restaurant_id, restaurant.id)

    menu = Menu(
        restaurant_id=restaurant.id,
        slug=slug,
        display_order=display_order,
        **data.model_dump(),
    )
    db.add(menu)
    await commit_or_conflict(db, f"A menu with the slug '{slug}' already exists for this restaurant")
    await db.refresh(menu)

    logger.info(
        "Menu created",
        restaurant_id=str(restaurant.id),
        menu_id=str(menu.id),
        display_order=display_order,
    )
    return menu


async def update_menu(db: AsyncSession, actor: User, menu: Menu, data: MenuUpdate) -> Menu:
    """Field update, or a reorder when the body carries action=reorder"""
    if data.is_reorder:
        direction = _require_direction(data)
        await lock_parent(db, Restaurant, menu.restaurant_id)
        await swap_with_neighbour(db, Menu, Menu.restaurant_id, menu.restaurant_id, menu, direction)
        await db.commit()
        await db.refresh(menu)
        return menu

    updates = data.model_dump(exclude_unset=True, exclude={"action", "direction"})

    if updates.get("name"):
        slug = require_slug(updates["name"])
        if slug != menu.slug:
            await ensure_menu_slug_available(db, menu.restaurant_id, slug, exclude_id=menu.id)
        updates["slug"] = slug

    is_active = audit.status_change(menu, updates)
    for field, value in updates.items():
        setattr(menu, field, value)

    if is_active is not None:
        audit.record_toggle(db, actor, "menu", menu.id, menu.restaurant_id, "is_active", is_active)

    await commit_or_conflict(db, "A menu with that slug already exists for this restaurant")
    await db.refresh(menu)

    if is_active is not None:
        logger.info("Menu status changed", menu_id=str(menu.id), is_active=is_active)
    return menu


async def delete_menu(db: AsyncSession, actor: User, menu: Menu) -> None:
    menu_id, restaurant_id, slug = menu.id, menu.restaurant_id, menu.slug

    category_ids = select(Category.id).where(Category.menu_id == menu_id)
    qr_images = (
        await db.execute(select(QRCode.image_url).where(QRCode.menu_id == menu_id))
    ).scalars().all()

    await db.execute(delete(Item).where(Item.category_id.in_(category_ids)))
    await db.execute(delete(Category).where(Category.menu_id == menu_id))
    await db.execute(delete(LocationMenu).where(LocationMenu.menu_id == menu_id))
    await db.execute(delete(QRCode).where(QRCode.menu_id == menu_id))
    await db.execute(delete(Menu).where(Menu.id == menu_id))

    audit.record(
        db,
        actor,
        "delete_menu",
        "menu",
        menu_id,
        restaurant_id,
        {"slug": slug, "orphaned_qr_images": list(qr_images)},
    )
    await db.commit()

    logger.info("Menu deleted", restaurant_id=str(restaurant_id), menu_id=str(menu_id))


# ---------------------------------------------------------------- categories

async def get_category(db: AsyncSession, category_id: UUID) -> Category:
    result = await db.execute(select(Category).where(Category.id == category_id))
    category = result.scalar_one_or_none()

    if not category:
        raise NotFoundError("Category not found")

    return category


async def list_categories(db: AsyncSession, menu_id: UUID) -> List[Category]:
    result = await db.execute(
        select(Category)
        .where(Category.menu_id == menu_id)
        .order_by(Category.display_order, Category.created_at)
    )
    return list(result.scalars().all())


async def create_category(db: AsyncSession, menu: Menu, data: CategoryCreate) -> Category:
    await lock_parent(db, Menu, menu.id)
    display_order = await next_display_order(db, Category, Category.menu_id, menu.id)

    category = Category(menu_id=menu.id, display_order=display_order, **data.model_dump())
    db.add(category)
    await db.commit()
    await db.refresh(category)

    logger.info("Category created", menu_id=str(menu.id), category_id=str(category.id))
    return category


async def update_category(
    db: AsyncSession,
    actor: User,
    category: Category,
    data: CategoryUpdate,
    restaurant_id: UUID,
) -> Category:
    is_active = None

    if data.is_reorder:
        direction = _require_direction(data)
        await lock_parent(db, Menu, category.menu_id)
        await swap_with_neighbour(
            db, Category, Category.menu_id, category.menu_id, category, direction
        )
    else:
        updates = data.model_dump(exclude_unset=True, exclude={"action", "direction"})
        is_active = audit.status_change(category, updates)
        for field, value in updates.items():
            setattr(category, field, value)

        if is_active is not None:
            audit.record_toggle(
                db, actor, "category", category.id, restaurant_id, "is_active", is_active
            )

    await db.commit()
    await db.refresh(category)

    if is_active is not None:
        logger.info("Category status changed", category_id=str(category.id), is_active=is_active)
    return category


async def delete_category(
    db: AsyncSession,
    actor: User,
    category: Category,
    restaurant_id: UUID,
) -> None:
    category_id = category.id

    await db.execute(delete(Item).where(Item.category_id == category_id))
    await db.execute(delete(Category).where(Category.id == category_id))

    audit.record(db, actor, "delete_category", "category", category_id, restaurant_id)
    await db.commit()

    logger.info("Category deleted", category_id=str(category_id))


# ---------------------------------------------------------------- items

async def get_item(db: AsyncSession, item_id: UUID) -> Item:
    result = await db.execute(select(Item).where(Item.id == item_id))
    item = result.scalar_one_or_none()

    if not item:
        raise NotFoundError("Menu item not found")

    return item


async def list_items(db: AsyncSession, category_id: UUID) -> List[Item]:
    result = await db.execute(
        select(Item)
        .where(Item.category_id == category_id)
        .order_by(Item.display_order, Item.created_at)
    )
    return list(result.scalars().all())


async def create_item(db: AsyncSession, category: Category, data: ItemCreate) -> Item:
    await lock_parent(db, Category, category.id)
    display_order = await next_display_order(db, Item, Item.category_id, category.id)

    item = Item(category_id=category.id, display_order=display_order, **data.model_dump())
    db.add(item)
    await db.commit()
    await db.refresh(item)

    logger.info("Menu item created", category_id=str(category.id), item_id=str(item.id))
    return item


async def update_item(
    db: AsyncSession,
    actor: User,
    item: Item,
    data: ItemUpdate,
    restaurant_id: UUID,
) -> Item:
    is_available = None

    if data.is_reorder:
        direction = _require_direction(data)
        await lock_parent(db, Category, item.category_id)
        await swap_with_neighbour(db, Item, Item.category_id, item.category_id, item, direction)
    else:
        updates = data.model_dump(exclude_unset=True, exclude={"action", "direction"})
        is_available = audit.status_change(item, updates, "is_available")
        for field, value in updates.items():
            setattr(item, field, value)

        if is_available is not None:
            audit.record_toggle(
                db, actor, "item", item.id, restaurant_id, "is_available", is_available
            )

    await db.commit()
    await db.refresh(item)

    if is_available is not None:
        logger.info("Menu item availability changed", item_id=str(item.id), is_available=is_available)
    return item


async def delete_item(db: AsyncSession, actor: User, item: Item, restaurant_id: UUID) -> None:
    item_id = item.id

    await db.execute(delete(Item).where(Item.id == item_id))

    audit.record(db, actor, "delete_item", "item", item_id, restaurant_id)
    await db.commit()

    logger.info("Menu item deleted", item_id=str(item_id))
