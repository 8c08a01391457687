"""Restaurant operations"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from qrmenu.database import commit_or_conflict
from qrmenu.exceptions import ConflictError, NotFoundError
from qrmenu.models.restaurant import Restaurant
from qrmenu.models.user import Role, User
from qrmenu.schemas.restaurant import RestaurantCreate, RestaurantUpdate
from qrmenu.services import audit
from qrmenu.services.access import PLATFORM_ROLES
from qrmenu.services.slugs import require_slug

logger = structlog.get_logger()


async def get_restaurant(db: AsyncSession, restaurant_id: UUID) -> Restaurant:
    result = await db.execute(select(Restaurant).where(Restaurant.id == restaurant_id))
    restaurant = result.scalar_one_or_none()

    if not restaurant:
        raise NotFoundError("Restaurant not found")

    return restaurant


async def ensure_slug_available(
    db: AsyncSession,
    slug: str,
    exclude_id: Optional[UUID] = None,
) -> None:
    query = select(Restaurant.id).where(Restaurant.slug == slug)
    if exclude_id is not None:
        query = query.where(Restaurant.id != exclude_id)

    result = await db.execute(query)
    if result.first() is not None:
        raise ConflictError(f"A restaurant with the slug '{slug}' already exists")


def build_restaurant(owner: User, data: RestaurantCreate, slug: str) -> Restaurant:
    return Restaurant(owner_id=owner.id, slug=slug, **data.model_dump())


async def create_restaurant(db: AsyncSession, owner: User, data: RestaurantCreate) -> Restaurant:
    """Create the owner's restaurant with a platform-unique slug"""
    slug = require_slug(data.name)
    await ensure_slug_available(db, slug)

    restaurant = build_restaurant(owner, data, slug)
    db.add(restaurant)
    await commit_or_conflict(db, f"A restaurant with the slug '{slug}' already exists")
    await db.refresh(restaurant)

    logger.info("Restaurant created", restaurant_id=str(restaurant.id), slug=slug)
    return restaurant


async def update_restaurant(
    db: AsyncSession,
    restaurant: Restaurant,
    data: RestaurantUpdate,
) -> Restaurant:
    """Apply field updates; a new name regenerates the slug"""
    updates = data.model_dump(exclude_unset=True)

    if updates.get("name"):
        slug = require_slug(updates["name"])
        if slug != restaurant.slug:
            await ensure_slug_available(db, slug, exclude_id=restaurant.id)
        updates["slug"] = slug

    for field, value in updates.items():
        setattr(restaurant, field, value)

    await commit_or_conflict(db, "A restaurant with that slug already exists")
    await db.refresh(restaurant)
    return restaurant


async def set_restaurant_active(
    db: AsyncSession,
    actor: User,
    restaurant: Restaurant,
    is_active: bool,
) -> Restaurant:
    restaurant.is_active = is_active
    audit.record(
        db,
        actor,
        "toggle_restaurant",
        "restaurant",
        restaurant.id,
        restaurant.id,
        {"is_active": is_active},
    )
    await db.commit()
    await db.refresh(restaurant)

    logger.info(
        "Restaurant status changed",
        restaurant_id=str(restaurant.id),
        is_active=is_active,
    )
    return restaurant


async def list_visible_restaurants(db: AsyncSession, user: User) -> List[Restaurant]:
    """Restaurants inside the user's tenant scope, newest first"""
    query = select(Restaurant).order_by(Restaurant.created_at.desc())

    if user.role in PLATFORM_ROLES:
        pass
    elif user.role == Role.OWNER:
        query = query.where(Restaurant.owner_id == user.id)
    elif user.restaurant_id is not None:
        query = query.where(Restaurant.id == user.restaurant_id)
    else:
        return []

    result = await db.execute(query)
    return list(result.scalars().all())


async def list_all_restaurants(db: AsyncSession) -> List[tuple]:
    """(restaurant, owner e-mail) pairs for the platform dashboard"""
    result = await db.execute(
        select(Restaurant, User.email)
        .join(User, User.id == Restaurant.owner_id)
        .order_by(Restaurant.created_at.desc())
    )
    return list(result.all())


async def first_owned_restaurant(db: AsyncSession, owner: User) -> Optional[Restaurant]:
    result = await db.execute(
        select(Restaurant)
        .where(Restaurant.owner_id == owner.id)
        .order_by(Restaurant.created_at)
        .limit(1)
    )
    return result.scalar_one_or_none()
