"""Location operations"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from qrmenu.database import commit_or_conflict
from qrmenu.exceptions import ConflictError, NotFoundError
from qrmenu.models.menu import LocationMenu
from qrmenu.models.qr_code import QRCode
from qrmenu.models.restaurant import Location, Restaurant
from qrmenu.models.user import User
from qrmenu.schemas.restaurant import LocationCreate, LocationUpdate
from qrmenu.services import audit
from qrmenu.services.slugs import require_slug

logger = structlog.get_logger()


async def get_location(db: AsyncSession, location_id: UUID) -> Location:
    result = await db.execute(select(Location).where(Location.id == location_id))
    location = result.scalar_one_or_none()

    if not location:
        raise NotFoundError("Location not found")

    return location


async def list_locations(db: AsyncSession, restaurant_id: UUID) -> List[Location]:
    result = await db.execute(
        select(Location)
        .where(Location.restaurant_id == restaurant_id)
        .order_by(Location.created_at.desc())
    )
    return list(result.scalars().all())


async def ensure_slug_available(
    db: AsyncSession,
    restaurant_id: UUID,
    slug: str,
    exclude_id: Optional[UUID] = None,
) -> None:
    query = select(Location.id).where(
        Location.restaurant_id == restaurant_id,
        Location.slug == slug,
    )
    if exclude_id is not None:
        query = query.where(Location.id != exclude_id)

    result = await db.execute(query)
    if result.first() is not None:
        raise ConflictError(f"A location with the slug '{slug}' already exists for this restaurant")


async def create_location(
    db: AsyncSession,
    restaurant: Restaurant,
    data: LocationCreate,
) -> Location:
    slug = require_slug(data.name)
    await ensure_slug_available(db, restaurant.id, slug)

    location = Location(restaurant_id=restaurant.id, slug=slug, **data.model_dump())
    db.add(location)
    await commit_or_conflict(db, f"A location with the slug '{slug}' already exists for this restaurant")
    await db.refresh(location)

    logger.info(
        "Location created",
        restaurant_id=str(restaurant.id),
        location_id=str(location.id),
        slug=slug,
    )
    return location


async def update_location(
    db: AsyncSession,
    actor: User,
    location: Location,
    data: LocationUpdate,
) -> Location:
    updates = data.model_dump(exclude_unset=True)

    if updates.get("name"):
        slug = require_slug(updates["name"])
        if slug != location.slug:
            await ensure_slug_available(db, location.restaurant_id, slug, exclude_id=location.id)
        updates["slug"] = slug

    is_active = audit.status_change(location, updates)
    for field, value in updates.items():
        setattr(location, field, value)

    if is_active is not None:
        audit.record_toggle(
            db, actor, "location", location.id, location.restaurant_id, "is_active", is_active
        )

    await commit_or_conflict(db, "A location with that slug already exists for this restaurant")
    await db.refresh(location)

    if is_active is not None:
        logger.info(
            "Location status changed",
            restaurant_id=str(location.restaurant_id),
            location_id=str(location.id),
            is_active=is_active,
        )
    return location


async def delete_location(db: AsyncSession, actor: User, location: Location) -> None:
    """Delete QR codes and menu assignments, then the location, in one transaction"""
    location_id, restaurant_id, slug = location.id, location.restaurant_id, location.slug

    qr_images = (
        await db.execute(select(QRCode.image_url).where(QRCode.location_id == location_id))
    ).scalars().all()

    await db.execute(delete(QRCode).where(QRCode.location_id == location_id))
    await db.execute(delete(LocationMenu).where(LocationMenu.location_id == location_id))
    await db.execute(delete(Location).where(Location.id == location_id))

    # Rendered images stay in blob storage; keep their URLs for reconciliation
    audit.record(
        db,
        actor,
        "delete_location",
        "location",
        location_id,
        restaurant_id,
        {"slug": slug, "orphaned_qr_images": list(qr_images)},
    )
    await db.commit()

    logger.info(
        "Location deleted",
        restaurant_id=str(restaurant_id),
        location_id=str(location_id),
        qr_codes_removed=len(qr_images),
    )
