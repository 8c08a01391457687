"""Menu assignments to locations"""

from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import structlog

from qrmenu.database import commit_or_conflict
from qrmenu.exceptions import NotFoundError, ValidationError
from qrmenu.models.menu import LocationMenu, Menu
from qrmenu.models.restaurant import Location
from qrmenu.models.user import User
from qrmenu.services import audit

logger = structlog.get_logger()


async def list_location_menus(db: AsyncSession, location_id: UUID) -> List[LocationMenu]:
    result = await db.execute(
        select(LocationMenu)
        .join(Menu, Menu.id == LocationMenu.menu_id)
        .where(LocationMenu.location_id == location_id)
        .options(selectinload(LocationMenu.menu))
        .execution_options(populate_existing=True)
        .order_by(Menu.display_order, Menu.created_at)
    )
    return list(result.scalars().all())


async def get_location_menu(db: AsyncSession, location_id: UUID, menu_id: UUID) -> LocationMenu:
    result = await db.execute(
        select(LocationMenu)
        .where(LocationMenu.location_id == location_id, LocationMenu.menu_id == menu_id)
        .options(selectinload(LocationMenu.menu))
        .execution_options(populate_existing=True)
    )
    assignment = result.scalar_one_or_none()

    if not assignment:
        raise NotFoundError("Menu is not assigned to this location")

    return assignment


async def assign_menu(db: AsyncSession, location: Location, menu_id: UUID) -> LocationMenu:
    """Assign a menu of the same restaurant; an existing pair is reactivated"""
    if menu_id is None:
        raise ValidationError("menu_id is required")

    result = await db.execute(select(Menu).where(Menu.id == menu_id))
    menu = result.scalar_one_or_none()

    if not menu or menu.restaurant_id != location.restaurant_id:
        raise ValidationError("Menu does not belong to this restaurant")

    result = await db.execute(
        select(LocationMenu).where(
            LocationMenu.location_id == location.id,
            LocationMenu.menu_id == menu_id,
        )
    )
    assignment = result.scalar_one_or_none()

    if assignment is None:
        assignment = LocationMenu(location_id=location.id, menu_id=menu_id, is_active=True)
        db.add(assignment)
    else:
        assignment.is_active = True

    await commit_or_conflict(db, "Menu is already assigned to this location")

    logger.info(
        "Menu assigned to location",
        location_id=str(location.id),
        menu_id=str(menu_id),
    )
    return await get_location_menu(db, location.id, menu_id)


async def set_assignment_active(
    db: AsyncSession,
    actor: User,
    location: Location,
    assignment: LocationMenu,
    is_active: bool,
) -> LocationMenu:
    changed = assignment.is_active != is_active
    assignment.is_active = is_active

    if changed:
        audit.record(
            db,
            actor,
            "toggle_location_menu",
            "location_menu",
            assignment.id,
            location.restaurant_id,
            {"location_id": str(location.id), "menu_id": str(assignment.menu_id), "is_active": is_active},
        )

    await db.commit()

    if changed:
        logger.info(
            "Menu assignment status changed",
            location_id=str(location.id),
            menu_id=str(assignment.menu_id),
            is_active=is_active,
        )
    return await get_location_menu(db, location.id, assignment.menu_id)


async def remove_assignment(
    db: AsyncSession,
    actor: User,
    location: Location,
    assignment: LocationMenu,
) -> None:
    assignment_id, menu_id = assignment.id, assignment.menu_id
    await db.delete(assignment)

    audit.record(
        db,
        actor,
        "unassign_menu",
        "location_menu",
        assignment_id,
        location.restaurant_id,
        {"location_id": str(location.id), "menu_id": str(menu_id)},
    )
    await db.commit()

    logger.info("Menu unassigned from location", location_id=str(location.id), menu_id=str(menu_id))
