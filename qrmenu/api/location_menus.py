"""Location menu assignment endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.api.access import authorize_location
from qrmenu.api.auth import get_current_user
from qrmenu.database import get_db
from qrmenu.models.user import User
from qrmenu.schemas.menu import LocationMenuAssign, LocationMenuResponse, LocationMenuStatusUpdate
from qrmenu.services import location_menus as assignment_service
from qrmenu.services.access import Capability

router = APIRouter()


@router.get("", response_model=List[LocationMenuResponse])
async def list_location_menus(
    location_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Menus assigned to a location, in menu display order"""
    await authorize_location(db, current_user, location_id, Capability.TENANT_READ)
    return await assignment_service.list_location_menus(db, location_id)


@router.post("", response_model=LocationMenuResponse, status_code=status.HTTP_201_CREATED)
async def assign_menu(
    location_id: UUID,
    assignment_data: LocationMenuAssign,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    location, _ = await authorize_location(db, current_user, location_id, Capability.TENANT_WRITE)
    return await assignment_service.assign_menu(db, location, assignment_data.menu_id)


@router.put("/{menu_id}", response_model=LocationMenuResponse)
async def set_assignment_status(
    location_id: UUID,
    menu_id: UUID,
    status_data: LocationMenuStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Turn a menu on or off at this location"""
    location, _ = await authorize_location(db, current_user, location_id, Capability.TENANT_WRITE)
    assignment = await assignment_service.get_location_menu(db, location_id, menu_id)
    return await assignment_service.set_assignment_active(
        db, current_user, location, assignment, status_data.is_active
    )


@router.delete("/{menu_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_assignment(
    location_id: UUID,
    menu_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    location, _ = await authorize_location(db, current_user, location_id, Capability.TENANT_WRITE)
    assignment = await assignment_service.get_location_menu(db, location_id, menu_id)
    await assignment_service.remove_assignment(db, current_user, location, assignment)
