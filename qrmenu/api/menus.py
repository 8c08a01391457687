"""Menu API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.api.access import authorize_menu, authorize_restaurant
from qrmenu.api.auth import get_current_user
from qrmenu.database import get_db
from qrmenu.models.user import User
from qrmenu.schemas.menu import MenuCreate, MenuResponse, MenuUpdate
from qrmenu.services import menus as menu_service
from qrmenu.services.access import Capability

router = APIRouter()


@router.get("", response_model=List[MenuResponse])
async def list_menus(
    restaurant_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List a restaurant's menus in display order"""
    await authorize_restaurant(db, current_user, restaurant_id, Capability.TENANT_READ)
    return await menu_service.list_menus(db, restaurant_id)


@router.post("", response_model=MenuResponse, status_code=status.HTTP_201_CREATED)
async def create_menu(
    restaurant_id: UUID,
    menu_data: MenuCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    restaurant = await authorize_restaurant(
        db, current_user, restaurant_id, Capability.TENANT_WRITE
    )
    return await menu_service.create_menu(db, restaurant, menu_data)


@router.get("/{menu_id}", response_model=MenuResponse)
async def get_menu(
    restaurant_id: UUID,
    menu_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    menu, _ = await authorize_menu(db, current_user, menu_id, Capability.TENANT_READ, restaurant_id)
    return menu


@router.put("/{menu_id}", response_model=MenuResponse)
async def update_menu(
    restaurant_id: UUID,
    menu_id: UUID,
    menu_data: MenuUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update menu fields, or move it with {"action": "reorder", "direction": ...}"""
    menu, _ = await authorize_menu(db, current_user, menu_id, Capability.TENANT_WRITE, restaurant_id)
    return await menu_service.update_menu(db, current_user, menu, menu_data)


@router.delete("/{menu_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_menu(
    restaurant_id: UUID,
    menu_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a menu with its categories, items, assignments and QR codes"""
    menu, _ = await authorize_menu(db, current_user, menu_id, Capability.TENANT_WRITE, restaurant_id)
    await menu_service.delete_menu(db, current_user, menu)
