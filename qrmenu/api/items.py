"""Menu item API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.api.access import authorize_category, authorize_item
from qrmenu.api.auth import get_current_user
from qrmenu.database import get_db
from qrmenu.models.user import User
from qrmenu.schemas.menu import ItemCreate, ItemResponse, ItemUpdate
from qrmenu.services import menus as menu_service
from qrmenu.services.access import Capability

router = APIRouter()


@router.get("/categories/{category_id}/items", response_model=List[ItemResponse])
async def list_items(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await authorize_category(db, current_user, category_id, Capability.TENANT_READ)
    return await menu_service.list_items(db, category_id)


@router.post(
    "/categories/{category_id}/items",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_item(
    category_id: UUID,
    item_data: ItemCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    category, _ = await authorize_category(db, current_user, category_id, Capability.TENANT_WRITE)
    return await menu_service.create_item(db, category, item_data)


@router.get("/items/{item_id}", response_model=ItemResponse)
async def get_item(
    item_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    item, _ = await authorize_item(db, current_user, item_id, Capability.TENANT_READ)
    return item


@router.put("/items/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: UUID,
    item_data: ItemUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update item fields, or move it within its category"""
    item, restaurant = await authorize_item(db, current_user, item_id, Capability.TENANT_WRITE)
    return await menu_service.update_item(db, current_user, item, item_data, restaurant.id)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    item, restaurant = await authorize_item(db, current_user, item_id, Capability.TENANT_WRITE)
    await menu_service.delete_item(db, current_user, item, restaurant.id)
