"""Menu category API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.api.access import authorize_category, authorize_menu
from qrmenu.api.auth import get_current_user
from qrmenu.database import get_db
from qrmenu.models.user import User
from qrmenu.schemas.menu import CategoryCreate, CategoryResponse, CategoryUpdate
from qrmenu.services import menus as menu_service
from qrmenu.services.access import Capability

router = APIRouter()


@router.get("/menus/{menu_id}/categories", response_model=List[CategoryResponse])
async def list_categories(
    menu_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await authorize_menu(db, current_user, menu_id, Capability.TENANT_READ)
    return await menu_service.list_categories(db, menu_id)


@router.post(
    "/menus/{menu_id}/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    menu_id: UUID,
    category_data: CategoryCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a category at the end of the menu"""
    menu, _ = await authorize_menu(db, current_user, menu_id, Capability.TENANT_WRITE)
    return await menu_service.create_category(db, menu, category_data)


@router.get("/categories/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    category, _ = await authorize_category(db, current_user, category_id, Capability.TENANT_READ)
    return category


@router.put("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    category_data: CategoryUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    category, restaurant = await authorize_category(
        db, current_user, category_id, Capability.TENANT_WRITE
    )
    return await menu_service.update_category(
        db, current_user, category, category_data, restaurant.id
    )


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a category and its items"""
    category, restaurant = await authorize_category(
        db, current_user, category_id, Capability.TENANT_WRITE
    )
    await menu_service.delete_category(db, current_user, category, restaurant.id)
