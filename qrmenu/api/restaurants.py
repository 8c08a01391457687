"""Restaurant API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.api.access import authorize_restaurant, require
from qrmenu.api.auth import get_current_user
from qrmenu.database import get_db
from qrmenu.exceptions import ForbiddenError
from qrmenu.models.user import Role, User
from qrmenu.schemas.restaurant import RestaurantCreate, RestaurantResponse, RestaurantUpdate
from qrmenu.services import restaurants as restaurant_service
from qrmenu.services.access import Capability

router = APIRouter()


@router.get("", response_model=List[RestaurantResponse])
async def list_restaurants(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Restaurants inside the caller's scope"""
    require(current_user, Capability.TENANT_READ)
    return await restaurant_service.list_visible_restaurants(db, current_user)


@router.post("", response_model=RestaurantResponse, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    restaurant_data: RestaurantCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Complete owner sign-up by creating the owner's restaurant"""
    require(current_user, Capability.TENANT_WRITE)

    if current_user.role != Role.OWNER:
        raise ForbiddenError("Only restaurant owners can create a restaurant")

    return await restaurant_service.create_restaurant(db, current_user, restaurant_data)


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
async def get_restaurant(
    restaurant_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await authorize_restaurant(db, current_user, restaurant_id, Capability.TENANT_READ)


@router.put("/{restaurant_id}", response_model=RestaurantResponse)
async def update_restaurant(
    restaurant_id: UUID,
    restaurant_data: RestaurantUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update restaurant details (a new name regenerates the slug)"""
    restaurant = await authorize_restaurant(
        db, current_user, restaurant_id, Capability.TENANT_WRITE
    )
    return await restaurant_service.update_restaurant(db, restaurant, restaurant_data)
