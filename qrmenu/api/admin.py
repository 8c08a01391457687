"""Platform administration endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.api.access import require
from qrmenu.api.auth import get_current_user
from qrmenu.database import get_db
from qrmenu.models.user import User
from qrmenu.schemas.restaurant import (
    AdminRestaurantResponse,
    RestaurantResponse,
    RestaurantStatusUpdate,
)
from qrmenu.services import restaurants as restaurant_service
from qrmenu.services.access import Capability

router = APIRouter()


@router.get("/restaurants", response_model=List[AdminRestaurantResponse])
async def list_all_restaurants(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Every restaurant on the platform, newest first, with the owner's e-mail"""
    require(current_user, Capability.PLATFORM_READ)

    rows = await restaurant_service.list_all_restaurants(db)
    return [
        AdminRestaurantResponse(
            **RestaurantResponse.model_validate(restaurant).model_dump(),
            owner_email=owner_email,
        )
        for restaurant, owner_email in rows
    ]


@router.patch("/restaurants/{restaurant_id}", response_model=RestaurantResponse)
async def set_restaurant_status(
    restaurant_id: UUID,
    status_data: RestaurantStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Activate or deactivate a restaurant"""
    require(current_user, Capability.PLATFORM_MANAGE)

    restaurant = await restaurant_service.get_restaurant(db, restaurant_id)
    return await restaurant_service.set_restaurant_active(
        db, current_user, restaurant, status_data.is_active
    )
