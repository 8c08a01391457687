"""Location API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.api.access import authorize_location, authorize_restaurant
from qrmenu.api.auth import get_current_user
from qrmenu.database import get_db
from qrmenu.models.user import User
from qrmenu.schemas.restaurant import LocationCreate, LocationResponse, LocationUpdate
from qrmenu.services import locations as location_service
from qrmenu.services.access import Capability

router = APIRouter()


@router.get("", response_model=List[LocationResponse])
async def list_locations(
    restaurant_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List a restaurant's locations, newest first"""
    await authorize_restaurant(db, current_user, restaurant_id, Capability.TENANT_READ)
    return await location_service.list_locations(db, restaurant_id)


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_location(
    restaurant_id: UUID,
    location_data: LocationCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    restaurant = await authorize_restaurant(
        db, current_user, restaurant_id, Capability.TENANT_WRITE
    )
    return await location_service.create_location(db, restaurant, location_data)


@router.get("/{location_id}", response_model=LocationResponse)
async def get_location(
    restaurant_id: UUID,
    location_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    location, _ = await authorize_location(
        db, current_user, location_id, Capability.TENANT_READ, restaurant_id
    )
    return location


@router.put("/{location_id}", response_model=LocationResponse)
async def update_location(
    restaurant_id: UUID,
    location_id: UUID,
    location_data: LocationUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    location, _ = await authorize_location(
        db, current_user, location_id, Capability.TENANT_WRITE, restaurant_id
    )
    return await location_service.update_location(db, current_user, location, location_data)


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_location(
    restaurant_id: UUID,
    location_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a location with its QR codes and menu assignments"""
    location, _ = await authorize_location(
        db, current_user, location_id, Capability.TENANT_WRITE, restaurant_id
    )
    await location_service.delete_location(db, current_user, location)
