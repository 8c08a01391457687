"""QR code API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.api.access import authorize_location, authorize_qr_code
from qrmenu.api.auth import get_current_user
from qrmenu.database import get_db
from qrmenu.models.user import User
from qrmenu.schemas.qr_code import QRCodeCreate, QRCodeResponse, QRCodeUpdate
from qrmenu.services import qr_codes as qr_service
from qrmenu.services.access import Capability

router = APIRouter()


@router.get("", response_model=List[QRCodeResponse])
async def list_qr_codes(
    location_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    location, restaurant = await authorize_location(
        db, current_user, location_id, Capability.TENANT_READ
    )
    qr_codes = await qr_service.list_qr_codes(db, location_id)
    return [qr_service.to_response(qr_code, restaurant, location) for qr_code in qr_codes]


@router.post("", response_model=QRCodeResponse, status_code=status.HTTP_201_CREATED)
async def create_qr_code(
    location_id: UUID,
    qr_data: QRCodeCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Store a rendered QR code for the location or one of its menus"""
    location, restaurant = await authorize_location(
        db, current_user, location_id, Capability.TENANT_WRITE
    )
    qr_code = await qr_service.create_qr_code(db, location, qr_data)
    return qr_service.to_response(qr_code, restaurant, location)


@router.get("/{qr_code_id}", response_model=QRCodeResponse)
async def get_qr_code(
    location_id: UUID,
    qr_code_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    qr_code, location, restaurant = await authorize_qr_code(
        db, current_user, location_id, qr_code_id, Capability.TENANT_READ
    )
    return qr_service.to_response(qr_code, restaurant, location)


@router.put("/{qr_code_id}", response_model=QRCodeResponse)
async def update_qr_code(
    location_id: UUID,
    qr_code_id: UUID,
    qr_data: QRCodeUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Toggle a QR code or replace its rendered image"""
    qr_code, location, restaurant = await authorize_qr_code(
        db, current_user, location_id, qr_code_id, Capability.TENANT_WRITE
    )
    qr_code = await qr_service.update_qr_code(db, current_user, restaurant.id, qr_code, qr_data)
    return qr_service.to_response(qr_code, restaurant, location)


@router.delete("/{qr_code_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_qr_code(
    location_id: UUID,
    qr_code_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    qr_code, _, restaurant = await authorize_qr_code(
        db, current_user, location_id, qr_code_id, Capability.TENANT_WRITE
    )
    await qr_service.delete_qr_code(db, current_user, restaurant.id, qr_code)
