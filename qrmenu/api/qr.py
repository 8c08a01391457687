"""Restaurant QR image endpoint"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.api.access import authorize_restaurant
from qrmenu.api.auth import get_optional_user
from qrmenu.database import get_db
from qrmenu.exceptions import UnauthenticatedError
from qrmenu.models.user import User
from qrmenu.schemas.qr_code import QRImageResponse
from qrmenu.services import qr_codes as qr_service
from qrmenu.services import resolver
from qrmenu.services.access import Capability

router = APIRouter()


def _parse_uuid(value: str) -> Optional[UUID]:
    try:
        return UUID(value)
    except ValueError:
        return None


@router.get("/{identifier}", response_model=QRImageResponse)
async def restaurant_qr_code(
    identifier: str,
    current_user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """QR code for a restaurant's public page.

    A UUID requires an authenticated caller with read access to the
    restaurant; anything else is looked up as the slug of an active
    restaurant and served publicly.
    """
    restaurant_id = _parse_uuid(identifier)

    if restaurant_id is not None:
        if current_user is None:
            raise UnauthenticatedError()
        restaurant = await authorize_restaurant(
            db, current_user, restaurant_id, Capability.TENANT_READ
        )
    else:
        restaurant = await resolver.get_active_restaurant(db, identifier)

    menu_url = qr_service.build_restaurant_url(restaurant.slug)
    return QRImageResponse(qr_code=qr_service.render_qr_data_url(menu_url), menu_url=menu_url)
