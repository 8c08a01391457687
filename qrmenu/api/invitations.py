"""Invitation endpoints"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.api.access import authorize_restaurant, require
from qrmenu.api.auth import get_current_user
from qrmenu.database import get_db
from qrmenu.models.user import User
from qrmenu.schemas.invitation import (
    InvitationCreated,
    InvitationResponse,
    RestaurantInviteRequest,
    StaffInviteRequest,
)
from qrmenu.services import invitations as invitation_service
from qrmenu.services.access import Capability

router = APIRouter()


def _created(invitation, message: str) -> InvitationCreated:
    return InvitationCreated(
        message=message,
        invite_url=invitation_service.invite_url(invitation),
        invitation=InvitationResponse.model_validate(invitation),
    )


@router.post(
    "/invite-restaurant",
    response_model=InvitationCreated,
    status_code=status.HTTP_201_CREATED,
)
async def invite_restaurant(
    invite_data: RestaurantInviteRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Invite a restaurant owner to the platform"""
    require(current_user, Capability.INVITE_OWNER)

    invitation = await invitation_service.invite_owner(db, current_user, invite_data.email)
    return _created(invitation, "Restaurant invitation created")


@router.post(
    "/invite-staff",
    response_model=InvitationCreated,
    status_code=status.HTTP_201_CREATED,
)
async def invite_staff(
    invite_data: StaffInviteRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Invite platform staff (super admins) or restaurant staff (owners)"""
    require(current_user, Capability.INVITE_STAFF)

    restaurant = None
    if invite_data.restaurant_id is not None:
        restaurant = await authorize_restaurant(
            db, current_user, invite_data.restaurant_id, Capability.INVITE_STAFF
        )

    invitation = await invitation_service.invite_staff(
        db, current_user, invite_data.email, restaurant
    )
    return _created(invitation, "Staff invitation created")
