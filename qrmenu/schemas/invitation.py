"""Invitation schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr


class RestaurantInviteRequest(BaseModel):
    """Invite a restaurant owner"""
    email: EmailStr


class StaffInviteRequest(BaseModel):
    """Invite a staff member"""
    email: EmailStr
    restaurant_id: Optional[UUID] = None


class InvitationResponse(BaseModel):
    """Invitation response (the token travels only inside invite_url)"""
    id: UUID
    email: str
    role_id: int
    restaurant_id: Optional[UUID]
    created_by_id: UUID
    used: bool
    expires_at: datetime
    created_at: datetime

    class Config:
        from_attributes = True


class InvitationCreated(BaseModel):
    """Result of issuing an invitation"""
    success: bool = True
    message: str
    invite_url: str
    invitation: InvitationResponse
