"""Authentication schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


class Token(BaseModel):
    """JWT token response"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class TokenPayload(BaseModel):
    """JWT token payload"""
    sub: str  # User ID
    role_id: int
    exp: datetime


class RefreshRequest(BaseModel):
    """Token refresh request"""
    refresh_token: str


class RegisterRequest(BaseModel):
    """Accept an invitation and create the invited account"""
    token: str
    password: str = Field(..., min_length=8)
    full_name: str = Field(..., min_length=1)
    restaurant_name: Optional[str] = Field(None, min_length=1, max_length=255)


class UserResponse(BaseModel):
    """User response"""
    id: UUID
    email: str
    full_name: Optional[str]
    role_id: int
    restaurant_id: Optional[UUID]
    created_by_id: Optional[UUID]
    is_active: bool
    created_at: datetime
    last_login: Optional[datetime]

    class Config:
        from_attributes = True
