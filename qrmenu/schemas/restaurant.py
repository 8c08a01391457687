"""Restaurant and location schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

from qrmenu.schemas.fields import not_null


class RestaurantCreate(BaseModel):
    """Create restaurant request (owner sign-up completion)"""
    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None


class RestaurantUpdate(BaseModel):
    """Update restaurant request"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class RestaurantStatusUpdate(BaseModel):
    """Activate or deactivate a restaurant"""
    is_active: bool


class RestaurantResponse(BaseModel):
    """Restaurant response"""
    id: UUID
    owner_id: UUID
    name: str
    slug: str
    address: Optional[str]
    logo_url: Optional[str]
    banner_url: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AdminRestaurantResponse(RestaurantResponse):
    """Restaurant with its owner's e-mail, for the platform dashboard"""
    owner_email: Optional[str] = None


class LocationCreate(BaseModel):
    """Create location request"""
    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = None
    is_active: bool = True


class LocationUpdate(BaseModel):
    """Update location request"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "is_active")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class LocationResponse(BaseModel):
    """Location response"""
    id: UUID
    restaurant_id: UUID
    name: str
    slug: str
    address: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
