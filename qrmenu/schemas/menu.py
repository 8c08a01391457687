"""Menu schemas"""

from datetime import datetime
from typing import Optional, Literal
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

from qrmenu.schemas.fields import not_null


class ReorderFields(BaseModel):
    """PUT bodies may carry {"action": "reorder", "direction": "up"|"down"}"""
    action: Optional[Literal["reorder"]] = None
    direction: Optional[Literal["up", "down"]] = None

    @property
    def is_reorder(self) -> bool:
        return self.action == "reorder"


class MenuCreate(BaseModel):
    """Create menu request"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: bool = True


class MenuUpdate(ReorderFields):
    """Update or reorder menu request"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "is_active")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class MenuResponse(BaseModel):
    """Menu response"""
    id: UUID
    restaurant_id: UUID
    name: str
    slug: str
    description: Optional[str]
    display_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CategoryCreate(BaseModel):
    """Create category request"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: bool = True


class CategoryUpdate(ReorderFields):
    """Update or reorder category request"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "is_active")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class CategoryResponse(BaseModel):
    """Category response"""
    id: UUID
    menu_id: UUID
    name: str
    description: Optional[str]
    display_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ItemCreate(BaseModel):
    """Create menu item request"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price_cents: int = Field(..., ge=0)
    image_url: Optional[str] = None
    is_available: bool = True


class ItemUpdate(ReorderFields):
    """Update or reorder menu item request"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price_cents: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = None
    is_available: Optional[bool] = None

    @field_validator("name", "price_cents", "is_available")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class ItemResponse(BaseModel):
    """Menu item response"""
    id: UUID
    category_id: UUID
    name: str
    description: Optional[str]
    price_cents: int
    image_url: Optional[str]
    is_available: bool
    display_order: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LocationMenuAssign(BaseModel):
    """Assign a menu to a location"""
    menu_id: Optional[UUID] = None


class LocationMenuStatusUpdate(BaseModel):
    """Toggle a location's menu assignment"""
    is_active: bool


class LocationMenuResponse(BaseModel):
    """Location-menu assignment with the assigned menu"""
    id: UUID
    location_id: UUID
    menu_id: UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime
    menu: MenuResponse

    class Config:
        from_attributes = True
