"""QR code schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel


class QRCodeCreate(BaseModel):
    """Create QR code request"""
    image_url: Optional[str] = None
    menu_id: Optional[UUID] = None
    is_active: bool = True


class QRCodeUpdate(BaseModel):
    """Toggle a QR code or replace its rendered image"""
    is_active: Optional[bool] = None
    image_url: Optional[str] = None


class QRCodeResponse(BaseModel):
    """QR code with its bound menu and the URL it encodes"""
    id: UUID
    location_id: UUID
    menu_id: Optional[UUID]
    menu_name: Optional[str] = None
    menu_slug: Optional[str] = None
    image_url: str
    is_active: bool
    target_url: str
    created_at: datetime
    updated_at: datetime


class QRImageResponse(BaseModel):
    """Rendered restaurant QR code"""
    qr_code: str  # PNG data URL
    menu_url: str
