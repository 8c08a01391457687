"""Public (diner-facing) menu schemas"""

from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel


class PublicItem(BaseModel):
    id: UUID
    name: str
    description: Optional[str]
    price_cents: int
    image_url: Optional[str]

    class Config:
        from_attributes = True


class PublicCategory(BaseModel):
    id: UUID
    name: str
    description: Optional[str]
    items: List[PublicItem] = []


class PublicMenu(BaseModel):
    id: UUID
    name: str
    slug: str
    description: Optional[str]
    categories: List[PublicCategory] = []


class PublicRestaurant(BaseModel):
    id: UUID
    name: str
    slug: str
    logo_url: Optional[str]
    banner_url: Optional[str]

    class Config:
        from_attributes = True


class PublicLocation(BaseModel):
    id: UUID
    name: str
    slug: str
    address: Optional[str]

    class Config:
        from_attributes = True


class PublicLocationPage(BaseModel):
    """Every active menu served at a location"""
    restaurant: PublicRestaurant
    location: PublicLocation
    menus: List[PublicMenu]


class PublicMenuPage(BaseModel):
    """A single menu served at a location"""
    restaurant: PublicRestaurant
    location: PublicLocation
    menu: PublicMenu
