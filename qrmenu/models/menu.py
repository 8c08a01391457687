"""Menu-related models"""

import uuid
from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    Text,
    UniqueConstraint,
    CheckConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from qrmenu.database import Base


class Menu(Base):
    """Menu owned by a restaurant, assignable to any of its locations"""
    __tablename__ = "menus"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "slug", name="uq_menus_restaurant_slug"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), nullable=False)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False)
    description = Column(Text)
    display_order = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    restaurant = relationship("Restaurant", back_populates="menus")
    categories = relationship("Category", back_populates="menu")
    location_menus = relationship("LocationMenu", back_populates="menu")


class LocationMenu(Base):
    """Assignment of a menu to a location"""
    __tablename__ = "location_menus"
    __table_args__ = (
        UniqueConstraint("location_id", "menu_id", name="uq_location_menus_pair"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    location_id = Column(UUID(as_uuid=True), ForeignKey("locations.id"), nullable=False)
    menu_id = Column(UUID(as_uuid=True), ForeignKey("menus.id"), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    location = relationship("Location", back_populates="location_menus")
    menu = relationship("Menu", back_populates="location_menus")


class Category(Base):
    """Menu category (Starters, Mains, Drinks, ...)"""
    __tablename__ = "menu_categories"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    menu_id = Column(UUID(as_uuid=True), ForeignKey("menus.id"), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    display_order = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    menu = relationship("Menu", back_populates="categories")
    items = relationship("Item", back_populates="category")


class Item(Base):
    """Menu item"""
    __tablename__ = "menu_items"
    __table_args__ = (
        CheckConstraint("price_cents >= 0", name="ck_menu_items_price_non_negative"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    category_id = Column(UUID(as_uuid=True), ForeignKey("menu_categories.id"), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price_cents = Column(Integer, nullable=False)  # Price in cents to avoid float issues
    image_url = Column(String(500))
    is_available = Column(Boolean, default=True)
    display_order = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    category = relationship("Category", back_populates="items")
