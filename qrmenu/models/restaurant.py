"""Restaurant (tenant) and location models"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from qrmenu.database import Base


class Restaurant(Base):
    """Restaurant tenant"""
    __tablename__ = "restaurants"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False)  # unique platform-wide
    logo_url = Column(String(500))
    banner_url = Column(String(500))
    address = Column(Text)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("User", back_populates="restaurants")
    locations = relationship("Location", back_populates="restaurant")
    menus = relationship("Menu", back_populates="restaurant")


class Location(Base):
    """Physical location of a restaurant"""
    __tablename__ = "locations"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "slug", name="uq_locations_restaurant_slug"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), nullable=False)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False)
    address = Column(Text)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    restaurant = relationship("Restaurant", back_populates="locations")
    location_menus = relationship("LocationMenu", back_populates="location")
    qr_codes = relationship("QRCode", back_populates="location")
