"""User model for dashboard authentication"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Integer
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import enum

from qrmenu.database import Base


class Role(int, enum.Enum):
    """User roles; values are the stored role IDs"""
    SUPER_ADMIN = 1
    OWNER = 2
    SUPER_ADMIN_STAFF = 3
    OWNER_STAFF = 4


class User(Base):
    """Dashboard users (super admins, restaurant owners and their staff)"""
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Authentication
    email = Column(String(255), unique=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    # Profile
    full_name = Column(String(255))
    image_url = Column(String(500))

    # Role, fixed at creation via invitation
    role_id = Column(Integer, nullable=False, default=Role.OWNER_STAFF.value)

    # Invitation lineage, not an ownership chain
    created_by_id = Column(UUID(as_uuid=True), ForeignKey("users.id"))

    # Restaurant an owner's staff member was invited to (legacy for owners)
    restaurant_id = Column(UUID(as_uuid=True))

    # Status
    is_active = Column(Boolean, default=True)

    # Tokens
    refresh_token = Column(String(500))

    # Timestamps
    last_login = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    restaurants = relationship("Restaurant", back_populates="owner")

    @property
    def role(self) -> Role:
        return Role(self.role_id)
