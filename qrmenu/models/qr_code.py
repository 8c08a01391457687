"""QR code model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from qrmenu.database import Base


class QRCode(Base):
    """Rendered QR code bound to a location and, optionally, one of its menus.

    The encoded URL is derived from the (restaurant, location, menu) slugs at
    read time; ``image_url`` only points at the rendered artifact.
    """
    __tablename__ = "qr_codes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    location_id = Column(UUID(as_uuid=True), ForeignKey("locations.id"), nullable=False)
    menu_id = Column(UUID(as_uuid=True), ForeignKey("menus.id"))
    image_url = Column(String(1000), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    location = relationship("Location", back_populates="qr_codes")
    menu = relationship("Menu")


# NULL never collides in a plain unique constraint, so the location-only
# binding gets its own partial index.
Index(
    "uq_qr_codes_location_menu",
    QRCode.location_id,
    QRCode.menu_id,
    unique=True,
    postgresql_where=QRCode.menu_id.isnot(None),
    sqlite_where=QRCode.menu_id.isnot(None),
)
Index(
    "uq_qr_codes_location_only",
    QRCode.location_id,
    unique=True,
    postgresql_where=QRCode.menu_id.is_(None),
    sqlite_where=QRCode.menu_id.is_(None),
)
