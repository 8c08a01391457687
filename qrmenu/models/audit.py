"""Audit log model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.dialects.postgresql import UUID

from qrmenu.database import Base


class AuditLog(Base):
    """Audit trail for destructive and privilege-bearing actions"""
    __tablename__ = "audit_logs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(UUID(as_uuid=True))

    # Actor information
    actor_id = Column(UUID(as_uuid=True))  # User ID or null for system
    actor_type = Column(String(50))  # user, system

    # Action details
    action = Column(String(100), nullable=False)  # delete_menu, toggle_qr_code, etc.
    resource_type = Column(String(50))  # menu, location, qr_code, invitation, ...
    resource_id = Column(UUID(as_uuid=True))

    # Change data
    data_json = Column(JSON)

    created_at = Column(DateTime, default=datetime.utcnow)
