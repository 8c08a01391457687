"""Audit trail helper"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.models.audit import AuditLog
from qrmenu.models.user import User


def record(
    db: AsyncSession,
    actor: Optional[User],
    action: str,
    resource_type: str,
    resource_id: Optional[UUID] = None,
    restaurant_id: Optional[UUID] = None,
    data: Optional[dict] = None,
) -> AuditLog:
    """Stage an audit entry in the caller's transaction"""
    entry = AuditLog(
        actor_id=actor.id if actor else None,
        actor_type="user" if actor else "system",
        action=action,
        resource_type=resource_type,
        resource_id=resource_id,
        restaurant_id=restaurant_id,
        data_json=data or {},
    )
    db.add(entry)
    return entry


def status_change(resource, updates: dict, field: str = "is_active") -> Optional[bool]:
    """New value of ``field`` when ``updates`` flips it, else None"""
    if field in updates and getattr(resource, field) != updates[field]:
        return updates[field]
    return None


def record_toggle(
    db: AsyncSession,
    actor: User,
    resource_type: str,
    resource_id: UUID,
    restaurant_id: UUID,
    field: str,
    value: bool,
) -> AuditLog:
    return record(
        db,
        actor,
        f"toggle_{resource_type}",
        resource_type,
        resource_id,
        restaurant_id,
        {field: value},
    )
