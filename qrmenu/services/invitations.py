"""Invitation issuing, validation and acceptance"""

from datetime import datetime, timedelta
from typing import Optional, Tuple
import secrets

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from qrmenu.config import settings
from qrmenu.database import commit_or_conflict
from qrmenu.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from qrmenu.models.invitation import Invitation
from qrmenu.models.restaurant import Restaurant
from qrmenu.models.user import Role, User
from qrmenu.schemas.restaurant import RestaurantCreate
from qrmenu.services import audit
from qrmenu.services.restaurants import build_restaurant, ensure_slug_available, first_owned_restaurant
from qrmenu.services.slugs import require_slug

logger = structlog.get_logger()

TOKEN_BYTES = 20  # 40 hex characters


def generate_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def invite_url(invitation: Invitation) -> str:
    """Registration link sent to the invitee"""
    path = "restaurant" if invitation.role_id == Role.OWNER.value else "staff"
    return f"{settings.public_origin}/{path}/register?token={invitation.token}"


async def _issue(
    db: AsyncSession,
    inviter: User,
    email: str,
    role: Role,
    restaurant_id=None,
) -> Invitation:
    now = datetime.utcnow()
    invitation = Invitation(
        email=email.lower(),
        role_id=role.value,
        token=generate_token(),
        used=False,
        expires_at=now + timedelta(days=settings.invitation_expire_days),
        created_by_id=inviter.id,
        restaurant_id=restaurant_id,
        created_at=now,
    )
    db.add(invitation)
    await db.flush()

    audit.record(
        db,
        inviter,
        "create_invitation",
        "invitation",
        invitation.id,
        restaurant_id,
        {"email": invitation.email, "role_id": role.value},
    )
    await db.commit()
    await db.refresh(invitation)

    logger.info(
        "Invitation created",
        invitation_id=str(invitation.id),
        role_id=role.value,
        invited_by=str(inviter.id),
        invite_url=invite_url(invitation),
    )
    return invitation


async def invite_owner(db: AsyncSession, inviter: User, email: str) -> Invitation:
    return await _issue(db, inviter, email, Role.OWNER)


async def invite_staff(
    db: AsyncSession,
    inviter: User,
    email: str,
    restaurant: Optional[Restaurant] = None,
) -> Invitation:
    """Super admins invite platform staff; owners invite staff to one of their restaurants"""
    if inviter.role == Role.SUPER_ADMIN:
        if restaurant is not None:
            raise ValidationError("restaurant_id only applies to restaurant staff invitations")
        return await _issue(db, inviter, email, Role.SUPER_ADMIN_STAFF)

    if restaurant is None:
        restaurant = await first_owned_restaurant(db, inviter)
        if restaurant is None:
            raise ValidationError("Create a restaurant before inviting staff")
    elif restaurant.owner_id != inviter.id:
        raise ForbiddenError("Access denied to this restaurant")

    return await _issue(db, inviter, email, Role.OWNER_STAFF, restaurant.id)


async def get_valid_invitation(db: AsyncSession, token: str) -> Invitation:
    """Unused, unexpired invitation for ``token``"""
    result = await db.execute(select(Invitation).where(Invitation.token == token))
    invitation = result.scalar_one_or_none()

    if not invitation or invitation.used or invitation.expires_at <= datetime.utcnow():
        raise NotFoundError("Invitation not found or expired")

    return invitation


async def accept_invitation(
    db: AsyncSession,
    token: str,
    hashed_password: str,
    full_name: str,
    restaurant_name: Optional[str] = None,
) -> Tuple[User, Optional[Restaurant]]:
    """Consume the invitation and create the account (plus restaurant) atomically"""
    result = await db.execute(
        select(Invitation).where(Invitation.token == token).with_for_update()
    )
    invitation = result.scalar_one_or_none()

    if not invitation:
        raise ValidationError("Invalid invitation token")
    if invitation.used:
        raise ValidationError("Invitation has already been used")
    if invitation.expires_at <= datetime.utcnow():
        raise ValidationError("Invitation has expired")

    existing = await db.execute(select(User.id).where(User.email == invitation.email))
    if existing.first() is not None:
        raise ConflictError("A user with this email already exists")

    slug = None
    if restaurant_name and invitation.role_id == Role.OWNER.value:
        slug = require_slug(restaurant_name)
        await ensure_slug_available(db, slug)

    user = User(
        email=invitation.email,
        hashed_password=hashed_password,
        full_name=full_name,
        role_id=invitation.role_id,
        created_by_id=invitation.created_by_id,
        restaurant_id=invitation.restaurant_id,
        is_active=True,
    )
    db.add(user)
    await db.flush()

    restaurant = None
    if slug is not None:
        restaurant = build_restaurant(user, RestaurantCreate(name=restaurant_name), slug)
        db.add(restaurant)

    invitation.used = True
    audit.record(
        db,
        user,
        "accept_invitation",
        "invitation",
        invitation.id,
        invitation.restaurant_id,
        {"email": invitation.email, "role_id": invitation.role_id},
    )
    await commit_or_conflict(db, "A user or restaurant with these details already exists")
    await db.refresh(user)
    if restaurant is not None:
        await db.refresh(restaurant)

    logger.info(
        "Invitation accepted",
        invitation_id=str(invitation.id),
        user_id=str(user.id),
        restaurant_id=str(restaurant.id) if restaurant else None,
    )
    return user, restaurant


async def purge_expired(db: AsyncSession, now: Optional[datetime] = None) -> int:
    """Delete unused invitations past expiry; returns the number removed"""
    now = now or datetime.utcnow()
    result = await db.execute(
        delete(Invitation).where(Invitation.used.is_(False), Invitation.expires_at <= now)
    )
    await db.commit()

    logger.info("Expired invitations purged", count=result.rowcount)
    return result.rowcount
