"""QR code binder.

A QR code points at ``/menus/{restaurant}/{location}[/{menu}]``. The target
URL is always rebuilt from the current slugs; ``image_url`` is only the
stored rendering and is never treated as the source of truth.
"""

import base64
from io import BytesIO
from typing import List, Optional
from uuid import UUID

import qrcode
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import structlog

from qrmenu.config import settings
from qrmenu.database import commit_or_conflict
from qrmenu.exceptions import ConflictError, NotFoundError, ValidationError
from qrmenu.models.menu import Menu
from qrmenu.models.qr_code import QRCode
from qrmenu.models.restaurant import Location, Restaurant
from qrmenu.models.user import User
from qrmenu.schemas.qr_code import QRCodeCreate, QRCodeResponse, QRCodeUpdate
from qrmenu.services import audit

logger = structlog.get_logger()

DUPLICATE_QR_MESSAGE = "A QR code already exists for this location and menu"


def build_menu_path(
    restaurant_slug: str,
    location_slug: str,
    menu_slug: Optional[str] = None,
) -> str:
    """Deterministic public path for a (restaurant, location, menu?) tuple"""
    path = f"/menus/{restaurant_slug}/{location_slug}"
    if menu_slug:
        path = f"{path}/{menu_slug}"
    return path


def build_menu_url(
    restaurant_slug: str,
    location_slug: str,
    menu_slug: Optional[str] = None,
    base_url: Optional[str] = None,
) -> str:
    origin = (base_url or settings.public_origin).rstrip("/")
    return origin + build_menu_path(restaurant_slug, location_slug, menu_slug)


def build_restaurant_url(restaurant_slug: str, base_url: Optional[str] = None) -> str:
    """Single-segment link that redirects to the earliest active location"""
    origin = (base_url or settings.public_origin).rstrip("/")
    return f"{origin}/{restaurant_slug}"


def render_qr_data_url(data: str) -> str:
    """Render ``data`` as a PNG QR code and return it as a base64 data URL"""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=settings.qr_box_size,
        border=settings.qr_border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def to_response(qr_code: QRCode, restaurant: Restaurant, location: Location) -> QRCodeResponse:
    menu = qr_code.menu
    return QRCodeResponse(
        id=qr_code.id,
        location_id=qr_code.location_id,
        menu_id=qr_code.menu_id,
        menu_name=menu.name if menu else None,
        menu_slug=menu.slug if menu else None,
        image_url=qr_code.image_url,
        is_active=qr_code.is_active,
        target_url=build_menu_url(restaurant.slug, location.slug, menu.slug if menu else None),
        created_at=qr_code.created_at,
        updated_at=qr_code.updated_at,
    )


async def get_qr_code(db: AsyncSession, location_id: UUID, qr_code_id: UUID) -> QRCode:
    result = await db.execute(
        select(QRCode)
        .where(QRCode.id == qr_code_id, QRCode.location_id == location_id)
        .options(selectinload(QRCode.menu))
        .execution_options(populate_existing=True)
    )
    qr_code = result.scalar_one_or_none()

    if not qr_code:
        raise NotFoundError("QR code not found")

    return qr_code


async def list_qr_codes(db: AsyncSession, location_id: UUID) -> List[QRCode]:
    result = await db.execute(
        select(QRCode)
        .where(QRCode.location_id == location_id)
        .options(selectinload(QRCode.menu))
        .execution_options(populate_existing=True)
        .order_by(QRCode.created_at.desc())
    )
    return list(result.scalars().all())


async def create_qr_code(db: AsyncSession, location: Location, data: QRCodeCreate) -> QRCode:
    """Persist a rendered QR code for the location (and optional menu)"""
    if not data.image_url:
        raise ValidationError("image_url is required")

    if data.menu_id is not None:
        result = await db.execute(select(Menu.restaurant_id).where(Menu.id == data.menu_id))
        menu_restaurant_id = result.scalar_one_or_none()
        if menu_restaurant_id != location.restaurant_id:
            raise ValidationError("Menu does not belong to this restaurant")

    existing = await db.execute(
        select(QRCode.id).where(
            QRCode.location_id == location.id,
            QRCode.menu_id.is_(None) if data.menu_id is None else QRCode.menu_id == data.menu_id,
        )
    )
    if existing.first() is not None:
        raise ConflictError(DUPLICATE_QR_MESSAGE)

    qr_code = QRCode(
        location_id=location.id,
        menu_id=data.menu_id,
        image_url=data.image_url,
        is_active=data.is_active,
    )
    db.add(qr_code)
    await commit_or_conflict(db, DUPLICATE_QR_MESSAGE)

    logger.info(
        "QR code created",
        location_id=str(location.id),
        menu_id=str(data.menu_id) if data.menu_id else None,
        qr_code_id=str(qr_code.id),
    )
    return await get_qr_code(db, location.id, qr_code.id)


async def update_qr_code(
    db: AsyncSession,
    actor: User,
    restaurant_id: UUID,
    qr_code: QRCode,
    data: QRCodeUpdate,
) -> QRCode:
    updates = data.model_dump(exclude_unset=True, exclude_none=True)

    for field, value in updates.items():
        setattr(qr_code, field, value)

    if "is_active" in updates:
        audit.record(
            db,
            actor,
            "toggle_qr_code",
            "qr_code",
            qr_code.id,
            restaurant_id,
            {"is_active": updates["is_active"]},
        )

    await db.commit()

    logger.info("QR code updated", qr_code_id=str(qr_code.id), fields=sorted(updates))
    return await get_qr_code(db, qr_code.location_id, qr_code.id)


async def delete_qr_code(
    db: AsyncSession,
    actor: User,
    restaurant_id: UUID,
    qr_code: QRCode,
) -> None:
    qr_code_id, image_url = qr_code.id, qr_code.image_url
    await db.delete(qr_code)

    # The rendered image is left in storage
    audit.record(
        db,
        actor,
        "delete_qr_code",
        "qr_code",
        qr_code_id,
        restaurant_id,
        {"orphaned_qr_images": [image_url]},
    )
    await db.commit()

    logger.info("QR code deleted", qr_code_id=str(qr_code_id))
