"""Public menu pages reached by scanning a QR code"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.database import get_db
from qrmenu.schemas.public import PublicLocationPage, PublicMenuPage
from qrmenu.services import resolver

router = APIRouter()


@router.get("/menus/{restaurant_slug}/{location_slug}", response_model=PublicLocationPage)
async def location_page(
    restaurant_slug: str,
    location_slug: str,
    db: AsyncSession = Depends(get_db),
):
    """Every active menu served at a location"""
    return await resolver.resolve_location_page(db, restaurant_slug, location_slug)


@router.get(
    "/menus/{restaurant_slug}/{location_slug}/{menu_slug}",
    response_model=PublicMenuPage,
)
async def menu_page(
    restaurant_slug: str,
    location_slug: str,
    menu_slug: str,
    db: AsyncSession = Depends(get_db),
):
    return await resolver.resolve_menu_page(db, restaurant_slug, location_slug, menu_slug)


@router.get("/{restaurant_slug}", include_in_schema=False)
async def legacy_restaurant_link(
    restaurant_slug: str,
    db: AsyncSession = Depends(get_db),
):
    """Old single-location links redirect to the earliest active location"""
    path = await resolver.default_location_path(db, restaurant_slug)
    return RedirectResponse(path, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
