#!/usr/bin/env python3
"""
Seed script to create a demo restaurant with a location, menu and QR code
"""

import asyncio

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from qrmenu.database import SessionLocal, engine, Base
    from qrmenu.models import Category, Item, Location, LocationMenu, Menu, QRCode, Restaurant
    from qrmenu.models.user import User, Role
    from qrmenu.services.qr_codes import build_menu_url, render_qr_data_url

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        # Check if demo restaurant already exists
        result = await db.execute(select(Restaurant).where(Restaurant.slug == "jade-garden"))
        if result.scalar_one_or_none():
            print("Demo data already exists. Skipping...")
            return

        print("Creating demo users...")

        admin_user = User(
            email="admin@qrmenu.local",
            hashed_password=pwd_context.hash("admin123"),
            full_name="Platform Admin",
            role_id=Role.SUPER_ADMIN.value,
            is_active=True,
        )
        db.add(admin_user)
        await db.flush()

        owner = User(
            email="owner@jadegarden.example",
            hashed_password=pwd_context.hash("jade1234"),
            full_name="Mei Lin",
            role_id=Role.OWNER.value,
            created_by_id=admin_user.id,
            is_active=True,
        )
        db.add(owner)
        await db.flush()

        print("Creating restaurant...")

        restaurant = Restaurant(
            owner_id=owner.id,
            name="Jade Garden",
            slug="jade-garden",
            address="88 Market Street",
        )
        db.add(restaurant)
        await db.flush()

        location = Location(
            restaurant_id=restaurant.id,
            name="Downtown Branch",
            slug="downtown-branch",
            address="88 Market Street",
        )
        db.add(location)

        menu = Menu(
            restaurant_id=restaurant.id,
            name="Dinner",
            slug="dinner",
            description="Served daily from 5pm",
            display_order=1,
        )
        db.add(menu)
        await db.flush()

        db.add(LocationMenu(location_id=location.id, menu_id=menu.id, is_active=True))

        print("Creating menu items...")

        sections = {
            "Starters": [
                {"name": "Spring Rolls", "description": "Crispy vegetable rolls with sweet chilli dip", "price_cents": 650},
                {"name": "Pork Dumplings", "description": "Steamed, six pieces", "price_cents": 850},
            ],
            "Mains": [
                {"name": "Kung Pao Chicken", "description": "Wok-fried with peanuts and dried chilli", "price_cents": 1550},
                {"name": "Mapo Tofu", "description": "Silken tofu in Sichuan pepper sauce", "price_cents": 1300},
                {"name": "Char Siu", "description": "Cantonese roast pork with rice", "price_cents": 1650},
            ],
            "Drinks": [
                {"name": "Jasmine Tea", "description": "Pot for two", "price_cents": 400},
                {"name": "Lychee Soda", "description": None, "price_cents": 450},
            ],
        }

        item_count = 0
        for category_order, (category_name, items) in enumerate(sections.items(), start=1):
            category = Category(menu_id=menu.id, name=category_name, display_order=category_order)
            db.add(category)
            await db.flush()

            for item_order, item_data in enumerate(items, start=1):
                db.add(Item(category_id=category.id, display_order=item_order, **item_data))
                item_count += 1

        menu_url = build_menu_url(restaurant.slug, location.slug, menu.slug)
        db.add(
            QRCode(
                location_id=location.id,
                menu_id=menu.id,
                image_url=render_qr_data_url(menu_url),
                is_active=True,
            )
        )

        await db.commit()

        print(f"""
Demo data created successfully!

Restaurant: Jade Garden
  ID: {restaurant.id}
  Public menu: {menu_url}

Users:
  Super Admin:
    Email: admin@qrmenu.local
    Password: admin123

  Restaurant Owner:
    Email: owner@jadegarden.example
    Password: jade1234

Menu: {item_count} items created
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
