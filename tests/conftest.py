"""Test configuration and fixtures"""

import os

# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from qrmenu.main import app
from qrmenu.database import Base, get_db
from qrmenu.models import Category, Item, Location, LocationMenu, Menu, Restaurant
from qrmenu.models.user import User, Role
from qrmenu.api.auth import create_access_token, get_password_hash

TEST_PASSWORD = "testpass123"


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


async def create_user(db, email: str, role: Role, **kwargs) -> User:
    user = User(
        email=email,
        hashed_password=get_password_hash(TEST_PASSWORD),
        full_name=email.split("@")[0].title(),
        role_id=role.value,
        is_active=True,
        **kwargs,
    )
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def super_admin(test_db):
    return await create_user(test_db, "admin@example.com", Role.SUPER_ADMIN)


@pytest.fixture
async def platform_staff(test_db, super_admin):
    return await create_user(
        test_db, "support@example.com", Role.SUPER_ADMIN_STAFF, created_by_id=super_admin.id
    )


@pytest.fixture
async def owner(test_db):
    return await create_user(test_db, "owner@jadegarden.example", Role.OWNER)


@pytest.fixture
async def other_owner(test_db):
    return await create_user(test_db, "owner@bluefin.example", Role.OWNER)


@pytest.fixture
async def restaurant(test_db, owner):
    """Jade Garden, owned by ``owner``"""
    restaurant = Restaurant(owner_id=owner.id, name="Jade Garden", slug="jade-garden")
    test_db.add(restaurant)
    await test_db.commit()
    return restaurant


@pytest.fixture
async def other_restaurant(test_db, other_owner):
    restaurant = Restaurant(owner_id=other_owner.id, name="Blue Fin", slug="blue-fin")
    test_db.add(restaurant)
    await test_db.commit()
    return restaurant


@pytest.fixture
async def owner_staff(test_db, owner, restaurant):
    return await create_user(
        test_db,
        "waiter@jadegarden.example",
        Role.OWNER_STAFF,
        created_by_id=owner.id,
        restaurant_id=restaurant.id,
    )


@pytest.fixture
async def location(test_db, restaurant):
    location = Location(
        restaurant_id=restaurant.id,
        name="Downtown Branch",
        slug="downtown-branch",
        address="88 Market Street",
    )
    test_db.add(location)
    await test_db.commit()
    return location


@pytest.fixture
async def menu(test_db, restaurant):
    menu = Menu(restaurant_id=restaurant.id, name="Dinner", slug="dinner", display_order=1)
    test_db.add(menu)
    await test_db.commit()
    return menu


@pytest.fixture
async def served_menu(test_db, location, menu):
    """Dinner assigned to Downtown Branch with one category and two items"""
    test_db.add(LocationMenu(location_id=location.id, menu_id=menu.id, is_active=True))

    category = Category(menu_id=menu.id, name="Mains", display_order=1)
    test_db.add(category)
    await test_db.flush()

    test_db.add_all([
        Item(category_id=category.id, name="Kung Pao Chicken", price_cents=1550, display_order=1),
        Item(category_id=category.id, name="Mapo Tofu", price_cents=1300, display_order=2),
    ])
    await test_db.commit()
    return menu


@pytest.fixture
async def client(test_db):
    """Create test client with overridden database"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build the bearer header for a user: ``auth_headers(owner)``"""
    return bearer
