"""Database engine, session factory and declarative base"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from qrmenu.config import settings
from qrmenu.exceptions import ConflictError


class Base(DeclarativeBase):
    """Declarative base for all models"""


engine = create_async_engine(settings.database_url, echo=settings.database_echo)

SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    """Yield a session per request; uncommitted work is rolled back on close"""
    async with SessionLocal() as session:
        yield session


async def commit_or_conflict(db: AsyncSession, message: str) -> None:
    """Commit, turning a unique-constraint violation into a 409"""
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(message)
