"""Manual display ordering shared by menus, categories and items.

Callers run these inside the request transaction and commit afterwards. The
parent row is locked first so concurrent inserts or swaps under the same
parent serialize instead of reading the same max order.
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

UP = "up"
DOWN = "down"


async def lock_parent(db: AsyncSession, parent_model, parent_id: UUID) -> None:
    """SELECT ... FOR UPDATE on the parent row (ignored by SQLite)"""
    await db.execute(
        select(parent_model.id).where(parent_model.id == parent_id).with_for_update()
    )


async def next_display_order(db: AsyncSession, model, parent_column, parent_id: UUID) -> int:
    """max(display_order) + 1 among the parent's children, 1 for the first child"""
    result = await db.execute(
        select(func.max(model.display_order)).where(parent_column == parent_id)
    )
    return (result.scalar() or 0) + 1


async def ordered_siblings(db: AsyncSession, model, parent_column, parent_id: UUID):
    result = await db.execute(
        select(model)
        .where(parent_column == parent_id)
        .order_by(model.display_order, model.created_at, model.id)
    )
    return list(result.scalars().all())


async def swap_with_neighbour(
    db: AsyncSession,
    model,
    parent_column,
    parent_id: UUID,
    row,
    direction: str,
) -> bool:
    """Swap ``row`` with its neighbour in ``direction``; False if already at the edge"""
    siblings = await ordered_siblings(db, model, parent_column, parent_id)
    index = next(i for i, sibling in enumerate(siblings) if sibling.id == row.id)
    target = index - 1 if direction == UP else index + 1

    if target < 0 or target >= len(siblings):
        return False

    neighbour = siblings[target]

    # Duplicate orders (legacy data) would make the swap a no-op
    if neighbour.display_order == row.display_order:
        for position, sibling in enumerate(siblings, start=1):
            sibling.display_order = position

    row.display_order, neighbour.display_order = neighbour.display_order, row.display_order
    return True
