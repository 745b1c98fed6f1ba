"""Expense Repository - SQLAlchemy implementation of core.repository_protocols.ExpenseRepository.

Invariants:
    - get_by_id filters on (user_id, id) jointly: another owner's expense reads as None
    - get_by_owner returns detached entities (no change tracking for the caller)
    - add() / delete() only stage changes on the session; they never flush or commit
    - add() assigns a fresh uuid4 when the entity has no id (None or nil UUID)
"""

import logging
import uuid
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.domain_types import ExpenseId, UserId, is_empty_id
from expense_tracker.models.expense import Expense

logger = logging.getLogger(__name__)


class SqlAlchemyExpenseRepository:
    """Owner-scoped expense queries over one request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get_by_owner(self, user_id: UserId) -> Sequence[Expense]:
        result = await self._db.execute(
            select(Expense).where(Expense.user_id == user_id),
        )
        expenses = list(result.scalars().all())
        for expense in expenses:
            self._db.expunge(expense)
        return expenses

    async def get_by_id(
        self, user_id: UserId, expense_id: ExpenseId,
    ) -> Expense | None:
        result = await self._db.execute(
            select(Expense)
            .where(Expense.id == expense_id)
            .where(Expense.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def add(self, expense: Expense) -> ExpenseId:
        """Stage an insert. Returns the (possibly newly assigned) id."""
        if expense is None:
            raise ValueError("expense must not be None")
        if is_empty_id(expense.id):
            expense.id = uuid.uuid4()
        self._db.add(expense)
        return ExpenseId(expense.id)

    async def delete(self, expense: Expense) -> None:
        """Stage a physical removal."""
        await self._db.delete(expense)
