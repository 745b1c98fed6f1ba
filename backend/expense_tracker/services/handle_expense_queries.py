"""Expense Query Handlers - get one, list by owner (2 methods).

Invariants:
    - Read-only: never calls save_changes()
    - get_expense returns Failure(EXPENSE_NOT_FOUND) for missing and foreign expenses alike
    - list_expenses always succeeds (possibly with an empty list)
"""

import logging

from expense_tracker.core.repository_protocols import ExpenseRepository
from expense_tracker.core.requests import GetExpenseByIdQuery, GetExpensesByUserQuery
from expense_tracker.core.results import EXPENSE_NOT_FOUND, Failure, Result, Success

logger = logging.getLogger(__name__)


class ExpenseQueryHandlers:
    """Owner-scoped reads."""

    def __init__(self, repository: ExpenseRepository):
        self.repository = repository

    async def get_expense(self, query: GetExpenseByIdQuery) -> Result:
        extra = {"user_id": query.user_id, "expense_id": query.expense_id}
        expense = await self.repository.get_by_id(query.user_id, query.expense_id)
        if expense is None:
            # Not found OR owned by another user - reported identically
            logger.warning(
                f"Expense {query.expense_id} not found or not accessible",
                extra=extra,
            )
            return Failure(EXPENSE_NOT_FOUND)
        logger.info(f"Retrieved expense {query.expense_id}", extra=extra)
        return Success(expense)

    async def list_expenses(self, query: GetExpensesByUserQuery) -> Result:
        expenses = list(await self.repository.get_by_owner(query.user_id))
        logger.info(
            f"Retrieved {len(expenses)} expenses for user {query.user_id}",
            extra={"user_id": query.user_id},
        )
        return Success(expenses)
