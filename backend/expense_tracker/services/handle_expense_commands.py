"""Expense Command Handlers - create, update, delete (3 methods).

Invariants:
    - Handlers run only after RequestDispatch validated the request
    - update/delete load through repository.get_by_id(user_id, expense_id): a missing row
      and another owner's row both yield Failure(EXPENSE_NOT_FOUND)
    - Exactly one save_changes() per successful command; none on Failure
    - update overwrites only MUTABLE_FIELDS; id and user_id never change
    - No optimistic concurrency: concurrent updates are last-write-wins
"""

import logging

from expense_tracker.core.domain_types import quantize_amount
from expense_tracker.core.repository_protocols import ExpenseRepository, UnitOfWork
from expense_tracker.core.requests import (
    CreateExpenseCommand, DeleteExpenseCommand, UpdateExpenseCommand,
)
from expense_tracker.core.results import EXPENSE_NOT_FOUND, Failure, Result, Success
from expense_tracker.models.expense import Expense, MUTABLE_FIELDS

logger = logging.getLogger(__name__)


class ExpenseCommandHandlers:
    """Mutating use cases over one repository + unit of work."""

    def __init__(self, repository: ExpenseRepository, unit_of_work: UnitOfWork):
        self.repository = repository
        self.unit_of_work = unit_of_work

    async def create_expense(self, command: CreateExpenseCommand) -> Result:
        """Map the command to a new Expense, stage it, commit. Returns the entity."""
        logger.info(
            f"Creating expense for user {command.user_id}",
            extra={"user_id": command.user_id},
        )
        expense = Expense(
            user_id=command.user_id,
            amount=quantize_amount(command.amount),
            currency=command.currency,
            category=command.category,
            date=command.date,
            description=command.description,
        )
        expense_id = await self.repository.add(expense)
        await self.unit_of_work.save_changes()

        logger.info(
            f"Expense {expense_id} created for user {command.user_id}",
            extra={"user_id": command.user_id, "expense_id": expense_id},
        )
        return Success(expense)

    async def update_expense(self, command: UpdateExpenseCommand) -> Result:
        """Overwrite the mutable fields of an owned expense in place."""
        extra = {"user_id": command.user_id, "expense_id": command.expense_id}
        logger.info(f"Updating expense {command.expense_id}", extra=extra)

        expense = await self.repository.get_by_id(
            command.user_id, command.expense_id,
        )
        if expense is None:
            logger.warning(
                f"Expense {command.expense_id} not found or not accessible",
                extra=extra,
            )
            return Failure(EXPENSE_NOT_FOUND)

        changes = {
            "amount": quantize_amount(command.amount),
            "currency": command.currency,
            "category": command.category,
            "description": command.description,
            "date": command.date,
        }
        for name in MUTABLE_FIELDS:
            setattr(expense, name, changes[name])
        await self.unit_of_work.save_changes()

        logger.info(f"Expense {command.expense_id} updated", extra=extra)
        return Success()

    async def delete_expense(self, command: DeleteExpenseCommand) -> Result:
        """Physically remove an owned expense."""
        extra = {"user_id": command.user_id, "expense_id": command.expense_id}
        logger.info(f"Deleting expense {command.expense_id}", extra=extra)

        expense = await self.repository.get_by_id(
            command.user_id, command.expense_id,
        )
        if expense is None:
            logger.warning(
                f"Expense {command.expense_id} not found or not accessible",
                extra=extra,
            )
            return Failure(EXPENSE_NOT_FOUND)

        await self.repository.delete(expense)
        await self.unit_of_work.save_changes()

        logger.info(f"Expense {command.expense_id} deleted", extra=extra)
        return Success()
