"""Request Dispatch - explicit routing from request type to validator and handler.

Invariants:
    - Every request->handler mapping is visible in one dict; no auto-discovery
    - Validation runs BEFORE the handler; any failure aborts with CommandValidationError
      carrying ALL failures from the rule set
    - Unregistered request types raise UnknownRequestError (a programming error, 500)
    - One repository + one unit of work per dispatch, bound to the request's AsyncSession

Design Decisions:
    - Explicit dicts over decorators/registries: adding a use case means editing this file
    - "now" read once per request from the injected clock, so every rule in a set sees
      the same instant
"""

import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.domain_types import utc_now
from expense_tracker.core.errors import CommandValidationError, UnknownRequestError
from expense_tracker.core.expense_rules import (
    CREATE_EXPENSE_RULES, DELETE_EXPENSE_RULES, UPDATE_EXPENSE_RULES,
)
from expense_tracker.core.requests import (
    CreateExpenseCommand,
    DeleteExpenseCommand,
    ExpenseRequest,
    GetExpenseByIdQuery,
    GetExpensesByUserQuery,
    UpdateExpenseCommand,
)
from expense_tracker.core.results import Result
from expense_tracker.infrastructure.expense_repository import SqlAlchemyExpenseRepository
from expense_tracker.infrastructure.unit_of_work import SqlAlchemyUnitOfWork
from expense_tracker.services.handle_expense_commands import ExpenseCommandHandlers
from expense_tracker.services.handle_expense_queries import ExpenseQueryHandlers

logger = logging.getLogger(__name__)


class RequestDispatch:
    """Routes request objects -> rule set -> handler. Explicit registration."""

    def __init__(
        self, db: AsyncSession, clock: Callable[[], datetime] = utc_now,
    ):
        self._clock = clock
        repository = SqlAlchemyExpenseRepository(db)
        unit_of_work = SqlAlchemyUnitOfWork(db, clock)
        commands = ExpenseCommandHandlers(repository, unit_of_work)
        queries = ExpenseQueryHandlers(repository)

        self._handlers = {
            CreateExpenseCommand: commands.create_expense,
            UpdateExpenseCommand: commands.update_expense,
            DeleteExpenseCommand: commands.delete_expense,
            GetExpenseByIdQuery: queries.get_expense,
            GetExpensesByUserQuery: queries.list_expenses,
        }
        self._validators = {
            CreateExpenseCommand: CREATE_EXPENSE_RULES,
            UpdateExpenseCommand: UPDATE_EXPENSE_RULES,
            DeleteExpenseCommand: DELETE_EXPENSE_RULES,
        }

    async def send(self, request: ExpenseRequest) -> Result:
        """Validate, then run the handler registered for type(request)."""
        request_type = type(request).__name__
        handler = self._handlers.get(type(request))
        if handler is None:
            raise UnknownRequestError(request_type)

        rules = self._validators.get(type(request))
        if rules is not None:
            failures = rules.validate(request, self._clock())
            if failures:
                logger.warning(
                    f"Validation failed for {request_type}: "
                    f"{[f.field for f in failures]}",
                    extra={
                        "request_type": request_type,
                        "failure_count": len(failures),
                    },
                )
                raise CommandValidationError(failures, request_type)

        return await handler(request)
