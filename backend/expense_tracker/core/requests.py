"""Requests - immutable command and query objects routed by RequestDispatch.

Invariants:
    - One class per use case; the class itself is the dispatch key
    - Every request carries the owner (user_id); all but create/list carry expense_id
    - Requests are plain data: no IO, no validation side effects

Design Decisions:
    - Frozen dataclasses over Pydantic: validation happens in the rule sets
      (core/expense_rules.py) so that all failures are reported together
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Union

from expense_tracker.core.domain_types import DEFAULT_CURRENCY, ExpenseId, UserId


# ─── Commands ────────────────────────────────────────────────────

@dataclass(frozen=True)
class CreateExpenseCommand:
    user_id: UserId
    amount: Decimal
    category: str
    date: datetime
    currency: str = DEFAULT_CURRENCY
    description: str | None = None


@dataclass(frozen=True)
class UpdateExpenseCommand:
    user_id: UserId
    expense_id: ExpenseId
    amount: Decimal
    category: str
    date: datetime
    currency: str = DEFAULT_CURRENCY
    description: str | None = None


@dataclass(frozen=True)
class DeleteExpenseCommand:
    user_id: UserId
    expense_id: ExpenseId


# ─── Queries ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class GetExpenseByIdQuery:
    user_id: UserId
    expense_id: ExpenseId


@dataclass(frozen=True)
class GetExpensesByUserQuery:
    user_id: UserId


ExpenseRequest = Union[
    CreateExpenseCommand, UpdateExpenseCommand, DeleteExpenseCommand,
    GetExpenseByIdQuery, GetExpensesByUserQuery,
]
