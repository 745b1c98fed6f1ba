"""Boundary Protocols - contracts between the handlers and persistence.

Invariants:
    - Handlers depend on these Protocols, never on the SQLAlchemy implementations
    - Every read is scoped by owner; add() trusts the entity's own user_id
    - Repository mutations only stage changes; UnitOfWork.save_changes() commits them

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async in Protocol: implementations do IO
"""

from typing import Protocol, Sequence
from uuid import UUID

from expense_tracker.core.domain_types import ExpenseId, UserId


class ExpenseLike(Protocol):
    """Structural contract for Expense entities passed between layers."""
    id: UUID | None
    user_id: UUID
    amount: object
    currency: str
    category: str
    date: object
    description: str | None


class ExpenseRepository(Protocol):
    """Contract for expense persistence - implemented by infrastructure."""
    async def get_by_owner(self, user_id: UserId) -> Sequence[ExpenseLike]: ...
    async def get_by_id(
        self, user_id: UserId, expense_id: ExpenseId,
    ) -> ExpenseLike | None: ...
    async def add(self, expense: ExpenseLike) -> ExpenseId: ...
    async def delete(self, expense: ExpenseLike) -> None: ...


class UnitOfWork(Protocol):
    """Contract for committing one request's staged changes atomically."""
    async def save_changes(self) -> None: ...
