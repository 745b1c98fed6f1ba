"""Expense Schemas - Pydantic models for the expense endpoints.

Invariants:
    - ExpenseCreate / ExpenseUpdate carry no business bounds: violations are reported
      together by the dispatch rule sets, not one-by-one by Pydantic
    - amount is quantized to 2 fractional digits before it reaches a command
    - date is normalized to UTC; a naive value is read as UTC
    - ExpenseUpdate.id is optional; when present and non-nil it must equal the route id
    - ExpenseResponse is built from ORM objects (from_attributes)
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from expense_tracker.core.domain_types import (
    DEFAULT_CURRENCY, ExpenseId, UserId, as_utc, quantize_amount,
)
from expense_tracker.core.requests import CreateExpenseCommand, UpdateExpenseCommand


class ExpenseBody(BaseModel):
    """Fields shared by create and update bodies."""
    amount: Decimal
    currency: str = DEFAULT_CURRENCY
    category: str
    date: datetime
    description: str | None = None

    @field_validator("amount")
    @classmethod
    def round_amount(cls, v: Decimal) -> Decimal:
        return quantize_amount(v)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return as_utc(v)

    @field_validator("currency", "category")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class ExpenseCreate(ExpenseBody):
    """POST body."""

    def to_command(self, user_id: UUID) -> CreateExpenseCommand:
        return CreateExpenseCommand(
            user_id=UserId(user_id),
            amount=self.amount,
            currency=self.currency,
            category=self.category,
            date=self.date,
            description=self.description,
        )


class ExpenseUpdate(ExpenseBody):
    """PUT body - full replacement of the mutable fields."""
    id: UUID | None = None

    def to_command(self, user_id: UUID, expense_id: UUID) -> UpdateExpenseCommand:
        return UpdateExpenseCommand(
            user_id=UserId(user_id),
            expense_id=ExpenseId(expense_id),
            amount=self.amount,
            currency=self.currency,
            category=self.category,
            date=self.date,
            description=self.description,
        )


class ExpenseResponse(BaseModel):
    """Expense as returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    amount: Decimal
    currency: str
    category: str
    date: datetime
    description: str | None = None
    created_at: datetime
    updated_at: datetime
