"""Expense ORM - persists one owner-scoped expense record.

Invariants:
    - id is a UUID primary key, assigned by the repository (or uuid4 default) before insert
    - user_id is set at creation and never changed; indexed for owner-scoped reads
    - amount is Numeric(18, 2) and always > 0
    - currency is exactly 3 characters, default "CAD"
    - description column allows 500 chars; the 250-char validator bound is the contract
    - created_at / updated_at stamped by the unit of work (AuditTimestampsMixin)

Design Decisions:
    - MUTABLE_FIELDS lists what the update handler may overwrite; id/user_id are excluded
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, Numeric, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from expense_tracker.core.domain_types import (
    AMOUNT_PRECISION,
    AMOUNT_SCALE,
    CATEGORY_MAX_LENGTH,
    CURRENCY_CODE_LENGTH,
    DEFAULT_CURRENCY,
    DESCRIPTION_COLUMN_LENGTH,
)
from expense_tracker.db.base import AuditTimestampsMixin, Base

MUTABLE_FIELDS = ("amount", "currency", "category", "description", "date")


class Expense(AuditTimestampsMixin, Base):
    """Expense entity - a single spending record owned by one user."""
    __tablename__ = "expenses"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=False,
    )
    currency: Mapped[str] = mapped_column(
        String(CURRENCY_CODE_LENGTH), nullable=False, default=DEFAULT_CURRENCY,
    )
    category: Mapped[str] = mapped_column(
        String(CATEGORY_MAX_LENGTH), nullable=False,
    )
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_COLUMN_LENGTH), nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Expense {self.id} user={self.user_id} {self.amount} {self.currency}>"
