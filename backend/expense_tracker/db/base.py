"""SQLAlchemy Declarative Base - shared base class and audit-timestamp mixin.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata
    - created_at is written once (mark_created); updated_at on every insert and modification
    - updated_at >= created_at

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - server_default=now() only covers rows inserted outside the unit of work (raw SQL, seeds)
"""

from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all Expense Tracker ORM models."""
    pass


class AuditTimestampsMixin:
    """created_at / updated_at columns stamped by the unit of work (always UTC)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )

    def mark_created(self, utc_now: datetime) -> None:
        self.created_at = utc_now
        self.updated_at = utc_now

    def mark_updated(self, utc_now: datetime) -> None:
        self.updated_at = utc_now
