"""ORM Models - SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Expense rows are always scoped by user_id

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from expense_tracker.models.expense import Expense  # noqa: F401
