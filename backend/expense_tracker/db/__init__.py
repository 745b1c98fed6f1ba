"""Database Infrastructure - SQLAlchemy declarative Base and shared column mixins.

Invariants:
    - Every ORM model inherits from Base
    - All sessions are async (AsyncSession)
"""
