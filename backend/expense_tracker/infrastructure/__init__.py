"""Infrastructure Layer - database sessions, persistence adapters, and logging.

Invariants:
    - Implements the Protocols declared in core/repository_protocols.py
    - All SQLAlchemy exceptions surface as core.errors.DatabaseError
"""
