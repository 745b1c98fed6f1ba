"""Pydantic Schemas - request/response shapes for API endpoints.

Invariants:
    - Schemas check SHAPE (types, required keys) at the HTTP boundary
    - Business rules (amount > 0, date window, lengths) live in core/expense_rules.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
