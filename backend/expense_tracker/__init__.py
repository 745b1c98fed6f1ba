"""Expense Tracker Application Package - owner-scoped expense CRUD API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
