"""Core Layer - pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validation rules and result types are pure and deterministic (the clock is injected)

Design Decisions:
    - Functional core separated from imperative shell: handlers in services/ orchestrate IO
      around the pure rules defined here
"""
