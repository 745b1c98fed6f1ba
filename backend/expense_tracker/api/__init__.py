"""API Layer - FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All error bodies are produced by api/error_handlers.py

Design Decisions:
    - Thin routes delegate to services.request_dispatch
"""
