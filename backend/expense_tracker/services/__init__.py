"""Services Layer - command/query handlers and the request dispatch pipeline.

Invariants:
    - Handlers split by side effect: commands (write) vs queries (read)
    - Request dispatch uses explicit dict mapping (no auto-discovery)
"""
