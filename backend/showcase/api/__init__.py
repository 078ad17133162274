"""API Layer — FastAPI routes, session gate and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every mutating route depends on require_principal, then checks ownership,
      then delegates to services/consistency.py

Design Decisions:
    - Thin routes delegate to services
"""
