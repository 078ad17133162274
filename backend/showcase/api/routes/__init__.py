"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with tags
    - Routes never contain business logic (delegate to services/consistency.py)
    - Successful mutations answer 303 to the canonical view with an info flash

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
