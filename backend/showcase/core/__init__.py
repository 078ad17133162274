"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - Ownership decisions and sequence bounds live here so they are testable
      without a database; the shell loads resources and asks core to decide
"""
