"""Services Layer — orchestrates repositories around the pure core.

Invariants:
    - Services never touch HTTP objects (Request, Response)
    - Every multi-document rule lives in consistency.py
"""
