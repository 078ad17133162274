"""Infrastructure Layer — storage, credentials and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every store call is time-bounded and mapped to core/errors.py types
"""
