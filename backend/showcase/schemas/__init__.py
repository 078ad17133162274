"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input)
    - Bounded-sequence truncation is NOT done here: over-long skill/tag lists
      are accepted and truncated by the consistency service

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - camelCase aliases accepted for the browser form field names
"""
