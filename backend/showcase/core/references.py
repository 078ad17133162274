"""Reference Sequences — ordered id lists embedded in a parent document.

Invariants:
    - Pure: inputs are never mutated, a new list is always returned
    - append_reference is idempotent (dedupe by identity)
    - References are stored as strings so the sequence is JSON-serializable

Design Decisions:
    - Returning a fresh list matters for the ORM: JSON columns only register a
      change when the attribute is reassigned
"""

from collections.abc import Iterable
from uuid import UUID


def append_reference(refs: Iterable[str] | None, ref: UUID | str) -> tuple[list[str], bool]:
    """Append ref unless already present. Returns (new_refs, appended)."""
    current = list(refs or [])
    key = str(ref)
    if key in current:
        return current, False
    return [*current, key], True


def detach_references(
    refs: Iterable[str] | None, removed: Iterable[UUID | str],
) -> list[str]:
    """Drop every reference in `removed`, preserving order of the rest."""
    gone = {str(r) for r in removed}
    return [r for r in (refs or []) if r not in gone]
