"""Bounded Sequences — cap skills, tags and image slots at write time.

Invariants:
    - Overflow is truncated, never rejected
    - Order of the surviving items is the input order
    - Blank items are dropped before the cap is applied
"""

from collections.abc import Iterable

from showcase.core.domain_types import MAX_SEQUENCE_ITEMS

DELIMITER = ","


def split_items(
    raw: str | Iterable[str] | None, limit: int = MAX_SEQUENCE_ITEMS,
) -> list[str]:
    """Split delimited text (or an iterable) into at most `limit` items."""
    if raw is None:
        return []
    parts = raw.split(DELIMITER) if isinstance(raw, str) else raw
    items = [p.strip() for p in parts if p and p.strip()]
    return items[:limit]


def collect_images(*refs: str | None, limit: int = MAX_SEQUENCE_ITEMS) -> list[str]:
    """Fill the fixed image slots from individual references, skipping empties."""
    return [r.strip() for r in refs if r and r.strip()][:limit]
