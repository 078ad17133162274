"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AccountId wraps a UUID; ownership compares these, never usernames
    - Principal is immutable for the duration of a request
    - Bounded sequences cap at MAX_SEQUENCE_ITEMS

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", UUID)


# ─── Limits ──────────────────────────────────────────────────────

MAX_SEQUENCE_ITEMS = 3


@dataclass(frozen=True)
class Principal:
    """The authenticated actor making a request."""
    id: AccountId
    username: str


# ─── Enums ───────────────────────────────────────────────────────

class FlashCategory(str, Enum):
    """Flash message categories surfaced to the next rendered view."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class CascadeStep(str, Enum):
    """Steps of a cascading account deletion, in execution order."""
    ACCOUNT = "account"
    COMMENTS = "comments"
    PORTFOLIOS = "portfolios"
