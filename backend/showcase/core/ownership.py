"""Ownership Authorization — pure ALLOW/DENY decisions for mutating requests.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Identity is compared by stable id, never by username or title
    - A missing resource (None) is always denied with the same reason a
      non-owner gets, so callers cannot probe for existence
    - enforce() is the only place a Deny becomes a ForbiddenError

Design Decisions:
    - Decision value over raising directly: tests assert on decisions without
      exception plumbing, routes call enforce() at the boundary
    - Three rules (self, authorship, posting identity) instead of one generic
      owner lookup: each resource stores its owner under a different attribute
"""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from showcase.core.domain_types import Principal
from showcase.core.errors import ErrorContext, ForbiddenError

DENY_REASON = "You are not allowed access."


class AccountLike(Protocol):
    id: UUID


class AuthoredLike(Protocol):
    author_id: UUID


class ProfileLike(Protocol):
    account_id: UUID


class JobLike(Protocol):
    job_poster_id: UUID


@dataclass(frozen=True)
class Decision:
    """Outcome of an ownership check."""
    allowed: bool
    reason: str | None = None


ALLOW = Decision(allowed=True)


def _deny() -> Decision:
    return Decision(allowed=False, reason=DENY_REASON)


def check_self_ownership(
    principal: Principal, account: AccountLike | None,
) -> Decision:
    """Allow iff the target account IS the principal's own account."""
    if account is None or account.id != principal.id:
        return _deny()
    return ALLOW


def check_authorship(
    principal: Principal, resource: AuthoredLike | ProfileLike | None,
) -> Decision:
    """Allow iff the portfolio/comment/profile was created by the principal."""
    if resource is None:
        return _deny()
    owner_id = getattr(resource, "author_id", None)
    if owner_id is None:
        owner_id = getattr(resource, "account_id", None)
    if owner_id is None or owner_id != principal.id:
        return _deny()
    return ALLOW


def check_posting_identity(
    principal: Principal, job: JobLike | None,
) -> Decision:
    """Allow iff the job was posted by the principal."""
    if job is None or job.job_poster_id != principal.id:
        return _deny()
    return ALLOW


def enforce(decision: Decision, principal: Principal, resource: str) -> None:
    """Raise ForbiddenError on Deny. No-op on Allow."""
    if decision.allowed:
        return
    raise ForbiddenError(
        decision.reason or DENY_REASON,
        ErrorContext(account_id=str(principal.id), resource=resource),
    )
