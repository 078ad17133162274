"""Ownership Authorization — tests for pure ALLOW/DENY decisions.

Tests cover:
    - check_self_ownership allows only the principal's own account
    - check_authorship decides on author_id (portfolios, comments) and on
      account_id (profiles)
    - check_posting_identity decides on job_poster_id
    - A missing resource is denied with the same reason a non-owner gets
    - Identity is compared by id: a same-named principal is still denied
    - enforce raises ForbiddenError only on Deny
"""

import uuid
from types import SimpleNamespace

import pytest

from showcase.core.domain_types import Principal
from showcase.core.errors import ErrorCategory, ForbiddenError
from showcase.core.ownership import (
    ALLOW,
    DENY_REASON,
    Decision,
    check_authorship,
    check_posting_identity,
    check_self_ownership,
    enforce,
)


def _principal(name: str = "alice") -> Principal:
    return Principal(id=uuid.uuid4(), username=name)


# ─── check_self_ownership ────────────────────────────────────────

def test_self_ownership_allows_own_account():
    me = _principal()
    assert check_self_ownership(me, SimpleNamespace(id=me.id)) == ALLOW


def test_self_ownership_denies_other_account():
    me = _principal()
    decision = check_self_ownership(me, SimpleNamespace(id=uuid.uuid4()))
    assert decision.allowed is False
    assert decision.reason == DENY_REASON


def test_self_ownership_denies_missing_account():
    decision = check_self_ownership(_principal(), None)
    assert decision == Decision(allowed=False, reason=DENY_REASON)


def test_self_ownership_ignores_username_match():
    me = _principal("alice")
    impostor_account = SimpleNamespace(id=uuid.uuid4(), username="alice")
    assert check_self_ownership(me, impostor_account).allowed is False


# ─── check_authorship ────────────────────────────────────────────

def test_authorship_allows_author():
    me = _principal()
    portfolio = SimpleNamespace(author_id=me.id, title="Mine")
    assert check_authorship(me, portfolio).allowed is True


def test_authorship_denies_non_author():
    me = _principal()
    comment = SimpleNamespace(author_id=uuid.uuid4())
    assert check_authorship(me, comment).allowed is False


def test_authorship_uses_account_id_for_profiles():
    me = _principal()
    assert check_authorship(me, SimpleNamespace(account_id=me.id)).allowed is True
    assert check_authorship(me, SimpleNamespace(account_id=uuid.uuid4())).allowed is False


def test_authorship_denies_missing_resource_with_same_reason():
    me = _principal()
    missing = check_authorship(me, None)
    foreign = check_authorship(me, SimpleNamespace(author_id=uuid.uuid4()))
    assert missing == foreign


def test_authorship_denies_resource_without_owner():
    assert check_authorship(_principal(), SimpleNamespace(title="x")).allowed is False


# ─── check_posting_identity ──────────────────────────────────────

def test_posting_identity_allows_poster():
    me = _principal()
    assert check_posting_identity(me, SimpleNamespace(job_poster_id=me.id)).allowed


def test_posting_identity_denies_other_poster():
    job = SimpleNamespace(job_poster_id=uuid.uuid4())
    assert check_posting_identity(_principal(), job).allowed is False


def test_posting_identity_denies_missing_job():
    assert check_posting_identity(_principal(), None).allowed is False


# ─── enforce ─────────────────────────────────────────────────────

def test_enforce_is_noop_on_allow():
    enforce(ALLOW, _principal(), "portfolio:Mine")


def test_enforce_raises_forbidden_on_deny():
    me = _principal()
    with pytest.raises(ForbiddenError) as exc_info:
        enforce(check_self_ownership(me, None), me, "account:nobody")
    err = exc_info.value
    assert err.http_status == 403
    assert err.category == ErrorCategory.FORBIDDEN
    assert err.message == DENY_REASON
    assert err.context.account_id == str(me.id)
    assert err.context.resource == "account:nobody"
