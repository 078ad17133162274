"""Credential Store — tests for bcrypt hashing, verification and the rehash guard.

Tests cover:
    - hash_password produces a salted bcrypt hash (two hashes differ)
    - verify_password accepts the right plaintext, rejects the wrong one
    - verify_password on a missing/malformed hash returns False, never raises
    - set_password hashes on first set and on change
    - set_password with the current plaintext keeps the existing hash
    - change_password only commits when the credential changed
"""

from types import SimpleNamespace

from showcase.infrastructure.credentials import (
    hash_password,
    is_password_hash,
    set_password,
    verify_password,
)
from showcase.services import consistency


async def test_hash_password_is_salted():
    first = await hash_password("s3cret-pass", rounds=4)
    second = await hash_password("s3cret-pass", rounds=4)
    assert first != second
    assert is_password_hash(first)
    assert is_password_hash(second)


async def test_verify_password_roundtrip():
    hashed = await hash_password("s3cret-pass", rounds=4)
    assert await verify_password("s3cret-pass", hashed) is True
    assert await verify_password("wrong-pass", hashed) is False


async def test_verify_password_rejects_malformed_hashes():
    assert await verify_password("anything", None) is False
    assert await verify_password("anything", "") is False
    assert await verify_password("anything", "plaintext-not-a-hash") is False
    assert await verify_password("anything", "$2b$" + "x" * 56) is False


def test_is_password_hash():
    assert is_password_hash(None) is False
    assert is_password_hash("s3cret-pass") is False


async def test_set_password_hashes_new_credential():
    account = SimpleNamespace(id="a1", password_hash=None)
    assert await set_password(account, "s3cret-pass", rounds=4) is True
    assert is_password_hash(account.password_hash)
    assert await verify_password("s3cret-pass", account.password_hash)


async def test_set_password_same_plaintext_is_not_rehashed():
    account = SimpleNamespace(id="a1", password_hash=None)
    await set_password(account, "s3cret-pass", rounds=4)
    stored = account.password_hash

    assert await set_password(account, "s3cret-pass", rounds=4) is False
    assert account.password_hash == stored


async def test_set_password_changed_plaintext_is_rehashed():
    account = SimpleNamespace(id="a1", password_hash=None)
    await set_password(account, "s3cret-pass", rounds=4)
    stored = account.password_hash

    assert await set_password(account, "another-pass", rounds=4) is True
    assert account.password_hash != stored
    assert await verify_password("another-pass", account.password_hash)


async def test_change_password_unchanged_keeps_hash(store, alice):
    stored = alice.password_hash
    changed = await consistency.change_password(store, alice, "correct-horse-battery")
    assert changed is False
    assert alice.password_hash == stored


async def test_change_password_persists_new_hash(store, alice):
    assert await consistency.change_password(store, alice, "brand-new-pass") is True
    reloaded = await store.accounts.get_by_username("alice")
    assert await verify_password("brand-new-pass", reloaded.password_hash)
