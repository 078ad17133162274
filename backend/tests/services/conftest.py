"""Service test fixtures — seeded accounts on the shared test Store.

Invariants:
    - Accounts are created through register_account, so their credentials
      are real bcrypt hashes (at the minimum work factor)
"""

import pytest

from showcase.services.consistency import register_account


@pytest.fixture
def make_account(store):
    async def _make(username: str, password: str = "correct-horse-battery", **extra):
        return await register_account(
            store, username=username, password=password,
            phone_number="555-0100", **extra,
        )
    return _make


@pytest.fixture
async def alice(make_account):
    return await make_account("alice")


@pytest.fixture
async def bob(make_account):
    return await make_account("bob")
