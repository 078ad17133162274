"""Credential Store — bcrypt hashing and verification of account passwords.

Invariants:
    - Plaintext is never persisted or logged
    - A credential is hashed only when it is newly set or actually changed;
      an already-hashed value is never hashed again
    - Hash/verify run in a worker thread so the event loop never blocks on bcrypt
    - verify_password on a malformed hash returns False, never raises

Design Decisions:
    - Work factor comes from settings (bcrypt_rounds, default 10) so tests can
      run with the minimum cost
"""

import asyncio
import logging

import bcrypt

from showcase.config import get_settings

logger = logging.getLogger(__name__)

_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
_BCRYPT_HASH_LENGTH = 60


def is_password_hash(value: str | None) -> bool:
    """True when value already looks like bcrypt output."""
    return (
        bool(value)
        and len(value) == _BCRYPT_HASH_LENGTH
        and value.startswith(_BCRYPT_PREFIXES)
    )


def _hash(plaintext: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")


def _verify(plaintext: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


async def hash_password(plaintext: str, rounds: int | None = None) -> str:
    """Salted one-way hash with a fixed work factor."""
    cost = rounds if rounds is not None else get_settings().bcrypt_rounds
    return await asyncio.to_thread(_hash, plaintext, cost)


async def verify_password(plaintext: str, hashed: str | None) -> bool:
    if not is_password_hash(hashed):
        return False
    return await asyncio.to_thread(_verify, plaintext, hashed)


async def set_password(account, plaintext: str, rounds: int | None = None) -> bool:
    """Write a new credential onto account. Returns False if nothing changed.

    The caller is responsible for persisting the account afterwards.
    """
    if await verify_password(plaintext, account.password_hash):
        logger.info(
            "Password unchanged; keeping existing hash",
            extra={"account_id": str(account.id)},
        )
        return False
    account.password_hash = await hash_password(plaintext, rounds)
    return True
