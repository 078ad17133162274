"""Identity & Session Gate — resolves the request's Principal from the session cookie.

Invariants:
    - authenticate() returns None for the unauthenticated case; it never raises for it
    - The Principal is request-scoped and handed to handlers as a parameter;
      nothing about the caller is stored in module or process state
    - A session pointing at a deleted account is cleared, not trusted
    - Only the account id lives in the session; username is re-read every request
      so renames take effect immediately

Design Decisions:
    - require_principal converts the unauthenticated branch into LoginRequiredError
      at the dependency boundary, the global handler turns that into a redirect
    - Flash queue kept in the signed session cookie (SessionMiddleware)
"""

import logging
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.core.domain_types import AccountId, FlashCategory, Principal
from showcase.core.errors import LoginRequiredError
from showcase.infrastructure.database import get_db
from showcase.infrastructure.repositories import AccountRepository, Store

logger = logging.getLogger(__name__)

SESSION_ACCOUNT_KEY = "account_id"
SESSION_FLASH_KEY = "_flashes"


# ─── Flash messages ──────────────────────────────────────────────

def flash(
    request: Request, message: str, category: FlashCategory = FlashCategory.INFO,
) -> None:
    """Queue a message for the next view the caller renders."""
    queue = list(request.session.get(SESSION_FLASH_KEY, []))
    queue.append({"category": category.value, "message": message})
    request.session[SESSION_FLASH_KEY] = queue


def pop_flashes(request: Request) -> list[dict]:
    return request.session.pop(SESSION_FLASH_KEY, [])


# ─── Session state ───────────────────────────────────────────────

async def authenticate(
    request: Request, accounts: AccountRepository,
) -> Principal | None:
    """Resolve the session to a Principal, or None when unauthenticated."""
    raw = request.session.get(SESSION_ACCOUNT_KEY)
    if not raw:
        return None
    try:
        account_id = UUID(raw)
    except (TypeError, ValueError):
        logger.warning("Discarding malformed session account id")
        request.session.pop(SESSION_ACCOUNT_KEY, None)
        return None
    account = await accounts.get(account_id)
    if account is None:
        logger.info("Session refers to a deleted account; clearing", extra={"account_id": raw})
        request.session.pop(SESSION_ACCOUNT_KEY, None)
        return None
    return Principal(id=AccountId(account.id), username=account.username)


def login(request: Request, account) -> Principal:
    request.session[SESSION_ACCOUNT_KEY] = str(account.id)
    return Principal(id=AccountId(account.id), username=account.username)


def logout(request: Request) -> None:
    """Drop the identity but keep the flash queue so the login view can show it."""
    flashes = request.session.get(SESSION_FLASH_KEY, [])
    request.session.clear()
    if flashes:
        request.session[SESSION_FLASH_KEY] = flashes


# ─── FastAPI dependencies ────────────────────────────────────────

async def get_store(db: AsyncSession = Depends(get_db)) -> Store:
    return Store(db)


async def optional_principal(
    request: Request, store: Store = Depends(get_store),
) -> Principal | None:
    return await authenticate(request, store.accounts)


async def require_principal(
    principal: Principal | None = Depends(optional_principal),
) -> Principal:
    if principal is None:
        raise LoginRequiredError()
    return principal
