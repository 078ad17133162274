"""Account Routes — profile view/edit, password change, friends and account deletion.

Invariants:
    - Every mutation of an account requires self-ownership, decided on account id
    - An unknown username on an ownership-gated route is Forbidden, not 404,
      so callers cannot probe which accounts exist
    - Account deletion answers success even when the cascade left orphans
      (recorded as CascadeInconsistency rows)
"""

import logging

from fastapi import APIRouter, Depends, Request

from showcase.api.session_gate import get_store, logout, require_principal
from showcase.api.views import account_view, page, path_segment, profile_view, redirect
from showcase.core.domain_types import Principal
from showcase.core.errors import ResourceNotFoundError
from showcase.core.ownership import check_authorship, check_self_ownership, enforce
from showcase.infrastructure.repositories import Store
from showcase.models.account import Account
from showcase.schemas.account import AccountUpdate, PasswordUpdate, ProfileForm
from showcase.services import consistency

logger = logging.getLogger(__name__)
router = APIRouter(tags=["accounts"])


async def get_owned_account(
    store: Store, principal: Principal, username: str,
) -> Account:
    """Load the account named in the path and require it to be the caller's."""
    account = await store.accounts.get_by_username(username)
    enforce(check_self_ownership(principal, account), principal, f"account:{username}")
    return account


def _user_url(username: str) -> str:
    return f"/users/{path_segment(username)}"


# ─── Read ────────────────────────────────────────────────────────

@router.get("/users/{username}")
async def view_account(
    username: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    account = await store.accounts.get_by_username(username)
    if account is None:
        raise ResourceNotFoundError("User", username)
    portfolio = await store.portfolios.get_by_author(account.id)
    return page(
        request, view="view-profile",
        user=account_view(account, portfolio),
        isOwner=account.id == principal.id,
    )


# ─── Account edit ────────────────────────────────────────────────

@router.get("/users/{username}/edit")
async def edit_account_page(
    username: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    account = await get_owned_account(store, principal, username)
    return page(request, view="edit-user", user=account_view(account))


@router.patch("/users/{username}")
@router.patch("/users/{username}/edit")
async def edit_account(
    username: str,
    body: AccountUpdate,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    account = await get_owned_account(store, principal, username)
    account = await consistency.update_account(
        store, account, username=body.username, phone_number=body.phone_number,
    )
    return redirect(request, _user_url(account.username), "Your account has been updated.")


@router.get("/password/{username}/edit_password")
async def edit_password_page(
    username: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    account = await get_owned_account(store, principal, username)
    return page(request, view="edit-userpassword", user={"username": account.username})


@router.patch("/password/{username}/edit_password")
async def edit_password(
    username: str,
    body: PasswordUpdate,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    account = await get_owned_account(store, principal, username)
    changed = await consistency.change_password(store, account, body.password)
    message = "Password has been updated." if changed else "Password unchanged."
    return redirect(request, _user_url(account.username), message)


# ─── Delete (cascade) ────────────────────────────────────────────

@router.delete("/delete/{username}")
async def delete_account(
    username: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    account = await get_owned_account(store, principal, username)
    report = await consistency.delete_account(store, account)
    if not report.complete:
        logger.warning(
            "Account deleted with incomplete cascade",
            extra={
                "account_id": str(report.account_id),
                "step": ",".join(s.value for s in report.failed_steps),
            },
        )
    logout(request)
    return redirect(
        request, "/login", "Your account and all related items have been deleted.",
    )


# ─── Friends ─────────────────────────────────────────────────────

@router.post("/users/{username}/add")
async def add_friend(
    username: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    """Append username to the caller's own friends list (no reciprocity)."""
    me = await store.accounts.get(principal.id)
    if me is None:
        raise ResourceNotFoundError("User", principal.username)
    await consistency.add_friend(store, me, username)
    return redirect(request, _user_url(me.username), "Friend added.")


# ─── Profile ─────────────────────────────────────────────────────

@router.get("/profiles/add_profile/{username}")
async def add_profile_page(
    username: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    account = await get_owned_account(store, principal, username)
    return page(request, view="add-profile", user={"username": account.username})


@router.post("/profiles/add_profile/{username}")
async def add_profile(
    username: str,
    body: ProfileForm,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    account = await get_owned_account(store, principal, username)
    await consistency.create_profile(
        store, account,
        bio=body.bio, purpose=body.purpose,
        skills=body.skills, profile_image=body.profile_image,
    )
    return redirect(request, _user_url(account.username), "Profile created for your account.")


async def _get_owned_profile_account(
    store: Store, principal: Principal, username: str,
) -> Account:
    account = await get_owned_account(store, principal, username)
    if account.profile is None:
        raise ResourceNotFoundError("Profile", username)
    enforce(check_authorship(principal, account.profile), principal, f"profile:{username}")
    return account


@router.get("/profiles/edit_profile/{username}")
async def edit_profile_page(
    username: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    account = await _get_owned_profile_account(store, principal, username)
    return page(request, view="edit-profile", profile=profile_view(account.profile))


@router.patch("/profiles/edit_profile/{username}")
async def edit_profile(
    username: str,
    body: ProfileForm,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    account = await _get_owned_profile_account(store, principal, username)
    await consistency.update_profile(
        store, account,
        bio=body.bio, purpose=body.purpose,
        skills=body.skills, profile_image=body.profile_image,
    )
    return redirect(
        request, _user_url(account.username), "Profile has been successfully updated.",
    )
