"""Authentication Routes — login, logout and signup.

Invariants:
    - Login failure never says which half of the credential was wrong
    - The session is reset on login (no fixation) and on logout
    - Signup logs the new account in immediately
"""

import logging

from fastapi import APIRouter, Depends, Request

from showcase.api.session_gate import get_store, login, logout, require_principal
from showcase.api.views import page, redirect
from showcase.core.domain_types import Principal
from showcase.core.errors import ErrorContext, InvalidCredentialsError
from showcase.infrastructure.credentials import verify_password
from showcase.infrastructure.repositories import Store
from showcase.schemas.account import LoginForm, SignupForm
from showcase.services import consistency

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


@router.get("/login")
async def login_page(request: Request):
    return page(request, view="login")


@router.post("/login")
async def login_submit(
    body: LoginForm, request: Request, store: Store = Depends(get_store),
):
    account = await store.accounts.get_by_username(body.username)
    if account is None or not await verify_password(body.password, account.password_hash):
        raise InvalidCredentialsError(ErrorContext(resource=body.username))
    logout(request)
    login(request, account)
    logger.info("Signed in", extra={"account_id": str(account.id)})
    return redirect(request, "/", "You have been successfully signed in.")


@router.get("/logout")
async def logout_submit(
    request: Request, principal: Principal = Depends(require_principal),
):
    logout(request)
    logger.info("Signed out", extra={"account_id": str(principal.id)})
    return redirect(request, "/login", "You have been signed out.")


@router.get("/signup")
async def signup_page(request: Request):
    return page(request, view="signup")


@router.post("/signup")
async def signup_submit(
    body: SignupForm, request: Request, store: Store = Depends(get_store),
):
    account = await consistency.register_account(
        store,
        username=body.username,
        password=body.password,
        phone_number=body.phone_number,
        purpose=body.purpose,
        experience=body.experience,
        profile_image=body.profile_image,
    )
    logout(request)
    login(request, account)
    return redirect(request, "/", "You have successfully created an account.")
