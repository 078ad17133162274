"""Comment Routes — any signed-in account may comment; only the author may edit or delete.

Invariants:
    - Comments are created against an existing portfolio (404 otherwise)
    - A comment is only addressable through the portfolio it belongs to
    - Edit/delete require authorship on author_id; a missing comment is
      Forbidden on those routes, the same answer a non-author gets
    - Deleting a comment also detaches it from the portfolio's sequence
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from showcase.api.routes.portfolios import get_portfolio_or_404, portfolio_url
from showcase.api.session_gate import get_store, require_principal
from showcase.api.views import comment_view, page, portfolio_view, redirect
from showcase.core.domain_types import Principal
from showcase.core.errors import ResourceNotFoundError
from showcase.core.ownership import check_authorship, enforce
from showcase.infrastructure.repositories import Store
from showcase.models.comment import Comment
from showcase.models.portfolio import Portfolio
from showcase.schemas.portfolio import CommentForm
from showcase.services import consistency

router = APIRouter(tags=["comments"])


async def _comment_on(store: Store, portfolio: Portfolio, comment_id: UUID) -> Comment | None:
    comment = await store.comments.get(comment_id)
    if comment is None or comment.portfolio_id != portfolio.id:
        return None
    return comment


async def _get_authored_comment(
    store: Store, principal: Principal, title: str, comment_id: UUID,
) -> tuple[Portfolio | None, Comment]:
    portfolio = await store.portfolios.get_by_title(title)
    comment = await _comment_on(store, portfolio, comment_id) if portfolio else None
    enforce(check_authorship(principal, comment), principal, f"comment:{comment_id}")
    return portfolio, comment


@router.get("/portfolios/{title}/add_comment")
async def add_comment_page(
    title: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    portfolio = await get_portfolio_or_404(store, title)
    return page(request, view="add-comment", portfolio=portfolio_view(portfolio))


@router.post("/portfolios/{title}/add_comment")
async def add_comment(
    title: str,
    body: CommentForm,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    portfolio = await get_portfolio_or_404(store, title)
    await consistency.add_comment(store, principal, portfolio, body.comment)
    return redirect(request, portfolio_url(portfolio.title), "Comment added.")


@router.get("/portfolios/{title}/view_comment/{comment_id}")
async def view_comment(
    title: str,
    comment_id: UUID,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    portfolio = await get_portfolio_or_404(store, title)
    comment = await _comment_on(store, portfolio, comment_id)
    if comment is None:
        raise ResourceNotFoundError("Comment", str(comment_id))
    return page(
        request, view="view-comment",
        portfolio=portfolio_view(portfolio), comment=comment_view(comment),
    )


@router.get("/portfolios/{title}/edit_comment/{comment_id}")
async def edit_comment_page(
    title: str,
    comment_id: UUID,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    portfolio, comment = await _get_authored_comment(store, principal, title, comment_id)
    return page(
        request, view="edit-comment",
        portfolio=portfolio_view(portfolio), comment=comment_view(comment),
    )


@router.patch("/portfolios/{title}/{comment_id}")
async def edit_comment(
    title: str,
    comment_id: UUID,
    body: CommentForm,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    portfolio, comment = await _get_authored_comment(store, principal, title, comment_id)
    await consistency.update_comment(store, comment, body.comment)
    return redirect(
        request, portfolio_url(portfolio.title), "Comment has been successfully updated.",
    )


@router.delete("/portfolios/{title}/{comment_id}")
@router.delete("/portfolios/{title}/comment/{comment_id}")
async def delete_comment(
    title: str,
    comment_id: UUID,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    portfolio, comment = await _get_authored_comment(store, principal, title, comment_id)
    await consistency.delete_comment(store, portfolio, comment)
    return redirect(request, portfolio_url(portfolio.title), "Comment successfully deleted.")
