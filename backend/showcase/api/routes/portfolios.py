"""Portfolio Routes — listing, create, read and edit.

Invariants:
    - Every route requires an authenticated session
    - Create: one portfolio per account, unique title (Conflict otherwise)
    - Edit requires authorship, decided on author_id; an unknown title on an
      edit route is Forbidden, identical to a non-owner's answer
    - No portfolio-only delete: a portfolio leaves only with its account
"""

from fastapi import APIRouter, Depends, Query, Request

from showcase.api.session_gate import get_store, require_principal
from showcase.api.views import page, path_segment, portfolio_view, redirect
from showcase.core.domain_types import Principal
from showcase.core.errors import ResourceNotFoundError
from showcase.core.ownership import check_authorship, enforce
from showcase.infrastructure.repositories import Store
from showcase.models.portfolio import Portfolio
from showcase.schemas.portfolio import PortfolioCreate, PortfolioUpdate
from showcase.services import consistency

router = APIRouter(tags=["portfolios"])


def portfolio_url(title: str) -> str:
    return f"/portfolios/{path_segment(title)}"


async def get_portfolio_or_404(store: Store, title: str) -> Portfolio:
    portfolio = await store.portfolios.get_by_title(title)
    if portfolio is None:
        raise ResourceNotFoundError("Portfolio", title)
    return portfolio


async def get_authored_portfolio(
    store: Store, principal: Principal, title: str,
) -> Portfolio:
    portfolio = await store.portfolios.get_by_title(title)
    enforce(check_authorship(principal, portfolio), principal, f"portfolio:{title}")
    return portfolio


@router.get("/")
async def list_portfolios(
    request: Request,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    portfolios = await store.portfolios.list_recent(limit=limit, offset=offset)
    return page(
        request, view="index",
        portfolios=[portfolio_view(p) for p in portfolios],
        pagination={"limit": limit, "offset": offset},
    )


@router.get("/add")
async def add_portfolio_page(
    request: Request, principal: Principal = Depends(require_principal),
):
    return page(request, view="add-portfolio")


@router.post("/add")
async def add_portfolio(
    body: PortfolioCreate,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    portfolio = await consistency.create_portfolio(
        store, principal,
        title=body.title,
        description=body.description,
        tags=body.tags,
        images=body.image_list(),
        url=body.url,
    )
    return redirect(request, portfolio_url(portfolio.title), "Portfolio added to your account.")


@router.get("/portfolios/{title}")
async def view_portfolio(
    title: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    portfolio = await get_portfolio_or_404(store, title)
    comments = await store.comments.list_in_order(portfolio.comment_ids or [])
    return page(
        request, view="view-portfolio",
        portfolio=portfolio_view(portfolio, comments),
        isOwner=portfolio.author_id == principal.id,
    )


@router.get("/portfolios/{title}/edit")
async def edit_portfolio_page(
    title: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    portfolio = await get_authored_portfolio(store, principal, title)
    return page(request, view="edit-portfolio", portfolio=portfolio_view(portfolio))


@router.patch("/portfolios/{title}")
@router.patch("/portfolios/{title}/edit")
async def edit_portfolio(
    title: str,
    body: PortfolioUpdate,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    portfolio = await get_authored_portfolio(store, principal, title)
    portfolio = await consistency.update_portfolio(
        store, portfolio,
        title=body.title,
        description=body.description,
        tags=body.tags,
        images=body.image_list(),
        url=body.url,
    )
    return redirect(request, portfolio_url(portfolio.title), "Portfolio has been updated.")
