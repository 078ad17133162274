"""View Documents — JSON renderings of domain entities and redirect helpers.

Invariants:
    - password_hash never appears in any view
    - portfolioExists / profileExists are computed from presence, never stored
    - Every view carries the caller's pending flash messages
"""

from urllib.parse import quote

from fastapi import Request, status
from fastapi.responses import RedirectResponse

from showcase.api.session_gate import flash, pop_flashes
from showcase.core.domain_types import FlashCategory


def path_segment(value: str) -> str:
    return quote(value, safe="")


def redirect(request: Request, url: str, message: str | None = None) -> RedirectResponse:
    """303 to the canonical view, queueing an info flash when given."""
    if message:
        flash(request, message, FlashCategory.INFO)
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def page(request: Request, **content) -> dict:
    return {**content, "flashes": pop_flashes(request)}


def profile_view(profile) -> dict | None:
    if profile is None:
        return None
    return {
        "bio": profile.bio,
        "purpose": profile.purpose,
        "skills": list(profile.skills or []),
        "profileImage": profile.profile_image,
    }


def account_view(account, portfolio=None) -> dict:
    return {
        "id": str(account.id),
        "username": account.username,
        "phoneNumber": account.phone_number,
        "createdAt": account.created_at.isoformat(),
        "friendsList": list(account.friends or []),
        "profileExists": account.profile is not None,
        "profile": profile_view(account.profile),
        "portfolioExists": portfolio is not None,
        "portfolio": portfolio_view(portfolio) if portfolio is not None else None,
    }


def portfolio_view(portfolio, comments: list | None = None) -> dict:
    view = {
        "id": str(portfolio.id),
        "title": portfolio.title,
        "author": portfolio.author,
        "authorId": str(portfolio.author_id),
        "description": portfolio.description,
        "tags": list(portfolio.tags or []),
        "images": list(portfolio.images or []),
        "url": portfolio.url,
        "commentIds": list(portfolio.comment_ids or []),
        "createdAt": portfolio.created_at.isoformat(),
    }
    if comments is not None:
        view["comments"] = [comment_view(c) for c in comments]
    return view


def comment_view(comment) -> dict:
    return {
        "id": str(comment.id),
        "author": comment.author,
        "authorId": str(comment.author_id),
        "portfolioId": str(comment.portfolio_id),
        "comment": comment.comment,
        "createdAt": comment.created_at.isoformat(),
    }


def job_view(job) -> dict:
    return {
        "id": str(job.id),
        "jobTitle": job.job_title,
        "companyName": job.company_name,
        "companyRating": job.company_rating,
        "jobDescription": job.job_description,
        "jobSkills": list(job.job_skills or []),
        "projectTypes": list(job.project_types or []),
        "jobPosterID": str(job.job_poster_id),
        "peopleApplied": list(job.people_applied or []),
        "createdAt": job.created_at.isoformat(),
    }
