"""Job Routes — post, browse, edit, delete and apply to job listings.

Invariants:
    - Every route requires an authenticated session
    - Edit/delete require posting identity (job_poster_id); an unknown title
      on those routes is Forbidden, same as a non-poster
    - Applying is idempotent: applying twice leaves one entry
"""

from fastapi import APIRouter, Depends, Query, Request

from showcase.api.session_gate import get_store, require_principal
from showcase.api.views import job_view, page, path_segment, redirect
from showcase.core.domain_types import Principal
from showcase.core.errors import ResourceNotFoundError
from showcase.core.ownership import check_posting_identity, enforce
from showcase.infrastructure.repositories import Store
from showcase.models.job import Job
from showcase.schemas.job import JobCreate, JobUpdate
from showcase.services import consistency

router = APIRouter(tags=["jobs"])


def _job_url(job_title: str) -> str:
    return f"/jobs/{path_segment(job_title)}"


async def _get_job_or_404(store: Store, job_title: str) -> Job:
    job = await store.jobs.get_by_title(job_title)
    if job is None:
        raise ResourceNotFoundError("Job", job_title)
    return job


async def _get_posted_job(store: Store, principal: Principal, job_title: str) -> Job:
    job = await store.jobs.get_by_title(job_title)
    enforce(check_posting_identity(principal, job), principal, f"job:{job_title}")
    return job


@router.get("/jobs")
async def list_jobs(
    request: Request,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    jobs = await store.jobs.list_recent(limit=limit, offset=offset)
    return page(
        request, view="jobs",
        jobs=[job_view(j) for j in jobs],
        pagination={"limit": limit, "offset": offset},
    )


@router.get("/add_job")
async def add_job_page(
    request: Request, principal: Principal = Depends(require_principal),
):
    return page(request, view="add-job")


@router.post("/add_job")
async def add_job(
    body: JobCreate,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    job = await consistency.create_job(
        store, principal,
        job_title=body.job_title,
        company_name=body.company_name,
        job_description=body.job_description,
        job_skills=body.job_skills,
        project_types=body.project_types,
        company_rating=body.company_rating,
    )
    return redirect(request, _job_url(job.job_title), "Job posted.")


@router.get("/jobs/{job_title}")
async def view_job(
    job_title: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    job = await _get_job_or_404(store, job_title)
    return page(
        request, view="view-job",
        job=job_view(job),
        isPoster=job.job_poster_id == principal.id,
        hasApplied=str(principal.id) in (job.people_applied or []),
    )


@router.get("/jobs/{job_title}/edit_job")
async def edit_job_page(
    job_title: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    job = await _get_posted_job(store, principal, job_title)
    return page(request, view="edit-job", job=job_view(job))


@router.patch("/jobs/{job_title}/edit_job")
async def edit_job(
    job_title: str,
    body: JobUpdate,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    job = await _get_posted_job(store, principal, job_title)
    job = await consistency.update_job(
        store, job,
        job_title=body.job_title,
        company_name=body.company_name,
        job_description=body.job_description,
        job_skills=body.job_skills,
        project_types=body.project_types,
        company_rating=body.company_rating,
    )
    return redirect(request, _job_url(job.job_title), "Job has been updated.")


@router.delete("/jobs/{job_title}")
async def delete_job(
    job_title: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    job = await _get_posted_job(store, principal, job_title)
    await consistency.delete_job(store, job)
    return redirect(request, "/jobs", "Job has been deleted.")


@router.patch("/job/{job_title}/applied")
async def apply_to_job(
    job_title: str,
    request: Request,
    principal: Principal = Depends(require_principal),
    store: Store = Depends(get_store),
):
    job = await _get_job_or_404(store, job_title)
    applied = await consistency.apply_to_job(store, job, principal)
    message = "Application sent." if applied else "You have already applied to this job."
    return redirect(request, _job_url(job.job_title), message)
