"""Resource Consistency — multi-document create/update/delete rules for all resources.

Invariants:
    - Create-with-uniqueness: usernames, portfolio titles and job titles are
      checked before insert AND guarded by unique indexes; the index catching a
      lost race surfaces as ConflictError, never as a 500
    - One portfolio per account: checked before insert, guarded by a unique
      index on portfolios.author_id
    - Comment append is idempotent: re-appending a comment id is a no-op
    - Bounded sequences (skills, tags, job skills, project types) are truncated
      to 3 at write time
    - Account deletion: the account (with its embedded profile) is deleted and
      committed first; authored comments and authored portfolios are removed in
      two further independent commits. A failure in either later step is
      rolled back, logged, recorded as a CascadeInconsistency, and does NOT
      fail the deletion

Design Decisions:
    - Functions take a UnitOfWork (core/repository_protocols.py), not a raw
      session: tests hand in failing fakes to drive partial-failure paths
    - Authorization is NOT done here; routes call core/ownership.py first
    - Concurrent edits are last-write-wins; no version tokens
"""

import logging
from dataclasses import dataclass, field
from uuid import UUID

from showcase.core.bounded import split_items
from showcase.core.domain_types import CascadeStep, Principal
from showcase.core.errors import ConflictError, ResourceNotFoundError
from showcase.core.references import append_reference, detach_references
from showcase.core.repository_protocols import UnitOfWork
from showcase.infrastructure.credentials import set_password
from showcase.models.account import Account
from showcase.models.comment import Comment
from showcase.models.job import Job
from showcase.models.portfolio import Portfolio
from showcase.models.profile import Profile

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "This user already exists. Please choose a different name."
PROFILE_EXISTS = "Profile already exists."
PORTFOLIO_EXISTS = "Portfolio already exists."
PORTFOLIO_LIMIT = "You already have a portfolio."
JOB_EXISTS = "Job already exists."


# ─── Accounts ────────────────────────────────────────────────────

async def register_account(
    store: UnitOfWork,
    *,
    username: str,
    password: str,
    phone_number: str,
    purpose: str | None = None,
    experience: str | None = None,
    profile_image: str | None = None,
) -> Account:
    """Create an account. Signup profile fields, when given, seed its profile."""
    if await store.accounts.get_by_username(username):
        raise ConflictError(USERNAME_TAKEN)
    account = Account(username=username, phone_number=phone_number, friends=[])
    await set_password(account, password)
    if purpose or experience or profile_image:
        account.profile = Profile(
            bio=experience, purpose=purpose,
            profile_image=profile_image, skills=[],
        )
    store.accounts.add(account)
    await store.commit(conflict_message=USERNAME_TAKEN)
    logger.info("Account registered", extra={"account_id": str(account.id)})
    return account


async def update_account(
    store: UnitOfWork,
    account: Account,
    *,
    username: str | None = None,
    phone_number: str | None = None,
) -> Account:
    """Edit account fields. A rename keeps denormalized author names in step."""
    renamed = username is not None and username != account.username
    if renamed and await store.accounts.get_by_username(username):
        raise ConflictError(USERNAME_TAKEN)
    if phone_number is not None:
        account.phone_number = phone_number
    if renamed:
        account.username = username
        portfolio = await store.portfolios.get_by_author(account.id)
        if portfolio is not None:
            portfolio.author = username
        for comment in await store.comments.list_by_author(account.id):
            comment.author = username
    await store.commit(conflict_message=USERNAME_TAKEN)
    return account


async def change_password(store: UnitOfWork, account: Account, password: str) -> bool:
    """Replace the credential. Returns False when the password did not change."""
    changed = await set_password(account, password)
    if changed:
        await store.commit()
        logger.info("Password changed", extra={"account_id": str(account.id)})
    return changed


async def add_friend(store: UnitOfWork, account: Account, name: str) -> list[str]:
    """Append a name to the friends list. Duplicates allowed, no reciprocity."""
    account.friends = [*(account.friends or []), name]
    await store.commit()
    return account.friends


# ─── Profiles ────────────────────────────────────────────────────

async def create_profile(
    store: UnitOfWork,
    account: Account,
    *,
    bio: str | None = None,
    purpose: str | None = None,
    skills: str | list[str] | None = None,
    profile_image: str | None = None,
) -> Profile:
    if account.profile is not None:
        raise ConflictError(PROFILE_EXISTS)
    profile = Profile(
        bio=bio, purpose=purpose,
        skills=split_items(skills), profile_image=profile_image,
    )
    account.profile = profile
    await store.commit(conflict_message=PROFILE_EXISTS)
    return profile


async def update_profile(
    store: UnitOfWork,
    account: Account,
    *,
    bio: str | None = None,
    purpose: str | None = None,
    skills: str | list[str] | None = None,
    profile_image: str | None = None,
) -> Profile:
    profile = account.profile
    if profile is None:
        raise ResourceNotFoundError("Profile", account.username)
    if bio is not None:
        profile.bio = bio
    if purpose is not None:
        profile.purpose = purpose
    if skills is not None:
        profile.skills = split_items(skills)
    if profile_image is not None:
        profile.profile_image = profile_image
    await store.commit()
    return profile


# ─── Portfolios ──────────────────────────────────────────────────

async def create_portfolio(
    store: UnitOfWork,
    principal: Principal,
    *,
    title: str,
    description: str,
    tags: str | list[str] | None = None,
    images: list[str] | None = None,
    url: str | None = None,
) -> Portfolio:
    """Create the principal's single portfolio under a system-unique title."""
    if await store.portfolios.get_by_author(principal.id):
        raise ConflictError(PORTFOLIO_LIMIT)
    if await store.portfolios.get_by_title(title):
        raise ConflictError(PORTFOLIO_EXISTS)
    portfolio = Portfolio(
        author_id=principal.id,
        author=principal.username,
        title=title,
        description=description,
        tags=split_items(tags),
        images=split_items(images),
        url=url,
        comment_ids=[],
    )
    store.portfolios.add(portfolio)
    await store.commit(conflict_message=PORTFOLIO_EXISTS)
    logger.info(
        f"Portfolio '{title}' created",
        extra={"account_id": str(principal.id), "resource": title},
    )
    return portfolio


async def update_portfolio(
    store: UnitOfWork,
    portfolio: Portfolio,
    *,
    title: str | None = None,
    description: str | None = None,
    tags: str | list[str] | None = None,
    images: list[str] | None = None,
    url: str | None = None,
) -> Portfolio:
    if title is not None and title != portfolio.title:
        if await store.portfolios.get_by_title(title):
            raise ConflictError(PORTFOLIO_EXISTS)
        portfolio.title = title
    if description is not None:
        portfolio.description = description
    if tags is not None:
        portfolio.tags = split_items(tags)
    if images is not None:
        portfolio.images = split_items(images)
    if url is not None:
        portfolio.url = url
    await store.commit(conflict_message=PORTFOLIO_EXISTS)
    return portfolio


# ─── Comments ────────────────────────────────────────────────────

async def add_comment(
    store: UnitOfWork, principal: Principal, portfolio: Portfolio, text: str,
) -> Comment:
    """Persist the comment, then append its reference to the portfolio.

    The two commits are not atomic; append_comment_reference is idempotent so
    a retry after a failure between them cannot duplicate the reference.
    """
    comment = Comment(
        portfolio_id=portfolio.id,
        author_id=principal.id,
        author=principal.username,
        comment=text,
    )
    store.comments.add(comment)
    await store.commit()
    await append_comment_reference(store, portfolio, comment.id)
    return comment


async def append_comment_reference(
    store: UnitOfWork, portfolio: Portfolio, comment_id: UUID,
) -> bool:
    refs, appended = append_reference(portfolio.comment_ids, comment_id)
    if not appended:
        logger.debug(
            f"Comment {comment_id} already referenced",
            extra={"resource": portfolio.title},
        )
        return False
    portfolio.comment_ids = refs
    await store.commit()
    return True


async def update_comment(store: UnitOfWork, comment: Comment, text: str) -> Comment:
    comment.comment = text
    await store.commit()
    return comment


async def delete_comment(
    store: UnitOfWork, portfolio: Portfolio | None, comment: Comment,
) -> None:
    """Delete the comment and detach it from its portfolio in one commit."""
    if portfolio is not None:
        portfolio.comment_ids = detach_references(portfolio.comment_ids, [comment.id])
    await store.comments.delete(comment)
    await store.commit()


# ─── Jobs ────────────────────────────────────────────────────────

async def create_job(
    store: UnitOfWork,
    principal: Principal,
    *,
    job_title: str,
    company_name: str,
    job_description: str,
    job_skills: str | list[str] | None = None,
    project_types: str | list[str] | None = None,
    company_rating: float | None = None,
) -> Job:
    if await store.jobs.get_by_title(job_title):
        raise ConflictError(JOB_EXISTS)
    job = Job(
        job_title=job_title,
        company_name=company_name,
        company_rating=company_rating,
        job_description=job_description,
        job_skills=split_items(job_skills),
        project_types=split_items(project_types),
        job_poster_id=principal.id,
        people_applied=[],
    )
    store.jobs.add(job)
    await store.commit(conflict_message=JOB_EXISTS)
    return job


async def update_job(
    store: UnitOfWork,
    job: Job,
    *,
    job_title: str | None = None,
    company_name: str | None = None,
    job_description: str | None = None,
    job_skills: str | list[str] | None = None,
    project_types: str | list[str] | None = None,
    company_rating: float | None = None,
) -> Job:
    if job_title is not None and job_title != job.job_title:
        if await store.jobs.get_by_title(job_title):
            raise ConflictError(JOB_EXISTS)
        job.job_title = job_title
    if company_name is not None:
        job.company_name = company_name
    if job_description is not None:
        job.job_description = job_description
    if job_skills is not None:
        job.job_skills = split_items(job_skills)
    if project_types is not None:
        job.project_types = split_items(project_types)
    if company_rating is not None:
        job.company_rating = company_rating
    await store.commit(conflict_message=JOB_EXISTS)
    return job


async def delete_job(store: UnitOfWork, job: Job) -> None:
    await store.jobs.delete(job)
    await store.commit()


async def apply_to_job(store: UnitOfWork, job: Job, principal: Principal) -> bool:
    """Add the principal to the applicant set. Returns False if already applied."""
    applicants, appended = append_reference(job.people_applied, principal.id)
    if appended:
        job.people_applied = applicants
        await store.commit()
    return appended


# ─── Account cascade ─────────────────────────────────────────────

@dataclass
class CascadeReport:
    """What an account deletion removed, and which cleanup steps failed."""
    account_id: UUID
    comments_deleted: int = 0
    portfolios_deleted: int = 0
    failed_steps: list[CascadeStep] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed_steps


async def delete_account(store: UnitOfWork, account: Account) -> CascadeReport:
    """Delete an account, then best-effort remove everything it authored."""
    account_id = account.id
    await store.accounts.delete(account)
    await store.commit()
    logger.info("Account deleted", extra={"account_id": str(account_id)})

    report = CascadeReport(account_id=account_id)
    await _run_cascade_steps(store, account_id, report)
    if report.complete:
        logger.info(
            f"Cascade complete: {report.comments_deleted} comment(s), "
            f"{report.portfolios_deleted} portfolio(s) removed",
            extra={"account_id": str(account_id)},
        )
    return report


async def _run_cascade_steps(
    store: UnitOfWork, account_id: UUID, report: CascadeReport,
) -> None:
    try:
        report.comments_deleted = await _delete_authored_comments(store, account_id)
    except Exception as e:
        await _record_partial_failure(store, account_id, CascadeStep.COMMENTS, e)
        report.failed_steps.append(CascadeStep.COMMENTS)

    try:
        report.portfolios_deleted = await _delete_authored_portfolios(store, account_id)
    except Exception as e:
        await _record_partial_failure(store, account_id, CascadeStep.PORTFOLIOS, e)
        report.failed_steps.append(CascadeStep.PORTFOLIOS)


async def _delete_authored_comments(store: UnitOfWork, account_id: UUID) -> int:
    comments = await store.comments.list_by_author(account_id)
    if not comments:
        return 0
    ids = [c.id for c in comments]
    parents = await store.portfolios.list_by_ids({c.portfolio_id for c in comments})
    for portfolio in parents:
        portfolio.comment_ids = detach_references(portfolio.comment_ids, ids)
    deleted = await store.comments.delete_many(ids)
    await store.commit()
    return deleted


async def _delete_authored_portfolios(store: UnitOfWork, account_id: UUID) -> int:
    portfolios = await store.portfolios.list_by_author(account_id)
    if not portfolios:
        return 0
    ids = [p.id for p in portfolios]
    attached = await store.comments.list_by_portfolios(ids)
    await store.comments.delete_many([c.id for c in attached])
    deleted = await store.portfolios.delete_many(ids)
    await store.commit()
    return deleted


async def _record_partial_failure(
    store: UnitOfWork, account_id: UUID, step: CascadeStep, exc: Exception,
) -> None:
    logger.error(
        f"Cascade step '{step.value}' failed; orphans remain: {exc}",
        extra={
            "account_id": str(account_id),
            "step": step.value,
            "error_code": "CASCADE_INCONSISTENCY",
        },
        exc_info=True,
    )
    try:
        await store.rollback()
        await store.inconsistencies.record(account_id, step.value, str(exc) or type(exc).__name__)
        await store.commit()
    except Exception as record_error:
        logger.error(
            f"Could not record cascade inconsistency: {record_error}",
            extra={"account_id": str(account_id), "step": step.value},
        )


async def reconcile_inconsistencies(store: UnitOfWork) -> int:
    """Re-run failed cascade steps. Returns how many records were resolved.

    A step that fails again is rolled back, logged and left unresolved; the
    remaining records are still attempted.
    """
    resolved = 0
    pending = [
        (row.id, row.account_id, row.step)
        for row in await store.inconsistencies.list_unresolved()
    ]
    for record_id, account_id, step in pending:
        try:
            if step == CascadeStep.COMMENTS.value:
                await _delete_authored_comments(store, account_id)
            elif step == CascadeStep.PORTFOLIOS.value:
                await _delete_authored_portfolios(store, account_id)
            await store.inconsistencies.mark_resolved(record_id)
            await store.commit()
        except Exception as e:
            await store.rollback()
            logger.error(
                f"Reconcile of cascade step '{step}' failed again: {e}",
                extra={
                    "account_id": str(account_id),
                    "step": step,
                    "error_code": "CASCADE_INCONSISTENCY",
                },
                exc_info=True,
            )
            continue
        resolved += 1
        logger.info(
            f"Reconciled cascade step '{step}'",
            extra={"account_id": str(account_id), "step": step},
        )
    return resolved
