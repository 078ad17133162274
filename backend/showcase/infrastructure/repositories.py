"""Repositories — plain persistence CRUD for accounts, portfolios, comments and jobs.

Invariants:
    - Every read/write/commit goes through bounded(): a silent store becomes a
      StoreUnavailableError (503) instead of a hung request
    - Repositories never commit on their own; Store.commit() is the unit-of-work
      boundary chosen by the service layer
    - A unique-index violation on commit is rolled back and surfaced as
      ConflictError when the caller names the conflict, DatabaseError otherwise
    - No authorization here: callers decide before they mutate

Design Decisions:
    - One Store per request wraps one AsyncSession; the individual repositories
      share it, so a multi-document operation commits atomically unless the
      service deliberately splits it (account cascade)
"""

import logging
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import select, delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.config import get_settings
from showcase.core.errors import ConflictError, DatabaseError
from showcase.infrastructure.database import bounded
from showcase.models.account import Account
from showcase.models.cascade_inconsistency import CascadeInconsistency
from showcase.models.comment import Comment
from showcase.models.job import Job
from showcase.models.portfolio import Portfolio

logger = logging.getLogger(__name__)


class _Repository:
    def __init__(self, db: AsyncSession, timeout_seconds: float):
        self.db = db
        self.timeout_seconds = timeout_seconds

    async def _io(self, awaitable, operation: str):
        return await bounded(awaitable, operation, self.timeout_seconds)

    async def _first(self, stmt, operation: str):
        result = await self._io(self.db.execute(stmt), operation)
        return result.scalar_one_or_none()

    async def _all(self, stmt, operation: str) -> list:
        result = await self._io(self.db.execute(stmt), operation)
        return list(result.scalars().all())

    def add(self, entity) -> None:
        self.db.add(entity)


class AccountRepository(_Repository):
    async def get(self, account_id: UUID) -> Account | None:
        return await self._first(
            select(Account).where(Account.id == account_id), "account.get",
        )

    async def get_by_username(self, username: str) -> Account | None:
        return await self._first(
            select(Account).where(Account.username == username),
            "account.get_by_username",
        )

    async def delete(self, account: Account) -> None:
        await self._io(self.db.delete(account), "account.delete")


class PortfolioRepository(_Repository):
    async def get_by_title(self, title: str) -> Portfolio | None:
        return await self._first(
            select(Portfolio).where(Portfolio.title == title),
            "portfolio.get_by_title",
        )

    async def get_by_author(self, author_id: UUID) -> Portfolio | None:
        return await self._first(
            select(Portfolio).where(Portfolio.author_id == author_id),
            "portfolio.get_by_author",
        )

    async def list_by_author(self, author_id: UUID) -> list[Portfolio]:
        return await self._all(
            select(Portfolio).where(Portfolio.author_id == author_id),
            "portfolio.list_by_author",
        )

    async def list_by_ids(self, ids: Iterable[UUID]) -> list[Portfolio]:
        wanted = list(ids)
        if not wanted:
            return []
        return await self._all(
            select(Portfolio).where(Portfolio.id.in_(wanted)),
            "portfolio.list_by_ids",
        )

    async def list_recent(self, limit: int = 50, offset: int = 0) -> list[Portfolio]:
        return await self._all(
            select(Portfolio)
            .order_by(Portfolio.created_at.desc())
            .limit(limit).offset(offset),
            "portfolio.list_recent",
        )

    async def delete_many(self, ids: Iterable[UUID]) -> int:
        wanted = list(ids)
        if not wanted:
            return 0
        result = await self._io(
            self.db.execute(delete(Portfolio).where(Portfolio.id.in_(wanted))),
            "portfolio.delete_many",
        )
        return result.rowcount or 0


class CommentRepository(_Repository):
    async def get(self, comment_id: UUID) -> Comment | None:
        return await self._first(
            select(Comment).where(Comment.id == comment_id), "comment.get",
        )

    async def list_in_order(self, refs: Iterable[str]) -> list[Comment]:
        """Load comments for a portfolio's reference sequence, keeping its order."""
        ordered = [UUID(r) for r in refs]
        if not ordered:
            return []
        found = await self._all(
            select(Comment).where(Comment.id.in_(ordered)), "comment.list_in_order",
        )
        by_id = {c.id: c for c in found}
        return [by_id[i] for i in ordered if i in by_id]

    async def list_by_author(self, author_id: UUID) -> list[Comment]:
        return await self._all(
            select(Comment).where(Comment.author_id == author_id),
            "comment.list_by_author",
        )

    async def list_by_portfolios(self, portfolio_ids: Iterable[UUID]) -> list[Comment]:
        wanted = list(portfolio_ids)
        if not wanted:
            return []
        return await self._all(
            select(Comment).where(Comment.portfolio_id.in_(wanted)),
            "comment.list_by_portfolios",
        )

    async def delete(self, comment: Comment) -> None:
        await self._io(self.db.delete(comment), "comment.delete")

    async def delete_many(self, ids: Iterable[UUID]) -> int:
        wanted = list(ids)
        if not wanted:
            return 0
        result = await self._io(
            self.db.execute(delete(Comment).where(Comment.id.in_(wanted))),
            "comment.delete_many",
        )
        return result.rowcount or 0


class JobRepository(_Repository):
    async def get_by_title(self, job_title: str) -> Job | None:
        return await self._first(
            select(Job).where(Job.job_title == job_title), "job.get_by_title",
        )

    async def list_recent(self, limit: int = 50, offset: int = 0) -> list[Job]:
        return await self._all(
            select(Job).order_by(Job.created_at.desc()).limit(limit).offset(offset),
            "job.list_recent",
        )

    async def delete(self, job: Job) -> None:
        await self._io(self.db.delete(job), "job.delete")


class InconsistencyRepository(_Repository):
    async def record(self, account_id: UUID, step: str, detail: str) -> CascadeInconsistency:
        row = CascadeInconsistency(account_id=account_id, step=step, detail=detail)
        self.db.add(row)
        return row

    async def list_unresolved(self) -> list[CascadeInconsistency]:
        return await self._all(
            select(CascadeInconsistency)
            .where(CascadeInconsistency.resolved.is_(False))
            .order_by(CascadeInconsistency.created_at),
            "inconsistency.list_unresolved",
        )

    async def mark_resolved(self, record_id: UUID) -> None:
        await self._io(
            self.db.execute(
                update(CascadeInconsistency)
                .where(CascadeInconsistency.id == record_id)
                .values(resolved=True)
            ),
            "inconsistency.mark_resolved",
        )


class Store:
    """Unit of work: the repositories for one request, sharing one session."""

    def __init__(self, db: AsyncSession, timeout_seconds: float | None = None):
        timeout = (
            timeout_seconds if timeout_seconds is not None
            else get_settings().io_timeout_seconds
        )
        self.db = db
        self.timeout_seconds = timeout
        self.accounts = AccountRepository(db, timeout)
        self.portfolios = PortfolioRepository(db, timeout)
        self.comments = CommentRepository(db, timeout)
        self.jobs = JobRepository(db, timeout)
        self.inconsistencies = InconsistencyRepository(db, timeout)

    async def commit(self, conflict_message: str | None = None) -> None:
        """Commit the unit of work. Unique-index violations become ConflictError."""
        try:
            await bounded(self.db.commit(), "commit", self.timeout_seconds)
        except IntegrityError as e:
            await self.rollback()
            if conflict_message:
                logger.warning(f"Unique constraint rejected write: {conflict_message}")
                raise ConflictError(conflict_message)
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", "commit")

    async def rollback(self) -> None:
        await bounded(self.db.rollback(), "rollback", self.timeout_seconds)
