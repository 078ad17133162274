"""Boundary Protocols — contracts between core/services and the storage shell.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by infrastructure/repositories.py via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass failing fakes
      to exercise partial-failure paths without patching SQLAlchemy
    - Entities typed as Any-like objects: the ORM models satisfy the attribute
      protocols in core/ownership.py without core importing them
"""

from collections.abc import Iterable
from typing import Any, Protocol
from uuid import UUID


class AccountRepository(Protocol):
    """Contract for account persistence."""
    def add(self, entity: Any) -> None: ...
    async def get(self, account_id: UUID) -> Any | None: ...
    async def get_by_username(self, username: str) -> Any | None: ...
    async def delete(self, account: Any) -> None: ...


class PortfolioRepository(Protocol):
    """Contract for portfolio persistence."""
    def add(self, entity: Any) -> None: ...
    async def get_by_title(self, title: str) -> Any | None: ...
    async def get_by_author(self, author_id: UUID) -> Any | None: ...
    async def list_by_author(self, author_id: UUID) -> list: ...
    async def list_by_ids(self, ids: Iterable[UUID]) -> list: ...
    async def delete_many(self, ids: Iterable[UUID]) -> int: ...


class CommentRepository(Protocol):
    """Contract for comment persistence."""
    def add(self, entity: Any) -> None: ...
    async def get(self, comment_id: UUID) -> Any | None: ...
    async def list_by_author(self, author_id: UUID) -> list: ...
    async def list_by_portfolios(self, portfolio_ids: Iterable[UUID]) -> list: ...
    async def delete(self, comment: Any) -> None: ...
    async def delete_many(self, ids: Iterable[UUID]) -> int: ...


class JobRepository(Protocol):
    """Contract for job persistence."""
    def add(self, entity: Any) -> None: ...
    async def get_by_title(self, job_title: str) -> Any | None: ...
    async def delete(self, job: Any) -> None: ...


class InconsistencyRepository(Protocol):
    """Contract for the cascade inconsistency log."""
    async def record(self, account_id: UUID, step: str, detail: str) -> Any: ...
    async def list_unresolved(self) -> list: ...
    async def mark_resolved(self, record_id: UUID) -> None: ...


class UnitOfWork(Protocol):
    """The repositories for one request plus their commit boundary."""
    accounts: AccountRepository
    portfolios: PortfolioRepository
    comments: CommentRepository
    jobs: JobRepository
    inconsistencies: InconsistencyRepository

    async def commit(self, conflict_message: str | None = None) -> None: ...
    async def rollback(self) -> None: ...
