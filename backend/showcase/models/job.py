"""Job ORM — a listing posted by an account that others can apply to.

Invariants:
    - job_title is unique (lookup key)
    - job_poster_id is the posting identity checked before edit/delete
    - people_applied behaves as an append-only set of account ids
    - job_skills and project_types hold at most 3 entries
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Float, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from showcase.db.base import Base


class Job(Base):
    """Job listing."""
    __tablename__ = "jobs"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    job_title: Mapped[str] = mapped_column(
        String(200), nullable=False, unique=True, index=True,
    )
    company_name: Mapped[str] = mapped_column(String(200), nullable=False)
    company_rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    job_description: Mapped[str] = mapped_column(Text, nullable=False)
    job_skills: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    project_types: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    job_poster_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    people_applied: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
