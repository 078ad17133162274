"""Portfolio ORM — a single showcase of work per account.

Invariants:
    - author_id is unique: one portfolio per account, enforced by the store as well
      as by the consistency service's pre-insert check
    - title is unique: it is the human-facing lookup key
    - tags and images hold at most 3 entries
    - comment_ids is the ordered comment-by-reference sequence; each id appears once

Design Decisions:
    - author_id has no foreign key: account deletion cascades at application level
      (services/consistency.py) so a partial failure leaves detectable orphans
      instead of a blocked delete
    - author denormalized for display only; never used for authorization
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from showcase.db.base import Base


class Portfolio(Base):
    """Portfolio of work samples owned by one account."""
    __tablename__ = "portfolios"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, unique=True, index=True,
    )
    author: Mapped[str] = mapped_column(String(50), nullable=False)
    title: Mapped[str] = mapped_column(
        String(200), nullable=False, unique=True, index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    comment_ids: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
