"""CascadeInconsistency ORM — durable record of a partially failed account cascade.

Invariants:
    - One row per failed cascade step (comments or portfolios)
    - account_id refers to an account that no longer exists
    - resolved flips to True once an operator has reconciled the orphans

Design Decisions:
    - Stored in the database rather than only logged: operators can query
      unresolved rows and re-run the cleanup for exactly those accounts
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from showcase.db.base import Base


class CascadeInconsistency(Base):
    __tablename__ = "cascade_inconsistencies"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    account_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    step: Mapped[str] = mapped_column(String(20), nullable=False)
    detail: Mapped[str] = mapped_column(Text, nullable=False)
    resolved: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
