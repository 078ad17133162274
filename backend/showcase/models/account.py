"""Account ORM — the owning principal for every other resource.

Invariants:
    - id is the stable identity used by every ownership check
    - username is unique (storage-level unique index)
    - password_hash is only ever written by infrastructure/credentials.py
    - profile presence IS the "profile exists" flag; nothing else records it

Design Decisions:
    - friends is a JSON list of names: append-only, duplicates allowed, no
      referential integrity (a friend may later be deleted or renamed)
    - profile relationship cascades: a profile is embedded state of its account
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from showcase.db.base import Base


class Account(Base):
    """Registered user account."""
    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(30), nullable=False)
    friends: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    profile: Mapped["Profile"] = relationship(  # noqa: F821
        "Profile", back_populates="account", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )

    @property
    def has_profile(self) -> bool:
        return self.profile is not None
