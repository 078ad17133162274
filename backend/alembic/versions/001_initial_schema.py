"""Initial schema — accounts, profiles, portfolios, comments, jobs, cascade_inconsistencies.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

Ownership columns (author_id, job_poster_id, portfolio_id) deliberately carry
no foreign key: account deletion cascades in the application, and a failed
cascade step must leave orphans behind rather than block the delete.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("password_hash", sa.String(100), nullable=False),
        sa.Column("phone_number", sa.String(30), nullable=False),
        sa.Column("friends", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_accounts_username", "accounts", ["username"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "account_id", UUID(as_uuid=True),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False, unique=True,
        ),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("purpose", sa.Text, nullable=True),
        sa.Column("skills", sa.JSON, nullable=False),
        sa.Column("profile_image", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "portfolios",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("author_id", UUID(as_uuid=True), nullable=False),
        sa.Column("author", sa.String(50), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("tags", sa.JSON, nullable=False),
        sa.Column("images", sa.JSON, nullable=False),
        sa.Column("url", sa.String(500), nullable=True),
        sa.Column("comment_ids", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_portfolios_author_id", "portfolios", ["author_id"], unique=True)
    op.create_index("ix_portfolios_title", "portfolios", ["title"], unique=True)

    op.create_table(
        "comments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("portfolio_id", UUID(as_uuid=True), nullable=False),
        sa.Column("author_id", UUID(as_uuid=True), nullable=False),
        sa.Column("author", sa.String(50), nullable=False),
        sa.Column("comment", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_comments_portfolio_id", "comments", ["portfolio_id"])
    op.create_index("ix_comments_author_id", "comments", ["author_id"])

    op.create_table(
        "jobs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("job_title", sa.String(200), nullable=False),
        sa.Column("company_name", sa.String(200), nullable=False),
        sa.Column("company_rating", sa.Float, nullable=True),
        sa.Column("job_description", sa.Text, nullable=False),
        sa.Column("job_skills", sa.JSON, nullable=False),
        sa.Column("project_types", sa.JSON, nullable=False),
        sa.Column("job_poster_id", UUID(as_uuid=True), nullable=False),
        sa.Column("people_applied", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_jobs_job_title", "jobs", ["job_title"], unique=True)
    op.create_index("ix_jobs_job_poster_id", "jobs", ["job_poster_id"])

    op.create_table(
        "cascade_inconsistencies",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("account_id", UUID(as_uuid=True), nullable=False),
        sa.Column("step", sa.String(20), nullable=False),
        sa.Column("detail", sa.Text, nullable=False),
        sa.Column("resolved", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_cascade_inconsistencies_account_id", "cascade_inconsistencies", ["account_id"],
    )


def downgrade() -> None:
    op.drop_table("cascade_inconsistencies")
    op.drop_table("jobs")
    op.drop_table("comments")
    op.drop_table("portfolios")
    op.drop_table("profiles")
    op.drop_table("accounts")
