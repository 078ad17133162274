"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Ownership references (author_id, job_poster_id) are plain indexed columns:
      the store never cascades on its own, the consistency service does

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from showcase.models.account import Account  # noqa: F401
from showcase.models.profile import Profile  # noqa: F401
from showcase.models.portfolio import Portfolio  # noqa: F401
from showcase.models.comment import Comment  # noqa: F401
from showcase.models.job import Job  # noqa: F401
from showcase.models.cascade_inconsistency import CascadeInconsistency  # noqa: F401
