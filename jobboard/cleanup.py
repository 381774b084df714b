"""
Expiry sweep for job postings.

Jobs with an expiry date strictly in the past are flipped to
``expired = True`` in one bulk update. The flag is never cleared here,
and already-expired rows are not touched, so repeated sweeps are no-ops.
Meant to be triggered on a schedule (see the ``sweep`` CLI command).
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from .database import Job
from .logger import get_logger


def sweep_expired_jobs(session: Session, now: Optional[datetime] = None) -> int:
    """
    Mark every job whose expiry date has passed as expired.

    Args:
        session: Open session; the caller commits
        now: Reference time (default: current local time)

    Returns:
        Number of jobs newly marked expired
    """
    now = now or datetime.now()
    result = session.execute(
        update(Job)
        .where(
            Job.has_expiry_date.is_(True),
            Job.expiry_date < now,
            Job.expired.is_(False),
        )
        .values(expired=True)
        .execution_options(synchronize_session=False)
    )
    swept = result.rowcount or 0
    get_logger().debug("Expiry sweep ran", cutoff=now.isoformat(), expired=swept)
    return swept
