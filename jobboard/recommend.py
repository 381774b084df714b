"""
Related-job recommendations with a recency fallback.

Primary: newest visible jobs in the reference job's category.
Fallback, only when the primary set is empty: newest non-expired jobs of
any category. The fallback does not require verification; that mirrors
the behaviour of the listing this replaced and is pending product review.
"""

from typing import Dict, List, Tuple

from sqlalchemy.orm import Session, joinedload

from .database import Job
from .filters import eq, ne, visible_clauses
from .repository import build_where
from .schema import dump_job

RECOMMENDATION_LIMIT = 3


def _newest(session: Session, clauses, limit: int) -> List[Job]:
    return (
        session.query(Job)
        .options(joinedload(Job.company))
        .filter(*build_where(clauses))
        .order_by(Job.posted_at.desc(), Job.id.asc())
        .limit(limit)
        .all()
    )


def recommend_jobs(
    session: Session, job_id: str, category: str, limit: int = RECOMMENDATION_LIMIT
) -> Tuple[List[Dict], bool]:
    """
    Return up to ``limit`` jobs related to ``job_id``.

    Returns:
        (jobs, used_fallback)
    """
    same_category = visible_clauses() + (eq("category", category), ne("id", job_id))
    jobs = _newest(session, same_category, limit)
    if jobs:
        return [dump_job(job) for job in jobs], False

    recent = (eq("expired", False), ne("id", job_id))
    return [dump_job(job) for job in _newest(session, recent, limit)], True
