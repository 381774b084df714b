"""
Read paths over the jobs table.

All functions take an open Session and return wire-shaped dicts, so
they must run inside the session scope that loaded the rows.
"""

from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from .database import Job
from .filters import CompiledQuery, visible_clauses
from .repository import apply_pagination, build_order_by, build_where
from .schema import dump_job

RECENT_JOBS_LIMIT = 6


def query_jobs(session: Session, compiled: CompiledQuery) -> Tuple[List[Dict], int]:
    """
    Run one page of the public listing plus the total match count.

    Both reads use the same predicate (visibility included) and the same
    session, so they see one snapshot; if either fails nothing is returned.
    """
    where = build_where(visible_clauses() + compiled.predicate)

    page = (
        session.query(Job)
        .options(joinedload(Job.company))
        .filter(*where)
        .order_by(*build_order_by(compiled.order_by))
    )
    jobs = apply_pagination(page, compiled.pagination).all()
    total = session.query(Job).filter(*where).count()

    return [dump_job(job) for job in jobs], total


def find_recent_jobs(session: Session, limit: int = RECENT_JOBS_LIMIT) -> List[Dict]:
    """Newest visible jobs."""
    jobs = (
        session.query(Job)
        .options(joinedload(Job.company))
        .filter(*build_where(visible_clauses()))
        .order_by(Job.posted_at.desc(), Job.id.asc())
        .limit(limit)
        .all()
    )
    return [dump_job(job) for job in jobs]


def find_job_by_id(session: Session, job_id: str) -> Optional[Dict]:
    """A single non-expired job, or None."""
    job = (
        session.query(Job)
        .options(joinedload(Job.company))
        .filter(Job.id == job_id, Job.expired.is_(False))
        .first()
    )
    return dump_job(job) if job is not None else None


def find_cities(session: Session) -> List[str]:
    """Distinct cities of publicly visible jobs, alphabetical."""
    rows = (
        session.query(Job.city)
        .filter(*build_where(visible_clauses()))
        .distinct()
        .order_by(Job.city.asc())
        .all()
    )
    return [city for (city,) in rows]
