"""
SQLAlchemy translation of compiled job filters.

Responsibilities:
- Map Clause trees onto Job column expressions.
- Map OrderBy and Pagination onto ORDER BY / LIMIT / OFFSET.

Non-Responsibilities:
- No filter rules (see filters.py).
- No visibility policy.
"""

from typing import Iterable, List

from sqlalchemy import and_, false, or_, true
from sqlalchemy.orm import Query

from .database import Job
from .filters import AND, EQ, GTE, ICONTAINS, IN, LT, NE, OR, Clause, OrderBy, Pagination

FILTERABLE_COLUMNS = {
    "id": Job.id,
    "user_id": Job.user_id,
    "company_id": Job.company_id,
    "title": Job.title,
    "type": Job.type,
    "category": Job.category,
    "work_mode": Job.work_mode,
    "city": Job.city,
    "has_salary_range": Job.has_salary_range,
    "min_salary": Job.min_salary,
    "max_salary": Job.max_salary,
    "has_experience_range": Job.has_experience_range,
    "min_experience": Job.min_experience,
    "max_experience": Job.max_experience,
    "has_expiry_date": Job.has_expiry_date,
    "expiry_date": Job.expiry_date,
    "is_verified_job": Job.is_verified_job,
    "expired": Job.expired,
    "posted_at": Job.posted_at,
}


def _column(field: str):
    try:
        return FILTERABLE_COLUMNS[field]
    except KeyError:
        raise ValueError(f"Field is not filterable: {field}") from None


def to_expression(clause: Clause):
    """Translate one Clause (recursively for groups) to a SQL expression."""
    if clause.op == OR:
        children = [to_expression(c) for c in clause.value]
        return or_(*children) if children else false()
    if clause.op == AND:
        children = [to_expression(c) for c in clause.value]
        return and_(*children) if children else true()

    column = _column(clause.field)
    if clause.op == EQ:
        return column.is_(clause.value) if isinstance(clause.value, bool) else column == clause.value
    if clause.op == NE:
        return column != clause.value
    if clause.op == IN:
        return column.in_(list(clause.value))
    if clause.op == GTE:
        return column >= clause.value
    if clause.op == LT:
        return column < clause.value
    if clause.op == ICONTAINS:
        return column.icontains(clause.value, autoescape=True)
    raise ValueError(f"Unsupported operator: {clause.op}")


def build_where(clauses: Iterable[Clause]) -> List:
    return [to_expression(c) for c in clauses]


def build_order_by(order: OrderBy) -> List:
    """
    Primary key from the directive, then newest first, then id for stable pages.

    Rows without a value for the primary key (no salary range) sort last
    in either direction.
    """
    column = _column(order.field)
    primary = column.desc() if order.descending else column.asc()
    ordering = [primary.nulls_last()]
    if order.field != "posted_at":
        ordering.append(Job.posted_at.desc())
    ordering.append(Job.id.asc())
    return ordering


def apply_pagination(query: Query, window: Pagination) -> Query:
    return query.offset(window.offset).limit(window.limit)
