"""
Job listing query compiler.

Turns a validated JobQuerySchema into a store-neutral CompiledQuery:
a tuple of Clause records (ANDed), an OrderBy and a Pagination window.
Nothing here touches the database; repository.py translates clauses
into SQLAlchemy expressions.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .buckets import EXPERIENCE_BUCKETS, SALARY_BUCKETS, Range, bucket_range
from .schema import JobQuerySchema

EQ = "eq"
NE = "ne"
IN = "in"
GTE = "gte"
LT = "lt"
ICONTAINS = "icontains"
OR = "or"
AND = "and"

OPERATORS = {EQ, NE, IN, GTE, LT, ICONTAINS, OR, AND}


@dataclass(frozen=True)
class Clause:
    """
    One predicate node.

    Leaf ops (eq, ne, in, gte, lt, icontains) compare ``field`` with
    ``value``. Group ops (or, and) carry a tuple of child clauses in
    ``value`` and no field.
    """

    op: str
    field: Optional[str] = None
    value: Any = None

    def __post_init__(self):
        if self.op not in OPERATORS:
            raise ValueError(f"Unknown clause operator: {self.op}")


def eq(field: str, value: Any) -> Clause:
    return Clause(EQ, field, value)


def ne(field: str, value: Any) -> Clause:
    return Clause(NE, field, value)


def is_one_of(field: str, values: Iterable[Any]) -> Clause:
    return Clause(IN, field, tuple(values))


def any_of(*clauses: Clause) -> Clause:
    return Clause(OR, value=tuple(clauses))


def all_of(*clauses: Clause) -> Clause:
    return Clause(AND, value=tuple(clauses))


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = True


@dataclass(frozen=True)
class Pagination:
    offset: int
    limit: int


@dataclass(frozen=True)
class CompiledQuery:
    predicate: Tuple[Clause, ...]
    order_by: OrderBy
    pagination: Pagination


DEFAULT_SORT = "postedat_desc"

SORT_OPTIONS: Dict[str, OrderBy] = {
    "postedat_desc": OrderBy("posted_at", descending=True),
    "postedat_asc": OrderBy("posted_at", descending=False),
    "maxsalary_desc": OrderBy("max_salary", descending=True),
    "maxsalary_asc": OrderBy("max_salary", descending=False),
    "minsalary_desc": OrderBy("min_salary", descending=True),
    "minsalary_asc": OrderBy("min_salary", descending=False),
}


def visible_clauses() -> Tuple[Clause, ...]:
    """Publicly listable: approved and not expired."""
    return (eq("is_verified_job", True), eq("expired", False))


def range_clause(field: str, bucket: Range) -> Clause:
    low, high = bucket
    if high is None:
        return Clause(GTE, field, low)
    return all_of(Clause(GTE, field, low), Clause(LT, field, high))


def bucket_clause(
    labels: List[str], table: Dict[str, Range], field: str, gate: str
) -> Optional[Clause]:
    """
    OR together the ranges of the selected buckets on ``field``.

    Rows whose ``gate`` flag is false carry no meaningful value for
    the field and are never excluded.
    """
    if not labels:
        return None
    ranges = [range_clause(field, bucket_range(table, label)) for label in dict.fromkeys(labels)]
    return any_of(eq(gate, False), all_of(eq(gate, True), any_of(*ranges)))


def resolve_sort(sortby: Optional[str]) -> OrderBy:
    return SORT_OPTIONS.get((sortby or "").lower(), SORT_OPTIONS[DEFAULT_SORT])


def get_job_filters(query: JobQuerySchema) -> CompiledQuery:
    """
    Compile listing filters.

    Fields are ANDed; values inside a field are ORed. Empty lists put
    no constraint on their field.
    """
    predicate: List[Clause] = []

    if query.work_mode:
        predicate.append(is_one_of("work_mode", (m.value for m in query.work_mode)))
    if query.emp_type:
        predicate.append(is_one_of("type", (t.value for t in query.emp_type)))
    if query.city:
        predicate.append(is_one_of("city", query.city))

    salary = bucket_clause(query.salary_range, SALARY_BUCKETS, "min_salary", "has_salary_range")
    if salary is not None:
        predicate.append(salary)

    experience = bucket_clause(
        query.experience, EXPERIENCE_BUCKETS, "min_experience", "has_experience_range"
    )
    if experience is not None:
        predicate.append(experience)

    if query.search:
        predicate.append(Clause(ICONTAINS, "title", query.search))

    pagination = Pagination(offset=(query.page - 1) * query.limit, limit=query.limit)
    return CompiledQuery(tuple(predicate), resolve_sort(query.sortby), pagination)
