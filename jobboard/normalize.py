"""
Pre-validation clean-up of raw request values.

Query strings collapse single-element lists into scalars; everything
here runs before schema validation so the schemas only ever see lists.
"""

from typing import Any, Dict, List, Mapping, Optional

# wire name -> accepted snake_case spelling
MULTI_VALUED_FIELDS = {
    "workmode": "work_mode",
    "EmpType": "emp_type",
    "salaryrange": "salary_range",
    "city": "city",
}
# optional; not defaulted when absent
EXPERIENCE_FIELD = "experience"


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


REMOTE_SYNS = {"remote", "fully remote", "wfh", "work from home"}
HYBRID_SYNS = {"hybrid", "flexible", "part-remote"}
ONSITE_SYNS = {"onsite", "on-site", "on site", "office", "in office"}


def normalize_work_mode(value: str) -> str:
    mode = normalize_text(value)
    if mode in REMOTE_SYNS:
        return "remote"
    if mode in HYBRID_SYNS:
        return "hybrid"
    if mode in ONSITE_SYNS:
        return "onsite"
    return mode


def as_list(value: Any) -> List[Any]:
    """None or blank string -> [], list/tuple/set -> list copy, anything else -> [value]."""
    if value is None:
        return []
    if isinstance(value, str) and not value.strip():
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def normalize_filter_request(raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Return a copy of the filter request with multi-valued fields as lists.

    Multi-valued fields come back under their wire names, as empty lists
    when absent. Every other key is passed through untouched and the
    input mapping is not mutated.
    """
    data = dict(raw or {})
    for wire, snake in MULTI_VALUED_FIELDS.items():
        value = data.pop(wire, None)
        if snake != wire and snake in data:
            snake_value = data.pop(snake)
            if value is None:
                value = snake_value
        data[wire] = as_list(value)
    if EXPERIENCE_FIELD in data:
        data[EXPERIENCE_FIELD] = as_list(data[EXPERIENCE_FIELD])
    return data
