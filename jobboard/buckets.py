"""
Bucket tables for range filters.

Each label maps to a half-open interval [low, high); high is None for
the open-ended top bucket. Buckets within a table are disjoint.
"""

from typing import Dict, Optional, Tuple

Range = Tuple[int, Optional[int]]

LAKH = 100_000

# Annual salary in rupees
SALARY_BUCKETS: Dict[str, Range] = {
    "0-3L": (0, 3 * LAKH),
    "3-6L": (3 * LAKH, 6 * LAKH),
    "6-10L": (6 * LAKH, 10 * LAKH),
    "10-15L": (10 * LAKH, 15 * LAKH),
    "15-20L": (15 * LAKH, 20 * LAKH),
    "20L+": (20 * LAKH, None),
}

# Years of experience
EXPERIENCE_BUCKETS: Dict[str, Range] = {
    "0-1": (0, 1),
    "1-3": (1, 3),
    "3-5": (3, 5),
    "5-10": (5, 10),
    "10+": (10, None),
}


def bucket_range(table: Dict[str, Range], label: str) -> Range:
    """Look up a bucket label; unknown labels raise KeyError."""
    return table[label]
