"""Permissive page/limit parsing and page arithmetic."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
# Larger values fall back to the default.
MAX_VALUE = 2**31 - 1

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """Parse the leading integer of ``raw``; fall back to ``default``.

    ``"3"`` -> 3, ``"2abc"`` -> 2, ``"1.5"`` -> 1. Absent, non-numeric, zero,
    negative and out-of-range values all give ``default``; nothing is ever
    rejected.
    """
    if raw is None:
        return default
    match = _INT_PREFIX.match(raw)
    if not match:
        return default
    value = int(match.group(1))
    return value if 1 <= value <= MAX_VALUE else default


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_args(cls, page: Optional[str], limit: Optional[str]) -> "PageRequest":
        return cls(
            page=parse_positive_int(page, DEFAULT_PAGE),
            limit=parse_positive_int(limit, DEFAULT_LIMIT),
        )

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)
