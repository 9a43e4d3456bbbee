"""Pagination rules shared by the dataset proxy and the dataset view."""

from __future__ import annotations

import math
from typing import Optional


LIMIT_CHOICES: tuple[int, ...] = (50, 100, 200, 500)


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for ``total`` rows, never less than one."""
    if limit <= 0:
        raise ValueError("limit must be > 0")
    return max(1, math.ceil(total / limit))


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, page), max(1, pages))


def parse_query_int(value: Optional[str], default: int) -> int:
    """Read a string-encoded integer query parameter.

    Absent, blank and malformed values all fall back to ``default``; no range
    check is applied here.
    """
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default
