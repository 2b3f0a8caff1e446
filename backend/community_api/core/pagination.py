"""Pagination: page parsing, offsets and the `meta` block of list responses.

Invariants:
    - PAGE_SIZE is fixed at 10
    - Pages are 1-indexed; anything non-numeric, non-finite or falsy parses to 1
    - Numeric text is read like a number literal ("2.5", "1e1") and truncated
    - meta.page is clamped to >= 1 and meta.pages == ceil(total / PAGE_SIZE)
"""

import math
from dataclasses import dataclass
from typing import Any

PAGE_SIZE = 10


@dataclass(frozen=True)
class PageRequest:
    page: int

    @property
    def offset(self) -> int:
        return 0 if self.page <= 1 else (self.page - 1) * PAGE_SIZE

    @property
    def limit(self) -> int:
        return PAGE_SIZE


def parse_page(raw: Any) -> PageRequest:
    """Turn a raw query value into a PageRequest. Garbage means page 1."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        value = 0.0
    page = int(value) if math.isfinite(value) else 0
    return PageRequest(page=page or 1)


def page_meta(total: int, request: PageRequest) -> dict[str, int]:
    return {
        "total": total,
        "pages": math.ceil(total / PAGE_SIZE),
        "page": max(request.page, 1),
    }
