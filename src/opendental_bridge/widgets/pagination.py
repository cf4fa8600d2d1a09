"""Page arithmetic for widget tables."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    number: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages


def page_count(total: int, page_size: int) -> int:
    """Number of pages for ``total`` rows; never less than one."""
    return max(1, math.ceil(total / page_size))


def clamp_page(page: int, total: int, page_size: int) -> int:
    """Pull a requested page back into ``[1, page_count]``.

    Used whenever the row count shrinks (e.g. a narrower search) so the
    view never points past the last page.
    """
    return min(max(page, 1), page_count(total, page_size))


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    number = clamp_page(page, len(items), page_size)
    start = (number - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        number=number,
        total_pages=page_count(len(items), page_size),
    )
