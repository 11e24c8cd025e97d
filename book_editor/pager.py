"""Page arithmetic over a view. Out-of-range input is clamped, never rejected."""

from __future__ import annotations

from typing import List, Sequence, Tuple, TypeVar

from .rules import PAGE_WINDOW

T = TypeVar("T")


def total_pages(count: int, page_size: int) -> int:
    page_size = max(1, page_size)
    return max(1, -(-count // page_size))


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, page), max(1, pages))


def paginate(view: Sequence[T], page_size: int, page: int) -> Tuple[List[T], int]:
    page_size = max(1, page_size)
    pages = total_pages(len(view), page_size)
    page = clamp_page(page, pages)
    start = (page - 1) * page_size
    return list(view[start:start + page_size]), pages


def page_window(page: int, pages: int, width: int = PAGE_WINDOW) -> List[int]:
    """Up to ``width`` consecutive page numbers, kept around ``page``."""
    pages = max(1, pages)
    page = clamp_page(page, pages)
    width = min(max(1, width), pages)
    start = page - width // 2
    start = max(1, min(start, pages - width + 1))
    return list(range(start, start + width))


def entry_range(page: int, page_size: int, count: int) -> Tuple[int, int]:
    """1-based first and last entry shown on ``page``; (0, 0) when empty."""
    if count <= 0:
        return 0, 0
    page_size = max(1, page_size)
    page = clamp_page(page, total_pages(count, page_size))
    first = (page - 1) * page_size + 1
    return first, min(page * page_size, count)
