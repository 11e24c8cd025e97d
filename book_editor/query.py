"""
Filter and sort pipeline over the current records.

A view is a list of record indices. Filter stages are pure predicates, so the
retained set does not depend on their order; sorting is stable and always
applied last. Nothing here raises on odd filter or sort combinations.
"""

from __future__ import annotations

from typing import Callable, Container, List, Optional, Sequence, Tuple

from .models import FilterSpec, SortSpec
from .records import Record, stringify, year_of
from .rules import COLUMNS, FALLBACK_YEAR_BOUNDS, YEAR_COLUMN

Predicate = Callable[[int], bool]


def matches_text(record: Record, needle: str) -> bool:
    """``needle`` must already be lowercase."""
    if not needle:
        return True
    return any(needle in stringify(record.get(column)).lower() for column in COLUMNS)


def active_predicates(records: Sequence[Record], spec: FilterSpec,
                      modified: Container[int]) -> List[Predicate]:
    """The enabled filter stages, in pipeline order."""
    stages: List[Predicate] = []

    needle = spec.text.lower()
    if needle:
        stages.append(lambda i: matches_text(records[i], needle))

    if spec.genre:
        genre = spec.genre
        stages.append(lambda i: records[i].get("Genre") == genre)

    # An unset bound is open; no stage runs when both are unset
    year_min, year_max = spec.year_min, spec.year_max
    if year_min is not None or year_max is not None:
        def in_year_range(i: int) -> bool:
            year = year_of(records[i])
            if year_min is not None and year < year_min:
                return False
            return year_max is None or year <= year_max

        stages.append(in_year_range)

    if spec.modified_only:
        stages.append(lambda i: i in modified)

    return stages


def filter_indices(records: Sequence[Record], spec: FilterSpec,
                   modified: Container[int]) -> List[int]:
    view = list(range(len(records)))
    for keep in active_predicates(records, spec, modified):
        view = [i for i in view if keep(i)]
    return view


def sort_key(column: str) -> Callable[[Record], object]:
    if column == YEAR_COLUMN:
        return year_of
    return lambda record: stringify(record.get(column))


def sort_indices(records: Sequence[Record], view: List[int], spec: SortSpec) -> List[int]:
    if not spec.key:
        return view
    key = sort_key(spec.key)
    # sorted() keeps equal keys in input order, reverse=True included
    return sorted(view, key=lambda i: key(records[i]), reverse=spec.direction == "desc")


def build_view(records: Sequence[Record], filter_spec: Optional[FilterSpec] = None,
               sort_spec: Optional[SortSpec] = None,
               modified: Container[int] = ()) -> Tuple[List[int], int]:
    """Filtered, ordered view of ``records`` and its length."""
    view = filter_indices(records, filter_spec or FilterSpec(), modified)
    view = sort_indices(records, view, sort_spec or SortSpec())
    return view, len(view)


def distinct_genres(records: Sequence[Record]) -> List[str]:
    return sorted({stringify(r.get("Genre")) for r in records} - {""})


def year_bounds(records: Sequence[Record]) -> Tuple[int, int]:
    """Smallest and largest positive year, as range hints for a year input."""
    years = [y for y in (year_of(r) for r in records) if y > 0]
    if not years:
        return FALLBACK_YEAR_BOUNDS
    return min(years), max(years)
