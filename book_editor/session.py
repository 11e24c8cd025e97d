"""
Session controller: the single owner of the loaded records and the view
configuration. The presentation layer drives it through the methods below and
reads results through the accessors; there is no change notification.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from .codec import DecodeReport, decode_bytes, decode_with_report, encode
from .errors import InvalidPageSize
from .generator import generate
from .models import Book, FilterSpec, PageRow, SessionState, SortSpec
from .pager import clamp_page, entry_range, page_window, paginate, total_pages
from .query import build_view, distinct_genres, year_bounds
from .records import Record
from .rules import DEFAULT_PAGE_SIZE, PAGE_SIZES
from .tracker import EditTracker

logger = logging.getLogger(__name__)


class Session:
    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE, skip_malformed: bool = True,
                 seed: Optional[int] = None):
        if page_size not in PAGE_SIZES:
            raise InvalidPageSize(page_size, PAGE_SIZES)
        self.skip_malformed = skip_malformed
        self.seed = seed
        self.last_report: Optional[DecodeReport] = None

        self._tracker = EditTracker([])
        self._filter = FilterSpec()
        self._sort = SortSpec()
        self._page_size = page_size
        self._page = 1
        self._view: Optional[List[int]] = None

    # ==================== Loading ====================

    def replace(self, records: List[Record], report: Optional[DecodeReport] = None) -> None:
        """Swap in a fully decoded collection as both original and current."""
        self._tracker = EditTracker(records)
        self.last_report = report
        self._page = 1
        self._invalidate()
        logger.info("Loaded %d records", len(records))
        if report is not None and (report.warnings or report.skipped):
            logger.warning(
                "Load completed with %d year warnings and %d skipped rows",
                len(report.warnings), len(report.skipped),
            )

    def load(self, text: str) -> DecodeReport:
        """
        Decode ``text`` and make it the session's collection.

        A FormatError propagates before any state is touched.
        """
        records, report = decode_with_report(text, skip_malformed=self.skip_malformed)
        self.replace(records, report)
        return report

    def decode_upload(self, raw: bytes) -> Tuple[List[Record], DecodeReport]:
        """Decode uploaded bytes under this session's policy without loading them."""
        text, encoding = decode_bytes(raw)
        records, report = decode_with_report(text, skip_malformed=self.skip_malformed)
        report.encoding = encoding
        return records, report

    def load_bytes(self, raw: bytes) -> DecodeReport:
        records, report = self.decode_upload(raw)
        self.replace(records, report)
        return report

    def sample(self, count: int, seed: Optional[int] = None) -> List[Record]:
        """Generate records under this session's seed policy without loading them."""
        return generate(count, seed=self.seed if seed is None else seed)

    def generate_sample(self, count: int, seed: Optional[int] = None) -> None:
        self.replace(self.sample(count, seed))
        logger.info("Generated %d sample records", count)

    # ==================== Editing ====================

    def edit_cell(self, index: int, column: str, value: Any) -> None:
        self._tracker.record_edit(index, column, value)
        self._invalidate()

    def reset_edits(self) -> None:
        count = self._tracker.modified_count()
        self._tracker.reset()
        self._page = 1
        self._invalidate()
        logger.info("Reset %d edited records", count)

    def export_text(self) -> str:
        return encode(self._tracker.current)

    # ==================== View configuration ====================

    def set_filter(self, spec: FilterSpec) -> None:
        self._filter = spec
        self._invalidate()
        self._page = clamp_page(self._page, self.total_pages)

    def set_sort(self, spec: SortSpec) -> None:
        self._sort = spec
        self._invalidate()
        self._page = clamp_page(self._page, self.total_pages)

    def toggle_sort(self, column: str) -> SortSpec:
        """Header click: ascending first, then flip while the key stays the same."""
        if self._sort.key == column and self._sort.direction == "asc":
            spec = SortSpec(key=column, direction="desc")
        else:
            spec = SortSpec(key=column, direction="asc")
        self.set_sort(spec)
        return spec

    def set_page_size(self, size: int) -> None:
        if size not in PAGE_SIZES:
            raise InvalidPageSize(size, PAGE_SIZES)
        self._page_size = size
        self._page = 1

    def set_page(self, page: int) -> None:
        self._page = clamp_page(page, self.total_pages)

    # ==================== Accessors ====================

    def _invalidate(self) -> None:
        self._view = None

    @property
    def tracker(self) -> EditTracker:
        return self._tracker

    @property
    def filter(self) -> FilterSpec:
        return self._filter

    @property
    def sort(self) -> SortSpec:
        return self._sort

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def view(self) -> List[int]:
        if self._view is None:
            self._view, _ = build_view(
                self._tracker.current, self._filter, self._sort, self._tracker.deltas
            )
        return self._view

    @property
    def total_count(self) -> int:
        return len(self._tracker)

    @property
    def filtered_count(self) -> int:
        return len(self.view)

    @property
    def modified_count(self) -> int:
        return self._tracker.modified_count()

    @property
    def total_pages(self) -> int:
        return total_pages(self.filtered_count, self._page_size)

    @property
    def current_page(self) -> int:
        # Edits can shrink a modified-only view under the stored page
        return clamp_page(self._page, self.total_pages)

    def page_indices(self) -> List[int]:
        indices, _ = paginate(self.view, self._page_size, self.current_page)
        return indices

    def page_rows(self) -> List[PageRow]:
        rows = []
        for index in self.page_indices():
            fields = self._tracker.modified_fields(index)
            rows.append(PageRow(
                index=index,
                record=Book(**self._tracker.current[index]),
                modified=self._tracker.is_record_modified(index),
                modified_fields=fields,
            ))
        return rows

    def is_record_modified(self, index: int) -> bool:
        return self._tracker.is_record_modified(index)

    def is_field_modified(self, index: int, column: str) -> bool:
        return self._tracker.is_field_modified(index, column)

    def genres(self) -> List[str]:
        return distinct_genres(self._tracker.current)

    def snapshot(self) -> SessionState:
        page = self.current_page
        pages = self.total_pages
        first, last = entry_range(page, self._page_size, self.filtered_count)
        return SessionState(
            total=self.total_count,
            filtered=self.filtered_count,
            modified=self.modified_count,
            page=page,
            page_size=self._page_size,
            total_pages=pages,
            page_window=page_window(page, pages),
            first_entry=first,
            last_entry=last,
            year_bounds=list(year_bounds(self._tracker.current)),
            filter=self._filter,
            sort=self._sort,
        )
