"""
Edit tracking between the originally loaded records and the edited ones.

A record index is in the delta set exactly when at least one of its fields
differs from the original as a string comparison.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from .errors import IndexOutOfRange, UnknownColumn
from .records import Record, copy_records, edited_value, stringify
from .rules import COLUMNS

logger = logging.getLogger(__name__)


class EditTracker:
    def __init__(self, original: List[Record]):
        self._original: List[Record] = copy_records(original)
        self._current: List[Record] = copy_records(self._original)
        self._deltas: Dict[int, Record] = {}

    def __len__(self) -> int:
        return len(self._current)

    @property
    def original(self) -> List[Record]:
        return self._original

    @property
    def current(self) -> List[Record]:
        return self._current

    @property
    def deltas(self) -> Mapping[int, Record]:
        return self._deltas

    def _check(self, index: int, column: Optional[str] = None) -> None:
        if not 0 <= index < len(self._current):
            raise IndexOutOfRange(index, len(self._current))
        if column is not None and column not in COLUMNS:
            raise UnknownColumn(column)

    def _differs(self, index: int, column: str) -> bool:
        return stringify(self._current[index].get(column)) != stringify(self._original[index].get(column))

    def record_edit(self, index: int, column: str, value: Any) -> None:
        self._check(index, column)
        record = self._current[index]
        record[column] = edited_value(column, value)

        if any(self._differs(index, c) for c in COLUMNS):
            self._deltas[index] = record
        else:
            self._deltas.pop(index, None)
        logger.debug("Edit %d.%s -> %r (modified=%s)", index, column, record[column], index in self._deltas)

    def is_field_modified(self, index: int, column: str) -> bool:
        self._check(index, column)
        return self._differs(index, column)

    def is_record_modified(self, index: int) -> bool:
        self._check(index)
        return index in self._deltas

    def modified_fields(self, index: int) -> List[str]:
        self._check(index)
        return [c for c in COLUMNS if self._differs(index, c)]

    def modified_indices(self) -> List[int]:
        return sorted(self._deltas)

    def modified_count(self) -> int:
        return len(self._deltas)

    def reset(self) -> None:
        self._current = copy_records(self._original)
        self._deltas.clear()
