"""Record helpers shared by the codec, the tracker and the query pipeline."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Union

from .rules import COLUMNS, YEAR_COLUMN

Value = Union[str, int]
Record = Dict[str, Value]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def stringify(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def coerce_year(value: Any) -> Optional[int]:
    """
    Lenient integer parse: leading sign and digits win, the rest is ignored.

    Returns None when no integer prefix exists.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(stringify(value))
    if match is None:
        return None
    return int(match.group(1))


def year_of(record: Record) -> int:
    year = coerce_year(record.get(YEAR_COLUMN))
    return 0 if year is None else year


def edited_value(column: str, value: Any) -> Value:
    """
    Normalize a value typed into a cell.

    Year text in canonical integer form is stored as int; anything else is
    stored as given so no keystroke is lost.
    """
    if column == YEAR_COLUMN:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        text = stringify(value)
        try:
            number = int(text)
        except ValueError:
            return text
        return number if str(number) == text else text
    return stringify(value)


def make_record(**fields: Any) -> Record:
    """Build a record with every column present, in column order."""
    record: Record = {}
    for column in COLUMNS:
        if column == YEAR_COLUMN:
            record[column] = fields.get(column, 0)
        else:
            record[column] = fields.get(column, "")
    return record


def copy_records(records: Iterable[Record]) -> List[Record]:
    return [dict(record) for record in records]
