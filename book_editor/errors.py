from __future__ import annotations

from typing import Optional


class BookEditorError(Exception):
    """Base class for errors raised by the engine."""


class FormatError(BookEditorError, ValueError):
    """The text cannot be decoded into a record collection."""

    def __init__(self, message: str, row: Optional[int] = None):
        super().__init__(message)
        self.row = row


class IndexOutOfRange(BookEditorError, IndexError):
    """A record index outside the current collection was addressed."""

    def __init__(self, index: int, length: int):
        super().__init__(f"record index {index} out of range for {length} records")
        self.index = index
        self.length = length


class UnknownColumn(BookEditorError, KeyError):
    def __init__(self, column: str):
        super().__init__(column)
        self.column = column

    def __str__(self) -> str:
        return f"unknown column {self.column!r}"


class InvalidPageSize(BookEditorError, ValueError):
    def __init__(self, size: int, allowed):
        super().__init__(f"page size {size} is not one of {tuple(allowed)}")
        self.size = size


class FieldCoercionWarning(UserWarning):
    """
    A field value could not be coerced to the column type.

    Not fatal: the decoder substitutes the column default and keeps the row.
    Instances are collected in the decode report rather than emitted.
    """

    def __init__(self, row: int, column: str, value: str, default=0):
        super().__init__(f"row {row}: {column} value {value!r} is not an integer")
        self.row = row
        self.column = column
        self.value = value
        self.default = default
