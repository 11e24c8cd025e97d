"""
Delimited-text codec for book records.

Responsibilities:
- encoding detection for uploaded bytes
- header-driven decoding with per-row tolerance
- always-quoted encoding in the fixed column order
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from charset_normalizer import from_bytes

from .errors import FieldCoercionWarning, FormatError
from .records import Record, coerce_year, stringify
from .rules import COLUMNS, CSV_DELIMITER, CSV_LINE_TERMINATOR, YEAR_COLUMN

logger = logging.getLogger(__name__)

BOM = "\ufeff"


@dataclass
class DecodeReport:
    rows: int = 0
    columns: List[str] = field(default_factory=list)
    warnings: List[FieldCoercionWarning] = field(default_factory=list)
    skipped: List[Tuple[int, str]] = field(default_factory=list)
    encoding: str = "utf-8"


def decode_bytes(raw: bytes) -> Tuple[str, str]:
    """
    Decode uploaded bytes to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is consumed, never carried into the text.
    - If decode fails, fall back to UTF-8 with replacement characters.

    Returns the text and the encoding actually used.
    """
    match = from_bytes(raw).best()
    decode_used = match.encoding if match is not None else "utf-8"

    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        logger.warning("Decoding upload as %s failed, falling back to utf-8", decode_used)
        decode_used = "utf-8"
        text = raw.decode("utf-8", errors="replace")

    return text, decode_used


def _is_blank(row: List[str]) -> bool:
    return not row or row == [""]


def _header_positions(header: List[str]) -> Dict[str, int]:
    positions: Dict[str, int] = {}
    for idx, name in enumerate(header):
        positions.setdefault(name.strip(), idx)
    return positions


def _build_record(row: List[str], positions: Dict[str, int], row_number: int,
                  report: DecodeReport) -> Record:
    record: Record = {}
    for column in COLUMNS:
        pos = positions.get(column)
        raw = row[pos] if pos is not None and pos < len(row) else ""
        if column == YEAR_COLUMN:
            year = coerce_year(raw)
            if year is None:
                if raw.strip():
                    report.warnings.append(FieldCoercionWarning(row_number, column, raw))
                year = 0
            record[column] = year
        else:
            record[column] = raw
    return record


def decode_with_report(text: str, skip_malformed: bool = True) -> Tuple[List[Record], DecodeReport]:
    """
    Parse delimited text into records.

    The first non-blank row is the header. Data rows longer than the header
    (with content in the extra cells) are malformed: skipped and reported, or
    fatal when skip_malformed is False. Short rows are padded with defaults.

    Nothing is returned until the whole text is decoded.
    """
    if text.startswith(BOM):
        text = text[len(BOM):]

    report = DecodeReport()
    records: List[Record] = []
    header = None
    positions: Dict[str, int] = {}

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=CSV_DELIMITER)
    try:
        for i, row in enumerate(reader):
            row_number = i + 1
            if _is_blank(row):
                continue

            if header is None:
                if not any(cell.strip() for cell in row):
                    raise FormatError("header row is empty", row=row_number)
                header = row
                positions = _header_positions(header)
                report.columns = [name.strip() for name in header]
                continue

            if len(row) > len(header) and any(cell.strip() for cell in row[len(header):]):
                reason = f"row_too_long: {len(row)} cells, expected {len(header)}"
                if not skip_malformed:
                    raise FormatError(reason, row=row_number)
                report.skipped.append((row_number, reason))
                continue

            records.append(_build_record(row, positions, row_number, report))
    except csv.Error as exc:
        raise FormatError(f"unreadable delimited text: {exc}") from exc

    if header is None:
        raise FormatError("missing header row")

    missing = [c for c in COLUMNS if c not in positions]
    if missing:
        logger.info("Columns absent from header, using defaults: %s", ", ".join(missing))

    report.rows = len(records)
    return records, report


def decode(text: str) -> List[Record]:
    records, _ = decode_with_report(text)
    return records


def encode(records: List[Record]) -> str:
    """Header row, then every record with every field quoted."""
    outp = io.StringIO(newline="")
    outp.write(CSV_DELIMITER.join(COLUMNS) + CSV_LINE_TERMINATOR)

    writer = csv.writer(
        outp,
        delimiter=CSV_DELIMITER,
        quoting=csv.QUOTE_ALL,
        lineterminator=CSV_LINE_TERMINATOR,
    )
    for record in records:
        writer.writerow([stringify(record.get(column, "")) for column in COLUMNS])

    return outp.getvalue()
