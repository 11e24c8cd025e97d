# Settings for the book editor service. Values are environment-driven,
# with safe defaults.
#
# Example env:
#   BOOK_EDITOR_LOG_LEVEL=DEBUG
#   BOOK_EDITOR_LOG_FILE=logs/book_editor.log
#   BOOK_EDITOR_SAMPLE_COUNT=10000
#   BOOK_EDITOR_PAGE_SIZE=50
#   BOOK_EDITOR_SKIP_MALFORMED=1
#   BOOK_EDITOR_SEED=42

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .rules import DEFAULT_PAGE_SIZE, PAGE_SIZES, SAMPLE_COUNT

__all__ = ["Settings", "load"]


def _parse_bool(val: Optional[str], default: bool = False) -> bool:
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def _parse_int(env: str, default: int) -> int:
    try:
        return int(os.getenv(env, str(default)))
    except ValueError:
        return default


def _parse_optional_int(env: str) -> Optional[int]:
    raw = os.getenv(env)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_file: Optional[str] = None
    sample_count: int = SAMPLE_COUNT
    page_size: int = DEFAULT_PAGE_SIZE
    skip_malformed: bool = True
    seed: Optional[int] = None


def load() -> Settings:
    page_size = _parse_int("BOOK_EDITOR_PAGE_SIZE", DEFAULT_PAGE_SIZE)
    if page_size not in PAGE_SIZES:
        page_size = DEFAULT_PAGE_SIZE

    sample_count = _parse_int("BOOK_EDITOR_SAMPLE_COUNT", SAMPLE_COUNT)
    if sample_count < 0:
        sample_count = SAMPLE_COUNT

    return Settings(
        log_level=os.getenv("BOOK_EDITOR_LOG_LEVEL", "INFO").upper(),
        log_file=os.getenv("BOOK_EDITOR_LOG_FILE") or None,
        sample_count=sample_count,
        page_size=page_size,
        skip_malformed=_parse_bool(os.getenv("BOOK_EDITOR_SKIP_MALFORMED"), True),
        seed=_parse_optional_int("BOOK_EDITOR_SEED"),
    )
