from __future__ import annotations

from typing import List, Literal, Optional, Union
from pydantic import BaseModel, Field, field_validator

from .rules import SAMPLE_COUNT

ColumnName = Literal["Title", "Author", "Genre", "PublishedYear", "ISBN"]
SortDirection = Literal["asc", "desc"]


class FilterSpec(BaseModel):
    text: str = ""
    genre: Optional[str] = Field(default=None, examples=["Fantasy"])
    year_min: Optional[int] = None
    year_max: Optional[int] = None
    modified_only: bool = False

    @field_validator("genre")
    @classmethod
    def _empty_genre_is_unset(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class SortSpec(BaseModel):
    key: Optional[ColumnName] = None
    direction: SortDirection = "asc"


class Book(BaseModel):
    Title: str = ""
    Author: str = ""
    Genre: str = ""
    # Edited years that are not integers are kept as typed
    PublishedYear: Union[int, str] = 0
    ISBN: str = ""


class PageRow(BaseModel):
    index: int
    record: Book
    modified: bool = False
    modified_fields: List[ColumnName] = Field(default_factory=list)


class SessionState(BaseModel):
    total: int = 0
    filtered: int = 0
    modified: int = 0
    page: int = 1
    page_size: int
    total_pages: int = 1
    page_window: List[int] = Field(default_factory=list)
    first_entry: int = 0
    last_entry: int = 0
    year_bounds: List[int] = Field(default_factory=list)
    filter: FilterSpec
    sort: SortSpec


class PageResponse(BaseModel):
    rows: List[PageRow]
    state: SessionState


class ReportSummary(BaseModel):
    rows: int = 0
    columns: List[str] = Field(default_factory=list)
    encoding: Optional[str] = None
    warnings: int = 0
    errors: int = 0


class ReportItem(BaseModel):
    row: Optional[int] = None
    column: Optional[str] = None
    issue: str
    value: Optional[str] = None
    action: str


class LoadReport(BaseModel):
    summary: ReportSummary
    warnings: List[ReportItem] = Field(default_factory=list)
    errors: List[ReportItem] = Field(default_factory=list)


class LoadResponse(BaseModel):
    report: LoadReport
    state: SessionState


class GenerateRequest(BaseModel):
    # Unset falls back to the configured sample count
    count: Optional[int] = Field(default=None, ge=0, le=1_000_000, examples=[SAMPLE_COUNT])
    seed: Optional[int] = None


class EditRequest(BaseModel):
    column: ColumnName
    value: Union[int, str]


class PageSizeRequest(BaseModel):
    page_size: int


class PageRequest(BaseModel):
    page: int


class GenresResponse(BaseModel):
    genres: List[str]


class HealthResponse(BaseModel):
    ok: bool = True
