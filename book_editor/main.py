import logging

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from . import config
from .codec import DecodeReport
from .errors import FormatError, IndexOutOfRange, InvalidPageSize, UnknownColumn
from .log_config import setup_logging
from .models import (
    EditRequest,
    FilterSpec,
    GenerateRequest,
    GenresResponse,
    HealthResponse,
    LoadReport,
    LoadResponse,
    PageRequest,
    PageResponse,
    PageRow,
    PageSizeRequest,
    ReportItem,
    ReportSummary,
    SessionState,
    SortSpec,
)
from .rules import COLUMNS, EXPORT_FILENAME
from .session import Session

settings = config.load()
setup_logging(settings.log_level, settings.log_file)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="book-csv-editor",
    description="In-memory book table with edit tracking, filtering, sorting and paging",
    version="0.1.0",
)
app.state.settings = settings
app.state.session = Session(
    page_size=settings.page_size,
    skip_malformed=settings.skip_malformed,
    seed=settings.seed,
)


def get_settings(request: Request) -> config.Settings:
    return request.app.state.settings


def get_session(request: Request) -> Session:
    return request.app.state.session


def _load_report(report: DecodeReport) -> LoadReport:
    warnings = [
        ReportItem(
            row=w.row,
            column=w.column,
            issue="year_not_integer",
            value=w.value,
            action=f"defaulted_to_{w.default}",
        )
        for w in report.warnings
    ]
    errors = [
        ReportItem(row=row, issue=reason, action="row_skipped")
        for row, reason in report.skipped
    ]
    return LoadReport(
        summary=ReportSummary(
            rows=report.rows,
            columns=report.columns,
            encoding=report.encoding,
            warnings=len(warnings),
            errors=len(errors),
        ),
        warnings=warnings,
        errors=errors,
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/load", response_model=LoadResponse)
async def load_csv(file: UploadFile = File(...), session: Session = Depends(get_session)):
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    try:
        records, report = await run_in_threadpool(session.decode_upload, raw)
    except FormatError as exc:
        logger.warning("Rejected upload %s: %s", file.filename, exc)
        raise HTTPException(status_code=422, detail=str(exc))

    session.replace(records, report)
    return LoadResponse(report=_load_report(report), state=session.snapshot())


@app.post("/generate", response_model=SessionState)
async def generate_sample(body: GenerateRequest, session: Session = Depends(get_session),
                          settings: config.Settings = Depends(get_settings)):
    count = settings.sample_count if body.count is None else body.count
    records = await run_in_threadpool(session.sample, count, body.seed)
    session.replace(records)
    logger.info("Generated %d sample records", count)
    return session.snapshot()


@app.get("/state", response_model=SessionState)
async def state(session: Session = Depends(get_session)):
    return session.snapshot()


@app.get("/page", response_model=PageResponse)
async def page(session: Session = Depends(get_session)):
    return PageResponse(rows=session.page_rows(), state=session.snapshot())


@app.get("/genres", response_model=GenresResponse)
async def genres(session: Session = Depends(get_session)):
    return GenresResponse(genres=session.genres())


@app.patch("/records/{index}", response_model=PageRow)
async def edit_record(index: int, body: EditRequest, session: Session = Depends(get_session)):
    try:
        session.edit_cell(index, body.column, body.value)
    except IndexOutOfRange as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except UnknownColumn as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    tracker = session.tracker
    return PageRow(
        index=index,
        record=tracker.current[index],
        modified=tracker.is_record_modified(index),
        modified_fields=tracker.modified_fields(index),
    )


@app.post("/reset", response_model=SessionState)
async def reset(session: Session = Depends(get_session)):
    session.reset_edits()
    return session.snapshot()


@app.get("/export")
async def export(session: Session = Depends(get_session)):
    return Response(
        content=session.export_text(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@app.put("/filter", response_model=SessionState)
async def set_filter(spec: FilterSpec, session: Session = Depends(get_session)):
    session.set_filter(spec)
    return session.snapshot()


@app.put("/sort", response_model=SessionState)
async def set_sort(spec: SortSpec, session: Session = Depends(get_session)):
    session.set_sort(spec)
    return session.snapshot()


@app.post("/sort/{column}/toggle", response_model=SessionState)
async def toggle_sort(column: str, session: Session = Depends(get_session)):
    if column not in COLUMNS:
        raise HTTPException(status_code=422, detail=f"unknown column {column!r}")
    session.toggle_sort(column)
    return session.snapshot()


@app.put("/page-size", response_model=SessionState)
async def set_page_size(body: PageSizeRequest, session: Session = Depends(get_session)):
    try:
        session.set_page_size(body.page_size)
    except InvalidPageSize as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return session.snapshot()


@app.put("/page", response_model=SessionState)
async def set_page(body: PageRequest, session: Session = Depends(get_session)):
    session.set_page(body.page)
    return session.snapshot()
