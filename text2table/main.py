import logging
from typing import List, Optional

from fastapi import FastAPI, UploadFile, File, HTTPException, Query

from .convert import ConversionOptions, convert_bytes
from .delimiters import Delimiter
from .errors import CannotParseLine, RenderError, UnsupportedFileError
from .logging_config import setup_logging
from .models import ConvertResponse, ErrorDetail, HealthResponse, OutputFormat
from .rules import ALLOWED_EXTENSIONS
from .settings import settings

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Convert loosely delimited plain-text tables into CSV, Markdown, HTML, SQL or JSON",
    version=settings.VERSION,
)


def _check_filename(filename: Optional[str]) -> None:
    if not filename or not filename.lower().endswith(ALLOWED_EXTENSIONS):
        raise UnsupportedFileError(filename or "", ALLOWED_EXTENSIONS)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/convert", response_model=ConvertResponse)
async def convert(
    file: UploadFile = File(...),
    output: Optional[OutputFormat] = Query(default=None),
    delimiters: Optional[List[Delimiter]] = Query(default=None),
    quoted_fields: bool = False,
    contiguous_delimiters: bool = False,
    has_header: bool = False,
    table_name: Optional[str] = Query(default=None, min_length=1),
):
    try:
        _check_filename(file.filename)
    except UnsupportedFileError as exc:
        raise HTTPException(
            status_code=422,
            detail=ErrorDetail(issue="unsupported_file", message=str(exc), value=exc.filename).model_dump(),
        )

    raw = await file.read()
    if len(raw) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"Upload exceeds {settings.MAX_UPLOAD_BYTES} bytes")

    options = ConversionOptions(
        output=output or settings.DEFAULT_OUTPUT,
        delimiters=delimiters or settings.DEFAULT_DELIMITERS,
        quoted_fields=quoted_fields,
        contiguous_delimiters=contiguous_delimiters,
        has_header=has_header,
        table_name=table_name or settings.SQL_TABLE_NAME,
    )
    logger.info("Converting %s to %s", file.filename, options.output.value)

    try:
        return convert_bytes(raw, options)
    except CannotParseLine as exc:
        logger.info("Rejected %s: %s", file.filename, exc)
        raise HTTPException(
            status_code=422,
            detail=ErrorDetail(
                issue="cannot_parse_line",
                message=str(exc),
                row=exc.line_number,
                value=exc.line,
            ).model_dump(),
        )
    except RenderError as exc:
        logger.info("Rejected %s: %s", file.filename, exc)
        raise HTTPException(
            status_code=422,
            detail=ErrorDetail(issue="render_error", message=str(exc)).model_dump(),
        )
