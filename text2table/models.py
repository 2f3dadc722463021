from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from .delimiters import Delimiter


class OutputFormat(str, Enum):
    CSV = "csv"
    MD = "md"
    HTML = "html"
    JSON = "json"
    SQL = "sql"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]


_DESCRIPTIONS = {
    OutputFormat.CSV: "Comma Separated Values (.csv)",
    OutputFormat.MD: "Markdown (.md)",
    OutputFormat.HTML: "HTML (.html)",
    OutputFormat.JSON: "JSON (.json)",
    OutputFormat.SQL: "SQL insert statements (.sql)",
}

_MEDIA_TYPES = {
    OutputFormat.CSV: "text/csv",
    OutputFormat.MD: "text/markdown",
    OutputFormat.HTML: "text/html",
    OutputFormat.JSON: "application/json",
    OutputFormat.SQL: "application/sql",
}


class RenderedOutput(BaseModel):
    format: OutputFormat
    media_type: str
    sha256: str
    content: str


class ReportSummary(BaseModel):
    rows: int = 0
    columns: Optional[int] = Field(default=None, examples=[3])
    max_columns: int = 0
    ragged_rows: int = 0


class PolicyReport(BaseModel):
    quoted_fields: bool = False
    contiguous_delimiters: bool = False
    name: str


class ConversionReport(BaseModel):
    summary: ReportSummary
    delimiters: List[Delimiter] = Field(default_factory=list)
    policy: PolicyReport
    has_header: bool = False
    source: Dict[str, Any] = Field(default_factory=dict)


class ConvertResponse(BaseModel):
    output: RenderedOutput
    report: ConversionReport


class ErrorDetail(BaseModel):
    issue: str
    message: str
    row: Optional[int] = None
    value: Optional[str] = None


class HealthResponse(BaseModel):
    ok: bool = True
