"""
Conversion pipeline: raw input -> Table -> rows -> rendered output + report.

Shared by the HTTP service and the CLI.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .delimiters import Delimiter
from .errors import ColumnCountError
from .models import OutputFormat
from .renderers import render
from .rules import DEFAULT_TABLE_NAME, OUTPUT_ENCODING
from .table import Table, TableBuilder

logger = logging.getLogger(__name__)


class ConversionOptions(BaseModel):
    output: OutputFormat = OutputFormat.CSV
    delimiters: List[Delimiter] = Field(default_factory=lambda: [Delimiter.SPACE], min_length=1)
    quoted_fields: bool = False
    contiguous_delimiters: bool = False
    has_header: bool = False
    table_name: str = DEFAULT_TABLE_NAME

    def builder(self) -> TableBuilder:
        return (
            TableBuilder()
            .delimiters(self.delimiters)
            .quoted_fields(self.quoted_fields)
            .contiguous_delimiters(self.contiguous_delimiters)
        )


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _summary(table: Table, rows: List[List[str]]) -> Dict[str, Any]:
    try:
        columns = table.infer_column_count()
    except ColumnCountError:
        columns = None

    ragged = 0
    if columns is not None:
        ragged = sum(1 for row in rows if len(row) != columns)

    return {
        "rows": len(rows),
        "columns": columns,
        "max_columns": max((len(row) for row in rows), default=0),
        "ragged_rows": ragged,
    }


def convert_table(table: Table, options: ConversionOptions) -> Dict[str, Any]:
    """
    Render an already built table.

    CannotParseLine and RenderError propagate to the caller.
    Returns a dict matching the API's ConvertResponse envelope.
    """
    rows = table.records()
    summary = _summary(table, rows)
    logger.info(
        "Split %d lines with %s policy, %s inferred columns",
        summary["rows"],
        table.policy.name,
        summary["columns"],
    )
    if summary["ragged_rows"]:
        logger.debug("%d rows differ from the inferred column count", summary["ragged_rows"])

    content = render(rows, options.output, has_header=options.has_header, table_name=options.table_name)

    return {
        "output": {
            "format": options.output,
            "media_type": options.output.media_type,
            "sha256": _sha256_hex(content.encode(OUTPUT_ENCODING)),
            "content": content,
        },
        "report": {
            "summary": summary,
            "delimiters": list(table.delimiters),
            "policy": {
                "quoted_fields": table.policy.quoted_fields,
                "contiguous_delimiters": table.policy.contiguous_delimiters,
                "name": table.policy.name,
            },
            "has_header": options.has_header,
            "source": table.source_report,
        },
    }


def convert_text(text: str, options: ConversionOptions) -> Dict[str, Any]:
    return convert_table(options.builder().from_text(text), options)


def convert_bytes(raw: bytes, options: ConversionOptions) -> Dict[str, Any]:
    table = options.builder().from_bytes(raw)
    encoding = table.source_report.get("encoding", {})
    if encoding.get("decode_fallback"):
        logger.warning("Input could not be decoded cleanly; undecodable bytes were replaced")
    else:
        logger.debug("Input decoded as %s", encoding.get("decode_used"))
    return convert_table(table, options)
