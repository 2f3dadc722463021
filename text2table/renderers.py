"""
Output renderers.

Every renderer takes the rows produced by Table.records() and returns text.
When has_header is set the first row supplies the column names.
"""

from __future__ import annotations

import csv
import html
import io
import json
import re
from typing import Any, Dict, List, Sequence

from .errors import EmptyContents, InvalidTableName
from .models import OutputFormat
from .rules import DEFAULT_TABLE_NAME, MIN_COLUMN_WIDTH, UNKNOWN_COLUMN

Rows = Sequence[Sequence[str]]

# plain or schema-qualified identifier, e.g. people or hr.people
SQL_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?")


def _num_columns(rows: Rows) -> int:
    return max((len(row) for row in rows), default=0)


def _split_header(rows: Rows, has_header: bool) -> tuple[Sequence[str] | None, Rows]:
    if not has_header:
        return None, rows
    if not rows:
        raise EmptyContents()
    return rows[0], rows[1:]


def render_csv(rows: Rows, has_header: bool = False) -> str:
    # the header row is written like any other row
    outp = io.StringIO(newline="")
    writer = csv.writer(outp, delimiter=",", lineterminator="\n")
    for row in rows:
        writer.writerow(row)
    return outp.getvalue()


def _markdown_row(values: Sequence[str], widths: Sequence[int]) -> str:
    cells = []
    for i, width in enumerate(widths):
        value = values[i] if i < len(values) else ""
        cells.append(f" {value:<{width}} ")
    return "|" + "|".join(cells) + "|"


def _markdown_fill_row(char: str, widths: Sequence[int]) -> str:
    return "|" + "|".join(f" {char * width} " for width in widths) + "|"


def render_markdown(rows: Rows, has_header: bool = False) -> str:
    """
    Render a Markdown table.

    Without a header the heading cells are filled with "?". Short rows are
    padded with empty cells so every line has the same number of columns.
    """
    header, body = _split_header(rows, has_header)

    widths = [MIN_COLUMN_WIDTH] * _num_columns(rows)
    for row in rows:
        for i, value in enumerate(row):
            widths[i] = max(widths[i], len(value))

    if header is not None:
        heading = _markdown_row(header, widths)
    else:
        heading = _markdown_fill_row(UNKNOWN_COLUMN, widths)
    separator = _markdown_fill_row("-", widths)
    contents = "\n".join(_markdown_row(row, widths) for row in body)

    return f"{heading}\n{separator}\n{contents}\n"


def render_html(rows: Rows, has_header: bool = False) -> str:
    header, body = _split_header(rows, has_header)

    parts = ["<table>"]
    if header is not None:
        cells = "".join(f"<th>{html.escape(value)}</th>" for value in header)
        parts.append(f"<thead><tr>{cells}</tr></thead>")
    parts.append("<tbody>")
    for row in body:
        cells = "".join(f"<td>{html.escape(value)}</td>" for value in row)
        parts.append(f"<tr>{cells}</tr>")
    parts.append("</tbody>")
    parts.append("</table>")
    return "".join(parts) + "\n"


def _sql_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def render_sql(rows: Rows, has_header: bool = False, table_name: str = DEFAULT_TABLE_NAME) -> str:
    """Render one INSERT statement with a VALUES tuple per row."""
    if not SQL_IDENTIFIER.fullmatch(table_name):
        raise InvalidTableName(table_name)

    header, body = _split_header(rows, has_header)
    if header is not None:
        columns = list(header)
    else:
        columns = [UNKNOWN_COLUMN] * _num_columns(rows)

    values = ",\n".join(
        "(" + ",".join(_sql_literal(value) for value in row) + ")" for row in body
    )
    return f"INSERT INTO {table_name}\n({','.join(columns)})\nVALUES\n{values};\n"


def _json_keys(header: Sequence[str], width: int) -> List[str]:
    """
    One unique key per column.

    Empty or repeated header names, and columns past the end of the header,
    are named column_<n> (1-based), suffixed further if that name is taken.
    """
    keys: List[str] = []
    used = set()
    for i in range(width):
        key = header[i] if i < len(header) else ""
        if not key or key in used:
            key = f"column_{i + 1}"
            n = 2
            while key in used or key in header[i + 1:]:
                key = f"column_{i + 1}_{n}"
                n += 1
        used.add(key)
        keys.append(key)
    return keys


def _json_record(keys: Sequence[str], header_width: int, row: Sequence[str]) -> Dict[str, Any]:
    record: Dict[str, Any] = {}
    for i in range(max(header_width, len(row))):
        record[keys[i]] = row[i] if i < len(row) else None
    return record


def render_json(rows: Rows, has_header: bool = False) -> str:
    header, body = _split_header(rows, has_header)
    if header is None:
        data: List[Any] = [list(row) for row in body]
    else:
        keys = _json_keys(header, _num_columns(rows))
        data = [_json_record(keys, len(header), row) for row in body]
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def render(
    rows: Rows,
    fmt: OutputFormat,
    has_header: bool = False,
    table_name: str = DEFAULT_TABLE_NAME,
) -> str:
    fmt = OutputFormat(fmt)
    if fmt is OutputFormat.CSV:
        return render_csv(rows, has_header)
    if fmt is OutputFormat.MD:
        return render_markdown(rows, has_header)
    if fmt is OutputFormat.HTML:
        return render_html(rows, has_header)
    if fmt is OutputFormat.SQL:
        return render_sql(rows, has_header, table_name=table_name)
    return render_json(rows, has_header)
