"""
text2table command line interface.

    text2table -f report.txt -o md -d space comma --quoted-fields --has-header
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .convert import ConversionOptions, convert_table
from .delimiters import Delimiter
from .errors import CannotParseLine, RenderError
from .logging_config import setup_logging
from .models import OutputFormat
from .settings import settings

logger = logging.getLogger(__name__)


def _verbosity_level(verbose: int, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="text2table",
        description="A text-to-table tool: read a plain text table and write it in another format.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=OutputFormat,
        choices=list(OutputFormat),
        default=settings.DEFAULT_OUTPUT,
        metavar="{" + ",".join(f.value for f in OutputFormat) + "}",
        help=f"output table format (default: {settings.DEFAULT_OUTPUT.value})",
    )
    parser.add_argument("-f", "--filepath", type=Path, required=True, help="the file to read")
    parser.add_argument(
        "-d",
        "--delimiters",
        type=Delimiter,
        nargs="+",
        choices=list(Delimiter),
        default=list(settings.DEFAULT_DELIMITERS),
        metavar="{" + ",".join(d.value for d in Delimiter) + "}",
        help="field delimiters (default: " + " ".join(d.value for d in settings.DEFAULT_DELIMITERS) + ")",
    )
    parser.add_argument(
        "--contiguous-delimiters",
        action="store_true",
        help="treat a run of delimiters as a single delimiter",
    )
    parser.add_argument(
        "--quoted-fields",
        action="store_true",
        help="keep double-quoted fields together, delimiters inside quotes are literal",
    )
    parser.add_argument("--has-header", action="store_true", help="use the first row as the header")
    parser.add_argument("--outfile", type=Path, help="write here instead of standard output")
    parser.add_argument(
        "--table-name",
        default=settings.SQL_TABLE_NAME,
        help="table name for SQL output (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more logging, repeat for debug")
    parser.add_argument("-q", "--quiet", action="store_true", help="only log errors")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(_verbosity_level(args.verbose, args.quiet))

    options = ConversionOptions(
        output=args.output,
        delimiters=args.delimiters,
        quoted_fields=args.quoted_fields,
        contiguous_delimiters=args.contiguous_delimiters,
        has_header=args.has_header,
        table_name=args.table_name,
    )

    logger.info("Output : %s", options.output.description)
    logger.info("Path   : %s", args.filepath)

    try:
        table = options.builder().from_path(args.filepath)
    except OSError as exc:
        print(f"text2table: cannot read {args.filepath}: {exc}", file=sys.stderr)
        return 1
    logger.debug("Read %d lines, delimiters: %s", len(table), ", ".join(table.delimiters.names()))

    try:
        result = convert_table(table, options)
    except (CannotParseLine, RenderError) as exc:
        print(f"text2table: {args.filepath}: {exc}", file=sys.stderr)
        return 1

    content = result["output"]["content"]
    try:
        if args.outfile is None:
            sys.stdout.write(content)
            sys.stdout.flush()
        else:
            args.outfile.write_text(content, encoding="utf-8", newline="")
    except OSError as exc:
        print(f"text2table: cannot write {args.outfile or 'stdout'}: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
