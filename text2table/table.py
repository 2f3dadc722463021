"""
Tables of raw lines and the builder that creates them.

A Table keeps the lines exactly as read plus the delimiters and the splitting
policy chosen when it was built. Rows are produced fresh on every split().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Dict, Iterable, Union

from .columns import infer_column_count
from .decoding import decode_text
from .delimiters import Delimiter, DelimiterLike, DelimiterSet
from .errors import CannotParseLine
from .splitter import Policy, num_fields, split_line, unquote_field


def split_lines(text: str) -> list[str]:
    """
    Split text into lines.

    Lines end at "\\n"; a "\\r" right before it is dropped. A final newline
    terminates the last line instead of starting an empty one, so "" has no
    lines and "a\\n\\n" has two ("a" and "").
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass(frozen=True)
class Table:
    lines: tuple[str, ...]
    delimiters: DelimiterSet
    policy: Policy = Policy()
    # populated when the table was built from bytes; never used for splitting
    source_report: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def __len__(self) -> int:
        return len(self.lines)

    def split(self) -> list[list[str]]:
        """
        Split every line, in order.

        Stops at the first line that cannot be parsed and raises CannotParseLine
        carrying its 1-based line number.
        """
        rows = []
        for line_number, line in enumerate(self.lines, start=1):
            try:
                rows.append(split_line(line, self.delimiters, self.policy))
            except CannotParseLine as exc:
                raise exc.at_line(line_number) from None
        return rows

    def records(self) -> list[list[str]]:
        """Rows as renderers should see them: quoted fields reduced to their values."""
        rows = self.split()
        if not self.policy.quoted_fields:
            return rows
        return [[unquote_field(value) for value in row] for row in rows]

    def field_counts(self) -> list[int]:
        counts = []
        for line_number, line in enumerate(self.lines, start=1):
            try:
                counts.append(num_fields(line, self.delimiters, self.policy))
            except CannotParseLine as exc:
                raise exc.at_line(line_number) from None
        return counts

    def infer_column_count(self) -> int:
        return infer_column_count(self.field_counts())


class TableBuilder:
    """
    Collects splitting options, then builds a Table.

        table = (
            TableBuilder()
            .delimiters([Delimiter.SPACE, Delimiter.COMMA])
            .quoted_fields(True)
            .from_path("report.txt")
        )
    """

    def __init__(self):
        self._delimiters = DelimiterSet([Delimiter.SPACE])
        self._contiguous_delimiters = False
        self._quoted_fields = False

    def delimiters(self, delimiters: Iterable[DelimiterLike]) -> TableBuilder:
        delimiter_set = delimiters if isinstance(delimiters, DelimiterSet) else DelimiterSet(delimiters)
        if not delimiter_set:
            raise ValueError("at least one delimiter is required")
        self._delimiters = delimiter_set
        return self

    def contiguous_delimiters(self, contiguous_delimiters: bool) -> TableBuilder:
        self._contiguous_delimiters = contiguous_delimiters
        return self

    def quoted_fields(self, quoted_fields: bool) -> TableBuilder:
        self._quoted_fields = quoted_fields
        return self

    @property
    def policy(self) -> Policy:
        return Policy(
            quoted_fields=self._quoted_fields,
            contiguous_delimiters=self._contiguous_delimiters,
        )

    def from_text(self, text: str) -> Table:
        return Table(
            lines=tuple(split_lines(text)),
            delimiters=self._delimiters,
            policy=self.policy,
        )

    def from_bytes(self, raw: bytes) -> Table:
        text, report = decode_text(raw)
        return Table(
            lines=tuple(split_lines(text)),
            delimiters=self._delimiters,
            policy=self.policy,
            source_report=report,
        )

    def from_path(self, path: Union[str, PathLike]) -> Table:
        """Read a whole file. OSError from reading propagates unchanged."""
        return self.from_bytes(Path(path).read_bytes())
