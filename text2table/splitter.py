"""
Line splitting.

A single state machine covers the four splitting policies:

- quoted_fields: double-quoted spans are kept together and delimiters inside
  them are literal. A quote inside a quoted span always closes it, so a doubled
  quote ("") reopens the span immediately and both characters are kept.
- contiguous_delimiters: a run of delimiters counts as one separator and never
  yields empty fields.

Fields are returned exactly as they appear in the line, quote characters
included. unquote_field() gives the value a quoted field stands for.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .delimiters import DelimiterSet
from .errors import CannotParseLine
from .rules import DOUBLE_QUOTE


@dataclass(frozen=True)
class Policy:
    quoted_fields: bool = False
    contiguous_delimiters: bool = False

    @property
    def name(self) -> str:
        quoting = "quoted" if self.quoted_fields else "unquoted"
        runs = "collapse" if self.contiguous_delimiters else "split"
        return f"{quoting}-{runs}"


class _State(Enum):
    DELIMITER = "delimiter"
    UNQUOTED = "unquoted"
    QUOTED = "quoted"


def split_line(line: str, delimiters: DelimiterSet, policy: Policy = Policy()) -> list[str]:
    """
    Split one line into fields.

    Raises CannotParseLine if the line ends inside a quoted field. That can
    only happen when policy.quoted_fields is set.
    """
    fields: list[str] = []
    field: list[str] = []
    state = _State.DELIMITER
    quoting = policy.quoted_fields
    collapse = policy.contiguous_delimiters

    for c in line:
        if state is _State.QUOTED:
            field.append(c)
            if c == DOUBLE_QUOTE:
                state = _State.UNQUOTED
        elif quoting and c == DOUBLE_QUOTE:
            field.append(c)
            state = _State.QUOTED
        elif c in delimiters:
            if state is _State.UNQUOTED:
                fields.append("".join(field))
                field = []
                state = _State.DELIMITER
            elif not collapse:
                fields.append("")
        else:
            field.append(c)
            state = _State.UNQUOTED

    if state is _State.QUOTED:
        raise CannotParseLine(line)
    if state is _State.UNQUOTED:
        fields.append("".join(field))
    elif not quoting and not collapse:
        # plain str.split() semantics: a trailing delimiter (or an empty line)
        # leaves one empty field behind
        fields.append("")
    return fields


def num_fields(line: str, delimiters: DelimiterSet, policy: Policy = Policy()) -> int:
    return len(split_line(line, delimiters, policy))


def unquote_field(field: str) -> str:
    """
    Strip the quotes that open and close quoted spans; "" inside a span is one literal quote.

    >>> unquote_field('"kas  jd"')
    'kas  jd'
    >>> unquote_field('"a""b"')
    'a"b'
    """
    if DOUBLE_QUOTE not in field:
        return field

    out: list[str] = []
    in_quotes = False
    i = 0
    n = len(field)
    while i < n:
        c = field[i]
        if c != DOUBLE_QUOTE:
            out.append(c)
        elif in_quotes and i + 1 < n and field[i + 1] == DOUBLE_QUOTE:
            out.append(DOUBLE_QUOTE)
            i += 1
        else:
            in_quotes = not in_quotes
        i += 1
    return "".join(out)
