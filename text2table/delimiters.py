from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, Union


class Delimiter(str, Enum):
    """Characters that may separate fields. Values are the names used on the CLI and API."""

    SPACE = "space"
    TAB = "tab"
    COMMA = "comma"
    PIPE = "pipe"
    PERIOD = "period"
    COLON = "colon"

    @property
    def char(self) -> str:
        return _CHARS[self]

    @classmethod
    def from_char(cls, char: str) -> Delimiter:
        for delimiter, value in _CHARS.items():
            if value == char:
                return delimiter
        raise ValueError(f"{char!r} is not a supported delimiter character")


_CHARS = {
    Delimiter.SPACE: " ",
    Delimiter.TAB: "\t",
    Delimiter.COMMA: ",",
    Delimiter.PIPE: "|",
    Delimiter.PERIOD: ".",
    Delimiter.COLON: ":",
}


DelimiterLike = Union[Delimiter, str]


def _coerce(value: DelimiterLike) -> Delimiter:
    if isinstance(value, Delimiter):
        return value
    try:
        return Delimiter(value)
    except ValueError:
        return Delimiter.from_char(value)


class DelimiterSet:
    """
    Ordered, de-duplicated set of delimiters.

    Accepts Delimiter members, their names ("comma") or their characters (",").
    Order is kept for display only; membership is what splitting uses.
    """

    __slots__ = ("_members", "_chars")

    def __init__(self, delimiters: Iterable[DelimiterLike]):
        members: list[Delimiter] = []
        for value in delimiters:
            delimiter = _coerce(value)
            if delimiter not in members:
                members.append(delimiter)
        self._members = tuple(members)
        self._chars = frozenset(d.char for d in self._members)

    @property
    def chars(self) -> frozenset[str]:
        return self._chars

    def __contains__(self, char: object) -> bool:
        return char in self._chars

    def __iter__(self) -> Iterator[Delimiter]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DelimiterSet):
            return NotImplemented
        return self._chars == other._chars

    def __hash__(self) -> int:
        return hash(self._chars)

    def __repr__(self) -> str:
        return f"DelimiterSet({[d.value for d in self._members]!r})"

    def names(self) -> list[str]:
        return [d.value for d in self._members]
