from __future__ import annotations

from typing import Optional


class Text2TableError(Exception):
    """Base class for every error raised by text2table."""


class ParseError(Text2TableError):
    pass


class CannotParseLine(ParseError):
    """Raised when a line ends inside a quoted field."""

    def __init__(self, line: str, line_number: Optional[int] = None):
        self.line = line
        self.line_number = line_number
        if line_number is None:
            message = "Cannot parse line: unterminated quoted field"
        else:
            message = f"Cannot parse line {line_number}: unterminated quoted field"
        super().__init__(message)

    def at_line(self, line_number: int) -> CannotParseLine:
        return CannotParseLine(self.line, line_number)


class ColumnCountError(ParseError):
    def __init__(self, message: str = "Error auto-counting columns: table has no lines"):
        super().__init__(message)


class RenderError(Text2TableError):
    pass


class EmptyContents(RenderError):
    def __init__(self, message: str = "Empty contents in table"):
        super().__init__(message)


class InvalidTableName(RenderError):
    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Invalid SQL table name {table_name!r}")


class UnsupportedFileError(Text2TableError):
    def __init__(self, filename: str, allowed: tuple[str, ...]):
        self.filename = filename
        self.allowed = allowed
        super().__init__(
            f"Unsupported file {filename!r}; expected one of: {', '.join(allowed)}"
        )
