"""
Load error taxonomy.

Every failure of a load is one of the LoadError subclasses below. Each carries
enough context (line number, column, offending date) to locate the bad record,
and a stable ``kind`` string so callers can match on it exhaustively.
"""
import datetime
from pathlib import Path
from typing import Optional, Sequence, Union


class LoadError(Exception):
    """Base class for all errors raised while loading a price series."""
    kind = "load_error"


class IoFailure(LoadError):
    """The source could not be opened, read or decoded."""
    kind = "io_failure"

    def __init__(self, path: Optional[Union[str, Path]], reason: str):
        self.path = None if path is None else Path(path)
        self.reason = reason
        where = f" '{self.path}'" if self.path is not None else ""
        super().__init__(f"Cannot read source{where}: {reason}")


class InvalidSchema(LoadError):
    """Header row does not match the expected columns exactly."""
    kind = "invalid_schema"

    def __init__(self, found: Sequence[str], expected: Sequence[str]):
        self.found = tuple(found)
        self.expected = tuple(expected)
        super().__init__(
            f"Invalid header, expected columns: {','.join(self.expected)} "
            f"(found: {','.join(self.found) or '<empty>'})"
        )


class MalformedRow(LoadError):
    """Data row does not have the expected number of fields."""
    kind = "malformed_row"

    def __init__(self, line: int, field_count: int, expected: int):
        self.line = line
        self.field_count = field_count
        self.expected = expected
        super().__init__(
            f"Line {line}: expected {expected} fields, found {field_count}"
        )


class InvalidDate(LoadError):
    """Date field is not a real calendar date in YYYY-MM-DD form."""
    kind = "invalid_date"

    def __init__(self, line: int, value: str):
        self.line = line
        self.value = value
        super().__init__(f"Line {line}: invalid date '{value}' (expected YYYY-MM-DD)")


class InvalidDecimal(LoadError):
    """Price field is not a plain decimal literal."""
    kind = "invalid_decimal"

    def __init__(self, line: int, column: str, value: str):
        self.line = line
        self.column = column
        self.value = value
        super().__init__(f"Line {line}: invalid decimal '{value}' in column '{column}'")


class InvalidVolume(LoadError):
    """Volume field is not a non-negative integer."""
    kind = "invalid_volume"

    def __init__(self, line: int, value: str):
        self.line = line
        self.value = value
        super().__init__(f"Line {line}: invalid volume '{value}' (expected non-negative integer)")


class SeriesInvariantViolation(LoadError):
    """A record breaks ordering, uniqueness or OHLC invariants."""
    kind = "series_invariant_violation"

    def __init__(self, date: datetime.date, reason: str):
        self.date = date
        self.reason = reason
        super().__init__(f"{date.isoformat()}: {reason}")


__all__ = [
    'LoadError',
    'IoFailure',
    'InvalidSchema',
    'MalformedRow',
    'InvalidDate',
    'InvalidDecimal',
    'InvalidVolume',
    'SeriesInvariantViolation',
]
