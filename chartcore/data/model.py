"""
Price data model.

PriceRecord is one trading day; PriceSeries is the validated, read-only,
date-ordered history of one symbol. A PriceSeries checks every invariant on
construction, so holding one is proof that:
- dates are strictly increasing (no duplicates)
- low <= open, close <= high for every record
- volume is non-negative
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Iterator, Optional, Tuple, Union, overload

import pandas as pd

from .errors import SeriesInvariantViolation
from ..shared.defaults import CSV_COLUMNS, PRICE_COLUMNS


@dataclass(frozen=True)
class PriceRecord:
    """One calendar day's trading data (exact decimal prices)."""
    date: date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int

    def violation(self) -> Optional[str]:
        """Return why this record breaks the OHLCV invariants, or None if it is valid."""
        if self.low > self.high:
            return f"low {self.low} is above high {self.high}"
        if not self.low <= self.open <= self.high:
            return f"open {self.open} outside [low {self.low}, high {self.high}]"
        if not self.low <= self.close <= self.high:
            return f"close {self.close} outside [low {self.low}, high {self.high}]"
        if self.volume < 0:
            return f"negative volume {self.volume}"
        return None


class PriceSeries:
    """
    Immutable, date-ordered sequence of PriceRecord for one symbol.

    Indicators only ever read from a series; slicing and filtering return
    new series and never modify this one.
    """

    __slots__ = ("_symbol", "_records")

    def __init__(self, symbol: str, records: Iterable[PriceRecord] = ()):
        """
        Build and validate a series.

        Args:
            symbol: Ticker symbol (e.g. 'AAPL')
            records: Records in strictly increasing date order

        Raises:
            SeriesInvariantViolation: For the first record (in order) that is
                out of order, duplicated, or breaks the OHLC invariant
        """
        records = tuple(records)
        previous: Optional[PriceRecord] = None
        for record in records:
            if previous is not None:
                if record.date == previous.date:
                    raise SeriesInvariantViolation(record.date, "duplicate date")
                if record.date < previous.date:
                    raise SeriesInvariantViolation(
                        record.date,
                        f"out of order (follows {previous.date.isoformat()})",
                    )
            reason = record.violation()
            if reason is not None:
                raise SeriesInvariantViolation(record.date, reason)
            previous = record
        self._symbol = symbol
        self._records = records

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def records(self) -> Tuple[PriceRecord, ...]:
        return self._records

    @property
    def dates(self) -> Tuple[date, ...]:
        return tuple(r.date for r in self._records)

    @property
    def first_date(self) -> Optional[date]:
        return self._records[0].date if self._records else None

    @property
    def last_date(self) -> Optional[date]:
        return self._records[-1].date if self._records else None

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PriceRecord]:
        return iter(self._records)

    @overload
    def __getitem__(self, index: int) -> PriceRecord: ...

    @overload
    def __getitem__(self, index: slice) -> "PriceSeries": ...

    def __getitem__(self, index: Union[int, slice]) -> Union[PriceRecord, "PriceSeries"]:
        if isinstance(index, slice):
            if index.step not in (None, 1):
                raise ValueError("PriceSeries slices must be contiguous (step 1)")
            return PriceSeries(self._symbol, self._records[index])
        return self._records[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PriceSeries):
            return NotImplemented
        return self._symbol == other._symbol and self._records == other._records

    def __hash__(self) -> int:
        return hash((self._symbol, self._records))

    def __repr__(self) -> str:
        if not self._records:
            return f"PriceSeries({self._symbol!r}, empty)"
        return (
            f"PriceSeries({self._symbol!r}, {len(self)} records, "
            f"{self.first_date.isoformat()}..{self.last_date.isoformat()})"
        )

    def column(self, name: str) -> Tuple[Decimal, ...]:
        """
        Extract one numeric column as decimals.

        Args:
            name: One of open, high, low, close, volume

        Returns:
            Tuple of Decimal values in date order (volume converted to Decimal)
        """
        if name == "volume":
            return tuple(Decimal(r.volume) for r in self._records)
        if name not in PRICE_COLUMNS:
            raise ValueError(
                f"Column '{name}' not found. Available: {list(PRICE_COLUMNS) + ['volume']}"
            )
        return tuple(getattr(r, name) for r in self._records)

    def between(self, start: Optional[date] = None, end: Optional[date] = None) -> "PriceSeries":
        """Return the records with start <= date <= end (either bound optional)."""
        return PriceSeries(
            self._symbol,
            (
                r for r in self._records
                if (start is None or r.date >= start) and (end is None or r.date <= end)
            ),
        )

    def tail(self, n: int) -> "PriceSeries":
        """Return the n most recent records."""
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        return PriceSeries(self._symbol, self._records[max(0, len(self._records) - n):])

    def to_frame(self) -> pd.DataFrame:
        """
        Convert to a DataFrame indexed by date.

        All columns are object dtype: prices keep their Decimal values and
        volume stays a Python int, so nothing is rounded or overflows on the
        way to the presentation layer.
        """
        return pd.DataFrame(
            [[getattr(r, c) for c in CSV_COLUMNS[1:]] for r in self._records],
            columns=list(CSV_COLUMNS[1:]),
            index=pd.Index(self.dates, name="date"),
            dtype=object,
        )


__all__ = ['PriceRecord', 'PriceSeries']
