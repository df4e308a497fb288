"""
Base indicator interface.

All indicators follow this pattern:
1. Validate parameters at construction (before any data is touched)
2. Calculate one or more derived channels from a numeric column
3. Report, per channel, which source index each value is anchored to

Alignment: an indicator with lookback window w over n inputs yields
n - w + 1 values; value i belongs to source index i + offset. Insufficient
history is not an error, it yields empty channels with the same offset.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .numeric import to_decimals
from ..data.model import PriceSeries
from ..shared.types import IndicatorKind


class InvalidParameter(ValueError):
    """Raised when an indicator parameter is out of range (e.g. period <= 0)."""
    pass


def validate_period(name: str, value: int) -> int:
    """Check that a window parameter is a positive integer. Returns it unchanged."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidParameter(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidParameter(f"{name} must be >= 1, got {value}")
    return int(value)


@dataclass(frozen=True)
class DerivedSeries:
    """One output channel of an indicator (immutable, owns its values)."""
    channel: str
    values: Tuple[Decimal, ...]
    offset: int  # Source index of values[0]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Decimal]:
        return iter(self.values)

    def __getitem__(self, index: int) -> Decimal:
        return self.values[index]

    def source_index(self, i: int) -> int:
        """Index in the source series that derived value i is anchored to."""
        if not 0 <= i < len(self.values):
            raise IndexError(f"derived index {i} out of range (length {len(self.values)})")
        return i + self.offset

    def dates_for(self, series: PriceSeries) -> Tuple[date, ...]:
        """Anchor dates of every value, taken from the source series."""
        dates = series.dates
        return tuple(dates[self.offset + i] for i in range(len(self.values)))

    def to_float_array(self) -> np.ndarray:
        """Values as float64 for renderers that only plot binary floats."""
        return np.array([float(v) for v in self.values], dtype=np.float64)


@dataclass(frozen=True)
class IndicatorOutput:
    """All channels produced by one indicator computation, synchronized."""
    name: str
    kind: IndicatorKind
    channels: Tuple[DerivedSeries, ...]

    @property
    def channel_names(self) -> List[str]:
        return [c.channel for c in self.channels]

    @property
    def offset(self) -> int:
        return self.channels[0].offset

    def __len__(self) -> int:
        return len(self.channels[0])

    def __getitem__(self, channel: str) -> DerivedSeries:
        for c in self.channels:
            if c.channel == channel:
                return c
        raise KeyError(f"{self.name} has no channel '{channel}'. Available: {self.channel_names}")

    def to_frame(self, series: PriceSeries) -> pd.DataFrame:
        """
        Map every channel onto the source dates.

        Returns:
            DataFrame indexed like series.to_frame(), one column per channel,
            None before the first anchored date
        """
        index = pd.Index(series.dates, name="date")
        columns = {}
        for c in self.channels:
            padded: List[Optional[Decimal]] = [None] * len(series)
            for i, v in enumerate(c.values):
                padded[c.offset + i] = v
            columns[c.channel] = pd.Series(padded, index=index, dtype=object)
        return pd.DataFrame(columns, index=index)


class Indicator(ABC):
    """
    Base class for all indicators.

    Indicators are stateless between calls: parameters are fixed at
    construction and calculate() is a pure function of its input.
    """

    kind: IndicatorKind

    @abstractmethod
    def name(self) -> str:
        """Stable display label (e.g. 'MA20')."""
        pass

    @property
    @abstractmethod
    def offset(self) -> int:
        """Source index of the first derived value."""
        pass

    @abstractmethod
    def calculate(self, values: Sequence[Decimal]) -> IndicatorOutput:
        """
        Calculate indicator channels from a numeric column.

        Args:
            values: Input values in date order

        Returns:
            IndicatorOutput (channels empty if history is insufficient)
        """
        pass

    def compute(self, values: Iterable) -> IndicatorOutput:
        """Same as calculate(), accepting any numeric iterable."""
        return self.calculate(to_decimals(values))

    def calculate_for(self, series: PriceSeries, column: str = "close") -> IndicatorOutput:
        """Calculate on one column of a price series."""
        return self.calculate(series.column(column))

    def _output(self, **channels: Sequence[Decimal]) -> IndicatorOutput:
        return IndicatorOutput(
            name=self.name(),
            kind=self.kind,
            channels=tuple(
                DerivedSeries(channel, tuple(values), self.offset)
                for channel, values in channels.items()
            ),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name()})"
