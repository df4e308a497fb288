"""
Individual indicator implementations following the Indicator interface.

The variant set is closed: SMAIndicator, BollingerBands, RSIIndicator and
MACDIndicator, one per IndicatorKind. build_indicator() is the single
factory that maps a kind plus parameters to an instance.
"""
from decimal import Decimal
from typing import Any, Dict, Sequence, Type

from .base import Indicator, IndicatorOutput, InvalidParameter, validate_period
from .numeric import Numeric
from .technical import (
    bollinger,
    macd,
    rsi,
    sma,
    validate_macd_periods,
    validate_num_std_dev,
)
from ..shared.defaults import (
    SMA_SHORT_PERIOD,
    BOLLINGER_PERIOD, BOLLINGER_NUM_STD_DEV,
    RSI_PERIOD,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
)
from ..shared.types import IndicatorKind


class SMAIndicator(Indicator):
    """Simple Moving Average indicator."""

    kind = IndicatorKind.SMA

    def __init__(self, period: int = SMA_SHORT_PERIOD):
        self.period = validate_period("period", period)

    def name(self) -> str:
        return f"MA{self.period}"

    @property
    def offset(self) -> int:
        return self.period - 1

    def calculate(self, values: Sequence[Decimal]) -> IndicatorOutput:
        """Calculate SMA values."""
        return self._output(sma=sma(values, self.period))


class BollingerBands(Indicator):
    """Bollinger Bands: SMA middle line with population-stddev bands."""

    kind = IndicatorKind.BOLLINGER

    def __init__(
        self,
        period: int = BOLLINGER_PERIOD,
        num_std_dev: Numeric = BOLLINGER_NUM_STD_DEV,
    ):
        self.period = validate_period("period", period)
        self.num_std_dev = validate_num_std_dev(num_std_dev)

    def name(self) -> str:
        return f"BB({self.period},{self.num_std_dev.normalize():f})"

    @property
    def offset(self) -> int:
        return self.period - 1

    def calculate(self, values: Sequence[Decimal]) -> IndicatorOutput:
        """Calculate lower, middle and upper bands."""
        lower, middle, upper = bollinger(values, self.period, self.num_std_dev)
        return self._output(lower=lower, middle=middle, upper=upper)


class RSIIndicator(Indicator):
    """Relative Strength Index indicator (Wilder smoothing)."""

    kind = IndicatorKind.RSI

    def __init__(self, period: int = RSI_PERIOD):
        self.period = validate_period("period", period)

    def name(self) -> str:
        return f"RSI{self.period}"

    @property
    def offset(self) -> int:
        return self.period

    def calculate(self, values: Sequence[Decimal]) -> IndicatorOutput:
        """Calculate RSI values."""
        return self._output(rsi=rsi(values, self.period))


class MACDIndicator(Indicator):
    """MACD (Moving Average Convergence Divergence) indicator."""

    kind = IndicatorKind.MACD

    def __init__(
        self,
        fast: int = MACD_FAST,
        slow: int = MACD_SLOW,
        signal: int = MACD_SIGNAL,
    ):
        self.fast, self.slow, self.signal = validate_macd_periods(fast, slow, signal)

    def name(self) -> str:
        return f"MACD({self.fast},{self.slow},{self.signal})"

    @property
    def offset(self) -> int:
        return self.slow + self.signal - 2

    def calculate(self, values: Sequence[Decimal]) -> IndicatorOutput:
        """Calculate all MACD components: line, signal, histogram."""
        line, signal_line, histogram = macd(values, self.fast, self.slow, self.signal)
        return self._output(macd=line, signal=signal_line, histogram=histogram)


INDICATOR_CLASSES: Dict[IndicatorKind, Type[Indicator]] = {
    IndicatorKind.SMA: SMAIndicator,
    IndicatorKind.BOLLINGER: BollingerBands,
    IndicatorKind.RSI: RSIIndicator,
    IndicatorKind.MACD: MACDIndicator,
}


def build_indicator(kind: IndicatorKind, **params: Any) -> Indicator:
    """
    Create an indicator of the given kind.

    Args:
        kind: IndicatorKind (or its string value, e.g. 'sma')
        **params: Constructor parameters (period, num_std_dev, fast, slow, signal)

    Raises:
        InvalidParameter: Unknown parameter name or out-of-range value
    """
    if not isinstance(kind, IndicatorKind):
        kind = IndicatorKind.parse(kind)
    cls = INDICATOR_CLASSES[kind]
    try:
        return cls(**params)
    except TypeError as e:
        raise InvalidParameter(f"Invalid parameters for {kind.value}: {e}") from None


__all__ = [
    'SMAIndicator',
    'BollingerBands',
    'RSIIndicator',
    'MACDIndicator',
    'INDICATOR_CLASSES',
    'build_indicator',
]
