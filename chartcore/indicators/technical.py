"""
Technical indicator calculations.

Pure functions over sequences of exact decimals: SMA, EMA, Bollinger Bands,
RSI (Wilder smoothing) and MACD. Each function validates its parameters
before looking at the data, returns newly built tuples, and returns empty
output when the input is shorter than the required history.

Output lengths and anchors (n = number of inputs):
- sma, bollinger: n - period + 1, value i belongs to input i + period - 1
- ema:            n - period + 1, same anchor as sma
- rsi:            n - period,     value i belongs to input i + period
- macd:           n - slow - signal + 2, value i belongs to input i + slow + signal - 2
"""
from decimal import Decimal, localcontext
from typing import List, Sequence, Tuple

from .base import InvalidParameter, validate_period
from .numeric import (
    ENGINE_CONTEXT,
    Numeric,
    mean,
    population_stddev,
    to_decimal,
    to_decimals,
    working_context,
)

_ZERO = Decimal(0)
_HUNDRED = Decimal(100)

Channel = Tuple[Decimal, ...]


def validate_num_std_dev(value: Numeric) -> Decimal:
    """Check a band width multiplier: finite and non-negative."""
    try:
        k = to_decimal(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameter(f"num_std_dev must be a finite number: {e}") from None
    if k < 0:
        raise InvalidParameter(f"num_std_dev must be >= 0, got {value}")
    return k


def validate_macd_periods(fast: int, slow: int, signal: int) -> Tuple[int, int, int]:
    """
    Check MACD periods: all >= 1 and fast < slow.

    The line pairs fast EMA value i + (slow - fast) with slow EMA value i, so
    both share the slow EMA's anchor. That shift must be positive: with
    fast == slow the line is identically zero, and with fast > slow the fast
    EMA would start later than the slow one.
    """
    fast = validate_period("fast_period", fast)
    slow = validate_period("slow_period", slow)
    signal = validate_period("signal_period", signal)
    if fast >= slow:
        raise InvalidParameter(
            f"MACD fast_period ({fast}) must be less than slow_period ({slow})"
        )
    return fast, slow, signal


def sma(values: Sequence[Numeric], period: int) -> Channel:
    """
    Simple Moving Average.

    Every value is the direct sum of its window divided by period, so each
    output is independent of the ones before it.
    """
    period = validate_period("period", period)
    prices = to_decimals(values)
    return tuple(
        mean(prices[i - period + 1:i + 1])
        for i in range(period - 1, len(prices))
    )


def ema(values: Sequence[Numeric], period: int) -> Channel:
    """
    Exponential Moving Average, smoothing factor 2 / (period + 1).

    Seeded with the simple mean of the first period values (anchored at
    input period - 1), then ema = prev + (x - prev) * 2 / (period + 1).
    """
    period = validate_period("period", period)
    prices = to_decimals(values)
    if len(prices) < period:
        return ()
    with localcontext(ENGINE_CONTEXT):
        current = mean(prices[:period])
        result = [current]
        for price in prices[period:]:
            current = current + (price - current) * 2 / (period + 1)
            result.append(current)
    return tuple(result)


def bollinger(
    values: Sequence[Numeric],
    period: int,
    num_std_dev: Numeric,
) -> Tuple[Channel, Channel, Channel]:
    """
    Bollinger Bands.

    middle = SMA(period), band = num_std_dev * population stddev of the window.

    Returns:
        Tuple of (lower, middle, upper), equal lengths
    """
    period = validate_period("period", period)
    k = validate_num_std_dev(num_std_dev)
    prices = to_decimals(values)
    lower: List[Decimal] = []
    middle: List[Decimal] = []
    upper: List[Decimal] = []
    for i in range(period - 1, len(prices)):
        window = prices[i - period + 1:i + 1]
        center = mean(window)
        deviation = population_stddev(window, center)
        with localcontext(working_context((center,))):
            width = k * deviation
            lower.append(center - width)
            upper.append(center + width)
        middle.append(center)
    return tuple(lower), tuple(middle), tuple(upper)


def _rsi_value(avg_gain: Decimal, avg_loss: Decimal) -> Decimal:
    if avg_loss == 0:
        return _HUNDRED
    return _HUNDRED - _HUNDRED / (1 + avg_gain / avg_loss)


def rsi(values: Sequence[Numeric], period: int) -> Channel:
    """
    Relative Strength Index with Wilder smoothing.

    RSI = 100 - 100 / (1 + avg_gain / avg_loss), 100 when avg_loss is zero.
    The first averages are simple means of the first period gains/losses;
    after that avg = (avg * (period - 1) + current) / period.

    Needs period + 1 prices for the first value.
    """
    period = validate_period("period", period)
    prices = to_decimals(values)
    if len(prices) <= period:
        return ()
    with localcontext(ENGINE_CONTEXT):
        changes = [prices[i] - prices[i - 1] for i in range(1, len(prices))]
        gains = [c if c > 0 else _ZERO for c in changes]
        losses = [-c if c < 0 else _ZERO for c in changes]

        avg_gain = mean(gains[:period])
        avg_loss = mean(losses[:period])
        result = [_rsi_value(avg_gain, avg_loss)]
        for gain, loss in zip(gains[period:], losses[period:]):
            avg_gain = (avg_gain * (period - 1) + gain) / period
            avg_loss = (avg_loss * (period - 1) + loss) / period
            result.append(_rsi_value(avg_gain, avg_loss))
    return tuple(result)


def macd(
    values: Sequence[Numeric],
    fast_period: int,
    slow_period: int,
    signal_period: int,
) -> Tuple[Channel, Channel, Channel]:
    """
    Calculate MACD (Moving Average Convergence Divergence).

    MACD line = EMA(fast) - EMA(slow), defined once the slow EMA is seeded.
    Signal line = EMA(signal) of the MACD line. Histogram = line - signal.
    All three channels are trimmed to the signal line's span.

    Returns:
        Tuple of (MACD line, Signal line, Histogram)
    """
    fast_period, slow_period, signal_period = validate_macd_periods(
        fast_period, slow_period, signal_period
    )
    prices = to_decimals(values)
    if len(prices) < slow_period + signal_period - 1:
        return (), (), ()

    fast_ema = ema(prices, fast_period)
    slow_ema = ema(prices, slow_period)
    shift = slow_period - fast_period
    with localcontext(ENGINE_CONTEXT):
        line = [f - s for f, s in zip(fast_ema[shift:], slow_ema)]
        signal_line = ema(line, signal_period)
        line = line[signal_period - 1:]
        histogram = [m - s for m, s in zip(line, signal_line)]
    return tuple(line), signal_line, tuple(histogram)


__all__ = [
    'sma',
    'ema',
    'bollinger',
    'rsi',
    'macd',
    'validate_num_std_dev',
    'validate_macd_periods',
]
