"""
Synthetic price data for demos and tests.

Generates a valid random-walk OHLCV series (prices in cents, business days),
deterministic for a given seed.
"""
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional, Union

import numpy as np

from .model import PriceRecord, PriceSeries

_CENT = Decimal("0.01")


def _business_days(start: date, count: int) -> List[date]:
    days = []
    current = start
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current += timedelta(days=1)
    return days


def _to_cents(value: float) -> Decimal:
    return Decimal(repr(float(value))).quantize(_CENT)


def mock_series(
    symbol: str = "MOCK",
    days: int = 100,
    start: Union[str, date] = "2024-01-02",
    base_price: float = 100.0,
    volatility: float = 0.02,
    seed: Optional[int] = 42,
) -> PriceSeries:
    """
    Create a synthetic price series.

    Args:
        symbol: Ticker symbol for the series
        days: Number of trading days to generate
        start: First calendar date (weekends are skipped)
        base_price: Opening price of the first day
        volatility: Daily return standard deviation
        seed: Random seed (None = non-deterministic)

    Returns:
        PriceSeries satisfying all invariants
    """
    if days < 0:
        raise ValueError(f"days must be >= 0, got {days}")
    if isinstance(start, str):
        start = date.fromisoformat(start)

    rng = np.random.RandomState(seed)
    returns = rng.randn(days) * volatility
    closes = base_price * np.exp(np.cumsum(returns))
    opens = np.concatenate(([base_price], closes[:-1]))
    wicks = np.abs(rng.randn(days, 2)) * volatility * 0.5
    volumes = rng.randint(100_000, 5_000_000, days)

    records = []
    for i, day in enumerate(_business_days(start, days)):
        open_ = _to_cents(max(opens[i], 0.01))
        close = _to_cents(max(closes[i], 0.01))
        body_high = max(open_, close)
        body_low = min(open_, close)
        high = max(_to_cents(float(body_high) * (1 + wicks[i, 0])), body_high)
        low = max(min(_to_cents(float(body_low) * (1 - wicks[i, 1])), body_low), _CENT)
        records.append(PriceRecord(
            date=day,
            open=open_,
            high=high,
            low=low,
            close=close,
            volume=int(volumes[i]),
        ))
    return PriceSeries(symbol, records)


__all__ = ['mock_series']
