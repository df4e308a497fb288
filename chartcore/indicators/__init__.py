"""
Indicator calculation module.

Provides all chart indicators:
- Simple Moving Average (SMA)
- Bollinger Bands
- Relative Strength Index (RSI, Wilder smoothing)
- MACD (EMA-based)

All indicators follow a unified interface (Indicator) and produce
IndicatorOutput channels anchored to source dates by a fixed offset.
"""
from .base import Indicator, IndicatorOutput, DerivedSeries, InvalidParameter
from .technical import sma, ema, bollinger, rsi, macd
from .implementations import (
    SMAIndicator,
    BollingerBands,
    RSIIndicator,
    MACDIndicator,
    build_indicator,
)
from .engine import compute_indicators, build_chart_frame

__all__ = [
    'Indicator',
    'IndicatorOutput',
    'DerivedSeries',
    'InvalidParameter',
    'sma',
    'ema',
    'bollinger',
    'rsi',
    'macd',
    'SMAIndicator',
    'BollingerBands',
    'RSIIndicator',
    'MACDIndicator',
    'build_indicator',
    'compute_indicators',
    'build_chart_frame',
]
