"""
Shared types and defaults for the chart core.

This module provides:
- IndicatorKind enum (the closed set of indicator variants)
- Centralized default values for all indicator parameters
"""
from .types import IndicatorKind
from .defaults import (
    SMA_SHORT_PERIOD, SMA_LONG_PERIOD,
    BOLLINGER_PERIOD, BOLLINGER_NUM_STD_DEV,
    RSI_PERIOD,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    DAYS_TO_SHOW, MIN_DAYS_TO_SHOW, MAX_DAYS_TO_SHOW,
    CSV_COLUMNS, PRICE_COLUMNS,
    DECIMAL_PRECISION, SQRT_PRECISION,
)

__all__ = [
    'IndicatorKind',
    'SMA_SHORT_PERIOD', 'SMA_LONG_PERIOD',
    'BOLLINGER_PERIOD', 'BOLLINGER_NUM_STD_DEV',
    'RSI_PERIOD',
    'MACD_FAST', 'MACD_SLOW', 'MACD_SIGNAL',
    'DAYS_TO_SHOW', 'MIN_DAYS_TO_SHOW', 'MAX_DAYS_TO_SHOW',
    'CSV_COLUMNS', 'PRICE_COLUMNS',
    'DECIMAL_PRECISION', 'SQRT_PRECISION',
]
