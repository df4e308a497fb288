"""
Centralized default values for indicator and chart parameters.

This is the SINGLE SOURCE OF TRUTH for all parameter defaults.
All modules should import from here to ensure consistency.
"""
from decimal import Decimal

# Simple moving averages shown on the price chart
SMA_SHORT_PERIOD = 20  # "MA20"
SMA_LONG_PERIOD = 50  # "MA50"

# Bollinger Bands defaults
BOLLINGER_PERIOD = 20
BOLLINGER_NUM_STD_DEV = Decimal("2")

# RSI (Relative Strength Index) defaults, Wilder smoothing
RSI_PERIOD = 14

# MACD (Moving Average Convergence Divergence) defaults
MACD_FAST = 12  # Standard default
MACD_SLOW = 26  # Standard default
MACD_SIGNAL = 9  # Standard default

# Chart window (number of most recent days shown)
DAYS_TO_SHOW = 30
MIN_DAYS_TO_SHOW = 1
MAX_DAYS_TO_SHOW = 365

# Input file format
CSV_COLUMNS = ("date", "open", "high", "low", "close", "volume")
PRICE_COLUMNS = ("open", "high", "low", "close")

# Decimal arithmetic
DECIMAL_PRECISION = 28  # Significant digits for all engine arithmetic
SQRT_PRECISION = 34  # Extended precision used only for the square-root step
