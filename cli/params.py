#!/usr/bin/env python3
"""
Parameter reference CLI.

Shows all configurable indicator and chart parameters, their valid ranges,
and defaults.
"""
from chartcore.shared.defaults import (
    SMA_SHORT_PERIOD, SMA_LONG_PERIOD,
    BOLLINGER_PERIOD, BOLLINGER_NUM_STD_DEV,
    RSI_PERIOD,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    DAYS_TO_SHOW, MIN_DAYS_TO_SHOW, MAX_DAYS_TO_SHOW,
    CSV_COLUMNS, DECIMAL_PRECISION, SQRT_PRECISION,
)


def main():
    """Print all configurable parameters with their ranges and defaults."""

    print("=" * 80)
    print("CHART INDICATOR PARAMETER REFERENCE")
    print("=" * 80)
    print()

    print("TECHNICAL INDICATORS")
    print("-" * 80)
    print()

    print("SMA (Simple Moving Average):")
    print(f"  --sma PERIOD        Periods shown by default: {SMA_SHORT_PERIOD}, {SMA_LONG_PERIOD}")
    print("                      Range: >= 1 (repeatable)")
    print("                      Output starts at day PERIOD (labels: MA20, MA50, ...)")
    print()

    print("Bollinger Bands:")
    print(f"  --bollinger P K     Period: {BOLLINGER_PERIOD}, K: {BOLLINGER_NUM_STD_DEV} (default)")
    print("                      Range: P >= 1, K >= 0")
    print("                      middle = SMA(P), bands = middle -/+ K * population stddev")
    print()

    print("RSI (Relative Strength Index, Wilder smoothing):")
    print(f"  --rsi PERIOD        Period: {RSI_PERIOD} (default)")
    print("                      Range: >= 1, recommended: 7-21")
    print("                      Needs PERIOD + 1 prices for the first value")
    print()

    print("MACD (Moving Average Convergence Divergence):")
    print(f"  --macd F S G        Fast: {MACD_FAST}, Slow: {MACD_SLOW}, Signal: {MACD_SIGNAL} (default)")
    print("                      Range: all >= 1, F < S")
    print("                      First value needs S + G - 1 prices")
    print()

    print("CHART")
    print("-" * 80)
    print()
    print(f"  --days N            Days shown: {DAYS_TO_SHOW} (default)")
    print(f"                      Range: {MIN_DAYS_TO_SHOW}-{MAX_DAYS_TO_SHOW}")
    print("                      Indicators always use the full history")
    print()
    print("  --column            Input column for indicators")
    print("                      Options: open, high, low, close, volume")
    print("                      Default: close")
    print()

    print("DATA FORMAT")
    print("-" * 80)
    print()
    print(f"  Header:             {','.join(CSV_COLUMNS)} (exact, in this order)")
    print("  Dates:              YYYY-MM-DD, strictly increasing, no duplicates")
    print("  Prices:             plain decimals (no exponents), low <= open, close <= high")
    print("  Volume:             non-negative integer")
    print(f"  Arithmetic:         {DECIMAL_PRECISION}-digit decimals, square root at {SQRT_PRECISION} digits")
    print()

    print("=" * 80)
    print()
    print("USAGE EXAMPLES:")
    print("-" * 80)
    print()
    print("  # Defaults (MA20 + MA50)")
    print("  python -m cli.indicators data/AAPL.csv")
    print()
    print("  # Oscillators from a config file")
    print("  python -m cli.indicators data/AAPL.csv --config configs/momentum.yaml")
    print()


if __name__ == "__main__":
    main()
