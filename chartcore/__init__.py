"""
Price chart core.

Provides unified interfaces for:
- Data loading (strict OHLCV CSV ingestion into validated price series)
- Indicator calculations (SMA, Bollinger Bands, RSI, MACD)
- Chart configuration (which indicators to show, how many days)
"""
