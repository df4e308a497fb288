"""
Shared types for the chart core.

IndicatorKind is the closed set of indicator variants. Every dispatch over
indicators (factory, config loader, presentation hand-off) matches on it
exhaustively.
"""
from enum import Enum


class IndicatorKind(Enum):
    """Type of indicator."""
    SMA = "sma"
    BOLLINGER = "bollinger"
    RSI = "rsi"
    MACD = "macd"

    @classmethod
    def parse(cls, value: str) -> "IndicatorKind":
        """Look up a kind by its value, case-insensitively."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown indicator '{value}'. Valid: {valid}") from None
