"""
Chart configuration.

Describes what the chart shows: which symbol and column, how many days, and
which indicators (with their visibility). Visibility and the day window are
plain configuration handed to the presentation layer; the engine never
stores them. Config validation runs at construction time (fail fast with
clear errors).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .indicators.base import Indicator
from .indicators.implementations import build_indicator
from .shared.defaults import (
    SMA_SHORT_PERIOD, SMA_LONG_PERIOD,
    BOLLINGER_PERIOD, BOLLINGER_NUM_STD_DEV,
    DAYS_TO_SHOW, MIN_DAYS_TO_SHOW, MAX_DAYS_TO_SHOW,
    PRICE_COLUMNS,
)
from .shared.types import IndicatorKind


@dataclass
class IndicatorSetting:
    """One indicator on the chart: its kind, parameters and visibility."""
    kind: IndicatorKind
    params: Dict[str, Any] = field(default_factory=dict)
    visible: bool = True

    def __post_init__(self):
        if not isinstance(self.kind, IndicatorKind):
            self.kind = IndicatorKind.parse(self.kind)

    def build(self) -> Indicator:
        return build_indicator(self.kind, **self.params)


def default_indicator_settings() -> List[IndicatorSetting]:
    """MA20 and MA50 shown, Bollinger(20, 2) available but hidden."""
    return [
        IndicatorSetting(IndicatorKind.SMA, {"period": SMA_SHORT_PERIOD}, visible=True),
        IndicatorSetting(IndicatorKind.SMA, {"period": SMA_LONG_PERIOD}, visible=True),
        IndicatorSetting(
            IndicatorKind.BOLLINGER,
            {"period": BOLLINGER_PERIOD, "num_std_dev": BOLLINGER_NUM_STD_DEV},
            visible=False,
        ),
    ]


@dataclass
class ChartConfig:
    """Configuration for one chart."""
    name: str = "default"
    description: str = ""

    # Data
    symbol: Optional[str] = None
    data_path: Optional[str] = None
    column: str = "close"

    # View
    days_to_show: int = DAYS_TO_SHOW

    # Engine
    max_workers: Optional[int] = None

    indicators: List[IndicatorSetting] = field(default_factory=default_indicator_settings)

    def __post_init__(self):
        if not (MIN_DAYS_TO_SHOW <= self.days_to_show <= MAX_DAYS_TO_SHOW):
            raise ValueError(
                f"days_to_show must be in [{MIN_DAYS_TO_SHOW}, {MAX_DAYS_TO_SHOW}], "
                f"got {self.days_to_show}"
            )
        if self.column not in PRICE_COLUMNS + ("volume",):
            raise ValueError(
                f"column must be one of {list(PRICE_COLUMNS) + ['volume']}, got '{self.column}'"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        # Build once so bad parameters fail here, not at render time
        labels = [setting.build().name() for setting in self.indicators]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise ValueError(f"Duplicate indicators in config: {duplicates}")

    def build_indicators(self) -> List[Indicator]:
        """Instantiate every configured indicator, in config order."""
        return [setting.build() for setting in self.indicators]

    def visible_labels(self) -> List[str]:
        """Labels of the indicators the chart should draw."""
        return [setting.build().name() for setting in self.indicators if setting.visible]


DEFAULT_CONFIG = ChartConfig()
