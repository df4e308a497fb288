"""
Indicator engine.

Runs a set of indicators over one price series and hands the results to the
presentation layer as a single date-indexed table. Indicators are
independent pure computations on a read-only series, so they can run on a
thread pool without any locking.
"""
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Mapping, Optional, Sequence

import pandas as pd

from .base import Indicator, IndicatorOutput
from ..data.model import PriceSeries

logger = logging.getLogger(__name__)


def compute_indicators(
    series: PriceSeries,
    indicators: Sequence[Indicator],
    column: str = "close",
    max_workers: Optional[int] = None,
    timings: Optional[Dict[str, float]] = None,
) -> Dict[str, IndicatorOutput]:
    """
    Calculate every indicator on one column of a series.

    Args:
        series: Source price series (never modified)
        indicators: Indicators to run; labels must be unique
        column: Column to feed the indicators (default: close)
        max_workers: Thread pool size; None or 1 = sequential
        timings: If provided, accumulate per-indicator elapsed seconds by label

    Returns:
        Mapping label -> IndicatorOutput, in the order of `indicators`
    """
    labels = [ind.name() for ind in indicators]
    duplicates = sorted({label for label in labels if labels.count(label) > 1})
    if duplicates:
        raise ValueError(f"Duplicate indicator labels: {duplicates}")

    values = series.column(column)

    def run(indicator: Indicator):
        t0 = time.perf_counter()
        output = indicator.calculate(values)
        return output, time.perf_counter() - t0

    if max_workers is not None and max_workers > 1 and len(indicators) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(run, indicators))
    else:
        results = [run(ind) for ind in indicators]

    outputs: Dict[str, IndicatorOutput] = {}
    for label, (output, elapsed) in zip(labels, results):
        outputs[label] = output
        if timings is not None:
            timings[label] = timings.get(label, 0.0) + elapsed
        logger.debug(f"{label} on {series.symbol}.{column}: {len(output)} values ({elapsed:.4f}s)")
    return outputs


def build_chart_frame(
    series: PriceSeries,
    outputs: Mapping[str, IndicatorOutput],
    days_to_show: Optional[int] = None,
) -> pd.DataFrame:
    """
    Build the table the chart renders: OHLCV plus every indicator channel.

    Indicator columns are named '<label>' for single-channel indicators and
    '<label>.<channel>' otherwise; cells before an indicator's first anchored
    date are None. Indicators are expected to be computed on the full
    history; days_to_show only trims the rows shown.

    Args:
        series: Source price series
        outputs: Result of compute_indicators()
        days_to_show: Keep only the most recent N rows (None = all)

    Returns:
        DataFrame indexed by date
    """
    frame = series.to_frame()
    for label, output in outputs.items():
        channels = output.to_frame(series)
        if len(output.channels) == 1:
            channels.columns = [label]
        else:
            channels.columns = [f"{label}.{c}" for c in channels.columns]
        frame = frame.join(channels)
    if days_to_show is not None:
        if days_to_show < 0:
            raise ValueError(f"days_to_show must be >= 0, got {days_to_show}")
        frame = frame.iloc[max(0, len(frame) - days_to_show):]
    return frame


__all__ = ['compute_indicators', 'build_chart_frame']
