#!/usr/bin/env python3
"""
Indicator CLI.

Loads a daily OHLCV CSV (or generates a demo series), computes the configured
indicators and prints the chart table: OHLCV plus one column per visible
indicator channel, restricted to the most recent days.
"""
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from chartcore.config import ChartConfig
from chartcore.config_loader import load_config_from_yaml
from chartcore.data import LoadError, load_series, mock_series
from chartcore.indicators import (
    BollingerBands,
    Indicator,
    InvalidParameter,
    MACDIndicator,
    RSIIndicator,
    SMAIndicator,
    build_chart_frame,
    compute_indicators,
)
from chartcore.shared.defaults import MAX_DAYS_TO_SHOW, MIN_DAYS_TO_SHOW


def setup_logging(verbose: bool = False):
    """
    Setup logging to stderr (stdout carries the table).

    Args:
        verbose: If True, use DEBUG level, otherwise WARNING
    """
    level = logging.DEBUG if verbose else logging.WARNING

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute chart indicators (SMA, Bollinger, RSI, MACD) for a daily OHLCV CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Default chart (MA20, MA50) for a file
    python -m cli.indicators data/AAPL.csv --symbol AAPL

    # Indicator set from a config file
    python -m cli.indicators data/AAPL.csv --config configs/momentum.yaml

    # Explicit indicators on 200 days of generated data
    python -m cli.indicators --demo 200 --sma 20 --rsi 14 --macd 12 26 9

    # Write the full table to CSV
    python -m cli.indicators data/AAPL.csv --days 365 --output aapl_chart.csv
        """
    )
    parser.add_argument("csv", nargs="?", help="Path to date,open,high,low,close,volume CSV")
    parser.add_argument("--symbol", help="Ticker symbol (default: config symbol or file name)")
    parser.add_argument("--config", help="Chart config YAML (indicators, days, column)")
    parser.add_argument(
        "--demo", type=int, metavar="DAYS",
        help="Use a generated random-walk series of DAYS trading days instead of a file"
    )
    parser.add_argument("--seed", type=int, default=42, help="Seed for --demo (default: 42)")
    parser.add_argument(
        "--sma", type=int, action="append", metavar="PERIOD",
        help="Add a simple moving average (repeatable)"
    )
    parser.add_argument(
        "--bollinger", nargs=2, metavar=("PERIOD", "K"),
        help="Add Bollinger Bands with PERIOD and K standard deviations"
    )
    parser.add_argument("--rsi", type=int, metavar="PERIOD", help="Add RSI (Wilder)")
    parser.add_argument(
        "--macd", type=int, nargs=3, metavar=("FAST", "SLOW", "SIGNAL"),
        help="Add MACD"
    )
    parser.add_argument(
        "--column", choices=["open", "high", "low", "close", "volume"],
        help="Input column for the indicators (default: config column or close)"
    )
    parser.add_argument(
        "--days", type=int,
        help=f"Number of most recent days to show ({MIN_DAYS_TO_SHOW}-{MAX_DAYS_TO_SHOW})"
    )
    parser.add_argument("--all", action="store_true", help="Also show indicators hidden in the config")
    parser.add_argument("--workers", type=int, help="Compute indicators on N threads")
    parser.add_argument("--output", help="Write the table to this CSV instead of printing it")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging (DEBUG level)")
    return parser


def indicators_from_args(args: argparse.Namespace) -> List[Indicator]:
    """Indicators given explicitly on the command line (empty if none)."""
    indicators: List[Indicator] = []
    for period in args.sma or []:
        indicators.append(SMAIndicator(period))
    if args.bollinger:
        period, k = args.bollinger
        try:
            period = int(period)
        except ValueError:
            raise InvalidParameter(f"Bollinger period must be an integer, got '{period}'") from None
        indicators.append(BollingerBands(period, k))
    if args.rsi is not None:
        indicators.append(RSIIndicator(args.rsi))
    if args.macd:
        indicators.append(MACDIndicator(*args.macd))
    return indicators


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = load_config_from_yaml(args.config) if args.config else ChartConfig()
        if args.days is not None:
            # CLI > config; replace() re-runs validation
            config = replace(config, days_to_show=args.days)

        csv_path = args.csv or config.data_path
        symbol = args.symbol or config.symbol or (Path(csv_path).stem.upper() if csv_path else "DEMO")
        column = args.column or config.column

        explicit = indicators_from_args(args)
        if explicit:
            indicators = explicit
            visible = [ind.name() for ind in indicators]
        else:
            indicators = config.build_indicators()
            visible = [ind.name() for ind in indicators] if args.all else config.visible_labels()

        if args.demo is not None:
            series = mock_series(symbol, days=args.demo, seed=args.seed)
        elif csv_path:
            series = load_series(csv_path, symbol)
        else:
            parser.error("a CSV path (or data.path in --config) or --demo is required")

        logger.info(f"Computing {len(indicators)} indicator(s) on {series!r}")
        outputs = compute_indicators(
            series, indicators, column=column, max_workers=args.workers or config.max_workers
        )
    except LoadError as e:
        logger.debug(f"Load failed: {e.kind}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # InvalidParameter and config validation errors
        print(f"Error: {e}", file=sys.stderr)
        return 1

    shown = {label: outputs[label] for label in visible}
    frame = build_chart_frame(series, shown, days_to_show=config.days_to_show)

    if args.output:
        frame.to_csv(args.output)
        print(f"Wrote {len(frame)} rows to {args.output}")
    else:
        print(f"{series.symbol}: {len(series)} days, showing last {len(frame)}")
        print(frame.to_string())
    return 0


if __name__ == "__main__":
    sys.exit(main())
