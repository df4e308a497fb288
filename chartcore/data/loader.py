"""
Strict CSV loader for daily OHLCV price data.

Loads `date,open,high,low,close,volume` files into a validated PriceSeries:
- Header must match exactly (no column reordering)
- Rows are parsed in file order; the first bad row aborts the load
- Prices are exact decimals, volume a non-negative integer, dates YYYY-MM-DD
- Series invariants (order, uniqueness, OHLC ranges) are checked after parsing
Fail-fast approach: raises a LoadError subclass, never returns a partial series.
"""
import csv
import io
import logging
import os
import re
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import IO, List, Optional, Sequence, Union

from .errors import (
    InvalidDate,
    InvalidDecimal,
    InvalidSchema,
    InvalidVolume,
    IoFailure,
    MalformedRow,
)
from .model import PriceRecord, PriceSeries
from ..shared.defaults import CSV_COLUMNS, PRICE_COLUMNS

logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike, IO[str]]

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_DECIMAL_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)", re.ASCII)
_VOLUME_RE = re.compile(r"\d+", re.ASCII)


def _read_text(source: Source) -> str:
    """Read the whole source in one pass. Any I/O or decoding problem is an IoFailure."""
    if hasattr(source, "read"):
        path = getattr(source, "name", None)
        try:
            text = source.read()
        except (OSError, UnicodeDecodeError) as e:
            raise IoFailure(path if isinstance(path, str) else None, str(e)) from e
        if isinstance(text, bytes):
            try:
                text = text.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise IoFailure(None, str(e)) from e
        if text.startswith("\ufeff"):
            text = text[1:]
        return text

    path = Path(source)
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise IoFailure(path, f"{type(e).__name__}: {e}") from e


def _parse_date(text: str, line: int) -> date:
    if not _DATE_RE.fullmatch(text):
        raise InvalidDate(line, text)
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise InvalidDate(line, text) from None


def _parse_decimal(text: str, line: int, column: str) -> Decimal:
    if not _DECIMAL_RE.fullmatch(text):
        raise InvalidDecimal(line, column, text)
    return Decimal(text)


def _parse_volume(text: str, line: int) -> int:
    if not _VOLUME_RE.fullmatch(text):
        raise InvalidVolume(line, text)
    return int(text)


def parse_row(fields: Sequence[str], line: int) -> PriceRecord:
    """
    Parse one data row into a PriceRecord.

    Args:
        fields: Raw field strings in CSV column order
        line: 1-based line number, used in error reports

    Returns:
        PriceRecord (not yet checked against series invariants)

    Raises:
        MalformedRow, InvalidDate, InvalidDecimal, InvalidVolume
    """
    if len(fields) != len(CSV_COLUMNS):
        raise MalformedRow(line, len(fields), len(CSV_COLUMNS))
    record_date = _parse_date(fields[0], line)
    prices = {
        column: _parse_decimal(text, line, column)
        for column, text in zip(PRICE_COLUMNS, fields[1:5])
    }
    volume = _parse_volume(fields[5], line)
    return PriceRecord(date=record_date, volume=volume, **prices)


def load_series(source: Source, symbol: str) -> PriceSeries:
    """
    Load a price series from a CSV file path or open text stream.

    Args:
        source: Path to the CSV file, or a readable text stream
        symbol: Ticker symbol to attach to the series

    Returns:
        Validated PriceSeries

    Raises:
        IoFailure: Source missing, unreadable, or not UTF-8
        InvalidSchema: Header is not exactly date,open,high,low,close,volume
        MalformedRow, InvalidDate, InvalidDecimal, InvalidVolume: First bad row
        SeriesInvariantViolation: Ordering, duplicate or OHLC violation
    """
    text = _read_text(source)
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)

    try:
        header = next(reader)
    except StopIteration:
        header = []
    except csv.Error:
        raise InvalidSchema([], CSV_COLUMNS) from None
    if tuple(header) != CSV_COLUMNS:
        raise InvalidSchema(header, CSV_COLUMNS)

    records: List[PriceRecord] = []
    while True:
        try:
            fields = next(reader)
        except StopIteration:
            break
        except csv.Error:
            raise MalformedRow(reader.line_num, 0, len(CSV_COLUMNS)) from None
        records.append(parse_row(fields, reader.line_num))

    series = PriceSeries(symbol, records)
    if series:
        logger.debug(
            f"Loaded {len(series)} records for {symbol} "
            f"({series.first_date}..{series.last_date})"
        )
    else:
        logger.debug(f"Loaded empty series for {symbol}")
    return series


def _format_decimal(value: Decimal) -> str:
    # Plain notation so the loader's literal rules accept it back unchanged
    return format(value, "f")


def write_series(series: PriceSeries, target: Union[str, os.PathLike, IO[str]]) -> None:
    """
    Write a series in the loader's input format.

    load_series(write_series(s)) reproduces s exactly.
    """
    if hasattr(target, "write"):
        _write_rows(series, target)
        return
    path = Path(target)
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            _write_rows(series, f)
    except OSError as e:
        raise IoFailure(path, f"{type(e).__name__}: {e}") from e


def _write_rows(series: PriceSeries, stream: IO[str]) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for r in series:
        writer.writerow([
            r.date.isoformat(),
            _format_decimal(r.open),
            _format_decimal(r.high),
            _format_decimal(r.low),
            _format_decimal(r.close),
            str(r.volume),
        ])


class SeriesLoader:
    """
    Loads one symbol's price file.

    Optionally restricts the loaded series to a date range, after the whole
    file has been validated.
    """

    def __init__(self, data_path: Union[str, Path], symbol: Optional[str] = None):
        """
        Initialize the loader.

        Args:
            data_path: Path to the CSV file containing the data
            symbol: Ticker symbol (default: file stem, upper-cased)
        """
        self.data_path = Path(data_path)
        self.symbol = symbol or self.data_path.stem.upper()

    def load(
        self,
        start_date: Optional[Union[str, date]] = None,
        end_date: Optional[Union[str, date]] = None,
    ) -> PriceSeries:
        """
        Load and validate the file, then apply the optional date range.

        Args:
            start_date: Start date for filtering (inclusive). If None, no start filter.
            end_date: End date for filtering (inclusive). If None, no end filter.

        Returns:
            PriceSeries
        """
        series = load_series(self.data_path, self.symbol)
        if start_date is None and end_date is None:
            return series
        return series.between(_as_date(start_date), _as_date(end_date))


def _as_date(value: Optional[Union[str, date]]) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(value)


__all__ = ['SeriesLoader', 'load_series', 'write_series', 'parse_row']
