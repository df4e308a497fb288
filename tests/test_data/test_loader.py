"""
Tests for the strict CSV loader.
"""
import io
from datetime import date
from decimal import Decimal

import pytest

from chartcore.data.errors import (
    InvalidDate,
    InvalidDecimal,
    InvalidSchema,
    InvalidVolume,
    IoFailure,
    LoadError,
    MalformedRow,
    SeriesInvariantViolation,
)
from chartcore.data.loader import SeriesLoader, load_series, write_series
from chartcore.data.mock import mock_series

HEADER = "date,open,high,low,close,volume"

VALID_ROWS = [
    "2024-01-02,100.00,101.50,99.25,101.00,1200000",
    "2024-01-03,101.00,102.00,100.10,100.50,950000",
    "2024-01-04,100.50,100.75,98.00,98.40,1800000",
]


def _csv(*rows: str, header: str = HEADER) -> str:
    return "\n".join([header, *rows]) + "\n"


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a temp file and return its path."""
    def _write(text: str, name: str = "prices.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


class TestLoadValid:
    """Well-formed files load into a PriceSeries."""

    def test_load_from_path(self, write_csv):
        path = write_csv(_csv(*VALID_ROWS))
        series = load_series(path, "ACME")

        assert series.symbol == "ACME"
        assert len(series) == 3
        first = series[0]
        assert first.date == date(2024, 1, 2)
        assert first.open == Decimal("100.00")
        assert first.high == Decimal("101.50")
        assert first.low == Decimal("99.25")
        assert first.close == Decimal("101.00")
        assert first.volume == 1200000

    def test_load_from_string_path(self, write_csv):
        path = write_csv(_csv(*VALID_ROWS))
        assert len(load_series(str(path), "ACME")) == 3

    def test_load_from_stream(self):
        series = load_series(io.StringIO(_csv(*VALID_ROWS)), "ACME")
        assert series.dates == (date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 4))

    def test_decimals_are_exact(self):
        series = load_series(io.StringIO(_csv("2024-01-02,0.1,0.3,0.1,0.2,1")), "X")
        assert series[0].close == Decimal("0.2")
        assert isinstance(series[0].close, Decimal)

    def test_header_only_gives_empty_series(self):
        series = load_series(io.StringIO(HEADER + "\n"), "X")
        assert len(series) == 0

    def test_byte_order_mark_tolerated(self, tmp_path):
        path = tmp_path / "bom.csv"
        path.write_bytes(b"\xef\xbb\xbf" + _csv(*VALID_ROWS).encode("utf-8"))
        assert len(load_series(path, "X")) == 3

    def test_windows_line_endings(self):
        text = "\r\n".join([HEADER, *VALID_ROWS]) + "\r\n"
        assert len(load_series(io.StringIO(text, newline=""), "X")) == 3

    def test_volume_beyond_int64(self):
        series = load_series(io.StringIO(_csv("2024-01-02,1,1,1,1,99999999999999999999")), "X")
        assert series[0].volume == 99999999999999999999
        assert series.to_frame()["volume"].iloc[0] == 99999999999999999999

    def test_decimal_literal_forms(self):
        series = load_series(io.StringIO(_csv("2024-01-02,5.,6,.5,+5.5,0")), "X")
        assert series[0].open == Decimal("5")
        assert series[0].low == Decimal("0.5")
        assert series[0].close == Decimal("5.5")


class TestSchema:
    """Header must match exactly."""

    @pytest.mark.parametrize("header", [
        "date,open,high,low,volume,close",  # reordered
        "date,open,high,low,close",  # missing column
        "date,open,high,low,close,volume,adj_close",  # extra column
        "Date,Open,High,Low,Close,Volume",  # case differs
        "date, open, high, low, close, volume",  # whitespace
    ])
    def test_header_mismatch(self, header):
        with pytest.raises(InvalidSchema):
            load_series(io.StringIO(_csv(*VALID_ROWS, header=header)), "X")

    def test_empty_source(self):
        with pytest.raises(InvalidSchema):
            load_series(io.StringIO(""), "X")

    def test_schema_error_details(self):
        with pytest.raises(InvalidSchema) as exc:
            load_series(io.StringIO(_csv(header="date,close")), "X")
        assert exc.value.found == ("date", "close")
        assert exc.value.expected[0] == "date"


class TestRowErrors:
    """The first bad row aborts the load with its line number."""

    def test_too_few_fields(self):
        text = _csv(VALID_ROWS[0], "2024-01-03,101.00,102.00,100.10,100.50")
        with pytest.raises(MalformedRow) as exc:
            load_series(io.StringIO(text), "X")
        assert exc.value.line == 3
        assert exc.value.field_count == 5

    def test_too_many_fields(self):
        with pytest.raises(MalformedRow):
            load_series(io.StringIO(_csv(VALID_ROWS[0] + ",1")), "X")

    def test_blank_line(self):
        text = HEADER + "\n" + VALID_ROWS[0] + "\n\n" + VALID_ROWS[1] + "\n"
        with pytest.raises(MalformedRow) as exc:
            load_series(io.StringIO(text), "X")
        assert exc.value.line == 3

    @pytest.mark.parametrize("value", [
        "2024/01/02", "02.01.2024", "2024-1-2", "2024-02-30", "20240102", "", "2024-01-02T00:00",
    ])
    def test_invalid_date(self, value):
        text = _csv(f"{value},100,101,99,100,1")
        with pytest.raises(InvalidDate) as exc:
            load_series(io.StringIO(text), "X")
        assert exc.value.line == 2
        assert exc.value.value == value

    @pytest.mark.parametrize("value", ["1,5", "1e3", "NaN", "Infinity", " 100", "", "abc", "1.2.3"])
    def test_invalid_decimal(self, value):
        text = _csv(f'2024-01-02,100,101,99,"{value}",1')
        with pytest.raises(InvalidDecimal) as exc:
            load_series(io.StringIO(text), "X")
        assert exc.value.column == "close"
        assert exc.value.line == 2

    @pytest.mark.parametrize("value", ["abc", "-5", "1.5", "", "1e6", " 7"])
    def test_invalid_volume_fails_instead_of_defaulting_to_zero(self, value):
        text = _csv(VALID_ROWS[0], f"2024-01-03,101.00,102.00,100.10,100.50,{value}")
        with pytest.raises(InvalidVolume) as exc:
            load_series(io.StringIO(text), "X")
        assert exc.value.line == 3

    def test_first_error_wins(self):
        text = _csv("2024-13-01,100,101,99,100,1", "2024-01-03,100,101,99,100,x")
        with pytest.raises(InvalidDate):
            load_series(io.StringIO(text), "X")

    def test_errors_are_load_errors_with_kind(self):
        with pytest.raises(LoadError) as exc:
            load_series(io.StringIO(_csv("2024-01-02,100,101,99,100,x")), "X")
        assert exc.value.kind == "invalid_volume"


class TestSeriesInvariants:
    """Ordering and OHLC checks after parsing."""

    def test_ohlc_violation(self):
        text = _csv(VALID_ROWS[0], "2024-01-03,101.00,102.00,100.10,102.50,950000")
        with pytest.raises(SeriesInvariantViolation) as exc:
            load_series(io.StringIO(text), "X")
        assert exc.value.date == date(2024, 1, 3)

    def test_low_above_high(self):
        with pytest.raises(SeriesInvariantViolation):
            load_series(io.StringIO(_csv("2024-01-02,100,99,101,100,1")), "X")

    def test_duplicate_date(self):
        text = _csv(VALID_ROWS[0], VALID_ROWS[0])
        with pytest.raises(SeriesInvariantViolation, match="duplicate"):
            load_series(io.StringIO(text), "X")

    def test_unsorted_dates(self):
        text = _csv(VALID_ROWS[1], VALID_ROWS[0])
        with pytest.raises(SeriesInvariantViolation) as exc:
            load_series(io.StringIO(text), "X")
        assert exc.value.date == date(2024, 1, 2)


class TestIoFailure:
    """I/O problems are reported separately from parse errors."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(IoFailure) as exc:
            load_series(tmp_path / "missing.csv", "X")
        assert exc.value.path == tmp_path / "missing.csv"
        assert not isinstance(exc.value, (InvalidSchema, MalformedRow))

    def test_directory(self, tmp_path):
        with pytest.raises(IoFailure):
            load_series(tmp_path, "X")

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.csv"
        path.write_bytes((HEADER + "\n2024-01-02,1,1,1,1,1 \xe9\n").encode("latin-1"))
        with pytest.raises(IoFailure):
            load_series(path, "X")

    def test_io_failure_chains_cause(self, tmp_path):
        with pytest.raises(IoFailure) as exc:
            load_series(tmp_path / "missing.csv", "X")
        assert isinstance(exc.value.__cause__, OSError)


class TestRoundTrip:
    """write_series() output loads back to an identical series."""

    def test_round_trip_file(self, tmp_path):
        original = load_series(io.StringIO(_csv(*VALID_ROWS)), "ACME")
        path = tmp_path / "out.csv"
        write_series(original, path)
        assert load_series(path, "ACME") == original

    def test_round_trip_mock(self):
        original = mock_series("DEMO", days=120, seed=11)
        buffer = io.StringIO()
        write_series(original, buffer)
        buffer.seek(0)
        assert load_series(buffer, "DEMO") == original

    def test_written_text_matches_input_format(self):
        original = load_series(io.StringIO(_csv(*VALID_ROWS)), "ACME")
        buffer = io.StringIO()
        write_series(original, buffer)
        assert buffer.getvalue() == _csv(*VALID_ROWS)

    def test_large_values_stay_plain(self):
        series = load_series(io.StringIO(_csv("2024-01-02,100000000,100000000,100000000,100000000,0")), "X")
        buffer = io.StringIO()
        write_series(series, buffer)
        assert "E" not in buffer.getvalue()


class TestSeriesLoader:
    """SeriesLoader binds a file and symbol, with optional date filter."""

    def test_default_symbol_from_file_name(self, write_csv):
        path = write_csv(_csv(*VALID_ROWS), name="acme.csv")
        loader = SeriesLoader(path)
        assert loader.symbol == "ACME"
        assert loader.load().symbol == "ACME"

    def test_date_range(self, write_csv):
        path = write_csv(_csv(*VALID_ROWS))
        series = SeriesLoader(path, "ACME").load(start_date="2024-01-03", end_date=date(2024, 1, 3))
        assert series.dates == (date(2024, 1, 3),)

    def test_range_applied_after_validation(self, write_csv):
        path = write_csv(_csv(*VALID_ROWS, "2024-01-05,1,1,1,1,bad"))
        with pytest.raises(InvalidVolume):
            SeriesLoader(path, "ACME").load(end_date="2024-01-02")
