"""
Tests for individual indicator implementations.
"""
from decimal import Decimal

import pytest

from chartcore.data.mock import mock_series
from chartcore.indicators.base import Indicator, InvalidParameter
from chartcore.indicators.implementations import (
    INDICATOR_CLASSES,
    BollingerBands,
    MACDIndicator,
    RSIIndicator,
    SMAIndicator,
    build_indicator,
)
from chartcore.indicators.technical import bollinger, macd, rsi, sma
from chartcore.shared.types import IndicatorKind


@pytest.fixture
def sample_series():
    """Create a sample 120-day price series."""
    return mock_series("TEST", days=120, seed=9)


@pytest.fixture
def closes(sample_series):
    return sample_series.column("close")


class TestIndicatorInterface:
    """Test that all indicators implement the Indicator interface."""

    @pytest.mark.parametrize("cls", [SMAIndicator, BollingerBands, RSIIndicator, MACDIndicator])
    def test_implements_interface(self, cls):
        assert issubclass(cls, Indicator)

    def test_one_class_per_kind(self):
        assert set(INDICATOR_CLASSES) == set(IndicatorKind)
        for kind, cls in INDICATOR_CLASSES.items():
            assert cls.kind is kind


class TestSMAIndicator:
    """Test SMA indicator implementation."""

    def test_name(self):
        assert SMAIndicator(20).name() == "MA20"
        assert SMAIndicator(50).name() == "MA50"
        assert SMAIndicator(7).name() == "MA7"

    def test_calculate(self, closes):
        output = SMAIndicator(20).calculate(closes)
        assert output.name == "MA20"
        assert output.kind is IndicatorKind.SMA
        assert output.channel_names == ["sma"]
        assert output["sma"].values == sma(closes, 20)
        assert output.offset == 19

    def test_default_period(self):
        assert SMAIndicator().period == 20

    @pytest.mark.parametrize("period", [0, -5, 2.5, True])
    def test_invalid_period_at_construction(self, period):
        with pytest.raises(InvalidParameter):
            SMAIndicator(period)

    def test_compute_accepts_plain_numbers(self):
        output = SMAIndicator(3).compute([1, 2, 3, 4, 5])
        assert output["sma"].values == (Decimal(2), Decimal(3), Decimal(4))


class TestBollingerBands:
    """Test Bollinger Bands implementation."""

    def test_name(self):
        assert BollingerBands(20, 2).name() == "BB(20,2)"
        assert BollingerBands(20, "2.0").name() == "BB(20,2)"
        assert BollingerBands(10, "2.5").name() == "BB(10,2.5)"

    def test_channels(self, closes):
        output = BollingerBands(20, 2).calculate(closes)
        lower, middle, upper = bollinger(closes, 20, 2)
        assert output.channel_names == ["lower", "middle", "upper"]
        assert output["lower"].values == lower
        assert output["middle"].values == middle
        assert output["upper"].values == upper
        assert {c.offset for c in output.channels} == {19}

    def test_middle_equals_sma_indicator(self, closes):
        bands = BollingerBands(20, 2).calculate(closes)
        assert bands["middle"].values == SMAIndicator(20).calculate(closes)["sma"].values

    def test_defaults(self):
        bb = BollingerBands()
        assert bb.period == 20
        assert bb.num_std_dev == Decimal(2)

    @pytest.mark.parametrize("period,k", [(0, 2), (20, -1), (20, "x")])
    def test_invalid_parameters(self, period, k):
        with pytest.raises(InvalidParameter):
            BollingerBands(period, k)


class TestRSIIndicator:
    """Test RSI indicator implementation."""

    def test_name(self):
        assert RSIIndicator(14).name() == "RSI14"

    def test_calculate(self, closes):
        output = RSIIndicator(14).calculate(closes)
        assert output["rsi"].values == rsi(closes, 14)
        assert output.offset == 14
        assert len(output) == len(closes) - 14
        for value in output["rsi"]:
            assert 0 <= value <= 100

    def test_invalid_period(self):
        with pytest.raises(InvalidParameter):
            RSIIndicator(0)


class TestMACDIndicator:
    """Test MACD indicator implementation."""

    def test_name(self):
        assert MACDIndicator().name() == "MACD(12,26,9)"

    def test_components(self, closes):
        output = MACDIndicator(12, 26, 9).calculate(closes)
        line, signal, histogram = macd(closes, 12, 26, 9)
        assert output.channel_names == ["macd", "signal", "histogram"]
        assert output["macd"].values == line
        assert output["signal"].values == signal
        assert output["histogram"].values == histogram
        assert output.offset == 26 + 9 - 2

    def test_offset_points_at_last_price_used(self, sample_series):
        closes = sample_series.column("close")
        full = MACDIndicator(12, 26, 9).calculate(closes)
        # Recompute on the history that ends at the first anchored date
        cut = MACDIndicator(12, 26, 9).calculate(closes[:full.offset + 1])
        assert len(cut) == 1
        assert cut["histogram"][0] == full["histogram"][0]

    def test_invalid_periods(self):
        with pytest.raises(InvalidParameter, match="fast_period"):
            MACDIndicator(26, 12, 9)

    @pytest.mark.parametrize("fast,slow", [(12, 12), (27, 26)])
    def test_fast_must_be_shorter_than_slow(self, fast, slow):
        with pytest.raises(InvalidParameter, match="must be less than slow_period"):
            MACDIndicator(fast, slow, 9)


class TestBuildIndicator:
    """build_indicator() maps kinds to instances."""

    def test_by_kind(self):
        assert isinstance(build_indicator(IndicatorKind.SMA, period=5), SMAIndicator)
        assert isinstance(build_indicator(IndicatorKind.BOLLINGER), BollingerBands)
        assert isinstance(build_indicator(IndicatorKind.RSI, period=7), RSIIndicator)
        assert isinstance(build_indicator(IndicatorKind.MACD, fast=5, slow=10, signal=3), MACDIndicator)

    def test_by_string(self):
        assert build_indicator("SMA", period=5).name() == "MA5"
        assert build_indicator("bollinger", period=10, num_std_dev="1.5").name() == "BB(10,1.5)"

    def test_unknown_parameter(self):
        with pytest.raises(InvalidParameter, match="Invalid parameters for sma"):
            build_indicator(IndicatorKind.SMA, window=5)

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown indicator"):
            build_indicator("vwap")

    def test_invalid_value(self):
        with pytest.raises(InvalidParameter):
            build_indicator(IndicatorKind.RSI, period=0)
