"""Tests for the RSI engine.

Covers the Wilder worked example, the degenerate monotone cases,
the output length law and the NotComputable preconditions.
"""

import numpy as np
import pytest

from src.modules.indicators.rsi import RSIIndicator, rsi
from src.modules.indicators.types import NOT_COMPUTABLE, OutputSeries, RSIParams


def flat_rows(prices: list[float]) -> list[list[float]]:
    return [[p, p, p, p] for p in prices]


class TestRSI:
    """Tests for rsi()."""

    def test_wilder_example_single_point(self, wilder_rows) -> None:
        """15 closes with period 14 produce one point at the last x."""
        x, rows = wilder_rows
        result = rsi(x, rows, period=14, decimals=4)

        assert result.x_data == [14]
        assert result.y_data == [79.2182]

    def test_small_period_by_hand(self) -> None:
        """period=2 over 1,2,1,2 gives 50 then 75."""
        result = rsi([0, 1, 2, 3], flat_rows([1.0, 2.0, 1.0, 2.0]), period=2)
        assert result.values == [(2, 50.0), (3, 75.0)]

    def test_output_range(self, sample_rows) -> None:
        """RSI values should be between 0 and 100."""
        x, rows = sample_rows
        result = rsi(x, rows)
        assert result.y_data
        assert all(0 <= v <= 100 for v in result.y_data)

    def test_output_length(self, sample_rows) -> None:
        """Output has len(input) - period points starting at x[period]."""
        x, rows = sample_rows
        for period in (2, 7, 14, 30):
            result = rsi(x, rows, period=period)
            assert len(result.values) == len(rows) - period
            assert result.x_data[0] == x[period]

    def test_all_gains(self) -> None:
        """Strictly increasing closes report 100 everywhere."""
        closes = [100.0 + i for i in range(20)]
        result = rsi(list(range(20)), flat_rows(closes), period=14)
        assert len(result.values) == 6
        assert all(v == 100 for v in result.y_data)

    def test_all_losses(self) -> None:
        """Strictly decreasing closes report 0 everywhere."""
        closes = [120.0 - i for i in range(20)]
        result = rsi(list(range(20)), flat_rows(closes), period=14)
        assert len(result.values) == 6
        assert all(v == 0 for v in result.y_data)

    def test_flat_series_reports_100(self) -> None:
        """Zero average gain and loss resolves to 100, not 0."""
        result = rsi(list(range(20)), flat_rows([50.0] * 20), period=14)
        assert result.y_data == [100.0] * 6

    def test_rounding_precision(self, sample_rows) -> None:
        """Every value carries at most `decimals` fractional digits."""
        x, rows = sample_rows
        result = rsi(x, rows, decimals=2)
        assert all(round(v, 2) == v for v in result.y_data)

    def test_deterministic(self, sample_rows) -> None:
        """Identical inputs give identical outputs."""
        x, rows = sample_rows
        assert rsi(x, rows) == rsi(x, rows)

    def test_alignment(self, sample_rows) -> None:
        """values, x_data and y_data stay index-aligned."""
        x, rows = sample_rows
        result = rsi(x, rows, period=5)
        assert len(result.values) == len(result.x_data) == len(result.y_data)
        for i, pair in enumerate(result.values):
            assert pair == (result.x_data[i], result.y_data[i])

    def test_numpy_rows(self, wilder_rows) -> None:
        """Rows may be numpy arrays."""
        x, rows = wilder_rows
        result = rsi(x, list(np.array(rows)), period=14)
        assert result.y_data == [79.2182]

    def test_does_not_modify_input(self, wilder_rows) -> None:
        """Input sequences are left untouched."""
        x, rows = wilder_rows
        x_before = list(x)
        rows_before = [list(r) for r in rows]
        rsi(x, rows)
        assert x == x_before
        assert rows == rows_before

    def test_length_equal_to_period_is_empty(self) -> None:
        """Exactly `period` points: computable but nothing to emit."""
        result = rsi(list(range(14)), flat_rows([1.0] * 14), period=14)
        assert isinstance(result, OutputSeries)
        assert result.is_empty

    def test_too_short(self) -> None:
        """Fewer than `period` points is not computable."""
        result = rsi(list(range(13)), flat_rows([1.0] * 13), period=14)
        assert result is NOT_COMPUTABLE

    def test_close_only_rows(self) -> None:
        """Scalar rows carry no close field."""
        result = rsi(list(range(20)), [float(i) for i in range(20)], period=14)
        assert result is NOT_COMPUTABLE

    def test_wrong_row_width(self) -> None:
        """Rows must have exactly four fields."""
        rows = [[1.0, 2.0, 0.5, 1.5, 100.0] for _ in range(20)]
        assert rsi(list(range(20)), rows) is NOT_COMPUTABLE

    def test_length_mismatch(self) -> None:
        """x and y must be the same length."""
        assert rsi(list(range(20)), flat_rows([1.0] * 19)) is NOT_COMPUTABLE

    def test_period_too_small(self) -> None:
        with pytest.raises(ValueError, match="Period"):
            rsi(list(range(5)), flat_rows([1.0] * 5), period=1)

    def test_decimals_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="Decimals"):
            rsi(list(range(20)), flat_rows([1.0] * 20), decimals=101)

    def test_high_precision_over_large_prices(self) -> None:
        """30 decimals over four-digit closes stays computable."""
        closes = [1000.0 + (i % 3) * 0.37 - i * 0.1 for i in range(20)]
        result = rsi(list(range(20)), flat_rows(closes), period=14, decimals=30)

        assert isinstance(result, OutputSeries)
        assert len(result.values) == 6
        assert all(0.0 <= v <= 100.0 for v in result.y_data)


class TestRSIIndicator:
    """Tests for the registry adapter."""

    def test_defaults(self) -> None:
        assert RSIIndicator().default_params() == RSIParams(period=14, decimals=4)

    def test_compute_uses_params(self, sample_rows) -> None:
        x, rows = sample_rows
        indicator = RSIIndicator()
        result = indicator.compute(x, rows, RSIParams(period=7))
        assert result == rsi(x, rows, period=7)

    def test_parse_params_falls_back_to_configured_defaults(self) -> None:
        indicator = RSIIndicator(RSIParams(period=21, decimals=2))
        params = indicator.parse_params({"decimals": 3})
        assert params == RSIParams(period=21, decimals=3)

    def test_series_name(self) -> None:
        assert RSIIndicator().series_name(RSIParams(period=9)) == "RSI (9)"

    def test_bad_params(self) -> None:
        with pytest.raises(ValueError, match="Period"):
            RSIIndicator().parse_params({"period": 1})
