"""Relative Strength Index with Wilder smoothing.

Every intermediate value is rounded to `decimals` fractional digits
right after it is computed, and the rounded value is what later steps
use. Results therefore depend on the rounding order below.
"""

from typing import Any, Mapping, Sequence

import numpy as np

from src.modules.indicators.rounding import round_to
from src.modules.indicators.types import (
    MAX_DECIMALS,
    NOT_COMPUTABLE,
    IndicatorResult,
    OutputSeries,
    RSIParams,
)

# Close field of an OHLC row
CLOSE_INDEX = 3

OHLC_WIDTH = 4


def rsi(
    x_values: Sequence[Any],
    y_values: Sequence[Any],
    period: int = 14,
    decimals: int = 4,
) -> IndicatorResult:
    """Calculate RSI over OHLC rows.

    Args:
        x_values: Strictly increasing timestamps.
        y_values: [open, high, low, close] rows aligned to x_values.
        period: Smoothing period (>= 2).
        decimals: Fractional digits for intermediate rounding.

    Returns:
        OutputSeries with len(y_values) - period points, starting at
        x_values[period]. NOT_COMPUTABLE if there are fewer than `period`
        points or the rows are not OHLC rows.

    Raises:
        ValueError: If period < 2 or decimals is outside 0..MAX_DECIMALS.
    """
    if period < 2:
        raise ValueError(f"Period must be >= 2, got {period}")
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ValueError(f"Decimals must be between 0 and {MAX_DECIMALS}, got {decimals}")

    if len(x_values) < period or len(y_values) != len(x_values):
        return NOT_COMPUTABLE
    if not all(_is_ohlc_row(row) for row in y_values):
        return NOT_COMPUTABLE

    close = [row[CLOSE_INDEX] for row in y_values]

    # Seed averages from the first period - 1 changes
    gain = 0.0
    loss = 0.0
    for i in range(1, period):
        change = round_to(close[i] - close[i - 1], decimals)
        if change > 0:
            gain += change
        else:
            loss += abs(change)

    avg_gain = round_to(gain / (period - 1), decimals)
    avg_loss = round_to(loss / (period - 1), decimals)

    points = []
    for i in range(period, len(close)):
        change = round_to(close[i] - close[i - 1], decimals)
        if change > 0:
            gain, loss = change, 0.0
        else:
            gain, loss = 0.0, abs(change)

        avg_gain = round_to((avg_gain * (period - 1) + gain) / period, decimals)
        avg_loss = round_to((avg_loss * (period - 1) + loss) / period, decimals)

        # avg_loss is checked first: a flat series reports 100
        if avg_loss == 0:
            value = 100.0
        elif avg_gain == 0:
            value = 0.0
        else:
            value = round_to(100 - 100 / (1 + avg_gain / avg_loss), decimals)

        points.append((x_values[i], value))

    return OutputSeries.from_points(points)


def _is_ohlc_row(row: Any) -> bool:
    return isinstance(row, (list, tuple, np.ndarray)) and len(row) == OHLC_WIDTH


class RSIIndicator:
    """Registry adapter around `rsi`."""

    name = "rsi"

    def __init__(self, defaults: RSIParams | None = None) -> None:
        self._defaults = defaults or RSIParams()

    def default_params(self) -> RSIParams:
        return self._defaults

    def parse_params(self, options: Mapping[str, Any]) -> RSIParams:
        return RSIParams.from_options(options, self._defaults)

    def compute(
        self,
        x_values: Sequence[Any],
        y_values: Sequence[Any],
        params: RSIParams,
    ) -> IndicatorResult:
        return rsi(x_values, y_values, period=params.period, decimals=params.decimals)

    def series_name(self, params: RSIParams) -> str:
        return f"RSI ({params.period})"
