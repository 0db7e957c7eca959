"""Shared fixtures for indicator tests.

All data is static and deterministic. No network calls, no randomness.
"""

from datetime import date

import numpy as np
import pandas as pd
import pytest

# Closes from the classic Wilder RSI worked example
WILDER_CLOSES = [
    44.0, 44.5, 43.9, 44.5, 45.0, 45.5, 46.0, 46.5,
    47.0, 46.5, 46.0, 47.0, 47.5, 48.0, 48.5,
]


def flat_rows(prices: list[float]) -> list[list[float]]:
    """OHLC rows where open == high == low == close."""
    return [[p, p, p, p] for p in prices]


@pytest.fixture
def wilder_rows() -> tuple[list[int], list[list[float]]]:
    """15 points of the Wilder example as (x, OHLC rows)."""
    return list(range(len(WILDER_CLOSES))), flat_rows(WILDER_CLOSES)


@pytest.fixture
def sample_ohlc() -> pd.DataFrame:
    """60 business days of oscillating OHLC data with a slow uptrend.

    Swings of roughly +/-5% make Zig Zag emit several pivots at 1%.
    """
    n = 60
    dates = pd.bdate_range(start=date(2024, 1, 2), periods=n)
    steps = np.arange(n)

    close = 100.0 + 5.0 * np.sin(steps / 4.0) + 0.1 * steps
    open_ = close - 0.2
    high = close + 0.5
    low = open_ - 0.3

    return pd.DataFrame(
        {"open": open_, "high": high, "low": low, "close": close},
        index=dates,
    )


@pytest.fixture
def sample_rows(sample_ohlc: pd.DataFrame) -> tuple[list[int], list[list[float]]]:
    """`sample_ohlc` as plain (x, rows) with integer x values."""
    rows = sample_ohlc[["open", "high", "low", "close"]].to_numpy().tolist()
    return list(range(len(rows))), rows


@pytest.fixture
def v_shape_rows() -> tuple[list[int], list[list[float]]]:
    """Price drops 5% from 100 to 95, then rises 5% to 99.75."""
    prices = [100.0, 98.0, 96.0, 95.0, 97.0, 99.0, 99.75]
    return list(range(len(prices))), flat_rows(prices)


@pytest.fixture
def flat_band_rows() -> tuple[list[int], list[list[float]]]:
    """20 points whose highs and lows stay within 0.5% of 100."""
    rows = [[100.0, 100.25, 99.75, 100.0] for _ in range(20)]
    return list(range(20)), rows
