"""Input adapter: pandas objects -> (x_values, y_values).

Indicators work on plain aligned sequences. This module turns an OHLC
DataFrame (or a close-only Series) into that shape. DatetimeIndex values
become epoch milliseconds, the x convention of charting hosts.
"""

from typing import Any, Sequence

import pandas as pd

# Column order of an OHLC row
OHLC_COLUMNS = ("open", "high", "low", "close")


def from_frame(
    df: pd.DataFrame,
    columns: Sequence[str] = OHLC_COLUMNS,
) -> tuple[list[Any], list[list[float]]]:
    """Convert an OHLC DataFrame into x values and OHLC rows.

    Args:
        df: DataFrame with the given columns, indexed by date or number.
        columns: Column names forming each row, in row order.

    Returns:
        (x_values, y_values) with one row per DataFrame row.

    Raises:
        ValueError: If columns are missing or the index is not strictly
            increasing.
    """
    missing = set(columns) - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {sorted(missing)}")

    x_values = _index_to_x(df.index)
    y_values = df[list(columns)].to_numpy(dtype=float).tolist()
    return x_values, y_values


def from_series(close: pd.Series) -> tuple[list[Any], list[float]]:
    """Convert a close-only Series into x values and scalar rows.

    Raises:
        ValueError: If the index is not strictly increasing.
    """
    return _index_to_x(close.index), close.astype(float).tolist()


def _index_to_x(index: pd.Index) -> list[Any]:
    if not (index.is_monotonic_increasing and index.is_unique):
        raise ValueError("Index must be strictly increasing")

    if isinstance(index, pd.DatetimeIndex):
        epoch = pd.Timestamp("1970-01-01", tz=index.tz)
        return ((index - epoch) // pd.Timedelta(milliseconds=1)).tolist()

    return index.tolist()
