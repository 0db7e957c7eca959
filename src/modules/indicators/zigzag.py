"""Zig Zag: confirmed swing highs and lows filtered by a deviation threshold.

The scan is an explicit state machine:

    SEEKING_FIRST_REVERSAL --low breaks below first high--> TRACKING_UP
    SEEKING_FIRST_REVERSAL --high breaks above first low--> TRACKING_DOWN
    TRACKING_UP   --high clears trough by deviation--> TRACKING_DOWN
    TRACKING_DOWN --low clears peak by deviation-----> TRACKING_UP

TRACKING_UP holds a pending trough (the next leg goes up); TRACKING_DOWN
holds a pending peak. A pivot is emitted on every phase change.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping, Sequence

from src.modules.indicators.types import (
    NOT_COMPUTABLE,
    IndicatorResult,
    OutputSeries,
    ZigZagParams,
)


class ZigZagPhase(Enum):
    """Scanner phase."""

    SEEKING_FIRST_REVERSAL = "SEEKING_FIRST_REVERSAL"
    TRACKING_UP = "TRACKING_UP"
    TRACKING_DOWN = "TRACKING_DOWN"


@dataclass(frozen=True)
class Pivot:
    """A point on the zig zag line."""

    timestamp: Any
    value: float


@dataclass(frozen=True)
class Thresholds:
    """Multipliers derived from the deviation percent.

    Attributes:
        high_deviation: A low at or below peak * high_deviation reverses down.
        low_deviation: A high at or above trough * low_deviation reverses up.
    """

    high_deviation: float
    low_deviation: float

    @classmethod
    def from_percent(cls, deviation: float) -> Thresholds:
        fraction = deviation / 100
        return cls(high_deviation=1 - fraction, low_deviation=1 + fraction)


@dataclass(frozen=True)
class ZigZagState:
    """Scanner state.

    While seeking, `peak` and `trough` both come from the first row.
    While tracking, only the candidate for the current phase is meaningful.
    """

    phase: ZigZagPhase
    peak: Pivot | None = None
    trough: Pivot | None = None

    @classmethod
    def seeking(cls, timestamp: Any, high: float, low: float) -> ZigZagState:
        return cls(
            phase=ZigZagPhase.SEEKING_FIRST_REVERSAL,
            peak=Pivot(timestamp, high),
            trough=Pivot(timestamp, low),
        )

    @property
    def candidate(self) -> Pivot | None:
        """Pending extremum that becomes the closing pivot at the tail."""
        if self.phase is ZigZagPhase.TRACKING_UP:
            return self.trough
        if self.phase is ZigZagPhase.TRACKING_DOWN:
            return self.peak
        return None


def transition(
    state: ZigZagState,
    timestamp: Any,
    low: float | None,
    high: float | None,
    thresholds: Thresholds,
) -> tuple[ZigZagState, Pivot | None]:
    """Advance the scanner by one row.

    Args:
        state: Current state.
        timestamp: Row timestamp.
        low: Row low, or None if the row has none.
        high: Row high, or None if the row has none.
        thresholds: Reversal multipliers.

    Returns:
        (next state, confirmed pivot or None).
    """
    if state.phase is ZigZagPhase.SEEKING_FIRST_REVERSAL:
        # Low is checked first: a row breaking both ways starts a down leg
        if _at_or_below(low, state.peak.value * thresholds.high_deviation):
            return ZigZagState(ZigZagPhase.TRACKING_UP, trough=Pivot(timestamp, low)), state.peak
        if _at_or_above(high, state.trough.value * thresholds.low_deviation):
            return ZigZagState(ZigZagPhase.TRACKING_DOWN, peak=Pivot(timestamp, high)), state.trough
        return state, None

    if state.phase is ZigZagPhase.TRACKING_UP:
        if _at_or_below(low, state.trough.value):
            return replace(state, trough=Pivot(timestamp, low)), None
        if _at_or_above(high, state.trough.value * thresholds.low_deviation):
            return ZigZagState(ZigZagPhase.TRACKING_DOWN, peak=Pivot(timestamp, high)), state.trough
        return state, None

    if _at_or_above(high, state.peak.value):
        return replace(state, peak=Pivot(timestamp, high)), None
    if _at_or_below(low, state.peak.value * thresholds.high_deviation):
        return ZigZagState(ZigZagPhase.TRACKING_UP, trough=Pivot(timestamp, low)), state.peak
    return state, None


def zigzag(
    x_values: Sequence[Any],
    y_values: Sequence[Any],
    low_index: int = 2,
    high_index: int = 1,
    deviation: float = 1.0,
) -> IndicatorResult:
    """Calculate Zig Zag pivots.

    Args:
        x_values: Strictly increasing timestamps.
        y_values: Rows aligned to x_values holding low and high fields.
        low_index: Field index of the low value.
        high_index: Field index of the high value.
        deviation: Minimum reversal move in percent.

    Returns:
        OutputSeries of pivots. Empty if no move ever clears the deviation
        from the first row. NOT_COMPUTABLE with fewer than two points or
        when the first row has no low/high.
    """
    if len(x_values) <= 1 or len(y_values) != len(x_values):
        return NOT_COMPUTABLE

    first_low = _field(y_values[0], low_index)
    first_high = _field(y_values[0], high_index)
    if first_low is None or first_high is None:
        return NOT_COMPUTABLE

    thresholds = Thresholds.from_percent(deviation)
    state = ZigZagState.seeking(x_values[0], first_high, first_low)
    pivots: list[Pivot] = []

    for i in range(1, len(y_values)):
        row = y_values[i]
        state, pivot = transition(
            state,
            x_values[i],
            _field(row, low_index),
            _field(row, high_index),
            thresholds,
        )
        if pivot is not None:
            pivots.append(pivot)

    # Close the line on the pending candidate
    if pivots and pivots[-1].timestamp < x_values[-1]:
        pivots.append(state.candidate)

    return OutputSeries.from_points([(p.timestamp, p.value) for p in pivots])


def _field(row: Any, index: int) -> float | None:
    """Return row[index], or None for scalars, short rows and None fields."""
    try:
        return row[index]
    except (IndexError, TypeError, KeyError):
        return None


def _at_or_below(value: float | None, limit: float) -> bool:
    return value is not None and value <= limit


def _at_or_above(value: float | None, limit: float) -> bool:
    return value is not None and value >= limit


class ZigZagIndicator:
    """Registry adapter around `zigzag`."""

    name = "zigzag"

    def __init__(self, defaults: ZigZagParams | None = None) -> None:
        self._defaults = defaults or ZigZagParams()

    def default_params(self) -> ZigZagParams:
        return self._defaults

    def parse_params(self, options: Mapping[str, Any]) -> ZigZagParams:
        return ZigZagParams.from_options(options, self._defaults)

    def compute(
        self,
        x_values: Sequence[Any],
        y_values: Sequence[Any],
        params: ZigZagParams,
    ) -> IndicatorResult:
        return zigzag(
            x_values,
            y_values,
            low_index=params.low_index,
            high_index=params.high_index,
            deviation=params.deviation,
        )

    def series_name(self, params: ZigZagParams) -> str:
        return f"Zig Zag ({params.deviation:g}%)"
