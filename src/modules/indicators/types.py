"""Indicator data model.

Parameter sets, the aligned output structure, the NotComputable sentinel
and the protocol every indicator implements.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Literal, Mapping, Protocol, Sequence, Union

import pandas as pd

# Widest rounding a host charting library accepts
MAX_DECIMALS = 100


class NotComputable(Enum):
    """Sentinel returned when the input cannot produce an indicator.

    Distinct from an empty result: the host should skip drawing entirely.
    Falsy, so ``if not result`` works, but compare with ``is``.
    """

    TOKEN = "NOT_COMPUTABLE"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_COMPUTABLE"


NOT_COMPUTABLE = NotComputable.TOKEN


@dataclass
class OutputSeries:
    """Indicator output exposed as three index-aligned views.

    Attributes:
        values: (x, y) pairs.
        x_data: Bare x values (timestamps).
        y_data: Bare indicator values.
    """

    values: list[tuple[Any, float]] = field(default_factory=list)
    x_data: list[Any] = field(default_factory=list)
    y_data: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not (len(self.values) == len(self.x_data) == len(self.y_data)):
            raise ValueError(
                f"Misaligned output: values={len(self.values)}, "
                f"x_data={len(self.x_data)}, y_data={len(self.y_data)}"
            )

    @classmethod
    def from_points(cls, points: Sequence[tuple[Any, float]]) -> OutputSeries:
        """Build all three views from a sequence of (x, y) pairs."""
        values = [(x, y) for x, y in points]
        return cls(
            values=values,
            x_data=[x for x, _ in values],
            y_data=[y for _, y in values],
        )

    @classmethod
    def empty(cls) -> OutputSeries:
        """Valid input, nothing to emit."""
        return cls()

    @property
    def timestamps(self) -> list[Any]:
        return self.x_data

    @property
    def raw_values(self) -> list[float]:
        return self.y_data

    @property
    def is_empty(self) -> bool:
        return not self.values

    def to_series(self, name: str | None = None) -> pd.Series:
        """Return the output as a float Series indexed by x value.

        Args:
            name: Optional Series name (e.g. the indicator's display name).

        Returns:
            Series with one entry per output point.
        """
        return pd.Series(self.y_data, index=pd.Index(self.x_data), name=name, dtype=float)


IndicatorResult = Union[OutputSeries, Literal[NotComputable.TOKEN]]


@dataclass(frozen=True)
class RSIParams:
    """RSI parameters.

    Attributes:
        period: Smoothing period. The seed average divides by period - 1.
        decimals: Fractional digits every intermediate value is rounded to.
    """

    period: int = 14
    decimals: int = 4

    def __post_init__(self) -> None:
        if self.period < 2:
            raise ValueError(f"Period must be >= 2, got {self.period}")
        if not 0 <= self.decimals <= MAX_DECIMALS:
            raise ValueError(
                f"Decimals must be between 0 and {MAX_DECIMALS}, got {self.decimals}"
            )

    @classmethod
    def from_options(
        cls, options: Mapping[str, Any], defaults: RSIParams | None = None
    ) -> RSIParams:
        """Parse a host options mapping, falling back to `defaults`."""
        defaults = defaults or cls()
        return cls(
            period=int(options.get("period", defaults.period)),
            decimals=int(options.get("decimals", defaults.decimals)),
        )

    def with_overrides(self, **overrides: Any) -> RSIParams:
        return replace(self, **overrides)


@dataclass(frozen=True)
class ZigZagParams:
    """ZigZag parameters.

    Attributes:
        low_index: Row field holding the low value (2 for OHLC).
        high_index: Row field holding the high value (1 for OHLC).
        deviation: Minimum reversal move, in percent.
    """

    low_index: int = 2
    high_index: int = 1
    deviation: float = 1.0

    def __post_init__(self) -> None:
        if self.low_index < 0 or self.high_index < 0:
            raise ValueError(
                f"Field indices must be >= 0, got low_index={self.low_index}, "
                f"high_index={self.high_index}"
            )
        if self.deviation <= 0:
            raise ValueError(f"Deviation must be > 0, got {self.deviation}")

    @classmethod
    def from_options(
        cls, options: Mapping[str, Any], defaults: ZigZagParams | None = None
    ) -> ZigZagParams:
        """Parse a host options mapping (camelCase or snake_case keys)."""
        defaults = defaults or cls()
        return cls(
            low_index=int(_pick(options, "lowIndex", "low_index", defaults.low_index)),
            high_index=int(_pick(options, "highIndex", "high_index", defaults.high_index)),
            deviation=float(options.get("deviation", defaults.deviation)),
        )

    def with_overrides(self, **overrides: Any) -> ZigZagParams:
        return replace(self, **overrides)


def _pick(options: Mapping[str, Any], camel: str, snake: str, default: Any) -> Any:
    if camel in options:
        return options[camel]
    return options.get(snake, default)


class Indicator(Protocol):
    """Protocol shared by all indicators.

    Implementations are stateless: ``compute`` depends only on its
    arguments and never mutates the input sequences.
    """

    @property
    def name(self) -> str:
        """Registry key (e.g., 'rsi')."""
        ...

    def default_params(self) -> Any:
        """Return the parameter object used when the caller passes none."""
        ...

    def parse_params(self, options: Mapping[str, Any]) -> Any:
        """Build a parameter object from a host options mapping."""
        ...

    def compute(
        self,
        x_values: Sequence[Any],
        y_values: Sequence[Any],
        params: Any,
    ) -> IndicatorResult:
        """Compute the indicator over the full input.

        Args:
            x_values: Strictly increasing x values (timestamps).
            y_values: Rows aligned to x_values.
            params: Parameter object of the indicator's own type.

        Returns:
            OutputSeries, or NOT_COMPUTABLE if the input is unusable.
        """
        ...

    def series_name(self, params: Any) -> str:
        """Human-readable series name, e.g. 'RSI (14)'."""
        ...
