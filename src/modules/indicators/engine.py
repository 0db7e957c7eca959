"""Indicator Engine: single entry point for computing indicator series.

Resolves an indicator by name, merges parameters, adapts pandas input
and logs the outcome. The indicator functions themselves stay pure.
"""

from typing import Any, Mapping, Sequence

import pandas as pd

from src.modules.indicators.adapter import from_frame
from src.modules.indicators.registry import IndicatorRegistry, build_default_registry
from src.modules.indicators.types import NOT_COMPUTABLE, IndicatorResult
from src.shared.config import Config
from src.shared.logger import get_logger

logger = get_logger(__name__)


class IndicatorEngine:
    """Computes registered indicators over OHLC data.

    Usage:
        engine = IndicatorEngine()
        result = engine.compute_frame("zigzag", ohlc_df, deviation=2)
        if result is NOT_COMPUTABLE:
            ...
    """

    def __init__(
        self,
        registry: IndicatorRegistry | None = None,
        config: Config | None = None,
    ) -> None:
        """Initialize IndicatorEngine.

        Args:
            registry: Indicators to serve. Built from `config` when omitted.
            config: Source of default parameters for the default registry.
        """
        if registry is None:
            registry = build_default_registry(config)
        self._registry = registry

    @property
    def registry(self) -> IndicatorRegistry:
        return self._registry

    def compute(
        self,
        name: str,
        x_values: Sequence[Any],
        y_values: Sequence[Any],
        params: Any = None,
        **overrides: Any,
    ) -> IndicatorResult:
        """Compute one indicator over aligned sequences.

        Args:
            name: Registered indicator name.
            x_values: Strictly increasing timestamps.
            y_values: Rows aligned to x_values.
            params: Params object, host options mapping, or None for defaults.
            **overrides: Params fields to replace (e.g. period=21).

        Returns:
            OutputSeries, or NOT_COMPUTABLE if the input is unusable.

        Raises:
            UnknownIndicatorError: If `name` is not registered.
            ValueError: If the resulting parameters are invalid.
        """
        indicator = self._registry.get(name)

        if params is None:
            params = indicator.default_params()
        elif isinstance(params, Mapping):
            params = indicator.parse_params(params)
        if overrides:
            params = params.with_overrides(**overrides)

        result = indicator.compute(x_values, y_values, params)
        series_name = indicator.series_name(params)

        if result is NOT_COMPUTABLE:
            logger.info(
                f"{series_name} not computable for {len(x_values)} points",
                extra={"indicator": name, "points_in": len(x_values)},
            )
        else:
            logger.info(
                f"Computed {series_name}: {len(result.values)} points from {len(x_values)}",
                extra={
                    "indicator": name,
                    "points_in": len(x_values),
                    "points_out": len(result.values),
                },
            )

        return result

    def compute_frame(
        self,
        name: str,
        df: pd.DataFrame,
        params: Any = None,
        **overrides: Any,
    ) -> IndicatorResult:
        """Compute one indicator over an OHLC DataFrame.

        Args:
            name: Registered indicator name.
            df: DataFrame with open, high, low, close columns.
            params: Params object, host options mapping, or None.
            **overrides: Params fields to replace.

        Returns:
            OutputSeries, or NOT_COMPUTABLE.

        Raises:
            ValueError: If columns are missing or the index is not
                strictly increasing.
        """
        x_values, y_values = from_frame(df)
        return self.compute(name, x_values, y_values, params, **overrides)

    def compute_all(self, df: pd.DataFrame) -> dict[str, IndicatorResult]:
        """Compute every registered indicator with its default params."""
        x_values, y_values = from_frame(df)
        return {
            indicator.name: self.compute(indicator.name, x_values, y_values)
            for indicator in self._registry
        }
