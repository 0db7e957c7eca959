"""Technical-analysis indicators: RSI and Zig Zag.

Both indicators are pure functions over aligned (x, row) sequences that
return an OutputSeries or the NOT_COMPUTABLE sentinel.
"""

from src.modules.indicators.engine import IndicatorEngine
from src.modules.indicators.registry import (
    IndicatorRegistry,
    UnknownIndicatorError,
    build_default_registry,
)
from src.modules.indicators.rsi import RSIIndicator, rsi
from src.modules.indicators.types import (
    NOT_COMPUTABLE,
    Indicator,
    NotComputable,
    OutputSeries,
    RSIParams,
    ZigZagParams,
)
from src.modules.indicators.zigzag import ZigZagIndicator, zigzag

__all__ = [
    "rsi",
    "zigzag",
    "RSIIndicator",
    "ZigZagIndicator",
    "IndicatorEngine",
    "IndicatorRegistry",
    "UnknownIndicatorError",
    "build_default_registry",
    "Indicator",
    "NOT_COMPUTABLE",
    "NotComputable",
    "OutputSeries",
    "RSIParams",
    "ZigZagParams",
]
