"""Indicator registry.

An explicit name -> indicator mapping owned by whoever builds it.
There is no module-level registry to mutate.
"""

from typing import Iterator

from src.modules.indicators.rsi import RSIIndicator
from src.modules.indicators.types import Indicator, RSIParams, ZigZagParams
from src.modules.indicators.zigzag import ZigZagIndicator
from src.shared.config import Config, load_config
from src.shared.logger import get_logger

logger = get_logger(__name__)


class UnknownIndicatorError(KeyError):
    """Raised when looking up a name that was never registered."""

    def __init__(self, name: str, known: list[str]) -> None:
        """Initialize UnknownIndicatorError.

        Args:
            name: Requested indicator name.
            known: Names currently registered.
        """
        self.name = name
        self.known = known
        super().__init__(f"Unknown indicator '{name}'. Registered: {known}")

    def __str__(self) -> str:
        return str(self.args[0])


class IndicatorRegistry:
    """Maps indicator names to indicator implementations.

    Usage:
        registry = IndicatorRegistry()
        registry.register(RSIIndicator())
        registry.get("rsi").compute(x, y, RSIParams())
    """

    def __init__(self) -> None:
        self._indicators: dict[str, Indicator] = {}

    def register(self, indicator: Indicator) -> None:
        """Add an indicator under its own name.

        Raises:
            ValueError: If the name is already taken.
        """
        if indicator.name in self._indicators:
            raise ValueError(f"Indicator '{indicator.name}' is already registered")
        self._indicators[indicator.name] = indicator
        logger.debug(f"Registered indicator {indicator.name}")

    def get(self, name: str) -> Indicator:
        """Look up an indicator by name.

        Raises:
            UnknownIndicatorError: If nothing is registered under `name`.
        """
        try:
            return self._indicators[name]
        except KeyError:
            raise UnknownIndicatorError(name, self.names()) from None

    def names(self) -> list[str]:
        return sorted(self._indicators)

    def __contains__(self, name: object) -> bool:
        return name in self._indicators

    def __len__(self) -> int:
        return len(self._indicators)

    def __iter__(self) -> Iterator[Indicator]:
        return iter(self._indicators.values())


def build_default_registry(config: Config | None = None) -> IndicatorRegistry:
    """Create a fresh registry with RSI and Zig Zag.

    Args:
        config: Source of default parameters. Loaded from the
            environment when omitted.

    Returns:
        New registry; callers may register more indicators on it.

    Raises:
        ValueError: If the configured defaults are out of range.
    """
    config = config or load_config()

    rsi_defaults = RSIParams(period=config.rsi_period, decimals=config.rsi_decimals)
    zigzag_defaults = ZigZagParams(
        low_index=config.zigzag_low_index,
        high_index=config.zigzag_high_index,
        deviation=config.zigzag_deviation,
    )

    registry = IndicatorRegistry()
    registry.register(RSIIndicator(rsi_defaults))
    registry.register(ZigZagIndicator(zigzag_defaults))
    return registry
