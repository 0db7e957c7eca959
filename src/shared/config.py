"""Configuration loader for the indicator core.

Loads default indicator parameters and logging settings from
environment variables with sensible defaults.
"""

import logging
import os
from dataclasses import dataclass

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables.

    Attributes:
        log_level: Logging level name (DEBUG/INFO/WARNING/ERROR/CRITICAL).
        rsi_period: Default RSI smoothing period.
        rsi_decimals: Default RSI rounding precision.
        zigzag_low_index: Default row field for Zig Zag lows.
        zigzag_high_index: Default row field for Zig Zag highs.
        zigzag_deviation: Default Zig Zag reversal threshold, in percent.
    """

    log_level: str = "INFO"
    rsi_period: int = 14
    rsi_decimals: int = 4
    zigzag_low_index: int = 2
    zigzag_high_index: int = 1
    zigzag_deviation: float = 1.0


def load_config() -> Config:
    """Load configuration from environment variables.

    Returns:
        Config object with all settings.

    Raises:
        ValueError: If a variable is set to a malformed value.
    """
    return Config(
        log_level=log_level_from_env(),
        rsi_period=_env_int("RSI_PERIOD", 14),
        rsi_decimals=_env_int("RSI_DECIMALS", 4),
        zigzag_low_index=_env_int("ZIGZAG_LOW_INDEX", 2),
        zigzag_high_index=_env_int("ZIGZAG_HIGH_INDEX", 1),
        zigzag_deviation=_env_float("ZIGZAG_DEVIATION", 1.0),
    )


def log_level_from_env() -> str:
    """Read LOG_LEVEL, defaulting to INFO.

    Raises:
        ValueError: If the level name is not a standard logging level.
    """
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {LOG_LEVELS}, got '{level}'")
    return level


def log_level_number(level: str) -> int:
    """Convert a level name from Config into a logging constant."""
    return int(getattr(logging, level))


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'") from None
