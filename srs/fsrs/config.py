"""
Scheduler Configuration

Weights, target retention and interval cap, with per-call overrides.

The process-wide default is read once from the environment (or a .env file)
when this module is imported and never changes afterwards. Per-call overrides
are merged on top of it; any field that is missing or malformed silently
falls back to the default, so a bad settings row can never block a review.
"""

from __future__ import annotations

import math
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from dotenv import load_dotenv

from srs.fsrs.constants import (
    DEFAULT_MAXIMUM_INTERVAL_DAYS,
    DEFAULT_TARGET_RETENTION,
    DEFAULT_WEIGHTS,
    WEIGHT_BOUNDS,
    WEIGHT_COUNT,
)
from srs.logging import logger


@dataclass(frozen=True)
class SchedulerConfig:
    """Immutable scheduler configuration."""
    weights: tuple[float, ...] = DEFAULT_WEIGHTS
    target_retention: float = DEFAULT_TARGET_RETENTION
    maximum_interval_days: int = DEFAULT_MAXIMUM_INTERVAL_DAYS

    @property
    def decay(self) -> float:
        """Forgetting-curve exponent (negative)."""
        return -self.weights[20]

    @property
    def factor(self) -> float:
        """Curve scale chosen so that R(t=S) = 0.9."""
        return 0.9 ** (1.0 / self.decay) - 1.0


ConfigLike = Union[SchedulerConfig, Mapping[str, Any], None]

# Accepted spellings for mapping overrides (stored settings use `w`)
_FIELD_ALIASES = {
    "weights": ("weights", "w"),
    "target_retention": ("target_retention", "request_retention", "targetRetention"),
    "maximum_interval_days": ("maximum_interval_days", "maximumIntervalDays"),
}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_weights(weights: Any) -> Optional[tuple[float, ...]]:
    """
    Return weights as a tuple of floats, or None if they are unusable.

    A usable vector has exactly WEIGHT_COUNT finite numbers, each inside its
    WEIGHT_BOUNDS range.
    """
    if weights is None or isinstance(weights, (str, bytes)):
        return None
    if not isinstance(weights, Iterable):
        return None

    values = list(weights)
    if len(values) != WEIGHT_COUNT:
        return None
    if not all(_is_number(v) and math.isfinite(v) for v in values):
        return None
    if not all(low <= v <= high for v, (low, high) in zip(values, WEIGHT_BOUNDS)):
        return None

    return tuple(float(v) for v in values)


def validate_target_retention(value: Any) -> Optional[float]:
    """Return retention as a float in (0, 1), or None."""
    if not _is_number(value) or not math.isfinite(value):
        return None
    if not 0.0 < value < 1.0:
        return None
    return float(value)


def validate_maximum_interval(value: Any) -> Optional[int]:
    """Return the interval cap as an int in [1, DEFAULT_MAXIMUM_INTERVAL_DAYS], or None."""
    if not _is_number(value) or not math.isfinite(value):
        return None
    if not 1 <= value <= DEFAULT_MAXIMUM_INTERVAL_DAYS:
        return None
    return int(value)


def _lookup(overrides: Mapping[str, Any], field: str) -> tuple[bool, Any]:
    for key in _FIELD_ALIASES[field]:
        if key in overrides:
            return True, overrides[key]
    return False, None


def resolve_config(config: ConfigLike = None, base: Optional[SchedulerConfig] = None) -> SchedulerConfig:
    """
    Merge a per-call override onto the default configuration.

    Args:
        config: SchedulerConfig, mapping with any subset of fields, or None
        base: Configuration supplying omitted/invalid fields (default: DEFAULT_CONFIG)

    Returns:
        Fully valid SchedulerConfig
    """
    if base is None:
        base = DEFAULT_CONFIG

    if config is None:
        return base

    if isinstance(config, SchedulerConfig):
        overrides: Mapping[str, Any] = {
            "weights": config.weights,
            "target_retention": config.target_retention,
            "maximum_interval_days": config.maximum_interval_days,
        }
    elif isinstance(config, Mapping):
        overrides = config
    else:
        logger.debug("config_fallback", reason="unsupported type", type=type(config).__name__)
        return base

    weights = base.weights
    present, raw = _lookup(overrides, "weights")
    if present:
        valid = validate_weights(raw)
        if valid is None:
            logger.debug("weights_fallback", length=len(raw) if hasattr(raw, "__len__") else None)
        else:
            weights = valid

    retention = base.target_retention
    present, raw = _lookup(overrides, "target_retention")
    if present and raw is not None:
        valid = validate_target_retention(raw)
        if valid is None:
            logger.debug("target_retention_fallback", value=repr(raw))
        else:
            retention = valid

    maximum = base.maximum_interval_days
    present, raw = _lookup(overrides, "maximum_interval_days")
    if present and raw is not None:
        valid = validate_maximum_interval(raw)
        if valid is None:
            logger.debug("maximum_interval_fallback", value=repr(raw))
        else:
            maximum = valid

    if (weights, retention, maximum) == (base.weights, base.target_retention, base.maximum_interval_days):
        return base

    return SchedulerConfig(
        weights=weights,
        target_retention=retention,
        maximum_interval_days=maximum,
    )


def _parse_env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("env_config_invalid", variable=name, value=raw)
        return None


def load_config_from_env() -> SchedulerConfig:
    """
    Build the default configuration from environment variables.

    Variables (all optional):
        SRS_WEIGHTS: comma-separated list of 21 numbers
        SRS_TARGET_RETENTION: float in (0, 1)
        SRS_MAXIMUM_INTERVAL_DAYS: integer in [1, 36500]

    Invalid values are logged and replaced by the built-in defaults.
    """
    load_dotenv()

    overrides: dict[str, Any] = {}

    raw_weights = os.getenv("SRS_WEIGHTS")
    if raw_weights and raw_weights.strip():
        try:
            overrides["weights"] = [float(part) for part in raw_weights.split(",")]
        except ValueError:
            logger.warning("env_config_invalid", variable="SRS_WEIGHTS", value=raw_weights)

    retention = _parse_env_float("SRS_TARGET_RETENTION")
    if retention is not None:
        overrides["target_retention"] = retention

    maximum = _parse_env_float("SRS_MAXIMUM_INTERVAL_DAYS")
    if maximum is not None:
        overrides["maximum_interval_days"] = maximum

    return resolve_config(overrides, base=BUILTIN_CONFIG)


BUILTIN_CONFIG = SchedulerConfig()
DEFAULT_CONFIG = load_config_from_env()
