"""
Ledger configuration: reference prices and logging.

Documents are YAML mappings:

    prices:
      t0: 1000
      t1: "999.5"
    default_price: 0
    logging:
      level: INFO

Prices accept ints or decimal strings (parsed exactly); floats are rejected so
that a price never depends on binary rounding.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..core.valuation import PriceFn, ReferencePrices, make_price_fn
from ..errors import ConfigError

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "amm_theory"
_KNOWN_KEYS = {"prices", "default_price", "logging"}
_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class LedgerConfig:
    prices: ReferencePrices = field(default_factory=ReferencePrices)
    log_level: str = "WARNING"

    def price_fn(self) -> PriceFn:
        return make_price_fn(self.prices)


def _require_mapping(value: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigError(f"{name} must be a mapping")
    for key in value:
        if not isinstance(key, str):
            raise ConfigError(f"{name} keys must be strings, got {key!r}")
    return value


def config_from_mapping(obj: Any) -> LedgerConfig:
    root = _require_mapping({} if obj is None else obj, name="config")
    unknown = set(root) - _KNOWN_KEYS
    if unknown:
        raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")

    prices_obj = _require_mapping(root.get("prices") or {}, name="prices")
    try:
        prices = ReferencePrices.of(prices_obj, default=root.get("default_price", 0))
    except (TypeError, ValueError) as exc:
        raise ConfigError(str(exc)) from exc

    logging_obj = _require_mapping(root.get("logging") or {}, name="logging")
    level = logging_obj.get("level", "WARNING")
    if not isinstance(level, str) or level.upper() not in _LEVELS:
        raise ConfigError(f"logging.level must be one of {sorted(_LEVELS)}, got {level!r}")

    return LedgerConfig(prices=prices, log_level=level.upper())


def load_config(path: Path | str) -> LedgerConfig:
    """Load a YAML configuration file."""
    path = Path(path)
    try:
        obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    config = config_from_mapping(obj)
    logger.debug("loaded config from %s: %d reference prices", path, len(config.prices.prices))
    return config


def configure_logging(config: LedgerConfig) -> logging.Logger:
    """Apply the configured level to the package logger."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(config.log_level)
    return package_logger
