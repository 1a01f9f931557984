"""
Integration helpers (configuration loading).
"""

from .config import LedgerConfig, config_from_mapping, configure_logging, load_config

__all__ = [
    "LedgerConfig",
    "config_from_mapping",
    "configure_logging",
    "load_config",
]
