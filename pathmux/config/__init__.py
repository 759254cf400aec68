"""
Configuration management package.

This module provides:
- Config for loading YAML configuration files with PATHMUX_* overrides
- MuxConfig, the typed router and server settings
"""

from .config import Config, MuxConfig
from .constants import DEFAULT_ADDRESS, DEFAULT_ENV_PREFIX, MAX_CONFIG_SIZE_BYTES

__all__ = [
    "Config",
    "DEFAULT_ADDRESS",
    "DEFAULT_ENV_PREFIX",
    "MAX_CONFIG_SIZE_BYTES",
    "MuxConfig",
]
