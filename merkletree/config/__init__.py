"""
Runtime Configuration Module

Provides configuration loading for hash selection, logging and output.
"""

from .runtime import ENV_PREFIX, TreeConfig, get_default_config

__all__ = [
    "ENV_PREFIX",
    "TreeConfig",
    "get_default_config",
]
