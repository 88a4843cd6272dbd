"""
Runtime Configuration Module

Provides configuration loading and management for vmt.
"""

from .runtime import TreeConfig, get_default_config, set_default_config

__all__ = [
    "TreeConfig",
    "get_default_config",
    "set_default_config",
]
