"""
Configuration management for the fare engine.

This module contains the Pydantic configuration models and the manager that
loads and saves them.
"""

from .config_manager import ConfigManager, EngineConfig, ConfigurationError

__all__ = [
    "ConfigManager",
    "EngineConfig",
    "ConfigurationError",
]
