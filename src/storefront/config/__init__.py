"""Configuration package."""

from storefront.config.settings import Settings, get_settings, set_settings, reset_settings
from storefront.config.logging_config import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "set_settings",
    "reset_settings",
    "setup_logging",
]
