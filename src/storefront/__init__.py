"""Storefront client core: home data cache, user profile cache and cart."""

__version__ = "0.1.0"
