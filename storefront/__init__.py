"""Storefront shopping-cart state manager."""

__version__ = "0.1.0"
