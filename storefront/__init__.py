"""Storefront core: carts, checkout and wilaya shipping for a heating-equipment shop."""

__version__ = "1.0.0"
