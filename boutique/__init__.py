"""Boutique shop backend: catalog, accounts, cart and orders over FastAPI."""

__version__ = "0.1.0"
