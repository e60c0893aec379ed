"""Goblin Store - server-rendered storefront with a Redis-mirrored cart."""

__version__ = "1.0.0"
