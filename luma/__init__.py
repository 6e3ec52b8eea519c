"""Luma client-side caching layer."""

__version__ = "1.0.0"
