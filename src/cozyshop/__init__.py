"""Cozy Artist Shop simulation core."""

__version__ = "0.1.0"
