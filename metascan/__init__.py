"""Decorator-aware metadata extraction for TypeScript backend projects."""

__version__ = "0.1.0"
