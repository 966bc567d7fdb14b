"""Decorator-aware extraction engine: statement reconstruction, patterns, aggregation."""

from __future__ import annotations

from .engine import (
    SCOPING_BODY,
    SCOPING_FILE,
    SCOPING_MODES,
    SEQUELIZE,
    TYPEORM,
    DecoratorExtractor,
    Dialect,
    FileResult,
)
from .scoping import ScopeMap
from .statements import StatementBuffer, parse_statement, reconstruct

__all__ = [
    "DecoratorExtractor",
    "Dialect",
    "FileResult",
    "SCOPING_BODY",
    "SCOPING_FILE",
    "SCOPING_MODES",
    "SEQUELIZE",
    "ScopeMap",
    "StatementBuffer",
    "TYPEORM",
    "parse_statement",
    "reconstruct",
]
