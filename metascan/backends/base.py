"""Base classes for extraction backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from ..models import ProjectMetadata


class Backend(ABC):
    """Contract for framework backends selected by the dispatcher."""

    name: str = ""

    @abstractmethod
    def supports(self, root: Path) -> bool:
        """Return True when this backend recognises the project."""

    @abstractmethod
    def extract(self, root: Path) -> ProjectMetadata:
        """Produce the metadata document for the project."""


def manifest_mentions(root: Path, dependency: str, manifest: str = "package.json") -> bool:
    """Return True when the raw manifest text contains ``dependency``."""
    try:
        text = (root / manifest).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False
    return dependency in text


__all__ = ["Backend", "manifest_mentions"]
