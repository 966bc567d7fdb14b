"""Exception hierarchy shared across metascan components."""

from __future__ import annotations


class MetascanError(RuntimeError):
    """Base class for failures that abort an extraction run."""


class NoSupportedBackendError(MetascanError):
    """Raised when no registered backend recognises the project."""

    def __init__(self, root: str) -> None:
        super().__init__(f"No supported backend found for project: {root}")
        self.root = root


class BackendError(MetascanError):
    """Raised when the selected backend fails to produce metadata."""


class ExternalParserError(BackendError):
    """Raised when a delegated parser subprocess fails or emits bad output."""


__all__ = [
    "MetascanError",
    "NoSupportedBackendError",
    "BackendError",
    "ExternalParserError",
]
