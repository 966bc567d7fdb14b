"""High-level extraction entrypoint shared by the CLI and the service."""

from __future__ import annotations

from pathlib import Path

from .backends import BackendDispatcher, discover_backends
from .config import ConfigError, load_config
from .extraction import SCOPING_MODES
from .logging import get_logger
from .models import ProjectMetadata


class Orchestrator:
    """Loads configuration, selects a backend and runs it for one project."""

    def __init__(self) -> None:
        self.logger = get_logger("orchestrator")

    def run(
        self,
        path: str | Path,
        *,
        config_path: str | Path | None = None,
        scoping: str | None = None,
    ) -> ProjectMetadata:
        root = Path(path).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Project path not found: {path}")
        if not root.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {path}")

        config = load_config(Path(config_path) if config_path is not None else root)
        config.root = root
        if scoping is not None:
            if scoping not in SCOPING_MODES:
                raise ConfigError(f"Unknown scoping mode: {scoping}")
            config.scoping = scoping

        self.logger.info("Starting extraction for %s", root)
        dispatcher = BackendDispatcher(discover_backends(config))
        metadata = dispatcher.extract(root)

        for warning in metadata.warnings:
            self.logger.debug("Collected warning: %s", warning)
        self.logger.info(
            "Extracted %d entities, %d classes, %d routes, %d relationships (%d warnings)",
            len(metadata.entities),
            len(metadata.classes),
            len(metadata.functions),
            len(metadata.relationships),
            len(metadata.warnings),
        )
        return metadata


__all__ = ["Orchestrator"]
