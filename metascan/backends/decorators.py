"""Backends driven by the decorator-aware extraction engine."""

from __future__ import annotations

from pathlib import Path

from .base import Backend, manifest_mentions
from ..config import MetascanConfig
from ..extraction import SEQUELIZE, TYPEORM, DecoratorExtractor, Dialect
from ..file_filter import FileFilter
from ..logging import get_logger
from ..models import ProjectMetadata


class DecoratorBackend(Backend):
    """Selects projects by a package.json dependency and extracts with a dialect."""

    dialect: Dialect
    dependency: str = ""

    def __init__(self, config: MetascanConfig | None = None) -> None:
        self._config = config
        self.logger = get_logger(f"backends.{self.name}")

    def supports(self, root: Path) -> bool:
        return manifest_mentions(root, self.dependency)

    def extract(self, root: Path) -> ProjectMetadata:
        files = FileFilter(self._config).list_files(root)
        self.logger.info("Extracting %d source files with the %s backend", len(files), self.name)
        scoping = self._config.scoping if self._config is not None else "body"
        extractor = DecoratorExtractor(self.dialect, scoping=scoping)
        return extractor.extract_project(Path(root).resolve(), files)


class TypeORMBackend(DecoratorBackend):
    """TypeORM entities (``@Entity``, ``@OneToMany(() => Target)``) and Nest routes."""

    name = "typeorm"
    dependency = "typeorm"
    dialect = TYPEORM


class SequelizeBackend(DecoratorBackend):
    """sequelize-typescript models (``@Table``, ``@HasMany(() => Target)``)."""

    name = "sequelize"
    dependency = "sequelize"
    dialect = SEQUELIZE


__all__ = ["DecoratorBackend", "SequelizeBackend", "TypeORMBackend"]
