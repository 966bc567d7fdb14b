"""Prisma schema backend placeholder."""

from __future__ import annotations

from pathlib import Path

from .base import Backend
from ..logging import get_logger
from ..models import ProjectMetadata

SCHEMA_PATH = Path("prisma") / "schema.prisma"


class PrismaBackend(Backend):
    """Recognises Prisma projects; schema parsing is not implemented."""

    name = "prisma"

    def __init__(self) -> None:
        self.logger = get_logger("backends.prisma")

    def supports(self, root: Path) -> bool:
        return (Path(root) / SCHEMA_PATH).is_file()

    def extract(self, root: Path) -> ProjectMetadata:
        message = f"Prisma schema parsing is not supported; {SCHEMA_PATH.as_posix()} was not read"
        self.logger.warning(message)
        return ProjectMetadata(warnings=[message])


__all__ = ["PrismaBackend"]
