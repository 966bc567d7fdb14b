"""Backend implementations and first-match dispatch."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Sequence, Set

from .base import Backend
from .decorators import SequelizeBackend, TypeORMBackend
from .mongoose import MongooseBackend
from .prisma import PrismaBackend
from ..config import ConfigError, MetascanConfig
from ..errors import NoSupportedBackendError
from ..logging import get_logger
from ..models import ProjectMetadata

# Registration order is dispatch priority.
_BUILTIN_FACTORIES: dict[str, Callable[[MetascanConfig | None], Backend]] = {
    "typeorm": lambda config: TypeORMBackend(config),
    "sequelize": lambda config: SequelizeBackend(config),
    "mongoose": lambda config: MongooseBackend(config.external_parser if config else None),
    "prisma": lambda config: PrismaBackend(),
}

logger = get_logger("backends")


def discover_backends(config: MetascanConfig | None = None) -> List[Backend]:
    """Return backends in priority order, honoring ``backends.enabled``."""
    enabled: Set[str] | None = None
    if config is not None and config.backends.enabled:
        enabled = {name.lower() for name in config.backends.enabled}
        unknown = enabled.difference(_BUILTIN_FACTORIES)
        if unknown:
            raise ConfigError(f"Unknown backends requested: {', '.join(sorted(unknown))}")

    return [
        factory(config)
        for name, factory in _BUILTIN_FACTORIES.items()
        if enabled is None or name in enabled
    ]


class BackendDispatcher:
    """Selects the first backend whose predicate accepts the project."""

    def __init__(self, backends: Sequence[Backend]) -> None:
        self._backends = list(backends)

    @property
    def backends(self) -> List[Backend]:
        return list(self._backends)

    def select(self, root: str | Path) -> Backend:
        root_path = Path(root)
        for backend in self._backends:
            if backend.supports(root_path):
                logger.debug("Selected backend %s for %s", backend.name, root_path)
                return backend
            logger.debug("Backend %s does not support %s", backend.name, root_path)
        raise NoSupportedBackendError(str(root))

    def extract(self, root: str | Path) -> ProjectMetadata:
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")
        backend = self.select(root_path)
        return backend.extract(root_path)


__all__ = [
    "Backend",
    "BackendDispatcher",
    "MongooseBackend",
    "PrismaBackend",
    "SequelizeBackend",
    "TypeORMBackend",
    "discover_backends",
]
