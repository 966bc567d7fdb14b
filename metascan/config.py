"""Configuration loading for metascan (.metascan.yml)."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import MetascanError

CONFIG_FILENAME = ".metascan.yml"

DEFAULT_SOURCE_SUFFIXES = [".ts"]
_SCOPING_CHOICES = {"body", "file"}


class ConfigError(MetascanError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class BackendsConfig:
    """Backend enablement; an empty list enables every backend."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class ExternalParserConfig:
    """Command used by backends that delegate to a full-syntax-tree parser.

    No command is configured by default. Relative script arguments resolve
    against ``tool_root`` (the parser's own checkout) when it is set and
    against the analysed project otherwise.
    """

    command: List[str] = field(default_factory=list)
    timeout: Optional[float] = None
    tool_root: Optional[Path] = None


@dataclass
class MetascanConfig:
    """Represents the settings defined in .metascan.yml."""

    root: Path
    exclude_paths: List[str] = field(default_factory=list)
    source_suffixes: List[str] = field(default_factory=lambda: list(DEFAULT_SOURCE_SUFFIXES))
    scoping: str = "body"
    backends: BackendsConfig = field(default_factory=BackendsConfig)
    external_parser: ExternalParserConfig = field(default_factory=ExternalParserConfig)


def load_config(config_path: Path) -> MetascanConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return MetascanConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    config = MetascanConfig(root=root)
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    suffixes = _as_str_list(data.get("source_suffixes"))
    if suffixes:
        config.source_suffixes = [s if s.startswith(".") else f".{s}" for s in suffixes]

    scoping = _as_str(data.get("scoping"))
    if scoping is not None:
        if scoping not in _SCOPING_CHOICES:
            choices = ", ".join(sorted(_SCOPING_CHOICES))
            raise ConfigError(f"scoping must be one of: {choices} (got '{scoping}')")
        config.scoping = scoping

    backends_data = _as_dict(data.get("backends"))
    if backends_data:
        config.backends.enabled = [name.lower() for name in _as_str_list(backends_data.get("enabled"))]

    parser_data = _as_dict(data.get("external_parser"))
    if parser_data:
        command = _as_command(parser_data.get("command"))
        if command:
            config.external_parser.command = command
        timeout = parser_data.get("timeout")
        if timeout is not None:
            config.external_parser.timeout = _as_timeout(timeout)
        tool_root = _as_str(parser_data.get("tool_root"))
        if tool_root:
            config.external_parser.tool_root = (root / Path(tool_root).expanduser()).resolve()

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


def _as_command(value: Any) -> List[str]:
    if isinstance(value, str):
        return shlex.split(value)
    return _as_str_list(value)


def _as_timeout(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ConfigError("external_parser.timeout must be a number of seconds")
    try:
        timeout = float(value)
    except ValueError as exc:
        raise ConfigError("external_parser.timeout must be a number of seconds") from exc
    if timeout <= 0:
        raise ConfigError("external_parser.timeout must be positive")
    return timeout


__all__ = [
    "BackendsConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "ExternalParserConfig",
    "MetascanConfig",
    "load_config",
]
