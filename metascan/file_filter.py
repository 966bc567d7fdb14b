"""Source file discovery for a project root."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .config import MetascanConfig, load_config
from .logging import get_logger

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".vscode",
    "node_modules",
    "bower_components",
    "dist",
    "coverage",
    ".next",
    ".turbo",
}

_DECLARATION_SUFFIX = ".d.ts"

logger = get_logger("file_filter")


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or .metascan.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            if self.directory_only and rel_path.startswith(f"{self.pattern}/"):
                return True
            return False

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []

    rules: List[IgnoreRule] = []
    try:
        lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as exc:
        logger.warning("Could not read %s: %s", path.name, exc)
        return []
    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = _build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def _is_source(filename: str, suffixes: Sequence[str]) -> bool:
    if filename.endswith(_DECLARATION_SUFFIX):
        return False
    return filename.endswith(tuple(suffixes))


class FileFilter:
    """Enumerates candidate source files below a project root."""

    def __init__(self, config: MetascanConfig | None = None) -> None:
        self._config = config

    def list_files(self, root: str | Path) -> List[str]:
        """Return project-relative posix paths of source files, sorted lexically."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")

        config = self._config if self._config is not None else load_config(root_path)
        rules = _parse_gitignore(root_path / ".gitignore")
        rules.extend(
            rule for rule in (_build_ignore_rule(p) for p in config.exclude_paths) if rule is not None
        )

        files = sorted(self._iter_files(root_path, rules, config.source_suffixes))
        logger.debug("File filter selected %d source files under %s", len(files), root_path)
        return files

    @staticmethod
    def _iter_files(root: Path, rules: Sequence[IgnoreRule], suffixes: Sequence[str]) -> Iterator[str]:
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept_dirs = []
            for name in dirnames:
                if name in _EXCLUDED_DIRS:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, True, rules):
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in filenames:
                if not _is_source(filename, suffixes):
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _should_ignore(rel_path, False, rules):
                    continue
                yield rel_path


__all__ = ["FileFilter", "IgnoreRule"]
