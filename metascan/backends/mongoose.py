"""Mongoose backend delegating to an external full-syntax-tree parser."""

from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path
from typing import List, Sequence

from .base import Backend, manifest_mentions
from ..config import ExternalParserConfig
from ..errors import ExternalParserError
from ..logging import get_logger
from ..models import ProjectMetadata

_STDERR_EXCERPT = 500
_SCRIPT_SUFFIXES = (".ts", ".mts", ".cts", ".js", ".mjs", ".cjs", ".py")


class MongooseBackend(Backend):
    """Runs the configured parser command with the project as working directory.

    The command must print a metadata document (the same JSON shape metascan
    emits) on stdout. Any failure is reported as a single
    :class:`ExternalParserError`; partial output is never returned.
    """

    name = "mongoose"

    def __init__(self, parser: ExternalParserConfig | None = None) -> None:
        self._parser = parser or ExternalParserConfig()
        self.logger = get_logger("backends.mongoose")

    @property
    def command(self) -> Sequence[str]:
        return list(self._parser.command)

    def resolve_command(self, root: Path) -> List[str]:
        """Return the command with script arguments made absolute and checked to exist.

        Relative scripts resolve against ``tool_root`` when configured, otherwise
        against ``root``, the working directory the parser runs in.
        """
        command = self.command
        if not command:
            raise ExternalParserError("No external parser command configured")
        base = self._parser.tool_root if self._parser.tool_root is not None else Path(root)
        resolved: List[str] = []
        for argument in command:
            if argument.endswith(_SCRIPT_SUFFIXES):
                script = Path(argument).expanduser()
                if not script.is_absolute():
                    script = base / script
                if not script.is_file():
                    raise ExternalParserError(f"External parser script not found at {script}")
                argument = str(script)
            resolved.append(argument)
        return resolved

    def supports(self, root: Path) -> bool:
        return manifest_mentions(root, "mongoose")

    def extract(self, root: Path) -> ProjectMetadata:
        command = self.resolve_command(root)
        env = dict(os.environ)
        env["TS_NODE_TRANSPILE_ONLY"] = "true"

        self.logger.info("Delegating to external parser: %s", " ".join(command))
        try:
            completed = subprocess.run(
                command,
                cwd=str(root),
                env=env,
                capture_output=True,
                text=True,
                timeout=self._parser.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ExternalParserError(f"External parser executable not found: {command[0]}") from exc
        except subprocess.TimeoutExpired as exc:
            raise ExternalParserError(
                f"External parser timed out after {self._parser.timeout} seconds"
            ) from exc
        except OSError as exc:
            raise ExternalParserError(f"Failed to execute external parser: {exc}") from exc

        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            self.logger.debug("External parser stderr: %s", stderr)
            detail = f": {stderr[:_STDERR_EXCERPT]}" if stderr else ""
            raise ExternalParserError(
                f"External parser exited with status {completed.returncode}{detail}"
            )

        output = (completed.stdout or "").strip()
        if not output:
            raise ExternalParserError("External parser returned empty output")
        try:
            return ProjectMetadata.from_dict(json.loads(output))
        except (json.JSONDecodeError, ValueError) as exc:
            raise ExternalParserError(f"Failed to parse external parser output: {exc}") from exc


__all__ = ["MongooseBackend"]
