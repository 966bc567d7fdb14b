"""Tests for metascan.orchestrator."""

from __future__ import annotations

import pytest

from metascan.config import ConfigError
from metascan.errors import NoSupportedBackendError
from metascan.orchestrator import Orchestrator

SHARED = """
    export class First {
      alpha(): string {
        return 'a';
      }
    }

    export class Second {
      beta(): string {
        return 'b';
      }
    }
"""


def _method_names(metadata):
    return [[m.name for m in cls.methods] for cls in metadata.classes]


def test_scoping_defaults_to_class_bodies(repo_builder) -> None:
    repo_builder.package_json(["typeorm"])
    repo_builder.write({"src/shared.ts": SHARED})

    metadata = Orchestrator().run(repo_builder.path())

    assert _method_names(metadata) == [["alpha"], ["beta"]]


def test_scoping_from_config_file(repo_builder) -> None:
    repo_builder.package_json(["typeorm"])
    repo_builder.write({"src/shared.ts": SHARED, ".metascan.yml": "scoping: file\n"})

    metadata = Orchestrator().run(repo_builder.path())

    assert _method_names(metadata) == [["alpha", "beta"], ["alpha", "beta"]]


def test_scoping_override_wins_over_config(repo_builder) -> None:
    repo_builder.package_json(["typeorm"])
    repo_builder.write({"src/shared.ts": SHARED, ".metascan.yml": "scoping: file\n"})

    metadata = Orchestrator().run(repo_builder.path(), scoping="body")

    assert _method_names(metadata) == [["alpha"], ["beta"]]


def test_explicit_config_path_enables_backends(repo_builder, tmp_path) -> None:
    repo_builder.package_json(["typeorm"])
    config_path = tmp_path / "only-prisma.yml"
    config_path.write_text("backends:\n  enabled: [prisma]\n", encoding="utf-8")

    with pytest.raises(NoSupportedBackendError):
        Orchestrator().run(repo_builder.path(), config_path=config_path)


def test_unknown_scoping_override_is_rejected(repo_builder) -> None:
    repo_builder.package_json(["typeorm"])

    with pytest.raises(ConfigError):
        Orchestrator().run(repo_builder.path(), scoping="module")


def test_missing_path_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        Orchestrator().run(tmp_path / "absent")
