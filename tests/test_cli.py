"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from metascan.cli import _build_parser, main

ENTITY = """
    @Entity()
    export class UserEntity {
      @OneToMany(() => OrderEntity, (order) => order.user)
      orders: OrderEntity[];
    }
"""


def test_cli_parses_path_and_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "--scoping", "file", "--erd", "out.mmd", "./api"])
    assert args.verbose is True
    assert args.scoping == "file"
    assert args.erd == Path("out.mmd")
    assert args.path == "./api"


def test_cli_requires_path(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_cli_rejects_unknown_scoping() -> None:
    with pytest.raises(SystemExit) as excinfo:
        _build_parser().parse_args(["--scoping", "module", "."])
    assert excinfo.value.code == 2


def test_cli_prints_metadata_document(repo_builder, capsys: pytest.CaptureFixture[str]) -> None:
    repo_builder.package_json(["typeorm"])
    repo_builder.write({"src/user.entity.ts": ENTITY})

    main([str(repo_builder.path())])

    captured = capsys.readouterr()
    document = json.loads(captured.out)
    assert list(document) == ["entities", "classes", "functions", "relationships"]
    assert document["entities"][0]["filePath"] == "/src/user.entity.ts"
    assert document["relationships"] == [
        {"from": "UserEntity", "to": "OrderEntity", "type": "OneToMany"}
    ]
    assert captured.out.startswith('{\n  "entities"')


def test_cli_writes_erd_when_requested(repo_builder, tmp_path: Path, capsys) -> None:
    repo_builder.package_json(["typeorm"])
    repo_builder.write({"src/user.entity.ts": ENTITY})
    target = tmp_path / "docs" / "erd.mmd"

    main(["--erd", str(target), str(repo_builder.path())])

    assert target.read_text(encoding="utf-8") == (
        'erDiagram\n    UserEntity ||--|o OrderEntity : ""\n'
    )
    assert json.loads(capsys.readouterr().out)["entities"]


def test_cli_fails_without_supported_backend(repo_builder, capsys) -> None:
    repo_builder.write({"src/main.ts": "export class Main {}\n"})

    with pytest.raises(SystemExit) as excinfo:
        main([str(repo_builder.path())])

    captured = capsys.readouterr()
    assert excinfo.value.code == 1
    assert captured.out == ""
    assert "No supported backend found for project" in captured.err


def test_cli_fails_for_missing_path(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "absent")])

    assert excinfo.value.code == 1
    assert "Project path not found" in capsys.readouterr().err


def test_cli_reports_invalid_config(repo_builder, capsys) -> None:
    repo_builder.package_json(["typeorm"])
    repo_builder.write({".metascan.yml": "scoping: module\n"})

    with pytest.raises(SystemExit) as excinfo:
        main([str(repo_builder.path())])

    assert excinfo.value.code == 1
    assert "metascan failed" in capsys.readouterr().err


def test_cli_quiet_suppresses_info_logs(repo_builder, capsys) -> None:
    repo_builder.package_json(["typeorm"])
    repo_builder.write({"src/user.entity.ts": ENTITY})

    main(["--quiet", str(repo_builder.path())])

    assert "INFO" not in capsys.readouterr().err


def test_cli_writes_log_file(repo_builder, tmp_path: Path, capsys) -> None:
    repo_builder.package_json(["typeorm"])
    repo_builder.write({"src/user.entity.ts": ENTITY})
    log_file = tmp_path / "logs" / "metascan.log"

    main(["--log-file", str(log_file), str(repo_builder.path())])

    assert "metascan.orchestrator: Starting extraction" in log_file.read_text(encoding="utf-8")
    assert "[metascan] INFO Starting extraction" in capsys.readouterr().err
