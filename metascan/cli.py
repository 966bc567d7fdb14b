"""CLI entrypoint for metascan."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .errors import MetascanError
from .erd import render_mermaid
from .extraction import SCOPING_MODES
from .logging import configure_logging
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metascan",
        description=(
            "Extract entities, classes, relationships and route handlers from a "
            "decorator-based TypeScript backend and print them as JSON."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="FILE",
        help="Also write log records to FILE.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .metascan.yml file (defaults to the one in the project root).",
    )
    parser.add_argument(
        "--scoping",
        choices=SCOPING_MODES,
        default=None,
        help=(
            "Attach members to the class whose body contains them ('body') or to "
            "every class in the file ('file', legacy output)."
        ),
    )
    parser.add_argument(
        "--erd",
        type=Path,
        default=None,
        metavar="FILE",
        help="Also write a Mermaid ER diagram of the relationships to FILE.",
    )
    parser.add_argument("path", help="Path to the project root.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for metascan."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file)

    try:
        metadata = Orchestrator().run(args.path, config_path=args.config, scoping=args.scoping)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except MetascanError as exc:
        parser.exit(1, f"metascan failed: {exc}\n")

    document = json.dumps(metadata.to_dict(), indent=2, ensure_ascii=False)

    if args.erd is not None:
        try:
            args.erd.parent.mkdir(parents=True, exist_ok=True)
            args.erd.write_text(render_mermaid(metadata.relationships), encoding="utf-8")
        except OSError as exc:
            parser.exit(1, f"metascan failed: could not write {args.erd}: {exc}\n")

    print(document)


if __name__ == "__main__":
    main(sys.argv[1:])
