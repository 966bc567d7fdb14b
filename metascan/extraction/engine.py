"""Classifier and aggregator for decorator-based extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

from ..logging import get_logger
from ..models import (
    APIFunctionInfo,
    ClassInfo,
    MethodInfo,
    ProjectMetadata,
    PropertyInfo,
    RelationshipInfo,
    SourceFile,
)
from .patterns import (
    MethodMatch,
    extract_class_headers,
    extract_methods,
    extract_related_class,
    extract_routes,
)
from .scoping import ScopeMap
from .statements import (
    ClassHeader,
    DecoratedMethod,
    DecoratedProperty,
    parse_statement,
    reconstruct,
)

SCOPING_BODY = "body"
SCOPING_FILE = "file"
SCOPING_MODES = (SCOPING_BODY, SCOPING_FILE)

logger = get_logger("extraction")


@dataclass(frozen=True)
class Dialect:
    """Decorator conventions of one framework."""

    name: str
    entity_marker: str
    relationship_decorators: Mapping[str, str]


TYPEORM = Dialect(
    name="typeorm",
    entity_marker="@Entity",
    relationship_decorators={
        "OneToOne": "OneToOne",
        "OneToMany": "OneToMany",
        "ManyToOne": "ManyToOne",
        "ManyToMany": "ManyToMany",
    },
)

SEQUELIZE = Dialect(
    name="sequelize",
    entity_marker="@Table",
    relationship_decorators={
        "HasOne": "OneToOne",
        "HasMany": "OneToMany",
        "BelongsTo": "ManyToOne",
        "BelongsToMany": "ManyToMany",
    },
)


@dataclass
class FileResult:
    """Everything extracted from one file, merged into the project as a unit."""

    path: str
    is_entity_file: bool
    classes: List[ClassInfo] = field(default_factory=list)
    functions: List[APIFunctionInfo] = field(default_factory=list)
    relationships: List[RelationshipInfo] = field(default_factory=list)

    def merge_into(self, metadata: ProjectMetadata) -> None:
        if self.is_entity_file:
            metadata.entities.extend(self.classes)
            metadata.relationships.extend(self.relationships)
        else:
            metadata.classes.extend(self.classes)
        metadata.functions.extend(self.functions)


@dataclass(frozen=True)
class _PropertyHit:
    offset: int
    prop: PropertyInfo
    related: Optional[str]
    kinds: Sequence[str]


class DecoratorExtractor:
    """Extracts classes, properties, relationships and routes for one dialect.

    ``scoping="body"`` attaches each method and property to the class whose
    body contains it. ``scoping="file"`` reproduces the legacy behaviour in
    which every declaration of a file is attached to every class of the file.
    """

    def __init__(self, dialect: Dialect, *, scoping: str = SCOPING_BODY) -> None:
        if scoping not in SCOPING_MODES:
            raise ValueError(f"Unknown scoping mode: {scoping}")
        self.dialect = dialect
        self.scoping = scoping

    def extract_project(self, root: Path, files: Iterable[str]) -> ProjectMetadata:
        """Read and extract each file in order, merging per-file results atomically."""
        metadata = ProjectMetadata()
        count = 0
        for relative in files:
            source = self._read(root, relative, metadata)
            result = self.extract_file(source)
            result.merge_into(metadata)
            count += 1
        logger.debug(
            "Extracted %d files with %s: %d entities, %d classes, %d routes, %d relationships",
            count,
            self.dialect.name,
            len(metadata.entities),
            len(metadata.classes),
            len(metadata.functions),
            len(metadata.relationships),
        )
        return metadata

    def extract_file(self, source: SourceFile) -> FileResult:
        text = source.text
        headers = extract_class_headers(text)
        result = FileResult(
            path=source.path,
            is_entity_file=self.dialect.entity_marker in text,
            functions=extract_routes(text),
        )
        if not headers:
            return result

        methods = extract_methods(text)
        hits = self._collect_properties(source)

        if self.scoping == SCOPING_FILE:
            for header in headers:
                result.classes.append(
                    self._class_info(source, header.name, methods, hits, result.relationships)
                )
            return result

        scopes = ScopeMap.build(text, headers)
        method_owners = [scopes.header_at(method.offset) for method in methods]
        hit_owners = [scopes.header_at(hit.offset) for hit in hits]
        # Same-named classes (one per namespace) are told apart by header offset.
        for header in headers:
            owned_methods = [m for m, owner in zip(methods, method_owners) if owner == header]
            owned_hits = [h for h, owner in zip(hits, hit_owners) if owner == header]
            result.classes.append(
                self._class_info(source, header.name, owned_methods, owned_hits, result.relationships)
            )
        return result

    def _class_info(
        self,
        source: SourceFile,
        name: str,
        methods: Sequence[MethodMatch],
        hits: Sequence[_PropertyHit],
        relationships: List[RelationshipInfo],
    ) -> ClassInfo:
        for hit in hits:
            if hit.related is None:
                continue
            for kind in hit.kinds:
                relationships.append(RelationshipInfo(from_class=name, to_class=hit.related, type=kind))
        return ClassInfo(
            name=name,
            file_path=source.display_path,
            methods=[
                MethodInfo(name=method.name, docs=method.docs, return_type=method.return_type)
                for method in methods
            ],
            properties=[
                PropertyInfo(name=hit.prop.name, type=hit.prop.type, decorators=list(hit.prop.decorators))
                for hit in hits
            ],
        )

    def _collect_properties(self, source: SourceFile) -> List[_PropertyHit]:
        hits: List[_PropertyHit] = []
        for buffer in reconstruct(source.text):
            statement = parse_statement(buffer)
            if isinstance(statement, DecoratedProperty):
                kinds = [
                    self.dialect.relationship_decorators[name]
                    for name in statement.decorators
                    if name in self.dialect.relationship_decorators
                ]
                hits.append(
                    _PropertyHit(
                        offset=buffer.offset,
                        prop=PropertyInfo(
                            name=statement.name,
                            type=statement.declared_type,
                            decorators=list(statement.decorators),
                        ),
                        related=extract_related_class(buffer.text) if kinds else None,
                        kinds=kinds,
                    )
                )
            elif isinstance(statement, (ClassHeader, DecoratedMethod)):
                continue
            else:
                logger.debug("%s:%d: decorated statement not recognised", source.path, buffer.line)
        return hits

    def _read(self, root: Path, relative: str, metadata: ProjectMetadata) -> SourceFile:
        path = root / relative
        try:
            data = path.read_bytes()
        except OSError as exc:
            self._warn(metadata, f"Could not read {relative}: {exc.strerror or exc}")
            return SourceFile(path=relative, text="")
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            text = data.decode("utf-8", errors="replace")
            self._warn(metadata, f"{relative} is not valid UTF-8; undecodable bytes were replaced")
        # Same newline translation as text-mode reads.
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        return SourceFile(path=relative, text=text)

    @staticmethod
    def _warn(metadata: ProjectMetadata, message: str) -> None:
        logger.warning(message)
        metadata.warnings.append(message)


__all__ = [
    "DecoratorExtractor",
    "Dialect",
    "FileResult",
    "SCOPING_BODY",
    "SCOPING_FILE",
    "SCOPING_MODES",
    "SEQUELIZE",
    "TYPEORM",
]
