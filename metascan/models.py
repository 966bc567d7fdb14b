"""Core data models and the metadata document wire contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

CLASS_DOCS_TAG = "Parsed with decorator-aware pattern extraction"

RELATIONSHIP_KINDS = ("OneToOne", "OneToMany", "ManyToOne", "ManyToMany")

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")


def describe_signature(params: str, return_type: str) -> str:
    """Return the synthesized human-readable signature description."""
    return f"Input: ({params})\nOutput: {return_type}"


@dataclass(frozen=True)
class SourceFile:
    """A project file read once for a single extraction pass."""

    path: str
    text: str

    @property
    def display_path(self) -> str:
        """Project-relative path with a leading separator and forward slashes."""
        return "/" + self.path.replace("\\", "/").lstrip("/")


@dataclass
class PropertyInfo:
    name: str
    type: str
    decorators: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type, "decorators": list(self.decorators)}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "PropertyInfo":
        return cls(
            name=str(payload.get("name") or ""),
            type=str(payload.get("type") or ""),
            decorators=[str(item) for item in payload.get("decorators") or []],
        )


@dataclass
class MethodInfo:
    name: str
    docs: str
    return_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "docs": self.docs, "returnType": self.return_type}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MethodInfo":
        return cls(
            name=str(payload.get("name") or ""),
            docs=str(payload.get("docs") or ""),
            return_type=str(payload.get("returnType") or ""),
        )


@dataclass
class ClassInfo:
    """A class found in one file; identity is ``(name, file_path)``."""

    name: str
    file_path: str
    docs: str = CLASS_DOCS_TAG
    methods: List[MethodInfo] = field(default_factory=list)
    properties: List[PropertyInfo] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "filePath": self.file_path,
            "docs": self.docs,
            "methods": [method.to_dict() for method in self.methods],
            "properties": [prop.to_dict() for prop in self.properties],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ClassInfo":
        return cls(
            name=str(payload.get("name") or ""),
            file_path=str(payload.get("filePath") or ""),
            docs=str(payload.get("docs") or ""),
            methods=[MethodInfo.from_dict(item) for item in _as_records(payload.get("methods"))],
            properties=[
                PropertyInfo.from_dict(item) for item in _as_records(payload.get("properties"))
            ],
        )


@dataclass
class RelationshipInfo:
    """Directed edge between two entity names; the target may be dangling."""

    from_class: str
    to_class: str
    type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"from": self.from_class, "to": self.to_class, "type": self.type}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "RelationshipInfo":
        return cls(
            from_class=str(payload.get("from") or ""),
            to_class=str(payload.get("to") or ""),
            type=str(payload.get("type") or ""),
        )


@dataclass
class APIFunctionInfo:
    name: str
    method: str
    route: str
    docs: str
    return_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "method": self.method,
            "route": self.route,
            "docs": self.docs,
            "returnType": self.return_type,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "APIFunctionInfo":
        return cls(
            name=str(payload.get("name") or ""),
            method=str(payload.get("method") or ""),
            route=str(payload.get("route") or ""),
            docs=str(payload.get("docs") or ""),
            return_type=str(payload.get("returnType") or ""),
        )


@dataclass
class ProjectMetadata:
    """Root output artifact of an extraction run.

    ``warnings`` collects non-fatal problems (unreadable files, placeholder
    backends) and is not part of the serialized document.
    """

    entities: List[ClassInfo] = field(default_factory=list)
    classes: List[ClassInfo] = field(default_factory=list)
    functions: List[APIFunctionInfo] = field(default_factory=list)
    relationships: List[RelationshipInfo] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def merge(self, other: "ProjectMetadata") -> None:
        """Append every list of ``other`` to this document."""
        self.entities.extend(other.entities)
        self.classes.extend(other.classes)
        self.functions.extend(other.functions)
        self.relationships.extend(other.relationships)
        self.warnings.extend(other.warnings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entities": [item.to_dict() for item in self.entities],
            "classes": [item.to_dict() for item in self.classes],
            "functions": [item.to_dict() for item in self.functions],
            "relationships": [item.to_dict() for item in self.relationships],
        }

    @classmethod
    def from_dict(cls, payload: Any) -> "ProjectMetadata":
        """Load a metadata document, treating missing sections as empty."""
        if not isinstance(payload, Mapping):
            raise ValueError("metadata document must be a JSON object")
        return cls(
            entities=[ClassInfo.from_dict(item) for item in _section(payload, "entities")],
            classes=[ClassInfo.from_dict(item) for item in _section(payload, "classes")],
            functions=[APIFunctionInfo.from_dict(item) for item in _section(payload, "functions")],
            relationships=[
                RelationshipInfo.from_dict(item) for item in _section(payload, "relationships")
            ],
        )


def _section(payload: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list")
    return _as_records(value)


def _as_records(value: Any) -> List[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


__all__ = [
    "APIFunctionInfo",
    "CLASS_DOCS_TAG",
    "ClassInfo",
    "HTTP_METHODS",
    "MethodInfo",
    "ProjectMetadata",
    "PropertyInfo",
    "RELATIONSHIP_KINDS",
    "RelationshipInfo",
    "SourceFile",
    "describe_signature",
]
