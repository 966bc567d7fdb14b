"""Pattern extractors for decorator-annotated TypeScript sources.

Every extractor is a pure function over text. Malformed input yields no
matches; nothing here raises on unexpected source shapes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from ..models import APIFunctionInfo, describe_signature


def _balanced_body(depth: int) -> str:
    """Return a pattern for parenthesis contents nested up to ``depth`` levels."""
    body = r"[^()]*"
    for _ in range(depth):
        body = rf"(?:[^()]|\({body}\))*"
    return body


_ARGUMENT_BODY = _balanced_body(3)
_ARGUMENTS = rf"\({_ARGUMENT_BODY}\)"
_DECORATOR = rf"@\w+\b(?:\s*{_ARGUMENTS})?"

_CLASS_PATTERN = re.compile(
    r"^\s*(?:export\s+)?(?:default\s+)?(?:abstract\s+)?class\s+(?P<name>\w+)",
    re.MULTILINE,
)

_METHOD_PATTERN = re.compile(
    r"^\s*(?:(?:public|private|protected)\s+)?(?:(?:static|abstract)\s+)?(?:async\s+)?"
    r"(?P<name>\w+)\s*\((?P<params>[^)]*)\)\s*:\s*(?P<returns>[^{\n]+)",
    re.MULTILINE,
)

_ROUTE_PATTERN = re.compile(
    r"@(?P<verb>Get|Post|Put|Delete|Patch)\(\s*(?P<quote>['\"])(?P<path>[^'\"]+)(?P=quote)\s*\)"
    r"[\s\S]*?(?P<name>\w+)\s*\((?P<params>[^)]*)\)\s*:\s*(?P<returns>[^{\n]+)",
)

_PROPERTY_PATTERN = re.compile(
    rf"^\s*(?P<decorators>(?:{_DECORATOR}\s*)*)"
    r"(?:(?:public|private|protected|readonly|static|declare|override)\s+)*"
    r"(?P<name>\w+)[?!]?\s*:\s*(?P<type>(?:[^\n;=]|=>)+)(?:=[^;]*)?;"
)

_DECORATED_METHOD_PATTERN = re.compile(
    rf"^\s*(?P<decorators>(?:{_DECORATOR}\s*)+)"
    r"(?:(?:public|private|protected|static|async|override)\s+)*"
    rf"(?P<name>\w+)\s*\((?P<params>{_ARGUMENT_BODY})\)\s*(?::\s*(?P<returns>[^{{;]+))?"
)

_DECORATED_CLASS_PATTERN = re.compile(
    rf"^\s*(?P<decorators>(?:{_DECORATOR}\s*)*)"
    r"(?:export\s+)?(?:default\s+)?(?:abstract\s+)?class\s+(?P<name>\w+)"
)

_DECORATOR_NAME_PATTERN = re.compile(rf"@(?P<name>\w+)(?:\s*{_ARGUMENTS})?")

_LAZY_REFERENCE_PATTERN = re.compile(r"\(\s*\(\s*\)\s*=>\s*(?P<target>\w+)")


@dataclass(frozen=True)
class ClassHeaderMatch:
    """A ``class`` header; ``offset`` is where the class name ends."""

    name: str
    offset: int


@dataclass(frozen=True)
class MethodMatch:
    name: str
    params: str
    return_type: str
    offset: int

    @property
    def docs(self) -> str:
        return describe_signature(self.params, self.return_type)


@dataclass(frozen=True)
class PropertyMatch:
    decorator_text: str
    name: str
    declared_type: str


@dataclass(frozen=True)
class DecoratedMethodMatch:
    decorator_text: str
    name: str
    params: str
    return_type: str


@dataclass(frozen=True)
class DecoratedClassMatch:
    decorator_text: str
    name: str


def line_of(text: str, index: int) -> int:
    """Return 1-based line number for a character index."""
    return text.count("\n", 0, index) + 1


def _clean_type(value: str) -> str:
    return value.strip().rstrip(";").strip()


def extract_class_headers(text: str) -> List[ClassHeaderMatch]:
    """Return every class header in document order."""
    return [
        ClassHeaderMatch(name=match.group("name"), offset=match.end("name"))
        for match in _CLASS_PATTERN.finditer(text)
    ]


def extract_methods(text: str) -> List[MethodMatch]:
    """Return every single-line method signature with a declared return type."""
    return [
        MethodMatch(
            name=match.group("name"),
            params=match.group("params"),
            return_type=_clean_type(match.group("returns")),
            offset=match.start("name"),
        )
        for match in _METHOD_PATTERN.finditer(text)
    ]


def extract_routes(text: str) -> List[APIFunctionInfo]:
    """Return route handlers: an HTTP verb decorator bound to the next method signature."""
    functions: List[APIFunctionInfo] = []
    for match in _ROUTE_PATTERN.finditer(text):
        params = match.group("params")
        return_type = _clean_type(match.group("returns"))
        functions.append(
            APIFunctionInfo(
                name=match.group("name"),
                method=match.group("verb").upper(),
                route=match.group("path"),
                docs=describe_signature(params, return_type),
                return_type=return_type,
            )
        )
    return functions


def match_property(statement: str) -> Optional[PropertyMatch]:
    """Match a decorated property declaration inside one statement buffer."""
    match = _PROPERTY_PATTERN.match(statement)
    if not match:
        return None
    return PropertyMatch(
        decorator_text=match.group("decorators").strip(),
        name=match.group("name"),
        declared_type=match.group("type").strip(),
    )


def match_decorated_method(statement: str) -> Optional[DecoratedMethodMatch]:
    match = _DECORATED_METHOD_PATTERN.match(statement)
    if not match:
        return None
    return DecoratedMethodMatch(
        decorator_text=match.group("decorators").strip(),
        name=match.group("name"),
        params=match.group("params"),
        return_type=_clean_type(match.group("returns") or ""),
    )


def match_decorated_class(statement: str) -> Optional[DecoratedClassMatch]:
    match = _DECORATED_CLASS_PATTERN.match(statement)
    if not match:
        return None
    return DecoratedClassMatch(
        decorator_text=match.group("decorators").strip(),
        name=match.group("name"),
    )


def decorator_names(decorator_text: str) -> List[str]:
    """Return decorator names in order, duplicates kept, skipping ``@`` inside arguments."""
    return [match.group("name") for match in _DECORATOR_NAME_PATTERN.finditer(decorator_text)]


def extract_related_class(statement: str) -> Optional[str]:
    """Return the identifier of the first ``(() => Target`` lazy reference, if any."""
    match = _LAZY_REFERENCE_PATTERN.search(statement)
    if match:
        return match.group("target")
    return None


__all__ = [
    "ClassHeaderMatch",
    "DecoratedClassMatch",
    "DecoratedMethodMatch",
    "MethodMatch",
    "PropertyMatch",
    "decorator_names",
    "extract_class_headers",
    "extract_methods",
    "extract_related_class",
    "extract_routes",
    "line_of",
    "match_decorated_class",
    "match_decorated_method",
    "match_property",
]
