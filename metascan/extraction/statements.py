"""Decorator-buffering statement reconstruction.

Decorated declarations routinely span several lines::

    @ManyToOne(() => UserEntity, (user) => user.orders, {
      onDelete: 'CASCADE',
    })
    user: UserEntity;

``reconstruct`` folds each decorator run and the declaration it annotates
into a single space-joined buffer so the property patterns can match it in
one pass. A buffer ends at the first line containing ``;``, or at a
declaration line that opens the body of a decorated class or method once
every decorator parenthesis is closed. A property initializer such as
``options = {`` keeps capturing until its ``;``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from .patterns import (
    decorator_names,
    match_decorated_class,
    match_decorated_method,
    match_property,
)

STATEMENT_TERMINATOR = ";"
DECORATOR_MARKER = "@"


@dataclass(frozen=True)
class StatementBuffer:
    """Buffered text of one decorator run plus its declaration."""

    text: str
    offset: int
    line: int


@dataclass(frozen=True)
class ClassHeader:
    name: str
    decorators: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DecoratedProperty:
    decorators: Tuple[str, ...]
    name: str
    declared_type: str
    decorator_text: str


@dataclass(frozen=True)
class DecoratedMethod:
    decorators: Tuple[str, ...]
    name: str
    params: str
    return_type: str


Statement = Union[ClassHeader, DecoratedProperty, DecoratedMethod]


def _iter_lines(text: str) -> Iterator[Tuple[int, int, str]]:
    offset = 0
    for number, raw in enumerate(text.split("\n"), start=1):
        yield number, offset, raw
        offset += len(raw) + 1


def _paren_balance(line: str) -> int:
    return line.count("(") - line.count(")")


def _has_initializer(line: str) -> bool:
    """Return True when ``line`` assigns at parenthesis depth 0 (``=`` but not ``=>``)."""
    depth = 0
    for index, char in enumerate(line):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "=" and depth <= 0 and line[index + 1 : index + 2] not in ("=", ">"):
            if index == 0 or line[index - 1] not in "=!<>":
                return True
    return False


def _opens_declaration_body(buffered: str, line: str) -> bool:
    """A decorated class header or method signature ends at the brace opening its body."""
    if _has_initializer(line):
        return False
    return match_decorated_class(buffered) is not None or match_decorated_method(buffered) is not None


def reconstruct(text: str) -> List[StatementBuffer]:
    """Return decorator-led statement buffers in document order."""
    statements: List[StatementBuffer] = []
    parts: List[str] = []
    start_offset = 0
    start_line = 0
    depth = 0
    capturing = False

    for number, offset, raw in _iter_lines(text):
        line = raw.strip()
        if not capturing and not line.startswith(DECORATOR_MARKER):
            continue
        if not capturing:
            parts = []
            start_offset = offset + (len(raw) - len(raw.lstrip()))
            start_line = number
            depth = 0

        parts.append(line + " ")
        is_decorator = line.startswith(DECORATOR_MARKER)
        depth += _paren_balance(line)

        opens_block = (
            not is_decorator
            and depth <= 0
            and line.endswith("{")
            and _opens_declaration_body("".join(parts), line)
        )
        if STATEMENT_TERMINATOR in line or opens_block:
            statements.append(
                StatementBuffer(text="".join(parts), offset=start_offset, line=start_line)
            )
            capturing = False
        else:
            capturing = True

    return statements


def parse_statement(buffer: StatementBuffer) -> Optional[Statement]:
    """Classify a buffer; unrecognised shapes return ``None``."""
    text = buffer.text
    prop = match_property(text)
    if prop is not None:
        return DecoratedProperty(
            decorators=tuple(decorator_names(prop.decorator_text)),
            name=prop.name,
            declared_type=prop.declared_type,
            decorator_text=prop.decorator_text,
        )
    header = match_decorated_class(text)
    if header is not None:
        return ClassHeader(name=header.name, decorators=tuple(decorator_names(header.decorator_text)))
    method = match_decorated_method(text)
    if method is not None:
        return DecoratedMethod(
            decorators=tuple(decorator_names(method.decorator_text)),
            name=method.name,
            params=method.params,
            return_type=method.return_type,
        )
    return None


__all__ = [
    "ClassHeader",
    "DecoratedMethod",
    "DecoratedProperty",
    "Statement",
    "StatementBuffer",
    "parse_statement",
    "reconstruct",
]
