"""Brace-depth tracking used to scope declarations to their enclosing class."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .patterns import ClassHeaderMatch

_CODE = "code"
_SINGLE = "'"
_DOUBLE = '"'
_TEMPLATE = "`"
_LINE_COMMENT = "//"
_BLOCK_COMMENT = "/*"


@dataclass(frozen=True)
class Block:
    """A ``{ ... }`` range; ``header`` is set when the block is a class body."""

    start: int
    end: int
    header: Optional[ClassHeaderMatch] = None

    @property
    def owner(self) -> Optional[str]:
        return self.header.name if self.header is not None else None


def _body_brace(text: str, start: int) -> Optional[int]:
    """Return the offset of the brace opening a class body whose name ends at ``start``.

    Braces inside generic parameters or arguments (``<T extends { id: number }>``)
    belong to type literals, not to the body.
    """
    angle = 0
    paren = 0
    for index in range(start, len(text)):
        char = text[index]
        if char == "<":
            angle += 1
        elif char == ">" and text[index - 1] != "=":
            angle = max(angle - 1, 0)
        elif char in "([":
            paren += 1
        elif char in ")]":
            paren = max(paren - 1, 0)
        elif char == "{" and angle == 0 and paren == 0:
            return index
    return None


class ScopeMap:
    """Maps character offsets to the class whose body directly contains them."""

    def __init__(self, blocks: Sequence[Block]) -> None:
        self._blocks = sorted(blocks, key=lambda block: block.start)

    @property
    def blocks(self) -> List[Block]:
        return list(self._blocks)

    @classmethod
    def build(cls, text: str, headers: Sequence[ClassHeaderMatch]) -> "ScopeMap":
        bodies: Dict[int, ClassHeaderMatch] = {}
        for header in headers:
            brace = _body_brace(text, header.offset)
            if brace is not None:
                bodies.setdefault(brace, header)
        # Stack entries are (open offset, header) for braces and None for `${`.
        stack: List[Optional[Tuple[int, Optional[ClassHeaderMatch]]]] = []
        modes: List[str] = [_CODE]
        blocks: List[Block] = []

        index = 0
        length = len(text)
        while index < length:
            char = text[index]
            mode = modes[-1]
            pair = text[index : index + 2]

            if mode == _LINE_COMMENT:
                if char == "\n":
                    modes.pop()
            elif mode == _BLOCK_COMMENT:
                if pair == "*/":
                    modes.pop()
                    index += 1
            elif mode in (_SINGLE, _DOUBLE):
                if char == "\\":
                    index += 1
                elif char == mode or char == "\n":
                    modes.pop()
            elif mode == _TEMPLATE:
                if char == "\\":
                    index += 1
                elif char == "`":
                    modes.pop()
                elif pair == "${":
                    stack.append(None)
                    modes.append(_CODE)
                    index += 1
            elif pair == "//":
                modes.append(_LINE_COMMENT)
                index += 1
            elif pair == "/*":
                modes.append(_BLOCK_COMMENT)
                index += 1
            elif char in (_SINGLE, _DOUBLE, _TEMPLATE):
                modes.append(char)
            elif char == "{":
                stack.append((index, bodies.get(index)))
            elif char == "}" and stack:
                opened = stack.pop()
                if opened is None:
                    modes.pop()
                else:
                    blocks.append(Block(start=opened[0], end=index, header=opened[1]))
            index += 1

        for opened in stack:
            if opened is not None:
                blocks.append(Block(start=opened[0], end=length, header=opened[1]))
        return cls(blocks)

    def header_at(self, offset: int) -> Optional[ClassHeaderMatch]:
        """Return the header of the class whose body directly contains ``offset``."""
        innermost: Optional[Block] = None
        for block in self._blocks:
            if block.start >= offset:
                break
            if offset <= block.end:
                innermost = block
        return innermost.header if innermost is not None else None

    def owner(self, offset: int) -> Optional[str]:
        """Return the class owning ``offset`` or ``None`` outside any class member position."""
        header = self.header_at(offset)
        return header.name if header is not None else None


__all__ = ["Block", "ScopeMap"]
