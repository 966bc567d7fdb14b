"""Mermaid entity-relationship diagram rendering."""

from __future__ import annotations

from typing import Iterable

from .models import RelationshipInfo

EMPTY_DIAGRAM = "erDiagram\n    %% No relationships found"

_CARDINALITY = {
    "OneToOne": "||--||",
    "ManyToOne": "o|--||",
    "OneToMany": "||--|o",
    "ManyToMany": "o|--|o",
}


def render_mermaid(relationships: Iterable[RelationshipInfo]) -> str:
    """Return an ``erDiagram`` with one line per edge; unknown kinds are skipped."""
    edges = list(relationships)
    if not edges:
        return EMPTY_DIAGRAM

    lines = ["erDiagram"]
    for edge in edges:
        link = _CARDINALITY.get(edge.type)
        if link is None:
            continue
        lines.append(f'    {edge.from_class} {link} {edge.to_class} : ""')
    return "\n".join(lines) + "\n"


__all__ = ["EMPTY_DIAGRAM", "render_mermaid"]
