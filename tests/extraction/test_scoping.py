from __future__ import annotations

from metascan.extraction.patterns import extract_class_headers
from metascan.extraction.scoping import ScopeMap
from tests._fixtures.repo_builder import dedent

TWO_CLASSES = dedent(
    """
    export class First {
      // stray { in a comment
      label = '}';

      alpha(): string {
        const x = { a: 1 };
        return `${x.a}}`;
      }
    }

    /* class Hidden { */
    export class Second {
      beta(x: number): number {
        return x;
      }
    }
    """
)


def _scopes(text: str) -> ScopeMap:
    return ScopeMap.build(text, extract_class_headers(text))


def test_members_are_owned_by_their_class_body() -> None:
    scopes = _scopes(TWO_CLASSES)

    assert scopes.owner(TWO_CLASSES.index("alpha(")) == "First"
    assert scopes.owner(TWO_CLASSES.index("beta(")) == "Second"


def test_offsets_inside_method_bodies_have_no_owner() -> None:
    scopes = _scopes(TWO_CLASSES)

    assert scopes.owner(TWO_CLASSES.index("const x")) is None
    assert scopes.owner(TWO_CLASSES.index("return x")) is None


def test_offsets_outside_any_class_have_no_owner() -> None:
    scopes = _scopes(TWO_CLASSES)

    assert scopes.owner(0) is None
    assert scopes.owner(TWO_CLASSES.index("/* class Hidden")) is None


def test_class_bodies_are_recorded_as_owned_blocks() -> None:
    scopes = _scopes(TWO_CLASSES)

    owners = [block.owner for block in scopes.blocks if block.owner is not None]

    assert owners == ["First", "Second"]


def test_unclosed_class_body_extends_to_end_of_text() -> None:
    text = "export class Broken {\n  name(): string {\n    return 'x';\n  }\n"
    scopes = _scopes(text)

    assert scopes.owner(text.index("name(")) == "Broken"


def test_braces_in_generic_parameters_do_not_claim_the_body() -> None:
    text = "export class Node<T extends { id: number }> {\n  children: T[];\n}\n"
    scopes = _scopes(text)

    assert scopes.owner(text.index("children")) == "Node"
    assert scopes.owner(text.index("id:")) is None


def test_same_named_classes_have_distinct_headers() -> None:
    text = (
        "namespace A {\n  export class Item {\n    x = 1;\n  }\n}\n"
        "namespace B {\n  export class Item {\n    y = 2;\n  }\n}\n"
    )
    headers = extract_class_headers(text)
    scopes = ScopeMap.build(text, headers)

    assert scopes.header_at(text.index("x = 1")) == headers[0]
    assert scopes.header_at(text.index("y = 2")) == headers[1]
