"""Tests for the advisory validator.

Valid trees come from the model constructors. Broken trees are built from
``SimpleNamespace`` objects standing in for externally edited payloads, since
the constructors refuse to build them.
"""

from __future__ import annotations

from types import SimpleNamespace

from guidetree import Document, Section, Violation, validate


def _section(heading: object, level: object, *children: object, blocks: tuple = ()) -> SimpleNamespace:
    return SimpleNamespace(
        heading=heading, level=level, blocks=list(blocks), children=list(children)
    )


def _codes(violations: list[Violation]) -> list[str]:
    return [violation.code for violation in violations]


def test_constructed_document_has_no_violations(sample_document: Document) -> None:
    assert validate(sample_document) == []


def test_empty_document_and_blank_title() -> None:
    violations = validate(SimpleNamespace(title="", sections=[]))
    assert _codes(violations) == ["blank-title", "empty-document"]
    assert all(v.path == () for v in violations), "document-level paths are empty"


def test_level_order_violation_reports_path() -> None:
    tree = SimpleNamespace(
        title="Guide", sections=[_section("A", 2, _section("B", 2))]
    )
    violations = validate(tree)
    assert _codes(violations) == ["level-order"]
    assert violations[0].path == ("A", "B"), f"unexpected path {violations[0].path!r}"


def test_duplicate_sibling_headings() -> None:
    tree = SimpleNamespace(
        title="Guide",
        sections=[_section("A", 1, _section("Dup", 2), _section("Dup", 2))],
    )
    violations = validate(tree)
    assert _codes(violations) == ["duplicate-heading"]
    assert violations[0].path == ("A",)


def test_duplicate_top_level_headings() -> None:
    tree = SimpleNamespace(title="Guide", sections=[_section("A", 1), _section("A", 1)])
    assert _codes(validate(tree)) == ["duplicate-heading"]


def test_invalid_blocks_and_headings_are_reported() -> None:
    bad_code = SimpleNamespace(kind="code", text="docker ps", language="")
    bad_list = SimpleNamespace(kind="list", items=[])
    tree = SimpleNamespace(
        title="Guide",
        sections=[_section(" ", "one", blocks=(bad_code, bad_list))],
    )
    codes = _codes(validate(tree))
    assert codes == ["blank-heading", "bad-level", "invalid-block", "invalid-block"], (
        f"unexpected codes {codes!r}"
    )


def test_shared_sections_are_reported_once() -> None:
    shared = _section("Shared", 2)
    tree = SimpleNamespace(title="Guide", sections=[_section("A", 1, shared, shared)])
    codes = _codes(validate(tree))
    assert codes == ["duplicate-heading", "shared-section"], f"unexpected codes {codes!r}"


def test_cycles_terminate() -> None:
    root = _section("Root", 1)
    root.children.append(root)
    codes = _codes(validate(SimpleNamespace(title="Guide", sections=[root])))
    assert "shared-section" in codes, "a cycle should be reported as a shared section"


def test_single_section_can_be_validated() -> None:
    assert validate(Section("Solo", 1)) == []
    assert _codes(validate(_section("Solo", 0))) == ["bad-level"]


def test_violation_string_includes_location() -> None:
    violation = Violation("level-order", ("A", "B"), "level 2 must exceed parent level 2")
    assert str(violation) == "A > B: [level-order] level 2 must exceed parent level 2"
    assert str(Violation("empty-document", (), "x")) == "<document>: [empty-document] x"


def test_very_deep_trees_are_walked_without_recursion() -> None:
    depth = 1200
    node = _section("Leaf", depth)
    for level in range(depth - 1, 0, -1):
        node = _section(f"Level {level}", level, node)
    node.children[0].level = 1
    violations = validate(SimpleNamespace(title="Guide", sections=[node]))
    assert _codes(violations) == ["level-order"], f"unexpected codes {_codes(violations)!r}"
    assert len(violations[0].path) == 2
