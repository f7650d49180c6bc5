"""Unit tests for the Section and Document models."""

from __future__ import annotations

import pytest

from guidetree import (
    Document,
    InvalidBlockError,
    InvalidStructureError,
    NotFoundError,
    Paragraph,
    Section,
)


def _doc_with_repeated_heading() -> Document:
    """Return a document where 'Target' appears nested before it appears at top level."""
    nested = Section("Target", 2, blocks=(Paragraph("deep"),))
    return Document(
        "Guide",
        (
            Section("Setup", 1, children=(nested,)),
            Section("Target", 1, blocks=(Paragraph("top"),)),
        ),
    )


def test_child_must_be_deeper_than_parent() -> None:
    with pytest.raises(InvalidStructureError):
        Section("Parent", 2, children=(Section("Child", 2),))


def test_sibling_headings_must_differ() -> None:
    with pytest.raises(InvalidStructureError):
        Section("Parent", 1, children=(Section("Same", 2), Section("Same", 2)))


def test_sibling_comparison_is_case_sensitive() -> None:
    """Headings differing only in case are distinct."""
    section = Section("Parent", 1, children=(Section("Setup", 2), Section("setup", 2)))
    assert len(section.children) == 2, "expected both siblings to be accepted"


@pytest.mark.parametrize("level", [0, -1, True, "2"])
def test_level_must_be_positive_integer(level: object) -> None:
    with pytest.raises(InvalidStructureError):
        Section("Heading", level)  # type: ignore[arg-type]


@pytest.mark.parametrize("heading", ["", "   ", "two\nlines"])
def test_heading_must_be_single_non_blank_line(heading: str) -> None:
    with pytest.raises(InvalidStructureError):
        Section(heading, 1)


def test_section_revalidates_blocks() -> None:
    """Objects that are not valid blocks are rejected."""
    with pytest.raises(InvalidBlockError):
        Section("Heading", 1, blocks=("just a string",))  # type: ignore[arg-type]


def test_document_requires_a_section() -> None:
    with pytest.raises(InvalidStructureError):
        Document("Empty", ())


def test_document_rejects_duplicate_top_level_headings() -> None:
    with pytest.raises(InvalidStructureError):
        Document("Guide", (Section("Intro", 1), Section("Intro", 1)))


def test_document_rejects_blank_title() -> None:
    with pytest.raises(InvalidStructureError):
        Document(" ", (Section("Intro", 1),))


def test_walk_yields_sections_with_ancestor_paths() -> None:
    """Traversal is depth-first pre-order with outermost-first ancestor paths."""
    leaf = Section("Leaf", 3)
    middle = Section("Middle", 2, children=(leaf,))
    other = Section("Other", 2)
    root = Section("Root", 1, children=(middle, other))
    document = Document("Guide", (root,))

    visited = [
        (section.heading, tuple(a.heading for a in path))
        for section, path in document.walk()
    ]

    assert visited == [
        ("Root", ()),
        ("Middle", ("Root",)),
        ("Leaf", ("Root", "Middle")),
        ("Other", ("Root",)),
    ], f"unexpected traversal order: {visited!r}"


def test_walk_is_lazy_and_restartable() -> None:
    """Each call starts a fresh traversal."""
    document = _doc_with_repeated_heading()
    first = document.walk()
    next(first)
    assert [s.heading for s, _ in document.walk()] == ["Setup", "Target", "Target"]
    assert list(document.walk()) == list(document.walk()), (
        "repeated traversals should match"
    )


def test_find_returns_document_order_first_match() -> None:
    """A heading present at two depths resolves to the first in document order."""
    document = _doc_with_repeated_heading()
    found = document.find("Target")
    assert found.blocks == (Paragraph("deep"),), f"expected nested match, got {found!r}"
    assert document.find("Target") is found, "lookup should be deterministic"


def test_section_find_includes_self() -> None:
    section = Section("Self", 1)
    assert section.find("Self") is section


def test_find_raises_not_found() -> None:
    document = _doc_with_repeated_heading()
    with pytest.raises(NotFoundError) as excinfo:
        document.find("Missing")
    assert isinstance(excinfo.value, LookupError), "NotFoundError should be a LookupError"


def test_find_anchor_requires_assigned_anchor() -> None:
    """Hand-built sections have no anchors to find."""
    with pytest.raises(NotFoundError):
        _doc_with_repeated_heading().find_anchor("target")


def test_equality_ignores_anchor() -> None:
    assert Section("Intro", 1, anchor="intro") == Section("Intro", 1)


def test_iter_blocks_follows_document_order() -> None:
    document = _doc_with_repeated_heading()
    assert [b.text for b in document.iter_blocks()] == ["deep", "top"]
