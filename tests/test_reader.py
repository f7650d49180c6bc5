"""Tests for the canonical text reader and the text round trip."""

from __future__ import annotations

import typing as typ

import pytest

from guidetree import (
    CodeSample,
    CommandExample,
    InvalidBlockError,
    ListItem,
    MalformedInputError,
    Paragraph,
    assemble_document,
    load_document,
    read_document,
    read_entries,
    render_text,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from guidetree import Document


def test_sample_guide_structure(sample_document: Document) -> None:
    """Headings nest by level and blocks keep their order and kinds."""
    assert sample_document.title == "Docker guide"
    assert [s.heading for s in sample_document.sections] == ["Architecture", "Compose"]
    architecture = sample_document.sections[0]
    assert [c.heading for c in architecture.children] == ["Images", "Networking"]
    images = architecture.children[0]
    assert images.blocks == (
        CommandExample("docker build -t app .\ndocker images"),
        CodeSample("FROM python:3.12-slim\nRUN pip install app", language="dockerfile"),
    ), f"unexpected image blocks {images.blocks!r}"
    assert architecture.children[1].blocks == (ListItem(("bridge", "host", "none")),)


def test_sample_guide_anchors(sample_document: Document) -> None:
    anchors = [section.anchor for section, _ in sample_document.walk()]
    assert anchors == ["architecture", "images", "networking", "compose", "networking-2"]


def test_lookup_prefers_first_networking_section(sample_document: Document) -> None:
    found = sample_document.find("Networking")
    assert found.anchor == "networking", f"expected the Architecture child, got {found!r}"


def test_canonical_text_is_a_fixed_point(sample_guide_text: str) -> None:
    """Rendering a canonical guide reproduces it byte for byte."""
    assert render_text(read_document(sample_guide_text)) == sample_guide_text


def test_round_trip_preserves_tricky_content() -> None:
    """Markup-looking paragraph lines, nested fences and blank command lines survive."""
    document = assemble_document(
        "Tricky: guide",
        [
            (
                "Escapes",
                1,
                [
                    Paragraph(
                        "# hash\n- dash\n$ dollar\n`tick\n\\ backslash\n\n  \nend"
                    ),
                    CodeSample("```\ninner\n```", language="markdown"),
                    CodeSample("plain text"),
                    CommandExample("echo one\n\necho two"),
                    ListItem(("  indented", "$ literal", "- dashed")),
                ],
            ),
            ("Deep", 3, [Paragraph("Skipped a level.")]),
        ],
    )
    restored = read_document(render_text(document))
    assert restored == document, "round trip should yield a structurally equal document"
    assert restored.title == "Tricky: guide"


def test_title_falls_back_to_first_heading() -> None:
    document = read_document("# Volumes\n\nNamed volumes persist data.\n")
    assert document.title == "Volumes"


def test_paragraph_ends_at_unseparated_heading() -> None:
    """A heading directly after prose starts a new section."""
    document = read_document("# A\ntext\n## B\n- item\n")
    assert document.sections[0].blocks == (Paragraph("text"),)
    assert document.sections[0].children[0].blocks == (ListItem(("item",)),)


def test_loose_content_is_reported_as_headingless_entry() -> None:
    title, entries = read_entries("Intro text\n\n# A\n")
    assert entries[0].heading is None, "content before a heading has no heading"
    assert entries[0].items == (Paragraph("Intro text"),)
    assert title == "A"


def test_loose_content_before_heading_is_malformed() -> None:
    with pytest.raises(MalformedInputError):
        read_document("Intro text\n\n# A\n")


@pytest.mark.parametrize(
    "text",
    [
        "# A\n\n```bash\necho never closed\n",
        "---\ntitle: Open\n# A\n",
        "---\n- a\n- b\n---\n\n# A\n",
        "---\ntitle: [unclosed\n---\n\n# A\n",
        "",
    ],
    ids=["open-fence", "open-front-matter", "list-front-matter", "bad-yaml", "empty"],
)
def test_malformed_text_is_rejected(text: str) -> None:
    with pytest.raises(MalformedInputError):
        read_document(text)


def test_empty_fence_is_an_invalid_block() -> None:
    with pytest.raises(InvalidBlockError):
        read_document("# A\n\n```bash\n```\n")


def test_root_level_policy_applies_to_text() -> None:
    with pytest.raises(MalformedInputError):
        read_document("## Starts deep\n")
    document = read_document("## Starts deep\n", root_level=None)
    assert document.sections[0].level == 2


def test_load_document_reads_utf8_file(tmp_path: Path, sample_guide_text: str) -> None:
    path = tmp_path / "guide.md"
    path.write_text(sample_guide_text, encoding="utf-8")
    assert load_document(path) == read_document(sample_guide_text)


def test_load_document_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_document(tmp_path / "missing.md")


def test_load_document_rejects_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "guide.md"
    path.write_bytes(b"# Intro\n\n\xff\xfe broken\n")
    with pytest.raises(MalformedInputError, match="not valid UTF-8"):
        load_document(path)
