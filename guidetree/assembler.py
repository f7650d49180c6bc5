"""Rebuild a section tree from a flat stream of headings.

Parsers hand over guides as an ordered list of ``(heading, level, items)``
entries. :func:`assemble_document` groups every entry under the nearest
preceding heading of a lower level using a stack of open sections, then
freezes the result into a :class:`~guidetree.section.Document` and gives
each section a document-unique anchor.

Example
-------
>>> from guidetree.assembler import assemble_document
>>> doc = assemble_document(
...     "Guide", [("A", 1, []), ("B", 2, []), ("C", 2, []), ("D", 1, [])]
... )
>>> [s.heading for s in doc.sections]
['A', 'D']
>>> [c.heading for c in doc.sections[0].children]
['B', 'C']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import re

from .blocks import (
    CodeSample,
    CommandExample,
    ContentBlock,
    ListItem,
    Paragraph,
    make_block,
)
from .errors import InvalidBlockError, InvalidStructureError, MalformedInputError
from .section import Document, Section

logger = logging.getLogger(__name__)

DEFAULT_ROOT_LEVEL = 1


@dc.dataclass(frozen=True, slots=True)
class HeadingEntry:
    """One heading and the content that follows it in the flat input.

    Attributes
    ----------
    heading : str or None
        Heading text, or ``None`` for content found before any heading.
    level : int
        Heading depth; ignored when ``heading`` is ``None``.
    items : tuple
        Blocks, or ``(kind, payload)`` pairs accepted by
        :func:`~guidetree.blocks.make_block`.
    """

    heading: str | None
    level: int
    items: tuple[object, ...] = ()


@dc.dataclass(slots=True)
class _OpenSection:
    """Mutable scratch node used only while the stack is being unwound."""

    heading: str
    level: int
    blocks: list[ContentBlock]
    children: list[_OpenSection] = dc.field(default_factory=list)


def _coerce_entry(raw: object, index: int) -> HeadingEntry:
    match raw:
        case HeadingEntry():
            return raw
        case (heading, level):
            return HeadingEntry(heading, level)
        case (heading, level, items):
            return HeadingEntry(heading, level, tuple(items or ()))
        case _:
            msg = f"Entry {index} is not a (heading, level, items) tuple: {raw!r}"
            raise MalformedInputError(msg)


def _coerce_block(item: object) -> ContentBlock:
    match item:
        case Paragraph() | CodeSample() | CommandExample() | ListItem():
            return item
        case (str() as kind, payload):
            return make_block(kind, payload)
        case _:
            msg = f"Cannot build a content block from {item!r}"
            raise InvalidBlockError(msg)


def _slugify(title: str) -> str:
    no_number = re.sub(r"^\d+(\.\d+)*\.?\s*", "", title.lower())
    slug = re.sub(r"[^a-z0-9]+", "-", no_number).strip("-")
    return slug or "section"


def _unique_slug(base: str, used: set[str]) -> str:
    """Generate a unique slug, appending numeric suffixes when needed."""
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


def _freeze(roots: list[_OpenSection]) -> tuple[Section, ...]:
    """Convert scratch nodes into immutable Sections with pre-order anchors.

    Anchors are handed out top-down in document order; Sections are built
    bottom-up so each parent receives its finished children. Both passes use
    explicit stacks, so nesting depth is not bounded by the recursion limit.
    """
    used_anchors: set[str] = set()
    anchors: dict[int, str] = {}
    pending = list(reversed(roots))
    while pending:
        node = pending.pop()
        anchors[id(node)] = _unique_slug(_slugify(node.heading), used_anchors)
        pending.extend(reversed(node.children))

    frozen: dict[int, Section] = {}
    stack = [(root, False) for root in reversed(roots)]
    while stack:
        node, expanded = stack.pop()
        if not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))
            continue
        frozen[id(node)] = Section(
            heading=node.heading,
            level=node.level,
            blocks=tuple(node.blocks),
            children=tuple(frozen.pop(id(child)) for child in node.children),
            anchor=anchors[id(node)],
        )
    return tuple(frozen.pop(id(root)) for root in roots)


def assemble_document(
    title: str,
    entries: cabc.Iterable[HeadingEntry | tuple[object, ...]],
    *,
    root_level: int | None = DEFAULT_ROOT_LEVEL,
) -> Document:
    """Build a Document from flat heading entries with the heading-stack method.

    Parameters
    ----------
    title : str
        Document title.
    entries : Iterable[HeadingEntry | tuple]
        Headings in document order with the content that follows each one.
    root_level : int or None, optional
        Level the first heading must have; later headings may not be
        shallower. ``None`` accepts whatever level the input starts with.

    Returns
    -------
    Document
        Frozen tree with anchors assigned in document order.

    Raises
    ------
    MalformedInputError
        If the input is empty, content precedes the first heading, or a
        heading violates ``root_level``.
    InvalidStructureError
        If levels or sibling headings break the tree rules.
    InvalidBlockError
        If an item cannot be turned into a valid block.
    """
    roots: list[_OpenSection] = []
    stack: list[_OpenSection] = []
    for index, raw in enumerate(entries):
        entry = _coerce_entry(raw, index)
        if entry.heading is None:
            if entry.items:
                msg = f"Content at entry {index} appears before any heading."
                raise MalformedInputError(msg)
            continue
        if not isinstance(entry.heading, str):
            msg = f"Heading at entry {index} must be a string, got {entry.heading!r}."
            raise InvalidStructureError(msg)
        if isinstance(entry.level, bool) or not isinstance(entry.level, int) or entry.level < 1:
            msg = f"Heading {entry.heading!r} has invalid level {entry.level!r}."
            raise InvalidStructureError(msg)
        if root_level is not None:
            if not roots and entry.level != root_level:
                msg = (
                    f"First heading {entry.heading!r} is level {entry.level}; "
                    f"expected level {root_level}."
                )
                raise MalformedInputError(msg)
            if entry.level < root_level:
                msg = (
                    f"Heading {entry.heading!r} (level {entry.level}) is shallower "
                    f"than the root level {root_level}."
                )
                raise MalformedInputError(msg)
        node = _OpenSection(
            heading=entry.heading,
            level=entry.level,
            blocks=[_coerce_block(item) for item in entry.items],
        )
        while stack and stack[-1].level >= node.level:
            stack.pop()
        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)
        logger.debug(
            "Opened %r at level %s under %r",
            node.heading,
            node.level,
            stack[-2].heading if len(stack) > 1 else None,
        )

    if not roots:
        msg = "Input contains no headings."
        raise MalformedInputError(msg)

    sections = _freeze(roots)
    document = Document(title, sections)
    logger.debug("Assembled %r with %d top-level sections", title, len(sections))
    return document


__all__ = ["DEFAULT_ROOT_LEVEL", "HeadingEntry", "assemble_document"]
