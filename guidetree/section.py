"""Section and document models forming an immutable ownership tree.

A :class:`Document` owns its top-level :class:`Section` objects and every
section owns its blocks and child sections. Nothing stores a parent pointer;
:meth:`Section.walk` hands each section its ancestor path instead.

Example
-------
>>> from guidetree.blocks import Paragraph
>>> from guidetree.section import Document, Section
>>> child = Section("Volumes", 2, blocks=(Paragraph("Persist data."),))
>>> doc = Document("Guide", (Section("Storage", 1, children=(child,)),))
>>> [(s.heading, [a.heading for a in path]) for s, path in doc.walk()]
[('Storage', []), ('Volumes', ['Storage'])]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc

from .blocks import ContentBlock, block_problems
from .errors import InvalidBlockError, InvalidStructureError, NotFoundError

SectionPath = tuple["Section", ...]


def _sibling_collision(sections: cabc.Iterable[object]) -> str | None:
    """Return the first heading shared by two siblings, if any."""
    seen: set[str] = set()
    for section in sections:
        heading = getattr(section, "heading", None)
        if heading in seen:
            return heading
        if isinstance(heading, str):
            seen.add(heading)
    return None


@dc.dataclass(frozen=True, slots=True)
class Section:
    """Titled, levelled grouping of blocks and subsections.

    Attributes
    ----------
    heading : str
        Heading text; single line and not blank.
    level : int
        Positive heading depth. Every child sits strictly deeper.
    blocks : tuple[ContentBlock, ...]
        Content preceding the first child section, in order.
    children : tuple[Section, ...]
        Nested subsections, in order, with pairwise distinct headings.
    anchor : str
        Stable identifier assigned during assembly. Ignored by equality so
        hand-built and assembled trees compare structurally.
    """

    heading: str
    level: int
    blocks: tuple[ContentBlock, ...] = ()
    children: tuple[Section, ...] = ()
    anchor: str = dc.field(default="", compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocks", tuple(self.blocks))
        object.__setattr__(self, "children", tuple(self.children))
        if not isinstance(self.heading, str) or not self.heading.strip():
            msg = "Section heading must not be blank."
            raise InvalidStructureError(msg)
        if "\n" in self.heading:
            msg = f"Section heading {self.heading!r} must be a single line."
            raise InvalidStructureError(msg)
        if isinstance(self.level, bool) or not isinstance(self.level, int) or self.level < 1:
            msg = f"Section {self.heading!r} has invalid level {self.level!r}."
            raise InvalidStructureError(msg)
        for block in self.blocks:
            problems = block_problems(block)
            if problems:
                raise InvalidBlockError("; ".join(problems))
        for child in self.children:
            if not isinstance(child, Section):
                msg = f"Section {self.heading!r} has a non-section child {child!r}."
                raise InvalidStructureError(msg)
            if child.level <= self.level:
                msg = (
                    f"Subsection {child.heading!r} (level {child.level}) must be "
                    f"deeper than {self.heading!r} (level {self.level})."
                )
                raise InvalidStructureError(msg)
        duplicate = _sibling_collision(self.children)
        if duplicate is not None:
            msg = f"Section {self.heading!r} has two subsections named {duplicate!r}."
            raise InvalidStructureError(msg)

    def walk(
        self, ancestors: SectionPath = ()
    ) -> cabc.Iterator[tuple[Section, SectionPath]]:
        """Yield ``(section, ancestors)`` pairs depth first, starting with self.

        Parameters
        ----------
        ancestors : tuple[Section, ...], optional
            Path above this section, outermost first. Callers normally leave
            it empty.

        Yields
        ------
        tuple[Section, tuple[Section, ...]]
            Each section of the subtree in document order with the path of
            sections enclosing it.
        """
        stack: list[tuple[Section, SectionPath]] = [(self, ancestors)]
        while stack:
            section, path = stack.pop()
            yield section, path
            child_path = (*path, section)
            stack.extend((child, child_path) for child in reversed(section.children))

    def find(self, heading: str) -> Section:
        """Return the first section in document order with ``heading``.

        Raises
        ------
        NotFoundError
            If no section in the subtree carries that heading.
        """
        return _find_first(self.walk(), heading)

    def iter_blocks(self) -> cabc.Iterator[ContentBlock]:
        """Yield every block of the subtree in document order."""
        for section, _ in self.walk():
            yield from section.blocks


@dc.dataclass(frozen=True, slots=True)
class Document:
    """Root container owning the ordered top-level sections of a guide."""

    title: str
    sections: tuple[Section, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "sections", tuple(self.sections))
        if not isinstance(self.title, str) or not self.title.strip():
            msg = "Document title must not be blank."
            raise InvalidStructureError(msg)
        if not self.sections:
            msg = f"Document {self.title!r} must contain at least one section."
            raise InvalidStructureError(msg)
        for section in self.sections:
            if not isinstance(section, Section):
                msg = f"Document {self.title!r} has a non-section entry {section!r}."
                raise InvalidStructureError(msg)
        duplicate = _sibling_collision(self.sections)
        if duplicate is not None:
            msg = f"Document {self.title!r} has two top-level sections named {duplicate!r}."
            raise InvalidStructureError(msg)

    def walk(self) -> cabc.Iterator[tuple[Section, SectionPath]]:
        """Yield ``(section, ancestors)`` pairs across every top-level section."""
        for section in self.sections:
            yield from section.walk()

    def find(self, heading: str) -> Section:
        """Return the first section in document order with ``heading``.

        Raises
        ------
        NotFoundError
            If no section carries that heading.
        """
        return _find_first(self.walk(), heading)

    def find_anchor(self, anchor: str) -> Section:
        """Return the section whose assigned anchor equals ``anchor``."""
        for section, _ in self.walk():
            if section.anchor and section.anchor == anchor:
                return section
        msg = f"No section with anchor {anchor!r}."
        raise NotFoundError(msg)

    def iter_blocks(self) -> cabc.Iterator[ContentBlock]:
        """Yield every block of the document in order."""
        for section in self.sections:
            yield from section.iter_blocks()


def _find_first(
    pairs: cabc.Iterable[tuple[Section, SectionPath]], heading: str
) -> Section:
    for section, _ in pairs:
        if section.heading == heading:
            return section
    msg = f"No section with heading {heading!r}."
    raise NotFoundError(msg)


__all__ = ["Document", "Section", "SectionPath"]
