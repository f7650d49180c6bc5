"""Advisory structural checks for guide trees.

:func:`validate` walks a document and reports every broken invariant as a
:class:`Violation` instead of raising. Trees built through the model
constructors always come back clean; the walk exists for trees assembled by
other means (hand-edited payloads, objects deserialized without validation)
and therefore only relies on attribute names, never on concrete types.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from .blocks import block_problems

VIOLATION_CODES = (
    "empty-document",
    "blank-title",
    "blank-heading",
    "bad-level",
    "level-order",
    "duplicate-heading",
    "invalid-block",
    "shared-section",
)


@dc.dataclass(frozen=True, slots=True)
class Violation:
    """One broken invariant found while walking a tree.

    Attributes
    ----------
    code : str
        Machine-readable category, one of :data:`VIOLATION_CODES`.
    path : tuple[str, ...]
        Headings from the top-level section down to the offending section;
        empty for document-level problems.
    message : str
        Human-readable description.
    """

    code: str
    path: tuple[str, ...]
    message: str

    def __str__(self) -> str:
        location = " > ".join(self.path) or "<document>"
        return f"{location}: [{self.code}] {self.message}"


def _as_tuple(value: object) -> tuple[typ.Any, ...]:
    if isinstance(value, cabc.Iterable) and not isinstance(value, str | bytes):
        return tuple(value)
    return ()


def _valid_level(level: object) -> bool:
    return isinstance(level, int) and not isinstance(level, bool) and level >= 1


class _TreeWalker:
    """Collect violations while visiting each node at most once."""

    def __init__(self) -> None:
        self.violations: list[Violation] = []
        self._seen: set[int] = set()

    def report(self, code: str, path: tuple[str, ...], message: str) -> None:
        self.violations.append(Violation(code, path, message))

    def check_siblings(self, sections: tuple[typ.Any, ...], path: tuple[str, ...]) -> None:
        seen: set[str] = set()
        for section in sections:
            heading = getattr(section, "heading", None)
            if not isinstance(heading, str):
                continue
            if heading in seen:
                self.report(
                    "duplicate-heading", path, f"sibling heading {heading!r} repeats"
                )
            seen.add(heading)

    def check_section(
        self, section: object, path: tuple[str, ...], parent_level: int | None
    ) -> None:
        pending: list[tuple[object, tuple[str, ...], int | None]] = [
            (section, path, parent_level)
        ]
        while pending:
            node, node_path, node_parent_level = pending.pop()
            children, here, level = self._check_node(node, node_path, node_parent_level)
            pending.extend((child, here, level) for child in reversed(children))

    def _check_node(
        self, section: object, path: tuple[str, ...], parent_level: int | None
    ) -> tuple[tuple[typ.Any, ...], tuple[str, ...], int | None]:
        """Check one node and return the children still to visit."""
        heading = getattr(section, "heading", None)
        label = heading if isinstance(heading, str) else repr(heading)
        here = (*path, label)
        if id(section) in self._seen:
            self.report("shared-section", here, "section appears more than once in the tree")
            return (), here, parent_level
        self._seen.add(id(section))

        if not isinstance(heading, str) or not heading.strip():
            self.report("blank-heading", here, "heading must be non-blank text")
        elif "\n" in heading:
            self.report("blank-heading", here, "heading must be a single line")

        level = getattr(section, "level", None)
        if not _valid_level(level):
            self.report("bad-level", here, f"level {level!r} is not a positive integer")
            level = None
        elif parent_level is not None and level <= parent_level:
            self.report(
                "level-order",
                here,
                f"level {level} must exceed parent level {parent_level}",
            )

        for index, block in enumerate(_as_tuple(getattr(section, "blocks", ()))):
            for problem in block_problems(block):
                self.report("invalid-block", here, f"block {index}: {problem}")

        children = _as_tuple(getattr(section, "children", ()))
        self.check_siblings(children, here)
        return children, here, level if level is not None else parent_level


def validate(tree: object) -> list[Violation]:
    """Return every invariant violation found in ``tree``.

    Parameters
    ----------
    tree : object
        A :class:`~guidetree.section.Document`, a single
        :class:`~guidetree.section.Section`, or any object exposing the same
        attribute names.

    Returns
    -------
    list[Violation]
        Violations in document order; empty for a well-formed tree. Never
        raises for a broken invariant.
    """
    walker = _TreeWalker()
    if not hasattr(tree, "sections"):
        walker.check_section(tree, (), None)
        return walker.violations

    title = getattr(tree, "title", None)
    if not isinstance(title, str) or not title.strip():
        walker.report("blank-title", (), "document title must be non-blank text")
    sections = _as_tuple(getattr(tree, "sections", ()))
    if not sections:
        walker.report("empty-document", (), "document must contain at least one section")
    walker.check_siblings(sections, ())
    for section in sections:
        walker.check_section(section, (), None)
    return walker.violations


__all__ = ["VIOLATION_CODES", "Violation", "validate"]
