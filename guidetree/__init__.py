"""Immutable section trees for long-form technical guides.

This package models a guide as a :class:`Document` of levelled
:class:`Section` objects holding ordered content blocks, rebuilds that tree
from flat heading streams, validates it, and writes it back out as canonical
text or HTML. The ``guidetree`` console script wraps the same operations.

Examples
--------
>>> from guidetree import assemble_document, render_text, validate
>>> doc = assemble_document(
...     "Docker guide",
...     [("Images", 1, [("command", "docker build -t app .")])],
... )
>>> validate(doc)
[]
>>> "$ docker build -t app ." in render_text(doc)
True
"""

from __future__ import annotations

from .assembler import HeadingEntry, assemble_document
from .blocks import (
    CodeSample,
    CommandExample,
    ContentBlock,
    ListItem,
    Paragraph,
    make_block,
)
from .cli import app, main
from .errors import (
    GuideTreeError,
    InvalidBlockError,
    InvalidStructureError,
    MalformedInputError,
    NotFoundError,
)
from .reader import load_document, read_document, read_entries
from .renderer import HtmlDocumentRenderer, render_text
from .section import Document, Section
from .validator import Violation, validate

__all__ = [
    "CodeSample",
    "CommandExample",
    "ContentBlock",
    "Document",
    "GuideTreeError",
    "HeadingEntry",
    "HtmlDocumentRenderer",
    "InvalidBlockError",
    "InvalidStructureError",
    "ListItem",
    "MalformedInputError",
    "NotFoundError",
    "Paragraph",
    "Section",
    "Violation",
    "app",
    "assemble_document",
    "load_document",
    "main",
    "make_block",
    "read_document",
    "read_entries",
    "render_text",
    "validate",
]
