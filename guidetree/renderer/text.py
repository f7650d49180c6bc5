r"""Write documents back out in the canonical guide text format.

The output is deterministic: equal documents always produce byte-identical
text, and :func:`guidetree.reader.read_document` turns it back into an equal
document.

Example
-------
>>> from guidetree.assembler import assemble_document
>>> from guidetree.renderer.text import render_text
>>> doc = assemble_document("Guide", [("Intro", 1, [("paragraph", "Hello.")])])
>>> print(render_text(doc), end="")
---
title: Guide
---
<BLANKLINE>
# Intro
<BLANKLINE>
Hello.
"""

from __future__ import annotations

import io
import typing as typ

from ruamel.yaml import YAML

from guidetree._constants import FRONT_MATTER_DELIMITER, HEADING_MARKER

if typ.TYPE_CHECKING:
    from guidetree.section import Document, Section


def _build_front_matter_yaml() -> YAML:
    yaml = YAML()
    yaml.width = 4096
    yaml.explicit_start = False
    return yaml


def render_front_matter(title: str) -> str:
    """Return the YAML front matter block carrying the document title."""
    stream = io.StringIO()
    _build_front_matter_yaml().dump({"title": title}, stream)
    return f"{FRONT_MATTER_DELIMITER}\n{stream.getvalue()}{FRONT_MATTER_DELIMITER}"


def render_heading(section: Section) -> str:
    """Return the heading line, one marker per level."""
    return f"{HEADING_MARKER * section.level} {section.heading}"


def render_text(document: Document) -> str:
    """Serialize ``document`` to canonical text.

    Parameters
    ----------
    document : Document
        Tree to write. Each section is emitted as its heading, then its
        blocks, then its subsections, depth first.

    Returns
    -------
    str
        Blocks separated by one blank line and terminated by a newline.
    """
    parts = [render_front_matter(document.title)]
    for section, _ in document.walk():
        parts.append(render_heading(section))
        parts.extend(block.to_text() for block in section.blocks)
    return "\n\n".join(parts) + "\n"


__all__ = ["render_front_matter", "render_heading", "render_text"]
