r"""Parse canonical guide text into heading entries and documents.

The reader understands the format written by
:func:`guidetree.renderer.text.render_text`: optional YAML front matter with a
``title`` key, ``#``-style headings, paragraphs, backtick-fenced code samples,
``$``-prompted command examples and ``-`` bullet lists. Paragraph lines that
start with a backslash have it removed, which is how the writer protects
lines that would otherwise look like markup.

Example
-------
>>> from guidetree.reader import read_document
>>> doc = read_document("# Images\n\n$ docker build .\n\n## Layers\n\n- cached\n")
>>> doc.title, doc.sections[0].children[0].heading
('Images', 'Layers')
"""

from __future__ import annotations

import logging
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import (
    COMMAND_PROMPT,
    ESCAPE_CHAR,
    FENCE_CHAR,
    FRONT_MATTER_DELIMITER,
    LIST_MARKER,
    MIN_FENCE_LENGTH,
)
from .assembler import DEFAULT_ROOT_LEVEL, HeadingEntry, assemble_document
from .blocks import CodeSample, CommandExample, ContentBlock, ListItem, Paragraph
from .errors import MalformedInputError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .section import Document

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r"^(#+) (.*)$")
FENCE_OPEN_PATTERN = re.compile(rf"^({FENCE_CHAR}{{{MIN_FENCE_LENGTH},}})([^`]*)$")
COMMAND_PREFIX = f"{COMMAND_PROMPT} "


def _is_fence_close(line: str, fence: str) -> bool:
    stripped = line.strip()
    return len(stripped) >= len(fence) and set(stripped) == {FENCE_CHAR}


def _is_command_line(line: str) -> bool:
    return line == COMMAND_PROMPT or line.startswith(COMMAND_PREFIX)


def _starts_block(line: str) -> bool:
    return bool(
        HEADING_PATTERN.match(line)
        or FENCE_OPEN_PATTERN.match(line)
        or _is_command_line(line)
        or line.startswith(LIST_MARKER)
    )


def _unescape(line: str) -> str:
    return line[1:] if line.startswith(ESCAPE_CHAR) else line


def _split_front_matter(lines: list[str]) -> tuple[str | None, int]:
    """Return the front matter title and the index of the first body line."""
    if not lines or lines[0] != FRONT_MATTER_DELIMITER:
        return None, 0
    try:
        end = lines.index(FRONT_MATTER_DELIMITER, 1)
    except ValueError:
        msg = "Front matter is not terminated by '---'."
        raise MalformedInputError(msg) from None

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load("\n".join(lines[1:end])) or {}
    except YAMLError as exc:
        msg = f"Front matter is not valid YAML: {exc}"
        raise MalformedInputError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Front matter must be a mapping."
        raise MalformedInputError(msg)
    title = loaded.get("title")
    return (None if title is None else str(title)), end + 1


class _LineCursor:
    """Index into the body lines with block-level consumers."""

    def __init__(self, lines: list[str], start: int) -> None:
        self.lines = lines
        self.index = start

    def done(self) -> bool:
        return self.index >= len(self.lines)

    def peek(self) -> str:
        return self.lines[self.index]

    def take_while(self, predicate: typ.Callable[[str], bool]) -> list[str]:
        taken: list[str] = []
        while not self.done() and predicate(self.peek()):
            taken.append(self.peek())
            self.index += 1
        return taken

    def take_code(self, opening: re.Match[str]) -> CodeSample:
        start_line = self.index + 1
        fence = opening.group(1)
        language = opening.group(2).strip() or None
        self.index += 1
        body = self.take_while(lambda line: not _is_fence_close(line, fence))
        if self.done():
            msg = f"Code fence opened on line {start_line} is never closed."
            raise MalformedInputError(msg)
        self.index += 1
        return CodeSample("\n".join(body), language=language)

    def take_paragraph(self) -> Paragraph:
        first = self.peek()
        self.index += 1
        rest = self.take_while(lambda line: bool(line.strip()) and not _starts_block(line))
        return Paragraph("\n".join(_unescape(line) for line in (first, *rest)))


def read_entries(text: str) -> tuple[str | None, list[HeadingEntry]]:
    """Split canonical text into a title and flat heading entries.

    Parameters
    ----------
    text : str
        Guide source. Content before the first heading is returned as an
        entry whose ``heading`` is ``None``.

    Returns
    -------
    tuple[str | None, list[HeadingEntry]]
        Front matter title (falling back to the first heading) and the
        entries in document order.

    Raises
    ------
    MalformedInputError
        If the front matter or a code fence is not terminated, or the front
        matter is not a YAML mapping.
    InvalidBlockError
        If a parsed block breaks its invariants (for example an empty fence).
    """
    lines = text.split("\n")
    title, start = _split_front_matter(lines)
    cursor = _LineCursor(lines, start)
    entries: list[HeadingEntry] = []
    heading: str | None = None
    level = 0
    items: list[ContentBlock] = []

    while not cursor.done():
        line = cursor.peek()
        if not line.strip():
            cursor.index += 1
            continue
        if match := HEADING_PATTERN.match(line):
            if heading is not None or items:
                entries.append(HeadingEntry(heading, level, tuple(items)))
            heading, level, items = match.group(2), len(match.group(1)), []
            cursor.index += 1
        elif opening := FENCE_OPEN_PATTERN.match(line):
            items.append(cursor.take_code(opening))
        elif _is_command_line(line):
            commands = cursor.take_while(_is_command_line)
            items.append(
                CommandExample("\n".join(cmd[len(COMMAND_PREFIX):] for cmd in commands))
            )
        elif line.startswith(LIST_MARKER):
            bullets = cursor.take_while(lambda entry: entry.startswith(LIST_MARKER))
            items.append(ListItem(tuple(b[len(LIST_MARKER):] for b in bullets)))
        else:
            items.append(cursor.take_paragraph())
    if heading is not None or items:
        entries.append(HeadingEntry(heading, level, tuple(items)))

    if title is None:
        title = next((entry.heading for entry in entries if entry.heading), None)
    logger.debug("Read %d heading entries (title %r)", len(entries), title)
    return title, entries


def read_document(text: str, *, root_level: int | None = DEFAULT_ROOT_LEVEL) -> Document:
    """Parse canonical text and assemble it into a Document.

    Raises
    ------
    MalformedInputError
        If the text has no headings, content precedes the first heading, or
        the layout is otherwise unreadable.
    """
    title, entries = read_entries(text)
    return assemble_document(title or "", entries, root_level=root_level)


def load_document(path: Path, *, root_level: int | None = DEFAULT_ROOT_LEVEL) -> Document:
    """Read a UTF-8 guide file and assemble it into a Document."""
    if not path.exists():
        msg = f"Guide file '{path}' not found."
        raise FileNotFoundError(msg)
    logger.debug("Loading guide from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Guide file '{path}' is not valid UTF-8: {exc.reason}."
        raise MalformedInputError(msg) from exc
    return read_document(text, root_level=root_level)


__all__ = ["load_document", "read_document", "read_entries"]
