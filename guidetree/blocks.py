r"""Atomic content blocks that make up the body of a guide section.

A block is one of four frozen dataclasses: :class:`Paragraph`,
:class:`CodeSample`, :class:`CommandExample` and :class:`ListItem`. Each one
checks its payload on construction and can write itself back out in the
canonical text form understood by :mod:`guidetree.reader`.

Example
-------
>>> from guidetree.blocks import CodeSample, make_block
>>> CodeSample("docker ps", language="bash").to_text()
'```bash\ndocker ps\n```'
>>> make_block("list", ["one", "two"]).to_text()
'- one\n- two'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ

from ._constants import (
    COMMAND_PROMPT,
    ESCAPE_CHAR,
    ESCAPED_PREFIXES,
    FENCE_CHAR,
    LIST_MARKER,
    MIN_FENCE_LENGTH,
)
from .errors import InvalidBlockError

LANGUAGE_PATTERN = re.compile(r"[^\s`]+")
LEADING_FENCE_PATTERN = re.compile(r"^\s*(`+)")


def _is_blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


def _escape_line(line: str) -> str:
    """Prefix paragraph lines the reader would otherwise treat as markup."""
    if not line.strip() or line.startswith(ESCAPED_PREFIXES):
        return f"{ESCAPE_CHAR}{line}"
    return line


def _fence_for(text: str) -> str:
    """Return a backtick fence longer than any backtick run opening a line."""
    longest = 0
    for line in text.split("\n"):
        match = LEADING_FENCE_PATTERN.match(line)
        if match:
            longest = max(longest, len(match.group(1)))
    return FENCE_CHAR * max(MIN_FENCE_LENGTH, longest + 1)


@dc.dataclass(frozen=True, slots=True)
class Paragraph:
    """Free-form prose.

    Attributes
    ----------
    text : str
        Paragraph body; may span several lines but must not be blank.
    """

    text: str
    kind: typ.ClassVar[str] = "paragraph"

    def __post_init__(self) -> None:
        _raise_for_problems(self)

    def to_text(self) -> str:
        """Return the paragraph with markup-looking lines escaped."""
        return "\n".join(_escape_line(line) for line in self.text.split("\n"))


@dc.dataclass(frozen=True, slots=True)
class CodeSample:
    """Fenced source code with an optional language tag.

    Attributes
    ----------
    text : str
        Code body, kept byte for byte.
    language : str or None
        Highlighting token such as ``"bash"``, ``"yaml"`` or ``"dockerfile"``.
        ``None`` means untagged; an empty or whitespace tag is rejected.
    """

    text: str
    language: str | None = None
    kind: typ.ClassVar[str] = "code"

    def __post_init__(self) -> None:
        _raise_for_problems(self)

    def to_text(self) -> str:
        """Return the sample wrapped in a backtick fence."""
        fence = _fence_for(self.text)
        return f"{fence}{self.language or ''}\n{self.text}\n{fence}"


@dc.dataclass(frozen=True, slots=True)
class CommandExample:
    """Shell input typed at a prompt, one command per line."""

    text: str
    kind: typ.ClassVar[str] = "command"

    def __post_init__(self) -> None:
        _raise_for_problems(self)

    def to_text(self) -> str:
        """Return every line prefixed with the shell prompt."""
        return "\n".join(
            f"{COMMAND_PROMPT} {line}" if line else COMMAND_PROMPT
            for line in self.text.split("\n")
        )


@dc.dataclass(frozen=True, slots=True)
class ListItem:
    """Bullet list holding one or more single-line entries."""

    items: tuple[str, ...]
    kind: typ.ClassVar[str] = "list"

    def __post_init__(self) -> None:
        if isinstance(self.items, cabc.Iterable) and not isinstance(self.items, str):
            object.__setattr__(self, "items", tuple(self.items))
        _raise_for_problems(self)

    def to_text(self) -> str:
        """Return one bullet line per entry."""
        return "\n".join(f"{LIST_MARKER}{item}" for item in self.items)


ContentBlock = Paragraph | CodeSample | CommandExample | ListItem
BLOCK_TYPES: dict[str, type[ContentBlock]] = {
    Paragraph.kind: Paragraph,
    CodeSample.kind: CodeSample,
    CommandExample.kind: CommandExample,
    ListItem.kind: ListItem,
}


def block_problems(block: object) -> list[str]:
    """Return human-readable invariant breaches for ``block``.

    The check reads attributes only, so it also works on hand-built objects
    that never went through the dataclass constructors.

    Parameters
    ----------
    block : object
        A content block or any object exposing ``kind`` and the matching
        payload attributes.

    Returns
    -------
    list[str]
        Empty when the block is well formed.
    """
    kind = getattr(block, "kind", None)
    match kind:
        case "paragraph" | "command":
            if _is_blank(getattr(block, "text", None)):
                return [f"{kind} text must not be empty"]
        case "code":
            problems: list[str] = []
            if _is_blank(getattr(block, "text", None)):
                problems.append("code sample text must not be empty")
            language = getattr(block, "language", None)
            if language is not None and (
                not isinstance(language, str) or not LANGUAGE_PATTERN.fullmatch(language)
            ):
                problems.append(
                    f"code sample language must be a non-empty token, got {language!r}"
                )
            return problems
        case "list":
            items = getattr(block, "items", None)
            if isinstance(items, str) or not isinstance(items, cabc.Sequence):
                return ["list items must be a sequence of strings"]
            if not items:
                return ["list must contain at least one item"]
            for index, item in enumerate(items):
                if _is_blank(item):
                    return [f"list item {index} must not be empty"]
                if "\n" in item:
                    return [f"list item {index} must be a single line"]
        case _:
            return [f"unknown block kind {kind!r}"]
    return []


def _raise_for_problems(block: object) -> None:
    problems = block_problems(block)
    if problems:
        raise InvalidBlockError("; ".join(problems))


def make_block(kind: str, payload: object) -> ContentBlock:
    """Construct a block from a variant tag and its payload.

    Parameters
    ----------
    kind : str
        One of ``"paragraph"``, ``"code"``, ``"command"`` or ``"list"``.
    payload : object
        ``str`` for paragraphs and commands; for code either the text, a
        ``(language, text)`` pair or a mapping with ``text`` and ``language``
        keys; an iterable of strings for lists.

    Returns
    -------
    ContentBlock
        The validated block.

    Raises
    ------
    InvalidBlockError
        If the tag is unknown or the payload breaks the block's invariants.
    """
    match kind, payload:
        case "paragraph", str() as text:
            return Paragraph(text)
        case "command", str() as text:
            return CommandExample(text)
        case "code", str() as text:
            return CodeSample(text)
        case "code", (language, str() as text):
            return CodeSample(text, language=language)
        case "code", cabc.Mapping() as mapping:
            return CodeSample(mapping.get("text", ""), language=mapping.get("language"))
        case "list", cabc.Iterable() as items if not isinstance(items, str):
            return ListItem(tuple(items))
        case _ if kind in BLOCK_TYPES:
            msg = f"Unsupported payload for {kind!r} block: {payload!r}"
            raise InvalidBlockError(msg)
        case _:
            msg = f"Unknown block kind {kind!r}"
            raise InvalidBlockError(msg)


__all__ = [
    "BLOCK_TYPES",
    "CodeSample",
    "CommandExample",
    "ContentBlock",
    "ListItem",
    "Paragraph",
    "block_problems",
    "make_block",
]
