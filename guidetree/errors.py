"""Exception hierarchy raised while building and querying guide documents.

Construction errors (``InvalidBlockError``, ``InvalidStructureError``,
``MalformedInputError``) abort the whole build, so callers never observe a
partially assembled tree. ``NotFoundError`` is local to a single lookup and
says nothing about the validity of the tree that was searched.
"""

from __future__ import annotations


class GuideTreeError(ValueError):
    """Base class for every error raised by guidetree."""


class InvalidBlockError(GuideTreeError):
    """Raised when a content block payload is malformed."""


class InvalidStructureError(GuideTreeError):
    """Raised when heading levels or sibling headings break the tree rules."""


class MalformedInputError(GuideTreeError):
    """Raised when the flat input stream cannot be turned into a tree."""


class NotFoundError(GuideTreeError, LookupError):
    """Raised when a heading or anchor lookup has no match."""


__all__ = [
    "GuideTreeError",
    "InvalidBlockError",
    "InvalidStructureError",
    "MalformedInputError",
    "NotFoundError",
]
