"""Writers that turn guide documents into canonical text or HTML."""

from .html import HtmlDocumentRenderer
from .text import render_front_matter, render_heading, render_text

__all__ = [
    "HtmlDocumentRenderer",
    "render_front_matter",
    "render_heading",
    "render_text",
]
