"""Render guide documents as standalone, syntax-highlighted HTML pages."""

from __future__ import annotations

import re
import typing as typ
from html import escape
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown import Markdown
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from guidetree.blocks import CodeSample, CommandExample, ListItem, Paragraph

if typ.TYPE_CHECKING:
    from guidetree.blocks import ContentBlock
    from guidetree.section import Document

CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
MAX_HTML_HEADING = 6
DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


class HtmlDocumentRenderer:
    """Render documents and their blocks with consistent styling."""

    def __init__(
        self, pygments_style: str = "monokai", *, templates_dir: Path | None = None
    ) -> None:
        """Initialize a renderer with a pygments style and template directory.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        templates_dir : Path, optional
            Directory containing ``document.jinja``; defaults to the package
            templates.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("document.jinja")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render paragraph text as Markdown.

        Raw HTML in the text is escaped rather than passed through, so a guide
        cannot inject markup or scripts into the page.
        """
        if not text.strip():
            return ""
        md = Markdown(extensions=["sane_lists"], output_format="html")
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        return md.convert(text)

    def code_block(self, code: str, language: str | None = None) -> str:
        """Render ``code`` into highlighted HTML with an optional language tag.

        Parameters
        ----------
        code : str
            Source snippet to highlight.
        language : str, optional
            Pygments lexer name; defaults to ``"text"`` when not provided or
            when the lexer lookup fails.

        Returns
        -------
        str
            HTML containing the highlighted block with ``data-language``
            metadata applied.
        """
        lang = language or "text"
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            lexer = get_lexer_by_name("text")
        html = highlight(code, lexer, self._formatter)
        return self._attach_language_attribute(html, lang)

    def render_block(self, block: ContentBlock) -> str:
        """Return the HTML fragment for a single content block."""
        match block:
            case Paragraph(text=text):
                return self.markdown(text)
            case CodeSample(text=text, language=language):
                return self.code_block(text, language)
            case CommandExample():
                return self.code_block(block.to_text(), "console")
            case ListItem(items=items):
                entries = "".join(f"<li>{escape(item)}</li>" for item in items)
                return f"<ul>{entries}</ul>"
        msg = f"Cannot render block {block!r}"
        raise TypeError(msg)

    def render(self, document: Document) -> str:
        """Render ``document`` into a full HTML page.

        Returns
        -------
        str
            Page with a table of contents linking to each section anchor,
            followed by every section in document order.
        """
        sections: list[dict[str, typ.Any]] = []
        for section, ancestors in document.walk():
            sections.append(
                {
                    "heading": section.heading,
                    "anchor": section.anchor,
                    "tag": f"h{min(section.level, MAX_HTML_HEADING)}",
                    "depth": len(ancestors),
                    "blocks": [self.render_block(block) for block in section.blocks],
                }
            )
        return self.template.render(
            title=document.title,
            sections=sections,
            pygments_css=self.stylesheet,
        )

    @staticmethod
    def _attach_language_attribute(html: str, language: str) -> str:
        """Add a single language attribute to an already highlighted block."""
        safe_lang = escape(language or "text", quote=True)

        def _repl(match: re.Match[str]) -> str:
            return f'<div class="codehilite" data-language="{safe_lang}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, 1)


__all__ = ["HtmlDocumentRenderer"]
