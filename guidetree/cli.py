"""Cyclopts CLI entrypoint for reading, checking and rendering guide documents.

The ``guidetree`` console script parses a guide written in the canonical text
format, reports structural problems, prints its outline, looks up sections by
heading, and re-renders it as canonical text or HTML.

Examples
--------
Check a guide and print its outline:

>>> from guidetree.cli import app
>>> app(["check", "docs/docker-guide.md"])  # doctest: +SKIP
>>> app(["outline", "docs/docker-guide.md", "--json"])  # doctest: +SKIP

Render a guide to HTML:

>>> app(
...     ["render", "docs/docker-guide.md", "--format", "html", "--output", "guide.html"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter
from jinja2 import TemplateNotFound
from ruamel.yaml.error import YAMLError

from ._constants import DEFAULT_CONFIG_FILE
from .config import OUTPUT_FORMATS, ConfigError, GuideTreeConfig, load_config
from .errors import GuideTreeError, NotFoundError
from .reader import load_document
from .renderer import HtmlDocumentRenderer, render_heading, render_text
from .validator import validate

if typ.TYPE_CHECKING:
    from .section import Document

DEFAULT_CONFIG = Path(DEFAULT_CONFIG_FILE)

app = App(name="guidetree", config=cyclopts.config.Env("GUIDETREE_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path | None, Parameter(help="Path to guidetree config", env_var="GUIDETREE_CONFIG")
]
VerboseOption = typ.Annotated[bool, Parameter(help="Log debug output to stderr")]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str) -> typ.NoReturn:
    print(f"error: {message}", file=sys.stderr)
    raise SystemExit(1)


def _load(source: Path, config: Path | None) -> tuple[Document, GuideTreeConfig]:
    """Load settings and the guide, turning known failures into exit status 1.

    An explicit ``config`` must exist; without one, a missing
    ``guidetree.yaml`` in the working directory means built-in defaults.
    """
    try:
        settings = load_config(config or DEFAULT_CONFIG, required=config is not None)
    except (ConfigError, FileNotFoundError, TypeError, YAMLError) as exc:
        _fail(f"{config or DEFAULT_CONFIG}: {exc}")
    try:
        document = load_document(source, root_level=settings.assembly.root_level)
    except (GuideTreeError, FileNotFoundError) as exc:
        _fail(str(exc))
    return document, settings


@app.command(help="Re-render a guide as canonical text or HTML.")
def render(
    source: typ.Annotated[Path, Parameter(help="Guide file to read")],
    *,
    output_format: typ.Annotated[
        str | None, Parameter(name="--format", help="Output format: text or html")
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write to this file instead of stdout")
    ] = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Render ``source`` in the requested format.

    Parameters
    ----------
    source : Path
        Guide written in the canonical text format.
    output_format : str or None, optional
        ``"text"`` or ``"html"``; defaults to ``render.format`` from the
        configuration.
    output : Path or None, optional
        Destination file. When ``None`` the result is printed.
    config : Path or None, optional
        Configuration file, which must exist when given. Without it a missing
        default file means built-in defaults.
    verbose : bool, optional
        Enable debug logging.

    Raises
    ------
    SystemExit
        With status 1 when the guide cannot be read or the format is unknown.
    """
    _configure_logging(verbose)
    document, settings = _load(source, config)
    fmt = output_format or settings.render.default_format
    if fmt not in OUTPUT_FORMATS:
        _fail(f"unknown format {fmt!r}; expected one of {', '.join(OUTPUT_FORMATS)}")

    if fmt == "html":
        try:
            renderer = HtmlDocumentRenderer(
                settings.render.pygments_style,
                templates_dir=settings.render.templates_dir,
            )
        except TemplateNotFound as exc:
            _fail(f"template {exc.name!r} not found in {settings.render.templates_dir}")
        rendered = renderer.render(document)
    else:
        rendered = render_text(document)

    if output is None:
        print(rendered, end="")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


@app.command(help="Validate a guide and list every structural problem.")
def check(
    source: typ.Annotated[Path, Parameter(help="Guide file to read")],
    *,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Exit with status 1 when ``source`` cannot be built or has violations."""
    _configure_logging(verbose)
    document, _ = _load(source, config)
    violations = validate(document)
    for violation in violations:
        print(violation)
    if violations:
        raise SystemExit(1)
    count = sum(1 for _ in document.walk())
    print(f"ok: {_format_path(source)} ({count} sections)")


@app.command(help="Print the section tree with anchors.")
def outline(
    source: typ.Annotated[Path, Parameter(help="Guide file to read")],
    *,
    as_json: typ.Annotated[
        bool, Parameter(name="--json", help="Emit a JSON array instead of text")
    ] = False,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print one line (or JSON object) per section in document order."""
    _configure_logging(verbose)
    document, _ = _load(source, config)
    if as_json:
        payload = [
            {
                "heading": section.heading,
                "level": section.level,
                "anchor": section.anchor,
                "path": [ancestor.heading for ancestor in ancestors],
                "blocks": [block.kind for block in section.blocks],
            }
            for section, ancestors in document.walk()
        ]
        print(msgspec_json.encode(payload).decode("utf-8"))
        return
    print(document.title)
    for section, ancestors in document.walk():
        indent = "  " * (len(ancestors) + 1)
        print(f"{indent}{section.heading} (#{section.anchor})")


@app.command(help="Show the first section whose heading matches exactly.")
def find(
    source: typ.Annotated[Path, Parameter(help="Guide file to read")],
    heading: typ.Annotated[str, Parameter(help="Exact heading text")],
    *,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the ancestor path and content of the matching section.

    Raises
    ------
    SystemExit
        With status 1 when no section carries ``heading``.
    """
    _configure_logging(verbose)
    document, _ = _load(source, config)
    try:
        match = document.find(heading)
    except NotFoundError as exc:
        _fail(str(exc))
    ancestors = next(path for section, path in document.walk() if section is match)
    print(" > ".join([*(a.heading for a in ancestors), match.heading]))
    print()
    print(render_heading(match))
    for block in match.blocks:
        print()
        print(block.to_text())


def main() -> None:
    """Invoke the Cyclopts application that powers the `guidetree` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
