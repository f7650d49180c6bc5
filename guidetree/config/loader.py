"""Load guidetree configuration YAML into typed dataclasses."""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound
from ruamel.yaml import YAML

from .models import (
    OUTPUT_FORMATS,
    AssemblyConfig,
    ConfigError,
    GuideTreeConfig,
    RenderConfig,
)

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = frozenset({"assembly", "render"})


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _section(raw: typ.Mapping[str, typ.Any], key: str) -> typ.Mapping[str, typ.Any]:
    payload = raw.get(key) or {}
    if not isinstance(payload, dict):
        msg = f"'{key}' must be a mapping."
        raise ConfigError(msg)
    return payload


def _build_assembly_config(payload: typ.Mapping[str, typ.Any]) -> AssemblyConfig:
    base = AssemblyConfig()
    root_level = payload.get("root_level", base.root_level)
    if root_level is not None and (
        isinstance(root_level, bool) or not isinstance(root_level, int) or root_level < 1
    ):
        msg = f"'assembly.root_level' must be a positive integer or null, got {root_level!r}."
        raise ConfigError(msg)
    return AssemblyConfig(root_level=root_level)


def _build_render_config(
    payload: typ.Mapping[str, typ.Any], *, base_dir: Path
) -> RenderConfig:
    base = RenderConfig()
    default_format = _optional_str(payload.get("format")) or base.default_format
    if default_format not in OUTPUT_FORMATS:
        known = ", ".join(OUTPUT_FORMATS)
        msg = f"'render.format' must be one of {known}, got {default_format!r}."
        raise ConfigError(msg)
    pygments_style = _optional_str(payload.get("pygments_style")) or base.pygments_style
    try:
        get_style_by_name(pygments_style)
    except ClassNotFound as exc:
        msg = f"'render.pygments_style' names an unknown Pygments style {pygments_style!r}."
        raise ConfigError(msg) from exc
    templates = _optional_str(payload.get("templates_dir"))
    templates_dir = base_dir / templates if templates else base.templates_dir
    return RenderConfig(
        default_format=default_format,
        pygments_style=pygments_style,
        templates_dir=templates_dir,
    )


def load_config(path: Path, *, required: bool = False) -> GuideTreeConfig:
    """Load the YAML configuration controlling assembly and rendering.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``guidetree.yaml``). Relative ``templates_dir`` values resolve
        against the file's directory.
    required : bool, optional
        When ``False`` (default) a missing file yields the default
        configuration.

    Returns
    -------
    GuideTreeConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If ``required`` is set and the file does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    ConfigError
        If a section or value is invalid (an unknown Pygments style included)
        or the file is not valid UTF-8.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.
    """
    if not path.exists():
        if required:
            msg = f"Configuration file '{path}' not found."
            raise FileNotFoundError(msg)
        logger.debug("No configuration at %s; using defaults", path)
        return GuideTreeConfig()

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except UnicodeDecodeError as exc:
        msg = f"Configuration file '{path}' is not valid UTF-8: {exc.reason}."
        raise ConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    for key in sorted(set(raw) - KNOWN_SECTIONS):
        logger.warning("Ignoring unknown configuration section '%s' in %s", key, path)

    return GuideTreeConfig(
        assembly=_build_assembly_config(_section(raw, "assembly")),
        render=_build_render_config(
            _section(raw, "render"), base_dir=path.resolve().parent
        ),
    )


__all__ = ["load_config"]
