"""Typed dataclasses describing guidetree configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path  # noqa: TC003 - used for runtime type metadata

from guidetree.assembler import DEFAULT_ROOT_LEVEL

OUTPUT_FORMATS = ("text", "html")


class ConfigError(ValueError):
    """Raised when the configuration file is invalid or incomplete."""


@dc.dataclass(slots=True)
class AssemblyConfig:
    """Policy applied when flat heading entries are assembled into a tree.

    ``root_level`` is the level the first heading must have; ``None`` accepts
    whatever level a guide starts with.
    """

    root_level: int | None = DEFAULT_ROOT_LEVEL


@dc.dataclass(slots=True)
class RenderConfig:
    """Output settings shared by the text and HTML renderers."""

    default_format: str = "text"
    pygments_style: str = "monokai"
    templates_dir: Path | None = None


@dc.dataclass(slots=True)
class GuideTreeConfig:
    """Top-level configuration loaded from ``guidetree.yaml``."""

    assembly: AssemblyConfig = dc.field(default_factory=AssemblyConfig)
    render: RenderConfig = dc.field(default_factory=RenderConfig)


__all__ = [
    "OUTPUT_FORMATS",
    "AssemblyConfig",
    "ConfigError",
    "GuideTreeConfig",
    "RenderConfig",
]
