"""Load and validate ``guidetree.yaml`` configuration.

The loader reads the optional YAML file, applies defaults and returns a
:class:`GuideTreeConfig` describing the assembly policy and render settings.

Examples
--------
>>> from pathlib import Path
>>> from guidetree.config import load_config
>>> config = load_config(Path("does-not-exist.yaml"))
>>> config.assembly.root_level, config.render.default_format
(1, 'text')
"""

from .loader import load_config
from .models import (
    OUTPUT_FORMATS,
    AssemblyConfig,
    ConfigError,
    GuideTreeConfig,
    RenderConfig,
)

__all__ = [
    "OUTPUT_FORMATS",
    "AssemblyConfig",
    "ConfigError",
    "GuideTreeConfig",
    "RenderConfig",
    "load_config",
]
