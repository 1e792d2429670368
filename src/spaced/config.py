"""TOML config loading for spaced.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from spaced.formatter import STYLES

CONFIG_NAME = "spaced.toml"


@dataclass
class OutputConfig:
    style: str = "parens"


@dataclass
class DiagnosticsConfig:
    color: bool = True


@dataclass
class SpacedConfig:
    output: OutputConfig = field(default_factory=OutputConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find spaced.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def _section(data: dict, name: str, path: Path) -> dict | None:
    if name not in data:
        return None
    section = data[name]
    if not isinstance(section, dict):
        raise ValueError(f"{path}: [{name}] must be a table")
    return section


def load_config(path: Path) -> SpacedConfig:
    """Parse a spaced.toml file into a SpacedConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = SpacedConfig()

    output = _section(data, "output", path)
    if output is not None:
        style = output.get("style", "parens")
        if style not in STYLES:
            raise ValueError(
                f"{path}: output.style must be one of {', '.join(STYLES)}, got {style!r}"
            )
        config.output = OutputConfig(style=style)

    diagnostics = _section(data, "diagnostics", path)
    if diagnostics is not None:
        color = diagnostics.get("color", True)
        if not isinstance(color, bool):
            raise ValueError(f"{path}: diagnostics.color must be true or false, got {color!r}")
        config.diagnostics = DiagnosticsConfig(color=color)

    return config


def discover_config(start_path: Path | None = None) -> SpacedConfig:
    """Load the nearest spaced.toml, or defaults when there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return SpacedConfig()
