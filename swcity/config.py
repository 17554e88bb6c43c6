"""Global configuration and defaults for swcity."""

from __future__ import annotations

import yaml
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional


def parse_color(value: Any) -> int:
    """Return a packed RGB integer from an int or a hex string.

    Accepts ``0xAA4A44``, ``"0xAA4A44"``, ``"#AA4A44"`` and ``"AA4A44"``.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid color value: {value!r}")
    if isinstance(value, int):
        color = value
    else:
        text = str(value).strip().lower()
        if text.startswith("#"):
            text = text[1:]
        elif text.startswith("0x"):
            text = text[2:]
        try:
            color = int(text, 16)
        except ValueError as exc:
            raise ValueError(f"Invalid color value: {value!r}") from exc
    if not 0 <= color <= 0xFFFFFF:
        raise ValueError(f"Color out of range: {value!r}")
    return color


@dataclass
class LayoutConfig:
    """Grid and ground-plate parameters."""

    unit_margin: float = 10.0  # added to the longest component side
    grass_margin: float = 250.0
    foundation_margin: float = 5.0
    plane_offset: float = 0.01  # vertical step between stacked flat planes


@dataclass
class StreetConfig:
    """Street connector parameters."""

    width: float = 3.0
    height: float = 1.0
    skip_self_references: bool = True
    deduplicate: bool = False


@dataclass
class ColorConfig:
    """Packed RGB colors used by the scene."""

    sky: int = 0x44BEE4
    ground: int = 0x005500
    foundation: int = 0xA9A9A9
    building: int = 0xAA4A44
    street: int = 0x000000
    gradient_start: int = 0xD3D3D3
    gradient_end: int = 0xEEEEEE
    point_light: int = 0xFFFFFF
    ambient_light: int = 0xFFFFFF

    @classmethod
    def from_dict(cls, data: dict) -> "ColorConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown color keys: {', '.join(sorted(unknown))}")
        return cls(**{key: parse_color(value) for key, value in data.items()})


@dataclass
class Config:
    """Top-level configuration."""

    layout: LayoutConfig = field(default_factory=LayoutConfig)
    street: StreetConfig = field(default_factory=StreetConfig)
    colors: ColorConfig = field(default_factory=ColorConfig)
    debug_output_dir: Optional[Path] = None

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}

        layout_data = data.get("layout", {})
        street_data = data.get("street", {})
        color_data = data.get("colors", {})
        debug_dir = data.get("debug_output_dir")

        return cls(
            layout=LayoutConfig(**layout_data) if layout_data else LayoutConfig(),
            street=StreetConfig(**street_data) if street_data else StreetConfig(),
            colors=ColorConfig.from_dict(color_data) if color_data else ColorConfig(),
            debug_output_dir=Path(debug_dir) if debug_dir else None,
        )

    @classmethod
    def default(cls) -> "Config":
        return cls()
