"""Renderable primitives handed to the display side.

Box    – axis-aligned volume (buildings, street segments)
Plate  – flat square (grass, foundation, building plots)
Light  – ambient or point light source
Scene  – ordered container the city is assembled into
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Union

Vec3 = tuple[float, float, float]

# Rotation that lays a vertical plane flat onto the ground (x/z plane)
FLAT_ON_GROUND: Vec3 = (-math.pi / 2, 0.0, 0.0)


@dataclass(frozen=True)
class Box:
    """Axis-aligned box; *position* is its centre."""

    name: str
    width: float   # along x
    height: float  # along y
    length: float  # along z
    position: Vec3
    color: int

    @property
    def bounds_xz(self) -> tuple[float, float, float, float]:
        """(min_x, min_z, max_x, max_z) of the footprint."""
        x, _, z = self.position
        return (x - self.width / 2, z - self.length / 2, x + self.width / 2, z + self.length / 2)

    @property
    def bottom(self) -> float:
        return self.position[1] - self.height / 2

    def to_dict(self) -> dict:
        return {
            "type": "box",
            "name": self.name,
            "size": [self.width, self.height, self.length],
            "position": list(self.position),
            "color": self.color,
        }


@dataclass(frozen=True)
class Plate:
    """Flat square of side *side* centred at *position*."""

    name: str
    side: float
    position: Vec3
    color: int
    rotation: Vec3 = FLAT_ON_GROUND

    @property
    def bounds_xz(self) -> tuple[float, float, float, float]:
        x, _, z = self.position
        half = self.side / 2
        return (x - half, z - half, x + half, z + half)

    def to_dict(self) -> dict:
        return {
            "type": "plate",
            "name": self.name,
            "side": self.side,
            "position": list(self.position),
            "rotation": list(self.rotation),
            "color": self.color,
        }


@dataclass(frozen=True)
class Light:
    kind: str  # "ambient" | "point"
    color: int
    position: Optional[Vec3] = None

    def to_dict(self) -> dict:
        data: dict = {"type": "light", "kind": self.kind, "color": self.color}
        if self.position is not None:
            data["position"] = list(self.position)
        return data


Primitive = Union[Box, Plate]


@dataclass
class Scene:
    """Write-only container of everything the city emits."""

    background: Optional[int] = None
    objects: list[Primitive] = field(default_factory=list)
    lights: list[Light] = field(default_factory=list)

    def add(self, *items: Union[Primitive, Light]) -> None:
        for item in items:
            if isinstance(item, Light):
                self.lights.append(item)
            elif isinstance(item, (Box, Plate)):
                self.objects.append(item)
            else:
                raise TypeError(f"Cannot add {type(item).__name__} to a scene")

    @property
    def boxes(self) -> list[Box]:
        return [o for o in self.objects if isinstance(o, Box)]

    @property
    def plates(self) -> list[Plate]:
        return [o for o in self.objects if isinstance(o, Plate)]

    def __len__(self) -> int:
        return len(self.objects)

    def to_dict(self) -> dict:
        return {
            "background": self.background,
            "lights": [light.to_dict() for light in self.lights],
            "objects": [o.to_dict() for o in self.objects],
        }
