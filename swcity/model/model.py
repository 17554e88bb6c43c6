"""Internal software-city data model.

Component         – one unit of the visualised system (one building)
UsageArea         – named input-time grouping of components
SoftwareCityData  – the whole ingested document
Coordinate        – centred ground-plane position of one component
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional


# --------------------------------------------------------------------------- #
# Components
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class Component:
    """A single component with its size metrics and dependency names."""

    name: str
    height: float
    width: float
    length: float
    requires: tuple[str, ...] = ()
    usage_area: Optional[str] = None  # stamped from the owning UsageArea

    @property
    def footprint_side(self) -> float:
        """Longest horizontal side of the building volume."""
        return max(self.width, self.length)

    def with_usage_area(self, usage_area: str) -> "Component":
        return replace(self, usage_area=usage_area)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "usageArea": self.usage_area,
            "height": self.height,
            "width": self.width,
            "length": self.length,
            "requires": list(self.requires),
        }


@dataclass
class UsageArea:
    """Named group of components, rendered as a shared plot color."""

    name: str
    components: list[Component] = field(default_factory=list)

    def tagged_components(self) -> list[Component]:
        """Return the components stamped with this area's name."""
        return [c.with_usage_area(self.name) for c in self.components]


@dataclass
class SoftwareCityData:
    """The complete input document."""

    usage_areas: list[UsageArea] = field(default_factory=list)

    def flatten(self) -> list[Component]:
        """Return every component, tagged with its usage area, in document order."""
        return [c for area in self.usage_areas for c in area.tagged_components()]

    def __len__(self) -> int:
        return sum(len(area.components) for area in self.usage_areas)


# --------------------------------------------------------------------------- #
# Layout result
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class Coordinate:
    """Ground-plane position (x, z), centred around the origin."""

    x: float
    z: float

    def to_dict(self) -> dict:
        return {"x": self.x, "z": self.z}
