"""SoftwareCity – assembles the whole city scene.

Pipeline
--------
1. Tag every component with its usage area and flatten them
2. Unit size from the longest component footprint side
3. Grass + foundation plates sized from grid side and unit
4. Sky background, point and ambient light
5. One gradient color per distinct usage area
6. One grid coordinate per component
7. For each component → building volume + colored plot
8. Dependency graph of all ``requires`` edges → one street per resolved edge
"""

from __future__ import annotations

import logging
from typing import Optional

from swcity.config import Config
from swcity.geometry.buildings import BuildingSpec, extract_buildings
from swcity.geometry.colors import ColorGradient, distinct_usage_areas, usage_area_colors
from swcity.geometry.ground import extract_ground, extract_lights
from swcity.geometry.streets import StreetSpec, extract_streets
from swcity.layout.grid import GridLayout
from swcity.model.graph import DependencyGraph
from swcity.model.model import Component, Coordinate, SoftwareCityData, UsageArea
from swcity.scene.primitives import Scene
from swcity.validate.checks import validate_data

logger = logging.getLogger(__name__)


class SoftwareCity:
    """Build every renderable primitive for a software city into a scene."""

    def __init__(
        self,
        data: SoftwareCityData | list[UsageArea],
        scene: Optional[Scene] = None,
        config: Optional[Config] = None,
    ) -> None:
        if not isinstance(data, SoftwareCityData):
            data = SoftwareCityData(usage_areas=list(data))
        self.data = data
        self.scene = scene if scene is not None else Scene()
        self.cfg = config or Config()

        self.components: list[Component] = []
        self.layout: Optional[GridLayout] = None
        self.usage_area_colors: dict[str, int] = {}
        self.buildings: list[BuildingSpec] = []
        self.streets: list[StreetSpec] = []
        self.unresolved_references: list[tuple[str, str]] = []
        self.self_references: list[str] = []
        self.duplicate_streets: list[tuple[str, str]] = []
        self.dependency_graph: Optional[DependencyGraph] = None
        self._built = False

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    @property
    def unit(self) -> float:
        """Global unit cell size (grid step, plot side, ground scale)."""
        if self.layout is None:
            raise RuntimeError("Call build() before reading the unit size")
        return self.layout.unit

    @property
    def coordinates(self) -> list[Coordinate]:
        return self.layout.coordinates if self.layout is not None else []

    def graph(self) -> DependencyGraph:
        """Dependency graph of the built components."""
        if self.dependency_graph is None:
            raise RuntimeError("Call build() before reading the dependency graph")
        return self.dependency_graph

    def build(self) -> Scene:
        """Synthesize the city into :attr:`scene` and return it.

        Raises
        ------
        ValueError
            If the data has duplicate names or non-positive metrics.
        """
        if self._built:
            return self.scene

        errors = validate_data(self.data.usage_areas)
        if errors:
            raise ValueError("Invalid software city data: " + "; ".join(errors))

        self.components = self.data.flatten()
        self.dependency_graph = DependencyGraph.from_components(self.components)
        self.layout = GridLayout(self.components, self.cfg.layout)
        logger.info(
            "Building city of %d components in %d usage areas (unit %.2f)",
            len(self.components), len(self.data.usage_areas), self.layout.unit,
        )

        self._setup_landscape()
        self._setup_lights()
        if not self.components:
            logger.warning("No components to build; the city is empty")
            self._built = True
            return self.scene

        self._create_city()
        self._built = True
        return self.scene

    # ------------------------------------------------------------------ #
    # Steps
    # ------------------------------------------------------------------ #

    def _setup_landscape(self) -> None:
        self.scene.add(*extract_ground(self.layout, self.cfg.colors))

    def _setup_lights(self) -> None:
        self.scene.background = self.cfg.colors.sky
        self.scene.add(*extract_lights(self.cfg.colors))

    def _create_city(self) -> None:
        colors = self.cfg.colors
        gradient = ColorGradient(colors.gradient_start, colors.gradient_end)
        areas = distinct_usage_areas(c.usage_area for c in self.components)
        self.usage_area_colors = usage_area_colors(areas, gradient)

        self.buildings = extract_buildings(
            list(self.layout),
            self.layout.unit,
            self.usage_area_colors,
            self.cfg.layout,
            colors,
        )
        for b in self.buildings:
            self.scene.add(b.volume, b.plot)

        result = extract_streets(
            self.buildings,
            self.layout.unit,
            self.cfg.street,
            self.cfg.layout,
            colors,
            graph=self.dependency_graph,
        )
        self.streets = result.streets
        self.unresolved_references = result.unresolved
        self.self_references = result.self_references
        self.duplicate_streets = result.duplicates
        for street in self.streets:
            self.scene.add(*street.segments)

        logger.info(
            "City built: %d buildings, %d streets, %d unresolved references",
            len(self.buildings), len(self.streets), len(self.unresolved_references),
        )


def build_city(
    data: SoftwareCityData | list[UsageArea],
    config: Optional[Config] = None,
    scene: Optional[Scene] = None,
) -> SoftwareCity:
    """Construct and build a :class:`SoftwareCity` in one call."""
    city = SoftwareCity(data, scene=scene, config=config)
    city.build()
    return city
