"""Building volumes and the colored plots beneath them.

Each component becomes one box of ``width x height x length`` standing on a
``unit x unit`` plot colored by its usage area.  Plots rest two plane
offsets above the grass, buildings rest on the plots.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from swcity.config import ColorConfig, LayoutConfig
from swcity.model.model import Component, Coordinate
from swcity.scene.primitives import Box, Plate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildingSpec:
    """One rendered component: its volume, its plot and its source."""

    component: Component
    coordinate: Coordinate
    volume: Box
    plot: Plate

    @property
    def name(self) -> str:
        return self.component.name

    @property
    def x(self) -> float:
        return self.coordinate.x

    @property
    def z(self) -> float:
        return self.coordinate.z


def plot_elevation(config: LayoutConfig) -> float:
    return 2 * config.plane_offset


def build_building(
    component: Component,
    coordinate: Coordinate,
    unit: float,
    area_colors: Mapping[str, int],
    config: LayoutConfig | None = None,
    colors: ColorConfig | None = None,
) -> BuildingSpec:
    """Return the building volume and plot for *component* at *coordinate*.

    The plot takes the color of the component's usage area; a component
    whose area has no color falls back to the gradient start.
    """
    config = config or LayoutConfig()
    colors = colors or ColorConfig()
    base = plot_elevation(config)

    plot_color = area_colors.get(component.usage_area or "")
    if plot_color is None:
        logger.debug("No color for usage area %r of '%s'", component.usage_area, component.name)
        plot_color = colors.gradient_start

    volume = Box(
        name=component.name,
        width=component.width,
        height=component.height,
        length=component.length,
        position=(coordinate.x, component.height / 2 + base, coordinate.z),
        color=colors.building,
    )
    plot = Plate(
        name=f"{component.name}:plot",
        side=unit,
        position=(coordinate.x, base, coordinate.z),
        color=plot_color,
    )
    return BuildingSpec(component=component, coordinate=coordinate, volume=volume, plot=plot)


def extract_buildings(
    placed: list[tuple[Component, Coordinate]],
    unit: float,
    area_colors: Mapping[str, int],
    config: LayoutConfig | None = None,
    colors: ColorConfig | None = None,
) -> list[BuildingSpec]:
    """Return a :class:`BuildingSpec` for each (component, coordinate) pair."""
    return [
        build_building(component, coordinate, unit, area_colors, config, colors)
        for component, coordinate in placed
    ]
