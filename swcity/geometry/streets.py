"""Street routing between dependent buildings.

For each resolved ``requires`` edge we lay a U/L-shaped street made of
three axis-aligned boxes: a stub leaving each building towards the lane on
the far plot boundary, and a connector along that lane bridging the stubs.
Each stub starts at its building's centre, so for two buildings in the same
row it spans half a unit cell, from the centre to the plot edge.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from swcity.config import ColorConfig, LayoutConfig, StreetConfig
from swcity.geometry.buildings import BuildingSpec
from swcity.model.graph import DependencyGraph
from swcity.scene.primitives import Box

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreetSpec:
    """The three segments connecting *source* to *target*."""

    source: str
    target: str
    source_stub: Box
    target_stub: Box
    connector: Box

    @property
    def segments(self) -> tuple[Box, Box, Box]:
        return (self.source_stub, self.connector, self.target_stub)

    @property
    def lane_z(self) -> float:
        return self.source_stub.bounds_xz[3]


@dataclass
class StreetResult:
    """Streets built for a set of edges plus the edges that were skipped."""

    streets: list[StreetSpec] = field(default_factory=list)
    unresolved: list[tuple[str, str]] = field(default_factory=list)
    self_references: list[str] = field(default_factory=list)
    duplicates: list[tuple[str, str]] = field(default_factory=list)


def street_elevation(config: LayoutConfig) -> float:
    """Base elevation of every street segment, above grass, foundation and plots."""
    return 3 * config.plane_offset


def route_street(
    source: BuildingSpec,
    target: Optional[BuildingSpec],
    unit: float,
    street: StreetConfig | None = None,
    layout: LayoutConfig | None = None,
    colors: ColorConfig | None = None,
    target_name: str | None = None,
) -> Optional[StreetSpec]:
    """Return the street from *source* to *target*, or ``None`` if *target*
    is missing.
    """
    if target is None:
        logger.warning(
            "Name reference '%s' required by '%s' could not be found",
            target_name or "?", source.name,
        )
        return None

    street = street or StreetConfig()
    layout = layout or LayoutConfig()
    colors = colors or ColorConfig()
    w, h = street.width, street.height
    y = street_elevation(layout) + h / 2
    lane_z = max(source.z, target.z) + unit / 2

    def stub(building: BuildingSpec, role: str) -> Box:
        run = lane_z - building.z
        return Box(
            name=f"{source.name}->{target.name}:{role}",
            width=w,
            height=h,
            length=run,
            position=(building.x, y, building.z + run / 2),
            color=colors.street,
        )

    connector = Box(
        name=f"{source.name}->{target.name}:connector",
        width=max(abs(source.x - target.x) - w, 0.0),
        height=h,
        length=w,
        position=((source.x + target.x) / 2, y, lane_z - w / 2),
        color=colors.street,
    )
    return StreetSpec(
        source=source.name,
        target=target.name,
        source_stub=stub(source, "source"),
        target_stub=stub(target, "target"),
        connector=connector,
    )


def extract_streets(
    buildings: list[BuildingSpec],
    unit: float,
    street: StreetConfig | None = None,
    layout: LayoutConfig | None = None,
    colors: ColorConfig | None = None,
    graph: Optional[DependencyGraph] = None,
) -> StreetResult:
    """Route one street per edge of the dependency *graph*.

    The graph is built from the buildings' components when not given.
    Unresolved targets are logged and counted, never fatal.
    """
    street = street or StreetConfig()
    if graph is None:
        graph = DependencyGraph.from_components(b.component for b in buildings)
    by_name: Mapping[str, BuildingSpec] = {b.name: b for b in buildings}
    skipped_self = set(graph.self_references()) if street.skip_self_references else set()
    routed_pairs: set[tuple[str, str]] = set()
    result = StreetResult()

    for source, target in graph.dependency_edges():
        if source == target and source in skipped_self:
            logger.info("Skipping self reference of '%s'", source)
            continue
        if street.deduplicate and (source, target) in routed_pairs:
            logger.debug("Skipping duplicate street %s -> %s", source, target)
            continue
        routed = route_street(
            by_name[source], by_name.get(target), unit, street, layout, colors,
            target_name=target,
        )
        if routed is None:
            continue
        routed_pairs.add((source, target))
        result.streets.append(routed)

    result.unresolved = graph.unresolved_references()
    result.self_references = [n for n in graph.self_references() if n in skipped_self]
    if street.deduplicate:
        result.duplicates = [
            (u, v) for u, v in graph.duplicate_edges() if not (u == v and u in skipped_self)
        ]

    logger.debug(
        "Routed %d streets (%d unresolved, %d self references skipped)",
        len(result.streets), len(result.unresolved), len(result.self_references),
    )
    return result
