"""Post-processing for layout results.

Converts component coordinates to Shapely plot footprints, checks them for
overlaps, and dumps the layout as JSON / GeoJSON for inspection.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from shapely.geometry import Polygon, box, mapping

from swcity.model.model import Component, Coordinate

logger = logging.getLogger(__name__)

Bounds = tuple[float, float, float, float]


def plot_footprints(
    components: list[Component],
    coordinates: list[Coordinate],
    unit: float,
) -> dict[str, Polygon]:
    """Return component name → square plot polygon (x/z plane)."""
    half = unit / 2
    return {
        c.name: box(xy.x - half, xy.z - half, xy.x + half, xy.z + half)
        for c, xy in zip(components, coordinates)
    }


def building_footprints(
    components: list[Component],
    coordinates: list[Coordinate],
) -> dict[str, Polygon]:
    """Return component name → building base polygon (x/z plane)."""
    return {
        c.name: box(
            xy.x - c.width / 2, xy.z - c.length / 2,
            xy.x + c.width / 2, xy.z + c.length / 2,
        )
        for c, xy in zip(components, coordinates)
    }


def check_overlaps(footprints: dict[str, Bounds | Polygon], tol: float = 0.01) -> list[str]:
    """Return a list of overlap descriptions (empty = no overlaps)."""
    issues: list[str] = []
    polys = {
        key: geom if isinstance(geom, Polygon) else box(*geom)
        for key, geom in footprints.items()
    }
    ids = list(polys.keys())
    for i in range(len(ids)):
        for j in range(i + 1, len(ids)):
            a, b = ids[i], ids[j]
            inter = polys[a].intersection(polys[b])
            if inter.area > tol:
                issues.append(
                    f"Overlap between '{a}' and '{b}': area={inter.area:.3f}"
                )
    return issues


def save_layout_json(
    components: list[Component],
    coordinates: list[Coordinate],
    unit: float,
    path: Path,
) -> None:
    """Save layout as JSON (name → {usage_area, x, z, width, length, height})."""
    data = {
        "unit": unit,
        "components": {
            c.name: {"usage_area": c.usage_area, **xy.to_dict(),
                     "width": c.width, "length": c.length, "height": c.height}
            for c, xy in zip(components, coordinates)
        },
    }
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("Saved layout JSON → %s", path)


def save_layout_geojson(
    components: list[Component],
    coordinates: list[Coordinate],
    unit: float,
    path: Path,
) -> None:
    """Save plot footprints as a GeoJSON FeatureCollection for visualisation."""
    plots = plot_footprints(components, coordinates, unit)
    features = []
    for c in components:
        features.append(
            {
                "type": "Feature",
                "properties": {
                    "name": c.name,
                    "usage_area": c.usage_area,
                    "height": c.height,
                },
                "geometry": mapping(plots[c.name]),
            }
        )
    fc = {"type": "FeatureCollection", "features": features}
    path.write_text(json.dumps(fc, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("Saved layout GeoJSON → %s", path)
