"""Validation checks for city data and layout."""

from __future__ import annotations

import math
from collections import Counter

from swcity.layout.postprocess import check_overlaps
from swcity.model.model import Coordinate, UsageArea

_METRICS = ("width", "height", "length")


def validate_data(usage_areas: list[UsageArea]) -> list[str]:
    """Return a list of data-level validation errors."""
    errors: list[str] = []

    area_counts = Counter(a.name for a in usage_areas)
    for name, count in area_counts.items():
        if count > 1:
            errors.append(f"Usage area '{name}' is defined {count} times.")

    name_counts = Counter(c.name for a in usage_areas for c in a.components)
    for name, count in name_counts.items():
        if count > 1:
            errors.append(f"Component name '{name}' is used {count} times.")

    for area in usage_areas:
        for component in area.components:
            for metric in _METRICS:
                value = getattr(component, metric)
                if not math.isfinite(value):
                    errors.append(
                        f"Component '{component.name}' has non-finite {metric}: {value}."
                    )
                elif value <= 0:
                    errors.append(
                        f"Component '{component.name}' has non-positive {metric}: {value}."
                    )

    return errors


def validate_layout(
    coordinates: list[Coordinate],
    unit: float,
    tol: float = 1e-6,
) -> list[str]:
    """Return a list of layout-level validation errors."""
    errors: list[str] = []
    if not coordinates:
        return errors

    # Check every component got its own cell
    cell_counts = Counter((round(c.x, 6), round(c.z, 6)) for c in coordinates)
    for (x, z), count in cell_counts.items():
        if count > 1:
            errors.append(f"{count} components share the cell at ({x:.3f}, {z:.3f}).")

    # Check plots do not overlap
    plots = {
        f"#{i}": (c.x - unit / 2, c.z - unit / 2, c.x + unit / 2, c.z + unit / 2)
        for i, c in enumerate(coordinates)
    }
    errors.extend(check_overlaps(plots, tol=tol * unit * unit))

    # Check the layout straddles the origin
    xs = [c.x for c in coordinates]
    zs = [c.z for c in coordinates]
    mid_x = (min(xs) + max(xs)) / 2
    mid_z = (min(zs) + max(zs)) / 2
    limit = tol * max(unit, 1.0)
    if abs(mid_x) > limit or abs(mid_z) > limit:
        errors.append(f"Layout is not centred: midpoint at ({mid_x:.3f}, {mid_z:.3f}).")

    return errors
