"""Square-grid placement of components.

Strategy
--------
1. The unit cell is the longest footprint side over all components plus a
   fixed margin.  It is the grid step, the plot side and the ground scale.
2. Component ``i`` goes to cell ``(i mod side, i div side)`` where
   ``side = ceil(sqrt(n))``; rows fill left-to-right, then advance in z.
3. The occupied cells are shifted by half their maximum extent so the
   layout straddles the origin.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from swcity.config import LayoutConfig
from swcity.model.model import Component, Coordinate

logger = logging.getLogger(__name__)


def grid_side(count: int) -> int:
    """Number of cells per grid row for *count* components."""
    if count <= 0:
        return 0
    return math.ceil(math.sqrt(count))


def unit_size(components: Sequence[Component], margin: float = 10.0) -> float:
    """Return ``margin + max(width, length)`` over *components*.

    An empty sequence yields just *margin*.
    """
    longest = max((c.footprint_side for c in components), default=0.0)
    return margin + longest


def grid_cells(count: int) -> list[tuple[int, int]]:
    """Raw (column, row) cell for each flattened index."""
    side = grid_side(count)
    if side == 0:
        return []
    rows, cols = np.divmod(np.arange(count), side)
    return list(zip(cols.tolist(), rows.tolist()))


def assign_coordinates(count: int, unit: float) -> list[Coordinate]:
    """Return one centred :class:`Coordinate` per component index."""
    cells = grid_cells(count)
    if not cells:
        return []
    raw = np.asarray(cells, dtype=float) * unit
    centred = raw - raw.max(axis=0) / 2
    coordinates = [Coordinate(x=float(x), z=float(z)) for x, z in centred]
    logger.debug(
        "Assigned %d coordinates on a %dx%d grid (unit %.2f)",
        count, grid_side(count), grid_side(count), unit,
    )
    return coordinates


def ground_side(count: int, unit: float, margin: float) -> float:
    """Side length of a square ground plate covering the whole grid."""
    return grid_side(count) * unit + margin


class GridLayout:
    """Layout of a component sequence: unit size plus one coordinate each."""

    def __init__(self, components: Sequence[Component], config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()
        self.components = list(components)
        self.unit = unit_size(self.components, self.config.unit_margin)
        self.coordinates = assign_coordinates(len(self.components), self.unit)

    @property
    def side(self) -> int:
        return grid_side(len(self.components))

    def __len__(self) -> int:
        return len(self.coordinates)

    def __iter__(self):
        return iter(zip(self.components, self.coordinates))

    def grass_side(self) -> float:
        return ground_side(len(self.components), self.unit, self.config.grass_margin)

    def foundation_side(self) -> float:
        return ground_side(len(self.components), self.unit, self.config.foundation_margin)
