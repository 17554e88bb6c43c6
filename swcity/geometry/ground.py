"""Landscape and lighting: grass, city foundation, sky and lights."""

from __future__ import annotations

from swcity.config import ColorConfig, LayoutConfig
from swcity.layout.grid import GridLayout
from swcity.scene.primitives import Light, Plate

# Point light placement above the origin
POINT_LIGHT_POSITION = (5.0, 5.0, 5.0)


def extract_ground(layout: GridLayout, colors: ColorConfig | None = None) -> list[Plate]:
    """Return the grass plate and the foundation plate resting on it.

    Both are square, centred at the origin and scale with the grid side and
    the unit size.  An empty layout has no ground.
    """
    colors = colors or ColorConfig()
    cfg: LayoutConfig = layout.config
    if len(layout) == 0:
        return []
    grass = Plate(
        name="grass",
        side=layout.grass_side(),
        position=(0.0, 0.0, 0.0),
        color=colors.ground,
    )
    foundation = Plate(
        name="foundation",
        side=layout.foundation_side(),
        position=(0.0, cfg.plane_offset, 0.0),
        color=colors.foundation,
    )
    return [grass, foundation]


def extract_lights(colors: ColorConfig | None = None) -> list[Light]:
    colors = colors or ColorConfig()
    return [
        Light(kind="point", color=colors.point_light, position=POINT_LIGHT_POSITION),
        Light(kind="ambient", color=colors.ambient_light),
    ]
