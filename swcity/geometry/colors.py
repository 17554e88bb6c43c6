"""Color gradients and usage-area color assignment."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable


def unpack_rgb(color: int) -> tuple[int, int, int]:
    """Split a packed 0xRRGGBB integer into its channels."""
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def pack_rgb(r: int, g: int, b: int) -> int:
    return (r << 16) + (g << 8) + b


@dataclass(frozen=True)
class ColorGradient:
    """Linear per-channel interpolation between two packed RGB colors."""

    start: int = 0xD3D3D3
    end: int = 0xEEEEEE

    def at(self, percentage: float) -> int:
        """Return the packed color at *percentage* in [0, 100].

        Out-of-range input is not clamped.
        """
        channels = [
            math.floor(s + percentage / 100 * (e - s))
            for s, e in zip(unpack_rgb(self.start), unpack_rgb(self.end))
        ]
        return pack_rgb(*channels)


DEFAULT_GRADIENT = ColorGradient()


def gradient_at(percentage: float, gradient: ColorGradient = DEFAULT_GRADIENT) -> int:
    return gradient.at(percentage)


def distinct_usage_areas(usage_areas: Iterable[str | None]) -> list[str]:
    """Deduplicate area names keeping first-seen order."""
    return [a for a in dict.fromkeys(usage_areas) if a is not None]


def usage_area_colors(
    usage_areas: list[str],
    gradient: ColorGradient = DEFAULT_GRADIENT,
) -> dict[str, int]:
    """Map each distinct area name to a color spread evenly over *gradient*.

    Area ``i`` of ``n`` gets ``gradient.at(floor(i / (n - 1) * 100))``.
    A single area gets the gradient start.
    """
    count = len(usage_areas)
    if count == 1:
        return {usage_areas[0]: gradient.at(0)}
    return {
        area: gradient.at(math.floor(i / (count - 1) * 100))
        for i, area in enumerate(usage_areas)
    }
