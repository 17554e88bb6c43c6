"""City build reporting."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from swcity.city import SoftwareCity


def build_city_report(
    data_errors: list[str],
    layout_errors: list[str],
    city: Optional["SoftwareCity"] = None,
) -> dict[str, Any]:
    """Build a serialisable report dict."""
    report: dict[str, Any] = {
        "data_errors": data_errors,
        "layout_errors": layout_errors,
        "ok": len(data_errors) == 0 and len(layout_errors) == 0,
    }
    if city is not None:
        report.update(
            {
                "unit_size": city.unit,
                "buildings": len(city.buildings),
                "streets": len(city.streets),
                "usage_area_colors": {
                    name: f"#{color:06X}" for name, color in city.usage_area_colors.items()
                },
                "unresolved_references": [
                    {"source": s, "target": t} for s, t in city.unresolved_references
                ],
                "skipped_self_references": list(city.self_references),
                "skipped_duplicate_streets": [
                    {"source": s, "target": t} for s, t in city.duplicate_streets
                ],
            }
        )
    return report


def save_city_report(report: dict[str, Any], path: Path) -> None:
    path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
