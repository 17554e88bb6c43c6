"""Software-city data loader.

Reads the JSON city description and converts it into the internal
:class:`swcity.model.model.UsageArea` / :class:`Component` representation.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from swcity.model.model import Component, SoftwareCityData, UsageArea

logger = logging.getLogger(__name__)

# Wrapper key used by bundled data files
_WRAPPER_KEY = "softwareCityData"
_METRICS = ("height", "width", "length")


class CityDataError(ValueError):
    """Raised when the city document is structurally malformed."""


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _require(mapping: Any, key: str, where: str) -> Any:
    if not isinstance(mapping, dict):
        raise CityDataError(f"{where} must be an object, got {type(mapping).__name__}")
    if key not in mapping:
        raise CityDataError(f"{where} is missing '{key}'")
    return mapping[key]


def _as_float(value: Any, where: str) -> float:
    if isinstance(value, bool):
        raise CityDataError(f"{where} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise CityDataError(f"{where} must be a number, got {value!r}") from exc


def _parse_component(raw: Any, where: str) -> Component:
    name = _require(raw, "name", where)
    if not isinstance(name, str) or not name:
        raise CityDataError(f"{where} has an invalid name: {name!r}")
    metrics = {
        key: _as_float(_require(raw, key, f"Component '{name}'"), f"Component '{name}' {key}")
        for key in _METRICS
    }
    requires = raw.get("requires") or []
    if isinstance(requires, str) or not isinstance(requires, list):
        raise CityDataError(f"Component '{name}' requires must be a list of names")
    for entry in requires:
        if not isinstance(entry, str):
            raise CityDataError(
                f"Component '{name}' requires entries must be names, got {entry!r}"
            )
    return Component(name=name, requires=tuple(requires), **metrics)


# --------------------------------------------------------------------------- #
# Loader
# --------------------------------------------------------------------------- #


class CityDataLoader:
    """Load a city JSON file and convert it to internal model structures."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._data: Optional[dict] = None

    def load(self) -> dict:
        """Parse the JSON file and return the raw city document."""
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise CityDataError(f"{self.path} is not valid JSON: {exc}") from exc
        if isinstance(data, dict) and _WRAPPER_KEY in data:
            data = data[_WRAPPER_KEY]
        logger.debug("Loaded city document from %s", self.path)
        self._data = data
        return data

    def extract_usage_areas(self, data: Optional[dict] = None) -> list[UsageArea]:
        """Return a :class:`UsageArea` for every entry of ``usageAreas``."""
        data = data if data is not None else self._data
        if data is None:
            raise RuntimeError("Call load() before extract_usage_areas()")
        return self.parse_usage_areas(data)

    def extract_city(self, data: Optional[dict] = None) -> SoftwareCityData:
        return SoftwareCityData(usage_areas=self.extract_usage_areas(data))

    @staticmethod
    def parse_usage_areas(data: dict) -> list[UsageArea]:
        raw_areas = _require(data, "usageAreas", "City document")
        if not isinstance(raw_areas, list):
            raise CityDataError("'usageAreas' must be a list")

        areas: list[UsageArea] = []
        for i, raw_area in enumerate(raw_areas):
            name = _require(raw_area, "name", f"Usage area #{i}")
            raw_components = raw_area.get("components") or []
            if not isinstance(raw_components, list):
                raise CityDataError(f"Usage area '{name}' components must be a list")
            components = [
                _parse_component(raw, f"Component #{j} of usage area '{name}'")
                for j, raw in enumerate(raw_components)
            ]
            areas.append(UsageArea(name=str(name), components=components))

        logger.debug(
            "Extracted %d usage areas, %d components",
            len(areas),
            sum(len(a.components) for a in areas),
        )
        return areas
