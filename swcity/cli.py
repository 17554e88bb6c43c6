"""Command-line interface for swcity.

Usage
-----
    swcity --input city.json --output city.glb
    swcity --input city.json --output scene.json --config swcity.yaml
    swcity --input city.json --output city.glb --debug /tmp/debug/
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from swcity.city import SoftwareCity
from swcity.config import Config
from swcity.data.loader import CityDataError, CityDataLoader
from swcity.layout.postprocess import save_layout_geojson, save_layout_json
from swcity.scene.exporter import SceneExporter
from swcity.validate.checks import validate_data, validate_layout
from swcity.validate.reports import build_city_report, save_city_report

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("swcity.cli")


@click.command()
@click.option("--input", "-i", "input_path", required=True, help="Input software city JSON file")
@click.option("--output", "-o", "output_path", default="city.glb", show_default=True, help="Output scene file (.glb or .json)")
@click.option("--config", "-c", "config_path", default=None, help="YAML configuration file")
@click.option("--debug", "debug_dir", default=None, help="Directory for debug outputs (layout.json, .geojson, report)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def main(
    input_path: str,
    output_path: str,
    config_path: Optional[str],
    debug_dir: Optional[str],
    verbose: bool,
) -> None:
    """Generate a 3D software city scene from a component description."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # ---- Configuration ------------------------------------------------ #
    if config_path:
        cfg = Config.from_yaml(config_path)
    else:
        cfg = Config.default()
    if debug_dir:
        cfg.debug_output_dir = Path(debug_dir)
    if cfg.debug_output_dir:
        cfg.debug_output_dir.mkdir(parents=True, exist_ok=True)

    # ---- Load data ---------------------------------------------------- #
    logger.info("Loading software city from %s", input_path)
    loader = CityDataLoader(input_path)
    try:
        data = loader.extract_city(loader.load())
    except CityDataError as exc:
        logger.error("Invalid input: %s", exc)
        raise SystemExit(1)
    logger.info("Loaded %d usage areas, %d components", len(data.usage_areas), len(data))

    data_errors = validate_data(data.usage_areas)
    if data_errors:
        for e in data_errors:
            logger.error("Data error: %s", e)
        raise SystemExit(1)

    # ---- Build city --------------------------------------------------- #
    city = SoftwareCity(data, config=cfg)
    scene = city.build()

    # ---- Validation --------------------------------------------------- #
    layout_errors = validate_layout(city.coordinates, city.unit)
    for e in layout_errors:
        logger.warning("Layout warning: %s", e)
    report = build_city_report(data_errors, layout_errors, city)

    if cfg.debug_output_dir:
        save_layout_json(city.components, city.coordinates, city.unit, cfg.debug_output_dir / "layout.json")
        save_layout_geojson(city.components, city.coordinates, city.unit, cfg.debug_output_dir / "layout.geojson")
        save_city_report(report, cfg.debug_output_dir / "city_report.json")
        logger.info("Debug outputs saved to %s", cfg.debug_output_dir)

    # ---- Export ------------------------------------------------------- #
    try:
        written = SceneExporter().export(scene, output_path)
    except ValueError as exc:
        logger.error("%s", exc)
        raise SystemExit(1)
    logger.info("Done. Scene written to %s", written)


if __name__ == "__main__":
    main()
