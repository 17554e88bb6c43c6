"""Scene exporter – writes the city primitives to disk.

Formats
-------
``.json``  the primitive list, lights and background as plain data
``.glb``   binary glTF built with trimesh (boxes and flat quads with
           per-face colors; lights and background are not carried)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import numpy as np
import trimesh

from swcity.geometry.colors import unpack_rgb
from swcity.scene.primitives import Box, Plate, Scene

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".glb")

# Unit square in the x/y plane facing +z, as laid out before rotation
_QUAD_VERTICES = np.array(
    [[-0.5, -0.5, 0.0], [0.5, -0.5, 0.0], [0.5, 0.5, 0.0], [-0.5, 0.5, 0.0]]
)
_QUAD_FACES = np.array([[0, 1, 2], [0, 2, 3]])


def _rgba(color: int) -> np.ndarray:
    return np.array([*unpack_rgb(color), 255], dtype=np.uint8)


def box_mesh(item: Box) -> trimesh.Trimesh:
    """Return a colored box mesh centred at the primitive position."""
    mesh = trimesh.creation.box(extents=[item.width, item.height, item.length])
    mesh.apply_translation(item.position)
    colors = np.tile(_rgba(item.color), (len(mesh.faces), 1))
    mesh.visual = trimesh.visual.ColorVisuals(mesh=mesh, face_colors=colors)
    return mesh


def plate_mesh(item: Plate) -> trimesh.Trimesh:
    """Return a two-triangle square rotated by the plate's Euler angles."""
    transform = trimesh.transformations.concatenate_matrices(
        trimesh.transformations.translation_matrix(item.position),
        trimesh.transformations.euler_matrix(*item.rotation, axes="sxyz"),
    )
    vertices = trimesh.transformations.transform_points(_QUAD_VERTICES * item.side, transform)
    return trimesh.Trimesh(
        vertices=vertices,
        faces=_QUAD_FACES,
        face_colors=np.tile(_rgba(item.color), (len(_QUAD_FACES), 1)),
        process=False,
    )


class SceneExporter:
    """Write a :class:`Scene` in the format implied by the output suffix."""

    def export(self, scene: Scene, output_path: str | Path) -> Path:
        path = Path(output_path)
        suffix = path.suffix.lower()
        if suffix not in SUPPORTED_SUFFIXES:
            raise ValueError(
                f"Unsupported output format '{suffix}' (expected one of {', '.join(SUPPORTED_SUFFIXES)})"
            )
        path.parent.mkdir(parents=True, exist_ok=True)
        if suffix == ".json":
            self.export_json(scene, path)
        else:
            self.export_glb(scene, path)
        return path

    def export_json(self, scene: Scene, path: Path) -> None:
        path.write_text(json.dumps(scene.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Scene JSON written to %s (%d objects)", path, len(scene))

    def to_trimesh(self, scene: Scene) -> trimesh.Scene:
        """Convert the scene primitives to a :class:`trimesh.Scene`."""
        tm_scene = trimesh.Scene()
        used: dict[str, int] = {}
        for item in scene.objects:
            if isinstance(item, Box):
                if min(item.width, item.height, item.length) <= 0:
                    logger.debug("Skipping zero-volume box %s", item.name)
                    continue
                mesh = box_mesh(item)
            else:
                mesh = plate_mesh(item)
            count = used.get(item.name, 0)
            used[item.name] = count + 1
            name = item.name if count == 0 else f"{item.name}#{count}"
            tm_scene.add_geometry(mesh, node_name=name, geom_name=name)
        return tm_scene

    def export_glb(self, scene: Scene, path: Path) -> None:
        tm_scene = self.to_trimesh(scene)
        if not tm_scene.geometry:
            logger.warning("Scene has no geometry; %s not written", path)
            return
        tm_scene.export(str(path), file_type="glb")
        logger.info("Scene glTF written to %s (%d meshes)", path, len(tm_scene.geometry))
