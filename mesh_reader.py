import logging
import os
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
from plyfile import PlyData, PlyParseError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".obj", ".ply")


class MeshLoadError(Exception):
    """Raised when a mesh file is missing, cannot be parsed, or contains no geometry."""


@dataclass(frozen=True)
class Mesh:
    """
    A single triangle mesh.
    - positions: array of size [N, 3], vertex positions in model space (usually within [-1, 1] on each axis)
    - faces: array of size [M, 3], indices into `positions` for the vertices of each triangle
    """

    positions: np.ndarray
    faces: np.ndarray

    @property
    def num_faces(self) -> int:
        return int(self.faces.shape[0])


def triangulate(polygon: Sequence[int]) -> List[List[int]]:
    """
    Split a convex polygon into a fan of triangles sharing its first vertex. The winding of the polygon is kept.
    """
    return [[polygon[0], polygon[i], polygon[i + 1]] for i in range(1, len(polygon) - 1)]


def _resolve_obj_index(token: str, num_positions: int) -> int:
    # Face tokens look like v, v/vt, v//vn or v/vt/vn. Indices are 1-based, negative ones count from the end
    index = int(token.split("/")[0])
    if index == 0 or index < -num_positions:
        raise ValueError(f"vertex index {index} out of range for {num_positions} vertices")
    return index - 1 if index > 0 else num_positions + index


def _parse_obj_vertex(parts: List[str]) -> List[float]:
    # An optional 4th value (w) is ignored
    if len(parts) < 4:
        raise ValueError(f"expected 3 coordinates, got {len(parts) - 1}")
    return [float(value) for value in parts[1:4]]


def read_obj(path: str) -> Mesh:
    """
    Read the geometry of an OBJ file: `v` and `f` records, every other record is ignored.

    Object (`o`) and group (`g`) statements are ignored as well, so a file holding several objects is read
    as one mesh made of all of them.
    """
    positions = []
    faces = []
    num_objects = 0
    with open(path, "r") as f:
        for line_number, line in enumerate(f, start=1):
            parts = line.split()
            if not parts:
                continue
            try:
                if parts[0] == "v":
                    positions.append(_parse_obj_vertex(parts))
                elif parts[0] == "f":
                    polygon = [_resolve_obj_index(token, len(positions)) for token in parts[1:]]
                    faces.extend(triangulate(polygon))
                elif parts[0] == "o":
                    num_objects += 1
            except ValueError as e:
                raise MeshLoadError(f"{path}:{line_number}: could not parse '{line.strip()}': {e}") from e
    if num_objects > 1:
        logger.warning("%s holds %d objects, they are merged into a single mesh", path, num_objects)
    return _build_mesh(path, positions, faces)


def read_ply(path: str) -> Mesh:
    plydata = PlyData.read(path)
    element_names = [element.name for element in plydata.elements]
    if "vertex" not in element_names or "face" not in element_names:
        raise MeshLoadError(f"{path}: expected 'vertex' and 'face' elements, found {element_names}")

    vertices = plydata["vertex"]
    positions = np.stack([vertices["x"], vertices["y"], vertices["z"]]).T

    face_element = plydata["face"]
    property_names = [prop.name for prop in face_element.properties]
    # Both names are found in the wild
    index_property = "vertex_indices" if "vertex_indices" in property_names else "vertex_index"
    faces = []
    for polygon in face_element[index_property]:
        faces.extend(triangulate([int(index) for index in polygon]))
    return _build_mesh(path, positions, faces)


def _build_mesh(path: str, positions, faces) -> Mesh:
    if len(positions) == 0 or len(faces) == 0:
        raise MeshLoadError(f"{path}: no geometry found")
    mesh = Mesh(
        positions=np.asarray(positions, dtype=np.float64),
        faces=np.asarray(faces, dtype=np.int64),
    )
    logger.info("Loaded %s: %d vertices, %d faces", path, mesh.positions.shape[0], mesh.num_faces)
    return mesh


def read_mesh(path: str) -> Mesh:
    """
    Read the (single) model stored in an OBJ or PLY file.
    Every failure is reported as a MeshLoadError so that callers only have one error to deal with.
    """
    extension = os.path.splitext(path)[1].lower()
    if extension not in SUPPORTED_EXTENSIONS:
        raise MeshLoadError(f"Unsupported mesh format '{extension}' for {path}, expected one of {SUPPORTED_EXTENSIONS}")
    if not os.path.isfile(path):
        raise MeshLoadError(f"Mesh file not found: {path}")

    try:
        if extension == ".obj":
            return read_obj(path)
        return read_ply(path)
    except MeshLoadError:
        raise
    except (OSError, ValueError, KeyError, PlyParseError) as e:
        raise MeshLoadError(f"Could not read mesh from {path}: {e}") from e
