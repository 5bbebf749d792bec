import logging
import math
from typing import Callable, Optional

import click
import numpy as np
import tqdm

from draw_line import draw_triangle_outline
from frame_buffer import Color, FrameBuffer, ImageWriteError
from geometry import ScreenPoint, Triangle, face_normal
from mesh_reader import Mesh, MeshLoadError, read_mesh
from rasterize_triangle import fill_triangle, fill_triangle_batched

logger = logging.getLogger(__name__)


DEFAULT_MODEL_PATH = "models/african_head.obj"
DEFAULT_OUTPUT_PATH = "african_head.png"
DEFAULT_WIDTH = 600
DEFAULT_HEIGHT = 600
# Single directional light, pointing into the screen
LIGHT_DIRECTION = np.array([0.0, 0.0, -1.0])
WIREFRAME_COLOR: Color = (255, 255, 255)

FillFunction = Callable[[Triangle, FrameBuffer, Color], None]


def project_to_screen(position: np.ndarray, width: int, height: int) -> ScreenPoint:
    """
    Orthographic projection: x and y are rescaled from the [-1, 1] model cube to pixel coordinates
    and z is simply dropped. Coordinates are truncated towards 0.
    """
    screen_x = (position[0] + 1.0) * width / 2.0 - 1.0
    screen_y = (position[1] + 1.0) * height / 2.0 - 1.0
    return ScreenPoint(int(screen_x), int(screen_y))


def shading_intensity(normal: np.ndarray, light_direction: np.ndarray = LIGHT_DIRECTION) -> float:
    """
    Flat shading: the face gets the cosine of the angle between its normal and the light.
    A zero normal (degenerate face) gives 0, so the face gets culled.
    """
    return float(np.dot(normal, light_direction))


def round_half_up(value: float) -> int:
    # Python's round() sends ties to the even neighbour
    return math.floor(value + 0.5)


def intensity_to_color(intensity: float) -> Color:
    level = int(np.clip(round_half_up(intensity * 255.0), 0, 255))
    return level, level, level


def _face_vertices(mesh: Mesh, face_index: int, skip_invalid_faces: bool) -> Optional[np.ndarray]:
    face = mesh.faces[face_index]
    if np.any(face < 0) or np.any(face >= mesh.positions.shape[0]):
        if skip_invalid_faces:
            logger.warning("Skipping face %d: indices %s out of range", face_index, face.tolist())
            return None
        raise IndexError(f"Face {face_index} references missing vertices {face.tolist()}")
    return mesh.positions[face]


def render_mesh(
    mesh: Mesh,
    width: int,
    height: int,
    batched: bool = False,
    skip_invalid_faces: bool = False,
    progress: bool = False,
) -> FrameBuffer:
    """
    Flat shaded rendering of a mesh, without any depth test: faces are drawn in the order they appear in
    the mesh, so a later face overwrites an earlier one wherever they overlap.

    For each face:
    - project its vertices to screen space
    - compute its normal in model space and the light intensity
    - drop it if the intensity is not positive (back-face culling)
    - otherwise fill it with the corresponding gray level

    The buffer is flipped vertically at the end, so that model space y points up in the final image.
    """
    fill: FillFunction = fill_triangle_batched if batched else fill_triangle
    buffer = FrameBuffer(width, height)

    num_drawn = 0
    num_culled = 0
    for face_index in tqdm.tqdm(range(mesh.num_faces), disable=not progress):
        vertices = _face_vertices(mesh, face_index, skip_invalid_faces)
        if vertices is None:
            continue

        normal = face_normal(vertices[0], vertices[1], vertices[2])
        intensity = shading_intensity(normal)
        if intensity <= 0:
            num_culled += 1
            continue

        triangle = tuple(project_to_screen(vertex, width, height) for vertex in vertices)
        fill(triangle, buffer, intensity_to_color(intensity))
        num_drawn += 1

    logger.info("Rendered %d faces, culled %d", num_drawn, num_culled)
    buffer.flip_vertical()
    return buffer


def render_wireframe(
    mesh: Mesh, width: int, height: int, skip_invalid_faces: bool = False, progress: bool = False,
) -> FrameBuffer:
    """
    Same projection as `render_mesh`, but every face is drawn as an outline, with no culling or shading.
    """
    buffer = FrameBuffer(width, height)
    for face_index in tqdm.tqdm(range(mesh.num_faces), disable=not progress):
        vertices = _face_vertices(mesh, face_index, skip_invalid_faces)
        if vertices is None:
            continue
        triangle = tuple(project_to_screen(vertex, width, height) for vertex in vertices)
        draw_triangle_outline(triangle, buffer, WIREFRAME_COLOR)

    buffer.flip_vertical()
    return buffer


@click.command()
@click.option("--model_path", type=str, default=DEFAULT_MODEL_PATH)
@click.option("--output_path", type=str, default=DEFAULT_OUTPUT_PATH)
@click.option("--width", type=click.IntRange(min=1), default=DEFAULT_WIDTH)
@click.option("--height", type=click.IntRange(min=1), default=DEFAULT_HEIGHT)
@click.option("--wireframe", is_flag=True, type=bool, default=False)
@click.option("--batched", is_flag=True, type=bool, default=False)
@click.option("--skip_invalid_faces", is_flag=True, type=bool, default=False)
@click.option("--preview", is_flag=True, type=bool, default=False)
def run_rasterization(
    model_path: str,
    output_path: str,
    width: int,
    height: int,
    wireframe: bool = False,
    batched: bool = False,
    skip_invalid_faces: bool = False,
    preview: bool = False,
):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        mesh = read_mesh(model_path)
    except MeshLoadError as e:
        raise click.ClickException(str(e)) from e

    if wireframe:
        buffer = render_wireframe(mesh, width, height, skip_invalid_faces=skip_invalid_faces, progress=True)
    else:
        buffer = render_mesh(
            mesh, width, height, batched=batched, skip_invalid_faces=skip_invalid_faces, progress=True,
        )

    try:
        buffer.save(output_path)
    except ImageWriteError as e:
        raise click.ClickException(str(e)) from e

    if preview:
        buffer.show(title=output_path)


if __name__ == "__main__":

    run_rasterization()
