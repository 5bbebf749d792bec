from typing import Tuple

import torch

from bounding_box import BoundingBox
from frame_buffer import Color, FrameBuffer
from geometry import ScreenPoint, Triangle, cross

# Returned for degenerate triangles: the negative weight makes every point fail the containment test
DEGENERATE_WEIGHTS = (-1.0, 1.0, 1.0)


def barycentric_coordinates(triangle: Triangle, point: ScreenPoint) -> Tuple[float, float, float]:
    """
    Barycentric coordinates of `point` with respect to the triangle (A, B, C).
    See: https://en.wikipedia.org/wiki/Barycentric_coordinate_system

    We look for (u, v) such that P = A + u*AC + v*AB, i.e u*AC + v*AB + PA = 0. Written per axis, (u, v, 1)
    is orthogonal both to (AC_x, AB_x, PA_x) and to (AC_y, AB_y, PA_y), so it is their cross product
    divided by its z component.

    If |z| < 1, the triangle has no area at integer precision (its vertices are collinear), and no point
    can be inside of it.
    """
    a, b, c = triangle
    ac, ab, pa = c - a, b - a, a - point
    x = (ac.x, ab.x, pa.x)
    y = (ac.y, ab.y, pa.y)
    u = cross(x, y)
    if abs(u[2]) < 1:
        return DEGENERATE_WEIGHTS
    return 1.0 - (u[0] + u[1]) / u[2], u[1] / u[2], u[0] / u[2]


def is_in_triangle(triangle: Triangle, point: ScreenPoint) -> bool:
    """
    A point is inside the triangle (or on one of its edges) if all of its barycentric coordinates are
    positive or zero. Points on a shared edge count as inside for both triangles.
    """
    return all(weight >= 0 for weight in barycentric_coordinates(triangle, point))


def clamped_bounding_box(triangle: Triangle, buffer: FrameBuffer) -> BoundingBox:
    # Find the bbox for the triangle so that we don't uselessly go over pixels
    bbox = BoundingBox.from_points(*triangle)
    return bbox.clamp(ScreenPoint(0, 0), ScreenPoint(buffer.width - 1, buffer.height - 1))


def fill_triangle(triangle: Triangle, buffer: FrameBuffer, color: Color) -> None:
    for point in clamped_bounding_box(triangle, buffer):
        if is_in_triangle(triangle, point):
            buffer.put_pixel(point.x, point.y, color)


def fill_triangle_batched(triangle: Triangle, buffer: FrameBuffer, color: Color) -> None:
    """
    Same test as `fill_triangle`, but evaluated for every pixel of the bounding box at once.

    The cross products stay in int64 and the divisions are done in float64, which is exactly what the
    per-point version does with python ints and floats, so both fill the same set of pixels.
    The pixels are written through a tensor view sharing memory with the frame buffer.
    """
    bbox = clamped_bounding_box(triangle, buffer)
    if bbox.is_empty:
        return

    a, b, c = triangle
    # Same terms as in barycentric_coordinates, only PA depends on the pixel
    ac, ab = c - a, b - a
    u_z = ac.x * ab.y - ab.x * ac.y
    if abs(u_z) < 1:
        return

    x_grid = torch.arange(bbox.min.x, bbox.max.x + 1, dtype=torch.int64)
    y_grid = torch.arange(bbox.min.y, bbox.max.y + 1, dtype=torch.int64)
    mesh_y, mesh_x = torch.meshgrid(y_grid, x_grid, indexing="ij")
    mesh_x = mesh_x.reshape(-1)
    mesh_y = mesh_y.reshape(-1)

    pa_x = a.x - mesh_x
    pa_y = a.y - mesh_y
    u_x = ab.x * pa_y - pa_x * ab.y
    u_y = pa_x * ac.y - ac.x * pa_y

    weights = torch.stack(
        [
            1.0 - (u_x + u_y).double() / u_z,
            u_y.double() / u_z,
            u_x.double() / u_z,
        ],
        dim=-1,
    )
    inside = torch.all(weights >= 0, dim=-1)

    screen = torch.from_numpy(buffer.pixels)
    screen[mesh_y[inside], mesh_x[inside]] = torch.tensor(color, dtype=torch.uint8)

