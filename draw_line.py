from frame_buffer import Color, FrameBuffer
from geometry import ScreenPoint, Triangle


def draw_line(p0: ScreenPoint, p1: ScreenPoint, buffer: FrameBuffer, color: Color) -> None:
    """
    Bresenham's line algorithm, using only integer arithmetic.

    If the line is steep (it moves more along y than along x), we swap x and y for both endpoints, so that
    we always walk along the major axis one pixel at a time. The endpoints are then ordered left to right.
    The error accumulator tracks (twice) the distance between the ideal line and the current pixel centre:
    once it goes over dx, the ideal line is closer to the next row, so we step y.

    Both endpoints are painted, so chained segments (e.g the edges of a polygon) do not leave gaps.
    Pixels falling outside of the buffer are skipped.
    """
    x0, y0 = p0
    x1, y1 = p1

    steep = abs(x0 - x1) < abs(y0 - y1)
    if steep:
        x0, y0 = y0, x0
        x1, y1 = y1, x1
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    derror = 2 * abs(y1 - y0)
    y_step = 1 if y1 > y0 else -1
    error = 0
    y = y0
    for x in range(x0, x1 + 1):
        px, py = (y, x) if steep else (x, y)
        if buffer.contains(px, py):
            buffer.put_pixel(px, py, color)
        error += derror
        if error > dx:
            y += y_step
            error -= 2 * dx


def sort_by_height(triangle: Triangle) -> Triangle:
    """Order the vertices top to bottom (increasing y)."""
    t0, t1, t2 = sorted(triangle, key=lambda p: p.y)
    return t0, t1, t2


def draw_triangle_outline(triangle: Triangle, buffer: FrameBuffer, color: Color) -> None:
    """
    Wireframe rendering of a triangle. The vertices are sorted first so that a given edge is always drawn
    in the same direction, whatever the winding of the face it belongs to.
    """
    t0, t1, t2 = sort_by_height(triangle)
    draw_line(t0, t1, buffer, color)
    draw_line(t1, t2, buffer, color)
    draw_line(t0, t2, buffer, color)
