from typing import NamedTuple, Tuple

import numpy as np


class ScreenPoint(NamedTuple):
    """
    Integer pixel coordinate. Before clamping it can be negative or larger than the frame buffer.
    """

    x: int
    y: int

    def __add__(self, other: "ScreenPoint") -> "ScreenPoint":
        return ScreenPoint(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "ScreenPoint") -> "ScreenPoint":
        return ScreenPoint(self.x - other.x, self.y - other.y)


Triangle = Tuple[ScreenPoint, ScreenPoint, ScreenPoint]


def cross(a: Tuple[int, int, int], b: Tuple[int, int, int]) -> Tuple[int, int, int]:
    """
    Cross product on plain integer triples. This is used per pixel by the barycentric test, where numpy
    call overhead would dominate and we want to stay in exact integer arithmetic.
    """
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def normalize(vector: np.ndarray) -> np.ndarray:
    """
    Unit vector with the same direction. A zero vector has no direction, so we return it unchanged
    instead of dividing by 0.
    """
    norm = np.linalg.norm(vector)
    if norm == 0:
        return vector
    return vector / norm


def face_normal(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> np.ndarray:
    """
    Normal of the face (a, b, c) in model space, computed as (c - a) x (b - a).

    The operand order matters: for a face wound counter-clockwise when looking down -z, this gives a normal
    pointing towards -z, i.e along the light direction, so lit faces end up with a positive intensity.
    """
    return normalize(np.cross(c - a, b - a))
