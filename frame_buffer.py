import logging
from typing import Tuple

import matplotlib.pyplot as plt
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)


class ImageWriteError(Exception):
    """Raised when the rendered image cannot be written to its destination."""


class FrameBuffer:
    """
    RGB8 pixel grid the rasterizers draw into.

    Pixels are stored as a numpy array of shape [height, width, 3], i.e row-major, so that the buffer can be
    handed to PIL or matplotlib without any copy. Row 0 is the row with the lowest y coordinate.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.uint8)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put_pixel(self, x: int, y: int, color: Color) -> None:
        # No bounds check: callers clamp or clip their coordinates before writing
        self.pixels[y, x] = color

    def get_pixel(self, x: int, y: int) -> Color:
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)

    def flip_vertical(self) -> None:
        """
        Swap row i with row height - 1 - i. Model space y grows upwards while image rows grow downwards,
        so this is applied once after all the faces have been drawn.
        """
        self.pixels[:] = self.pixels[::-1].copy()

    def save(self, path: str) -> None:
        try:
            Image.fromarray(self.pixels).save(path)
        except (OSError, ValueError) as e:
            raise ImageWriteError(f"Could not write image to {path}: {e}") from e
        logger.info("Wrote %dx%d image to %s", self.width, self.height, path)

    def show(self, title: str = "Rendered Image") -> None:
        plt.figure(figsize=(10, 10))
        plt.imshow(self.pixels)
        plt.title(title)
        plt.show()
