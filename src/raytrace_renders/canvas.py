"""
Framebuffer the render loop writes into.
"""
import numpy as np


class Canvas:
    """
    A width x height grid of unclamped RGB colors, indexed by (x, y).

    Pixels are stored row-major as a (height, width, 3) float array, so row y
    is pixels[y]. Clamping and quantization belong to the image encoder.
    """

    def __init__(self, width, height, fill=None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._pixels = np.zeros((self.height, self.width, 3), dtype=np.float64)
        if fill is not None:
            self._pixels[:, :] = fill

    def __repr__(self):
        return f"Canvas(width={self.width}, height={self.height})"

    @property
    def pixels(self):
        return self._pixels

    def _check(self, x, y):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas")

    def write_pixel(self, x, y, c):
        self._check(x, y)
        self._pixels[y, x] = c

    def pixel_at(self, x, y):
        self._check(x, y)
        return self._pixels[y, x].copy()

    def write_rows(self, y_start, rows):
        """Copy a (n, width, 3) block into rows y_start .. y_start + n - 1."""
        rows = np.asarray(rows, dtype=np.float64)
        if rows.ndim != 3 or rows.shape[1:] != (self.width, 3):
            raise ValueError(f"rows must have shape (n, {self.width}, 3), got {rows.shape}")
        if y_start < 0 or y_start + rows.shape[0] > self.height:
            raise IndexError(f"Rows {y_start}..{y_start + rows.shape[0] - 1} outside canvas height {self.height}")
        self._pixels[y_start:y_start + rows.shape[0]] = rows
