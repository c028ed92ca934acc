"""
Pinhole camera mapping pixels to primary rays.
"""
import math
import numpy as np
from raytrace_renders.config import RenderConfig
from raytrace_renders.linalg import identity, inverse, normalize, point
from raytrace_renders.rays import Ray


class Camera:
    """
    A camera with a canvas one unit in front of the eye.

    The pixel geometry (half_width, half_height, pixel_size) is derived once at
    construction; assigning a new transform recomputes only the inverse.

    Args:
        hsize: Horizontal size in pixels
        vsize: Vertical size in pixels
        field_of_view: Horizontal angle of view for landscape images (vertical
            for portrait), in radians
        transform: World-to-camera matrix, usually from view_transform
        config: RenderConfig; supplies the anti-aliasing sample grid
    """

    def __init__(self, hsize, vsize, field_of_view, transform=None, config=None):
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise ValueError(f"field_of_view must be in (0, pi), got {field_of_view}")
        self.hsize = int(hsize)
        self.vsize = int(vsize)
        self.field_of_view = float(field_of_view)
        self.config = config if config is not None else RenderConfig()

        half_view = math.tan(self.field_of_view / 2.0)
        aspect = self.hsize / self.vsize
        if aspect >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = (self.half_width * 2.0) / self.hsize

        self.transform = identity() if transform is None else transform

    @property
    def transform(self):
        return self._transform

    @transform.setter
    def transform(self, m):
        m = np.asarray(m, dtype=np.float64)
        if m.shape != (4, 4):
            raise ValueError(f"transform must be a (4, 4) matrix, got shape {m.shape}")
        inv = inverse(m)
        self._transform = m
        self._inverse = inv
        self._origin = inv @ point(0.0, 0.0, 0.0)

    @property
    def origin(self):
        """Eye position in world space."""
        return self._origin

    def ray_for_pixel(self, px, py, offset_x=0.5, offset_y=0.5):
        """
        Ray from the eye through a point inside pixel (px, py).

        Args:
            px, py: Pixel column and row
            offset_x, offset_y: Position within the pixel in [0, 1); 0.5 is the centre

        Returns:
            Ray with a normalized direction
        """
        world_x = self.half_width - (px + offset_x) * self.pixel_size
        world_y = self.half_height - (py + offset_y) * self.pixel_size
        pixel = self._inverse @ point(world_x, world_y, -1.0)
        return Ray(self._origin, normalize(pixel - self._origin))

    def rays_for_pixel(self, px, py):
        """
        The samples x samples grid of sub-pixel rays for anti-aliasing.

        With samples=1 this is the single centred ray from ray_for_pixel.
        """
        n = self.config.samples
        offsets = [(i + 0.5) / n for i in range(n)]
        return [self.ray_for_pixel(px, py, ox, oy) for oy in offsets for ox in offsets]

    def ray_directions(self, y_start=0, y_end=None):
        """
        Vectorized primary ray directions for the pixel centres of rows
        y_start .. y_end - 1.

        Args:
            y_start: First row
            y_end: One past the last row; defaults to vsize

        Returns:
            (y_end - y_start, hsize, 4) array of unit direction vectors; entry
            [y - y_start, x] matches ray_for_pixel(x, y).direction
        """
        if y_end is None:
            y_end = self.vsize
        x = self.half_width - (np.arange(self.hsize) + 0.5) * self.pixel_size
        y = self.half_height - (np.arange(y_start, y_end) + 0.5) * self.pixel_size
        px, py = np.meshgrid(x, y)

        canvas_points = np.stack([px, py, np.full_like(px, -1.0), np.ones_like(px)], axis=-1)
        world_points = canvas_points @ self._inverse.T
        directions = world_points - self._origin[None, None, :]
        directions[..., 3] = 0.0
        return directions / np.linalg.norm(directions, axis=-1, keepdims=True)
