"""
Ray representation.
"""
from dataclasses import dataclass
import numpy as np
from raytrace_renders.linalg import is_point, is_vector


@dataclass(frozen=True, eq=False)
class Ray:
    """
    A half-line with an origin point and a direction vector.

    The direction is not normalized; intersection distances are measured in
    multiples of its length.
    """
    origin: np.ndarray
    direction: np.ndarray

    def __post_init__(self):
        if not is_point(self.origin):
            raise ValueError(f"ray origin must be a point (w=1), got {self.origin}")
        if not is_vector(self.direction):
            raise ValueError(f"ray direction must be a vector (w=0), got {self.direction}")

    def position(self, t):
        """Point at distance t along the ray."""
        return self.origin + self.direction * t

    def transform(self, m):
        """Return a new ray with both origin and direction multiplied by m."""
        return Ray(m @ self.origin, m @ self.direction)
