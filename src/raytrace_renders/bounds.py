"""
Axis-aligned bounding boxes used to cull composite shapes.
"""
import math
import numpy as np
from raytrace_renders.linalg import point

INF = math.inf


class BoundingBox:
    """
    An axis-aligned box given by its minimum and maximum corners.

    An empty box (the default) contains nothing; infinite extents are allowed
    for planes and open cylinders/cones.
    """

    def __init__(self, minimum=None, maximum=None):
        self.minimum = np.array([INF, INF, INF]) if minimum is None else np.array(minimum[:3], dtype=np.float64)
        self.maximum = np.array([-INF, -INF, -INF]) if maximum is None else np.array(maximum[:3], dtype=np.float64)

    def __repr__(self):
        return f"BoundingBox(minimum={self.minimum.tolist()}, maximum={self.maximum.tolist()})"

    @classmethod
    def from_points(cls, points):
        box = cls()
        for p in points:
            box.add_point(p)
        return box

    @property
    def is_empty(self):
        return bool(np.any(self.minimum > self.maximum))

    @property
    def is_finite(self):
        return bool(np.all(np.isfinite(self.minimum)) and np.all(np.isfinite(self.maximum)))

    def add_point(self, p):
        self.minimum = np.minimum(self.minimum, p[:3])
        self.maximum = np.maximum(self.maximum, p[:3])

    def merge(self, other):
        """Grow this box to enclose other."""
        if other.is_empty:
            return
        self.minimum = np.minimum(self.minimum, other.minimum)
        self.maximum = np.maximum(self.maximum, other.maximum)

    def contains_point(self, p):
        return bool(np.all(self.minimum <= p[:3]) and np.all(p[:3] <= self.maximum))

    def contains_box(self, other):
        return self.contains_point(other.minimum) and self.contains_point(other.maximum)

    def corners(self):
        xs = (self.minimum[0], self.maximum[0])
        ys = (self.minimum[1], self.maximum[1])
        zs = (self.minimum[2], self.maximum[2])
        return [point(x, y, z) for x in xs for y in ys for z in zs]

    def transform(self, m):
        """
        Bounding box of this box after applying m.

        Unbounded boxes stay unbounded: their transformed corners would be
        undefined (inf * 0).
        """
        if self.is_empty:
            return BoundingBox()
        if not self.is_finite:
            return BoundingBox([-INF, -INF, -INF], [INF, INF, INF])
        return BoundingBox.from_points(m @ c for c in self.corners())

    def intersects(self, ray):
        """
        Slab test of a ray against the box.

        Args:
            ray: Ray in the same coordinate space as the box

        Returns:
            bool: True when the ray's supporting line crosses the box
        """
        if self.is_empty:
            return False

        tmin, tmax = -INF, INF
        for axis in range(3):
            lo, hi = self.minimum[axis], self.maximum[axis]
            origin, direction = ray.origin[axis], ray.direction[axis]
            if direction != 0.0:
                t0 = (lo - origin) / direction
                t1 = (hi - origin) / direction
                if t0 > t1:
                    t0, t1 = t1, t0
            elif lo <= origin <= hi:
                t0, t1 = -INF, INF
            else:
                return False
            tmin = max(tmin, t0)
            tmax = min(tmax, t1)
            if tmin > tmax:
                return False
        return True
