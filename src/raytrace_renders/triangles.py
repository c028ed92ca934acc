"""
Flat and smooth triangles.

Intersection uses the Moller-Trumbore algorithm and records the barycentric
u/v of the hit so smooth triangles can interpolate their vertex normals later.
"""
import numpy as np
from raytrace_renders import constants
from raytrace_renders.bounds import BoundingBox
from raytrace_renders.intersections import Intersection
from raytrace_renders.linalg import cross, dot, normalize
from raytrace_renders.shapes import Shape


class Triangle(Shape):
    """
    A flat triangle given by three object-space points.

    Raises:
        DegenerateVectorError: If the points are collinear
    """

    def __init__(self, p1, p2, p3, transform=None, material=None):
        self.p1 = np.asarray(p1, dtype=np.float64)
        self.p2 = np.asarray(p2, dtype=np.float64)
        self.p3 = np.asarray(p3, dtype=np.float64)
        self.e1 = self.p2 - self.p1
        self.e2 = self.p3 - self.p1
        self.normal = normalize(cross(self.e2, self.e1))
        super().__init__(transform=transform, material=material)

    def local_intersect(self, local_ray):
        dir_cross_e2 = cross(local_ray.direction, self.e2)
        det = dot(self.e1, dir_cross_e2)
        if abs(det) < constants.EPSILON:
            return []

        f = 1.0 / det
        p1_to_origin = local_ray.origin - self.p1
        u = f * dot(p1_to_origin, dir_cross_e2)
        if u < 0.0 or u > 1.0:
            return []

        origin_cross_e1 = cross(p1_to_origin, self.e1)
        v = f * dot(local_ray.direction, origin_cross_e1)
        if v < 0.0 or u + v > 1.0:
            return []

        t = f * dot(self.e2, origin_cross_e1)
        return [Intersection(t, self, u, v)]

    def local_normal_at(self, local_point, hit=None):
        return self.normal

    def bounds(self):
        return BoundingBox.from_points((self.p1, self.p2, self.p3))


class SmoothTriangle(Triangle):
    """A triangle whose normal is interpolated from per-vertex normals."""

    def __init__(self, p1, p2, p3, n1, n2, n3, transform=None, material=None):
        self.n1 = np.asarray(n1, dtype=np.float64)
        self.n2 = np.asarray(n2, dtype=np.float64)
        self.n3 = np.asarray(n3, dtype=np.float64)
        super().__init__(p1, p2, p3, transform=transform, material=material)

    def local_normal_at(self, local_point, hit=None):
        if hit is None or hit.u is None or hit.v is None:
            return self.normal
        return self.n2 * hit.u + self.n3 * hit.v + self.n1 * (1.0 - hit.u - hit.v)
