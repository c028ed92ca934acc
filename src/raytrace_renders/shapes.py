"""
Shape hierarchy: the abstract Shape and the closed-form primitives.

Every shape keeps its object-to-parent transform together with the cached
inverse and inverse-transpose. Incoming rays are moved into object space once
per call, intersected in closed form, and normals are carried back out
through every ancestor group.
"""
import math
import weakref
import numpy as np
from raytrace_renders import constants
from raytrace_renders.bounds import BoundingBox
from raytrace_renders.intersections import Intersection, solve_quadratic
from raytrace_renders.linalg import identity, inverse, normalize, point, transpose, vector
from raytrace_renders.materials import Material

INF = math.inf


class Shape:
    """
    Base class for everything a ray can be traced against.

    Subclasses implement local_intersect and local_normal_at in object space;
    intersect and normal_at handle the coordinate transforms.

    Attributes:
        material: Material, or None to fall back to the world's default material
        parent: Owning group (non-owning back-reference), or None
    """

    def __init__(self, transform=None, material=None):
        self._parent = None
        self.material = material
        self.transform = identity() if transform is None else transform

    @property
    def transform(self):
        return self._transform

    @transform.setter
    def transform(self, m):
        m = np.asarray(m, dtype=np.float64)
        if m.shape != (4, 4):
            raise ValueError(f"transform must be a (4, 4) matrix, got shape {m.shape}")
        # Inverse computed eagerly so a singular transform fails at assembly time
        inv = inverse(m)
        self._transform = m
        self._inverse = inv
        self._inverse_transpose = transpose(inv)
        self._invalidate_bounds()

    @property
    def inverse(self):
        return self._inverse

    @property
    def parent(self):
        return self._parent() if self._parent is not None else None

    def _set_parent(self, group):
        self._parent = weakref.ref(group) if group is not None else None

    def _invalidate_bounds(self):
        parent = self.parent
        if parent is not None:
            parent._invalidate_bounds()

    def __getstate__(self):
        # Weak references do not pickle; composites relink children on load
        state = self.__dict__.copy()
        state["_parent"] = None
        return state

    def intersect(self, ray):
        """Intersect a ray given in the parent's coordinate space."""
        return self.local_intersect(ray.transform(self._inverse))

    def local_intersect(self, local_ray):
        raise NotImplementedError

    def normal_at(self, world_point, hit=None):
        """
        World-space unit normal at a world-space point on the surface.

        Args:
            world_point: Point on the surface
            hit: The Intersection that produced the point (carries u/v for
                smooth triangles)
        """
        local_point = self.world_to_object(world_point)
        local_normal = self.local_normal_at(local_point, hit)
        return self.normal_to_world(local_normal)

    def local_normal_at(self, local_point, hit=None):
        raise NotImplementedError

    def world_to_object(self, world_point):
        """Move a world-space point into this shape's object space."""
        parent = self.parent
        if parent is not None:
            world_point = parent.world_to_object(world_point)
        return self._inverse @ world_point

    def normal_to_world(self, normal):
        """Carry an object-space normal back out to world space."""
        normal = self._inverse_transpose @ normal
        normal[3] = 0.0
        normal = normalize(normal)
        parent = self.parent
        if parent is not None:
            normal = parent.normal_to_world(normal)
        return normal

    def bounds(self):
        """Object-space bounding box."""
        raise NotImplementedError

    def parent_space_bounds(self):
        return self.bounds().transform(self._transform)

    def includes(self, shape):
        return shape is self


class Sphere(Shape):
    """Unit sphere centred on the object-space origin."""

    def local_intersect(self, local_ray):
        sphere_to_ray = local_ray.origin - point(0.0, 0.0, 0.0)
        direction = local_ray.direction
        a = np.dot(direction, direction)
        b = 2.0 * np.dot(direction, sphere_to_ray)
        c = np.dot(sphere_to_ray, sphere_to_ray) - 1.0

        roots = solve_quadratic(a, b, c)
        if roots is None:
            return []
        t1, t2 = roots
        return [Intersection(t1, self), Intersection(t2, self)]

    def local_normal_at(self, local_point, hit=None):
        return local_point - point(0.0, 0.0, 0.0)

    def bounds(self):
        return BoundingBox(point(-1.0, -1.0, -1.0), point(1.0, 1.0, 1.0))


def glass_sphere(transform=None, refractive_index=constants.GLASS):
    """A sphere with a fully transparent glass material."""
    return Sphere(transform=transform,
                  material=Material(transparency=1.0, refractive_index=refractive_index))


class Plane(Shape):
    """The infinite xz plane (y=0) in object space."""

    def local_intersect(self, local_ray):
        if abs(local_ray.direction[1]) < constants.EPSILON:
            return []
        t = -local_ray.origin[1] / local_ray.direction[1]
        return [Intersection(t, self)]

    def local_normal_at(self, local_point, hit=None):
        return vector(0.0, 1.0, 0.0)

    def bounds(self):
        return BoundingBox(point(-INF, 0.0, -INF), point(INF, 0.0, INF))


def _check_axis(origin, direction, minimum=-1.0, maximum=1.0):
    """Entry/exit distances of a ray against one pair of parallel slab faces."""
    if abs(direction) >= constants.EPSILON:
        tmin = (minimum - origin) / direction
        tmax = (maximum - origin) / direction
    elif minimum <= origin <= maximum:
        return -INF, INF
    else:
        return INF, -INF

    if tmin > tmax:
        tmin, tmax = tmax, tmin
    return tmin, tmax


class Cube(Shape):
    """Axis-aligned cube spanning -1..1 on every axis in object space."""

    def local_intersect(self, local_ray):
        xtmin, xtmax = _check_axis(local_ray.origin[0], local_ray.direction[0])
        ytmin, ytmax = _check_axis(local_ray.origin[1], local_ray.direction[1])
        ztmin, ztmax = _check_axis(local_ray.origin[2], local_ray.direction[2])

        tmin = max(xtmin, ytmin, ztmin)
        tmax = min(xtmax, ytmax, ztmax)
        if tmin > tmax:
            return []
        return [Intersection(tmin, self), Intersection(tmax, self)]

    def local_normal_at(self, local_point, hit=None):
        x, y, z = abs(local_point[0]), abs(local_point[1]), abs(local_point[2])
        maxc = max(x, y, z)
        if maxc == x:
            return vector(local_point[0], 0.0, 0.0)
        if maxc == y:
            return vector(0.0, local_point[1], 0.0)
        return vector(0.0, 0.0, local_point[2])

    def bounds(self):
        return BoundingBox(point(-1.0, -1.0, -1.0), point(1.0, 1.0, 1.0))


class _TruncatedQuadric(Shape):
    """
    Shared truncation and end-cap logic for cylinders and cones about the y axis.

    Attributes:
        minimum, maximum: Truncation limits on y (exclusive)
        closed: Whether the ends are capped
    """

    def __init__(self, minimum=-INF, maximum=INF, closed=False, transform=None, material=None):
        if minimum > maximum:
            raise ValueError(f"minimum ({minimum}) must not exceed maximum ({maximum})")
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self.closed = closed
        super().__init__(transform=transform, material=material)

    def _cap_radius(self, y):
        raise NotImplementedError

    def _wall_coefficients(self, local_ray):
        raise NotImplementedError

    def _intersect_walls(self, local_ray):
        a, b, c = self._wall_coefficients(local_ray)
        if abs(a) < constants.EPSILON:
            # Ray parallel to one of the generating lines: a single wall hit at most
            if abs(b) < constants.EPSILON:
                return []
            candidates = (-c / (2.0 * b),)
        else:
            roots = solve_quadratic(a, b, c)
            if roots is None:
                return []
            candidates = roots

        xs = []
        for t in candidates:
            y = local_ray.origin[1] + t * local_ray.direction[1]
            if self.minimum < y < self.maximum:
                xs.append(Intersection(t, self))
        return xs

    def _check_cap(self, local_ray, t, y):
        x = local_ray.origin[0] + t * local_ray.direction[0]
        z = local_ray.origin[2] + t * local_ray.direction[2]
        radius = self._cap_radius(y)
        return x * x + z * z <= radius * radius

    def _intersect_caps(self, local_ray):
        if not self.closed or abs(local_ray.direction[1]) < constants.EPSILON:
            return []
        xs = []
        for y in (self.minimum, self.maximum):
            if not math.isfinite(y):
                continue
            t = (y - local_ray.origin[1]) / local_ray.direction[1]
            if self._check_cap(local_ray, t, y):
                xs.append(Intersection(t, self))
        return xs

    def local_intersect(self, local_ray):
        xs = self._intersect_walls(local_ray) + self._intersect_caps(local_ray)
        xs.sort(key=lambda x: x.t)
        return xs

    def _cap_normal(self, local_point):
        if not self.closed:
            return None
        x, y, z = local_point[0], local_point[1], local_point[2]
        dist = x * x + z * z
        if y >= self.maximum - constants.EPSILON and dist < self._cap_radius(self.maximum) ** 2:
            return vector(0.0, 1.0, 0.0)
        if y <= self.minimum + constants.EPSILON and dist < self._cap_radius(self.minimum) ** 2:
            return vector(0.0, -1.0, 0.0)
        return None


class Cylinder(_TruncatedQuadric):
    """Unit-radius cylinder about the y axis, optionally truncated and capped."""

    def _cap_radius(self, y):
        return 1.0

    def _wall_coefficients(self, local_ray):
        ox, oz = local_ray.origin[0], local_ray.origin[2]
        dx, dz = local_ray.direction[0], local_ray.direction[2]
        a = dx * dx + dz * dz
        b = 2.0 * (ox * dx + oz * dz)
        c = ox * ox + oz * oz - 1.0
        if abs(a) < constants.EPSILON:
            # Parallel to the axis: walls are never crossed
            return 0.0, 0.0, c
        return a, b, c

    def local_normal_at(self, local_point, hit=None):
        cap = self._cap_normal(local_point)
        if cap is not None:
            return cap
        return vector(local_point[0], 0.0, local_point[2])

    def bounds(self):
        return BoundingBox(point(-1.0, self.minimum, -1.0), point(1.0, self.maximum, 1.0))


class Cone(_TruncatedQuadric):
    """
    Double-napped cone x^2 + z^2 = y^2, optionally truncated and capped.

    The apex normal is undefined on the surface; +y is reported there.
    """

    def _cap_radius(self, y):
        return abs(y)

    def _wall_coefficients(self, local_ray):
        ox, oy, oz = local_ray.origin[0], local_ray.origin[1], local_ray.origin[2]
        dx, dy, dz = local_ray.direction[0], local_ray.direction[1], local_ray.direction[2]
        a = dx * dx - dy * dy + dz * dz
        b = 2.0 * (ox * dx - oy * dy + oz * dz)
        c = ox * ox - oy * oy + oz * oz
        return a, b, c

    def local_normal_at(self, local_point, hit=None):
        cap = self._cap_normal(local_point)
        if cap is not None:
            return cap
        x, y, z = local_point[0], local_point[1], local_point[2]
        ny = math.sqrt(x * x + z * z)
        if ny == 0.0:
            # apex has no tangent plane; fall back to the axis
            return vector(0.0, 1.0, 0.0)
        if y > 0:
            ny = -ny
        return vector(x, ny, z)

    def bounds(self):
        radius = max(abs(self.minimum), abs(self.maximum))
        return BoundingBox(point(-radius, self.minimum, -radius), point(radius, self.maximum, radius))
