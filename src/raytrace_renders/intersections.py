"""
Intersection records and hit selection.

Every shape's local_intersect returns a list of Intersection records; the
nearest visible surface along a ray is the record with the smallest
non-negative t.
"""
import math
from dataclasses import dataclass
from operator import attrgetter


@dataclass(frozen=True, eq=False)
class Intersection:
    """
    A hit at distance t along a ray.

    Attributes:
        t: Distance along the ray, in multiples of the ray direction
        object: The leaf shape that was hit
        u, v: Barycentric coordinates (triangles only), used for smooth normals
    """
    t: float
    object: object
    u: float | None = None
    v: float | None = None

    def __post_init__(self):
        object.__setattr__(self, "t", float(self.t))

    def __lt__(self, other):
        return self.t < other.t


def intersections(*xs):
    """Collect intersection records into a list sorted by t."""
    return sorted(xs, key=attrgetter("t"))


def hit(xs):
    """
    Select the visible intersection.

    Args:
        xs: Iterable of Intersection records, in any order

    Returns:
        The Intersection with the smallest non-negative t, or None
    """
    best = None
    for x in xs:
        if x.t >= 0 and (best is None or x.t < best.t):
            best = x
    return best


def solve_quadratic(a, b, c, epsilon=0.0):
    """
    Solve at^2 + bt + c = 0.

    Args:
        a, b, c: Quadratic coefficients

    Returns:
        tuple: (t1, t2) with t1 <= t2, or None if there is no real root or
        the equation is degenerate (|a| <= epsilon)
    """
    if abs(a) <= epsilon:
        return None
    discriminant = b * b - 4.0 * a * c
    if discriminant < 0:
        return None

    sqrt_disc = math.sqrt(discriminant)
    inv_2a = 0.5 / a
    t1 = (-b - sqrt_disc) * inv_2a
    t2 = (-b + sqrt_disc) * inv_2a
    if t1 > t2:
        t1, t2 = t2, t1
    return t1, t2
