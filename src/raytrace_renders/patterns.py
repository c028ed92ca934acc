"""
Procedural color patterns.

A pattern lives in its own coordinate space: a world-space point is moved into
the shape's object space (through every ancestor group) and then through the
pattern's own inverse transform before being evaluated.
"""
import math
import numpy as np
from raytrace_renders.linalg import identity, inverse


class Pattern:
    """Base class for patterns. Subclasses implement pattern_at."""

    def __init__(self, transform=None):
        self.transform = identity() if transform is None else transform

    @property
    def transform(self):
        return self._transform

    @transform.setter
    def transform(self, m):
        # Inverse computed eagerly so a singular transform fails at assembly time
        self._inverse = inverse(m)
        self._transform = np.asarray(m, dtype=np.float64)

    @property
    def inverse(self):
        return self._inverse

    def pattern_at(self, pattern_point):
        raise NotImplementedError

    def pattern_at_shape(self, shape, world_point):
        object_point = shape.world_to_object(world_point)
        return self.pattern_at(self._inverse @ object_point)


class Solid(Pattern):
    def __init__(self, color, transform=None):
        super().__init__(transform)
        self.color = np.asarray(color, dtype=np.float64)

    def pattern_at(self, pattern_point):
        return self.color


class Stripe(Pattern):
    """Alternates between a and b on every unit of x."""

    def __init__(self, a, b, transform=None):
        super().__init__(transform)
        self.a = np.asarray(a, dtype=np.float64)
        self.b = np.asarray(b, dtype=np.float64)

    def pattern_at(self, pattern_point):
        return self.a if math.floor(pattern_point[0]) % 2 == 0 else self.b


class Gradient(Pattern):
    """Linear blend from a to b over each unit of x."""

    def __init__(self, a, b, transform=None):
        super().__init__(transform)
        self.a = np.asarray(a, dtype=np.float64)
        self.b = np.asarray(b, dtype=np.float64)

    def pattern_at(self, pattern_point):
        x = pattern_point[0]
        fraction = x - math.floor(x)
        return self.a + (self.b - self.a) * fraction


class Ring(Pattern):
    """Concentric rings in the xz plane."""

    def __init__(self, a, b, transform=None):
        super().__init__(transform)
        self.a = np.asarray(a, dtype=np.float64)
        self.b = np.asarray(b, dtype=np.float64)

    def pattern_at(self, pattern_point):
        distance = math.sqrt(pattern_point[0] ** 2 + pattern_point[2] ** 2)
        return self.a if math.floor(distance) % 2 == 0 else self.b


class Checker(Pattern):
    """3D checkerboard of unit cubes."""

    def __init__(self, a, b, transform=None):
        super().__init__(transform)
        self.a = np.asarray(a, dtype=np.float64)
        self.b = np.asarray(b, dtype=np.float64)

    def pattern_at(self, pattern_point):
        total = math.floor(pattern_point[0]) + math.floor(pattern_point[1]) + math.floor(pattern_point[2])
        return self.a if total % 2 == 0 else self.b
