"""
Composite shapes: groups and constructive solid geometry.

Composites own their children exclusively. Each child keeps only a weak
back-reference to its parent, used to chain coordinate transforms; ownership
flows parent to child.
"""
import weakref
from enum import Enum
from operator import attrgetter
from raytrace_renders.bounds import BoundingBox
from raytrace_renders.shapes import Shape


class CompositeShape(Shape):
    """
    Shared child ownership, bounds caching and culling for Group and CSG.

    Composites carry no material of their own; the leaf that was hit supplies it.
    """

    def __init__(self, transform=None):
        self._bounds = None
        super().__init__(transform=transform, material=None)

    @property
    def children(self):
        raise NotImplementedError

    def _adopt(self, shape):
        if shape.parent is not None:
            raise ValueError(f"{type(shape).__name__} already belongs to a {type(shape.parent).__name__}")
        if shape.includes(self):
            raise ValueError("A composite shape cannot contain itself")
        shape._set_parent(self)

    def _invalidate_bounds(self):
        self._bounds = None
        super()._invalidate_bounds()

    def __setstate__(self, state):
        self.__dict__.update(state)
        for child in self.children:
            child._parent = weakref.ref(self)

    def bounds(self):
        if self._bounds is None:
            box = BoundingBox()
            for child in self.children:
                box.merge(child.parent_space_bounds())
            self._bounds = box
        return self._bounds

    def local_normal_at(self, local_point, hit=None):
        raise TypeError(f"{type(self).__name__} has no surface; normals are computed on the leaf that was hit")

    def includes(self, shape):
        return shape is self or any(child.includes(shape) for child in self.children)


class Group(CompositeShape):
    """An ordered collection of shapes sharing one transform."""

    def __init__(self, children=(), transform=None):
        self._children = []
        super().__init__(transform=transform)
        for child in children:
            self.add_child(child)

    @property
    def children(self):
        return tuple(self._children)

    def add_child(self, shape):
        self._adopt(shape)
        self._children.append(shape)
        self._invalidate_bounds()
        return shape

    def local_intersect(self, local_ray):
        if not self._children or not self.bounds().intersects(local_ray):
            return []
        xs = []
        for child in self._children:
            xs.extend(child.intersect(local_ray))
        xs.sort(key=attrgetter("t"))
        return xs


class CsgOperation(Enum):
    UNION = "union"
    INTERSECTION = "intersection"
    DIFFERENCE = "difference"


def intersection_allowed(operation, left_hit, in_left, in_right):
    """
    CSG truth table.

    Args:
        operation: CsgOperation
        left_hit: True if the intersection is on the left operand
        in_left: True if the ray is currently inside the left operand
        in_right: True if the ray is currently inside the right operand

    Returns:
        bool: Whether the intersection lies on the combined surface
    """
    if operation is CsgOperation.UNION:
        return (left_hit and not in_right) or (not left_hit and not in_left)
    if operation is CsgOperation.INTERSECTION:
        return (left_hit and in_right) or (not left_hit and in_left)
    if operation is CsgOperation.DIFFERENCE:
        return (left_hit and not in_right) or (not left_hit and in_left)
    raise ValueError(f"Unknown CSG operation {operation!r}")


class CSG(CompositeShape):
    """Boolean combination of a left and a right shape."""

    def __init__(self, operation, left, right, transform=None):
        self.operation = CsgOperation(operation)
        self.left = None
        self.right = None
        super().__init__(transform=transform)
        self._adopt(left)
        self.left = left
        self._adopt(right)
        self.right = right
        self._invalidate_bounds()

    @property
    def children(self):
        return tuple(child for child in (self.left, self.right) if child is not None)

    def filter_intersections(self, xs):
        """
        Keep only the intersections on the combined surface.

        Args:
            xs: Intersections with either operand, sorted by t

        Returns:
            list: The surviving intersections, in order
        """
        in_left = False
        in_right = False
        result = []
        for x in xs:
            left_hit = self.left.includes(x.object)
            if intersection_allowed(self.operation, left_hit, in_left, in_right):
                result.append(x)
            if left_hit:
                in_left = not in_left
            else:
                in_right = not in_right
        return result

    def local_intersect(self, local_ray):
        if not self.bounds().intersects(local_ray):
            return []
        xs = self.left.intersect(local_ray) + self.right.intersect(local_ray)
        xs.sort(key=attrgetter("t"))
        return self.filter_intersections(xs)
