import math
import numpy as np
import pytest
from raytrace_renders.bounds import BoundingBox
from raytrace_renders.linalg import normalize, point, vector
from raytrace_renders.rays import Ray
from raytrace_renders.shapes import Cube, Plane, Sphere
from raytrace_renders.transforms import chain, rotation_x, rotation_y, scaling, translation


def test_empty_box():
    box = BoundingBox()
    assert box.is_empty
    assert not box.intersects(Ray(point(0, 0, 0), vector(0, 0, 1)))


def test_add_points():
    box = BoundingBox()
    box.add_point(point(-5, 2, 0))
    box.add_point(point(7, 0, -3))
    np.testing.assert_allclose(box.minimum, [-5, 0, -3])
    np.testing.assert_allclose(box.maximum, [7, 2, 0])
    assert not box.is_empty


def test_merge():
    box = BoundingBox(point(-5, -2, 0), point(7, 4, 4))
    box.merge(BoundingBox(point(8, -7, -2), point(14, 2, 8)))
    np.testing.assert_allclose(box.minimum, [-5, -7, -2])
    np.testing.assert_allclose(box.maximum, [14, 4, 8])


def test_merge_with_empty_box_is_noop():
    box = BoundingBox(point(-1, -1, -1), point(1, 1, 1))
    box.merge(BoundingBox())
    np.testing.assert_allclose(box.maximum, [1, 1, 1])


@pytest.mark.parametrize("p, expected", [
    (point(5, -2, 0), True),
    (point(11, 4, 7), True),
    (point(8, 1, 3), True),
    (point(3, 0, 3), False),
    (point(8, -4, 3), False),
    (point(8, 1, -1), False),
    (point(13, 1, 3), False),
    (point(8, 5, 3), False),
    (point(8, 1, 8), False),
])
def test_contains_point(p, expected):
    box = BoundingBox(point(5, -2, 0), point(11, 4, 7))
    assert box.contains_point(p) is expected


@pytest.mark.parametrize("lo, hi, expected", [
    (point(5, -2, 0), point(11, 4, 7), True),
    (point(6, -1, 1), point(10, 3, 6), True),
    (point(4, -3, -1), point(10, 3, 6), False),
    (point(6, -1, 1), point(12, 5, 8), False),
])
def test_contains_box(lo, hi, expected):
    box = BoundingBox(point(5, -2, 0), point(11, 4, 7))
    assert box.contains_box(BoundingBox(lo, hi)) is expected


def test_transform_box():
    box = BoundingBox(point(-1, -1, -1), point(1, 1, 1))
    moved = box.transform(chain(rotation_y(math.pi / 4), rotation_x(math.pi / 4)))
    np.testing.assert_allclose(moved.minimum, [-1.41421, -1.70711, -1.70711], atol=1e-4)
    np.testing.assert_allclose(moved.maximum, [1.41421, 1.70711, 1.70711], atol=1e-4)


def test_transform_unbounded_box_stays_unbounded():
    moved = Plane().bounds().transform(rotation_x(0.3))
    assert not moved.is_finite
    assert moved.contains_point(point(1e9, -1e9, 1e9))


def test_parent_space_bounds():
    s = Sphere(transform=chain(scaling(0.5, 2, 4), translation(1, -3, 5)))
    box = s.parent_space_bounds()
    np.testing.assert_allclose(box.minimum, [0.5, -5, 1])
    np.testing.assert_allclose(box.maximum, [1.5, -1, 9])


def test_primitive_bounds():
    np.testing.assert_allclose(Cube().bounds().minimum, [-1, -1, -1])
    plane = Plane().bounds()
    assert plane.minimum[0] == -math.inf and plane.maximum[2] == math.inf
    assert plane.minimum[1] == 0 and plane.maximum[1] == 0


@pytest.mark.parametrize("origin, direction, expected", [
    (point(5, 0.5, 0), vector(-1, 0, 0), True),
    (point(-5, 0.5, 0), vector(1, 0, 0), True),
    (point(0.5, 5, 0), vector(0, -1, 0), True),
    (point(0.5, -5, 0), vector(0, 1, 0), True),
    (point(0.5, 0, 5), vector(0, 0, -1), True),
    (point(0.5, 0, -5), vector(0, 0, 1), True),
    (point(0, 0.5, 0), vector(0, 0, 1), True),
    (point(-2, 0, 0), vector(2, 4, 6), False),
    (point(0, -2, 0), vector(6, 2, 4), False),
    (point(0, 0, -2), vector(4, 6, 2), False),
    (point(2, 0, 2), vector(0, 0, -1), False),
    (point(0, 2, 2), vector(0, -1, 0), False),
    (point(2, 2, 0), vector(-1, 0, 0), False),
])
def test_ray_against_cubic_box(origin, direction, expected):
    box = BoundingBox(point(-1, -1, -1), point(1, 1, 1))
    assert box.intersects(Ray(origin, normalize(direction))) is expected


@pytest.mark.parametrize("origin, direction, expected", [
    (point(15, 1, 2), vector(-1, 0, 0), True),
    (point(-5, -1, 4), vector(1, 0, 0), True),
    (point(7, 6, 5), vector(0, -1, 0), True),
    (point(9, -5, 6), vector(0, 1, 0), True),
    (point(8, 2, 12), vector(0, 0, -1), True),
    (point(6, 0, -5), vector(0, 0, 1), True),
    (point(8, 1, 3.5), vector(0, 0, 1), True),
    (point(9, -1, -8), vector(2, 4, 6), False),
    (point(8, 3, -4), vector(6, 2, 4), False),
    (point(9, -1, -2), vector(4, 6, 2), False),
    (point(4, 0, 9), vector(0, 0, -1), False),
    (point(8, 6, -1), vector(0, -1, 0), False),
    (point(12, 5, 4), vector(-1, 0, 0), False),
])
def test_ray_against_non_cubic_box(origin, direction, expected):
    box = BoundingBox(point(5, -2, 0), point(11, 4, 7))
    assert box.intersects(Ray(origin, normalize(direction))) is expected
