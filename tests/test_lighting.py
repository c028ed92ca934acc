import math
import pytest
from conftest import assert_color_close, assert_tuple_close
from raytrace_renders.constants import EPSILON
from raytrace_renders.intersections import Intersection, intersections
from raytrace_renders.linalg import color, point, vector
from raytrace_renders.materials import Material, PointLight
from raytrace_renders.patterns import Stripe
from raytrace_renders.rays import Ray
from raytrace_renders.shading import (
    Computations, lighting, prepare_computations, refracted_direction, refractive_indices, schlick,
)
from raytrace_renders.shapes import Plane, Sphere, glass_sphere
from raytrace_renders.transforms import scaling, translation

R2 = math.sqrt(2) / 2


@pytest.fixture
def material():
    return Material()


@pytest.fixture
def position():
    return point(0, 0, 0)


class TestMaterial:
    def test_defaults(self, material):
        assert_color_close(material.color, color(1, 1, 1))
        assert material.ambient == 0.1
        assert material.diffuse == 0.9
        assert material.specular == 0.9
        assert material.shininess == 200.0
        assert material.reflective == 0.0
        assert material.transparency == 0.0
        assert material.refractive_index == 1.0
        assert material.pattern is None

    def test_negative_weights_rejected(self):
        with pytest.raises(ValueError):
            Material(ambient=-0.1)
        with pytest.raises(ValueError):
            Material(refractive_index=0.0)

    def test_color_must_have_three_channels(self):
        with pytest.raises(ValueError):
            Material(color=[1, 0, 0, 1])

    def test_equality(self):
        assert Material() == Material()
        assert Material(diffuse=0.5) != Material()


class TestPhong:
    @pytest.mark.parametrize("eyev, light_pos, expected", [
        (vector(0, 0, -1), point(0, 0, -10), 1.9),
        (vector(0, R2, -R2), point(0, 0, -10), 1.0),
        (vector(0, 0, -1), point(0, 10, -10), 0.7364),
        (vector(0, -R2, -R2), point(0, 10, -10), 1.6364),
        (vector(0, 0, -1), point(0, 0, 10), 0.1),
    ])
    def test_lighting(self, material, position, eyev, light_pos, expected):
        light = PointLight(light_pos, color(1, 1, 1))
        result = lighting(material, light, position, eyev, vector(0, 0, -1))
        assert_color_close(result, color(expected, expected, expected))

    def test_surface_in_shadow_gets_ambient_only(self, material, position):
        light = PointLight(point(0, 0, -10), color(1, 1, 1))
        result = lighting(material, light, position, vector(0, 0, -1), vector(0, 0, -1), in_shadow=True)
        assert_color_close(result, color(0.1, 0.1, 0.1))

    def test_lighting_with_pattern(self):
        m = Material(pattern=Stripe(color(1, 1, 1), color(0, 0, 0)), ambient=1, diffuse=0, specular=0)
        light = PointLight(point(0, 0, -10), color(1, 1, 1))
        eyev = vector(0, 0, -1)
        normalv = vector(0, 0, -1)
        shape = Sphere()
        assert_color_close(lighting(m, light, point(0.9, 0, 0), eyev, normalv, False, shape), color(1, 1, 1))
        assert_color_close(lighting(m, light, point(1.1, 0, 0), eyev, normalv, False, shape), color(0, 0, 0))

    def test_light_intensity_scales_result(self, material, position):
        light = PointLight(point(0, 0, -10), color(0.5, 0.5, 0.5))
        result = lighting(material, light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert_color_close(result, color(0.95, 0.95, 0.95))


class TestComputations:
    def test_precomputing_state(self):
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        shape = Sphere()
        comps = prepare_computations(Intersection(4, shape), r)
        assert comps.t == 4
        assert comps.object is shape
        assert_tuple_close(comps.point, point(0, 0, -1))
        assert_tuple_close(comps.eyev, vector(0, 0, -1))
        assert_tuple_close(comps.normalv, vector(0, 0, -1))
        assert comps.inside is False

    def test_hit_from_inside(self):
        r = Ray(point(0, 0, 0), vector(0, 0, 1))
        comps = prepare_computations(Intersection(1, Sphere()), r)
        assert_tuple_close(comps.point, point(0, 0, 1))
        assert_tuple_close(comps.eyev, vector(0, 0, -1))
        assert comps.inside is True
        assert_tuple_close(comps.normalv, vector(0, 0, -1))

    def test_over_point_lifts_off_surface(self):
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        shape = Sphere(transform=translation(0, 0, 1))
        comps = prepare_computations(Intersection(5, shape), r)
        assert comps.over_point[2] < -EPSILON / 2
        assert comps.point[2] > comps.over_point[2]

    def test_under_point_sinks_below_surface(self):
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        shape = glass_sphere(transform=translation(0, 0, 1))
        i = Intersection(5, shape)
        comps = prepare_computations(i, r, intersections(i))
        assert comps.under_point[2] > EPSILON / 2
        assert comps.point[2] < comps.under_point[2]

    def test_offset_follows_epsilon_argument(self):
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        comps = prepare_computations(Intersection(4, Sphere()), r, epsilon=0.01)
        assert comps.over_point[2] == pytest.approx(-1.01)
        assert comps.under_point[2] == pytest.approx(-0.99)

    def test_reflection_vector(self):
        shape = Plane()
        r = Ray(point(0, 1, -1), vector(0, -R2, R2))
        comps = prepare_computations(Intersection(math.sqrt(2), shape), r)
        assert_tuple_close(comps.reflectv, vector(0, R2, R2))

    def test_hit_must_be_an_intersection(self):
        with pytest.raises(TypeError):
            prepare_computations(4.0, Ray(point(0, 0, -5), vector(0, 0, 1)))

    def test_computations_validate_fields(self):
        p = point(0, 0, 0)
        v = vector(0, 0, 1)
        with pytest.raises(ValueError):
            Computations(1.0, Sphere(), p, v, v, False, p, p, v, n1=0.0, n2=1.0)
        with pytest.raises(ValueError):
            Computations(1.0, Sphere(), p[:3], v, v, False, p, p, v)


class TestRefraction:
    @pytest.fixture
    def nested_glass(self):
        a = glass_sphere(transform=scaling(2, 2, 2), refractive_index=1.5)
        b = glass_sphere(transform=translation(0, 0, -0.25), refractive_index=2.0)
        c = glass_sphere(transform=translation(0, 0, 0.25), refractive_index=2.5)
        xs = intersections(Intersection(2, a), Intersection(2.75, b), Intersection(3.25, c),
                           Intersection(4.75, b), Intersection(5.25, c), Intersection(6, a))
        return xs

    @pytest.mark.parametrize("index, n1, n2", [
        (0, 1.0, 1.5),
        (1, 1.5, 2.0),
        (2, 2.0, 2.5),
        (3, 2.5, 2.5),
        (4, 2.5, 1.5),
        (5, 1.5, 1.0),
    ])
    def test_n1_n2_at_each_boundary(self, nested_glass, index, n1, n2):
        r = Ray(point(0, 0, -4), vector(0, 0, 1))
        comps = prepare_computations(nested_glass[index], r, nested_glass)
        assert comps.n1 == pytest.approx(n1)
        assert comps.n2 == pytest.approx(n2)

    def test_default_material_supplies_refractive_index(self):
        s = Sphere()
        xs = intersections(Intersection(4, s), Intersection(6, s))
        assert refractive_indices(xs[0], xs, Material(refractive_index=1.33)) == pytest.approx((1.0, 1.33))
        assert refractive_indices(xs[0], xs) == pytest.approx((1.0, 1.0))

    def test_total_internal_reflection_has_no_direction(self):
        shape = glass_sphere()
        r = Ray(point(0, 0, R2), vector(0, 1, 0))
        xs = intersections(Intersection(-R2, shape), Intersection(R2, shape))
        comps = prepare_computations(xs[1], r, xs)
        assert refracted_direction(comps) is None

    def test_refraction_bends_towards_normal(self):
        shape = glass_sphere()
        r = Ray(point(0, 0.5, -5), vector(0, 0, 1))
        xs = shape.intersect(r)
        comps = prepare_computations(xs[0], r, xs)
        d = refracted_direction(comps)
        assert d[3] == 0.0
        assert d[1] < 0


class TestSchlick:
    def test_under_total_internal_reflection(self):
        shape = glass_sphere()
        r = Ray(point(0, 0, R2), vector(0, 1, 0))
        xs = intersections(Intersection(-R2, shape), Intersection(R2, shape))
        comps = prepare_computations(xs[1], r, xs)
        assert schlick(comps) == pytest.approx(1.0)

    def test_perpendicular_viewing_angle(self):
        shape = glass_sphere()
        r = Ray(point(0, 0, 0), vector(0, 1, 0))
        xs = intersections(Intersection(-1, shape), Intersection(1, shape))
        comps = prepare_computations(xs[1], r, xs)
        assert schlick(comps) == pytest.approx(0.04)

    def test_small_angle_with_n2_greater_than_n1(self):
        shape = glass_sphere()
        r = Ray(point(0, 0.99, -2), vector(0, 0, 1))
        xs = intersections(Intersection(1.8589, shape))
        comps = prepare_computations(xs[0], r, xs)
        assert schlick(comps) == pytest.approx(0.48873, abs=1e-4)
