"""
Scene graph: the shapes and lights a ray is traced against.

The World owns global intersection and shading dispatch. Recursion for
reflected and refracted rays is bounded by an explicit remaining-bounces
counter threaded through color_at/shade_hit.
"""
from operator import attrgetter
import numpy as np
from raytrace_renders.config import RenderConfig
from raytrace_renders.intersections import hit
from raytrace_renders.linalg import color, magnitude, normalize, point
from raytrace_renders.materials import Material, PointLight
from raytrace_renders.rays import Ray
from raytrace_renders.shading import lighting, prepare_computations, refracted_direction, schlick
from raytrace_renders.shapes import Sphere
from raytrace_renders.transforms import scaling


class World:
    """
    A collection of top-level shapes and point lights.

    Args:
        shapes: Top-level shapes; each must not already belong to a group
        lights: PointLight sources
        config: RenderConfig; defaults to RenderConfig()
    """

    def __init__(self, shapes=(), lights=(), config=None):
        self.config = config if config is not None else RenderConfig()
        self._shapes = []
        self.lights = list(lights)
        for shape in shapes:
            self.add_shape(shape)

    @property
    def shapes(self):
        return tuple(self._shapes)

    def add_shape(self, shape):
        if shape.parent is not None:
            raise ValueError(f"{type(shape).__name__} is owned by a group; add the group instead")
        if any(s.includes(shape) for s in self._shapes):
            raise ValueError(f"{type(shape).__name__} is already part of this world")
        self._shapes.append(shape)
        return shape

    def add_light(self, light):
        self.lights.append(light)
        return light

    def material_for(self, shape):
        return shape.material if shape.material is not None else self.config.default_material

    def intersect(self, ray):
        """All intersections of ray with every shape, sorted by t."""
        xs = []
        for shape in self._shapes:
            xs.extend(shape.intersect(ray))
        xs.sort(key=attrgetter("t"))
        return xs

    def is_shadowed(self, p, light):
        """
        True if an object lies strictly between point p and the light.

        Args:
            p: World-space point (normally an over_point)
            light: PointLight
        """
        v = light.position - p
        distance = magnitude(v)
        if distance < self.config.epsilon:
            return False
        ray = Ray(p, normalize(v))
        h = hit(self.intersect(ray))
        return h is not None and bool(h.t < distance)

    def shade_hit(self, comps, remaining=None):
        """
        Color at a prepared hit: direct lighting from every light plus
        reflected and refracted contributions.

        Args:
            comps: Computations from prepare_computations
            remaining: Bounces left for secondary rays; defaults to config.max_bounces
        """
        if remaining is None:
            remaining = self.config.max_bounces
        material = self.material_for(comps.object)

        surface = color(0.0, 0.0, 0.0)
        for light in self.lights:
            shadowed = self.is_shadowed(comps.over_point, light)
            surface = surface + lighting(material, light, comps.over_point, comps.eyev,
                                         comps.normalv, shadowed, comps.object)

        reflected = self.reflected_color(comps, remaining)
        refracted = self.refracted_color(comps, remaining)

        if material.reflective > 0 and material.transparency > 0:
            reflectance = schlick(comps)
            return surface + reflected * reflectance + refracted * (1.0 - reflectance)
        return surface + reflected + refracted

    def color_at(self, ray, remaining=None):
        """
        Trace a ray and return its color.

        Args:
            ray: Ray in world space
            remaining: Trace depth still allowed, counting this ray; defaults to
                config.max_bounces

        Returns:
            (3,) color; black once remaining reaches zero, the background
            color when nothing is hit
        """
        if remaining is None:
            remaining = self.config.max_bounces
        if remaining <= 0:
            return color(0.0, 0.0, 0.0)
        xs = self.intersect(ray)
        h = hit(xs)
        if h is None:
            return self.config.background.copy()
        comps = prepare_computations(h, ray, xs, self.config.epsilon, self.config.default_material)
        return self.shade_hit(comps, remaining)

    def reflected_color(self, comps, remaining):
        """Contribution of the mirror-reflected ray; its trace returns black once no bounces remain."""
        material = self.material_for(comps.object)
        if material.reflective == 0:
            return color(0.0, 0.0, 0.0)
        reflect_ray = Ray(comps.over_point, comps.reflectv)
        return self.color_at(reflect_ray, remaining - 1) * material.reflective

    def refracted_color(self, comps, remaining):
        """Contribution of the refracted ray; black on total internal reflection."""
        material = self.material_for(comps.object)
        if material.transparency == 0:
            return color(0.0, 0.0, 0.0)
        direction = refracted_direction(comps)
        if direction is None:
            return color(0.0, 0.0, 0.0)
        refract_ray = Ray(comps.under_point, direction)
        return self.color_at(refract_ray, remaining - 1) * material.transparency


def default_world(config=None):
    """
    Two concentric spheres lit by a white light at (-10, 10, -10).

    The outer unit sphere is green-tinted; the inner sphere is scaled by 0.5.
    """
    outer = Sphere(material=Material(color=np.array([0.8, 1.0, 0.6]), diffuse=0.7, specular=0.2))
    inner = Sphere(transform=scaling(0.5, 0.5, 0.5), material=Material())
    light = PointLight(point(-10.0, 10.0, -10.0), color(1.0, 1.0, 1.0))
    return World(shapes=[outer, inner], lights=[light], config=config)
