"""
Local illumination and per-hit shading state.

prepare_computations turns a raw Intersection into everything the shading
engine needs (hit point, eye and normal vectors, offset points, refractive
indices on either side of the surface). It is recomputed for every hit rather
than cached on the intersection, so recursive rays that strike the same shape
never see stale geometry.
"""
import math
from dataclasses import dataclass
import numpy as np
from raytrace_renders import constants
from raytrace_renders.intersections import Intersection
from raytrace_renders.linalg import dot, normalize, reflect


@dataclass(frozen=True, eq=False)
class Computations:
    """
    Precomputed shading state for one hit.

    Attributes:
        t: Distance along the ray
        object: Leaf shape that was hit
        point: World-space hit point
        eyev: Unit vector from the hit point toward the eye
        normalv: Unit surface normal, flipped to face the eye
        inside: True if the ray started inside the object
        over_point: Hit point nudged along the normal (shadow/reflection origin)
        under_point: Hit point nudged against the normal (refraction origin)
        reflectv: Reflected ray direction
        n1, n2: Refractive indices of the media the ray leaves and enters
    """
    t: float
    object: object
    point: np.ndarray
    eyev: np.ndarray
    normalv: np.ndarray
    inside: bool
    over_point: np.ndarray
    under_point: np.ndarray
    reflectv: np.ndarray
    n1: float = constants.VACUUM
    n2: float = constants.VACUUM

    def __post_init__(self):
        for name in ("point", "eyev", "normalv", "over_point", "under_point", "reflectv"):
            value = getattr(self, name)
            if value.shape != (4,):
                raise ValueError(f"{name} must be a (4,) tuple, got shape {value.shape}")
        if self.n1 <= 0 or self.n2 <= 0:
            raise ValueError(f"refractive indices must be positive, got n1={self.n1}, n2={self.n2}")


def _material_of(shape, default_material):
    return shape.material if shape.material is not None else default_material


def refractive_indices(hit, xs, default_material=None):
    """
    Refractive indices on either side of the surface at hit.

    Walks the sorted intersection list keeping the stack of objects the ray is
    currently inside.

    Args:
        hit: The Intersection being shaded
        xs: All intersections along the ray, sorted by t
        default_material: Material for shapes whose material is None

    Returns:
        tuple: (n1, n2)
    """
    def index_of(shape):
        material = _material_of(shape, default_material)
        return material.refractive_index if material is not None else constants.VACUUM

    containers = []
    n1 = n2 = constants.VACUUM
    for x in xs:
        if x is hit:
            n1 = index_of(containers[-1]) if containers else constants.VACUUM

        if x.object in containers:
            containers.remove(x.object)
        else:
            containers.append(x.object)

        if x is hit:
            n2 = index_of(containers[-1]) if containers else constants.VACUUM
            break
    return n1, n2


def prepare_computations(hit, ray, xs=None, epsilon=constants.EPSILON, default_material=None):
    """
    Build the shading state for a hit.

    Args:
        hit: Intersection to shade
        ray: The ray that produced it
        xs: All intersections along the ray (needed for refraction); defaults to [hit]
        epsilon: Offset applied to over_point/under_point
        default_material: Material for shapes whose material is None

    Returns:
        Computations
    """
    if not isinstance(hit, Intersection):
        raise TypeError(f"hit must be an Intersection, got {type(hit).__name__}")

    shape = hit.object
    p = ray.position(hit.t)
    eyev = -ray.direction
    normalv = shape.normal_at(p, hit)
    inside = dot(normalv, eyev) < 0
    if inside:
        normalv = -normalv

    n1, n2 = refractive_indices(hit, xs if xs is not None else [hit], default_material)
    return Computations(
        t=hit.t,
        object=shape,
        point=p,
        eyev=eyev,
        normalv=normalv,
        inside=inside,
        over_point=p + normalv * epsilon,
        under_point=p - normalv * epsilon,
        reflectv=reflect(ray.direction, normalv),
        n1=n1,
        n2=n2,
    )


def lighting(material, light, point, eyev, normalv, in_shadow=False, shape=None):
    """
    Phong reflection model for a single light.

    Args:
        material: Surface Material
        light: PointLight
        point: World-space point being lit
        eyev: Unit vector toward the eye
        normalv: Unit surface normal
        in_shadow: If True only the ambient term contributes
        shape: Shape owning the surface, required when the material has a pattern

    Returns:
        (3,) color
    """
    if material.pattern is None:
        surface = material.color
    elif shape is not None:
        surface = material.color_at(shape, point)
    else:
        surface = material.pattern.pattern_at(material.pattern.inverse @ point)

    effective_color = surface * light.intensity
    ambient = effective_color * material.ambient
    if in_shadow:
        return ambient

    lightv = normalize(light.position - point)
    light_dot_normal = dot(lightv, normalv)
    if light_dot_normal < 0:
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal
    reflectv = reflect(-lightv, normalv)
    reflect_dot_eye = dot(reflectv, eyev)
    if reflect_dot_eye <= 0:
        return ambient + diffuse

    factor = math.pow(reflect_dot_eye, material.shininess)
    specular = light.intensity * material.specular * factor
    return ambient + diffuse + specular


def refracted_direction(comps):
    """
    Direction of the refracted ray by Snell's law.

    Returns:
        The refracted direction vector, or None on total internal reflection
    """
    n_ratio = comps.n1 / comps.n2
    cos_i = dot(comps.eyev, comps.normalv)
    sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
    if sin2_t > 1.0:
        return None
    cos_t = math.sqrt(1.0 - sin2_t)
    return comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio


def schlick(comps):
    """
    Schlick approximation of the Fresnel reflectance.

    Returns:
        float: Fraction of light reflected, 1.0 under total internal reflection
    """
    cos = dot(comps.eyev, comps.normalv)
    if comps.n1 > comps.n2:
        n = comps.n1 / comps.n2
        sin2_t = n * n * (1.0 - cos * cos)
        if sin2_t > 1.0:
            return 1.0
        cos = math.sqrt(1.0 - sin2_t)

    r0 = ((comps.n1 - comps.n2) / (comps.n1 + comps.n2)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cos) ** 5

