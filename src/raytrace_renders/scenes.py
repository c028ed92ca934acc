"""
Prebuilt scenes for the CLI, the viewport and the integration tests.

Each builder returns a World; build_scene pairs it with a Camera placed at the
scene's default viewpoint (or an orbit position around its target).
"""
import math
from raytrace_renders import constants
from raytrace_renders.camera import Camera
from raytrace_renders.composites import CSG, Group
from raytrace_renders.linalg import color, point, vector
from raytrace_renders.materials import Material, PointLight
from raytrace_renders.patterns import Checker, Gradient, Ring, Stripe
from raytrace_renders.shapes import Cone, Cube, Cylinder, Plane, Sphere, glass_sphere
from raytrace_renders.transforms import chain, rotation_x, rotation_y, rotation_z, scaling, translation, view_transform
from raytrace_renders.triangles import SmoothTriangle
from raytrace_renders.world import World, default_world


def demo_scene(config=None):
    """
    Checkered floor, a CSG lens, a glass sphere, a capped cone-on-cylinder
    group and a few patterned solids under two lights.
    """
    world = World(config=config)

    floor = Plane(material=Material(
        pattern=Checker(color(0.9, 0.9, 0.9), color(0.15, 0.15, 0.2)),
        specular=0.0, reflective=0.15))
    world.add_shape(floor)

    backdrop = Plane(
        transform=chain(rotation_x(math.pi / 2), translation(0.0, 0.0, 10.0)),
        material=Material(pattern=Gradient(color(0.2, 0.3, 0.6), color(0.6, 0.3, 0.2),
                                           transform=chain(scaling(20.0, 1.0, 1.0), translation(-10.0, 0.0, 0.0))),
                          specular=0.0))
    world.add_shape(backdrop)

    world.add_shape(glass_sphere(transform=translation(0.0, 1.0, 0.0)))

    # Convex lens: overlap of two large spheres, laid on its side
    lens_material = Material(color=color(0.1, 0.1, 0.1), diffuse=0.1, specular=1.0, shininess=300.0,
                             reflective=0.9, transparency=0.9, refractive_index=constants.GLASS)
    lens = CSG(
        "intersection",
        Sphere(transform=chain(scaling(1.5, 1.5, 1.5), translation(0.0, 0.0, -1.2)), material=lens_material),
        Sphere(transform=chain(scaling(1.5, 1.5, 1.5), translation(0.0, 0.0, 1.2)), material=lens_material),
        transform=chain(rotation_y(math.pi / 5), translation(-2.5, 1.0, 1.5)),
    )
    world.add_shape(lens)

    # Cube with a spherical bite taken out of its top corner
    carved = CSG(
        "difference",
        Cube(material=Material(color=color(0.8, 0.3, 0.2), specular=0.3)),
        Sphere(transform=chain(scaling(1.3, 1.3, 1.3), translation(1.0, 1.0, -1.0)),
               material=Material(color=color(0.9, 0.8, 0.3))),
        transform=chain(scaling(0.7, 0.7, 0.7), rotation_y(-math.pi / 6), translation(2.6, 0.7, 2.5)),
    )
    world.add_shape(carved)

    tower = Group(transform=translation(2.5, 0.0, -0.5))
    tower.add_child(Cylinder(0.0, 1.0, closed=True,
                             transform=scaling(0.5, 1.0, 0.5),
                             material=Material(pattern=Stripe(color(0.3, 0.6, 0.3), color(0.1, 0.3, 0.1),
                                                              transform=chain(scaling(0.1, 1.0, 1.0), rotation_y(0.4))))))
    tower.add_child(Cone(-1.0, 0.0, closed=True,
                         transform=chain(scaling(0.6, 0.8, 0.6), translation(0.0, 1.8, 0.0)),
                         material=Material(color=color(0.9, 0.9, 0.3), reflective=0.2)))
    world.add_shape(tower)

    ringed = Sphere(transform=chain(scaling(0.6, 0.6, 0.6), translation(-1.2, 0.6, -1.5)),
                    material=Material(pattern=Ring(color(0.9, 0.5, 0.1), color(0.95, 0.9, 0.8),
                                                   transform=chain(scaling(0.15, 0.15, 0.15), rotation_x(math.pi / 3)))))
    world.add_shape(ringed)

    facet = SmoothTriangle(
        point(0.0, 0.0, 0.0), point(1.2, 0.0, 0.0), point(0.6, 1.2, 0.0),
        vector(-0.5, 0.0, -1.0), vector(0.5, 0.0, -1.0), vector(0.0, 0.5, -1.0),
        transform=chain(rotation_y(-math.pi / 8), translation(0.8, 0.01, -2.2)),
        material=Material(color=color(0.4, 0.7, 0.9), reflective=0.3))
    world.add_shape(facet)

    world.add_light(PointLight(point(-10.0, 10.0, -10.0), color(0.8, 0.8, 0.8)))
    world.add_light(PointLight(point(6.0, 8.0, -6.0), color(0.3, 0.3, 0.35)))
    return world


def mirror_corridor(config=None):
    """Two parallel mirrors facing each other across a sphere."""
    world = World(config=config)
    mirror = Material(color=color(0.05, 0.05, 0.05), diffuse=0.1, specular=0.9, reflective=0.95)
    world.add_shape(Plane(transform=chain(rotation_z(math.pi / 2), translation(-2.0, 0.0, 0.0)), material=mirror))
    world.add_shape(Plane(transform=chain(rotation_z(math.pi / 2), translation(2.0, 0.0, 0.0)), material=mirror))
    world.add_shape(Plane(transform=translation(0.0, -1.0, 0.0),
                          material=Material(pattern=Checker(color(0.8, 0.8, 0.8), color(0.2, 0.2, 0.2)),
                                            specular=0.0)))
    world.add_shape(Sphere(transform=scaling(0.6, 0.6, 0.6),
                           material=Material(color=color(0.9, 0.2, 0.2), specular=0.6)))
    world.add_light(PointLight(point(0.0, 6.0, -6.0), color(1.0, 1.0, 1.0)))
    return world


# name -> (builder, default eye, look-at target)
SCENES = {
    "default": (default_world, point(0.0, 0.0, -5.0), point(0.0, 0.0, 0.0)),
    "demo": (demo_scene, point(0.0, 3.0, -8.0), point(0.0, 1.0, 0.0)),
    "corridor": (mirror_corridor, point(0.5, 0.8, -6.0), point(0.0, 0.0, 0.0)),
}


def orbit_eye(target, distance, angle, height):
    """
    Eye position circling target.

    Args:
        target: Point to orbit
        distance: Horizontal radius of the orbit
        angle: Azimuth in radians; 0 places the eye on -z of target
        height: Eye height above target
    """
    return point(target[0] - distance * math.sin(angle),
                 target[1] + height,
                 target[2] - distance * math.cos(angle))


def build_scene(name, width, height, field_of_view=math.pi / 3, config=None, eye=None):
    """
    Assemble a named scene and a camera looking at it.

    Args:
        name: Key of SCENES
        width, height: Image size in pixels
        field_of_view: Camera angle of view in radians
        config: RenderConfig shared by world and camera
        eye: Eye position overriding the scene's default viewpoint

    Returns:
        tuple: (Camera, World)
    """
    try:
        builder, default_eye, target = SCENES[name]
    except KeyError:
        raise ValueError(f"Unknown scene {name!r}; choose from {', '.join(SCENES)}") from None
    world = builder(config)
    eye = default_eye if eye is None else eye
    camera = Camera(width, height, field_of_view,
                    view_transform(eye, target, vector(0.0, 1.0, 0.0)), world.config)
    return camera, world
