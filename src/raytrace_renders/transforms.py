"""
Factory constructors for affine transforms.
"""
import numpy as np
from raytrace_renders.linalg import cross, identity, matrix, normalize


def translation(x, y, z):
    m = identity()
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return m


def scaling(x, y, z):
    m = identity()
    m[0, 0] = x
    m[1, 1] = y
    m[2, 2] = z
    return m


def rotation_x(radians):
    c, s = np.cos(radians), np.sin(radians)
    return matrix([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, c, -s, 0.0],
        [0.0, s, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotation_y(radians):
    c, s = np.cos(radians), np.sin(radians)
    return matrix([
        [c, 0.0, s, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [-s, 0.0, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotation_z(radians):
    c, s = np.cos(radians), np.sin(radians)
    return matrix([
        [c, -s, 0.0, 0.0],
        [s, c, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotation(axis, radians):
    """Rotation about 'x', 'y' or 'z'."""
    try:
        factory = {"x": rotation_x, "y": rotation_y, "z": rotation_z}[axis.lower()]
    except KeyError:
        raise ValueError(f"Unknown rotation axis {axis!r}; expected 'x', 'y' or 'z'") from None
    return factory(radians)


def shearing(xy, xz, yx, yz, zx, zy):
    """Shear each axis in proportion to the other two."""
    return matrix([
        [1.0, xy, xz, 0.0],
        [yx, 1.0, yz, 0.0],
        [zx, zy, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def chain(*transforms):
    """
    Compose transforms in application order.

    chain(A, B, C) applies A first, then B, then C, i.e. returns C @ B @ A.
    """
    result = identity()
    for t in transforms:
        result = t @ result
    return result


def view_transform(from_point, to_point, up):
    """
    Orientation matrix that moves the world so the eye sits at the origin
    looking down -z.

    Args:
        from_point: Eye position (point)
        to_point: Point being looked at
        up: Approximate up vector

    Returns:
        (4, 4) world-to-camera transform
    """
    forward = normalize(to_point - from_point)
    left = cross(forward, normalize(up))
    true_up = cross(left, forward)
    orientation = matrix([
        [left[0], left[1], left[2], 0.0],
        [true_up[0], true_up[1], true_up[2], 0.0],
        [-forward[0], -forward[1], -forward[2], 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])
    return orientation @ translation(-from_point[0], -from_point[1], -from_point[2])
