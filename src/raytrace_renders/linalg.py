"""
Linear algebra primitives for the ray tracer.

Tuples are numpy arrays of shape (4,): w=1.0 marks a point, w=0.0 a vector.
Colors are numpy arrays of shape (3,). Matrices are numpy arrays of shape (4, 4).
"""
import numpy as np
from raytrace_renders import constants
from raytrace_renders.errors import DegenerateVectorError, SingularMatrixError


def point(x, y, z):
    """Build a point (w=1)."""
    return np.array([x, y, z, 1.0], dtype=np.float64)


def vector(x, y, z):
    """Build a vector (w=0)."""
    return np.array([x, y, z, 0.0], dtype=np.float64)


def color(r, g, b):
    """Build an RGB color. Channels are unclamped floats."""
    return np.array([r, g, b], dtype=np.float64)


def is_point(t):
    return abs(t[3] - 1.0) < constants.EPSILON


def is_vector(t):
    return abs(t[3]) < constants.EPSILON


def approx_equal(a, b, epsilon=constants.EPSILON):
    """
    Compare scalars or arrays within an absolute tolerance.

    Args:
        a, b: Scalars or arrays of matching shape
        epsilon: Absolute tolerance

    Returns:
        bool: True when every component differs by less than epsilon
    """
    return bool(np.all(np.abs(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)) < epsilon))


def magnitude(v):
    return float(np.sqrt(np.dot(v, v)))


def normalize(v):
    """
    Scale a vector to unit length.

    Raises:
        DegenerateVectorError: If the vector has zero magnitude
    """
    mag = magnitude(v)
    if mag < constants.EPSILON * constants.EPSILON:
        raise DegenerateVectorError(f"Cannot normalize zero-length vector {v}")
    return v / mag


def dot(a, b):
    return float(np.dot(a, b))


def cross(a, b):
    """
    Cross product of two vectors.

    Raises:
        TypeError: If either operand is a point
    """
    if not (is_vector(a) and is_vector(b)):
        raise TypeError("Cross product is only defined for vectors (w=0)")
    xyz = np.cross(a[:3], b[:3])
    return vector(xyz[0], xyz[1], xyz[2])


def reflect(v, n):
    """Reflect vector v about normal n."""
    return v - n * (2.0 * dot(v, n))


def identity():
    return np.identity(4, dtype=np.float64)


def matrix(rows):
    """Build a 4x4 matrix from nested rows."""
    m = np.array(rows, dtype=np.float64)
    if m.shape != (4, 4):
        raise ValueError(f"matrix must be 4x4, got shape {m.shape}")
    return m


def transpose(m):
    return np.ascontiguousarray(m.T)


def determinant(m):
    return float(np.linalg.det(m))


def inverse(m, max_condition=None):
    """
    Invert a 4x4 matrix.

    Args:
        m: (4, 4) matrix
        max_condition: Condition number above which the matrix counts as
            singular; defaults to 1 / machine epsilon. The test is relative to
            the matrix scale, so small but well-formed scalings stay invertible.

    Returns:
        (4, 4) inverse matrix

    Raises:
        SingularMatrixError: If the matrix has no numerically stable inverse
    """
    if max_condition is None:
        max_condition = 1.0 / np.finfo(np.float64).eps
    det = determinant(m)
    with np.errstate(divide="ignore", invalid="ignore"):
        cond = np.linalg.cond(m)
    if det == 0.0 or not np.isfinite(cond) or cond > max_condition:
        raise SingularMatrixError(f"Matrix is not invertible (determinant={det:.3g}, condition={cond:.3g})")
    return np.linalg.inv(m)
