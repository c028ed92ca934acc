"""
Exception taxonomy for the ray tracing kernel.

Geometry and math errors are raised where they are detected. A ray that hits
nothing, total internal reflection and reaching the bounce ceiling are normal
branches of the renderer and never raise.
"""


class RaytraceError(Exception):
    """Base class for errors raised by the renderer."""


class DegenerateVectorError(RaytraceError, ValueError):
    """Normalization of a vector whose magnitude is zero."""


class SingularMatrixError(RaytraceError, ValueError):
    """Inversion of a matrix whose determinant is (near) zero."""
