"""
Surface materials and light sources.
"""
from dataclasses import dataclass, field
import numpy as np
from raytrace_renders import constants
from raytrace_renders.linalg import color


@dataclass
class Material:
    """
    Phong surface properties plus reflection/refraction parameters.

    Attributes:
        color: Flat surface color (3,), used when no pattern is set
        ambient, diffuse, specular: Phong weights
        shininess: Specular exponent
        reflective: 0.0 (matte) to 1.0 (mirror)
        transparency: 0.0 (opaque) to 1.0 (fully transparent)
        refractive_index: Index of refraction of the medium inside the surface
        pattern: Optional Pattern overriding the flat color
    """
    color: np.ndarray = field(default_factory=lambda: color(*constants.WHITE))
    ambient: float = constants.DEFAULT_AMBIENT
    diffuse: float = constants.DEFAULT_DIFFUSE
    specular: float = constants.DEFAULT_SPECULAR
    shininess: float = constants.DEFAULT_SHININESS
    reflective: float = constants.DEFAULT_REFLECTIVE
    transparency: float = constants.DEFAULT_TRANSPARENCY
    refractive_index: float = constants.VACUUM
    pattern: object = None

    def __post_init__(self):
        self.color = np.asarray(self.color, dtype=np.float64)
        if self.color.shape != (3,):
            raise ValueError(f"color must be (3,) array, got shape {self.color.shape}")
        for name in ("ambient", "diffuse", "specular", "reflective", "transparency"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.refractive_index <= 0:
            raise ValueError(f"refractive_index must be positive, got {self.refractive_index}")

    def __eq__(self, other):
        if not isinstance(other, Material):
            return NotImplemented
        return (np.array_equal(self.color, other.color)
                and self.ambient == other.ambient
                and self.diffuse == other.diffuse
                and self.specular == other.specular
                and self.shininess == other.shininess
                and self.reflective == other.reflective
                and self.transparency == other.transparency
                and self.refractive_index == other.refractive_index
                and self.pattern is other.pattern)

    def color_at(self, shape, world_point):
        """Surface color at a world-space point on shape."""
        if self.pattern is not None:
            return self.pattern.pattern_at_shape(shape, world_point)
        return self.color


@dataclass(frozen=True, eq=False)
class PointLight:
    """A point light source with no size."""
    position: np.ndarray
    intensity: np.ndarray = field(default_factory=lambda: color(*constants.WHITE))
