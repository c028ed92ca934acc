"""
Render configuration passed explicitly to World and Camera.
"""
from dataclasses import dataclass, field
import numpy as np
from raytrace_renders import constants
from raytrace_renders.linalg import color
from raytrace_renders.materials import Material


@dataclass(frozen=True, eq=False)
class RenderConfig:
    """
    Tunable numerical and shading parameters.

    Attributes:
        epsilon: Tolerance for float comparisons and the surface offset of
            secondary ray origins
        max_bounces: Recursion ceiling for reflected/refracted rays
        background: Color returned for rays that hit nothing
        default_material: Material used for leaves whose material is None
        samples: Sub-pixel grid size per axis for anti-aliasing (1 = off)
    """
    epsilon: float = constants.EPSILON
    max_bounces: int = constants.DEFAULT_MAX_BOUNCES
    background: np.ndarray = field(default_factory=lambda: color(*constants.BLACK))
    default_material: Material = field(default_factory=Material)
    samples: int = constants.DEFAULT_SAMPLES

    def __post_init__(self):
        if self.epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if self.max_bounces < 0:
            raise ValueError(f"max_bounces must be non-negative, got {self.max_bounces}")
        if self.samples < 1:
            raise ValueError(f"samples must be at least 1, got {self.samples}")
        background = np.asarray(self.background, dtype=np.float64)
        if background.shape != (3,):
            raise ValueError(f"background must be (3,) array, got shape {background.shape}")
        object.__setattr__(self, "background", background)
