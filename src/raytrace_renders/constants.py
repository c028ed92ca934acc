"""
Numerical defaults and configuration constants for the ray tracer.
"""

# Tolerance for float comparisons and the surface offset used to avoid acne
EPSILON = 1e-5

# Recursion ceiling for reflected/refracted rays
DEFAULT_MAX_BOUNCES = 5

# Anti-aliasing grid (per axis) for each pixel
DEFAULT_SAMPLES = 1

# Phong material defaults
DEFAULT_AMBIENT = 0.1
DEFAULT_DIFFUSE = 0.9
DEFAULT_SPECULAR = 0.9
DEFAULT_SHININESS = 200.0
DEFAULT_REFLECTIVE = 0.0
DEFAULT_TRANSPARENCY = 0.0

# Refractive indices
VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.5
DIAMOND = 2.417

# Colors (linear RGB, unclamped)
BLACK = (0.0, 0.0, 0.0)
WHITE = (1.0, 1.0, 1.0)
