"""
Pytest fixtures and configuration for ray tracer tests.

This module provides shared scenes, rays and assertion helpers so the
individual test modules stay focused on behaviour.
"""

import math
import numpy as np
import pytest
from raytrace_renders.camera import Camera
from raytrace_renders.config import RenderConfig
from raytrace_renders.linalg import point, vector
from raytrace_renders.rays import Ray
from raytrace_renders.transforms import view_transform
from raytrace_renders.world import default_world


@pytest.fixture
def config():
    """Default render configuration."""
    return RenderConfig()


@pytest.fixture
def world():
    """The two-sphere default world."""
    return default_world()


@pytest.fixture
def front_ray():
    """Ray from z=-5 straight down +z through the origin."""
    return Ray(point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0))


@pytest.fixture
def small_camera():
    """5x5 camera at (0, 0, -5) looking at the origin with a 90 degree field of view."""
    return Camera(5, 5, math.pi / 2,
                  view_transform(point(0.0, 0.0, -5.0), point(0.0, 0.0, 0.0), vector(0.0, 1.0, 0.0)))


@pytest.fixture
def expected_colors():
    """Reference colors from the default world."""
    return {
        'outer_front': np.array([0.38066, 0.47583, 0.2855]),
        'inner_from_inside': np.array([0.90498, 0.90498, 0.90498]),
        'background': np.array([0.0, 0.0, 0.0]),
    }


def assert_color_close(actual, expected, rtol=0.0, atol=1e-4, err_msg=""):
    """Assert that two colors are close, with helpful error messages."""
    np.testing.assert_allclose(
        actual, expected, rtol=rtol, atol=atol,
        err_msg=f"Color mismatch: {err_msg}"
    )


def assert_tuple_close(actual, expected, atol=1e-5, err_msg=""):
    """Assert that two points/vectors (including w) are close."""
    np.testing.assert_allclose(actual, expected, rtol=0.0, atol=atol, err_msg=err_msg)
