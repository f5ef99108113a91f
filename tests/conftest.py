"""Pytest configuration for spheretrace tests.

This module provides shared fixtures for all test modules: seeded random
generators, a generator stub with a fixed draw, and small scenes.
"""

import numpy as np
import pytest

from spheretrace.camera.thin_lens import Camera
from spheretrace.core.vector import Vector
from spheretrace.geometry.sphere import Sphere
from spheretrace.materials import Diffuse, Metal


class FixedRandom:
    """Generator stand-in whose uniform draws always return one value.

    Only covers the methods the materials call directly; rejection samplers
    still need a real numpy Generator.
    """

    def __init__(self, value: float) -> None:
        self.value = value

    def random(self, size=None):
        if size is None:
            return self.value
        return np.full(size, self.value)


@pytest.fixture
def rng():
    """A seeded generator so sampling tests are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def fixed_random():
    """Factory for FixedRandom stubs."""
    return FixedRandom


@pytest.fixture
def grey_diffuse():
    """A 50% grey diffuse material."""
    return Diffuse(Vector(0.5, 0.5, 0.5))


@pytest.fixture
def mirror_world():
    """A single perfect half-grey mirror sphere at the origin."""
    return [Sphere(Vector(0.0, 0.0, 0.0), 1.0, Metal(Vector(0.5, 0.5, 0.5), roughness=0.0))]


@pytest.fixture
def pinhole_camera():
    """A pinhole camera at z=5 looking at the origin, 3:2 image."""
    return Camera(
        lookfrom=Vector(0.0, 0.0, 5.0),
        lookat=Vector(0.0, 0.0, 0.0),
        vup=Vector(0.0, 1.0, 0.0),
        vfov=60.0,
        aspect_ratio=1.5,
        aperture=0.0,
        focus_dist=1.0,
    )
