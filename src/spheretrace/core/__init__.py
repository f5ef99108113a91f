"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Vector value type, reflection/refraction and random sampling
    ray: Ray and Intersection records
    sampling: Per-worker random generator construction
    integrator: Scene traversal and the path-color estimator
    renderer: Single-threaded and tiled multi-threaded rendering

All random sampling goes through an explicitly passed numpy Generator; no
module keeps random state of its own.
"""

from .ray import Intersection, Ray
from .sampling import make_rng, spawn_rngs
from .vector import (
    Vector,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    random_vector,
    reflect,
    refract,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from spheretrace.core.integrator or spheretrace.core.renderer.

__all__ = [
    "Vector",
    "reflect",
    "refract",
    "random_vector",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
    "Ray",
    "Intersection",
    "make_rng",
    "spawn_rngs",
]
