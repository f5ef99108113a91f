"""Path-color integrator for Monte Carlo light transport.

This module implements the color estimate for a single camera ray. The ray is
traced through the scene, bouncing off surfaces according to their material,
and the attenuation of every bounce is multiplied into the color carried back
from the next bounce.

Termination:
    - Absorption: the hit material reports the ray as absorbed (black).
    - Depth: the bounce budget is spent (black). This is a deliberate bias
      that bounds the path length, not an error.
    - Escape: the ray misses every sphere and picks up the sky gradient,
      which is the only light source.

Example:
    >>> import numpy as np
    >>> from spheretrace.core.integrator import ray_color
    >>> from spheretrace.scene.presets import three_spheres_scene
    >>>
    >>> world, camera = three_spheres_scene(16.0 / 9.0)
    >>> rng = np.random.default_rng(7)
    >>> color = ray_color(camera.get_ray(0.5, 0.5, rng), world, 16, rng)
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from spheretrace.core.ray import Intersection, Ray
from spheretrace.core.vector import Vector
from spheretrace.geometry.sphere import Sphere

# =============================================================================
# Rendering Constants
# =============================================================================

# t_min and t_max for ray intersection; T_MIN avoids self-intersection acne
T_MIN = 0.001
T_MAX = float("inf")

# Sky gradient endpoints (horizon to zenith)
SKY_WHITE = Vector(1.0, 1.0, 1.0)
SKY_BLUE = Vector(0.5, 0.7, 1.0)

BLACK = Vector.zero()


# =============================================================================
# Scene Traversal
# =============================================================================


def closest_intersection(
    ray: Ray,
    world: Sequence[Sphere],
    t_min: float = T_MIN,
    t_max: float = T_MAX,
) -> Intersection | None:
    """Find the nearest intersection of a ray with the scene.

    Linear scan over every sphere. After each hit the window's upper bound is
    narrowed to that hit's t, so only strictly nearer hits replace it.

    Args:
        ray: The ray to trace.
        world: Ordered collection of spheres.
        t_min: Minimum accepted ray parameter.
        t_max: Maximum accepted ray parameter.

    Returns:
        The nearest Intersection, or None if nothing was hit.
    """
    closest: Intersection | None = None
    closest_so_far = t_max

    for sphere in world:
        hit = sphere.hit(ray, t_min, closest_so_far)
        if hit is not None:
            closest = hit
            closest_so_far = hit.t

    return closest


# =============================================================================
# Path Color
# =============================================================================


def background_color(ray: Ray) -> Vector:
    """Return the sky gradient seen along a ray that escaped the scene.

    Blends white at the horizon into sky blue at the zenith based on the
    height of the normalized direction.
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return (1.0 - t) * SKY_WHITE + t * SKY_BLUE


def ray_color(
    ray: Ray,
    world: Sequence[Sphere],
    depth: int,
    rng: np.random.Generator,
) -> Vector:
    """Estimate the color carried back along a ray.

    Follows the path one bounce at a time, keeping the running product of
    the attenuations seen so far. A path that escapes picks up the sky color
    scaled by that product; a path that is absorbed or runs out of bounces
    is black. Stack use does not grow with the bounce budget.

    Args:
        ray: The ray to trace.
        world: Ordered collection of spheres.
        depth: Remaining bounce budget.
        rng: The worker's random generator.

    Returns:
        The color estimate (linear RGB, unbounded).
    """
    throughput = Vector.one()

    for _ in range(depth):
        hit = closest_intersection(ray, world)
        if hit is None:
            return throughput * background_color(ray)

        result = hit.material.scatter(ray, hit, rng)
        if not result.scattered:
            return BLACK

        throughput = throughput * result.attenuation
        ray = result.ray

    # Bounce limit reached, no more light is gathered
    return BLACK
