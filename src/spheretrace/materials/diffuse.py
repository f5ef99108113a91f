"""Diffuse (Lambertian) material implementation.

Scattered rays leave the hit point in direction ``normal + u`` where ``u`` is
a random unit vector. The resulting directions follow a cosine-weighted
distribution around the normal, which is the Lambertian reflectance model.
The attenuation is simply the albedo.

If the random unit vector almost exactly cancels the normal, the scatter
direction degenerates to zero; the normal itself is used instead.

Example:
    >>> import numpy as np
    >>> from spheretrace.core.vector import Vector
    >>> from spheretrace.materials.diffuse import Diffuse
    >>> material = Diffuse(Vector(0.8, 0.3, 0.3))
    >>> # result = material.scatter(ray_in, hit, np.random.default_rng())
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from spheretrace.core.ray import Intersection, Ray
from spheretrace.core.vector import Vector, random_unit_vector
from spheretrace.materials.material import MaterialType, ScatterResult, validate_color


def scatter_diffuse(
    albedo: Vector,
    hit: Intersection,
    rng: np.random.Generator,
) -> ScatterResult:
    """Sample a scattered ray for a diffuse surface.

    Args:
        albedo: The diffuse reflectance (RGB, each component in [0, 1]).
        hit: The intersection being shaded.
        rng: The worker's random generator.

    Returns:
        A ScatterResult that always reports scattered with attenuation
        equal to the albedo.
    """
    scatter_direction = hit.normal + random_unit_vector(rng)

    # Catch degenerate scatter direction
    if scatter_direction.near_zero():
        scatter_direction = hit.normal

    return ScatterResult(True, albedo, Ray(hit.point, scatter_direction))


@dataclass(frozen=True)
class Diffuse:
    """Diffuse (Lambertian) material properties.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
    """

    albedo: Vector
    material_type: MaterialType = field(default=MaterialType.DIFFUSE, init=False)

    def __post_init__(self) -> None:
        validate_color("Albedo", self.albedo)

    def scatter(self, ray_in: Ray, hit: Intersection, rng: np.random.Generator) -> ScatterResult:
        """Scatter an incoming ray. See scatter_diffuse."""
        return scatter_diffuse(self.albedo, hit, rng)
