"""Metal (specular reflective) material implementation.

This module implements the metal BSDF, which models specular reflection with
optional roughness (fuzziness). Perfect metals (roughness=0) produce mirror-like
reflections, while rougher metals scatter reflected rays within a cone.

The reflection formula is:
    R = I - 2(I . N)N

where I is the normalized incident direction and N is the surface normal.

For rough metals, the reflected direction is perturbed by a random point in
the unit sphere scaled by the roughness. If the perturbation pushes the ray
below the surface, the ray is absorbed.

Example:
    >>> from spheretrace.core.vector import Vector
    >>> from spheretrace.materials.metal import Metal
    >>> mirror = Metal(Vector(0.8, 0.8, 0.8), roughness=0.0)
    >>> # result = mirror.scatter(ray_in, hit, rng)
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from spheretrace.core.ray import Intersection, Ray
from spheretrace.core.vector import Vector, random_in_unit_sphere, reflect
from spheretrace.materials.material import MaterialType, ScatterResult, validate_color


def scatter_metal(
    albedo: Vector,
    roughness: float,
    ray_in: Ray,
    hit: Intersection,
    rng: np.random.Generator,
) -> ScatterResult:
    """Compute the scattered ray for a metal surface.

    The scattered direction is not renormalized after the roughness
    perturbation.

    Args:
        albedo: The reflective color (RGB, each component in [0, 1]).
        roughness: The surface roughness in [0, 1]. 0 = perfect mirror.
        ray_in: The incoming ray.
        hit: The intersection being shaded.
        rng: The worker's random generator.

    Returns:
        A ScatterResult with attenuation equal to the albedo. ``scattered`` is
        False when the perturbed direction points into the surface.
    """
    reflected = reflect(ray_in.direction.normalize(), hit.normal)
    scattered = Ray(hit.point, reflected + roughness * random_in_unit_sphere(rng))
    did_scatter = bool(scattered.direction.dot(hit.normal) > 0.0)
    return ScatterResult(did_scatter, albedo, scattered)


@dataclass(frozen=True)
class Metal:
    """Metal (specular reflective) material properties.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
        roughness: The surface roughness/fuzziness in [0, 1].
            0 = perfect mirror, 1 = maximum fuzziness.
    """

    albedo: Vector
    roughness: float = 0.0
    material_type: MaterialType = field(default=MaterialType.METAL, init=False)

    def __post_init__(self) -> None:
        validate_color("Albedo", self.albedo)
        if self.roughness < 0.0 or self.roughness > 1.0:
            raise ValueError(
                f"Roughness = {self.roughness} is outside [0, 1]. "
                "Roughness must be between 0 (perfect mirror) and 1 (maximum fuzz)."
            )

    def scatter(self, ray_in: Ray, hit: Intersection, rng: np.random.Generator) -> ScatterResult:
        """Scatter an incoming ray. See scatter_metal."""
        return scatter_metal(self.albedo, self.roughness, ray_in, hit, rng)
