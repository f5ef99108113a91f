"""Dielectric (glass/water) material implementation.

This module implements the dielectric BSDF, which models transparent materials
like glass and water with refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when sin(theta_t) > 1

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.
Dielectrics never absorb: the attenuation is always white.

Example:
    >>> from spheretrace.materials.dielectric import Dielectric
    >>> glass = Dielectric(1.5)
    >>> # result = glass.scatter(ray_in, hit, rng)
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from spheretrace.core.ray import Intersection, Ray
from spheretrace.core.vector import Vector, reflect, refract
from spheretrace.materials.material import MaterialType, ScatterResult

_f32 = np.float32


def schlick_reflectance(cosine: float, ref_idx: float) -> np.float32:
    """Compute Fresnel reflectance using Schlick's approximation.

    The result is symmetric in ``ref_idx`` and ``1 / ref_idx``, so either the
    refractive index or the refraction ratio may be passed.

    Args:
        cosine: Cosine of the angle between incident direction and normal.
        ref_idx: Refractive index (or ratio of refractive indices).

    Returns:
        The approximate probability of reflection.
    """
    r0 = (_f32(1.0) - ref_idx) / (_f32(1.0) + ref_idx)
    r0 = r0 * r0
    return r0 + (_f32(1.0) - r0) * (_f32(1.0) - cosine) ** 5


def scatter_dielectric(
    ir: float,
    ray_in: Ray,
    hit: Intersection,
    rng: np.random.Generator,
) -> ScatterResult:
    """Compute the scattered ray for a dielectric surface.

    Args:
        ir: Index of refraction of the material.
        ray_in: The incoming ray.
        hit: The intersection being shaded.
        rng: The worker's random generator.

    Returns:
        A ScatterResult that always reports scattered with white attenuation.
    """
    attenuation = Vector.one()

    # Entering from outside: air to material; otherwise material to air
    refraction_ratio = _f32(1.0) / _f32(ir) if hit.front_face else _f32(ir)

    unit_direction = ray_in.direction.normalize()
    cos_theta = min(-unit_direction.dot(hit.normal), _f32(1.0))
    sin_theta = np.sqrt(_f32(1.0) - cos_theta * cos_theta)

    cannot_refract = bool(refraction_ratio * sin_theta > 1.0)

    if cannot_refract or schlick_reflectance(cos_theta, refraction_ratio) > rng.random():
        direction = reflect(unit_direction, hit.normal)
    else:
        direction = refract(unit_direction, hit.normal, refraction_ratio)

    return ScatterResult(True, attenuation, Ray(hit.point, direction))


@dataclass(frozen=True)
class Dielectric:
    """Dielectric (glass/water) material properties.

    Attributes:
        refractive_index: Index of refraction. Common values:
            - Air: 1.0
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
    """

    refractive_index: float
    material_type: MaterialType = field(default=MaterialType.DIELECTRIC, init=False)

    def __post_init__(self) -> None:
        if self.refractive_index <= 0.0:
            raise ValueError(
                f"Index of refraction = {self.refractive_index} is not positive. "
                "Values below 1.0 are allowed (e.g. an air bubble inside glass)."
            )

    def scatter(self, ray_in: Ray, hit: Intersection, rng: np.random.Generator) -> ScatterResult:
        """Scatter an incoming ray. See scatter_dielectric."""
        return scatter_dielectric(self.refractive_index, ray_in, hit, rng)
