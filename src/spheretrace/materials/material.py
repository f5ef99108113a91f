"""Material tag and scatter result shared by all material models.

The set of materials is closed: Diffuse, Metal and Dielectric. Each variant
carries a MaterialType tag and implements

    scatter(ray_in, hit, rng) -> ScatterResult

The integrator multiplies the returned attenuation into the path color, which
is how color bleeding and absorption are modeled.
"""

from enum import IntEnum
from typing import NamedTuple

from spheretrace.core.ray import Ray
from spheretrace.core.vector import Vector


class MaterialType(IntEnum):
    """Enumeration of supported material types."""

    DIFFUSE = 0
    METAL = 1
    DIELECTRIC = 2


class ScatterResult(NamedTuple):
    """Outcome of one scatter step.

    Attributes:
        scattered: True if the ray continues, False if it was absorbed.
        attenuation: Color multiplier for the continuation's contribution.
        ray: The outgoing ray. Meaningless when scattered is False.
    """

    scattered: bool
    attenuation: Vector
    ray: Ray


def validate_color(name: str, color: Vector) -> None:
    """Check that every color component lies in [0, 1].

    Raises:
        ValueError: If any component is outside [0, 1].
    """
    for i, component in enumerate(color):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"{name} component {i} = {float(component)} is outside [0, 1]. "
                "This would violate energy conservation."
            )
