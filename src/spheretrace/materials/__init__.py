"""Materials module for scattering models.

This module implements the three material models a sphere can carry:

Components:
    material: MaterialType tag and the ScatterResult returned by every model
    diffuse: Ideal diffuse (Lambertian) reflection
    metal: Specular reflection with optional roughness
    dielectric: Glass-like materials with refraction (Schlick Fresnel)

Each material provides:
    - scatter(ray_in, hit, rng): sample a continuation ray and report the
      attenuation, or report absorption

The set is closed. ``Material`` is the union of the three variants and the
integrator relies on nothing beyond ``scatter``.
"""

from typing import Union

from .dielectric import Dielectric, scatter_dielectric, schlick_reflectance
from .diffuse import Diffuse, scatter_diffuse
from .material import MaterialType, ScatterResult
from .metal import Metal, scatter_metal

Material = Union[Diffuse, Metal, Dielectric]

__all__ = [
    "Material",
    "MaterialType",
    "ScatterResult",
    # Diffuse
    "Diffuse",
    "scatter_diffuse",
    # Metal
    "Metal",
    "scatter_metal",
    # Dielectric
    "Dielectric",
    "scatter_dielectric",
    "schlick_reflectance",
]
