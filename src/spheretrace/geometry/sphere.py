"""Sphere primitive with analytic ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + 2*half_b*t + c = 0

where:
    a = |direction|^2
    half_b = dot(oc, direction)
    c = |oc|^2 - radius^2
    oc = origin - center

The [t_min, t_max] window serves two purposes: t_min rejects hits right at
the ray origin (self-intersection "shadow acne"), and t_max lets the scene
traversal cull anything farther than the closest hit found so far.

A negative radius is allowed. It keeps the same surface but flips the
outward normal, which turns the sphere into the inner wall of a hollow
glass shell.

Example:
    >>> from spheretrace.core.ray import Ray
    >>> from spheretrace.core.vector import Vector
    >>> from spheretrace.geometry.sphere import Sphere
    >>> from spheretrace.materials import Diffuse
    >>> sphere = Sphere(Vector(0.0, 0.0, 0.0), 1.0, Diffuse(Vector(0.5, 0.5, 0.5)))
    >>> ray = Ray(Vector(0.0, 0.0, 5.0), Vector(0.0, 0.0, -1.0))
    >>> sphere.hit(ray, 0.001, float("inf")).t
    4.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from spheretrace.core.ray import Intersection, Ray
from spheretrace.core.vector import Vector

if TYPE_CHECKING:
    from spheretrace.materials import Material


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius. Negative values model an inverted (hollow)
            surface whose normals point inward.
        material: The material owned by this sphere.
    """

    center: Vector
    radius: float
    material: Material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Intersection | None:
        """Test for ray-sphere intersection within [t_min, t_max].

        The nearer root is tried first; if it falls outside the window the
        farther root is tried. Degenerate input (zero radius, zero-length
        direction) is not guarded and propagates as NaN/Inf.

        Args:
            ray: The ray to test.
            t_min: Minimum accepted ray parameter.
            t_max: Maximum accepted ray parameter.

        Returns:
            The Intersection at the accepted root, or None on a miss.
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - np.float32(self.radius) * np.float32(self.radius)

        discriminant = half_b * half_b - a * c
        if discriminant < 0.0:
            return None

        sqrtd = np.sqrt(discriminant)
        root = (-half_b - sqrtd) / a
        if root < t_min or t_max < root:
            root = (-half_b + sqrtd) / a
            if root < t_min or t_max < root:
                return None

        point = ray.at(root)
        outward_normal = (point - self.center) / self.radius
        return Intersection.from_outward_normal(ray, point, outward_normal, root, self.material)
