"""Ray and intersection record data structures.

A Ray is an origin plus a direction. The direction is never normalized
implicitly: the camera and the material scatter functions produce rays of
arbitrary length, so the parameter ``t`` measures distance in units of the
direction vector rather than world distance.

An Intersection is the transient record produced by a successful hit test.
It lives for exactly one scatter step of the integrator.

Example:
    >>> from spheretrace.core.ray import Ray
    >>> from spheretrace.core.vector import Vector
    >>> ray = Ray(Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, -2.0))
    >>> ray.at(1.5)
    Vector(0.0, 0.0, -3.0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from spheretrace.core.vector import Vector

if TYPE_CHECKING:
    from spheretrace.materials import Material


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be
            unit length.
    """

    origin: Vector
    direction: Vector

    def at(self, t: float) -> Vector:
        """Compute the point origin + t * direction."""
        return self.origin + t * self.direction


@dataclass(frozen=True)
class Intersection:
    """Record of a ray-surface intersection.

    Attributes:
        point: The 3D point where the ray met the surface.
        normal: The unit surface normal, always oriented against the
            incoming ray.
        t: The ray parameter of the hit.
        front_face: True when the ray arrived from the outward side of
            the surface.
        material: The material of the primitive that was hit. A plain
            reference owned by the primitive, never copied.
    """

    point: Vector
    normal: Vector
    t: float
    front_face: bool
    material: Material

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        point: Vector,
        outward_normal: Vector,
        t: float,
        material: Material,
    ) -> Intersection:
        """Build a record whose normal opposes the incoming ray.

        If the ray travels against the outward normal it hit the front face
        and the normal is kept; otherwise the ray started inside the surface
        and the normal is flipped.

        Args:
            ray: The incoming ray.
            point: The hit point.
            outward_normal: The geometric normal pointing out of the surface.
            t: The ray parameter of the hit.
            material: The material of the hit primitive.

        Returns:
            A new Intersection.
        """
        front_face = bool(ray.direction.dot(outward_normal) < 0.0)
        normal = outward_normal if front_face else -outward_normal
        return cls(point=point, normal=normal, t=t, front_face=front_face, material=material)
