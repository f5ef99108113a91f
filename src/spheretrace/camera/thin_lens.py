"""Thin-lens camera model with depth of field.

This module implements a perspective camera that generates primary rays for
rendering. The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view in degrees
- Arbitrary aspect ratios
- Defocus blur through a finite aperture

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The viewport is placed on the focal plane, ``focus_dist`` away from the
camera along -w. Ray origins are jittered across a disk of radius
``aperture / 2`` while every ray still aims at its point on the focal plane,
so geometry on that plane stays sharp and everything else blurs. An aperture
of 0 gives a pinhole camera.

Example:
    >>> import numpy as np
    >>> from spheretrace.camera.thin_lens import Camera
    >>> from spheretrace.core.vector import Vector
    >>>
    >>> camera = Camera(
    ...     lookfrom=Vector(0.0, 0.0, 3.0),
    ...     lookat=Vector(0.0, 0.0, 0.0),
    ...     vup=Vector(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> ray = camera.get_ray(0.5, 0.5, np.random.default_rng())  # Image center
"""

import math

import numpy as np

from spheretrace.core.ray import Ray
from spheretrace.core.vector import Vector, random_in_unit_disk


class Camera:
    """A thin-lens perspective camera.

    All basis vectors are computed once in the constructor; the camera is
    read-only afterwards and can be shared between render workers.

    Attributes:
        aspect_ratio: Width divided by height of the output image.
        viewport_width: Viewport width at unit distance.
        viewport_height: Viewport height at unit distance.
        origin: Camera position (lookfrom).
        horizontal: Full viewport width vector on the focal plane.
        vertical: Full viewport height vector on the focal plane.
        lower_left_corner: Lower-left corner of the viewport on the focal plane.
        u: Right direction.
        v: Up direction.
        w: Backward direction (opposite view direction).
        lens_radius: Half the aperture.
    """

    __slots__ = (
        "aspect_ratio",
        "viewport_height",
        "viewport_width",
        "w",
        "u",
        "v",
        "origin",
        "horizontal",
        "vertical",
        "lower_left_corner",
        "lens_radius",
    )

    def __init__(
        self,
        lookfrom: Vector,
        lookat: Vector,
        vup: Vector,
        vfov: float,
        aspect_ratio: float,
        aperture: float = 0.0,
        focus_dist: float = 1.0,
    ) -> None:
        """Build the camera basis.

        Args:
            lookfrom: Camera position in world space.
            lookat: Point the camera is looking at.
            vup: Up direction for camera orientation (typically (0, 1, 0)).
            vfov: Vertical field of view in degrees.
            aspect_ratio: Width divided by height of the output image.
            aperture: Lens diameter. 0 disables defocus blur.
            focus_dist: Distance from the camera to the plane in focus.
        """
        theta = math.radians(vfov)
        h = math.tan(theta / 2.0)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        w = (lookfrom - lookat).normalize()
        u = vup.cross(w).normalize()
        v = w.cross(u)

        horizontal = focus_dist * viewport_width * u
        vertical = focus_dist * viewport_height * v
        lower_left_corner = lookfrom - horizontal / 2.0 - vertical / 2.0 - focus_dist * w

        for name, value in (
            ("aspect_ratio", aspect_ratio),
            ("viewport_height", viewport_height),
            ("viewport_width", viewport_width),
            ("w", w),
            ("u", u),
            ("v", v),
            ("origin", lookfrom),
            ("horizontal", horizontal),
            ("vertical", vertical),
            ("lower_left_corner", lower_left_corner),
            ("lens_radius", aperture / 2.0),
        ):
            object.__setattr__(self, name, value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Camera is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Camera is immutable")

    def get_ray(self, s: float, t: float, rng: np.random.Generator) -> Ray:
        """Generate a ray through normalized image coordinates (s, t).

        - s = 0: left edge, s = 1: right edge
        - t = 0: bottom edge, t = 1: top edge

        Args:
            s: Horizontal image coordinate.
            t: Vertical image coordinate.
            rng: The worker's random generator (used for the lens sample).

        Returns:
            A Ray from a point on the lens toward the focal plane. The
            direction is not normalized.
        """
        rd = self.lens_radius * random_in_unit_disk(rng)
        offset = self.u * rd.x + self.v * rd.y

        return Ray(
            self.origin + offset,
            self.lower_left_corner + s * self.horizontal + t * self.vertical - self.origin - offset,
        )

    def __repr__(self) -> str:
        return (
            f"Camera(origin={self.origin!r}, aspect_ratio={self.aspect_ratio}, "
            f"lens_radius={self.lens_radius})"
        )
