"""Vector value type and vector utilities for CPU ray tracing.

This module provides the immutable 3-component Vector used for points,
directions and RGB colors, together with the geometric helpers (reflection,
refraction) and the random sampling helpers used for Monte Carlo scattering.

Components are stored as ``numpy.float32`` scalars so that arithmetic follows
single precision IEEE rules: dividing by zero or taking the square root of a
negative number yields Inf/NaN rather than raising. Degenerate geometry
therefore propagates through a render instead of aborting it.

All random helpers take an explicit ``numpy.random.Generator``. There is no
module-level random state; each render worker owns its generator.

Example:
    >>> import numpy as np
    >>> from spheretrace.core.vector import Vector, random_in_unit_sphere, reflect
    >>> v = Vector(1.0, -1.0, 0.0)
    >>> n = Vector(0.0, 1.0, 0.0)
    >>> reflect(v, n)
    Vector(1.0, 1.0, 0.0)
    >>> rng = np.random.default_rng(42)
    >>> p = random_in_unit_sphere(rng)  # p.length_squared() < 1
"""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

_f32 = np.float32

# Magnitude below which every component counts as zero (see Vector.near_zero)
NEAR_ZERO_EPSILON = 1e-4


class Vector:
    """An immutable 3D vector of float32 components.

    Every operator returns a new Vector. Multiplication and division by another
    Vector are component-wise; multiplication and division by a number scale
    every component.

    Attributes:
        x: First component (red channel when used as a color).
        y: Second component (green channel).
        z: Third component (blue channel).
    """

    __slots__ = ("x", "y", "z")

    # numpy scalars defer to Vector.__rmul__ instead of broadcasting
    __array_ufunc__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        object.__setattr__(self, "x", _f32(x))
        object.__setattr__(self, "y", _f32(y))
        object.__setattr__(self, "z", _f32(z))

    @classmethod
    def zero(cls) -> Vector:
        """Return the vector (0, 0, 0)."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def one(cls) -> Vector:
        """Return the vector (1, 1, 1)."""
        return cls(1.0, 1.0, 1.0)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Vector is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Vector is immutable")

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, other: Vector | float) -> Vector:
        if isinstance(other, Vector):
            return Vector(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float, np.floating, np.integer)):
            s = _f32(other)
            return Vector(self.x * s, self.y * s, self.z * s)
        return NotImplemented

    def __rmul__(self, other: float) -> Vector:
        if isinstance(other, (int, float, np.floating, np.integer)):
            s = _f32(other)
            return Vector(s * self.x, s * self.y, s * self.z)
        return NotImplemented

    def __truediv__(self, other: Vector | float) -> Vector:
        if isinstance(other, Vector):
            return Vector(self.x / other.x, self.y / other.y, self.z / other.z)
        if isinstance(other, (int, float, np.floating, np.integer)):
            s = _f32(other)
            return Vector(self.x / s, self.y / s, self.z / s)
        return NotImplemented

    # -------------------------------------------------------------------------
    # Comparison and conversion
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return bool(self.x == other.x and self.y == other.y and self.z == other.z)

    def __hash__(self) -> int:
        return hash((float(self.x), float(self.y), float(self.z)))

    def __iter__(self) -> Iterator[np.float32]:
        yield self.x
        yield self.y
        yield self.z

    def __repr__(self) -> str:
        return f"Vector({float(self.x)}, {float(self.y)}, {float(self.z)})"

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the components as a tuple of Python floats."""
        return (float(self.x), float(self.y), float(self.z))

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def dot(self, other: Vector) -> np.float32:
        """Compute the dot product self . other."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        """Compute the cross product self x other."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> np.float32:
        """Compute the squared length without taking a square root."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> np.float32:
        """Compute the Euclidean length."""
        return np.sqrt(self.length_squared())

    def normalize(self) -> Vector:
        """Return a unit vector in the same direction.

        A zero-length vector is not guarded against: the result has NaN
        components.
        """
        return self / self.length()

    def near_zero(self) -> bool:
        """Check whether every component is within NEAR_ZERO_EPSILON of zero."""
        return bool(
            abs(self.x) < NEAR_ZERO_EPSILON
            and abs(self.y) < NEAR_ZERO_EPSILON
            and abs(self.z) < NEAR_ZERO_EPSILON
        )


# =============================================================================
# Reflection and Refraction
# =============================================================================


def reflect(v: Vector, n: Vector) -> Vector:
    """Reflect v about the normal n.

    Computes ``v - 2 * dot(v, n) * n``. The normal should be unit length
    for a length-preserving reflection.

    Args:
        v: The incoming direction (pointing toward the surface).
        n: The surface normal.

    Returns:
        The reflected direction.
    """
    return v - 2.0 * v.dot(n) * n


def refract(uv: Vector, n: Vector, eta_ratio: float) -> Vector:
    """Refract a unit direction through a surface using Snell's law.

    The refracted direction is split into the part perpendicular to the
    normal and the part parallel to it:

        r_perp = eta_ratio * (uv + cos_theta * n)
        r_parallel = -sqrt(|1 - |r_perp|^2|) * n

    ``cos_theta`` is clamped to 1 to absorb floating-point overshoot at
    grazing angles. Total internal reflection is not detected here; callers
    decide between reflection and refraction beforehand.

    Args:
        uv: The incoming direction (unit length).
        n: The surface normal, oriented against uv.
        eta_ratio: Ratio of refractive indices (n_incident / n_transmitted).

    Returns:
        The refracted direction.
    """
    cos_theta = min(-uv.dot(n), _f32(1.0))
    r_out_perp = eta_ratio * (uv + cos_theta * n)
    r_out_parallel = -np.sqrt(abs(_f32(1.0) - r_out_perp.length_squared())) * n
    return r_out_perp + r_out_parallel


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_vector(rng: np.random.Generator, low: float = 0.0, high: float = 1.0) -> Vector:
    """Draw a vector with each component uniform in [low, high)."""
    x, y, z = rng.uniform(low, high, 3)
    return Vector(x, y, z)


def random_in_unit_sphere(rng: np.random.Generator) -> Vector:
    """Generate a random point strictly inside the unit sphere.

    Uses rejection sampling: points are drawn uniformly from the cube
    [-1, 1]^3 until one has squared length below 1. Roughly half of the
    draws are accepted, so the loop terminates quickly in practice.

    Args:
        rng: The random generator owned by the calling worker.

    Returns:
        A random point with length_squared() < 1.
    """
    while True:
        p = random_vector(rng, -1.0, 1.0)
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng: np.random.Generator) -> Vector:
    """Generate a random unit vector (normalized random_in_unit_sphere)."""
    return random_in_unit_sphere(rng).normalize()


def random_in_unit_disk(rng: np.random.Generator) -> Vector:
    """Generate a random point (x, y, 0) inside the unit disk.

    Used by the thin-lens camera to jitter ray origins across the aperture.
    """
    while True:
        x, y = rng.uniform(-1.0, 1.0, 2)
        p = Vector(x, y, 0.0)
        if p.length_squared() < 1.0:
            return p
