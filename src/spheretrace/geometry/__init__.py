"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with analytic ray-sphere intersection

Scenes are plain ordered lists of spheres and are traversed linearly by
spheretrace.core.integrator.closest_intersection.
"""

from .sphere import Sphere

__all__ = ["Sphere"]
