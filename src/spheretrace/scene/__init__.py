"""Scene presets.

Components:
    presets: Literal and procedural scene builders returning (world, camera)
"""

from .presets import SCENES, random_scene, three_spheres_scene

__all__ = ["SCENES", "three_spheres_scene", "random_scene"]
