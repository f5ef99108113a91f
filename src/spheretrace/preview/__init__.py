"""Output module for rendered images.

Components:
    export: PPM text output and PNG files via Pillow
"""

from .export import save_image, save_png, save_ppm, write_ppm

__all__ = ["write_ppm", "save_ppm", "save_png", "save_image"]
