"""Image export utilities for rendered images.

This module writes the 8-bit images produced by the renderer. The renderer
has already tone-mapped and gamma-corrected every pixel, so export is pure
serialization.

Supported formats:
    - PPM (plain-text P3), to any text stream or file
    - PNG (8-bit RGB via Pillow)

Example:
    >>> import sys
    >>> from spheretrace.preview.export import write_ppm
    >>> write_ppm(sys.stdout, image)  # doctest: +SKIP
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def _check_image(image: npt.NDArray[np.uint8]) -> None:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")


def write_ppm(stream: TextIO, image: npt.NDArray[np.uint8]) -> None:
    """Write an image as plain-text PPM.

    The header is ``P3``, ``<width> <height>`` and the maximum value 255,
    each on its own line, followed by one ``R G B`` line per pixel in
    row-major order, top row first.

    Args:
        stream: Writable text stream.
        image: Array of shape (H, W, 3) with dtype uint8, top row first.

    Raises:
        ValueError: If the array does not have shape (H, W, 3).
    """
    _check_image(image)
    height, width, _ = image.shape
    stream.write(f"P3\n{width} {height}\n255\n")
    for row in image:
        stream.writelines(f"{r} {g} {b}\n" for r, g, b in row)


def save_ppm(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save an image as a plain-text PPM file."""
    with open(filepath, "w", encoding="ascii") as f:
        write_ppm(f, image)


def save_png(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save an image as an 8-bit RGB PNG file.

    Args:
        image: Array of shape (H, W, 3) with dtype uint8, top row first.
        filepath: Output file path (should end in .png).

    Raises:
        ValueError: If the array does not have shape (H, W, 3).
    """
    _check_image(image)
    pil_image = PILImage.fromarray(np.ascontiguousarray(image, dtype=np.uint8))
    pil_image.save(filepath)


def save_image(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save an image, picking PNG or PPM from the file suffix.

    ``.png`` is written with Pillow; any other suffix is written as PPM.
    """
    if Path(filepath).suffix.lower() == ".png":
        save_png(image, filepath)
    else:
        save_ppm(image, filepath)
