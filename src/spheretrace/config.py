"""Render configuration.

RenderSettings gathers every knob the renderer consumes: image size,
sampling, bounce budget and the tiled renderer's thread count. Camera
extrinsics live on the Camera itself, built by the scene presets.

Example:
    >>> from spheretrace.config import RenderSettings
    >>> settings = RenderSettings(width=400, samples_per_pixel=8, threads=5)
    >>> settings.height
    225
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_WIDTH = 400
DEFAULT_ASPECT_RATIO = 16.0 / 9.0
DEFAULT_SAMPLES_PER_PIXEL = 32
DEFAULT_MAX_DEPTH = 16


class ConfigurationError(ValueError):
    """Raised when render settings are invalid."""


@dataclass(frozen=True)
class RenderSettings:
    """Settings for one render.

    Attributes:
        width: Image width in pixels.
        aspect_ratio: Width divided by height; the height is derived.
        samples_per_pixel: Number of jittered samples averaged per pixel.
        max_depth: Maximum number of bounces per camera ray.
        threads: Number of row bands (one worker thread each). Must evenly
            divide the image height for the tiled renderer.
        seed: Root seed for the worker generators. None for a fresh,
            non-reproducible render.
        jitter: Whether samples are jittered inside the pixel. Disabling it
            samples every pixel at its corner, which is only useful for
            deterministic comparisons.
    """

    width: int = DEFAULT_WIDTH
    aspect_ratio: float = DEFAULT_ASPECT_RATIO
    samples_per_pixel: int = DEFAULT_SAMPLES_PER_PIXEL
    max_depth: int = DEFAULT_MAX_DEPTH
    threads: int = 1
    seed: int | None = None
    jitter: bool = True

    @property
    def height(self) -> int:
        """Image height in pixels, derived from width and aspect ratio."""
        return int(self.width / self.aspect_ratio)

    def validate(self) -> None:
        """Check the settings for values no render can use.

        Whether ``threads`` divides the height is left to the tiled
        renderer, which reports it itself.

        Raises:
            ConfigurationError: If any setting is out of range.
        """
        if self.width <= 0:
            raise ConfigurationError(f"Width must be positive, got {self.width}")
        if self.aspect_ratio <= 0.0:
            raise ConfigurationError(f"Aspect ratio must be positive, got {self.aspect_ratio}")
        if self.height <= 0:
            raise ConfigurationError(
                f"Width {self.width} and aspect ratio {self.aspect_ratio} give an empty image"
            )
        if self.samples_per_pixel <= 0:
            raise ConfigurationError(
                f"Samples per pixel must be positive, got {self.samples_per_pixel}"
            )
        if self.max_depth < 0:
            raise ConfigurationError(f"Max depth must not be negative, got {self.max_depth}")
        if self.threads <= 0:
            raise ConfigurationError(f"Thread count must be positive, got {self.threads}")
