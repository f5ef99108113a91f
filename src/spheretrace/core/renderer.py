"""Tiled multi-threaded renderer.

The image is split into N contiguous row bands of equal height and each band
is rendered start to finish by its own thread:

    band N-1  -> top rows of the image
    ...
    band 0    -> bottom rows of the image

Every worker owns an independent random generator (spawned from one seed
sequence) and reads the shared camera and scene without locking; nothing in
the scene is mutated during a render. Finished bands are handed to the
collector through a queue together with their band index. The collector waits
for every worker, then reassembles the bands by index (N-1 first) so the
output is always top row first, whatever order the workers finished in.

Known weakness: a worker that fails is logged and its band is dropped, which
leaves the final image short by that band's rows.

Pixel values are tone-mapped the same way as the single-threaded path:
samples are averaged, gamma-corrected with a square root, clamped to
[0, 0.999] and scaled to 8 bits.

Example:
    >>> from spheretrace.config import RenderSettings
    >>> from spheretrace.core.renderer import render_tiled
    >>> from spheretrace.scene.presets import three_spheres_scene
    >>>
    >>> settings = RenderSettings(width=160, samples_per_pixel=4, threads=2)
    >>> world, camera = three_spheres_scene(settings.aspect_ratio)
    >>> image = render_tiled(camera, world, settings)
    >>> image.shape
    (90, 160, 3)
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from spheretrace.camera.thin_lens import Camera
from spheretrace.config import RenderSettings
from spheretrace.core.integrator import ray_color
from spheretrace.core.sampling import make_rng, spawn_rngs
from spheretrace.core.vector import Vector
from spheretrace.geometry.sphere import Sphere

logger = logging.getLogger(__name__)

_f32 = np.float32

# Upper clamp before scaling to 8 bits, keeps 1.0 from mapping to 256
MAX_INTENSITY = 0.999

# (band_index, band pixels) as handed from a worker to the collector
BandResult = tuple[int, npt.NDArray[np.uint8]]


# =============================================================================
# Tone Mapping
# =============================================================================


def write_color(pixel_color: Vector, samples_per_pixel: int) -> tuple[int, int, int]:
    """Convert an accumulated pixel color to 8-bit RGB.

    Divides by the sample count, applies gamma 2 (square root), clamps to
    [0, 0.999] and scales by 256. NaN channels, which degenerate geometry can
    produce, map to 0.

    Args:
        pixel_color: Sum of all sample colors for the pixel.
        samples_per_pixel: Number of samples in the sum.

    Returns:
        The (r, g, b) channels in [0, 255].
    """
    scale = _f32(1.0) / _f32(samples_per_pixel)
    channels = np.sqrt(np.array(pixel_color.to_tuple(), dtype=np.float32) * scale)
    channels = np.nan_to_num(np.clip(channels, 0.0, MAX_INTENSITY), nan=0.0)
    r, g, b = (channels * 256.0).astype(np.int32)
    return int(r), int(g), int(b)


# =============================================================================
# Sampling
# =============================================================================


def sample_pixel(
    i: int,
    j: int,
    camera: Camera,
    world: Sequence[Sphere],
    settings: RenderSettings,
    rng: np.random.Generator,
) -> Vector:
    """Accumulate all samples for the pixel in column i, row j.

    Row 0 is the bottom of the image. Each sample is offset by a uniform
    jitter in [0, 1) along both axes unless ``settings.jitter`` is off.

    Returns:
        The sum (not the average) of the sample colors.
    """
    width = _f32(settings.width - 1)
    height = _f32(settings.height - 1)
    pixel_color = Vector.zero()

    for _ in range(settings.samples_per_pixel):
        if settings.jitter:
            du, dv = rng.random(2)
        else:
            du = dv = 0.0
        u = _f32(i + du) / width
        v = _f32(j + dv) / height
        ray = camera.get_ray(u, v, rng)
        pixel_color = pixel_color + ray_color(ray, world, settings.max_depth, rng)

    return pixel_color


def render_band(
    band_index: int,
    rows_per_band: int,
    camera: Camera,
    world: Sequence[Sphere],
    settings: RenderSettings,
    rng: np.random.Generator,
) -> npt.NDArray[np.uint8]:
    """Render one band of rows.

    Band ``b`` covers image rows ``[b * rows_per_band, (b + 1) * rows_per_band)``
    counted from the bottom, and is returned top row first.

    Args:
        band_index: Index of the band, 0 being the bottom band.
        rows_per_band: Number of rows in every band.
        camera: The shared, read-only camera.
        world: The shared, read-only scene.
        settings: Render settings.
        rng: The generator owned by the calling worker.

    Returns:
        An array of shape (rows_per_band, width, 3) with dtype uint8.
    """
    pixels = np.zeros((rows_per_band, settings.width, 3), dtype=np.uint8)
    top = (band_index + 1) * rows_per_band - 1

    # Degenerate geometry is allowed to produce Inf/NaN silently
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for row in range(rows_per_band):
            j = top - row
            logger.debug("Band %d: %d scanlines remaining", band_index, rows_per_band - row)
            for i in range(settings.width):
                pixel_color = sample_pixel(i, j, camera, world, settings, rng)
                pixels[row, i] = write_color(pixel_color, settings.samples_per_pixel)

    return pixels


def render(
    camera: Camera,
    world: Sequence[Sphere],
    settings: RenderSettings,
    rng: np.random.Generator | None = None,
) -> npt.NDArray[np.uint8]:
    """Render the whole image on the calling thread.

    Args:
        camera: The camera.
        world: The scene.
        settings: Render settings (``threads`` is ignored).
        rng: Optional generator; defaults to one seeded from ``settings.seed``.

    Returns:
        An array of shape (height, width, 3) with dtype uint8, top row first.
    """
    if rng is None:
        rng = make_rng(settings.seed)
    logger.info(
        "Rendering %dx%d, %d samples per pixel, depth %d",
        settings.width,
        settings.height,
        settings.samples_per_pixel,
        settings.max_depth,
    )
    pixels = render_band(0, settings.height, camera, world, settings, rng)
    logger.info("Done.")
    return pixels


# =============================================================================
# Tiled Rendering
# =============================================================================


def _band_worker(
    band_index: int,
    rows_per_band: int,
    camera: Camera,
    world: Sequence[Sphere],
    settings: RenderSettings,
    rng: np.random.Generator,
    results: queue.Queue[BandResult],
) -> None:
    """Thread target: render one band and hand it to the collector."""
    try:
        pixels = render_band(band_index, rows_per_band, camera, world, settings, rng)
        results.put((band_index, pixels))
    except Exception:
        logger.warning(
            "Band %d failed and will be missing from the image",
            band_index,
            exc_info=True,
        )
        return
    logger.info("Band %d/%d finished", band_index + 1, settings.threads)


def render_tiled(
    camera: Camera,
    world: Sequence[Sphere],
    settings: RenderSettings,
) -> npt.NDArray[np.uint8]:
    """Render the image with one thread per row band.

    The image height must be divisible by ``settings.threads``. Otherwise a
    configuration error is logged and an empty image (zero rows) is returned
    without starting any worker.

    Args:
        camera: The shared, read-only camera.
        world: The shared, read-only scene.
        settings: Render settings.

    Returns:
        An array of shape (rows, width, 3) with dtype uint8, top row first.
        ``rows`` is the image height unless a band was dropped.
    """
    width = settings.width
    height = settings.height
    num_bands = settings.threads

    if num_bands <= 0 or height % num_bands != 0:
        logger.error(
            "Configuration error: image height %d is not divisible by thread count %d",
            height,
            num_bands,
        )
        return np.zeros((0, width, 3), dtype=np.uint8)

    rows_per_band = height // num_bands
    rngs = spawn_rngs(num_bands, settings.seed)
    results: queue.Queue[BandResult] = queue.Queue()

    logger.info(
        "Rendering %dx%d in %d bands of %d rows, %d samples per pixel, depth %d",
        width,
        height,
        num_bands,
        rows_per_band,
        settings.samples_per_pixel,
        settings.max_depth,
    )

    workers = [
        threading.Thread(
            target=_band_worker,
            args=(band_index, rows_per_band, camera, world, settings, rngs[band_index], results),
            name=f"band-{band_index}",
        )
        for band_index in range(num_bands)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    bands: dict[int, npt.NDArray[np.uint8]] = {}
    while True:
        try:
            band_index, pixels = results.get_nowait()
        except queue.Empty:
            break
        bands[band_index] = pixels

    ordered = []
    for band_index in reversed(range(num_bands)):
        if band_index not in bands:
            logger.warning("Band %d missing, image will be short by %d rows", band_index, rows_per_band)
            continue
        ordered.append(bands[band_index])

    if not ordered:
        return np.zeros((0, width, 3), dtype=np.uint8)

    logger.info("Done.")
    return np.concatenate(ordered, axis=0)
