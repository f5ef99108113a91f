"""Ready-made scenes.

Each builder returns ``(world, camera)`` where ``world`` is the ordered list
of spheres consumed by the integrator. Builders only construct objects;
nothing here is touched once a render starts.

Scenes:
    three_spheres: A diffuse sphere between a hollow glass sphere and a
        solid glass sphere on a slightly rough metal floor.
    random: A field of small random spheres around three large feature
        spheres (glass, diffuse, metal).

Example:
    >>> from spheretrace.scene.presets import SCENES
    >>> world, camera = SCENES["three_spheres"](16.0 / 9.0)
    >>> len(world)
    5
"""

from collections.abc import Callable

import numpy as np

from spheretrace.camera.thin_lens import Camera
from spheretrace.core.vector import Vector, random_vector
from spheretrace.geometry.sphere import Sphere
from spheretrace.materials import Dielectric, Diffuse, Material, Metal

SceneBuilder = Callable[..., tuple[list[Sphere], Camera]]


def three_spheres_scene(aspect_ratio: float) -> tuple[list[Sphere], Camera]:
    """Create the three-sphere scene.

    The left sphere is hollow glass: an outer glass sphere with an inner
    sphere of negative radius sharing its center.

    Args:
        aspect_ratio: Width divided by height of the output image.

    Returns:
        Tuple of (world, camera).
    """
    mat_ground = Metal(Vector(0.8, 0.8, 0.8), roughness=0.1)
    mat_center = Diffuse(Vector(0.3, 0.5, 0.9))
    mat_left = Dielectric(1.5)
    mat_right = Dielectric(1.3)

    world = [
        Sphere(Vector(0.0, -100.5, -1.0), 100.0, mat_ground),
        Sphere(Vector(0.0, 0.0, -1.0), 0.5, mat_center),
        Sphere(Vector(-1.0, 0.0, -1.0), -0.45, mat_left),
        Sphere(Vector(-1.0, 0.0, -1.0), 0.5, mat_left),
        Sphere(Vector(1.0, 0.0, -1.0), 0.5, mat_right),
    ]

    lookfrom = Vector(-2.0, 2.0, 1.0)
    lookat = Vector(0.0, 0.0, -1.0)
    camera = Camera(
        lookfrom=lookfrom,
        lookat=lookat,
        vup=Vector(0.0, 1.0, 0.0),
        vfov=30.0,
        aspect_ratio=aspect_ratio,
        aperture=0.6,
        focus_dist=float((lookfrom - lookat).length()),
    )
    return world, camera


def random_scene(
    aspect_ratio: float,
    rng: np.random.Generator | None = None,
) -> tuple[list[Sphere], Camera]:
    """Create the procedural random-spheres scene.

    Small spheres are placed on a jittered 22x22 grid; each is diffuse with
    probability 0.8, metal with probability 0.15 and glass otherwise. Spheres
    too close to the large metal sphere are skipped.

    Args:
        aspect_ratio: Width divided by height of the output image.
        rng: Generator used for placement and colors. Defaults to a fresh one.

    Returns:
        Tuple of (world, camera).
    """
    if rng is None:
        rng = np.random.default_rng()

    world = [Sphere(Vector(0.0, -1000.0, 0.0), 1000.0, Diffuse(Vector(0.5, 0.5, 0.5)))]
    clearance_point = Vector(4.0, 0.2, 0.0)

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Vector(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - clearance_point).length() <= 0.9:
                continue

            material: Material
            if choose_mat < 0.8:
                albedo = random_vector(rng) * random_vector(rng)
                material = Diffuse(albedo)
            elif choose_mat < 0.95:
                albedo = random_vector(rng, 0.5, 1.0)
                material = Metal(albedo, roughness=float(rng.uniform(0.0, 0.5)))
            else:
                material = Dielectric(1.5)
            world.append(Sphere(center, 0.2, material))

    world.append(Sphere(Vector(0.0, 1.0, 0.0), 1.0, Dielectric(1.5)))
    world.append(Sphere(Vector(-4.0, 1.0, 0.0), 1.0, Diffuse(Vector(0.4, 0.2, 0.1))))
    world.append(Sphere(Vector(4.0, 1.0, 0.0), 1.0, Metal(Vector(0.7, 0.6, 0.5), roughness=0.0)))

    camera = Camera(
        lookfrom=Vector(13.0, 2.0, 3.0),
        lookat=Vector(0.0, 0.0, 0.0),
        vup=Vector(0.0, 1.0, 0.0),
        vfov=20.0,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0,
    )
    return world, camera


SCENES: dict[str, SceneBuilder] = {
    "three_spheres": three_spheres_scene,
    "random": random_scene,
}
