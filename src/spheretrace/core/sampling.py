"""Random generator construction for render workers.

Every worker thread of the tiled renderer owns exactly one generator and
passes it down the call chain (camera, integrator, materials). Generators
for a render are spawned from a single SeedSequence so their streams are
statistically independent; a fixed seed makes a render with a fixed thread
count reproducible.
"""

import numpy as np


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create a PCG64 generator.

    Args:
        seed: Optional seed. None draws fresh entropy from the OS.

    Returns:
        A new numpy Generator.
    """
    return np.random.default_rng(seed)


def spawn_rngs(count: int, seed: int | None = None) -> list[np.random.Generator]:
    """Create ``count`` independent generators from one seed.

    Args:
        count: Number of generators, typically one per worker.
        seed: Optional root seed. None draws fresh entropy from the OS.

    Returns:
        A list of independent numpy Generators.
    """
    children = np.random.SeedSequence(seed).spawn(count)
    return [np.random.default_rng(child) for child in children]
