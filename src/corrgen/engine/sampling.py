"""
Standard-normal draws via the Box-Muller transform.
"""

import numpy as np


def box_muller(u1, u2):
    """Map uniforms ``u1`` in (0, 1) and ``u2`` in [0, 1) to standard normals."""

    u1 = np.asarray(u1, dtype=float)
    u2 = np.asarray(u2, dtype=float)
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)


def sample_standard_normal(rng, count):
    n = max(0, int(count))
    if n == 0:
        return np.empty(0, dtype=float)
    # u1 feeds log(); zero draws are redrawn by the RNG.
    u1 = rng.positive_uniform(n)
    u2 = rng.random(n)
    return box_muller(u1, u2)
