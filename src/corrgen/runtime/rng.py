"""
Randomness utilities with deterministic seed derivation.
"""

import hashlib

import numpy as np


# Seed namespace convention:
# - Use one base seed for the entire generation run.
# - Derive per-column streams with RNG.derive_seed(seed, "<namespace>", position, name).
# - Reserved namespaces: normal, boolean, string.
class RNG:
    def __init__(self, seed=42):
        self.seed = int(seed)
        self.rng = np.random.default_rng(self.seed)

    @classmethod
    def for_column(cls, base_seed, namespace, position, name):
        return cls(cls.derive_seed(base_seed, namespace, position, name))

    @staticmethod
    def derive_seed(base_seed, *parts):
        h = hashlib.sha256()
        h.update(str(base_seed).encode())
        for part in parts:
            h.update(b":")
            h.update(str(part).encode())
        return int(h.hexdigest(), 16) % (2**32)

    def choice(self, a, size=None, replace=True, p=None):
        return self.rng.choice(a, size=size, replace=replace, p=p)

    def random(self, size=None):
        return self.rng.random(size)

    def positive_uniform(self, size):
        """Uniform draws in the open interval (0, 1); exact zeros are redrawn."""

        draw = self.rng.random(size)
        zeros = draw == 0.0
        while zeros.any():
            draw[zeros] = self.rng.random(int(zeros.sum()))
            zeros = draw == 0.0
        return draw
