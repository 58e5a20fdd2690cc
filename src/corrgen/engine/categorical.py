"""
Independent draws for boolean and string columns.

These columns never take part in correlation.
"""

import numpy as np

from ..schema import defaults


def generate_boolean_column(rng, n_rows):
    n = max(0, int(n_rows))
    return rng.random(n) < 0.5


def generate_string_column(
    rng,
    n_rows,
    length=defaults.DEFAULT_TOKEN_LENGTH,
    alphabet=defaults.TOKEN_ALPHABET,
):
    """Opaque lowercase base-36 tokens, one per row."""

    n = max(0, int(n_rows))
    length = max(1, int(length))
    if n == 0:
        return np.empty(0, dtype=object)
    letters = np.array(list(alphabet))
    codes = rng.choice(len(letters), size=(n, length), replace=True)
    tokens = np.empty(n, dtype=object)
    for idx, row in enumerate(codes):
        tokens[idx] = "".join(letters[row])
    return tokens
