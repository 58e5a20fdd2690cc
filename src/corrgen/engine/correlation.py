"""
Sequential pairwise correlation of standard-normal sequences.

Each requested pair ``(a, b)`` rewrites ``b`` as
``rho * X_a + sqrt(1 - rho^2) * X_b``. Pairs are visited in nested-loop
order over the numeric variables, so with more than two correlated variables
later pairs can partially undo earlier ones. This is an approximation, not a
joint Cholesky factorization of the full matrix.
"""

import math

import numpy as np

from ..runtime.logging_utils import get_logger
from ..schema.validation import ConfigurationError

PASS_MODES = ("unique", "ordered")


def checked_rho(rho, var1, var2):
    """Return ``rho`` as a float, rejecting values that break ``sqrt(1 - rho^2)``."""

    try:
        value = float(rho)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Correlation ({var1}, {var2}) value {rho!r} must be a finite number"
        ) from None
    if not math.isfinite(value) or abs(value) > 1.0:
        raise ConfigurationError(
            f"Correlation ({var1}, {var2}) value {value!r} must lie in [-1, 1]"
        )
    return value


def correlate_pair(base, other, rho):
    return rho * base + math.sqrt(1.0 - rho * rho) * other


def apply_correlations(normals, matrix, pass_mode="unique", logger=None):
    """Apply ``matrix`` to independent standard-normal sequences.

    Args:
        normals: Mapping of numeric variable name to an equal-length sequence.
        matrix: Nested mapping ``matrix[a][b] -> rho``; visiting order follows
            the matrix keys.
        pass_mode: ``"unique"`` applies each symmetric pair once, the first
            time the nested loop meets it. ``"ordered"`` applies every ordered
            pair, so a symmetric entry fires twice.

    Returns:
        A new mapping; ``normals`` is left untouched.
    """
    if pass_mode not in PASS_MODES:
        raise ValueError(f"pass_mode must be one of: {', '.join(PASS_MODES)}")

    log = get_logger(logger)
    adjusted = {
        name: np.array(values, dtype=float, copy=True)
        for name, values in normals.items()
    }
    lengths = {values.size for values in adjusted.values()}
    if len(lengths) > 1:
        raise ValueError("All normal sequences must have the same length")

    names = [name for name in matrix if name in adjusted]
    applied = set()
    for a in names:
        row = matrix[a]
        for b in names:
            if a == b:
                continue
            rho = row.get(b, 0.0)
            if rho == 0:
                continue
            key = frozenset((a, b))
            if pass_mode == "unique" and key in applied:
                continue
            rho = checked_rho(rho, a, b)
            adjusted[b] = correlate_pair(adjusted[a], adjusted[b], rho)
            applied.add(key)
            log.debug(f"Correlated '{b}' with '{a}' (rho={rho:.3f})")

    return adjusted
