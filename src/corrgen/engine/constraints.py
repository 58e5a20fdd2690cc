"""
Post-hoc translation of numeric columns towards target statistics.

Both adjustments add one constant to every element, so variance and rank
order are preserved. Applying the median shift after the mean shift does
not keep the mean exact.
"""

import numpy as np

from ..runtime.logging_utils import get_logger


def column_median(values):
    ordered = np.sort(np.asarray(values, dtype=float))
    n = ordered.size
    if n == 0:
        raise ValueError("Cannot compute the median of an empty sequence")
    mid = n // 2
    if n % 2 == 0:
        return float((ordered[mid - 1] + ordered[mid]) / 2.0)
    return float(ordered[mid])


def adjust_to_mean(values, target):
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return arr.copy()
    return arr + (float(target) - float(arr.mean()))


def adjust_to_median(values, target):
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return arr.copy()
    return arr + (float(target) - column_median(arr))


def apply_constraints(values, spec, logger=None):
    """Apply the mean then the median target of ``spec`` when enabled."""

    targets = spec.active_targets()
    arr = np.asarray(values, dtype=float)
    if not targets:
        return arr

    log = get_logger(logger)
    if "mean" in targets:
        arr = adjust_to_mean(arr, targets["mean"])
        log.debug(f"Shifted '{spec.name}' to mean {targets['mean']}")
    if "median" in targets:
        arr = adjust_to_median(arr, targets["median"])
        log.debug(f"Shifted '{spec.name}' to median {targets['median']}")
    return arr
