"""
Mapping of standard-normal draws into bounded, typed numeric columns.
"""

import math

import numpy as np

from ..schema import defaults
from ..schema.models import VariableKind
from ..schema.validation import representable_bounds

# Abramowitz and Stegun 7.1.26, absolute error below 1.5e-7.
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911

_SQRT2 = math.sqrt(2.0)


def erf(x):
    values = np.asarray(x, dtype=float)
    sign = np.where(values < 0, -1.0, 1.0)
    ax = np.abs(values)
    t = 1.0 / (1.0 + _P * ax)
    y = ((((_A5 * t + _A4) * t + _A3) * t + _A2) * t + _A1) * t
    result = sign * (1.0 - y * np.exp(-ax * ax))
    if result.ndim == 0:
        return float(result)
    return result


def normal_cdf(z):
    return 0.5 * (1.0 + erf(np.asarray(z, dtype=float) / _SQRT2))


def map_to_range(z, lower, upper):
    """Rescale standard-normal draws into ``[lower, upper]`` through the CDF."""

    u = np.asarray(normal_cdf(z), dtype=float)
    return float(lower) + (float(upper) - float(lower)) * u


def clamp(values, lower, upper):
    # Same nesting as max(lower, min(upper, v)): an inverted range yields lower.
    return np.maximum(float(lower), np.minimum(float(upper), values))


def _round_half_up(values, scale):
    return np.floor(np.asarray(values, dtype=float) * scale + 0.5) / scale


def round_for_kind(values, kind, lower, upper, decimals=defaults.FLOAT_DECIMALS):
    """Round to whole numbers (integer) or ``decimals`` places (float).

    Rounded values are pulled back inside ``[lower, upper]`` when the range
    holds at least one representable value. Schemas without one are rejected
    by ``validate_bounds`` before generation.
    """
    kind = VariableKind.parse(kind)
    if kind is VariableKind.INTEGER:
        scale = 1.0
    elif kind is VariableKind.FLOAT:
        scale = float(10**decimals)
    else:
        raise ValueError(f"Cannot round values for non-numeric kind '{kind.value}'")

    if kind is VariableKind.INTEGER:
        rounded = _round_half_up(values, scale)
    else:
        rounded = np.round(np.asarray(values, dtype=float), decimals)

    lo, hi = representable_bounds(lower, upper, scale)
    if lo <= hi:
        rounded = np.clip(rounded, lo, hi)

    if kind is VariableKind.INTEGER:
        return rounded.astype(np.int64)
    return rounded
