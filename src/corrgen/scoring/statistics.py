"""
Descriptive statistics and Pearson correlation for generated columns.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..engine.constraints import column_median
from ..schema import defaults
from ..schema.config import effective_variables
from ..schema.models import VariableKind


@dataclass(frozen=True)
class NumericStatistics:
    """Summary of an integer or float column at full precision."""

    count: int
    min: float
    max: float
    mean: float
    median: float

    def display(self, decimals: int = defaults.DISPLAY_DECIMALS) -> dict[str, Any]:
        """Values for presentation; mean and median are rounded."""

        return {
            "min": self.min,
            "max": self.max,
            "mean": round(self.mean, decimals),
            "median": round(self.median, decimals),
        }


@dataclass(frozen=True)
class BooleanStatistics:
    true_count: int
    false_count: int

    @property
    def count(self) -> int:
        return self.true_count + self.false_count

    def display(self) -> dict[str, Any]:
        return {"true_count": self.true_count, "false_count": self.false_count}


def compute_statistics(values, kind):
    """Statistics for one column, or None for string columns.

    Raises:
        ValueError: If ``values`` is empty.
    """
    kind = VariableKind.parse(kind)
    arr = np.asarray(values)
    if arr.size == 0:
        raise ValueError("Cannot compute statistics for an empty column")

    if kind is VariableKind.BOOLEAN:
        true_count = int(np.count_nonzero(arr.astype(bool)))
        return BooleanStatistics(true_count=true_count, false_count=arr.size - true_count)

    if kind.is_numeric:
        numeric = arr.astype(float)
        ordered = np.sort(numeric)
        return NumericStatistics(
            count=int(numeric.size),
            min=float(ordered[0]),
            max=float(ordered[-1]),
            mean=float(numeric.mean()),
            median=column_median(ordered),
        )

    return None


def describe_table(table, variables):
    """Statistics for every schema column of ``table``.

    Columns are skipped when the schema does not know them; every entry is
    None for an empty table.
    """
    lookup = effective_variables(list(variables))
    summary = {}
    for name in table.columns:
        spec = lookup.get(name)
        if spec is None:
            continue
        if len(table) == 0:
            summary[name] = None
            continue
        summary[name] = compute_statistics(table[name].to_numpy(), spec.kind)
    return summary


def pearson_correlation(x, y):
    """Pearson r of two equal-length numeric sequences.

    Returns NaN when either sequence is constant; callers must treat that as
    an undefined correlation, not as zero.
    """
    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)
    if xs.shape != ys.shape:
        raise ValueError("Sequences must have the same length")
    if xs.size < 2:
        raise ValueError("Pearson correlation needs at least two values")

    if np.all(xs == xs[0]) or np.all(ys == ys[0]):
        return float("nan")

    dx = xs - xs.mean()
    dy = ys - ys.mean()
    denominator = math.sqrt(float(np.sum(dx * dx))) * math.sqrt(float(np.sum(dy * dy)))
    if denominator == 0:
        return float("nan")
    r = float(np.sum(dx * dy)) / denominator
    return max(-1.0, min(1.0, r))
