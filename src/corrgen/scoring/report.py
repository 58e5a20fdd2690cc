"""
Target versus realized correlation for every requested pair.

Sequential pairwise correlation is approximate; this report is where the
deviation from the requested matrix becomes visible.
"""

import math

from ..schema import defaults
from ..schema.config import effective_correlations
from .statistics import pearson_correlation


def build_correlation_report(
    table,
    variables,
    correlations,
    mode=defaults.DEFAULT_INVALID_CORRELATION_MODE,
):
    # Later requests for the same pair overwrite the target, as in the matrix.
    targets = {}
    pairs = effective_correlations(list(variables), correlations, mode=mode, warn=False)
    for var1, var2, rho in pairs:
        key = frozenset((var1, var2))
        if key in targets:
            targets[key] = (targets[key][0], targets[key][1], rho)
        else:
            targets[key] = (var1, var2, rho)

    entries = []
    for var1, var2, target in targets.values():
        if len(table) >= 2:
            realized = pearson_correlation(table[var1], table[var2])
        else:
            realized = float("nan")
        defined = not math.isnan(realized)
        entries.append(
            {
                "var1": var1,
                "var2": var2,
                "target": target,
                "realized": realized,
                "defined": defined,
                "deviation": abs(realized - target) if defined else None,
            }
        )
    return entries


def summarize_correlation_report(entries):
    deviations = [entry["deviation"] for entry in entries if entry["defined"]]
    return {
        "pairs": len(entries),
        "defined": len(deviations),
        "undefined": len(entries) - len(deviations),
        "max_deviation": max(deviations) if deviations else None,
        "mean_deviation": (sum(deviations) / len(deviations)) if deviations else None,
    }
