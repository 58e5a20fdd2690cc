"""
Table assembly: one generation pass from schema to DataFrame.
"""

import pandas as pd

from ..runtime.logging_utils import get_logger
from ..runtime.rng import RNG
from ..schema import defaults
from ..schema.config import build_correlation_matrix, effective_variables
from ..schema.models import VariableKind
from ..schema.validation import ConfigurationError, validate_bounds
from .categorical import generate_boolean_column, generate_string_column
from .constraints import apply_constraints
from .correlation import apply_correlations
from .mapping import clamp, map_to_range, round_for_kind
from .sampling import sample_standard_normal


def build_numeric_column(normals, spec, logger=None):
    """Map, constrain, clamp and round one numeric variable."""

    values = map_to_range(normals, spec.min, spec.max)
    values = apply_constraints(values, spec, logger=logger)
    values = clamp(values, spec.min, spec.max)
    return round_for_kind(values, spec.kind, spec.min, spec.max)


def _count_pairs(matrix):
    names = list(matrix)
    return sum(
        1
        for i, a in enumerate(names)
        for b in names[i + 1 :]
        if matrix[a][b] != 0
    )


def generate_table(
    variables,
    correlations=(),
    n_rows=defaults.DEFAULT_ROWS,
    seed=defaults.DEFAULT_SEED,
    *,
    invalid_correlation_mode=defaults.DEFAULT_INVALID_CORRELATION_MODE,
    invalid_bounds_mode=defaults.DEFAULT_INVALID_BOUNDS_MODE,
    correlation_pass=defaults.DEFAULT_CORRELATION_PASS,
    token_length=defaults.DEFAULT_TOKEN_LENGTH,
    logger=None,
):
    """Generate ``n_rows`` rows for ``variables``.

    Duplicate variable names keep their last definition. ``n_rows <= 0``
    gives an empty table that still carries the column names.

    Raises:
        ConfigurationError: For inverted bounds (unless
            ``invalid_bounds_mode="collapse"``) or unusable correlations.
    """
    log = get_logger(logger)
    variables = list(variables)
    n_rows = max(0, int(n_rows))

    _, bound_errors = validate_bounds(variables, invalid_bounds_mode)
    if bound_errors:
        raise ConfigurationError("; ".join(bound_errors))

    matrix = build_correlation_matrix(
        variables, correlations, mode=invalid_correlation_mode, logger=log
    )
    lookup = effective_variables(variables)

    columns = {}
    normals = {}
    for position, (name, spec) in enumerate(lookup.items()):
        if spec.kind is VariableKind.BOOLEAN:
            rng = RNG.for_column(seed, "boolean", position, name)
            columns[name] = generate_boolean_column(rng, n_rows)
        elif spec.kind is VariableKind.STRING:
            rng = RNG.for_column(seed, "string", position, name)
            columns[name] = generate_string_column(rng, n_rows, length=token_length)
        else:
            rng = RNG.for_column(seed, "normal", position, name)
            normals[name] = sample_standard_normal(rng, n_rows)

    normals = apply_correlations(
        normals, matrix, pass_mode=correlation_pass, logger=log
    )
    for name, z in normals.items():
        columns[name] = build_numeric_column(z, lookup[name], logger=log)

    log.info(
        f"[GENERATE] rows={n_rows} columns={len(lookup)} "
        f"numeric={len(normals)} correlated_pairs={_count_pairs(matrix)} "
        f"pass={correlation_pass}"
    )
    return pd.DataFrame(
        {name: columns[name] for name in lookup},
        index=pd.RangeIndex(n_rows),
    )
