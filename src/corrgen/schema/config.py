"""
Configuration parsing, validation, and correlation matrix construction.
"""

import math

from ..runtime.logging_utils import get_logger
from . import defaults
from .models import CorrelationSpec, VariableKind, VariableSpec
from .validation import (
    ConfigurationError,
    correlation_ignore_reason,
    correlation_value_problem,
    to_float_or_none,
    validate_bounds,
    validate_correlations,
    validate_metadata,
    validate_variable_structure,
    variable_entry_errors,
)

# Keys accepted from form-style payloads (camelCase) and their config names.
_FIELD_ALIASES = {
    "kind": "type",
    "targetMean": "target_mean",
    "targetMedian": "target_median",
    "useConstraints": "use_constraints",
}

__all__ = [
    "ConfigurationError",
    "build_correlation_matrix",
    "build_correlation_specs",
    "build_variable_specs",
    "effective_correlations",
    "effective_variables",
    "numeric_variable_names",
    "parse_correlation",
    "parse_variable",
    "resolve_choice",
    "resolve_correlation_value",
    "resolve_run_options",
    "validate_config",
]


def _normalize_keys(entry):
    if not isinstance(entry, dict):
        return entry
    normalized = {}
    for key, value in entry.items():
        normalized[_FIELD_ALIASES.get(key, key)] = value
    return normalized


def _normalize_entries(entries):
    if not isinstance(entries, list):
        return entries
    return [_normalize_keys(entry) for entry in entries]


def resolve_choice(value, allowed, fallback):
    text = str(value).strip().lower() if value is not None else ""
    if text in allowed:
        return text
    return fallback


def parse_variable(entry, index=0):
    """Build a :class:`VariableSpec` from one raw config entry."""

    entry = _normalize_keys(entry)
    errors = variable_entry_errors(entry, index)
    if errors:
        raise ConfigurationError("; ".join(errors))

    kind = VariableKind.parse(entry.get("type", VariableKind.INTEGER.value))
    min_val = to_float_or_none(entry.get("min"))
    max_val = to_float_or_none(entry.get("max"))
    return VariableSpec(
        name=entry["name"].strip(),
        kind=kind,
        min=defaults.DEFAULT_MIN if min_val is None else min_val,
        max=defaults.DEFAULT_MAX if max_val is None else max_val,
        target_mean=to_float_or_none(entry.get("target_mean")),
        target_median=to_float_or_none(entry.get("target_median")),
        use_constraints=bool(entry.get("use_constraints", False)),
    )


def build_variable_specs(config):
    entries = config.get("variables", [])
    if not isinstance(entries, list):
        raise ConfigurationError("Config must include a 'variables' list")
    return [parse_variable(entry, idx) for idx, entry in enumerate(entries)]


def parse_correlation(entry, index=0):
    entry = _normalize_keys(entry)
    if not isinstance(entry, dict):
        raise ConfigurationError(f"correlations[{index}] must be a mapping")
    raw_value = entry.get("value", 0.0)
    value = to_float_or_none(raw_value)
    if value is None:
        raise ConfigurationError(
            f"correlations[{index}] value {raw_value!r} must be a finite number"
        )
    return CorrelationSpec(
        var1=str(entry.get("var1") or "").strip(),
        var2=str(entry.get("var2") or "").strip(),
        value=value,
    )


def build_correlation_specs(config):
    entries = config.get("correlations") or []
    if not isinstance(entries, list):
        raise ConfigurationError("'correlations' must be a list when provided")
    return [parse_correlation(entry, idx) for idx, entry in enumerate(entries)]


def effective_variables(variables):
    """Map each name to its last definition, ordered by first appearance."""

    lookup = {}
    for spec in variables:
        lookup[spec.name] = spec
    return lookup


def numeric_variable_names(variables):
    lookup = effective_variables(variables)
    return [name for name, spec in lookup.items() if spec.is_numeric]


def resolve_correlation_value(
    corr, mode=defaults.DEFAULT_INVALID_CORRELATION_MODE, logger=None, warn=True
):
    """Return a usable rho for ``corr`` or raise :class:`ConfigurationError`.

    Non-finite values are always rejected. Values outside [-1, 1] are
    rejected in ``error`` mode and clamped in ``clamp`` mode.
    """

    problem = correlation_value_problem(corr.value)
    if problem is None:
        return float(corr.value)

    pair = f"({corr.var1}, {corr.var2})"
    message = f"Correlation {pair} value {corr.value!r} {problem}"
    rho = to_float_or_none(corr.value)
    if mode != "clamp" or rho is None or not math.isfinite(rho):
        raise ConfigurationError(message)

    clamped = max(-1.0, min(1.0, rho))
    if warn:
        get_logger(logger).warning(f"{message}; clamped to {clamped}")
    return clamped


def effective_correlations(
    variables,
    correlations,
    mode=defaults.DEFAULT_INVALID_CORRELATION_MODE,
    logger=None,
    warn=True,
):
    """Correlation requests that take effect, as ``(var1, var2, rho)`` tuples."""

    log = get_logger(logger)
    lookup = effective_variables(variables)
    resolved = []
    for corr in correlations:
        reason = correlation_ignore_reason(corr.var1, corr.var2, lookup)
        if reason is not None:
            log.debug(f"Ignoring correlation ({corr.var1}, {corr.var2}): {reason}")
            continue
        rho = resolve_correlation_value(corr, mode=mode, logger=log, warn=warn)
        resolved.append((corr.var1, corr.var2, rho))
    return resolved


def build_correlation_matrix(
    variables,
    correlations,
    mode=defaults.DEFAULT_INVALID_CORRELATION_MODE,
    logger=None,
):
    """Identity matrix over numeric variables, overwritten by each valid pair."""

    numeric = numeric_variable_names(variables)
    matrix = {a: {b: 1.0 if a == b else 0.0 for b in numeric} for a in numeric}
    pairs = effective_correlations(variables, correlations, mode=mode, logger=logger)
    for var1, var2, rho in pairs:
        matrix[var1][var2] = rho
        matrix[var2][var1] = rho
    return matrix


def resolve_run_options(metadata):
    """Normalized generation options read from a config ``metadata`` block."""

    metadata = metadata if isinstance(metadata, dict) else {}
    raw_length = metadata.get("token_length", defaults.DEFAULT_TOKEN_LENGTH)
    try:
        token_length = max(1, int(raw_length))
    except (TypeError, ValueError):
        token_length = defaults.DEFAULT_TOKEN_LENGTH
    return {
        "invalid_correlation_mode": resolve_choice(
            metadata.get("invalid_correlation_mode"),
            defaults.INVALID_CORRELATION_MODES,
            defaults.DEFAULT_INVALID_CORRELATION_MODE,
        ),
        "invalid_bounds_mode": resolve_choice(
            metadata.get("invalid_bounds_mode"),
            defaults.INVALID_BOUNDS_MODES,
            defaults.DEFAULT_INVALID_BOUNDS_MODE,
        ),
        "correlation_pass": resolve_choice(
            metadata.get("correlation_pass"),
            defaults.CORRELATION_PASS_MODES,
            defaults.DEFAULT_CORRELATION_PASS,
        ),
        "token_length": token_length,
    }


def validate_config(config):
    """Validate a configuration dictionary.

    This is the main entry point that orchestrates all validation steps.

    Args:
        config: The configuration dictionary to validate

    Returns:
        List of warning messages

    Raises:
        ConfigurationError: If the config cannot be generated
    """
    if not isinstance(config, dict):
        raise ConfigurationError("Config must be a mapping")

    warnings = []
    errors = []

    metadata = config.get("metadata", {})
    warnings.extend(validate_metadata(metadata))
    options = resolve_run_options(metadata)

    # Validate basic variable structure before parsing anything
    struct_warnings, struct_errors = validate_variable_structure(
        _normalize_entries(config.get("variables", []))
    )
    warnings.extend(struct_warnings)
    errors.extend(struct_errors)
    if errors:
        raise ConfigurationError("; ".join(errors))

    variables = build_variable_specs(config)
    bound_warnings, bound_errors = validate_bounds(
        variables, options["invalid_bounds_mode"]
    )
    warnings.extend(bound_warnings)
    errors.extend(bound_errors)

    corr_warnings, corr_errors = validate_correlations(
        _normalize_entries(config.get("correlations")),
        effective_variables(variables),
        options["invalid_correlation_mode"],
    )
    warnings.extend(corr_warnings)
    errors.extend(corr_errors)

    if errors:
        raise ConfigurationError("; ".join(errors))

    return warnings
