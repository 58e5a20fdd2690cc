"""
Configuration validation split into focused validators.

Each validator inspects one section of a config (metadata, variables,
correlations) and returns warning/error messages instead of raising, so the
caller can report every problem at once.
"""

import math
from typing import Any

from . import defaults
from .models import VariableKind, VariableSpec


class ConfigurationError(ValueError):
    """Raised when a schema or correlation request cannot be generated."""


_NUMERIC_FIELDS = ("min", "max", "target_mean", "target_median")


def to_float_or_none(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def validate_metadata(metadata: dict[str, Any]) -> list[str]:
    """Validate metadata section of config.

    Args:
        metadata: The metadata dictionary from config

    Returns:
        List of warning messages
    """
    warnings = []

    if not isinstance(metadata, dict):
        return ["metadata must be a mapping; ignoring it"]

    log_level = metadata.get("log_level")
    if log_level is not None and log_level not in defaults.LOG_LEVELS:
        warnings.append("metadata.log_level must be info or quiet")

    for key, allowed in (
        ("invalid_correlation_mode", defaults.INVALID_CORRELATION_MODES),
        ("invalid_bounds_mode", defaults.INVALID_BOUNDS_MODES),
        ("correlation_pass", defaults.CORRELATION_PASS_MODES),
    ):
        value = metadata.get(key)
        if value is not None and str(value).strip().lower() not in allowed:
            warnings.append(f"metadata.{key} must be one of: {', '.join(allowed)}")

    for key, minimum in (("n_rows", 0), ("seed", None), ("token_length", 1)):
        value = metadata.get(key)
        if value is None:
            continue
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            warnings.append(f"metadata.{key} must be an integer")
            continue
        if minimum is not None and parsed < minimum:
            warnings.append(f"metadata.{key} must be >= {minimum}")

    save_output = metadata.get("save_output")
    if save_output is not None and not isinstance(save_output, bool):
        warnings.append("metadata.save_output must be a boolean")

    for key in ("output_path", "log_dir"):
        value = metadata.get(key)
        if value is not None and (not isinstance(value, str) or not value.strip()):
            warnings.append(f"metadata.{key} must be a non-empty string")

    return warnings


def variable_entry_errors(entry: Any, index: int) -> list[str]:
    """Problems that prevent one raw variable entry from being parsed."""

    label = f"variables[{index}]"
    if not isinstance(entry, dict):
        return [f"{label} must be a mapping"]

    errors = []
    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append(f"{label} is missing a non-empty 'name'")
    else:
        label = f"Variable '{name}'"

    raw_kind = entry.get("type", VariableKind.INTEGER.value)
    try:
        VariableKind.parse(raw_kind)
    except ValueError as exc:
        errors.append(f"{label}: {exc}")

    for key in _NUMERIC_FIELDS:
        value = entry.get(key)
        if value is None:
            continue
        parsed = to_float_or_none(value)
        if parsed is None or math.isinf(parsed):
            errors.append(f"{label} {key} must be a finite number")
        elif math.isnan(parsed) and key in ("min", "max"):
            errors.append(f"{label} {key} must be a finite number")

    use_constraints = entry.get("use_constraints")
    if use_constraints is not None and not isinstance(use_constraints, bool):
        errors.append(f"{label} use_constraints must be a boolean")

    return errors


def validate_variable_structure(
    entries: Any,
) -> tuple[list[str], list[str]]:
    """Validate the raw ``variables`` list.

    Returns:
        Tuple of (warnings, errors)
    """
    warnings = []
    errors = []

    if not isinstance(entries, list):
        raise ConfigurationError("Config must include a 'variables' list")

    if not entries:
        warnings.append("Config declares no variables; tables will have no columns")

    names = [
        entry["name"].strip()
        for entry in entries
        if isinstance(entry, dict) and isinstance(entry.get("name"), str)
        and entry["name"].strip()
    ]
    duplicates = sorted({x for x in names if names.count(x) > 1})
    if duplicates:
        warnings.append(
            f"Duplicate variable names {duplicates}; the last definition wins"
        )

    for index, entry in enumerate(entries):
        errors.extend(variable_entry_errors(entry, index))
        if not isinstance(entry, dict):
            continue
        kind = str(entry.get("type", "")).strip().lower()
        has_targets = (
            entry.get("target_mean") is not None
            or entry.get("target_median") is not None
        )
        if kind in ("string", "boolean") and has_targets:
            warnings.append(
                f"Variable '{entry.get('name')}' is {kind}; targets are ignored"
            )
        elif has_targets and not entry.get("use_constraints"):
            warnings.append(
                f"Variable '{entry.get('name')}' has targets but use_constraints is off"
            )

    return warnings, errors


def rounding_scale(kind: VariableKind, decimals: int = defaults.FLOAT_DECIMALS):
    if kind is VariableKind.INTEGER:
        return 1.0
    return float(10**decimals)


def representable_bounds(lower: float, upper: float, scale: float):
    """Smallest and largest values at ``1 / scale`` precision inside the range."""

    lo = math.ceil(round(float(lower) * scale, 6)) / scale
    hi = math.floor(round(float(upper) * scale, 6)) / scale
    return lo, hi


def validate_bounds(
    variables: list[VariableSpec], mode: str
) -> tuple[list[str], list[str]]:
    """Check ``min <= max`` for numeric variables.

    In ``collapse`` mode an inverted range is tolerated and every generated
    value is clamped to ``min``. A range holding no whole number (integer) or
    no two-decimal value (float) is always an error.
    """
    warnings = []
    errors = []
    for spec in variables:
        if not spec.is_numeric:
            continue
        if spec.min <= spec.max:
            lo, hi = representable_bounds(
                spec.min, spec.max, rounding_scale(spec.kind)
            )
            if lo > hi:
                unit = "whole number" if spec.kind is VariableKind.INTEGER else (
                    f"{defaults.FLOAT_DECIMALS}-decimal value"
                )
                errors.append(
                    f"Variable '{spec.name}' range [{spec.min}, {spec.max}] "
                    f"contains no {unit}"
                )
            continue
        message = f"Variable '{spec.name}' has min {spec.min} > max {spec.max}"
        if mode == "collapse":
            warnings.append(f"{message}; every value collapses to {spec.min}")
        else:
            errors.append(message)
    return warnings, errors


def correlation_ignore_reason(var1: Any, var2: Any, lookup: dict[str, VariableSpec]):
    """Why a correlation pair has no effect, or None when it applies."""

    if not var1 or not var2:
        return "has an empty variable name"
    if var1 == var2:
        return "correlates a variable with itself"
    for name in (var1, var2):
        spec = lookup.get(name)
        if spec is None:
            return f"references unknown variable '{name}'"
        if not spec.is_numeric:
            return f"references non-numeric variable '{name}'"
    return None


def correlation_value_problem(value: Any) -> str | None:
    parsed = to_float_or_none(value)
    if parsed is None or not math.isfinite(parsed):
        return "must be a finite number"
    if abs(parsed) > 1.0:
        return "must lie in [-1, 1]"
    return None


def validate_correlations(
    entries: Any, lookup: dict[str, VariableSpec], mode: str
) -> tuple[list[str], list[str]]:
    """Validate the raw ``correlations`` list against parsed variables.

    Returns:
        Tuple of (warnings, errors)
    """
    warnings = []
    errors = []

    if entries is None:
        return warnings, errors
    if not isinstance(entries, list):
        raise ConfigurationError("'correlations' must be a list when provided")

    for index, entry in enumerate(entries):
        label = f"correlations[{index}]"
        if not isinstance(entry, dict):
            errors.append(f"{label} must be a mapping")
            continue
        var1 = entry.get("var1")
        var2 = entry.get("var2")
        reason = correlation_ignore_reason(var1, var2, lookup)
        if reason is not None:
            warnings.append(f"{label} {reason}; ignoring it")
            continue

        value = entry.get("value", 0.0)
        problem = correlation_value_problem(value)
        if problem is None:
            continue
        message = f"{label} ({var1}, {var2}) value {value!r} {problem}"
        parsed = to_float_or_none(value)
        if mode == "clamp" and parsed is not None and math.isfinite(parsed):
            warnings.append(f"{message}; clamping")
            continue
        errors.append(message)

    return warnings, errors
