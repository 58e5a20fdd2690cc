"""
Sample YAML configurations stored as strings.
"""

import copy
from typing import Any

import yaml

CONFIG_BASIC = """
metadata:
  name: "basic_demo"
  version: "1.0"
  n_rows: 100

variables:
  - name: "age"
    type: "integer"
    min: 18
    max: 90

  - name: "score"
    type: "float"
    min: 0
    max: 1

  - name: "subscribed"
    type: "boolean"

  - name: "customer_ref"
    type: "string"
"""

CONFIG_CORRELATED = """
metadata:
  name: "correlated_demo"
  version: "1.0"
  n_rows: 5000

variables:
  - name: "x"
    type: "float"
    min: 0
    max: 1

  - name: "y"
    type: "float"
    min: 0
    max: 1

correlations:
  - { var1: "x", var2: "y", value: 0.8 }
"""

CONFIG_CONSTRAINED = """
metadata:
  name: "constrained_demo"
  version: "1.0"
  n_rows: 1000

variables:
  - name: "salary"
    type: "integer"
    min: 20000
    max: 150000
    use_constraints: true
    target_mean: 60000

  - name: "tenure_years"
    type: "float"
    min: 0
    max: 40
    use_constraints: true
    target_median: 8
"""

CONFIG_MIXED = """
metadata:
  name: "mixed_demo"
  version: "1.0"
  n_rows: 2000
  seed: 7
  correlation_pass: "unique"

variables:
  - name: "height_cm"
    type: "float"
    min: 150
    max: 200
    use_constraints: true
    target_mean: 172
    target_median: 171

  - name: "weight_kg"
    type: "float"
    min: 45
    max: 120

  - name: "shoe_size"
    type: "integer"
    min: 35
    max: 48

  - name: "smoker"
    type: "boolean"

  - name: "member_id"
    type: "string"

correlations:
  - { var1: "height_cm", var2: "weight_kg", value: 0.7 }
  - { var1: "height_cm", var2: "shoe_size", value: 0.6 }
  - { var1: "smoker", var2: "weight_kg", value: 0.3 }
"""


_SAMPLE_CONFIGS = {
    "basic": CONFIG_BASIC,
    "correlated": CONFIG_CORRELATED,
    "constrained": CONFIG_CONSTRAINED,
    "mixed": CONFIG_MIXED,
}


def available_sample_configs() -> list[str]:
    """Return sorted names for all built-in sample configurations."""

    return sorted(_SAMPLE_CONFIGS.keys())


def load_config(config: Any) -> dict[str, Any]:
    """Parse and normalize a config from YAML text or dict input."""

    if isinstance(config, dict):
        return copy.deepcopy(config)

    if isinstance(config, str):
        parsed = yaml.safe_load(config)
        if parsed is None:
            raise ValueError("Config text is empty")
        if not isinstance(parsed, dict):
            raise ValueError("Config must parse to a mapping")
        return parsed

    raise TypeError("Config must be a dict or YAML string")


def get_sample_config(name: str) -> dict[str, Any]:
    """Load one of the built-in sample configurations by name."""

    key = str(name).strip().lower()
    if key not in _SAMPLE_CONFIGS:
        options = ", ".join(available_sample_configs())
        raise ValueError(f"Unknown sample config '{name}'. Available: {options}")
    return load_config(_SAMPLE_CONFIGS[key])


def get_sample_yaml(name: str) -> str:
    """Return the raw YAML text for a built-in sample config."""

    key = str(name).strip().lower()
    if key not in _SAMPLE_CONFIGS:
        options = ", ".join(available_sample_configs())
        raise ValueError(f"Unknown sample config '{name}'. Available: {options}")
    return _SAMPLE_CONFIGS[key].lstrip()
