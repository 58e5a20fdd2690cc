"""Schema entries consumed by the generation engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from . import defaults


class VariableKind(str, Enum):
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"

    @classmethod
    def parse(cls, value) -> "VariableKind":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower() if value is not None else ""
        for kind in cls:
            if kind.value == text:
                return kind
        options = ", ".join(kind.value for kind in cls)
        raise ValueError(f"Unknown variable type '{value}'. Expected one of: {options}")

    @property
    def is_numeric(self) -> bool:
        return self in (VariableKind.INTEGER, VariableKind.FLOAT)


@dataclass(frozen=True)
class VariableSpec:
    """One named column of the schema."""

    name: str
    kind: VariableKind = VariableKind.INTEGER
    min: float = defaults.DEFAULT_MIN
    max: float = defaults.DEFAULT_MAX
    target_mean: float | None = None
    target_median: float | None = None
    use_constraints: bool = False

    @property
    def is_numeric(self) -> bool:
        return self.kind.is_numeric

    def active_targets(self) -> dict[str, float]:
        """Targets that apply during generation, in application order."""

        if not self.use_constraints or not self.is_numeric:
            return {}
        targets = {}
        for key, value in (("mean", self.target_mean), ("median", self.target_median)):
            if value is None or math.isnan(value):
                continue
            targets[key] = float(value)
        return targets


@dataclass(frozen=True)
class CorrelationSpec:
    """A requested Pearson correlation between two numeric variables."""

    var1: str
    var2: str
    value: float = 0.0

    def pair(self) -> tuple[str, str]:
        return (self.var1, self.var2)
