"""Public runtime models for the import-first API."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from ..schema.models import CorrelationSpec, VariableSpec


@dataclass
class RunConfig:
    """Top-level runtime options; unset fields fall back to config metadata."""

    n_rows: int | None = None
    seed: int | None = None
    log_level: str | None = None
    log_dir: str | None = None
    output_path: str | None = None
    save_output: bool | None = None
    invalid_correlation_mode: str | None = None
    invalid_bounds_mode: str | None = None
    correlation_pass: str | None = None
    token_length: int | None = None


@dataclass
class GenerateResult:
    """Result payload returned by high-level generation APIs."""

    dataframe: pd.DataFrame
    statistics: dict[str, Any]
    correlation_report: list[dict[str, Any]]
    variables: list[VariableSpec]
    correlations: list[CorrelationSpec]
    seed: int
    log_path: Path
    output_path: Path | None = None
    warnings: list[str] = field(default_factory=list)
    runtime_notes: list[str] = field(default_factory=list)

    def records(self) -> list[dict[str, Any]]:
        """Row-major view of the table: one mapping per generated row."""

        return self.dataframe.to_dict("records")

    def max_correlation_deviation(self) -> float | None:
        deviations = [
            entry["deviation"] for entry in self.correlation_report if entry["defined"]
        ]
        return max(deviations) if deviations else None
