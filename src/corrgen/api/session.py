"""Holder for the most recent table produced by generation or import."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from ..schema.config import effective_variables
from ..schema.models import VariableSpec
from ..scoring.statistics import compute_statistics, pearson_correlation
from ..storage.tables import ImportedTable, export_table, import_csv
from .models import GenerateResult, RunConfig
from .synthesizer import CorrgenSynthesizer


class DatasetSession:
    """Keeps the last good table.

    A successful generation or import replaces the table wholesale; a failed
    one raises and leaves the previous table in place.
    """

    def __init__(self):
        self.table: pd.DataFrame | None = None
        self.variables: list[VariableSpec] = []
        self.source: str | None = None

    @property
    def has_table(self) -> bool:
        return self.table is not None

    def _replace(self, table, variables, source):
        self.table = table
        self.variables = list(variables)
        self.source = source

    def _require_table(self) -> pd.DataFrame:
        if self.table is None:
            raise RuntimeError("No table has been generated or imported yet")
        return self.table

    def generate(
        self, config: Any, run_config: RunConfig | None = None
    ) -> GenerateResult:
        result = CorrgenSynthesizer(config, run_config).generate()
        self._replace(result.dataframe, result.variables, "generated")
        return result

    def load_csv(self, source: Any) -> ImportedTable:
        imported = import_csv(source)
        label = str(source) if isinstance(source, (str, Path)) else "upload"
        self._replace(imported.table, imported.variables, label)
        return imported

    def column_statistics(self, name: str):
        table = self._require_table()
        spec = effective_variables(self.variables).get(name)
        if spec is None or name not in table.columns:
            raise KeyError(f"Unknown column '{name}'")
        if len(table) == 0:
            return None
        return compute_statistics(table[name].to_numpy(), spec.kind)

    def correlation(self, var1: str, var2: str) -> float:
        table = self._require_table()
        lookup = effective_variables(self.variables)
        for name in (var1, var2):
            spec = lookup.get(name)
            if spec is None or name not in table.columns:
                raise KeyError(f"Unknown column '{name}'")
            if not spec.is_numeric:
                raise ValueError(f"Column '{name}' is not numeric")
        return pearson_correlation(table[var1], table[var2])

    def export(self, path: str | Path) -> Path:
        return export_table(self._require_table(), path)
