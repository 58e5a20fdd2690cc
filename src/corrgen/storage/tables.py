"""
CSV/Excel export and CSV import with column kind inference.

Kind information is not stored in the file: an exported table is re-typed
from its text on import, and imported numeric columns always get the default
``[0, 100]`` bounds whatever their actual range.
"""

from __future__ import annotations

import io
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from ..schema import defaults
from ..schema.models import VariableKind, VariableSpec

_BOOLEAN_TEXT = ("true", "false")


class ImportFormatError(ValueError):
    """Raised when delimited text cannot be turned into a typed table."""


@dataclass
class ImportedTable:
    """A parsed table plus the schema inferred for its columns."""

    table: pd.DataFrame
    variables: list[VariableSpec] = field(default_factory=list)

    def kinds(self) -> dict[str, VariableKind]:
        return {spec.name: spec.kind for spec in self.variables}


def _is_number(text: str) -> bool:
    try:
        value = float(text)
    except (TypeError, ValueError):
        return False
    return math.isfinite(value)


def infer_column_kind(values, sample_size: int = defaults.IMPORT_SAMPLE_SIZE):
    """Guess a column kind from its first ``sample_size`` text values.

    Precedence is boolean, then float, then string. Integers are never
    inferred; whole numbers import as float.
    """
    sample = [str(value).strip() for value in list(values)[: max(1, sample_size)]]
    if not sample:
        return VariableKind.STRING
    if all(text.lower() in _BOOLEAN_TEXT for text in sample):
        return VariableKind.BOOLEAN
    if all(_is_number(text) for text in sample):
        return VariableKind.FLOAT
    return VariableKind.STRING


def _first_bad_row(mask: pd.Series) -> int:
    # +2: one for the header line, one for 1-based numbering.
    return int(mask.to_numpy().nonzero()[0][0]) + 2


def _convert_column(name: str, text: pd.Series, kind: VariableKind) -> pd.Series:
    stripped = text.str.strip()
    if kind is VariableKind.BOOLEAN:
        lowered = stripped.str.lower()
        bad = ~lowered.isin(_BOOLEAN_TEXT)
        if bad.any():
            raise ImportFormatError(
                f"Column '{name}' row {_first_bad_row(bad)} is not true/false: "
                f"{text[bad].iloc[0]!r}"
            )
        return lowered == "true"
    if kind is VariableKind.FLOAT:
        numeric = pd.to_numeric(stripped, errors="coerce")
        bad = numeric.isna() | numeric.abs().eq(math.inf)
        if bad.any():
            raise ImportFormatError(
                f"Column '{name}' row {_first_bad_row(bad)} is not numeric: "
                f"{text[bad].iloc[0]!r}"
            )
        return numeric.astype(float)
    return text


def import_csv(
    source: Any, sample_size: int = defaults.IMPORT_SAMPLE_SIZE
) -> ImportedTable:
    """Parse a CSV path or file-like object into an :class:`ImportedTable`.

    Raises:
        ImportFormatError: For an empty file, a missing header, malformed
            rows, or values that do not match the inferred kind.
    """
    try:
        raw = pd.read_csv(
            source,
            dtype=object,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as exc:
        raise ImportFormatError("CSV input is empty") from exc
    except pd.errors.ParserError as exc:
        raise ImportFormatError(f"Malformed CSV input: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ImportFormatError(f"CSV input is not valid text: {exc}") from exc

    if raw.columns.empty:
        raise ImportFormatError("CSV input has no header row")
    blank = [str(col) for col in raw.columns if str(col).startswith("Unnamed:")]
    if blank:
        raise ImportFormatError(f"CSV header has unnamed columns: {blank}")

    # Empty fields read as "", only fields missing from a short row are NaN.
    short_rows = raw.isna().any(axis=1)
    if short_rows.any():
        raise ImportFormatError(
            f"CSV row {_first_bad_row(short_rows)} has fewer fields than the header"
        )

    columns = {}
    variables = []
    for name in raw.columns:
        text = raw[name]
        kind = infer_column_kind(text.tolist(), sample_size=sample_size)
        columns[name] = _convert_column(name, text, kind)
        variables.append(
            VariableSpec(
                name=name,
                kind=kind,
                min=defaults.DEFAULT_MIN,
                max=defaults.DEFAULT_MAX,
                use_constraints=False,
            )
        )

    table = pd.DataFrame(columns, index=pd.RangeIndex(len(raw)))
    return ImportedTable(table=table, variables=variables)


def import_csv_text(
    text: str, sample_size: int = defaults.IMPORT_SAMPLE_SIZE
) -> ImportedTable:
    return import_csv(io.StringIO(text), sample_size=sample_size)


def table_to_csv_text(table: pd.DataFrame) -> str:
    return table.to_csv(index=False)


def export_table(table: pd.DataFrame, path: str | Path) -> Path:
    """Write ``table`` as CSV, or as Excel when ``path`` ends in ``.xlsx``."""

    output_file = Path(path).expanduser()
    output_file.parent.mkdir(parents=True, exist_ok=True)
    if output_file.suffix.lower() == ".xlsx":
        try:
            table.to_excel(output_file, index=False)
        except ModuleNotFoundError as exc:
            if getattr(exc, "name", "") == "openpyxl":
                raise RuntimeError(
                    "Saving Excel output requires openpyxl. "
                    "Install with `pip install openpyxl`."
                ) from exc
            raise
    else:
        table.to_csv(output_file, index=False)
    return output_file
