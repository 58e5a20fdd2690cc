"""Public package interface for corrgen."""

from importlib.metadata import PackageNotFoundError, version

from .api.models import GenerateResult, RunConfig
from .api.session import DatasetSession
from .api.synthesizer import CorrgenSynthesizer, generate
from .engine.assembly import generate_table
from .schema.config import ConfigurationError
from .schema.models import CorrelationSpec, VariableKind, VariableSpec
from .schema.samples import (
    available_sample_configs,
    get_sample_config,
    load_config,
)
from .scoring.statistics import compute_statistics, pearson_correlation
from .storage.tables import ImportFormatError, export_table, import_csv

try:
    __version__ = version("corrgen")
except PackageNotFoundError:
    __version__ = "0.1.0"


__all__ = [
    "ConfigurationError",
    "CorrelationSpec",
    "CorrgenSynthesizer",
    "DatasetSession",
    "GenerateResult",
    "ImportFormatError",
    "RunConfig",
    "VariableKind",
    "VariableSpec",
    "available_sample_configs",
    "compute_statistics",
    "export_table",
    "generate",
    "generate_table",
    "get_sample_config",
    "import_csv",
    "load_config",
    "pearson_correlation",
]
