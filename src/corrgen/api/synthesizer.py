"""High-level import-first runtime API for synthetic dataset generation."""

from __future__ import annotations

import copy
from datetime import datetime
from pathlib import Path
from typing import Any

from ..engine.assembly import generate_table
from ..runtime.logging_utils import setup_run_logger
from ..schema import defaults
from ..schema.config import (
    build_correlation_specs,
    build_variable_specs,
    resolve_choice,
    resolve_run_options,
    validate_config,
)
from ..schema.samples import load_config
from ..scoring.report import build_correlation_report, summarize_correlation_report
from ..scoring.statistics import describe_table
from ..storage.tables import export_table
from .models import GenerateResult, RunConfig


def _coerce_int(value: Any, fallback: int, minimum: int | None = None) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        parsed = int(fallback)
    if minimum is not None:
        parsed = max(minimum, parsed)
    return parsed


def _pick(run_value: Any, metadata: dict[str, Any], key: str, fallback: Any) -> Any:
    if run_value is not None:
        return run_value
    return metadata.get(key, fallback)


def _timestamped_output_name() -> str:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    return f"{stamp}_corrgen{defaults.DEFAULT_OUTPUT_SUFFIX}"


def _resolve_output_path(output_path: str | None) -> Path:
    raw = output_path if output_path is not None else defaults.DEFAULT_OUTPUT_PATH
    text = str(raw).strip()
    if not text:
        text = defaults.DEFAULT_OUTPUT_PATH

    path = Path(text).expanduser()
    is_dir = (
        text.endswith("/")
        or text.endswith("\\")
        or path.suffix == ""
        or (path.exists() and path.is_dir())
    )
    if is_dir:
        path = path / _timestamped_output_name()
    return path


class CorrgenSynthesizer:
    """High-level facade for running config-driven table generation."""

    def __init__(self, config: Any, run_config: RunConfig | None = None):
        self._config = load_config(config)
        self.run_config = run_config or RunConfig()

    def resolved_options(self) -> dict[str, Any]:
        """Run options after merging ``RunConfig`` over config metadata."""

        metadata = self._config.get("metadata", {})
        if not isinstance(metadata, dict):
            metadata = {}
        run_cfg = self.run_config

        merged = dict(metadata)
        for key in (
            "invalid_correlation_mode",
            "invalid_bounds_mode",
            "correlation_pass",
            "token_length",
        ):
            value = getattr(run_cfg, key)
            if value is not None:
                merged[key] = value
        options = resolve_run_options(merged)

        options["n_rows"] = _coerce_int(
            _pick(run_cfg.n_rows, metadata, "n_rows", defaults.DEFAULT_ROWS),
            defaults.DEFAULT_ROWS,
            minimum=0,
        )
        options["seed"] = _coerce_int(
            _pick(run_cfg.seed, metadata, "seed", defaults.DEFAULT_SEED),
            defaults.DEFAULT_SEED,
        )
        options["log_level"] = resolve_choice(
            _pick(run_cfg.log_level, metadata, "log_level", defaults.DEFAULT_LOG_LEVEL),
            defaults.LOG_LEVELS,
            defaults.DEFAULT_LOG_LEVEL,
        )
        options["log_dir"] = _pick(run_cfg.log_dir, metadata, "log_dir", None)
        options["save_output"] = bool(
            _pick(run_cfg.save_output, metadata, "save_output", True)
        )
        options["output_path"] = _pick(
            run_cfg.output_path, metadata, "output_path", defaults.DEFAULT_OUTPUT_PATH
        )
        return options

    def validate(self) -> list[str]:
        return validate_config(copy.deepcopy(self._config))

    def generate(self) -> GenerateResult:
        config = copy.deepcopy(self._config)
        options = self.resolved_options()
        quiet = options["log_level"] == "quiet"

        logger, log_path = setup_run_logger(
            log_dir=options["log_dir"], name="corrgen", quiet=quiet
        )
        runtime_notes = []

        warnings = validate_config(config)
        if warnings and not quiet:
            logger.warning("[CONFIG WARNINGS]")
            for warning in warnings:
                logger.warning(f"  - {warning}")

        variables = build_variable_specs(config)
        correlations = build_correlation_specs(config)

        table = generate_table(
            variables,
            correlations,
            n_rows=options["n_rows"],
            seed=options["seed"],
            invalid_correlation_mode=options["invalid_correlation_mode"],
            invalid_bounds_mode=options["invalid_bounds_mode"],
            correlation_pass=options["correlation_pass"],
            token_length=options["token_length"],
            logger=logger,
        )

        statistics = describe_table(table, variables)
        report = build_correlation_report(
            table,
            variables,
            correlations,
            mode=options["invalid_correlation_mode"],
        )
        summary = summarize_correlation_report(report)
        if summary["undefined"]:
            runtime_notes.append(
                f"{summary['undefined']} correlation pair(s) are undefined "
                "(constant column or fewer than two rows)"
            )
        if options["correlation_pass"] == "ordered" and summary["pairs"]:
            runtime_notes.append(
                "Ordered correlation pass applies each symmetric pair twice; "
                "realized correlations drift from their targets"
            )

        output_file = None
        if options["save_output"]:
            output_file = export_table(
                table, _resolve_output_path(options["output_path"])
            )

        if not quiet:
            max_dev = summary["max_deviation"]
            max_dev_text = "n/a" if max_dev is None else f"{max_dev:.4f}"
            logger.info(
                f"[FINAL SUMMARY] rows={len(table)} columns={len(table.columns)} "
                f"pairs={summary['pairs']} max_deviation={max_dev_text} "
                f"output={output_file}"
            )

        return GenerateResult(
            dataframe=table,
            statistics=statistics,
            correlation_report=report,
            variables=variables,
            correlations=correlations,
            seed=options["seed"],
            log_path=Path(log_path),
            output_path=output_file,
            warnings=warnings,
            runtime_notes=runtime_notes,
        )


def generate(config: Any, run_config: RunConfig | None = None) -> GenerateResult:
    """Convenience function for one-off generation calls."""

    return CorrgenSynthesizer(config, run_config=run_config).generate()
