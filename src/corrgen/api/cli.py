"""Command-line interface for corrgen."""

from __future__ import annotations

import argparse
import math
import sys
from collections.abc import Sequence
from pathlib import Path

from ..schema.config import build_correlation_specs, build_variable_specs
from ..schema.samples import available_sample_configs, get_sample_config, load_config
from ..scoring.statistics import BooleanStatistics, describe_table
from ..storage.tables import import_csv
from .models import RunConfig
from .synthesizer import CorrgenSynthesizer


def _version() -> str:
    from .. import __version__

    return __version__


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="corrgen",
        description=(
            "Generate correlated synthetic tables from a sample or YAML config."
        ),
    )
    parser.add_argument(
        "--sample",
        type=str,
        help="Run one built-in sample config by name (use --list-samples to inspect)",
    )
    parser.add_argument("--config", type=str, help="Path to YAML config file")
    parser.add_argument(
        "--list-samples",
        action="store_true",
        help="Print available built-in sample configs and exit",
    )
    parser.add_argument("--rows", type=int, help="Number of rows to generate")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument(
        "--output", type=str, help="Output .csv/.xlsx path or directory"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not write the generated table to disk",
    )
    parser.add_argument(
        "--log-level",
        choices=["info", "quiet"],
        help="Log verbosity",
    )
    parser.add_argument(
        "--correlation-pass",
        choices=["unique", "ordered"],
        help="How symmetric correlation pairs are applied",
    )
    parser.add_argument(
        "--invalid-correlation-mode",
        choices=["error", "clamp"],
        help="Reject or clamp correlation values outside [-1, 1]",
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate config only (no generation)",
    )
    parser.add_argument(
        "--describe",
        type=str,
        metavar="CSV",
        help="Import a CSV file and print per-column statistics",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print package version and exit",
    )
    return parser


def _print_guidance() -> None:
    print("corrgen CLI")
    print("No command arguments provided.")
    print()
    print("Quick test paths:")
    print("- Script:   python sample_run.py")
    print()
    print("Direct CLI examples:")
    print("- python -m corrgen --list-samples")
    print("- python -m corrgen --sample correlated --rows 5000 --log-level quiet")
    print("- python -m corrgen --config schema.yaml --rows 1000 --output out.csv")
    print("- python -m corrgen --describe out.csv")


def _load_runtime_config(args: argparse.Namespace):
    if args.sample:
        return get_sample_config(args.sample)

    config_path = Path(args.config).expanduser()
    if not config_path.exists() or not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    return load_config(config_path.read_text(encoding="utf-8"))


def _build_run_config(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        n_rows=args.rows,
        seed=args.seed,
        log_level=args.log_level,
        output_path=args.output,
        save_output=False if args.no_save else None,
        correlation_pass=args.correlation_pass,
        invalid_correlation_mode=args.invalid_correlation_mode,
    )


def _format_stats(stats) -> str:
    if stats is None:
        return "n/a"
    if isinstance(stats, BooleanStatistics):
        return f"true={stats.true_count} false={stats.false_count}"
    shown = stats.display()
    return (
        f"min={shown['min']} max={shown['max']} "
        f"mean={shown['mean']} median={shown['median']}"
    )


def _validate_only(config: dict) -> int:
    synth = CorrgenSynthesizer(config)
    warnings = synth.validate()
    variables = build_variable_specs(config)
    correlations = build_correlation_specs(config)
    numeric = sum(1 for spec in variables if spec.is_numeric)
    print(
        f"[VALIDATION] status=OK variables={len(variables)} numeric={numeric} "
        f"correlations={len(correlations)} warnings={len(warnings)}"
    )
    for warning in warnings:
        print(f"[WARN] {warning}")
    return 0


def _describe_csv(path_text: str) -> int:
    path = Path(path_text).expanduser()
    if not path.exists() or not path.is_file():
        raise FileNotFoundError(f"CSV file not found: {path}")
    imported = import_csv(path)
    stats = describe_table(imported.table, imported.variables)
    print(
        f"[DESCRIBE] rows={len(imported.table)} columns={len(imported.variables)}"
    )
    for spec in imported.variables:
        summary = _format_stats(stats.get(spec.name))
        print(f"- {spec.name} ({spec.kind.value}): {summary}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args_list = list(argv) if argv is not None else sys.argv[1:]
    if not args_list:
        _print_guidance()
        return 0

    parser = _build_parser()
    args = parser.parse_args(args_list)

    if args.version:
        print(_version())
        return 0

    if args.list_samples:
        print("Available sample configs:")
        for name in available_sample_configs():
            print(f"- {name}")
        return 0

    if args.describe:
        try:
            return _describe_csv(args.describe)
        except Exception as exc:
            print(f"[ERROR] {exc}", file=sys.stderr)
            return 1

    if args.sample and args.config:
        parser.error("Use either --sample or --config, not both")

    if not args.sample and not args.config:
        parser.error(
            "Provide --sample <name> or --config <path>. "
            "Run without arguments to view guided examples."
        )

    try:
        config = _load_runtime_config(args)
        if args.validate_config:
            return _validate_only(config)
        result = CorrgenSynthesizer(config, _build_run_config(args)).generate()
    except Exception as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    print(
        f"[FINAL SUMMARY] rows={len(result.dataframe)} "
        f"columns={len(result.dataframe.columns)} "
        f"output={result.output_path} log={result.log_path}"
    )
    for entry in result.correlation_report:
        realized = entry["realized"]
        realized_text = "undefined" if math.isnan(realized) else f"{realized:.3f}"
        print(
            f"[CORRELATION] {entry['var1']}~{entry['var2']} "
            f"target={entry['target']:.3f} realized={realized_text}"
        )
    for note in result.runtime_notes:
        print(f"[NOTE] {note}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
