"""Quick local sample run for corrgen."""

from __future__ import annotations

import math
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from corrgen import CorrgenSynthesizer, RunConfig, get_sample_config  # noqa: E402


def main() -> int:
    try:
        config = get_sample_config("mixed")
        run_cfg = RunConfig(
            n_rows=5_000,
            seed=42,
            log_level="info",
        )
        result = CorrgenSynthesizer(config, run_cfg).generate()
    except Exception as exc:
        print(f"[SAMPLE RUN ERROR] {exc}", file=sys.stderr)
        print("Tip: install dependencies with `pip install -e .`", file=sys.stderr)
        return 1

    for name, stats in result.statistics.items():
        shown = stats.display() if stats is not None else "n/a"
        print(f"[STATS] {name}: {shown}")
    for entry in result.correlation_report:
        realized = entry["realized"]
        text = "undefined" if math.isnan(realized) else f"{realized:.3f}"
        print(
            f"[CORRELATION] {entry['var1']}~{entry['var2']} "
            f"target={entry['target']:.2f} realized={text}"
        )
    print(f"[SAMPLE RUN] rows={len(result.dataframe)} output={result.output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
