from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from .app.container import build_container
from .app.orchestrator import Orchestrator
from .config import Config, load_config
from .types import ConfigOverrides


def _make_orchestrator(cfg: Config) -> Orchestrator:
    container = build_container("csvintake", cfg)
    return Orchestrator(container=container, cfg=cfg, logger=logging.getLogger("csvintake.main"))


def run_pipeline(
    inputs: Sequence[Path],
    out_dir: Path,
    cfg: Config | None = None,
) -> int:
    orch = _make_orchestrator(cfg or Config())
    return orch.run(inputs, out_dir)


def main() -> int:
    ap = argparse.ArgumentParser(description="Validate and store CSV uploads")
    ap.add_argument("inputs", nargs="+", type=Path, help="CSV files, processed in order")
    ap.add_argument(
        "--out", required=False, type=Path, default=Path("runs"), help="Output base dir"
    )
    ap.add_argument("--config", required=False, type=Path, help="Optional YAML config file")
    ap.add_argument(
        "--max-errors", required=False, type=int, help="Max issues per file to echo in the log"
    )
    ap.add_argument(
        "--no-workbook",
        action="store_true",
        help="Skip writing the validated xlsx workbook per file",
    )
    ap.add_argument(
        "--keep-going",
        action="store_true",
        help="Continue with the next file when one fails to read or parse",
    )
    args = ap.parse_args()

    overrides: ConfigOverrides = {}
    # Optional overrides only when provided
    if args.max_errors is not None:
        overrides["max_errors"] = int(args.max_errors)
    if args.no_workbook:
        overrides["write_workbook"] = False
    if args.keep_going:
        overrides["strict_fail"] = False
    cfg = load_config(args.config, overrides=overrides)

    try:
        return run_pipeline(args.inputs, args.out, cfg)
    except Exception as exc:  # pragma: no cover
        logging.basicConfig(level=logging.ERROR)
        logging.exception("Unhandled exception: %s", exc)
        return 3


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
