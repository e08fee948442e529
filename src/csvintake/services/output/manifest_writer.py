from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import pandas as pd

from ...config import Config
from ...types import (
    Manifest,
    ManifestEnvironment,
    ManifestInputsEntry,
    ManifestParameters,
)


def write_manifest(
    *,
    run_dir: Path,
    inputs: Sequence[ManifestInputsEntry],
    started_at: str,
    finished_at: str,
    cfg: Config,
    logger: logging.Logger,
) -> Path:
    import platform
    import sys
    import yaml

    params: ManifestParameters = {
        "max_string_length": cfg.max_string_length,
        "max_errors": cfg.max_errors,
        "page_size": cfg.page_size,
        "search_limit": cfg.search_limit,
        "write_workbook": cfg.write_workbook,
        "strict_fail": cfg.strict_fail,
    }

    env: ManifestEnvironment = {
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "pandas": pd.__version__,
    }

    manifest: Manifest = {
        "pipeline_version": cfg.pipeline_version,
        "started_at": started_at,
        "finished_at": finished_at,
        "inputs": list(inputs),
        "parameters": params,
        "environment": env,
    }

    out_path = run_dir / "run_manifest.yaml"
    logger.info("Writing run_manifest.yaml", extra={"path": str(out_path)})
    with out_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(manifest, f, sort_keys=False, allow_unicode=True)
    return out_path
