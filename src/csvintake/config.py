from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, cast

from .types import ConfigOverrides, YamlConfig


@dataclass(frozen=True)
class Config:
    pipeline_version: str = "v1.0"
    max_string_length: int = 1000
    # Cap on issues echoed to the log per file; the report itself is never truncated
    max_errors: int = 50
    page_size: int = 10
    search_limit: int = 100
    write_workbook: bool = True
    # Stop at the first file that fails to read or parse
    strict_fail: bool = True


def load_config(path: Optional[Path], overrides: Optional[ConfigOverrides] = None) -> Config:
    import yaml

    data: YamlConfig = {}

    # Always load configs/config.yaml if it exists
    default_config = Path("configs/config.yaml")
    if default_config.exists():
        raw = yaml.safe_load(default_config.read_text(encoding="utf-8"))
        if isinstance(raw, dict):
            data.update(cast(YamlConfig, raw))

    # Then load custom config if provided (overrides default)
    if path is not None and path.exists():
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        if isinstance(raw, dict):
            data.update(cast(YamlConfig, raw))

    # Finally apply CLI overrides
    if overrides:
        data.update(cast(YamlConfig, {k: v for k, v in overrides.items() if v is not None}))

    # Coerce booleans from strings if needed (Windows/CLI friendliness)
    for key in ("write_workbook", "strict_fail"):
        if key in data:
            val = data.get(key)
            if isinstance(val, str):
                data[key] = val.strip().lower() in {"1", "true", "yes", "y"}

    defaults = Config()
    return Config(
        pipeline_version=str(data.get("pipeline_version", defaults.pipeline_version)),
        max_string_length=int(data.get("max_string_length", defaults.max_string_length)),
        max_errors=int(data.get("max_errors", defaults.max_errors)),
        page_size=int(data.get("page_size", defaults.page_size)),
        search_limit=int(data.get("search_limit", defaults.search_limit)),
        write_workbook=bool(data.get("write_workbook", defaults.write_workbook)),
        strict_fail=bool(data.get("strict_fail", defaults.strict_fail)),
    )
