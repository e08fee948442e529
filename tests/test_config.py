from __future__ import annotations

from pathlib import Path

from csvintake.config import Config, load_config


def test_defaults() -> None:
    cfg = Config()
    assert cfg.max_string_length == 1000
    assert cfg.strict_fail is True


def test_yaml_and_overrides(tmp_path: Path) -> None:
    p = tmp_path / "cfg.yaml"
    p.write_text("max_errors: 5\nwrite_workbook: 'no'\npage_size: 25\n", encoding="utf-8")
    cfg = load_config(p, overrides={"max_errors": 9})
    assert cfg.max_errors == 9
    assert cfg.write_workbook is False
    assert cfg.page_size == 25


def test_missing_file_falls_back_to_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "absent.yaml")
    assert cfg.search_limit == Config().search_limit
