from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import yaml

from csvintake.config import Config
from csvintake.services.output.manifest_writer import write_manifest
from csvintake.services.output.utils import sha256_file
from csvintake.services.output.workbook_writer import write_workbook
from csvintake.services.validate_service import validate_text


def test_write_workbook_sheets(tmp_path: Path) -> None:
    out = validate_text("name,price\nAnn,1\nBob,x\nAnn,1\n")
    path = tmp_path / "out" / "people_validated.xlsx"
    write_workbook(out, path)
    assert path.exists()

    data = pd.read_excel(path, sheet_name="Data")
    assert list(data.columns) == ["_row_number", "name", "price", "_is_duplicate", "_is_valid", "_errors"]
    assert data["_row_number"].tolist() == [1, 2, 3]
    assert data["_is_duplicate"].tolist() == [False, False, True]

    issues = pd.read_excel(path, sheet_name="Issues")
    assert issues["category"].tolist() == ["TYPE_MISMATCH", "DUPLICATE_ROW"]

    summary = pd.read_excel(path, sheet_name="Summary")
    metrics = dict(zip(summary["metric"], summary["value"]))
    assert str(metrics["totalRows"]) == "3"
    assert metrics["columnType:price"] == "number"


def test_write_workbook_keeps_csv_columns_named_like_row_flags(tmp_path: Path) -> None:
    out = validate_text("name,errors,is_valid\nAnn,late,pending\n")
    path = tmp_path / "clash.xlsx"
    write_workbook(out, path)

    data = pd.read_excel(path, sheet_name="Data", keep_default_na=False)
    assert list(data.columns) == [
        "_row_number",
        "name",
        "errors",
        "is_valid",
        "_is_duplicate",
        "_is_valid",
        "_errors",
    ]
    row = data.iloc[0]
    assert (row["errors"], row["is_valid"]) == ("late", "pending")
    assert bool(row["_is_valid"]) is True


def test_write_workbook_without_issues(tmp_path: Path) -> None:
    out = validate_text("name\nAnn\n")
    path = tmp_path / "clean.xlsx"
    write_workbook(out, path)
    issues = pd.read_excel(path, sheet_name="Issues")
    assert issues.empty


def test_write_manifest_creates_file(tmp_path: Path) -> None:
    run_dir = tmp_path / "run"
    run_dir.mkdir()
    src = tmp_path / "in.csv"
    src.write_text("name\nAnn\n", encoding="utf-8")
    out = validate_text(src.read_text(encoding="utf-8"))

    manifest = write_manifest(
        run_dir=run_dir,
        inputs=[
            {
                "path": str(src),
                "sha256": sha256_file(src),
                "upload_id": "abc",
                "summary": out.summary.to_dict(),
            }
        ],
        started_at="2024-01-01T00:00:00Z",
        finished_at="2024-01-01T00:01:00Z",
        cfg=Config(),
        logger=logging.getLogger("test"),
    )

    assert manifest == run_dir / "run_manifest.yaml"
    loaded = yaml.safe_load(manifest.read_text(encoding="utf-8"))
    assert loaded["inputs"][0]["summary"]["totalRows"] == 1
    assert loaded["parameters"]["max_string_length"] == 1000
