from __future__ import annotations

from pathlib import Path

import pandas as pd
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from ..aggregate.summary import collect_issues
from ..validate_service import ValidationOutcome


# Row metadata columns; the leading underscore keeps them apart from CSV headers
META_COLUMNS = ("_row_number", "_is_duplicate", "_is_valid", "_errors")


def _data_frame(outcome: ValidationOutcome) -> pd.DataFrame:
    columns = list(outcome.summary.column_types)
    meta = pd.DataFrame(
        [
            (r.row_number, r.is_duplicate, r.is_valid, "; ".join(r.errors))
            for r in outcome.results
        ],
        columns=list(META_COLUMNS),
    )
    data = pd.DataFrame([r.data for r in outcome.results], columns=columns)
    # Joined column-wise: a CSV header never replaces a metadata column
    return pd.concat(
        [meta[["_row_number"]], data, meta[["_is_duplicate", "_is_valid", "_errors"]]], axis=1
    )


def _issues_frame(outcome: ValidationOutcome) -> pd.DataFrame:
    issues = collect_issues(outcome.results)
    return pd.DataFrame(
        [
            {
                "row_number": i.row_number,
                "column": i.column or "",
                "category": i.category.value,
                "message": i.message,
            }
            for i in issues
        ],
        columns=["row_number", "column", "category", "message"],
    )


def _summary_frame(outcome: ValidationOutcome) -> pd.DataFrame:
    s = outcome.summary
    rows: list[tuple[str, object]] = [
        ("totalRows", s.total_rows),
        ("validRows", s.valid_rows),
        ("duplicateRows", s.duplicate_rows),
        ("errorRows", s.error_rows),
    ]
    rows.extend((f"columnType:{name}", t.value) for name, t in s.column_types.items())
    return pd.DataFrame(rows, columns=["metric", "value"])


def _style_as_table(ws, df: pd.DataFrame, display_name: str) -> None:
    max_col = len(df.columns)
    # An Excel table needs at least one data row
    if len(df) > 0:
        ref = f"A1:{get_column_letter(max_col)}{len(df) + 1}"
        table = Table(displayName=display_name, ref=ref)
        table.tableStyleInfo = TableStyleInfo(
            name="TableStyleMedium2",
            showFirstColumn=False,
            showLastColumn=False,
            showRowStripes=True,
            showColumnStripes=False,
        )
        ws.add_table(table)

    for idx, header in enumerate(df.columns, start=1):
        col = get_column_letter(idx)
        base = len(str(header)) + 2
        ws.column_dimensions[col].width = max(14, min(40, base))
        cell = ws.cell(row=1, column=idx)
        cell.alignment = Alignment(horizontal="left")
        cell.font = Font(bold=True, color="FFFFFFFF" if len(df) > 0 else "FF000000")


def write_workbook(outcome: ValidationOutcome, out_path: Path) -> None:
    """Write Data, Issues and Summary sheets, each as a styled Excel table."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    sheets = {
        "Data": _data_frame(outcome),
        "Issues": _issues_frame(outcome),
        "Summary": _summary_frame(outcome),
    }
    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        for sheet_name, df in sheets.items():
            df.to_excel(writer, sheet_name=sheet_name, index=False)
            _style_as_table(writer.sheets[sheet_name], df, f"{sheet_name}Table")
