from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from ...domain.schema_defs import MAX_STRING_LENGTH, ColumnType
from .cells import CellValue, validate_value
from .column_types import infer_column_types


@dataclass(frozen=True)
class RowResult:
    row_number: int  # 1-based over non-blank lines; header is row 0
    data: dict[str, CellValue]
    errors: list[str] = field(default_factory=list)
    is_duplicate: bool = False
    is_valid: bool = True


def row_key(data: Mapping[str, CellValue]) -> str:
    """Canonical serialization of a coerced row used for duplicate detection."""
    return json.dumps(data, sort_keys=True, ensure_ascii=False)


class RowValidator:
    """Validates rows of one file against the column types inferred from its header.

    An instance holds the seen-row set for duplicate detection, so it must
    not be reused for a second file.
    """

    def __init__(self, columns: Sequence[str], max_string_length: int = MAX_STRING_LENGTH) -> None:
        self.columns: tuple[str, ...] = tuple(columns)
        self.column_types: Mapping[str, ColumnType] = infer_column_types(self.columns)
        self.max_string_length = max_string_length
        self._seen: set[str] = set()

    def validate_row(self, raw_row: Mapping[str, object], row_number: int) -> RowResult:
        data: dict[str, CellValue] = {}
        errors: list[str] = []

        for col in self.columns:
            cell = validate_value(
                raw_row.get(col, ""), self.column_types[col], self.max_string_length
            )
            data[col] = cell.coerced_value
            if not cell.is_valid:
                errors.append(f"{col}: {', '.join(cell.errors)}")

        key = row_key(data)
        is_duplicate = key in self._seen
        if not is_duplicate:
            self._seen.add(key)

        return RowResult(
            row_number=row_number,
            data=data,
            errors=errors,
            is_duplicate=is_duplicate,
            is_valid=not errors and not is_duplicate,
        )
