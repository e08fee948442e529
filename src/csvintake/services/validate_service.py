from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..domain.errors import EmptyInputError, FileReadError
from ..domain.schema_defs import MAX_STRING_LENGTH
from .aggregate.summary import ValidationSummary, build_validation_summary
from .parsing.csv_text import split_fields, split_lines, zip_row
from .validation.rows import RowResult, RowValidator


@dataclass(frozen=True)
class ValidationOutcome:
    results: list[RowResult]
    summary: ValidationSummary

    @property
    def rows(self) -> list[dict[str, object]]:
        """Coerced row data in row order, for immediate display or analytics."""
        return [dict(r.data) for r in self.results]


def read_text(path: Path) -> str:
    """Read a whole file into memory (UTF-8, optional BOM)."""
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(str(path), str(exc)) from exc


def validate_text(text: str, max_string_length: int = MAX_STRING_LENGTH) -> ValidationOutcome:
    lines = split_lines(text)
    if not lines:
        raise EmptyInputError()

    headers = split_fields(lines[0])
    # Fresh validator per file: its seen-row set must not leak across files
    validator = RowValidator(headers, max_string_length=max_string_length)

    results: list[RowResult] = []
    for i in range(1, len(lines)):
        raw = zip_row(headers, split_fields(lines[i]))
        results.append(validator.validate_row(raw, i))

    summary = build_validation_summary(results, validator.column_types)
    return ValidationOutcome(results=results, summary=summary)


class ValidateService:
    """Reads CSV files and runs the validation engine over them."""

    def __init__(self, logger: logging.Logger, max_string_length: int = MAX_STRING_LENGTH) -> None:
        self.logger = logger
        self.max_string_length = max_string_length

    def validate_text(self, text: str) -> ValidationOutcome:
        return validate_text(text, max_string_length=self.max_string_length)

    def validate_file(self, path: Path) -> ValidationOutcome:
        self.logger.info("Reading CSV", extra={"path": str(path)})
        text = read_text(path)
        outcome = self.validate_text(text)
        s = outcome.summary
        self.logger.info(
            "Validated CSV",
            extra={
                "path": str(path),
                "total_rows": s.total_rows,
                "valid_rows": s.valid_rows,
                "duplicate_rows": s.duplicate_rows,
                "error_rows": s.error_rows,
            },
        )
        return outcome
