from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from ...domain.errors import ErrorCategory, ValidationIssue
from ...domain.schema_defs import ColumnType
from ...types import SummaryDict
from ..validation.rows import RowResult


@dataclass(frozen=True)
class ValidationSummary:
    total_rows: int
    valid_rows: int
    duplicate_rows: int
    error_rows: int
    column_types: Mapping[str, ColumnType]
    validation_errors: list[str] = field(default_factory=list)

    def to_dict(self) -> SummaryDict:
        return {
            "totalRows": self.total_rows,
            "validRows": self.valid_rows,
            "duplicateRows": self.duplicate_rows,
            "errorRows": self.error_rows,
            "columnTypes": {k: v.value for k, v in self.column_types.items()},
            "validationErrors": list(self.validation_errors),
        }


def format_row_errors(result: RowResult) -> str:
    return f"Row {result.row_number}: {', '.join(result.errors)}"


def build_validation_summary(
    results: Sequence[RowResult],
    column_types: Mapping[str, ColumnType],
) -> ValidationSummary:
    """Aggregate row results into the dataset-level report.

    Duplicates are counted only as duplicates, never as error rows, so
    valid + duplicate + error always equals the total. Their cell errors
    still appear in validation_errors.
    """
    valid = sum(1 for r in results if r.is_valid)
    duplicates = sum(1 for r in results if r.is_duplicate)
    errors = sum(1 for r in results if not r.is_valid and not r.is_duplicate)
    messages = [format_row_errors(r) for r in results if r.errors]
    return ValidationSummary(
        total_rows=len(results),
        valid_rows=valid,
        duplicate_rows=duplicates,
        error_rows=errors,
        column_types=column_types,
        validation_errors=messages,
    )


def _category_for(message: str) -> ErrorCategory:
    if message == "Missing value":
        return ErrorCategory.MISSING_VALUE
    if message == "Invalid number format":
        return ErrorCategory.TYPE_MISMATCH
    if message.startswith("String too long"):
        return ErrorCategory.LENGTH_VIOLATION
    return ErrorCategory.FORMAT_VIOLATION


def collect_issues(results: Sequence[RowResult]) -> list[ValidationIssue]:
    """Flatten row errors into categorized issues, one per cell message plus one per duplicate."""
    issues: list[ValidationIssue] = []
    for r in results:
        for err in r.errors:
            column, _, joined = err.rpartition(": ")
            for message in joined.split(", "):
                issues.append(
                    ValidationIssue(
                        category=_category_for(message),
                        message=message,
                        row_number=r.row_number,
                        column=column or None,
                    )
                )
        if r.is_duplicate:
            issues.append(
                ValidationIssue(
                    category=ErrorCategory.DUPLICATE_ROW,
                    message="Duplicate row",
                    row_number=r.row_number,
                )
            )
    return issues
