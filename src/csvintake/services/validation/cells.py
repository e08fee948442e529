from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ...domain.schema_defs import (
    EMAIL_PATTERN,
    FALSE_TOKENS,
    MAX_STRING_LENGTH,
    TRUE_TOKENS,
    ColumnType,
)
from .dates import parse_date_to_utc_iso


CellValue = Union[str, float, bool, None]

_EMAIL_RE = re.compile(EMAIL_PATTERN)
# Longest numeric prefix, same leniency as a JavaScript parseFloat ("12kg" -> 12.0)
_NUMBER_PREFIX_RE = re.compile(r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class CellResult:
    is_valid: bool
    errors: Tuple[str, ...]
    coerced_value: CellValue
    type: ColumnType


def parse_number(value: str) -> Optional[float]:
    m = _NUMBER_PREFIX_RE.match(value)
    if not m:
        return None
    return float(m.group(0).replace("Infinity", "inf"))


def _invalid(message: str, coerced: CellValue, col_type: ColumnType) -> CellResult:
    return CellResult(is_valid=False, errors=(message,), coerced_value=coerced, type=col_type)


def validate_value(
    raw: object,
    expected_type: ColumnType,
    max_length: int = MAX_STRING_LENGTH,
) -> CellResult:
    """Validate and coerce one raw cell against its column type.

    Empty or whitespace-only input is always invalid ("Missing value") with a
    None coerced value. On a format failure the trimmed string is kept as the
    coerced value so the row still shows what was uploaded.
    """
    value = "" if raw is None else str(raw).strip()
    if not value:
        return _invalid("Missing value", None, expected_type)

    if expected_type is ColumnType.NUMBER:
        number = parse_number(value)
        if number is None:
            return _invalid("Invalid number format", value, expected_type)
        return CellResult(True, (), number, expected_type)

    if expected_type is ColumnType.EMAIL:
        if not _EMAIL_RE.match(value):
            return _invalid("Invalid email format", value, expected_type)
        return CellResult(True, (), value, expected_type)

    if expected_type is ColumnType.DATE:
        iso = parse_date_to_utc_iso(value)
        if iso is None:
            return _invalid("Invalid date format", value, expected_type)
        return CellResult(True, (), iso, expected_type)

    if expected_type is ColumnType.BOOLEAN:
        lowered = value.lower()
        if lowered in TRUE_TOKENS:
            return CellResult(True, (), True, expected_type)
        if lowered in FALSE_TOKENS:
            return CellResult(True, (), False, expected_type)
        return _invalid("Invalid boolean value", value, expected_type)

    if len(value) > max_length:
        return _invalid(f"String too long (max {max_length} characters)", value, expected_type)
    return CellResult(True, (), value, expected_type)
