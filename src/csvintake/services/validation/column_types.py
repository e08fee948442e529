from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from ...domain.schema_defs import TYPE_KEYWORDS, ColumnType


def infer_column_type(name: str) -> ColumnType:
    """Map a header name to a column type using keyword substrings.

    Matching is case-insensitive and follows the precedence
    email > date > number > boolean; anything else is a string column.
    """
    lowered = name.lower()
    for col_type, keywords in TYPE_KEYWORDS:
        if any(k in lowered for k in keywords):
            return col_type
    return ColumnType.STRING


def infer_column_types(columns: Iterable[str]) -> Mapping[str, ColumnType]:
    """Infer every column once and freeze the result."""
    return MappingProxyType({col: infer_column_type(col) for col in columns})
