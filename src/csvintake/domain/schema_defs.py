from __future__ import annotations

from enum import Enum
from typing import List, Tuple


class ColumnType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    EMAIL = "email"


# Checked in order; the first group with a keyword contained in the column name wins.
TYPE_KEYWORDS: List[Tuple[ColumnType, Tuple[str, ...]]] = [
    (ColumnType.EMAIL, ("email",)),
    (ColumnType.DATE, ("date", "time")),
    (ColumnType.NUMBER, ("price", "amount", "cost")),
    (ColumnType.BOOLEAN, ("active", "enabled")),
]

TRUE_TOKENS = frozenset({"true", "1", "yes", "on"})
FALSE_TOKENS = frozenset({"false", "0", "no", "off"})

MAX_STRING_LENGTH = 1000

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
