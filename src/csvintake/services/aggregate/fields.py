from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

import pandas as pd

from ...types import CategoryCount, NumericFieldStats


TOP_CATEGORIES = 10


@dataclass(frozen=True)
class FieldSummary:
    total_records: int
    numeric: dict[str, NumericFieldStats] = field(default_factory=dict)
    categorical: dict[str, list[CategoryCount]] = field(default_factory=dict)


def _present(s: pd.Series) -> pd.Series:
    return s[s.notna() & (s.astype(str).str.strip() != "")]


def _safe_numeric(s: pd.Series) -> pd.Series:
    # Booleans stay categorical even though they would convert to 0/1
    no_bools = s.map(lambda v: None if pd.api.types.is_bool(v) else v)
    return pd.to_numeric(no_bools, errors="coerce")


def _top_values(s: pd.Series, n: int = TOP_CATEGORIES) -> list[CategoryCount]:
    counts = s.astype(str).value_counts(sort=False)
    counts = counts.sort_values(ascending=False, kind="mergesort").head(n)
    return [{"name": str(name), "value": int(cnt)} for name, cnt in counts.items()]


def build_field_summary(rows: Sequence[Mapping[str, object]]) -> FieldSummary:
    """Chart-ready statistics over coerced rows.

    A field is numeric when more than half of its non-empty values convert to
    numbers; numeric fields get min/max/avg/count and every other field gets
    its top ten value counts. An "id" field is ignored.
    """
    if not rows:
        return FieldSummary(total_records=0)

    df = pd.DataFrame(list(rows))
    numeric: dict[str, NumericFieldStats] = {}
    categorical: dict[str, list[CategoryCount]] = {}

    for name in df.columns.astype(str):
        if name == "id":
            continue
        present = _present(df[name])
        nums = _safe_numeric(present).dropna()
        if len(nums) > len(present) * 0.5:
            numeric[name] = {
                "min": float(nums.min()),
                "max": float(nums.max()),
                "avg": float(nums.mean()),
                "count": int(len(nums)),
            }
        else:
            categorical[name] = _top_values(present)

    return FieldSummary(total_records=len(df), numeric=numeric, categorical=categorical)
