from __future__ import annotations

from typing import Sequence


def split_lines(text: str) -> list[str]:
    """Split on newlines and drop lines that are blank after trimming.

    Row numbers are assigned over the returned list, so blank lines never
    consume a row number.
    """
    return [line for line in text.split("\n") if line.strip()]


def clean_field(value: str) -> str:
    return value.strip().strip('"')


def split_fields(line: str) -> list[str]:
    """Comma-split one line.

    Quoting is not interpreted: a quoted field containing a comma is split
    like any other.
    """
    return [clean_field(v) for v in line.split(",")]


def zip_row(headers: Sequence[str], values: Sequence[str]) -> dict[str, str]:
    """Pair values with headers; missing trailing values become '' and extras are dropped."""
    return {h: (values[i] if i < len(values) else "") for i, h in enumerate(headers)}
