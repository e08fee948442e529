from __future__ import annotations

import logging
from pathlib import Path

import pytest

from csvintake.domain.errors import EmptyInputError, FileReadError
from csvintake.services.validate_service import ValidateService, validate_text


def test_row_numbers_skip_blank_lines() -> None:
    out = validate_text("name\nAlice\n\nBob")
    assert [r.row_number for r in out.results] == [1, 2]
    assert [r.data["name"] for r in out.results] == ["Alice", "Bob"]


def test_invalid_email_and_date_scenario() -> None:
    out = validate_text("name,email,signup_date\nAnn,not-an-email,2024-13-40")
    (row,) = out.results
    assert not row.is_valid
    assert not row.is_duplicate
    assert row.errors == ["email: Invalid email format", "signup_date: Invalid date format"]
    assert out.summary.validation_errors == [
        "Row 1: email: Invalid email format, signup_date: Invalid date format"
    ]


def test_duplicate_rows_scenario() -> None:
    out = validate_text("id,price\n1,9.99\n1,9.99\n")
    first, second = out.results
    assert first.is_valid and not first.is_duplicate
    assert second.is_duplicate and not second.is_valid
    s = out.summary
    assert (s.total_rows, s.valid_rows, s.duplicate_rows, s.error_rows) == (2, 1, 1, 0)


def test_short_rows_report_missing_values() -> None:
    out = validate_text("name,email,price\nAnn")
    assert out.results[0].errors == ["email: Missing value", "price: Missing value"]


def test_empty_input_is_fatal() -> None:
    with pytest.raises(EmptyInputError):
        validate_text("")
    with pytest.raises(EmptyInputError):
        validate_text("\n   \n\r\n")


def test_header_only_file_has_no_rows() -> None:
    out = validate_text("name,email\n")
    assert out.results == []
    assert out.summary.total_rows == 0
    assert list(out.summary.column_types) == ["name", "email"]


def test_two_runs_produce_identical_summaries() -> None:
    text = "name,price\nA,1\nA,1\nB,x\n"
    assert validate_text(text).summary.to_dict() == validate_text(text).summary.to_dict()


def test_crlf_and_quoted_headers() -> None:
    out = validate_text('"name","is_active"\r\n"Ann","on"\r\n')
    assert out.results[0].data == {"name": "Ann", "is_active": True}


def test_validate_file_reads_utf8_with_bom(tmp_path: Path) -> None:
    p = tmp_path / "people.csv"
    p.write_text("\ufeffname,amount\nZoë,3\n", encoding="utf-8")
    svc = ValidateService(logging.getLogger("test.validate"))
    out = svc.validate_file(p)
    assert out.results[0].data == {"name": "Zoë", "amount": 3.0}
    assert out.rows == [{"name": "Zoë", "amount": 3.0}]


def test_validate_file_missing_file(tmp_path: Path) -> None:
    svc = ValidateService(logging.getLogger("test.validate"))
    with pytest.raises(FileReadError):
        svc.validate_file(tmp_path / "nope.csv")


def test_validate_file_undecodable(tmp_path: Path) -> None:
    p = tmp_path / "bin.csv"
    p.write_bytes(b"name\n\xff\xfe\xfa\n")
    svc = ValidateService(logging.getLogger("test.validate"))
    with pytest.raises(FileReadError):
        svc.validate_file(p)
